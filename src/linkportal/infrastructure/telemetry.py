"""Telemetry sink for workflow events and exceptions.

Events and exceptions are emitted as structured log entries under the
``linkportal.telemetry`` logger so they can be shipped with the rest of the
JSON logs.
"""

from typing import Any, Protocol

from linkportal.core.logging import get_logger


class TelemetrySink(Protocol):
    """What the account workflows need from a telemetry backend."""

    def track_event(self, name: str, properties: dict[str, Any] | None = None) -> None: ...

    def track_exception(
        self, exception: BaseException, properties: dict[str, Any] | None = None
    ) -> None: ...


class StructlogInsights:
    """TelemetrySink writing to structlog. Never raises."""

    def __init__(self, logger_name: str = "linkportal.telemetry") -> None:
        self._logger = get_logger(logger_name)

    def track_event(self, name: str, properties: dict[str, Any] | None = None) -> None:
        try:
            self._logger.info("telemetry.event", telemetry_event=name, **(properties or {}))
        except Exception:  # noqa: BLE001
            pass

    def track_exception(
        self, exception: BaseException, properties: dict[str, Any] | None = None
    ) -> None:
        try:
            self._logger.warning(
                "telemetry.exception",
                exc_type=type(exception).__name__,
                error=str(exception),
                **(properties or {}),
            )
        except Exception:  # noqa: BLE001
            pass
