"""Values passed into and returned from hook callbacks."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional


class AbortHookException(Exception):
    """Raised by a hook to cancel the remaining hook chain.

    Args:
        message: Human-readable error message.
        status_code: HTTP status code to return (default: 400 Bad Request).
    """

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass
class HookContext:
    """Context passed to all hook callbacks.

    Attributes:
        app: The application instance, when triggered from the API.
        github_id: GitHub account id the event concerns, if any.
        request_id: Correlation ID for logging and tracing.
        actor: Who initiated the operation (API key name, CLI, ...).
    """

    app: Any = None
    github_id: Optional[str] = None
    request_id: str = ""
    actor: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.request_id:
            self.request_id = f"hk_{uuid.uuid4().hex[:12]}"


@dataclass
class HookResult:
    """Outcome of HookRegistry.trigger.

    ``success`` is False only when a hook aborted the chain or a
    stop_on_error hook failed; other failures are listed in ``errors``.
    ``data`` is the payload as left by the last hook that returned a dict.
    """

    success: bool = True
    aborted: bool = False
    abort_message: Optional[str] = None
    abort_status_code: int = 400
    errors: list[str] = field(default_factory=list)
    data: Optional[dict[str, Any]] = None
