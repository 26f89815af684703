"""Error kinds shared across LinkPortal.

Every error raised by the account workflows derives from LinkPortalError and
carries the HTTP status code the API layer should answer with.
"""

from typing import Any


class LinkPortalError(Exception):
    """Base class for all LinkPortal errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class NotFoundError(LinkPortalError):
    """Raised when a requested entity does not exist."""

    status_code = 404


class NoLinkError(NotFoundError):
    """Raised when an account has no corporate link to act upon."""


class LinkNotFoundError(NotFoundError):
    """Raised by a link provider when the link record is already gone."""


class AccountPreconditionError(LinkPortalError):
    """Raised when an account is missing its id or login."""

    status_code = 400


class UpstreamError(LinkPortalError):
    """Raised when GitHub or the link provider fails.

    The status code of the underlying error is kept when it has one, so a
    404 from GitHub stays recognisable after wrapping.
    """

    status_code = 502


class LinkRemovalError(LinkPortalError):
    """Terminal failure while deleting a link.

    Attributes:
        history: Audit messages accumulated before the failure.
        error: The link provider error.
    """

    def __init__(self, message: str, error: BaseException, history: list[str]) -> None:
        super().__init__(message, status_code=status_code_of(error) or 500)
        self.error = error
        self.history = history


class MembershipRemovalError(LinkPortalError):
    """Organization membership removal failed and the workflow halted.

    Attributes:
        history: Audit messages accumulated before halting.
        error: The first removal (or lookup) error.
    """

    def __init__(self, error: BaseException, history: list[str]) -> None:
        super().__init__(str(error), status_code=status_code_of(error) or 500)
        self.error = error
        self.history = history


def status_code_of(error: Any) -> int | None:
    """Return the HTTP-like status code attached to an error, if any.

    Codes may be stored as ints or strings ("404"); both are accepted.
    """
    for attr in ("status_code", "status", "code"):
        value = getattr(error, attr, None)
        if value is None:
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            continue
    return None


def wrap_error(error: BaseException, message: str) -> UpstreamError:
    """Wrap an upstream error with a friendlier message.

    Args:
        error: The original exception.
        message: Message describing what was being attempted.

    Returns:
        UpstreamError chained to the original error.
    """
    wrapped = UpstreamError(message, status_code=status_code_of(error))
    wrapped.__cause__ = error
    wrapped.inner_error = error
    return wrapped
