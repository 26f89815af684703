"""Hook event definitions and categories.

This module defines all hook events that LinkPortal supports.

IMPORTANT: Adding new events is allowed (non-breaking), but
           removing or renaming events is a breaking change.
"""


class HookCategory:
    """Categories for organizing hooks."""

    APP_LIFECYCLE = "app_lifecycle"
    ACCOUNT_OPERATIONS = "account_operations"


class HookEvent:
    """Hook event names.

    Attributes in format: ON_<CATEGORY>_<TIMING>_<OPERATION>
    """

    # App Lifecycle Events
    ON_BOOTSTRAP = "on_bootstrap"  # App starting, before serving
    ON_SERVE = "on_serve"  # App ready to serve requests
    ON_TERMINATE = "on_terminate"  # App shutting down

    # Account Operations
    ON_ACCOUNT_AFTER_UNLINK = "on_account_after_unlink"


EVENT_CATEGORIES: dict[str, str] = {
    HookEvent.ON_BOOTSTRAP: HookCategory.APP_LIFECYCLE,
    HookEvent.ON_SERVE: HookCategory.APP_LIFECYCLE,
    HookEvent.ON_TERMINATE: HookCategory.APP_LIFECYCLE,
    HookEvent.ON_ACCOUNT_AFTER_UNLINK: HookCategory.ACCOUNT_OPERATIONS,
}


def get_all_events() -> list[str]:
    """Get all available hook event names."""
    return [
        value
        for name, value in vars(HookEvent).items()
        if not name.startswith("_") and isinstance(value, str)
    ]
