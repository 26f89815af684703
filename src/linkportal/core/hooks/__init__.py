"""Hook system core module.

Enables extensibility through event-based hooks that can be registered
via decorators or programmatically.

Example usage:
    from linkportal.core.hooks import HookRegistry, HookDecorator, HookEvent

    registry = HookRegistry()
    hook = HookDecorator(registry)

    @hook.on_account_after_unlink()
    async def announce_unlink(event, data, context):
        await send_notification(data)
        return data
"""

from linkportal.core.hooks.hook_decorator import HookDecorator
from linkportal.core.hooks.hook_events import (
    EVENT_CATEGORIES,
    HookCategory,
    HookEvent,
    get_all_events,
)
from linkportal.core.hooks.hook_registry import HookRegistry, RegisteredHook

__all__ = [
    "HookRegistry",
    "RegisteredHook",
    "HookDecorator",
    "HookCategory",
    "HookEvent",
    "EVENT_CATEGORIES",
    "get_all_events",
]
