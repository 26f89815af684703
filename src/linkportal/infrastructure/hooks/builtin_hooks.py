"""Built-in hooks for LinkPortal.

These hooks are registered as built-in hooks and cannot be unregistered.
They run after user hooks (negative priority).
"""

from typing import Any, Optional

from linkportal.core.hooks.hook_events import HookEvent
from linkportal.core.hooks.hook_registry import HookRegistry
from linkportal.core.logging import get_logger
from linkportal.domain.entities.hook_context import HookContext

logger = get_logger("linkportal.audit")


async def unlink_audit_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Write an audit log entry for every deleted link.

    Args:
        event: The hook event name.
        data: Unlink payload with "github" and "aad" sections.
        context: The hook context.

    Returns:
        The payload, unchanged.
    """
    if data is None:
        return data

    github = data.get("github") or {}
    corporate = data.get("aad") or {}
    logger.info(
        "Link removed",
        github_id=github.get("id"),
        login=github.get("login"),
        corporate_id=corporate.get("id"),
        corporate_username=corporate.get("userPrincipalName"),
        actor=context.actor if context else None,
        request_id=context.request_id if context else None,
    )
    return data


# event -> (callback, priority)
BUILTIN_HOOKS: dict[str, list[tuple[Any, int]]] = {
    HookEvent.ON_ACCOUNT_AFTER_UNLINK: [(unlink_audit_hook, -100)],
}


def register_builtin_hooks(registry: HookRegistry) -> list[str]:
    """Register all built-in hooks.

    Args:
        registry: The hook registry to register with.

    Returns:
        List of registered hook IDs.
    """
    hook_ids = []
    for event, hooks in BUILTIN_HOOKS.items():
        for callback, priority in hooks:
            hook_ids.append(
                registry.register(
                    event=event,
                    callback=callback,
                    priority=priority,
                    is_builtin=True,
                )
            )
    logger.debug("Built-in hooks registered", count=len(hook_ids))
    return hook_ids
