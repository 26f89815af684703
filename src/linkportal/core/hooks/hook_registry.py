"""Hook registry.

Holds the callbacks registered per event and runs them when an event is
triggered: highest priority first, registration order within a priority.
A failing hook is logged and recorded on the result; the remaining hooks
still run unless the failing hook asked to stop the chain.
"""

import inspect
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

from linkportal.core.logging import get_logger
from linkportal.domain.entities.hook_context import (
    AbortHookException,
    HookContext,
    HookResult,
)

logger = get_logger(__name__)


@dataclass
class RegisteredHook:
    """A callback registered for one event.

    Attributes:
        id: Registration id, used to unregister.
        event: Event name.
        callback: Callable taking (event, data, context).
        priority: Higher runs earlier.
        stop_on_error: Abort the remaining hooks when this one fails.
        is_builtin: Built-in hooks cannot be unregistered.
        sequence: Registration counter, breaks priority ties.
    """

    id: str
    event: str
    callback: Callable
    priority: int = 0
    stop_on_error: bool = False
    is_builtin: bool = False
    sequence: int = 0


class HookRegistry:
    """Per-process registry of event hooks.

    Example:
        registry = HookRegistry()
        hook_id = registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, notify_directory)
        result = await registry.trigger(HookEvent.ON_ACCOUNT_AFTER_UNLINK, payload, context)
    """

    def __init__(self) -> None:
        self._hooks: dict[str, RegisteredHook] = {}
        self._sequence = 0

    def register(
        self,
        event: str,
        callback: Callable,
        priority: int = 0,
        stop_on_error: bool = False,
        is_builtin: bool = False,
    ) -> str:
        """Register ``callback`` for ``event``.

        Returns:
            The registration id.
        """
        self._sequence += 1
        hook = RegisteredHook(
            id=f"hook_{uuid.uuid4().hex[:12]}",
            event=event,
            callback=callback,
            priority=priority,
            stop_on_error=stop_on_error,
            is_builtin=is_builtin,
            sequence=self._sequence,
        )
        self._hooks[hook.id] = hook
        logger.debug(
            "Hook registered",
            hook_id=hook.id,
            hook_event=event,
            priority=priority,
            is_builtin=is_builtin,
        )
        return hook.id

    def unregister(self, hook_id: str) -> bool:
        """Remove a hook. Built-in hooks are kept.

        Returns:
            True if the hook was removed.
        """
        hook = self._hooks.get(hook_id)
        if hook is None:
            logger.warning("Hook not found for unregister", hook_id=hook_id)
            return False
        if hook.is_builtin:
            logger.warning("Cannot unregister built-in hook", hook_id=hook_id)
            return False
        del self._hooks[hook_id]
        return True

    def get_hooks_for_event(self, event: str) -> list[RegisteredHook]:
        """Hooks for ``event`` in execution order."""
        return sorted(
            (hook for hook in self._hooks.values() if hook.event == event),
            key=lambda hook: (-hook.priority, hook.sequence),
        )

    async def trigger(
        self,
        event: str,
        data: Optional[dict[str, Any]] = None,
        context: Optional[HookContext] = None,
    ) -> HookResult:
        """Run every hook registered for ``event``.

        A hook returning a dict replaces the data passed to the next hook.
        Raising AbortHookException ends the chain and marks the result aborted.
        """
        result = HookResult(data=data)
        hooks = self.get_hooks_for_event(event)
        if hooks:
            logger.debug("Triggering hooks", hook_event=event, hook_count=len(hooks))

        for hook in hooks:
            try:
                returned = hook.callback(event, result.data, context)
                if inspect.isawaitable(returned):
                    returned = await returned
            except AbortHookException as e:
                logger.info(
                    "Hook aborted operation",
                    hook_id=hook.id,
                    hook_event=event,
                    message=e.message,
                )
                result.success = False
                result.aborted = True
                result.abort_message = e.message
                result.abort_status_code = e.status_code
                return result
            except Exception as e:
                logger.error(
                    "Hook execution failed",
                    hook_id=hook.id,
                    hook_event=event,
                    error=str(e),
                )
                result.errors.append(f"Hook {hook.id} failed: {e}")
                if hook.stop_on_error:
                    result.success = False
                    return result
                continue

            if isinstance(returned, dict):
                result.data = returned

        return result

    def clear(self, include_builtin: bool = False) -> int:
        """Remove registered hooks.

        Returns:
            Number of hooks removed.
        """
        doomed = [
            hook_id
            for hook_id, hook in self._hooks.items()
            if include_builtin or not hook.is_builtin
        ]
        for hook_id in doomed:
            del self._hooks[hook_id]
        return len(doomed)
