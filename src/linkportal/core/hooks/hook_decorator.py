"""Decorator front end for the hook registry.

Enables the ``@app.state.hook.on_account_after_unlink()`` syntax.
"""

from typing import Any, Callable, TypeVar

from linkportal.core.hooks.hook_events import HookEvent
from linkportal.core.hooks.hook_registry import HookRegistry

F = TypeVar("F", bound=Callable[..., Any])


class HookDecorator:
    """Registers decorated functions with a HookRegistry.

    Example:
        hook = HookDecorator(registry)

        @hook.on_account_after_unlink()
        async def notify_directory(event, data, context):
            await directory.remove_alias(data["aad"]["userPrincipalName"])
            return data
    """

    def __init__(self, registry: HookRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> HookRegistry:
        return self._registry

    def on_bootstrap(self, priority: int = 0, stop_on_error: bool = False) -> Callable[[F], F]:
        return self._decorate(HookEvent.ON_BOOTSTRAP, priority, stop_on_error)

    def on_serve(self, priority: int = 0, stop_on_error: bool = False) -> Callable[[F], F]:
        return self._decorate(HookEvent.ON_SERVE, priority, stop_on_error)

    def on_terminate(self, priority: int = 0, stop_on_error: bool = False) -> Callable[[F], F]:
        return self._decorate(HookEvent.ON_TERMINATE, priority, stop_on_error)

    def on_account_after_unlink(
        self,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Run after a corporate link has been deleted.

        The hook receives the unlink payload:
        ``{"github": {"id", "login"}, "aad": {"preferredName", "userPrincipalName", "id"}}``.
        """
        return self._decorate(HookEvent.ON_ACCOUNT_AFTER_UNLINK, priority, stop_on_error)

    def unregister(self, hook_id: str) -> bool:
        return self._registry.unregister(hook_id)

    def _decorate(self, event: str, priority: int, stop_on_error: bool) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            self._registry.register(
                event,
                func,
                priority=priority,
                stop_on_error=stop_on_error,
            )
            return func

        return decorator
