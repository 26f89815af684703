"""Unit tests for the hook system.

Tests cover:
- Hook registration and unregistration
- Priority ordering
- AbortHookException handling
- Error handling
- Built-in hooks
"""

import pytest

from linkportal.core.hooks import (
    EVENT_CATEGORIES,
    HookCategory,
    HookDecorator,
    HookEvent,
    HookRegistry,
    get_all_events,
)
from linkportal.domain.entities.hook_context import AbortHookException, HookContext
from linkportal.infrastructure.hooks import BUILTIN_HOOKS, register_builtin_hooks

UNLINK_PAYLOAD = {
    "github": {"id": "1001", "login": "jdoe"},
    "aad": {"preferredName": "Jane Doe", "userPrincipalName": "jdoe@contoso.com", "id": "aad-1"},
}


class TestHookRegistry:
    """Tests for the HookRegistry class."""

    def test_register_returns_unique_id(self) -> None:
        registry = HookRegistry()

        async def my_hook(event, data, context):
            return data

        hook_ids = {registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, my_hook) for _ in range(5)}

        assert len(hook_ids) == 5
        assert all(hook_id.startswith("hook_") for hook_id in hook_ids)

    @pytest.mark.asyncio
    async def test_priority_then_registration_order(self) -> None:
        registry = HookRegistry()
        order = []

        def recorder(label):
            async def hook(event, data, context):
                order.append(label)
                return data

            return hook

        registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, recorder("low"), priority=-1)
        registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, recorder("first"))
        registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, recorder("high"), priority=10)
        registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, recorder("second"))

        await registry.trigger(HookEvent.ON_ACCOUNT_AFTER_UNLINK, dict(UNLINK_PAYLOAD))

        assert order == ["high", "first", "second", "low"]

    @pytest.mark.asyncio
    async def test_errors_are_collected(self) -> None:
        registry = HookRegistry()
        after = []

        async def broken(event, data, context):
            raise RuntimeError("webhook down")

        async def next_hook(event, data, context):
            after.append(True)

        registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, broken, priority=1)
        registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, next_hook)

        result = await registry.trigger(HookEvent.ON_ACCOUNT_AFTER_UNLINK, {})

        assert result.success is True
        assert len(result.errors) == 1
        assert "webhook down" in result.errors[0]
        assert after == [True]

    @pytest.mark.asyncio
    async def test_stop_on_error(self) -> None:
        registry = HookRegistry()
        after = []

        async def broken(event, data, context):
            raise RuntimeError("boom")

        async def next_hook(event, data, context):
            after.append(True)

        registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, broken, priority=1, stop_on_error=True)
        registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, next_hook)

        result = await registry.trigger(HookEvent.ON_ACCOUNT_AFTER_UNLINK, {})

        assert result.success is False
        assert after == []

    @pytest.mark.asyncio
    async def test_abort(self) -> None:
        registry = HookRegistry()

        async def veto(event, data, context):
            raise AbortHookException("not allowed", status_code=403)

        registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, veto)

        result = await registry.trigger(HookEvent.ON_ACCOUNT_AFTER_UNLINK, {})

        assert result.aborted is True
        assert result.abort_message == "not allowed"
        assert result.abort_status_code == 403

    @pytest.mark.asyncio
    async def test_hook_can_replace_data(self) -> None:
        registry = HookRegistry()

        async def enrich(event, data, context):
            return {**data, "notified": True}

        registry.register(HookEvent.ON_ACCOUNT_AFTER_UNLINK, enrich)

        result = await registry.trigger(HookEvent.ON_ACCOUNT_AFTER_UNLINK, {"github": {}})

        assert result.data == {"github": {}, "notified": True}

    @pytest.mark.asyncio
    async def test_sync_callback_is_supported(self) -> None:
        registry = HookRegistry()
        calls = []
        registry.register(HookEvent.ON_SERVE, lambda event, data, context: calls.append(event))

        await registry.trigger(HookEvent.ON_SERVE)

        assert calls == [HookEvent.ON_SERVE]

    def test_unregister_and_clear(self) -> None:
        registry = HookRegistry()

        async def hook(event, data, context):
            return data

        hook_id = registry.register(HookEvent.ON_SERVE, hook)
        builtin_id = registry.register(HookEvent.ON_SERVE, hook, is_builtin=True)

        assert registry.unregister(hook_id) is True
        assert registry.unregister(hook_id) is False
        assert registry.unregister(builtin_id) is False
        assert registry.clear() == 0
        assert registry.clear(include_builtin=True) == 1
        assert registry.get_hooks_for_event(HookEvent.ON_SERVE) == []


class TestHookDecorator:
    @pytest.mark.asyncio
    async def test_on_account_after_unlink(self) -> None:
        registry = HookRegistry()
        hook = HookDecorator(registry)
        received = []

        @hook.on_account_after_unlink(priority=5)
        async def notify(event, data, context):
            received.append((data["github"]["login"], context.github_id))
            return data

        await registry.trigger(
            HookEvent.ON_ACCOUNT_AFTER_UNLINK,
            dict(UNLINK_PAYLOAD),
            HookContext(github_id="1001"),
        )

        assert received == [("jdoe", "1001")]
        assert registry.get_hooks_for_event(HookEvent.ON_ACCOUNT_AFTER_UNLINK)[0].priority == 5

    def test_lifecycle_decorators(self) -> None:
        registry = HookRegistry()
        hook = HookDecorator(registry)

        @hook.on_bootstrap()
        async def a(event, data, context):
            pass

        @hook.on_serve()
        async def b(event, data, context):
            pass

        @hook.on_terminate()
        async def c(event, data, context):
            pass

        for event in (HookEvent.ON_BOOTSTRAP, HookEvent.ON_SERVE, HookEvent.ON_TERMINATE):
            assert len(registry.get_hooks_for_event(event)) == 1


class TestEvents:
    def test_every_event_has_a_category(self) -> None:
        events = get_all_events()

        assert HookEvent.ON_ACCOUNT_AFTER_UNLINK in events
        assert set(events) == set(EVENT_CATEGORIES)
        assert EVENT_CATEGORIES[HookEvent.ON_ACCOUNT_AFTER_UNLINK] == HookCategory.ACCOUNT_OPERATIONS

    def test_hook_context_generates_request_id(self) -> None:
        assert HookContext().request_id.startswith("hk_")


class TestBuiltinHooks:
    @pytest.mark.asyncio
    async def test_unlink_audit_hook_is_builtin(self) -> None:
        registry = HookRegistry()

        hook_ids = register_builtin_hooks(registry)

        assert len(hook_ids) == sum(len(hooks) for hooks in BUILTIN_HOOKS.values())
        hooks = registry.get_hooks_for_event(HookEvent.ON_ACCOUNT_AFTER_UNLINK)
        assert hooks[0].is_builtin
        result = await registry.trigger(
            HookEvent.ON_ACCOUNT_AFTER_UNLINK, dict(UNLINK_PAYLOAD), HookContext(actor="cli")
        )
        assert result.errors == []
        assert result.data == UNLINK_PAYLOAD
