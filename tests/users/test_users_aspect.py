"""Tests for UserServiceAspect — lifecycle logging around UsersController calls."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from flyaop.core.config import Config
from flyaop.kernel.exceptions import SimulatedError
from flyaop.users.application import start_context
from flyaop.users.aspect import UserServiceAspect
from flyaop.users.controller import FAULT_MESSAGE, SUCCESS, UsersController

_ADVICE_EVENTS = {
    "before_advice",
    "after_advice",
    "after_returning_advice",
    "after_throwing_advice",
    "exception_message",
    "around_advice_before",
    "around_advice_after",
    "around_advice_suppressed",
}


async def _controller(aspect_enabled: bool = True) -> UsersController:
    config = Config({"flyaop": {"users": {"aspect-enabled": aspect_enabled}}})
    ctx = await start_context(config)
    return ctx.get_bean(UsersController)


class TestSuccessPath:
    @pytest.mark.asyncio
    async def test_event_sequence(self):
        controller = await _controller()
        with capture_logs() as logs:
            result = await controller.list_users()

        assert result == SUCCESS
        assert [entry["event"] for entry in logs] == [
            "before_advice",
            "around_advice_before",
            "get_all_users",
            "after_returning_advice",
            "around_advice_after",
            "after_advice",
        ]

    @pytest.mark.asyncio
    async def test_entries_name_the_join_point(self):
        controller = await _controller()
        with capture_logs() as logs:
            await controller.list_users()

        before = logs[0]
        assert before["method"] == "list_users"
        assert before["target"] == "flyaop.users.controller.UsersController"
        returning = next(e for e in logs if e["event"] == "after_returning_advice")
        assert returning["result"] == SUCCESS
        after = logs[-1]
        assert after["executed"] is True


class TestFaultingPath:
    @pytest.mark.asyncio
    async def test_error_is_suppressed(self):
        controller = await _controller()
        with capture_logs():
            assert await controller.list_users_faulting() is None

    @pytest.mark.asyncio
    async def test_event_sequence(self):
        controller = await _controller()
        with capture_logs() as logs:
            await controller.list_users_faulting()

        assert [entry["event"] for entry in logs] == [
            "before_advice",
            "around_advice_before",
            "get_all_users",
            "after_throwing_advice",
            "exception_message",
            "around_advice_suppressed",
            "around_advice_after",
            "after_advice",
        ]

    @pytest.mark.asyncio
    async def test_exception_message_logged(self):
        controller = await _controller()
        with capture_logs() as logs:
            await controller.list_users_faulting()

        message = next(e for e in logs if e["event"] == "exception_message")
        assert message["message"] == FAULT_MESSAGE
        assert not any(e["event"] == "after_returning_advice" for e in logs)


class TestAspectDisabled:
    @pytest.mark.asyncio
    async def test_no_advice_runs(self):
        controller = await _controller(aspect_enabled=False)
        with capture_logs() as logs:
            assert await controller.list_users() == SUCCESS
            with pytest.raises(SimulatedError, match="getAllUsers"):
                await controller.list_users_faulting()

        assert not {entry["event"] for entry in logs} & _ADVICE_EVENTS
        assert [entry["event"] for entry in logs] == ["get_all_users", "get_all_users"]


class TestAspectRegistration:
    @pytest.mark.asyncio
    async def test_binds_one_of_each_advice_type(self):
        config = Config({})
        ctx = await start_context(config)
        registry = ctx.aspect_processor.registry

        assert ctx.contains_bean("userServiceAspect")
        assert isinstance(ctx.get_bean(UserServiceAspect), UserServiceAspect)
        assert sorted(b.advice_type for b in registry) == [
            "after",
            "after_returning",
            "after_throwing",
            "around",
            "before",
        ]
        assert registry.frozen
