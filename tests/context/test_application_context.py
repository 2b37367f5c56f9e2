"""Tests for ApplicationContext — wiring, weaving and registry freezing."""

from __future__ import annotations

import pytest

from flyaop.aop.decorators import after_returning, aspect
from flyaop.aop.exceptions import AspectRegistryFrozenException
from flyaop.container.exceptions import BeanCreationException, NoSuchBeanError
from flyaop.container.ordering import order
from flyaop.container.stereotypes import rest_controller, service
from flyaop.context.application_context import ApplicationContext
from flyaop.core.config import Config


@service
class GreetingService:
    def __init__(self, config: Config) -> None:
        self.greeting = config.get("app.greeting", "hello")

    def greet(self, name: str) -> str:
        return f"{self.greeting} {name}"


@rest_controller
class GreetingController:
    def __init__(self, greeting_service: GreetingService) -> None:
        self.greeting_service = greeting_service

    async def hello(self) -> str:
        return self.greeting_service.greet("world")


@aspect
class ReturnRecorder:
    def __init__(self) -> None:
        self.results: list[str] = []

    @after_returning(f"{__name__}.Greeting*.*")
    def on_return(self, jp, result):
        self.results.append(f"{jp.method_name}={result}")


class Missing:
    pass


@service
class NeedsMissing:
    def __init__(self, missing: Missing) -> None:
        self.missing = missing


@service
class OptionalMissing:
    def __init__(self, missing: Missing | None = None, retries: int = 3) -> None:
        self.missing = missing
        self.retries = retries


@service
class OptionalGreeting:
    def __init__(self, greeting_service: GreetingService | None = None) -> None:
        self.greeting_service = greeting_service


@service
class Exploding:
    def __init__(self) -> None:
        raise RuntimeError("no")


@order(-5)
@service
class EarlyService:
    pass


class TestStart:
    @pytest.mark.asyncio
    async def test_constructor_injection(self) -> None:
        ctx = ApplicationContext(Config({"app": {"greeting": "hey"}}))
        ctx.register_bean(GreetingController)
        ctx.register_bean(GreetingService)
        await ctx.start()

        controller = ctx.get_bean(GreetingController)
        assert controller.greeting_service is ctx.get_bean(GreetingService)
        assert await controller.hello() == "hey world"

    @pytest.mark.asyncio
    async def test_aspect_registered_last_still_weaves_earlier_beans(self) -> None:
        ctx = ApplicationContext(Config({}))
        ctx.register_bean(GreetingService)
        ctx.register_bean(GreetingController)
        ctx.register_bean(ReturnRecorder)
        await ctx.start()

        await ctx.get_bean(GreetingController).hello()
        assert ctx.get_bean(ReturnRecorder).results == ["greet=hello world", "hello=hello world"]

    @pytest.mark.asyncio
    async def test_registry_frozen_after_start(self) -> None:
        ctx = ApplicationContext(Config({}))
        ctx.register_bean(ReturnRecorder)
        await ctx.start()

        assert ctx.started
        with pytest.raises(AspectRegistryFrozenException):
            ctx.aspect_processor.registry.register_advice("before", "x.Y.*", print)

    @pytest.mark.asyncio
    async def test_register_after_start_rejected(self) -> None:
        ctx = ApplicationContext(Config({}))
        await ctx.start()
        with pytest.raises(BeanCreationException):
            ctx.register_bean(GreetingService)

    @pytest.mark.asyncio
    async def test_missing_dependency(self) -> None:
        ctx = ApplicationContext(Config({}))
        ctx.register_bean(NeedsMissing)
        with pytest.raises(NoSuchBeanError, match="Missing"):
            await ctx.start()

    @pytest.mark.asyncio
    async def test_defaulted_parameters_without_bean_keep_default(self) -> None:
        ctx = ApplicationContext(Config({}))
        ctx.register_bean(OptionalMissing)
        await ctx.start()

        bean = ctx.get_bean(OptionalMissing)
        assert bean.missing is None
        assert bean.retries == 3

    @pytest.mark.asyncio
    async def test_defaulted_parameter_injected_when_bean_exists(self) -> None:
        ctx = ApplicationContext(Config({}))
        ctx.register_bean(OptionalGreeting)
        ctx.register_bean(GreetingService)
        await ctx.start()

        assert ctx.get_bean(OptionalGreeting).greeting_service is ctx.get_bean(GreetingService)

    @pytest.mark.asyncio
    async def test_constructor_failure_wrapped(self) -> None:
        ctx = ApplicationContext(Config({}))
        ctx.register_bean(Exploding)
        with pytest.raises(BeanCreationException, match="exploding"):
            await ctx.start()


class TestLookup:
    @pytest.mark.asyncio
    async def test_beans_by_stereotype_sorted_by_order(self) -> None:
        ctx = ApplicationContext(Config({}))
        ctx.register_bean(GreetingService)
        ctx.register_bean(EarlyService)
        ctx.register_bean(GreetingController)
        await ctx.start()

        services = ctx.get_beans_by_stereotype("service")
        assert [type(s) for s in services] == [EarlyService, GreetingService]
        assert [type(c) for c in ctx.get_beans_by_stereotype("rest_controller")] == [GreetingController]

    @pytest.mark.asyncio
    async def test_default_bean_names(self) -> None:
        ctx = ApplicationContext(Config({}))
        ctx.register_bean(GreetingService)
        ctx.register_bean(EarlyService, name="early")
        assert ctx.contains_bean("greetingService")
        assert ctx.contains_bean("early")

    @pytest.mark.asyncio
    async def test_config_is_always_resolvable(self) -> None:
        config = Config({})
        ctx = ApplicationContext(config)
        await ctx.start()
        assert ctx.get_bean(Config) is config

    def test_unknown_bean(self) -> None:
        ctx = ApplicationContext(Config({}))
        with pytest.raises(NoSuchBeanError):
            ctx.get_bean(Missing)
