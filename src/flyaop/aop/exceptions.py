"""AOP exceptions — invalid pointcuts and late advice registration."""

from __future__ import annotations

from flyaop.kernel.exceptions import FlyAopException


class AopException(FlyAopException):
    """Base class for advice registration and pointcut errors."""


class PointcutSyntaxException(AopException):
    """A pointcut expression could not be parsed."""

    def __init__(self, message: str, pattern: str = "") -> None:
        super().__init__(message, code="AOP_POINTCUT_SYNTAX", context={"pattern": pattern})
        self.pattern = pattern


class AspectRegistryFrozenException(AopException):
    """Advice was registered after the application context started."""

    def __init__(self, what: str) -> None:
        super().__init__(
            f"Cannot register {what}: the aspect registry is frozen after startup",
            code="AOP_REGISTRY_FROZEN",
        )


class IncompatibleAdviceException(AopException):
    """Around advice cannot drive the method it was matched to.

    A coroutine method needs ``async def`` around advice: a plain function
    would get back an un-awaited ``proceed()`` coroutine and return before
    the method runs.
    """

    def __init__(self, qualified_name: str, handler: object) -> None:
        handler_name = getattr(handler, "__qualname__", repr(handler))
        super().__init__(
            f"Around advice {handler_name} must be 'async def' to wrap coroutine method {qualified_name}",
            code="AOP_INCOMPATIBLE_ADVICE",
            context={"method": qualified_name, "advice": handler_name},
        )
        self.qualified_name = qualified_name
