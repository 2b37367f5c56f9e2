# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""AOP weaver — wraps bean methods with matching advice chains.

Dispatch order for one intercepted call:

1. ``@before`` advice, in firing order.
2. ``@around`` advice, first binding outermost. Each receives a
   :class:`JoinPoint` whose ``proceed()`` continues into the next around
   advice, and finally into the original method.
3. Inside the innermost continuation: the original method runs, then
   ``@after_returning`` (``handler(jp, result)``) or ``@after_throwing``
   (``handler(jp, exc)``, exception re-raised).
4. ``@after`` (``handler(jp, outcome)``) exactly once, after everything
   above has finished. ``outcome`` is ``None`` when the original method
   never ran.

Advice errors are never swallowed: they propagate to the caller.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
from typing import Any

import structlog

from flyaop.aop.exceptions import IncompatibleAdviceException
from flyaop.aop.registry import AdviceBinding, AspectRegistry
from flyaop.aop.types import (
    AFTER,
    AFTER_RETURNING,
    AFTER_THROWING,
    AROUND,
    BEFORE,
    Failure,
    JoinPoint,
    Outcome,
    Success,
)

logger = structlog.get_logger("flyaop.aop")


@dataclasses.dataclass(frozen=True)
class _AdviceChain:
    """Bindings matching one method, grouped by advice type."""

    before: list[AdviceBinding]
    after_returning: list[AdviceBinding]
    after_throwing: list[AdviceBinding]
    after: list[AdviceBinding]
    around: list[AdviceBinding]

    @classmethod
    def of(cls, bindings: list[AdviceBinding]) -> _AdviceChain:
        def pick(kind: str) -> list[AdviceBinding]:
            return [b for b in bindings if b.advice_type == kind]

        return cls(
            before=pick(BEFORE),
            after_returning=pick(AFTER_RETURNING),
            after_throwing=pick(AFTER_THROWING),
            after=pick(AFTER),
            around=pick(AROUND),
        )


def qualified_prefix_of(bean: Any) -> str:
    """``"<module>.<Class>"`` for the type of *bean*."""
    cls = type(bean)
    return f"{cls.__module__}.{cls.__qualname__}"


def weave_bean(bean: Any, qualified_prefix: str, registry: AspectRegistry) -> int:
    """Install advice wrappers on *bean* and return how many methods got one.

    Every public callable attribute is looked up in *registry* as
    ``"{qualified_prefix}.{name}"``. Methods with matching bindings are
    shadowed by an instance attribute running the advice chain; the class
    itself is left untouched, so other instances stay unadvised.
    """
    woven = 0
    for attr_name in dir(bean):
        if attr_name.startswith("_"):
            continue

        attr = getattr(bean, attr_name, None)
        if attr is None or not callable(attr) or inspect.isclass(attr):
            continue

        qualified_name = f"{qualified_prefix}.{attr_name}"
        bindings = registry.get_matching(qualified_name)
        if not bindings:
            continue

        chain = _AdviceChain.of(bindings)
        if inspect.iscoroutinefunction(attr):
            _require_async_around(qualified_name, chain)
            wrapper = _build_async_wrapper(bean, attr_name, qualified_name, attr, chain)
        else:
            wrapper = _build_sync_wrapper(bean, attr_name, qualified_name, attr, chain)

        # Replace the method on the instance
        setattr(bean, attr_name, wrapper)
        woven += 1
        logger.debug("method_woven", method=qualified_name, advice=len(bindings))

    return woven


def _require_async_around(qualified_name: str, chain: _AdviceChain) -> None:
    for binding in chain.around:
        if not inspect.iscoroutinefunction(binding.handler):
            raise IncompatibleAdviceException(qualified_name, binding.handler)


def _build_sync_wrapper(
    bean: Any,
    method_name: str,
    qualified_name: str,
    original: Any,
    chain: _AdviceChain,
) -> Any:
    """Build a sync wrapper that applies the advice chain."""

    @functools.wraps(original)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        jp = JoinPoint(
            target=bean,
            method_name=method_name,
            args=args,
            kwargs=kwargs,
            qualified_name=qualified_name,
        )
        outcome: Outcome | None = None

        def invoke_original() -> Any:
            nonlocal outcome
            try:
                result = original(*args, **kwargs)
            except Exception as exc:
                outcome = Failure(exc)
                for binding in chain.after_throwing:
                    binding.handler(jp, exc)
                raise
            outcome = Success(result)
            for binding in chain.after_returning:
                binding.handler(jp, result)
            return result

        try:
            for binding in chain.before:
                binding.handler(jp)

            proceed = invoke_original
            for binding in reversed(chain.around):
                proceed = _sync_around_link(binding, jp, proceed)
            return proceed()
        finally:
            for binding in chain.after:
                binding.handler(jp, outcome)

    return wrapper


def _sync_around_link(binding: AdviceBinding, jp: JoinPoint, next_proceed: Any) -> Any:
    """One link in a sync around chain: calls the advice with ``proceed`` bound."""

    def chained() -> Any:
        return binding.handler(dataclasses.replace(jp, proceed=next_proceed))

    return chained


def _build_async_wrapper(
    bean: Any,
    method_name: str,
    qualified_name: str,
    original: Any,
    chain: _AdviceChain,
) -> Any:
    """Build an async wrapper that applies the advice chain.

    Advice handlers may be plain functions or coroutines; awaitable results
    are awaited in place.
    """

    @functools.wraps(original)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        jp = JoinPoint(
            target=bean,
            method_name=method_name,
            args=args,
            kwargs=kwargs,
            qualified_name=qualified_name,
        )
        outcome: Outcome | None = None

        async def invoke_original() -> Any:
            nonlocal outcome
            try:
                result = await original(*args, **kwargs)
            except Exception as exc:
                outcome = Failure(exc)
                for binding in chain.after_throwing:
                    await _maybe_await(binding.handler(jp, exc))
                raise
            outcome = Success(result)
            for binding in chain.after_returning:
                await _maybe_await(binding.handler(jp, result))
            return result

        try:
            for binding in chain.before:
                await _maybe_await(binding.handler(jp))

            proceed = invoke_original
            for binding in reversed(chain.around):
                proceed = _async_around_link(binding, jp, proceed)
            return await proceed()
        finally:
            for binding in chain.after:
                await _maybe_await(binding.handler(jp, outcome))

    return wrapper


def _async_around_link(binding: AdviceBinding, jp: JoinPoint, next_proceed: Any) -> Any:
    """Build one link in the async around advice chain.

    Returns an async callable that hands *binding* a join point whose
    ``proceed`` is *next_proceed*. Weaving guarantees the advice is a
    coroutine function.
    """

    async def chained() -> Any:
        return await _maybe_await(binding.handler(dataclasses.replace(jp, proceed=next_proceed)))

    return chained


async def _maybe_await(result: Any) -> Any:
    """Await the result if it's awaitable, otherwise return as-is."""
    if inspect.isawaitable(result):
        return await result
    return result
