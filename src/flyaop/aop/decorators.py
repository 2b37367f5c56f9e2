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
"""AOP decorators — ``@aspect`` and the five advice annotations.

Advice decorators only attach metadata; nothing is wrapped until the
context starts and the weaver reads the metadata back through the
:class:`~flyaop.aop.registry.AspectRegistry`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from flyaop.aop.types import AFTER, AFTER_RETURNING, AFTER_THROWING, AROUND, BEFORE
from flyaop.container.stereotypes import mark_stereotype

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])

ADVICE_TYPE_ATTR = "__flyaop_advice_type__"
POINTCUT_ATTR = "__flyaop_pointcut__"


def aspect(cls: T) -> T:
    """Mark a class as an aspect bean.

    Aspects are collected by the context before any other bean is woven and
    are never woven themselves.
    """
    cls.__flyaop_aspect__ = True  # type: ignore[attr-defined]
    return mark_stereotype(cls, "aspect")


def is_aspect(obj: Any) -> bool:
    return getattr(type(obj), "__flyaop_aspect__", False) is True


def _advice(advice_type: str) -> Callable[[str], Callable[[F], F]]:
    def with_pointcut(pointcut: str) -> Callable[[F], F]:
        def mark(fn: F) -> F:
            setattr(fn, ADVICE_TYPE_ATTR, advice_type)
            setattr(fn, POINTCUT_ATTR, pointcut)
            return fn

        return mark

    with_pointcut.__name__ = with_pointcut.__qualname__ = advice_type
    return with_pointcut


before = _advice(BEFORE)
"""Runs with the join point before the method; raising aborts the call."""

after_returning = _advice(AFTER_RETURNING)
"""Runs as ``handler(jp, result)`` after a normal return."""

after_throwing = _advice(AFTER_THROWING)
"""Runs as ``handler(jp, exc)``; the exception is re-raised afterwards."""

after = _advice(AFTER)
"""Runs as ``handler(jp, outcome)`` once per call, however it ended."""

around = _advice(AROUND)
"""Receives a join point with ``proceed`` and owns the call."""
