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
"""AspectRegistry: the advice known to the application, in firing order."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

import structlog

from flyaop.aop.decorators import ADVICE_TYPE_ATTR, POINTCUT_ATTR
from flyaop.aop.exceptions import AspectRegistryFrozenException
from flyaop.aop.pointcut import matches_pointcut, normalize_pointcut
from flyaop.aop.types import ADVICE_TYPES
from flyaop.container.ordering import get_order

logger = structlog.get_logger("flyaop.aop")


@dataclass(frozen=True)
class AdviceBinding:
    """One advice callable and the pointcut selecting where it runs.

    Attributes:
        advice_type: A member of :data:`~flyaop.aop.types.ADVICE_TYPES`.
        pointcut: Pattern passed to :func:`matches_pointcut`.
        handler: Usually a bound method of an aspect bean.
        aspect_order: ``@order`` of the declaring aspect, 0 by default.
        sequence: Position in registration order across the whole registry.
    """

    advice_type: str
    pointcut: str
    handler: Any
    aspect_order: int
    sequence: int


class AspectRegistry:
    """Holds every advice binding and answers "what runs for this method?".

    Usage::

        registry = AspectRegistry()
        registry.register(UserServiceAspect())
        registry.register_advice("before", "app.OrderService.*", audit)
        registry.freeze()

        # Get all bindings that match a qualified name
        bindings = registry.get_matching("app.OrderService.create")

    Bindings are returned sorted by ``(aspect_order, sequence)``: a lower
    ``@order`` wins, and registration order decides between equal orders.
    """

    def __init__(self) -> None:
        self._bindings: list[AdviceBinding] = []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[AdviceBinding]:
        return iter(self.get_all_bindings())

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the registry read-only. Called once the context has started."""
        if not self._frozen:
            self._frozen = True
            logger.debug("aspect_registry_frozen", bindings=len(self._bindings))

    def register(self, aspect_instance: Any) -> None:
        """Bind every advice-decorated method of *aspect_instance*.

        Methods are visited in class definition order, base classes first,
        which fixes their firing order among advice of equal ``@order``.
        """
        if self._frozen:
            raise AspectRegistryFrozenException(f"aspect {type(aspect_instance).__name__}")

        aspect_cls = type(aspect_instance)
        order = get_order(aspect_cls)

        for name in _definition_order(aspect_cls):
            unbound = getattr(aspect_cls, name, None)
            advice_type = getattr(unbound, ADVICE_TYPE_ATTR, None)
            pointcut = getattr(unbound, POINTCUT_ATTR, None)
            if advice_type is None or pointcut is None:
                continue
            self._add(advice_type, pointcut, getattr(aspect_instance, name), order)

        logger.debug("aspect_registered", aspect=aspect_cls.__name__, order=order)

    def register_advice(
        self,
        advice_type: str,
        pointcut: str,
        handler: Callable[..., Any],
        order: int = 0,
    ) -> AdviceBinding:
        """Bind a plain callable as advice without declaring an aspect class."""
        if self._frozen:
            raise AspectRegistryFrozenException(f"{advice_type} advice for {pointcut!r}")
        return self._add(advice_type, pointcut, handler, order)

    def get_all_bindings(self) -> list[AdviceBinding]:
        """Return all registered bindings in firing order."""
        return sorted(self._bindings, key=_firing_key)

    def get_matching(self, qualified_name: str) -> list[AdviceBinding]:
        """Return bindings whose pointcut matches *qualified_name*, in firing order."""
        return [b for b in self.get_all_bindings() if matches_pointcut(b.pointcut, qualified_name)]

    def _add(self, advice_type: str, pointcut: str, handler: Any, order: int) -> AdviceBinding:
        if advice_type not in ADVICE_TYPES:
            raise ValueError(f"Unknown advice type {advice_type!r}; expected one of {sorted(ADVICE_TYPES)}")
        # Fail at registration time rather than on first weave.
        normalize_pointcut(pointcut)

        binding = AdviceBinding(
            advice_type=advice_type,
            pointcut=pointcut,
            handler=handler,
            aspect_order=order,
            sequence=len(self._bindings),
        )
        self._bindings.append(binding)
        return binding


def _firing_key(binding: AdviceBinding) -> tuple[int, int]:
    return binding.aspect_order, binding.sequence


def _definition_order(cls: type) -> list[str]:
    """Attribute names of *cls* in definition order, base classes first."""
    seen: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        for name in vars(klass):
            seen.setdefault(name, None)
    return list(seen)
