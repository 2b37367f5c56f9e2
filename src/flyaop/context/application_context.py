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
"""ApplicationContext — the central bean registry and lifecycle manager."""

from __future__ import annotations

import inspect
import types
import typing
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from flyaop.aop.post_processor import AspectBeanPostProcessor
from flyaop.container.exceptions import BeanCreationException, NoSuchBeanError
from flyaop.container.ordering import get_order
from flyaop.container.stereotypes import BEAN_NAME_ATTR, stereotype_of
from flyaop.context.post_processor import BeanPostProcessor
from flyaop.core.config import Config

T = TypeVar("T")

logger = structlog.get_logger("flyaop.context")


@dataclass
class BeanRegistration:
    """A registered bean class and, once started, its instance."""

    impl_type: type
    name: str
    instance: Any = None


class ApplicationContext:
    """Central bean registry and lifecycle manager.

    The flyaop equivalent of Spring's ApplicationContext, reduced to what
    aspect weaving needs:
    - Constructor injection by type hint (``Config`` is always available)
    - BeanPostProcessor hooks, with an ``AspectBeanPostProcessor`` built in
    - Freezing of advice registrations once startup completes
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._registrations: dict[type, BeanRegistration] = {}
        self._aspect_processor = AspectBeanPostProcessor()
        self._post_processors: list[BeanPostProcessor] = [self._aspect_processor]
        self._started = False

    # ------------------------------------------------------------------
    # Bean registration
    # ------------------------------------------------------------------

    def register_bean(self, cls: type, *, name: str = "") -> None:
        """Register a bean class with the context."""
        if self._started:
            raise BeanCreationException(cls.__name__, "context already started")
        bean_name = name or getattr(cls, BEAN_NAME_ATTR, "") or _default_bean_name(cls)
        self._registrations[cls] = BeanRegistration(impl_type=cls, name=bean_name)

    def register_post_processor(self, processor: BeanPostProcessor) -> None:
        """Register a BeanPostProcessor."""
        self._post_processors.append(processor)

    # ------------------------------------------------------------------
    # Bean access
    # ------------------------------------------------------------------

    def get_bean(self, bean_type: type[T]) -> T:
        """Return the started instance for *bean_type* (or a registered subclass)."""
        if bean_type is Config:
            return self._config  # type: ignore[return-value]
        for cls, reg in self._registrations.items():
            if issubclass(cls, bean_type) and reg.instance is not None:
                return reg.instance  # type: ignore[no-any-return]
        raise NoSuchBeanError(bean_type)

    def get_beans_by_stereotype(self, stereotype: str) -> list[Any]:
        """Started instances whose class carries *stereotype*, sorted by @order."""
        return [
            reg.instance
            for cls, reg in self._sorted_registrations()
            if reg.instance is not None and stereotype_of(cls) == stereotype
        ]

    def contains_bean(self, name: str) -> bool:
        return any(reg.name == name for reg in self._registrations.values())

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> Config:
        """Application configuration."""
        return self._config

    @property
    def aspect_processor(self) -> AspectBeanPostProcessor:
        """The built-in post processor holding the advice registry."""
        return self._aspect_processor

    @property
    def started(self) -> bool:
        return self._started

    @property
    def bean_count(self) -> int:
        return sum(1 for reg in self._registrations.values() if reg.instance is not None)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Instantiate beans, collect aspects, weave advice, freeze the registry.

        Every bean passes through ``before_init`` before any bean reaches
        ``after_init``, so all aspects are known by the time weaving starts.
        """
        if self._started:
            return

        for cls, reg in self._sorted_registrations():
            if reg.instance is None:
                self._instantiate(cls, reg, resolving=())

        registrations = [reg for _cls, reg in self._sorted_registrations()]
        for reg in registrations:
            for pp in self._post_processors:
                reg.instance = pp.before_init(reg.instance, reg.name)
        for reg in registrations:
            for pp in self._post_processors:
                reg.instance = pp.after_init(reg.instance, reg.name)

        self._aspect_processor.freeze()
        self._started = True
        logger.info(
            "context_started",
            beans=self.bean_count,
            advice=len(self._aspect_processor.registry),
        )

    async def stop(self) -> None:
        """Release bean instances in reverse start order."""
        for _cls, reg in reversed(self._sorted_registrations()):
            close = getattr(reg.instance, "close", None)
            if callable(close):
                result = close()
                if inspect.isawaitable(result):
                    await result
        self._started = False
        logger.info("context_stopped")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _sorted_registrations(self) -> list[tuple[type, BeanRegistration]]:
        return sorted(self._registrations.items(), key=lambda item: get_order(item[0]))

    def _instantiate(self, cls: type, reg: BeanRegistration, resolving: tuple[type, ...]) -> Any:
        if cls in resolving:
            chain = " -> ".join(c.__name__ for c in (*resolving, cls))
            raise BeanCreationException(reg.name, f"circular dependency: {chain}")

        try:
            hints = typing.get_type_hints(cls.__init__)
        except Exception as exc:
            raise BeanCreationException(reg.name, f"cannot read constructor hints: {exc}") from exc
        hints.pop("return", None)
        params = inspect.signature(cls.__init__).parameters

        kwargs: dict[str, Any] = {}
        for param_name, param_type in hints.items():
            param = params.get(param_name)
            optional = param is not None and param.default is not inspect.Parameter.empty
            if optional:
                param_type = _unwrap_optional(param_type)
                if not self._has_candidate(param_type):
                    continue
            kwargs[param_name] = self._resolve_dependency(param_type, (*resolving, cls), reg.name)

        try:
            reg.instance = cls(**kwargs)
        except Exception as exc:
            raise BeanCreationException(reg.name, str(exc)) from exc
        return reg.instance

    def _resolve_dependency(self, param_type: Any, resolving: tuple[type, ...], required_by: str) -> Any:
        if param_type is Config:
            return self._config
        for cls, reg in self._registrations.items():
            if isinstance(param_type, type) and issubclass(cls, param_type):
                if reg.instance is None:
                    self._instantiate(cls, reg, resolving)
                return reg.instance
        raise NoSuchBeanError(param_type, required_by=required_by)

    def _has_candidate(self, param_type: Any) -> bool:
        if param_type is Config:
            return True
        return isinstance(param_type, type) and any(issubclass(cls, param_type) for cls in self._registrations)


def _unwrap_optional(param_type: Any) -> Any:
    """``Foo | None`` and ``Optional[Foo]`` resolve as ``Foo``."""
    args = [arg for arg in typing.get_args(param_type) if arg is not type(None)]
    if typing.get_origin(param_type) in (typing.Union, types.UnionType) and len(args) == 1:
        return args[0]
    return param_type


def _default_bean_name(cls: type) -> str:
    """``UsersController`` -> ``usersController``."""
    return cls.__name__[:1].lower() + cls.__name__[1:]
