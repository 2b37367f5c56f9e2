"""AspectBeanPostProcessor — automatically weaves AOP advice into beans."""

from __future__ import annotations

from typing import Any

import structlog

from flyaop.aop.decorators import is_aspect
from flyaop.aop.registry import AspectRegistry
from flyaop.aop.weaver import qualified_prefix_of, weave_bean

logger = structlog.get_logger("flyaop.aop")


class AspectBeanPostProcessor:
    """BeanPostProcessor that collects @aspect beans and weaves advice.

    During ``before_init``, aspect beans are collected into an internal
    :class:`AspectRegistry`.  During ``after_init``, non-aspect beans
    have their public methods wrapped with matching advice chains, keyed by
    the bean's fully-qualified type name.

    The application context calls :meth:`freeze` once every bean has been
    processed; advice cannot be added afterwards.
    """

    def __init__(self, registry: AspectRegistry | None = None) -> None:
        self._registry = registry if registry is not None else AspectRegistry()

    @property
    def registry(self) -> AspectRegistry:
        return self._registry

    def before_init(self, bean: Any, bean_name: str) -> Any:
        """Collect @aspect beans into the registry."""
        if is_aspect(bean):
            self._registry.register(bean)
        return bean

    def after_init(self, bean: Any, bean_name: str) -> Any:
        """Weave advice into non-aspect beans."""
        if not len(self._registry) or is_aspect(bean):
            return bean

        woven = weave_bean(bean, qualified_prefix_of(bean), self._registry)
        if woven:
            logger.info("bean_woven", bean=bean_name, methods=woven)
        return bean

    def freeze(self) -> None:
        self._registry.freeze()
