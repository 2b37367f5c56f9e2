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
"""Stereotype decorators that classify beans for the ApplicationContext.

The context looks beans up by stereotype (get_beans_by_stereotype); the
web layer, for example, mounts every rest_controller. A stereotype can be
applied bare (@service) or with an explicit bean name
(@service(name="billing")).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T", bound=type)

STEREOTYPE_ATTR = "__flyaop_stereotype__"
BEAN_NAME_ATTR = "__flyaop_bean_name__"


def mark_stereotype(cls: T, stereotype: str, name: str = "") -> T:
    """Attach *stereotype* (and optionally a bean *name*) to *cls*."""
    setattr(cls, STEREOTYPE_ATTR, stereotype)
    if name:
        setattr(cls, BEAN_NAME_ATTR, name)
    return cls


def stereotype_of(cls: type) -> str:
    return getattr(cls, STEREOTYPE_ATTR, "")


def _stereotype(kind: str) -> Callable[..., Any]:
    def apply(cls: T | None = None, *, name: str = "") -> T | Callable[[T], T]:
        if cls is None:
            return lambda target: mark_stereotype(target, kind, name)
        return mark_stereotype(cls, kind)

    apply.__name__ = apply.__qualname__ = kind
    apply.__doc__ = f"Mark a class as a {kind} bean."
    return apply


component = _stereotype("component")
service = _stereotype("service")
rest_controller = _stereotype("rest_controller")
