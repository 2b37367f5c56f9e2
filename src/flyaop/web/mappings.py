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
"""Route mapping decorators for class-based controllers.

``@request_mapping`` sets a base path on the controller class; the method
decorators record a :class:`HandlerMapping` on each handler::

    @rest_controller
    @request_mapping("/users")
    class UsersController:
        @get_mapping("")
        async def list_users(self) -> str: ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])

BASE_PATH_ATTR = "__flyaop_request_mapping__"
HANDLER_MAPPING_ATTR = "__flyaop_mapping__"


@dataclass(frozen=True)
class HandlerMapping:
    http_method: str
    path: str
    status_code: int = 200


def request_mapping(path: str) -> Callable[[T], T]:
    """Prefix every handler path of the decorated controller with *path*."""

    def decorator(cls: T) -> T:
        setattr(cls, BASE_PATH_ATTR, path.rstrip("/"))
        return cls

    return decorator


def base_path_of(cls: type) -> str:
    return getattr(cls, BASE_PATH_ATTR, "")


def handler_mapping_of(fn: Any) -> HandlerMapping | None:
    return getattr(fn, HANDLER_MAPPING_ATTR, None)


def _route(http_method: str) -> Callable[..., Callable[[F], F]]:
    def route(path: str = "", *, status_code: int = 200) -> Callable[[F], F]:
        mapping = HandlerMapping(http_method, path, status_code)

        def decorator(fn: F) -> F:
            setattr(fn, HANDLER_MAPPING_ATTR, mapping)
            return fn

        return decorator

    route.__name__ = route.__qualname__ = f"{http_method.lower()}_mapping"
    return route


get_mapping = _route("GET")
post_mapping = _route("POST")
put_mapping = _route("PUT")
delete_mapping = _route("DELETE")
