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
"""Controller discovery and request dispatch onto Starlette routes."""

from __future__ import annotations

import inspect
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from flyaop.web.mappings import base_path_of, handler_mapping_of
from flyaop.web.response import handle_return_value


@dataclass(frozen=True)
class RouteMetadata:
    """One mapped handler: where it is served and which bean method answers."""

    path: str
    http_method: str
    status_code: int
    controller: str
    handler_name: str


class ControllerRegistrar:
    """Turns the ``rest_controller`` beans of a started context into routes.

    Mappings are read from the controller *class*, but requests are
    dispatched through the bean *instance*, so a method the weaver replaced
    with an advice wrapper is what actually handles the request.
    """

    def collect_routes(self, ctx: Any) -> list[Route]:
        return [
            Route(meta.path, _endpoint(getattr(bean, meta.handler_name), meta.status_code), methods=[meta.http_method])
            for meta, bean in self._handlers(ctx)
        ]

    def collect_route_metadata(self, ctx: Any) -> list[RouteMetadata]:
        """Route metadata for every mapped handler, used by ``flyaop routes``."""
        return [meta for meta, _bean in self._handlers(ctx)]

    def _handlers(self, ctx: Any) -> list[tuple[RouteMetadata, Any]]:
        found = [
            (meta, bean)
            for bean in ctx.get_beans_by_stereotype("rest_controller")
            for meta in _mapped_methods(type(bean))
        ]
        found.sort(key=lambda pair: (pair[0].path, pair[0].http_method))
        return found


def _mapped_methods(cls: type) -> Iterator[RouteMetadata]:
    base = base_path_of(cls)
    for name, member in inspect.getmembers(cls, callable):
        mapping = handler_mapping_of(member)
        if mapping is None:
            continue
        yield RouteMetadata(
            path=base + mapping.path,
            http_method=mapping.http_method,
            status_code=mapping.status_code,
            controller=cls.__name__,
            handler_name=name,
        )


def _endpoint(method: Any, status_code: int) -> Any:
    async def endpoint(request: Request) -> Response:
        result = method(**request.path_params)
        if inspect.isawaitable(result):
            result = await result
        return handle_return_value(result, status_code)

    return endpoint
