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
"""Starlette application factory for a started ApplicationContext."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from flyaop.kernel.exceptions import FlyAopException
from flyaop.web.controller import ControllerRegistrar
from flyaop.web.errors import global_exception_handler
from flyaop.web.filter_chain import WebFilterChainMiddleware
from flyaop.web.filters import RequestLoggingFilter, TransactionIdFilter, WebFilter

if TYPE_CHECKING:
    from flyaop.context.application_context import ApplicationContext


def default_filters() -> list[WebFilter]:
    return [TransactionIdFilter(), RequestLoggingFilter()]


def create_app(
    context: ApplicationContext | None = None,
    debug: bool = False,
    extra_routes: Sequence[BaseRoute] = (),
    lifespan: Any = None,
    filters: Sequence[WebFilter] | None = None,
) -> Starlette:
    """Build the Starlette app serving every ``rest_controller`` in *context*.

    The context must already be started so controller methods are woven.
    """
    routes: list[BaseRoute] = []
    if context is not None:
        routes.extend(ControllerRegistrar().collect_routes(context))
    routes.extend(extra_routes)

    chain = default_filters() if filters is None else list(filters)
    app = Starlette(
        debug=debug,
        routes=routes,
        middleware=[Middleware(WebFilterChainMiddleware, filters=chain)],
        lifespan=lifespan,
    )
    # FlyAopException is answered by the inner exception middleware, so the
    # filter chain still sees the response. Any other error reaches
    # Starlette's outermost server error middleware.
    app.add_exception_handler(FlyAopException, global_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)  # type: ignore[arg-type]
    return app
