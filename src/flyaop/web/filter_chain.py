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
"""Pure ASGI middleware running the ordered web filter chain."""

from __future__ import annotations

import functools
from collections.abc import Sequence

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from flyaop.container.ordering import get_order
from flyaop.web.filters import CallNext, WebFilter


class WebFilterChainMiddleware:
    """Runs every :class:`WebFilter` around the downstream app, lowest ``@order`` first.

    The downstream response is buffered into a :class:`Response` so filters
    can read and amend it before it is sent.
    """

    def __init__(self, app: ASGIApp, filters: Sequence[WebFilter] = ()) -> None:
        self.app = app
        self.filters = sorted(filters, key=lambda f: get_order(type(f)))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def downstream(request: Request) -> Response:
            recorder = _ResponseRecorder()
            await self.app(scope, receive, recorder)
            return recorder.to_response()

        call: CallNext = downstream
        for web_filter in reversed(self.filters):
            call = functools.partial(_apply_filter, web_filter, call)

        response = await call(Request(scope, receive))
        await response(scope, receive, send)


async def _apply_filter(web_filter: WebFilter, call_next: CallNext, request: Request) -> Response:
    if not web_filter.applies_to(request.url.path):
        return await call_next(request)
    return await web_filter.do_filter(request, call_next)


class _ResponseRecorder:
    """ASGI ``send`` callable that keeps the response instead of sending it."""

    def __init__(self) -> None:
        self.status = 200
        self.headers: list[tuple[bytes, bytes]] = []
        self.body = bytearray()

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", []))
        elif message["type"] == "http.response.body":
            self.body.extend(message.get("body", b""))

    def to_response(self) -> Response:
        response = Response(content=bytes(self.body), status_code=self.status)
        response.raw_headers = self.headers
        return response
