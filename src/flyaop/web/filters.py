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
"""Web filters: per-request hooks that run around every controller call.

A filter receives the request and a ``call_next`` continuation and returns
the response. Filters are ordered with ``@order`` and can be limited to a
subset of paths with glob patterns.
"""

from __future__ import annotations

import abc
import time
import uuid
from collections.abc import Awaitable, Callable
from fnmatch import fnmatch
from typing import Protocol, runtime_checkable

import structlog
from starlette.requests import Request
from starlette.responses import Response

from flyaop.container.ordering import HIGHEST_PRECEDENCE, order

logger = structlog.get_logger("flyaop.web")

TRANSACTION_ID_HEADER = "X-Transaction-Id"

CallNext = Callable[[Request], Awaitable[Response]]


@runtime_checkable
class WebFilter(Protocol):
    def applies_to(self, path: str) -> bool: ...

    async def do_filter(self, request: Request, call_next: CallNext) -> Response: ...


class PathFilter(abc.ABC):
    """Base filter limited by glob patterns on the request path.

    An empty ``include`` means every path; ``exclude`` wins over
    ``include``.
    """

    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    def applies_to(self, path: str) -> bool:
        if self.include and not any(fnmatch(path, pattern) for pattern in self.include):
            return False
        return not any(fnmatch(path, pattern) for pattern in self.exclude)

    @abc.abstractmethod
    async def do_filter(self, request: Request, call_next: CallNext) -> Response: ...


@order(HIGHEST_PRECEDENCE + 100)
class TransactionIdFilter(PathFilter):
    """Reuses the caller's ``X-Transaction-Id`` or mints one.

    The id is stored on ``request.state``, bound into the structlog context
    for every log line of the request, and echoed on the response.
    """

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        transaction_id = request.headers.get(TRANSACTION_ID_HEADER) or str(uuid.uuid4())
        request.state.transaction_id = transaction_id
        with structlog.contextvars.bound_contextvars(transaction_id=transaction_id):
            response = await call_next(request)
        response.headers[TRANSACTION_ID_HEADER] = transaction_id
        return response


@order(HIGHEST_PRECEDENCE + 200)
class RequestLoggingFilter(PathFilter):
    """One log line per request with status and duration."""

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        started = time.perf_counter()
        log = logger.bind(method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        except Exception as exc:
            log.error(
                "http_request_failed",
                duration_ms=_elapsed_ms(started),
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise
        log.info("http_request", status_code=response.status_code, duration_ms=_elapsed_ms(started))
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
