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
"""Global exception handler producing structured JSON error bodies."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

import structlog
from starlette.requests import Request
from starlette.responses import JSONResponse

from flyaop.kernel.exceptions import FlyAopException

logger = structlog.get_logger("flyaop.web")

INTERNAL_ERROR = "INTERNAL_ERROR"


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer any exception escaping a handler with an ``{"error": {...}}`` body.

    flyaop exceptions expose their own message, code, status and context.
    Anything else is reported as a generic 500 so internals do not leak.
    """
    if isinstance(exc, FlyAopException):
        status, message, code, context = exc.status_code, exc.message, exc.code, exc.context
    else:
        status, message, code, context = 500, "Internal server error", INTERNAL_ERROR, {}

    error: dict[str, Any] = {
        "message": message,
        "code": code,
        "transaction_id": getattr(request.state, "transaction_id", None) or str(uuid.uuid4()),
        "timestamp": datetime.now(UTC).isoformat(),
        "status": status,
        "path": request.url.path,
    }
    if context:
        error["context"] = context

    logger.warning(
        "request_failed",
        path=request.url.path,
        status=status,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse({"error": error}, status_code=status)
