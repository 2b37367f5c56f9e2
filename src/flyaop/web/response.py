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
"""Mapping from controller return values to Starlette responses."""

from __future__ import annotations

from typing import Any

from starlette.responses import JSONResponse, Response


def handle_return_value(result: Any, status_code: int = 200) -> Response:
    """Render *result* as the HTTP response for a handler.

    ``None`` means "nothing to send" and becomes ``204 No Content`` unless the
    mapping asked for a specific status. Responses pass through untouched and
    every other value is serialized as JSON, so a plain string is sent as a
    JSON string.
    """
    if isinstance(result, Response):
        return result
    if result is None:
        return Response(status_code=204 if status_code == 200 else status_code)
    return JSONResponse(result, status_code=status_code)
