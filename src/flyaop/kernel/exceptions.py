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
"""Exception hierarchy shared by every flyaop module.

Each category carries the HTTP status the web layer answers with, so the
global exception handler needs no lookup table.
"""

from __future__ import annotations

from typing import Any


class FlyAopException(Exception):
    """Base exception for all flyaop errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. ``"SIMULATED_ERROR"``).
        context: Extra key/value data included in error responses.
    """

    status_code: int = 500

    def __init__(self, message: str, code: str | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or type(self).__name__
        self.context: dict[str, Any] = dict(context or {})


class BusinessException(FlyAopException):
    """A domain rule was violated by the caller's input."""

    status_code = 400


class InfrastructureException(FlyAopException):
    """Wiring, startup or downstream failures."""

    status_code = 502


class SimulatedError(FlyAopException):
    """Deliberate, deterministic failure raised by demo handlers.

    Never retried; every raise carries the same message.
    """

    status_code = 500

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, code="SIMULATED_ERROR", context=context)
