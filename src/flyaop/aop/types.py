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
"""AOP core types — JoinPoint snapshot and invocation Outcome."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

BEFORE = "before"
AFTER = "after"
AFTER_RETURNING = "after_returning"
AFTER_THROWING = "after_throwing"
AROUND = "around"

ADVICE_TYPES: frozenset[str] = frozenset({BEFORE, AFTER, AFTER_RETURNING, AFTER_THROWING, AROUND})


@dataclass(frozen=True)
class JoinPoint:
    """Immutable snapshot of one intercepted method invocation.

    Attributes:
        target: The object whose method is being intercepted.
        method_name: Name of the method being called.
        args: Positional arguments passed to the method.
        kwargs: Keyword arguments passed to the method.
        qualified_name: ``"<module>.<Class>.<method>"`` used for pointcut matching.
        proceed: Continuation into the next around advice or the original
            method. Only set on the join point handed to ``@around`` advice.
    """

    target: Any
    method_name: str
    args: tuple = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    qualified_name: str = ""
    proceed: Callable[[], Any] | None = None

    @property
    def target_type(self) -> str:
        """Fully-qualified type name of the receiver."""
        cls = type(self.target)
        return f"{cls.__module__}.{cls.__qualname__}"

    def describe(self) -> dict[str, Any]:
        """Key/value view used in advice log lines."""
        return {
            "method": self.method_name,
            "args": list(self.args),
            "target": self.target_type,
        }


@dataclass(frozen=True)
class Success(Generic[T]):
    """The intercepted method returned *value*."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """The intercepted method raised *error*."""

    error: Exception

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.error


Outcome = Union[Success[Any], Failure]
