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
"""Container exceptions — fatal errors during bean creation and startup."""

from __future__ import annotations

from flyaop.kernel.exceptions import InfrastructureException


class BeanCreationException(InfrastructureException):
    """Fatal error during bean creation — application cannot start.

    Analogous to Spring Boot's BeanCreationException.
    """

    def __init__(self, bean: str, reason: str) -> None:
        self.bean = bean
        self.reason = reason
        super().__init__(
            message=f"Failed to create bean '{bean}': {reason}",
            code="BEAN_CREATION",
            context={"bean": bean},
        )


class NoSuchBeanError(BeanCreationException):
    """No bean is registered for a requested type."""

    def __init__(self, bean_type: type, required_by: str | None = None) -> None:
        self.bean_type = bean_type
        self.required_by = required_by
        type_desc = getattr(bean_type, "__name__", repr(bean_type))
        reason = f"no bean of type '{type_desc}' is registered"
        super().__init__(bean=required_by or type_desc, reason=reason)
