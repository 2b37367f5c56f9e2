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
"""flyaop Container — stereotypes, ordering and bean errors."""

from flyaop.container.exceptions import BeanCreationException, NoSuchBeanError
from flyaop.container.ordering import HIGHEST_PRECEDENCE, LOWEST_PRECEDENCE, get_order, order
from flyaop.container.stereotypes import component, rest_controller, service, stereotype_of

__all__ = [
    "BeanCreationException",
    "HIGHEST_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    "NoSuchBeanError",
    "component",
    "get_order",
    "order",
    "rest_controller",
    "service",
    "stereotype_of",
]
