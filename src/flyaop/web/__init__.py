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
"""flyaop Web — class-based controllers served by Starlette."""

from flyaop.web.app import create_app, default_filters
from flyaop.web.controller import ControllerRegistrar, RouteMetadata
from flyaop.web.errors import global_exception_handler
from flyaop.web.filter_chain import WebFilterChainMiddleware
from flyaop.web.filters import PathFilter, RequestLoggingFilter, TransactionIdFilter, WebFilter
from flyaop.web.mappings import (
    HandlerMapping,
    delete_mapping,
    get_mapping,
    post_mapping,
    put_mapping,
    request_mapping,
)
from flyaop.web.response import handle_return_value

__all__ = [
    "ControllerRegistrar",
    "HandlerMapping",
    "PathFilter",
    "RequestLoggingFilter",
    "RouteMetadata",
    "TransactionIdFilter",
    "WebFilter",
    "WebFilterChainMiddleware",
    "create_app",
    "default_filters",
    "delete_mapping",
    "get_mapping",
    "global_exception_handler",
    "handle_return_value",
    "post_mapping",
    "put_mapping",
    "request_mapping",
]
