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
"""StructlogAdapter — default LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from flyaop.core.config import Config

FORMATS = ("console", "json")


def _shared_processors() -> list[structlog.types.Processor]:
    """Processors applied to both structlog and plain stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(output_format: str) -> list[structlog.types.Processor]:
    if output_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer()]


class StructlogAdapter:
    """Routes structlog through stdlib ``logging`` with a single stdout handler.

    Settings, all optional:

    * ``flyaop.logging.format``: ``console`` (default) or ``json``
    * ``flyaop.logging.level.root``: root level, ``INFO`` by default
    * ``flyaop.logging.level.<logger>``: level for one logger, e.g.
      ``flyaop.users.aspect: WARNING``

    Third-party loggers (uvicorn, starlette) go through the same renderer.
    """

    def __init__(self) -> None:
        self.root_level = "INFO"
        self.output_format = "console"
        self.module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = {name: str(level).upper() for name, level in config.get_section("flyaop.logging.level").items()}
        self.root_level = levels.pop("root", "INFO")
        self.module_levels = levels

        output_format = str(config.get("flyaop.logging.format", "console")).lower()
        if output_format not in FORMATS:
            raise ValueError(f"Unknown log format {output_format!r}; expected one of {FORMATS}")
        self.output_format = output_format

        shared = _shared_processors()
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *shared,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    *_renderer(self.output_format),
                ],
            )
        )
        root = logging.getLogger()
        root.handlers[:] = [handler]
        self.set_level("", self.root_level)
        for name, level in self.module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the level of stdlib logger *name* (``""`` is the root logger)."""
        logging.getLogger(name or None).setLevel(getattr(logging, level.upper(), logging.INFO))
