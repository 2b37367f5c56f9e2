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
"""Tests for StructlogAdapter — default LoggingPort implementation."""

import logging

import pytest
import structlog

from flyaop.core.config import Config
from flyaop.logging.port import LoggingPort
from flyaop.logging.structlog_adapter import StructlogAdapter


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    level = root.level
    named = {
        name: logger.level
        for name, logger in logging.Logger.manager.loggerDict.items()
        if isinstance(logger, logging.Logger)
    }
    yield
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger):
            logger.setLevel(named.get(name, logging.NOTSET))
    structlog.reset_defaults()
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter.root_level == "INFO"
        assert adapter.output_format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"flyaop": {"logging": {"level": {"root": "DEBUG"}}}}))
        assert adapter.root_level == "DEBUG"
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"flyaop": {"logging": {"format": "json"}}}))
        assert adapter.output_format == "json"

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"flyaop": {"logging": {"level": {"root": "INFO", "flyaop.users.aspect": "WARNING"}}}})
        adapter.configure(config)
        assert adapter.module_levels == {"flyaop.users.aspect": "WARNING"}
        assert logging.getLogger("flyaop.users.aspect").level == logging.WARNING


class TestStructlogAdapterGetLogger:
    def test_get_logger_returns_usable_logger(self):
        logger = StructlogAdapter().get_logger("flyaop.test")
        assert hasattr(logger, "info")

    def test_set_level(self):
        StructlogAdapter().set_level("flyaop.test", "error")
        assert logging.getLogger("flyaop.test").level == logging.ERROR


class TestStructlogAdapterOutput:
    def test_configure_rejects_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown log format"):
            StructlogAdapter().configure(Config({"flyaop": {"logging": {"format": "xml"}}}))

    def test_configure_installs_single_stdout_handler(self):
        StructlogAdapter().configure(Config({}))
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_json_output(self, capsys):
        StructlogAdapter().configure(Config({"flyaop": {"logging": {"format": "json"}}}))
        logging.getLogger("flyaop.test.json").warning("plain stdlib record")
        out = capsys.readouterr().out
        assert '"event": "plain stdlib record"' in out
        assert '"logger": "flyaop.test.json"' in out

    def test_json_output_after_child_level_raised(self, capsys):
        StructlogAdapter().set_level("flyaop.test", "error")
        StructlogAdapter().configure(Config({"flyaop": {"logging": {"format": "json"}}}))
        logging.getLogger("flyaop.test.json").warning("filtered by parent")
        logging.getLogger("flyaop.json").warning("kept")
        out = capsys.readouterr().out
        assert "filtered by parent" not in out
        assert '"event": "kept"' in out


class TestLevelIsolation:
    def test_level_set_in_one_test(self):
        StructlogAdapter().set_level("flyaop.isolation", "critical")
        assert logging.getLogger("flyaop.isolation").level == logging.CRITICAL

    def test_does_not_leak_into_the_next(self):
        assert logging.getLogger("flyaop.isolation").level == logging.NOTSET
