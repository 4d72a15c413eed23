# -*- coding: utf-8 -*-
"""Location: ./tests/unit/mcpgraphql/services/test_logging_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Tests for logging setup.
"""

# Standard
import logging
import sys
from unittest.mock import patch

# Third-Party
import pytest

# First-Party
from mcpgraphql.models import LogLevel
from mcpgraphql.services import logging_service as ls
from mcpgraphql.services.logging_service import LoggingService


@pytest.fixture(autouse=True)
def reset_handlers():
    """Forget lazily created handlers between tests."""
    ls._file_handler = None
    ls._stream_handler = None
    yield
    root = logging.getLogger()
    for handler in (ls._stream_handler, ls._file_handler):
        if handler is not None and handler in root.handlers:
            root.removeHandler(handler)
    if ls._file_handler is not None:
        ls._file_handler.close()
    ls._file_handler = None
    ls._stream_handler = None
    LoggingService().set_level(LogLevel.INFO)


@pytest.mark.asyncio
async def test_initialize_attaches_stderr_handler_once():
    service = LoggingService(LogLevel.DEBUG)
    await service.initialize()
    await service.initialize()

    root = logging.getLogger()
    handlers = [h for h in root.handlers if h is ls._stream_handler]
    assert len(handlers) == 1
    assert handlers[0].stream is sys.stderr
    assert root.level == logging.DEBUG

    await service.shutdown()
    assert ls._stream_handler not in root.handlers


@pytest.mark.asyncio
async def test_json_console_format():
    with patch.object(ls.settings, "log_format", "json"):
        handler = ls._get_stream_handler()
    assert handler.formatter is ls.json_formatter


@pytest.mark.asyncio
async def test_file_logging(tmp_path):
    with patch.object(ls.settings, "log_to_file", True), patch.object(ls.settings, "log_file", "proxy.log"), patch.object(ls.settings, "log_folder", str(tmp_path / "logs")):
        service = LoggingService()
        await service.initialize()
        service.get_logger("mcpgraphql.test.file").warning("written to file")
        await service.shutdown()

    content = (tmp_path / "logs" / "proxy.log").read_text(encoding="utf-8")
    assert '"message": "written to file"' in content


def test_file_handler_requires_settings():
    with patch.object(ls.settings, "log_to_file", False):
        with pytest.raises(ValueError):
            ls._get_file_handler()


def test_set_level_reaches_registered_loggers():
    service = LoggingService(LogLevel.INFO)
    first = service.get_logger("mcpgraphql.test.first")
    second = LoggingService(LogLevel.INFO).get_logger("mcpgraphql.test.second")

    service.set_level(LogLevel.ERROR)

    assert first.level == logging.ERROR
    assert second.level == logging.ERROR
    assert service.level == LogLevel.ERROR


@pytest.mark.parametrize(
    "level,expected",
    [
        (LogLevel.DEBUG, logging.DEBUG),
        (LogLevel.NOTICE, logging.INFO),
        (LogLevel.WARNING, logging.WARNING),
        (LogLevel.ALERT, logging.CRITICAL),
    ],
)
def test_level_mapping(level, expected):
    assert level.to_logging_level() == expected
