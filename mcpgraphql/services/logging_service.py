# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/services/logging_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Logging Service Implementation.

Console output goes to stderr so the stdio MCP transport keeps stdout for
protocol frames. Console records are plain text or JSON depending on
``settings.log_format``; the optional rotating file handler always writes JSON.
Levels follow the MCP (RFC 5424) severities of :class:`~mcpgraphql.models.LogLevel`.
"""

# Standard
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import Dict, Optional

# Third-Party
from pythonjsonlogger import jsonlogger

# First-Party
from mcpgraphql.config import settings
from mcpgraphql.models import LogLevel

# Create a text formatter
text_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

# Create a JSON formatter
json_formatter = jsonlogger.JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s")

# Global handlers will be created lazily
_file_handler: Optional[RotatingFileHandler] = None
_stream_handler: Optional[logging.StreamHandler] = None

# Loggers handed out by any LoggingService instance, so set_level reaches all of them
_loggers: Dict[str, logging.Logger] = {}


def _get_file_handler() -> RotatingFileHandler:
    """Get or create the file handler.

    Returns:
        RotatingFileHandler: The file handler for JSON logging.

    Raises:
        ValueError: If file logging is disabled or no log file specified.
    """
    global _file_handler  # pylint: disable=global-statement
    if _file_handler is None:
        if not settings.log_to_file or not settings.log_file:
            raise ValueError("File logging is disabled or no log file specified")

        if settings.log_folder:
            os.makedirs(settings.log_folder, exist_ok=True)
            log_path = os.path.join(settings.log_folder, settings.log_file)
        else:
            log_path = settings.log_file

        _file_handler = RotatingFileHandler(log_path, maxBytes=1024 * 1024, backupCount=5)
        _file_handler.setFormatter(json_formatter)
    return _file_handler


def _get_stream_handler() -> logging.StreamHandler:
    """Get or create the stderr handler.

    Returns:
        logging.StreamHandler: The console handler, text or JSON per settings.
    """
    global _stream_handler  # pylint: disable=global-statement
    if _stream_handler is None:
        _stream_handler = logging.StreamHandler(sys.stderr)
        _stream_handler.setFormatter(json_formatter if settings.log_format == "json" else text_formatter)
    return _stream_handler


class LoggingService:
    """Process logging setup and logger registry.

    Examples:
        >>> isinstance(LoggingService().level, LogLevel)
        True
        >>> LoggingService(LogLevel.DEBUG).level.value
        'debug'
    """

    def __init__(self, level: Optional[LogLevel] = None):
        """Initialize logging service.

        Args:
            level: Minimum level; defaults to ``settings.log_level``.
        """
        self._level = LogLevel(level or settings.log_level)

    @property
    def level(self) -> LogLevel:
        """Current minimum level.

        Returns:
            LogLevel: The configured level.
        """
        return self._level

    async def initialize(self) -> None:
        """Attach handlers to the root logger.

        Examples:
            >>> import asyncio
            >>> service = LoggingService()
            >>> asyncio.run(service.initialize())
            >>> asyncio.run(service.shutdown())
        """
        root = logging.getLogger()
        stream_handler = _get_stream_handler()
        if stream_handler not in root.handlers:
            root.addHandler(stream_handler)

        if settings.log_to_file and settings.log_file:
            try:
                file_handler = _get_file_handler()
                if file_handler not in root.handlers:
                    root.addHandler(file_handler)
                logging.info(f"File logging enabled: {settings.log_folder or '.'}/{settings.log_file}")
            except Exception as e:
                logging.warning(f"Failed to initialize file logging: {e}")

        self.set_level(self._level)
        logging.getLogger(__name__).debug("Logging service initialized")

    async def shutdown(self) -> None:
        """Detach and close the handlers installed by :meth:`initialize`."""
        root = logging.getLogger()
        for handler in (_stream_handler, _file_handler):
            if handler is not None and handler in root.handlers:
                root.removeHandler(handler)
                handler.flush()
        if _file_handler is not None:
            _file_handler.close()

    def get_logger(self, name: str) -> logging.Logger:
        """Get or create logger instance.

        Args:
            name: Logger name

        Returns:
            Logger instance

        Examples:
            >>> import logging
            >>> service = LoggingService()
            >>> logger = service.get_logger("mcpgraphql.doctest")
            >>> isinstance(logger, logging.Logger)
            True
            >>> service.get_logger("mcpgraphql.doctest") is logger
            True
        """
        if name not in _loggers:
            logger = logging.getLogger(name)
            logger.setLevel(self._level.to_logging_level())
            _loggers[name] = logger
        return _loggers[name]

    def set_level(self, level: LogLevel) -> None:
        """Set minimum log level on the root logger and every registered logger.

        Args:
            level: New log level

        Examples:
            >>> import logging
            >>> service = LoggingService()
            >>> logger = service.get_logger("mcpgraphql.doctest.level")
            >>> service.set_level(LogLevel.ERROR)
            >>> logger.level == logging.ERROR
            True
            >>> service.set_level(LogLevel.INFO)
        """
        self._level = LogLevel(level)
        log_level = self._level.to_logging_level()
        logging.getLogger().setLevel(log_level)
        for logger in _loggers.values():
            logger.setLevel(log_level)
