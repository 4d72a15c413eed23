# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/models.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Data models shared across the proxy.

Examples:
    >>> from mcpgraphql.models import Credentials, ErrorPayload, LogLevel
    >>> Credentials("https://auth.example.com/login", "alice", "s3cret").is_complete()
    True
    >>> ErrorPayload(message="boom").to_dict()
    {'isError': True, 'message': 'boom'}
    >>> LogLevel.WARNING.value
    'warning'
"""

# Standard
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Dict, Optional

# Third-Party
from pydantic import Field

# First-Party
from mcpgraphql.utils.base_models import BaseModelWithConfigDict


class LogLevel(str, Enum):
    """MCP log levels (RFC 5424 severities)."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"

    def to_logging_level(self) -> int:
        """Map the severity onto a stdlib ``logging`` level.

        Returns:
            int: The closest ``logging`` level.

        Examples:
            >>> LogLevel.NOTICE.to_logging_level() == logging.INFO
            True
            >>> LogLevel.EMERGENCY.to_logging_level() == logging.CRITICAL
            True
        """
        return _STDLIB_LEVELS[self]


_STDLIB_LEVELS: Dict[LogLevel, int] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.NOTICE: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.ALERT: logging.CRITICAL,
    LogLevel.EMERGENCY: logging.CRITICAL,
}


@dataclass(frozen=True)
class Credentials:
    """Login endpoint and the username/password pair posted to it.

    Examples:
        >>> Credentials("https://auth.example.com/login", "alice", "").is_complete()
        False
        >>> Credentials(None, "alice", "pw").is_complete()
        False
    """

    endpoint: Optional[str]
    username: Optional[str]
    password: Optional[str]

    def is_complete(self) -> bool:
        """Return True when every field is present and non-empty.

        Returns:
            bool: Whether login can be attempted.
        """
        return bool(self.endpoint) and bool(self.username) and bool(self.password)


class ErrorPayload(BaseModelWithConfigDict):
    """Uniform error envelope returned by the tool operations.

    Examples:
        >>> payload = ErrorPayload(message="Failed: boom", exception_type="RemoteError")
        >>> payload.to_dict()
        {'isError': True, 'message': 'Failed: boom', 'exceptionType': 'RemoteError'}
        >>> ErrorPayload(message="x", error_type="AuthenticationError").to_dict()["errorType"]
        'AuthenticationError'
    """

    is_error: bool = Field(default=True, description="Always true; marks the value as a failure")
    message: str = Field(..., description="Human readable failure description")
    exception_type: Optional[str] = Field(default=None, description="Class name of the underlying fault")
    stack_trace_excerpt: Optional[str] = Field(default=None, description="Up to five traceback frames, debug mode only")
    validation_errors: Optional[Dict[str, str]] = Field(default=None, description="Per-field validation messages")
    error_type: Optional[str] = Field(default=None, description="Error category, e.g. AuthenticationError")
