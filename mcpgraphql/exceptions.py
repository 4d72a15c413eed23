# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/exceptions.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Exceptions raised by the proxy services.

Failures inside the public tool operations never leave the service: they are
converted into error payloads by :class:`~mcpgraphql.services.error_service.ErrorService`.
The class names below therefore surface to MCP clients as ``exceptionType``.
"""

# Standard
from typing import Optional


class GraphQLProxyError(Exception):
    """Base exception for proxy operations."""


class ConfigurationError(GraphQLProxyError):
    """Raised when required configuration (e.g. login credentials) is missing.

    Examples:
        >>> try:
        ...     raise ConfigurationError("Login credentials not configured")
        ... except GraphQLProxyError as e:
        ...     str(e)
        'Login credentials not configured'
    """


class AuthenticationError(GraphQLProxyError):
    """Raised when the login exchange fails.

    Examples:
        >>> err = AuthenticationError("Login failed: 401", status_code=401)
        >>> err.status_code
        401
        >>> AuthenticationError("Authentication failed: boom").status_code is None
        True
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        """Initialize the error.

        Args:
            message: Human readable description.
            status_code: HTTP status returned by the login endpoint, if any.
        """
        super().__init__(message)
        self.status_code = status_code


class RemoteError(GraphQLProxyError):
    """Raised when the GraphQL endpoint answers with a non-2xx status.

    Examples:
        >>> err = RemoteError(503)
        >>> str(err)
        'GraphQL request failed: 503'
        >>> err.status_code
        503
    """

    def __init__(self, status_code: int, message: Optional[str] = None):
        """Initialize the error.

        Args:
            status_code: HTTP status returned by the endpoint.
            message: Optional override for the default message.
        """
        super().__init__(message or f"GraphQL request failed: {status_code}")
        self.status_code = status_code


class FilesystemError(GraphQLProxyError):
    """Raised when a local schema file or the introspection query resource cannot be read."""


class SerializationError(GraphQLProxyError):
    """Raised when JSON input or output cannot be encoded or decoded."""
