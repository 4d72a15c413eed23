# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/services/error_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Error payload construction.

The tool operations never raise across the MCP boundary; every failure is
turned into an ``ErrorPayload`` dict here.

Examples:
    >>> service = ErrorService(debug=False)
    >>> service.create_error("Failed to introspect schema")
    {'isError': True, 'message': 'Failed to introspect schema'}
    >>> service.create_error("Failed to execute GraphQL query", ValueError("bad input"))["message"]
    'Failed to execute GraphQL query: bad input'
"""

# Standard
import traceback
from typing import Any, Dict, Mapping, Optional

# First-Party
from mcpgraphql.config import settings
from mcpgraphql.models import ErrorPayload

MAX_STACK_FRAMES = 5


class ErrorService:
    """Builds uniform error payloads from a message and an optional exception."""

    def __init__(self, debug: Optional[bool] = None):
        """Initialize the error service.

        Args:
            debug: Force traceback excerpts on or off. ``None`` defers to
                ``settings.graphql_debug`` at call time.
        """
        self._debug = debug

    def create_error(self, message: str, exc: Optional[BaseException] = None) -> Dict[str, Any]:
        """Create an error payload.

        Args:
            message: Description of the failed operation.
            exc: Underlying exception, if any. Its text is appended to the
                message and its class name recorded as ``exceptionType``.

        Returns:
            Dict[str, Any]: The serialized payload.

        Examples:
            >>> payload = ErrorService(debug=False).create_error("Failed", KeyError("token"))
            >>> payload["exceptionType"]
            'KeyError'
            >>> "stackTraceExcerpt" in payload
            False
        """
        return self._build(message, exc).to_dict()

    def create_validation_error(self, message: str, validation_errors: Mapping[str, str]) -> Dict[str, Any]:
        """Create an error payload carrying per-field validation messages.

        Args:
            message: Description of the failed operation.
            validation_errors: Field name to problem description.

        Returns:
            Dict[str, Any]: The serialized payload.

        Examples:
            >>> ErrorService(debug=False).create_validation_error("Invalid arguments", {"query": "required"})
            {'isError': True, 'message': 'Invalid arguments', 'validationErrors': {'query': 'required'}}
        """
        return self._build(message, validation_errors=dict(validation_errors)).to_dict()

    def create_auth_error(self, message: str) -> Dict[str, Any]:
        """Create an error payload flagged as an authentication failure.

        Args:
            message: Description of the failed operation.

        Returns:
            Dict[str, Any]: The serialized payload.

        Examples:
            >>> ErrorService(debug=False).create_auth_error("Not logged in")
            {'isError': True, 'message': 'Not logged in', 'errorType': 'AuthenticationError'}
        """
        return self._build(message, error_type="AuthenticationError").to_dict()

    def _build(
        self,
        message: str,
        exc: Optional[BaseException] = None,
        validation_errors: Optional[Dict[str, str]] = None,
        error_type: Optional[str] = None,
    ) -> ErrorPayload:
        """Assemble the payload in one step so it is never modified afterwards.

        Args:
            message: Description of the failed operation.
            exc: Underlying exception, if any.
            validation_errors: Optional per-field messages.
            error_type: Optional error category.

        Returns:
            ErrorPayload: The frozen payload model.
        """
        if exc is None:
            return ErrorPayload(message=message, validation_errors=validation_errors, error_type=error_type)

        return ErrorPayload(
            message=f"{message}: {exc}",
            exception_type=type(exc).__name__,
            stack_trace_excerpt=self._stack_trace_excerpt(exc) if self._debug_enabled() else None,
            validation_errors=validation_errors,
            error_type=error_type,
        )

    def _debug_enabled(self) -> bool:
        """Return whether traceback excerpts are included.

        Returns:
            bool: The override when set, else ``settings.graphql_debug``.
        """
        if self._debug is not None:
            return self._debug
        return settings.graphql_debug

    @staticmethod
    def _stack_trace_excerpt(exc: BaseException) -> Optional[str]:
        """Format up to five traceback frames, the raising frame first.

        Args:
            exc: The exception whose traceback is formatted.

        Returns:
            Optional[str]: Newline-joined frames, or None for an exception that was never raised.

        Examples:
            >>> ErrorService._stack_trace_excerpt(ValueError("never raised")) is None
            True
        """
        frames = traceback.extract_tb(exc.__traceback__)
        if not frames:
            return None
        origin_first = list(reversed(frames))[:MAX_STACK_FRAMES]
        return "\n".join(f'File "{frame.filename}", line {frame.lineno}, in {frame.name}' for frame in origin_first)
