# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/server.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

MCP server entry point.

Registers ``introspectSchema`` and ``queryGraphQL`` as MCP tools backed by
:class:`~mcpgraphql.services.graphql_service.GraphQLService` and serves them
over stdio. Tool results are returned as a single JSON text block; failures
come back as error payloads (``"isError": true``) rather than protocol errors.

Usage:
    Command line usage::

        # Configuration comes from the environment or a .env file
        GRAPHQL_ENDPOINT=https://api.example.com/graphql mcpgraphql

        # With login and verbose logging
        AUTH_LOGIN_ENDPOINT=https://api.example.com/login AUTH_USERNAME=bot AUTH_PASSWORD=secret \\
            mcpgraphql --log-level debug

Examples:
    >>> [tool.name for tool in TOOLS]
    ['introspectSchema', 'queryGraphQL']
    >>> TOOLS[1].inputSchema["required"]
    ['query']
"""

# Standard
import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional, Sequence

# Third-Party
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import TextContent, Tool
import orjson

# First-Party
from mcpgraphql import __version__, SERVER_NAME
from mcpgraphql.config import settings
from mcpgraphql.exceptions import FilesystemError
from mcpgraphql.models import LogLevel
from mcpgraphql.services.auth_service import AuthService
from mcpgraphql.services.error_service import ErrorService
from mcpgraphql.services.graphql_service import GraphQLService
from mcpgraphql.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)

server = Server(SERVER_NAME)

TOOLS: List[Tool] = [
    Tool(
        name="introspectSchema",
        description="Introspect the GraphQL schema, use this tool before doing a query to get the schema information",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="queryGraphQL",
        description="Query a GraphQL endpoint with the given query and variables",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "GraphQL query or mutation document"},
                "variables": {"type": ["string", "object"], "description": "Variables as a JSON object or its string form, e.g. '{\"id\": 1}'"},
            },
            "required": ["query"],
        },
    ),
]

_graphql_service: Optional[GraphQLService] = None
_error_service = ErrorService()


def get_graphql_service() -> GraphQLService:
    """Return the service installed by :func:`main`.

    Returns:
        GraphQLService: The initialized service.

    Raises:
        RuntimeError: If the server has not been started.
    """
    if _graphql_service is None:
        raise RuntimeError("GraphQL service is not initialized")
    return _graphql_service


async def dispatch_tool(service: GraphQLService, name: str, arguments: Dict[str, Any]) -> Any:
    """Route a tool call to the GraphQL service.

    Args:
        service: The GraphQL service.
        name: Tool name.
        arguments: Tool arguments as sent by the client.

    Returns:
        Any: The tool result or an error payload.

    Examples:
        >>> import asyncio
        >>> asyncio.run(dispatch_tool(GraphQLService(), "queryGraphQL", {}))["validationErrors"]
        {'query': 'A GraphQL query string is required'}
        >>> asyncio.run(dispatch_tool(GraphQLService(), "dropDatabase", {}))["message"]
        'Unknown tool: dropDatabase'
    """
    if name == "introspectSchema":
        return await service.introspect_schema()

    if name == "queryGraphQL":
        query = arguments.get("query")
        if not isinstance(query, str):
            return _error_service.create_validation_error("Invalid arguments for queryGraphQL", {"query": "A GraphQL query string is required"})
        variables = arguments.get("variables")
        if isinstance(variables, dict):
            variables = orjson.dumps(variables).decode("utf-8")
        elif variables is not None and not isinstance(variables, str):
            return _error_service.create_validation_error("Invalid arguments for queryGraphQL", {"variables": "Variables must be a JSON object string"})
        return await service.query_graphql(query, variables)

    return _error_service.create_validation_error(f"Unknown tool: {name}", {"name": f"Expected one of: {', '.join(tool.name for tool in TOOLS)}"})


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List the proxy tools.

    Returns:
        list[Tool]: ``introspectSchema`` and ``queryGraphQL``.
    """
    return TOOLS


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Execute a tool and return its result as JSON text.

    Args:
        name: Tool name.
        arguments: Tool arguments.

    Returns:
        list[TextContent]: One text block with the JSON result.
    """
    result = await dispatch_tool(get_graphql_service(), name, arguments or {})
    return [TextContent(type="text", text=orjson.dumps(result).decode("utf-8"))]


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments, defaults to ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: Parsed arguments.

    Examples:
        >>> _parse_args(["--log-level", "debug"]).log_level
        'debug'
    """
    parser = argparse.ArgumentParser(description="Expose a GraphQL endpoint as MCP tools over stdio")
    parser.add_argument("--log-level", default=None, choices=[level.value for level in LogLevel], help=f"Log level (default: {settings.log_level.value})")
    return parser.parse_args(argv)


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the MCP server.

    Args:
        argv: Command line arguments.

    Returns:
        int: Exit code (0 for success, 1 when startup fails)
    """
    global _graphql_service  # pylint: disable=global-statement
    args = _parse_args(argv)

    if args.log_level:
        logging_service.set_level(LogLevel(args.log_level))
    await logging_service.initialize()

    auth_service = AuthService()
    service = GraphQLService(auth_service=auth_service, error_service=_error_service)
    try:
        await service.initialize()
    except FilesystemError as e:
        logger.error(f"Cannot start {SERVER_NAME}: {e}")
        await auth_service.close()
        await logging_service.shutdown()
        return 1

    _graphql_service = service
    logger.info(f"Starting {SERVER_NAME} {__version__} (stdio) for {service.endpoint}")

    # Third-Party
    from mcp.server.stdio import stdio_server  # pylint: disable=import-outside-toplevel

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=server.get_capabilities(notification_options=NotificationOptions(), experimental_capabilities={}),
                ),
            )
    finally:
        _graphql_service = None
        await service.close()
        await auth_service.close()
        await logging_service.shutdown()
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":  # pragma: no cover
    run()
