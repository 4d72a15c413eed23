# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/services/graphql_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

GraphQL Proxy Service.

Backs the two MCP tools:

- ``introspect_schema``: returns the schema, either from a local introspection
  result file or from a live introspection call against the endpoint.
- ``query_graphql``: forwards an arbitrary query (mutations only when enabled)
  and returns the endpoint's JSON response untouched, including any GraphQL
  ``errors`` array.

Both operations always return a dict. Failures are reported as error payloads
built by :class:`~mcpgraphql.services.error_service.ErrorService`.

The request headers are the static ``GRAPHQL_HEADERS`` plus the bearer header
obtained by the eager login in :meth:`GraphQLService.initialize`. They are
fixed after initialization; a token acquired later through
``AuthService.get_auth_headers`` is not merged in.

Examples:
    >>> GraphQLService.is_mutation("  Mutation { deleteAll }")
    True
    >>> GraphQLService.is_mutation("query { users { id } }")
    False
    >>> GraphQLService.is_mutation("{ users { id } }")
    False
"""

# Standard
from pathlib import Path
from typing import Any, Dict, Optional

# Third-Party
import httpx
import orjson

# First-Party
from mcpgraphql.config import settings
from mcpgraphql.exceptions import FilesystemError, GraphQLProxyError, RemoteError, SerializationError
from mcpgraphql.services.auth_service import AuthService
from mcpgraphql.services.error_service import ErrorService
from mcpgraphql.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)

MUTATIONS_DISABLED_MESSAGE = "Mutations are not allowed unless you enable them in the configuration."


class GraphQLService:
    """Proxies introspection and queries to a remote GraphQL endpoint.

    Examples:
        >>> service = GraphQLService(endpoint="https://api.example.com/graphql", allow_mutations=False)
        >>> service.endpoint
        'https://api.example.com/graphql'
        >>> service.headers
        {}
    """

    def __init__(
        self,
        auth_service: Optional[AuthService] = None,
        error_service: Optional[ErrorService] = None,
        client: Optional[httpx.AsyncClient] = None,
        endpoint: Optional[str] = None,
        allow_mutations: Optional[bool] = None,
        schema_path: Optional[str] = None,
        config_headers: Optional[str] = None,
        introspection_query_path: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the GraphQL service.

        Arguments left as ``None`` fall back to the matching ``settings`` field.

        Args:
            auth_service: Login service used for the eager login.
            error_service: Builder for error payloads.
            client: HTTP client to use. When omitted one is created on first use and closed by :meth:`close`.
            endpoint: GraphQL endpoint URL.
            allow_mutations: Whether mutation operations are forwarded.
            schema_path: Local introspection result; empty means live introspection.
            config_headers: Static headers as a JSON object string.
            introspection_query_path: File holding the introspection query.
            timeout: Timeout for the owned client.
        """
        self._auth_service = auth_service or AuthService()
        self._error_service = error_service or ErrorService()
        self._client = client
        self._owns_client = client is None
        self._endpoint = endpoint if endpoint is not None else settings.graphql_endpoint
        self._allow_mutations = allow_mutations if allow_mutations is not None else settings.graphql_allow_mutations
        self._schema_path = schema_path if schema_path is not None else settings.graphql_schema
        self._config_headers = config_headers if config_headers is not None else settings.graphql_headers
        self._introspection_query_path = introspection_query_path if introspection_query_path is not None else settings.graphql_introspection_query_path
        self._timeout = timeout if timeout is not None else settings.http_timeout
        self._headers: Dict[str, str] = {}
        self._introspection_query: Optional[str] = None

    @property
    def endpoint(self) -> str:
        """Return the GraphQL endpoint URL."""
        return self._endpoint

    @property
    def allow_mutations(self) -> bool:
        """Return whether mutations are forwarded."""
        return self._allow_mutations

    @property
    def headers(self) -> Dict[str, str]:
        """Return a copy of the headers sent with every request."""
        return dict(self._headers)

    @property
    def introspection_query(self) -> Optional[str]:
        """Return the loaded introspection query text."""
        return self._introspection_query

    @staticmethod
    def is_mutation(query: str) -> bool:
        """Classify a GraphQL document by its leading keyword.

        Args:
            query: GraphQL document.

        Returns:
            bool: True if the trimmed, lower-cased text starts with ``mutation``.
        """
        return query.strip().lower().startswith("mutation")

    async def initialize(self) -> None:
        """Load headers and the introspection query, then log in if credentials are configured.

        Header parse errors and login failures are logged and startup continues.

        Raises:
            FilesystemError: If the introspection query cannot be read.
        """
        self._headers = self._load_config_headers()
        self._introspection_query = self._load_introspection_query()

        if self._auth_service.is_auth_configured():
            try:
                await self._auth_service.login()
                logger.info("Successfully authenticated with the server")
                self._headers.update(await self._auth_service.get_auth_headers())
            except GraphQLProxyError as e:
                logger.error(f"Error authenticating with the server: {e}")

    async def introspect_schema(self) -> Any:
        """Return the GraphQL schema as parsed JSON.

        Reads the local schema file when one is configured, otherwise runs the
        introspection query against the endpoint.

        Returns:
            Any: The parsed schema, or an error payload dict.
        """
        try:
            if self._schema_path:
                schema_text = self._introspect_local_schema(self._schema_path)
            else:
                schema_text = await self._introspect_endpoint(self._endpoint)
            return _parse_json(schema_text, "schema")
        except Exception as e:
            logger.warning(f"Schema introspection failed: {e}")
            return self._error_service.create_error("Failed to introspect schema", e)

    async def query_graphql(self, query: str, variables: Optional[str] = None) -> Any:
        """Execute a GraphQL query or mutation against the endpoint.

        Args:
            query: GraphQL document.
            variables: Variables as a JSON object string; ``None`` or empty means no variables.

        Returns:
            Any: The endpoint's parsed JSON response, or an error payload dict.

        Examples:
            >>> import asyncio
            >>> service = GraphQLService(allow_mutations=False)
            >>> asyncio.run(service.query_graphql("mutation { doThing }", "{}"))
            {'isError': True, 'message': 'Mutations are not allowed unless you enable them in the configuration.'}
        """
        try:
            if self.is_mutation(query) and not self._allow_mutations:
                return self._error_service.create_error(MUTATIONS_DISABLED_MESSAGE)

            variables_map: Dict[str, Any] = {}
            if variables:
                variables_map = _parse_json(variables, "variables")
                if not isinstance(variables_map, dict):
                    raise SerializationError("Invalid variables: expected a JSON object")

            body = orjson.dumps({"query": query, "variables": variables_map})

            logger.debug(f"Executing GraphQL request against {self._endpoint}")
            response = await self._get_client().post(self._endpoint, content=body, headers=self._build_headers())
            if not 200 <= response.status_code < 300:
                raise RemoteError(response.status_code)

            return _parse_json(response.content, "response")
        except Exception as e:
            logger.warning(f"GraphQL query failed: {e}")
            return self._error_service.create_error("Failed to execute GraphQL query", e)

    async def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Return the HTTP client, creating it on first use.

        Returns:
            httpx.AsyncClient: The client used for GraphQL calls.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    def _build_headers(self) -> Dict[str, str]:
        """Build HTTP headers for a GraphQL request.

        Returns:
            Dict of HTTP headers.

        Examples:
            >>> GraphQLService()._build_headers()
            {'Content-Type': 'application/json'}
        """
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        headers.update(self._headers)
        return headers

    def _load_config_headers(self) -> Dict[str, str]:
        """Parse the static headers configuration.

        Entries whose value is not a string or a number are logged and dropped.

        Returns:
            Dict[str, str]: The headers, or ``{}`` if the value is not a JSON object.

        Examples:
            >>> GraphQLService(config_headers='{"X-Tenant": "acme", "X-Retries": 3}')._load_config_headers()
            {'X-Tenant': 'acme', 'X-Retries': '3'}
            >>> GraphQLService(config_headers='{"X-Tenant": null, "X-Meta": {"a": 1}}')._load_config_headers()
            {}
            >>> GraphQLService(config_headers="not json")._load_config_headers()
            {}
        """
        try:
            parsed = orjson.loads(self._config_headers or "{}")
        except orjson.JSONDecodeError as e:
            logger.error(f"Error reading config headers: {e}")
            return {}
        if not isinstance(parsed, dict):
            logger.error("Error reading config headers: expected a JSON object")
            return {}
        headers: Dict[str, str] = {}
        for name, value in parsed.items():
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                logger.error(f"Error reading config headers: value of {name} must be a string or a number")
                continue
            headers[name] = str(value)
        return headers

    def _load_introspection_query(self) -> str:
        """Read the introspection query text.

        Returns:
            str: The query document.

        Raises:
            FilesystemError: If the file does not exist or cannot be read.
        """
        path = Path(self._introspection_query_path)
        if not path.is_file():
            raise FilesystemError(f"Introspection query file not found at {path}")
        try:
            query = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(f"Introspection query file could not be read at {path}: {e}") from e
        logger.info("Successfully loaded introspection query")
        return query

    async def _introspect_endpoint(self, endpoint_url: str) -> str:
        """Run the introspection query against an endpoint.

        Args:
            endpoint_url: GraphQL endpoint URL.

        Returns:
            str: The raw response body.

        Raises:
            RemoteError: If the endpoint answers with a non-2xx status.
        """
        body = orjson.dumps({"query": self._introspection_query})
        logger.info(f"Introspecting GraphQL schema at {endpoint_url}")
        response = await self._get_client().post(endpoint_url, content=body, headers=self._build_headers())
        if not 200 <= response.status_code < 300:
            raise RemoteError(response.status_code)
        return response.text

    def _introspect_local_schema(self, path: str) -> str:
        """Read a local introspection result. The file is re-read on every call.

        Args:
            path: File path.

        Returns:
            str: The file contents decoded as UTF-8.

        Raises:
            FilesystemError: If the file does not exist or cannot be read.
            SerializationError: If the file is not valid UTF-8.
        """
        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            raise FilesystemError(f"Cannot read schema file {path}: {e}") from e
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SerializationError(f"Schema file {path} is not valid UTF-8: {e}") from e


def _parse_json(data: str | bytes, what: str) -> Any:
    """Parse JSON text.

    Args:
        data: JSON text or bytes.
        what: Label used in the error message.

    Returns:
        Any: The parsed value.

    Raises:
        SerializationError: If the text is not valid JSON.

    Examples:
        >>> _parse_json('{"data": {"__schema": {}}}', "schema")
        {'data': {'__schema': {}}}
        >>> _parse_json("{oops", "variables")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        mcpgraphql.exceptions.SerializationError: Invalid JSON in variables: ...
    """
    try:
        return orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON in {what}: {e}") from e
