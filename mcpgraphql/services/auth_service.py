# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/services/auth_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Login Service.

Exchanges the configured username/password for a bearer token and caches it
for the life of the process. There is no expiry tracking and no refresh: the
last successful login wins. Token acquisition is serialized by a lock, so
concurrent callers that find the cache empty trigger a single login.

Examples:
    >>> from mcpgraphql.models import Credentials
    >>> service = AuthService(Credentials("https://auth.example.com/login", "alice", "pw"))
    >>> service.is_auth_configured()
    True
    >>> service.access_token is None
    True
    >>> AuthService(Credentials("", "alice", "pw")).is_auth_configured()
    False
"""

# Standard
import asyncio
from typing import Any, Dict, Optional

# Third-Party
import httpx
import orjson

# First-Party
from mcpgraphql.config import settings
from mcpgraphql.exceptions import AuthenticationError, ConfigurationError, GraphQLProxyError
from mcpgraphql.models import Credentials
from mcpgraphql.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)

LOGIN_HEADERS: Dict[str, str] = {"Content-Type": "application/json", "Accept": "application/json"}


class AuthService:
    """Performs the login exchange and hands out bearer headers."""

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the login service.

        Args:
            credentials: Login endpoint and username/password. Defaults to ``settings.credentials``.
            client: HTTP client to use. When omitted one is created on first use and closed by :meth:`close`.
            timeout: Timeout for the owned client, defaults to ``settings.http_timeout``.
        """
        self._credentials = credentials if credentials is not None else settings.credentials
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout if timeout is not None else settings.http_timeout
        self._access_token: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def access_token(self) -> Optional[str]:
        """Return the cached bearer token, if any."""
        return self._access_token

    def is_auth_configured(self) -> bool:
        """Check that endpoint, username and password are all set.

        Returns:
            bool: True when a login can be attempted.
        """
        return self._credentials.is_complete()

    async def login(self) -> Dict[str, Any]:
        """Log in and cache the returned ``access_token``.

        Returns:
            Dict[str, Any]: The full parsed login response.

        Raises:
            ConfigurationError: If the credentials are incomplete. No request is sent.
            AuthenticationError: On a non-2xx status, a transport failure or an unparsable body.
        """
        async with self._lock:
            return await self._login()

    async def get_auth_headers(self) -> Dict[str, str]:
        """Return the ``Authorization`` header, logging in first if no token is cached.

        A failed login is logged and yields an empty mapping; this method never raises.

        Returns:
            Dict[str, str]: ``{"Authorization": "Bearer <token>"}`` or ``{}``.

        Examples:
            >>> import asyncio
            >>> from mcpgraphql.models import Credentials
            >>> asyncio.run(AuthService(Credentials(None, None, None)).get_auth_headers())
            {}
        """
        if not self._access_token:
            async with self._lock:
                # Another caller may have logged in while we waited for the lock
                if not self._access_token:
                    try:
                        await self._login()
                    except GraphQLProxyError as e:
                        logger.warning(f"Could not obtain an access token: {e}")
                        return {}

        if not self._access_token:
            return {}
        return {"Authorization": f"Bearer {self._access_token}"}

    async def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Return the HTTP client, creating it on first use.

        Returns:
            httpx.AsyncClient: The client used for the login call.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def _login(self) -> Dict[str, Any]:
        """Send the login request. Callers must hold ``self._lock``.

        Returns:
            Dict[str, Any]: The full parsed login response.

        Raises:
            ConfigurationError: If the credentials are incomplete.
            AuthenticationError: On a non-2xx status, a transport failure or an unparsable body.
        """
        if not self.is_auth_configured():
            raise ConfigurationError("Login credentials not configured")

        body = orjson.dumps({"username": self._credentials.username, "password": self._credentials.password})
        try:
            response = await self._get_client().post(self._credentials.endpoint, content=body, headers=LOGIN_HEADERS)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AuthenticationError(f"Authentication failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise AuthenticationError(f"Login failed: {response.status_code}", status_code=response.status_code)

        try:
            auth_response = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise AuthenticationError(f"Authentication failed: invalid login response: {e}", status_code=response.status_code) from e
        if not isinstance(auth_response, dict):
            raise AuthenticationError("Authentication failed: login response is not a JSON object", status_code=response.status_code)

        token = auth_response.get("access_token")
        self._access_token = token if isinstance(token, str) else None
        if self._access_token is None:
            logger.warning("Login succeeded but the response carried no access_token")
        else:
            logger.info("Successfully authenticated with the login endpoint")
        return auth_response
