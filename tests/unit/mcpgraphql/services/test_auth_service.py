# -*- coding: utf-8 -*-
"""Location: ./tests/unit/mcpgraphql/services/test_auth_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Tests for the login service.
"""

# Standard
import asyncio
from unittest.mock import AsyncMock, patch

# Third-Party
import httpx
import orjson
import pytest

# First-Party
from mcpgraphql.exceptions import AuthenticationError, ConfigurationError
from mcpgraphql.models import Credentials
from mcpgraphql.services.auth_service import AuthService, LOGIN_HEADERS


INCOMPLETE_CREDENTIALS = [
    Credentials("", "alice", "s3cret"),
    Credentials("https://auth.example.com/login", "", "s3cret"),
    Credentials("https://auth.example.com/login", "alice", ""),
    Credentials(None, None, None),
]


class TestIsAuthConfigured:
    """Credential completeness predicate."""

    def test_complete(self, credentials):
        assert AuthService(credentials).is_auth_configured() is True

    @pytest.mark.parametrize("creds", INCOMPLETE_CREDENTIALS)
    def test_incomplete(self, creds):
        assert AuthService(creds).is_auth_configured() is False


class TestLogin:
    """Login exchange."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("creds", INCOMPLETE_CREDENTIALS)
    async def test_incomplete_credentials_raise_without_network(self, creds, mock_client):
        service = AuthService(creds, client=mock_client)
        with pytest.raises(ConfigurationError, match="not configured"):
            await service.login()
        mock_client.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_caches_token_and_returns_body(self, credentials, mock_client, make_response):
        body = {"access_token": "abc123", "token_type": "bearer", "expires_in": 3600}
        mock_client.post.return_value = make_response(200, body)
        service = AuthService(credentials, client=mock_client)

        result = await service.login()

        assert result == body
        assert service.access_token == "abc123"

    @pytest.mark.asyncio
    async def test_request_shape(self, credentials, mock_client, make_response):
        mock_client.post.return_value = make_response(200, {"access_token": "abc123"})
        service = AuthService(credentials, client=mock_client)

        await service.login()

        mock_client.post.assert_called_once()
        call = mock_client.post.call_args
        assert call.args[0] == "https://auth.example.com/login"
        assert orjson.loads(call.kwargs["content"]) == {"username": "alice", "password": "s3cret"}
        assert call.kwargs["headers"] == LOGIN_HEADERS
        assert call.kwargs["headers"]["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_last_login_wins(self, credentials, mock_client, make_response):
        mock_client.post.side_effect = [make_response(200, {"access_token": "first"}), make_response(200, {"access_token": "second"})]
        service = AuthService(credentials, client=mock_client)

        await service.login()
        await service.login()

        assert service.access_token == "second"
        assert await service.get_auth_headers() == {"Authorization": "Bearer second"}

    @pytest.mark.asyncio
    async def test_non_2xx_raises_with_status(self, credentials, mock_client, make_response):
        mock_client.post.return_value = make_response(401, {"detail": "bad credentials"})
        service = AuthService(credentials, client=mock_client)

        with pytest.raises(AuthenticationError) as exc_info:
            await service.login()

        assert exc_info.value.status_code == 401
        assert "401" in str(exc_info.value)
        assert service.access_token is None

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self, credentials, mock_client):
        mock_client.post.side_effect = httpx.ConnectError("connection refused")
        service = AuthService(credentials, client=mock_client)

        with pytest.raises(AuthenticationError, match="connection refused") as exc_info:
            await service.login()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_unparsable_body_is_wrapped(self, credentials, mock_client, make_response):
        mock_client.post.return_value = make_response(200, raw=b"<html>oops</html>")
        service = AuthService(credentials, client=mock_client)

        with pytest.raises(AuthenticationError, match="invalid login response"):
            await service.login()

    @pytest.mark.asyncio
    async def test_non_object_body_is_rejected(self, credentials, mock_client, make_response):
        mock_client.post.return_value = make_response(200, ["abc123"])
        service = AuthService(credentials, client=mock_client)

        with pytest.raises(AuthenticationError, match="not a JSON object"):
            await service.login()


class TestGetAuthHeaders:
    """Bearer header retrieval with lazy login."""

    @pytest.mark.asyncio
    async def test_lazy_login_when_no_token(self, credentials, mock_client, make_response):
        mock_client.post.return_value = make_response(200, {"access_token": "lazy"})
        service = AuthService(credentials, client=mock_client)

        headers = await service.get_auth_headers()

        assert headers == {"Authorization": "Bearer lazy"}
        mock_client.post.assert_called_once()

    @pytest.mark.asyncio
    async def test_cached_token_reused(self, credentials, mock_client, make_response):
        mock_client.post.return_value = make_response(200, {"access_token": "cached"})
        service = AuthService(credentials, client=mock_client)
        await service.login()

        assert await service.get_auth_headers() == {"Authorization": "Bearer cached"}
        assert await service.get_auth_headers() == {"Authorization": "Bearer cached"}
        assert mock_client.post.call_count == 1

    @pytest.mark.asyncio
    async def test_failed_login_degrades_to_empty(self, credentials, mock_client, make_response):
        mock_client.post.return_value = make_response(500, {"error": "down"})
        service = AuthService(credentials, client=mock_client)

        assert await service.get_auth_headers() == {}

    @pytest.mark.asyncio
    async def test_malformed_endpoint_degrades_to_empty(self):
        """A trailing newline in the login URL is rejected by httpx before any request is sent."""
        service = AuthService(Credentials("https://auth.example.com/login\n", "alice", "s3cret"))
        try:
            assert await service.get_auth_headers() == {}
            with pytest.raises(AuthenticationError) as exc_info:
                await service.login()
        finally:
            await service.close()

        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)

    @pytest.mark.asyncio
    async def test_unconfigured_degrades_to_empty(self, mock_client):
        service = AuthService(Credentials("", "", ""), client=mock_client)

        assert await service.get_auth_headers() == {}
        mock_client.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_access_token_field_yields_no_header(self, credentials, mock_client, make_response):
        mock_client.post.return_value = make_response(200, {"token_type": "bearer"})
        service = AuthService(credentials, client=mock_client)

        assert await service.get_auth_headers() == {}

    @pytest.mark.asyncio
    async def test_concurrent_first_calls_login_once(self, credentials, mock_client, make_response):
        async def slow_post(*args, **kwargs):
            await asyncio.sleep(0.01)
            return make_response(200, {"access_token": "single"})

        mock_client.post.side_effect = slow_post
        service = AuthService(credentials, client=mock_client)

        results = await asyncio.gather(*(service.get_auth_headers() for _ in range(5)))

        assert all(r == {"Authorization": "Bearer single"} for r in results)
        assert mock_client.post.call_count == 1


class TestClientLifecycle:
    """HTTP client ownership."""

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self, credentials, mock_client):
        service = AuthService(credentials, client=mock_client)
        await service.close()
        mock_client.aclose.assert_not_called()

    @pytest.mark.asyncio
    async def test_owned_client_created_and_closed(self, credentials):
        created = AsyncMock()
        with patch("mcpgraphql.services.auth_service.httpx.AsyncClient", return_value=created) as factory:
            service = AuthService(credentials, timeout=5.0)
            client = service._get_client()
            await service.close()

        factory.assert_called_once_with(timeout=5.0)
        assert client is created
        created.aclose.assert_awaited_once()
