# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors
"""

# Standard
from unittest.mock import AsyncMock, MagicMock

# Third-Party
import orjson
import pytest

# First-Party
from mcpgraphql.config import DEFAULT_INTROSPECTION_QUERY_PATH
from mcpgraphql.models import Credentials


@pytest.fixture
def make_response():
    """Build a fake ``httpx.Response`` with the given status and JSON (or raw) body."""

    def _make(status_code=200, json_body=None, raw=None):
        response = MagicMock()
        response.status_code = status_code
        content = raw if raw is not None else orjson.dumps(json_body if json_body is not None else {})
        response.content = content
        response.text = content.decode("utf-8")
        return response

    return _make


@pytest.fixture
def mock_client():
    """Async HTTP client double; configure ``post.return_value`` or ``post.side_effect``."""
    client = AsyncMock()
    client.post = AsyncMock()
    return client


@pytest.fixture
def credentials():
    """Fully configured login credentials."""
    return Credentials(endpoint="https://auth.example.com/login", username="alice", password="s3cret")


@pytest.fixture
def introspection_query_path():
    """Path of the packaged introspection query."""
    return DEFAULT_INTROSPECTION_QUERY_PATH
