# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Proxy configuration.

Values come from environment variables (case-insensitive) and an optional
``.env`` file in the working directory:

- AUTH_LOGIN_ENDPOINT / AUTH_USERNAME / AUTH_PASSWORD: login exchange; login
  is skipped unless all three are set
- GRAPHQL_ENDPOINT: remote GraphQL endpoint
- GRAPHQL_ALLOW_MUTATIONS: let ``queryGraphQL`` forward mutations
- GRAPHQL_SCHEMA: local introspection result used instead of a live call
- GRAPHQL_HEADERS: JSON object of static headers added to every request
- GRAPHQL_INTROSPECTION_QUERY_PATH: file holding the introspection query
- GRAPHQL_DEBUG: include traceback excerpts in error payloads
- LOG_LEVEL / LOG_FORMAT / LOG_TO_FILE / LOG_FILE / LOG_FOLDER: logging

Examples:
    >>> from mcpgraphql.config import Settings
    >>> s = Settings(_env_file=None, auth_login_endpoint="https://auth.example.com/login", auth_username="bob", auth_password="pw")
    >>> s.credentials.is_complete()
    True
    >>> s.credentials.password
    'pw'
    >>> Settings(_env_file=None, graphql_allow_mutations="true").graphql_allow_mutations
    True
"""

# Standard
from pathlib import Path
from typing import Literal, Optional

# Third-Party
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# First-Party
from mcpgraphql.models import Credentials, LogLevel

DEFAULT_INTROSPECTION_QUERY_PATH = str(Path(__file__).resolve().parent / "resources" / "introspection-query.graphql")


class Settings(BaseSettings):
    """Proxy settings loaded from the environment."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    # Login exchange
    auth_login_endpoint: str = Field(default="", description="URL the username/password pair is posted to")
    auth_username: str = Field(default="", description="Login username")
    auth_password: SecretStr = Field(default=SecretStr(""), description="Login password")

    # GraphQL endpoint
    graphql_endpoint: str = Field(default="http://localhost:8080/api/api/graphql", description="Remote GraphQL endpoint")
    graphql_allow_mutations: bool = Field(default=False, description="Forward mutation operations")
    graphql_schema: str = Field(default="", description="Path to a local introspection result")
    graphql_headers: str = Field(default="{}", description="Static request headers as a JSON object")
    graphql_introspection_query_path: str = Field(default=DEFAULT_INTROSPECTION_QUERY_PATH, description="File holding the introspection query")
    graphql_debug: bool = Field(default=False, description="Include traceback excerpts in error payloads")

    http_timeout: float = Field(default=30.0, description="Timeout in seconds for outbound HTTP calls")

    # Logging
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: Literal["text", "json"] = Field(default="text")
    log_to_file: bool = Field(default=False)
    log_file: Optional[str] = Field(default=None)
    log_folder: Optional[str] = Field(default=None)

    @property
    def credentials(self) -> Credentials:
        """Login credentials assembled from the ``auth_*`` fields.

        Returns:
            Credentials: The endpoint/username/password triple.
        """
        return Credentials(
            endpoint=self.auth_login_endpoint,
            username=self.auth_username,
            password=self.auth_password.get_secret_value(),
        )


settings = Settings()
