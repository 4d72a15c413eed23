# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

MCP GraphQL Proxy.

An MCP server exposing two tools, ``introspectSchema`` and ``queryGraphQL``,
that forward to a remote GraphQL endpoint with an optional bearer token
obtained from a login endpoint.
"""

__version__ = "0.1.0"
SERVER_NAME = "mcp-graphql-proxy"
