# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/services/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Services Package.
Exposes the proxy services:
- Login and bearer token caching
- Error payload construction
- GraphQL introspection and query forwarding
- Logging setup
"""
