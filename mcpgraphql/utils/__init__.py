# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/utils/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Utility helpers shared by the services.
"""
