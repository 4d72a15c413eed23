# -*- coding: utf-8 -*-
"""Location: ./mcpgraphql/utils/base_models.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Proxy Contributors

Base model utilities.

Payloads handed back to MCP clients use camelCase keys (``isError``,
``exceptionType``...) while the Python side stays snake_case. The shared base
class below wires the alias generator so models can be built with either
spelling and dumped with the wire spelling.
"""

# Standard
from typing import Any, Dict

# Third-Party
from pydantic import BaseModel, ConfigDict


def to_camel_case(s: str) -> str:
    """Convert a string from snake_case to camelCase.

    Args:
        s (str): The string to be converted, which is assumed to be in snake_case.

    Returns:
        str: The string converted to camelCase.

    Examples:
        >>> to_camel_case("is_error")
        'isError'
        >>> to_camel_case("stack_trace_excerpt")
        'stackTraceExcerpt'
        >>> to_camel_case("message")
        'message'
        >>> to_camel_case("")
        ''
    """
    return "".join(word.capitalize() if i else word for i, word in enumerate(s.split("_")))


class BaseModelWithConfigDict(BaseModel):
    """Immutable base model emitting camelCase keys.

    Provides:
    - Automatic conversion from snake_case to camelCase for output
    - Populate by name for flexible field naming
    - Frozen instances, so a payload cannot change once built
    """

    model_config = ConfigDict(
        alias_generator=to_camel_case,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        frozen=True,
    )

    def to_dict(self, use_alias: bool = True, exclude_none: bool = True) -> Dict[str, Any]:
        """Convert the model instance into a dictionary representation.

        Args:
            use_alias (bool): Whether to emit the camelCase aliases (default is True).
            exclude_none (bool): Whether unset optional fields are dropped (default is True).

        Returns:
            Dict[str, Any]: A dictionary with nested models recursively converted.
        """
        return self.model_dump(by_alias=use_alias, exclude_none=exclude_none)
