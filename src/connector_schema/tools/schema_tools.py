"""Schema tools for the MCP server.

These tools expose enriched table schemas to MCP clients. The client calls
block on the warehouse, so each tool runs them in a worker thread.
"""

from __future__ import annotations

import asyncio
import uuid
from typing import Any

from ..db import SchemaClient


def _request_id(value: str | None = None) -> str:
    return value or str(uuid.uuid4())


def register_schema_tools(mcp_server: Any, client: SchemaClient) -> None:
    """Register the schema MCP tools with the server.

    Args:
        mcp_server: The FastMCP server instance
        client: SchemaClient used to fetch and enrich schemas
    """

    @mcp_server.tool()
    async def table_schema(
        schema: str, table: str, request_id: str | None = None
    ) -> dict[str, Any]:
        """Get the columns of a table with logical types, primary keys and date/time patterns.

        Temporal columns always carry a pattern: the one annotated for the
        column if any, otherwise the configured default for its type.
        """
        rid = _request_id(request_id)
        result = await asyncio.to_thread(client.table_schema, schema, table, rid)
        return result.to_dict()

    @mcp_server.tool()
    async def date_patterns() -> dict[str, str]:
        """List the default patterns applied to date, time and timestamp columns."""
        return client.date_patterns()
