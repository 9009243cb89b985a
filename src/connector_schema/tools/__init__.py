"""MCP tool definitions."""

from .schema_tools import register_schema_tools

__all__ = ["register_schema_tools"]
