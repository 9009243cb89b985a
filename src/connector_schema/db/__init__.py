"""Warehouse-backed catalog access."""

from .catalog import SqlCatalog
from .client import SchemaClient

__all__ = ["SchemaClient", "SqlCatalog"]
