"""Catalog schema fetching and date/time pattern enrichment for data connectors."""

from .enricher import SchemaEnricher, enrich
from .errors import CatalogUnavailable, InvalidSchema, TableNotFound
from .fetcher import CatalogHandle, SchemaFetcher
from .models import (
    ColumnDescriptor,
    ConnectionState,
    FieldSchema,
    LogicalType,
    PhysicalType,
    SqlType,
    TableSchema,
)

__all__ = [
    "CatalogHandle",
    "CatalogUnavailable",
    "ColumnDescriptor",
    "ConnectionState",
    "FieldSchema",
    "InvalidSchema",
    "LogicalType",
    "PhysicalType",
    "SchemaEnricher",
    "SchemaFetcher",
    "SqlType",
    "TableNotFound",
    "TableSchema",
    "enrich",
]
