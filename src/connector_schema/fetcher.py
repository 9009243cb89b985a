"""Raw schema retrieval from a catalog handle.

The fetcher never owns the handle it is given: it checks that the handle's
connection is usable, runs the column and primary-key queries, and maps the
result into a :class:`TableSchema` in catalog column order.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Protocol

from .errors import CatalogUnavailable, TableNotFound
from .identifiers import require_name
from .logging_utils import log_extra, table_ref
from .models import ColumnDescriptor, ConnectionState, TableSchema
from .typemap import to_field_schema


class CatalogHandle(Protocol):
    def connection_state(self) -> ConnectionState:
        ...

    def query_columns(self, schema: str, table: str) -> list[ColumnDescriptor]:
        ...

    def query_primary_keys(self, schema: str, table: str) -> set[str]:
        ...


def ensure_connected(catalog: CatalogHandle) -> None:
    """Raise :class:`CatalogUnavailable` unless the handle reports an open connection."""
    state = catalog.connection_state()
    if state is ConnectionState.ABSENT:
        raise CatalogUnavailable("No catalog connection has been established")
    if state is not ConnectionState.OPEN:
        raise CatalogUnavailable(f"Catalog connection is {state.value}")


def merge_primary_keys(
    columns: list[ColumnDescriptor], primary_keys: set[str]
) -> list[ColumnDescriptor]:
    return [
        dataclasses.replace(col, is_primary_key=True) if col.name in primary_keys else col
        for col in columns
    ]


class SchemaFetcher:
    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)

    def fetch(self, catalog: CatalogHandle, schema_name: str, table_name: str) -> TableSchema:
        require_name(table_name, "table")
        ensure_connected(catalog)

        columns = catalog.query_columns(schema_name, table_name)
        if not columns:
            raise TableNotFound(f"Table {table_ref(schema_name, table_name)} not found")
        primary_keys = catalog.query_primary_keys(schema_name, table_name)

        unmatched = primary_keys - {col.name for col in columns}
        if unmatched:
            self._log.warning(
                "Primary key columns missing from column list",
                extra=log_extra(table=table_ref(schema_name, table_name), columns=sorted(unmatched)),
            )

        columns = merge_primary_keys(columns, primary_keys)
        schema = TableSchema(
            name=table_name, fields=[to_field_schema(col) for col in columns]
        )
        self._log.info(
            "Fetched table schema",
            extra=log_extra(
                table=table_ref(schema_name, table_name),
                field_count=len(schema),
                primary_keys=schema.primary_keys or None,
            ),
        )
        return schema
