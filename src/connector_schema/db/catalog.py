from __future__ import annotations

import logging
from typing import Any

from databricks.sql.exc import Error as DatabricksError

from ..annotations import AnnotationLoader, apply_annotations
from ..errors import QueryError
from ..logging_utils import log_extra, table_ref
from ..models import ColumnDescriptor, ConnectionState, SqlType

_COLUMNS_SQL = (
    "SELECT column_name, data_type, is_nullable, comment, ordinal_position "
    "FROM system.information_schema.columns "
    "WHERE table_catalog = ? AND table_schema = ? AND table_name = ? "
    "ORDER BY ordinal_position"
)

_PRIMARY_KEYS_SQL = (
    "SELECT kcu.column_name "
    "FROM system.information_schema.table_constraints tc "
    "JOIN system.information_schema.key_column_usage kcu "
    "ON tc.constraint_catalog = kcu.constraint_catalog "
    "AND tc.constraint_schema = kcu.constraint_schema "
    "AND tc.constraint_name = kcu.constraint_name "
    "AND tc.table_catalog = kcu.table_catalog "
    "AND tc.table_schema = kcu.table_schema "
    "AND tc.table_name = kcu.table_name "
    "WHERE tc.table_catalog = ? AND tc.table_schema = ? AND tc.table_name = ? "
    "AND tc.constraint_type = 'PRIMARY KEY' "
    "ORDER BY kcu.ordinal_position"
)


def _is_nullable(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "YES").strip().upper() not in {"NO", "FALSE", "N"}


class SqlCatalog:
    """Catalog handle over a databricks-sql-connector connection.

    The handle borrows the connection; opening and closing it is the
    caller's job.
    """

    def __init__(
        self,
        connection: Any | None,
        catalog: str,
        annotations: AnnotationLoader | None = None,
    ) -> None:
        self._connection = connection
        self._catalog = catalog
        self._annotations = annotations
        self._log = logging.getLogger(__name__)

    def connection_state(self) -> ConnectionState:
        if self._connection is None:
            return ConnectionState.ABSENT
        if not self._connection.open:
            return ConnectionState.CLOSED
        return ConnectionState.OPEN

    def query_columns(self, schema: str, table: str) -> list[ColumnDescriptor]:
        rows = self._execute(_COLUMNS_SQL, schema, table)
        columns = [
            ColumnDescriptor(
                name=row["column_name"],
                sql_type=SqlType.from_type_name(row.get("data_type")),
                nullable=_is_nullable(row.get("is_nullable")),
                type_name=row.get("data_type"),
                ordinal_position=row.get("ordinal_position"),
                description=row.get("comment") or None,
            )
            for row in rows
        ]
        if self._annotations is not None:
            columns = apply_annotations(
                columns,
                self._annotations.get_table_annotations(self._catalog, schema, table),
            )
        return columns

    def query_primary_keys(self, schema: str, table: str) -> set[str]:
        rows = self._execute(_PRIMARY_KEYS_SQL, schema, table)
        return {row["column_name"] for row in rows}

    def _execute(self, sql: str, schema: str, table: str) -> list[dict[str, Any]]:
        try:
            with self._connection.cursor() as cursor:
                cursor.execute(sql, (self._catalog, schema, table))
                rows_raw = cursor.fetchall()
                description = cursor.description or []
        except DatabricksError as exc:
            self._log.warning(
                "Catalog metadata query failed",
                extra=log_extra(
                    table=table_ref(schema, table, catalog=self._catalog),
                    error_message=str(exc),
                ),
            )
            raise QueryError(f"Metadata query failed: {exc}") from exc

        columns = [col[0] for col in description]
        return [dict(zip(columns, row)) for row in rows_raw]
