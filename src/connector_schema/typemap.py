"""Mapping from catalog SQL types to connector logical and physical types."""

from __future__ import annotations

from .models import ColumnDescriptor, FieldSchema, LogicalType, PhysicalType, SqlType

_SQL_TYPE_MAP: dict[SqlType, tuple[LogicalType, PhysicalType]] = {
    SqlType.BOOLEAN: (LogicalType.PLAIN, PhysicalType.BOOLEAN),
    SqlType.TINYINT: (LogicalType.PLAIN, PhysicalType.INT),
    SqlType.SMALLINT: (LogicalType.PLAIN, PhysicalType.INT),
    SqlType.INTEGER: (LogicalType.PLAIN, PhysicalType.INT),
    SqlType.BIGINT: (LogicalType.PLAIN, PhysicalType.LONG),
    SqlType.FLOAT: (LogicalType.PLAIN, PhysicalType.FLOAT),
    SqlType.DOUBLE: (LogicalType.PLAIN, PhysicalType.DOUBLE),
    SqlType.DECIMAL: (LogicalType.PLAIN, PhysicalType.DECIMAL),
    SqlType.CHAR: (LogicalType.PLAIN, PhysicalType.STRING),
    SqlType.VARCHAR: (LogicalType.PLAIN, PhysicalType.STRING),
    SqlType.BINARY: (LogicalType.PLAIN, PhysicalType.BYTES),
    # Dates are days since epoch, times millis of day, timestamps millis since epoch.
    SqlType.DATE: (LogicalType.LOGICAL_DATE, PhysicalType.INT),
    SqlType.TIME: (LogicalType.LOGICAL_TIME, PhysicalType.INT),
    SqlType.TIMESTAMP: (LogicalType.LOGICAL_TIMESTAMP, PhysicalType.LONG),
    SqlType.TIMESTAMP_WITH_TIMEZONE: (LogicalType.LOGICAL_TIMESTAMP, PhysicalType.LONG),
    SqlType.ARRAY: (LogicalType.PLAIN, PhysicalType.ARRAY),
    SqlType.MAP: (LogicalType.PLAIN, PhysicalType.MAP),
    SqlType.STRUCT: (LogicalType.PLAIN, PhysicalType.RECORD),
    SqlType.OTHER: (LogicalType.PLAIN, PhysicalType.STRING),
}

COMPATIBLE_REPRESENTATIONS: dict[LogicalType, frozenset[PhysicalType]] = {
    LogicalType.LOGICAL_DATE: frozenset({PhysicalType.INT}),
    LogicalType.LOGICAL_TIME: frozenset({PhysicalType.INT, PhysicalType.LONG}),
    LogicalType.LOGICAL_TIMESTAMP: frozenset({PhysicalType.LONG}),
}


def map_sql_type(sql_type: SqlType) -> tuple[LogicalType, PhysicalType]:
    return _SQL_TYPE_MAP[sql_type]


def is_compatible(logical_type: LogicalType, physical_type: PhysicalType) -> bool:
    allowed = COMPATIBLE_REPRESENTATIONS.get(logical_type)
    return allowed is None or physical_type in allowed


def to_field_schema(column: ColumnDescriptor) -> FieldSchema:
    logical_type, physical_type = map_sql_type(column.sql_type)
    return FieldSchema(
        name=column.name,
        logical_type=logical_type,
        physical_type=physical_type,
        nullable=column.nullable,
        is_primary_key=column.is_primary_key,
        pattern=column.pattern or None,
        description=column.description,
    )
