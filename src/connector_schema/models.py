"""Schema data model shared by the fetcher, the enricher and the tool layer.

Column descriptors describe what the catalog reported for one column; field
schemas are the connector-facing view of the same column after type mapping.
All records are immutable and live only for the fetch call that built them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from .errors import InvalidSchema


class ConnectionState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    ABSENT = "absent"


class SqlType(str, Enum):
    BOOLEAN = "BOOLEAN"
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DECIMAL = "DECIMAL"
    CHAR = "CHAR"
    VARCHAR = "VARCHAR"
    BINARY = "BINARY"
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    TIMESTAMP_WITH_TIMEZONE = "TIMESTAMP_WITH_TIMEZONE"
    ARRAY = "ARRAY"
    MAP = "MAP"
    STRUCT = "STRUCT"
    OTHER = "OTHER"

    @classmethod
    def from_type_name(cls, type_name: str | None) -> SqlType:
        """Normalize a driver-reported type name such as ``DECIMAL(10,2)`` or ``TIMESTAMP_NTZ``."""
        if not type_name:
            return cls.OTHER
        normalized = type_name.strip().upper()
        if normalized.startswith("TIMESTAMP") and "TIME ZONE" in normalized:
            return cls.TIMESTAMP_WITH_TIMEZONE
        base = _TYPE_SUFFIX_RE.split(normalized, maxsplit=1)[0]
        if base in _TYPE_ALIASES:
            return _TYPE_ALIASES[base]
        try:
            return cls(base)
        except ValueError:
            return cls.OTHER


_TYPE_SUFFIX_RE = re.compile(r"[\s(<]")

_TYPE_ALIASES = {
    "BOOL": SqlType.BOOLEAN,
    "BYTE": SqlType.TINYINT,
    "SHORT": SqlType.SMALLINT,
    "INT": SqlType.INTEGER,
    "LONG": SqlType.BIGINT,
    "REAL": SqlType.FLOAT,
    "FLOAT4": SqlType.FLOAT,
    "FLOAT8": SqlType.DOUBLE,
    "NUMBER": SqlType.DECIMAL,
    "NUMERIC": SqlType.DECIMAL,
    "DEC": SqlType.DECIMAL,
    "STRING": SqlType.VARCHAR,
    "TEXT": SqlType.VARCHAR,
    "NVARCHAR": SqlType.VARCHAR,
    "CHARACTER": SqlType.CHAR,
    "VARBINARY": SqlType.BINARY,
    "BYTES": SqlType.BINARY,
    "DATETIME": SqlType.TIMESTAMP,
    "TIMESTAMP_NTZ": SqlType.TIMESTAMP,
    "TIMESTAMP_LTZ": SqlType.TIMESTAMP_WITH_TIMEZONE,
    "TIMESTAMP_TZ": SqlType.TIMESTAMP_WITH_TIMEZONE,
    "TIMESTAMPTZ": SqlType.TIMESTAMP_WITH_TIMEZONE,
    "OBJECT": SqlType.STRUCT,
    "VARIANT": SqlType.OTHER,
}


class LogicalType(str, Enum):
    PLAIN = "plain"
    LOGICAL_DATE = "date"
    LOGICAL_TIME = "time"
    LOGICAL_TIMESTAMP = "timestamp"

    @property
    def is_temporal(self) -> bool:
        return self is not LogicalType.PLAIN


class PhysicalType(str, Enum):
    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    STRING = "string"
    BYTES = "bytes"
    ARRAY = "array"
    MAP = "map"
    RECORD = "record"


@dataclass(frozen=True)
class ColumnDescriptor:
    name: str
    sql_type: SqlType
    nullable: bool = True
    is_primary_key: bool = False
    type_name: str | None = None
    ordinal_position: int | None = None
    pattern: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class FieldSchema:
    name: str
    logical_type: LogicalType
    physical_type: PhysicalType
    nullable: bool = True
    is_primary_key: bool = False
    pattern: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "logical_type": self.logical_type.value,
            "physical_type": self.physical_type.value,
            "nullable": self.nullable,
            "primary_key": self.is_primary_key,
            "pattern": self.pattern,
            "description": self.description,
        }


@dataclass(frozen=True)
class TableSchema:
    name: str
    fields: tuple[FieldSchema, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable but store a tuple so the schema stays hashable.
        object.__setattr__(self, "fields", tuple(self.fields))
        seen: set[str] = set()
        for item in self.fields:
            if item.name in seen:
                raise InvalidSchema(f"Duplicate field {item.name!r} in table {self.name}")
            seen.add(item.name)

    def __iter__(self) -> Iterator[FieldSchema]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def field(self, name: str) -> FieldSchema:
        for item in self.fields:
            if item.name == name:
                return item
        raise KeyError(name)

    @property
    def field_names(self) -> list[str]:
        return [item.name for item in self.fields]

    @property
    def primary_keys(self) -> list[str]:
        return [item.name for item in self.fields if item.is_primary_key]

    def to_dict(self) -> dict[str, Any]:
        return {
            "table": self.name,
            "fields": [item.to_dict() for item in self.fields],
            "primary_keys": self.primary_keys,
        }
