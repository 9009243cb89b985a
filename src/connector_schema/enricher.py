"""Default date/time pattern enrichment for fetched schemas.

Drivers rarely report a display pattern for temporal columns, while the
record mappers downstream need one to build value converters. Enrichment
fills the gap: a temporal field without a pattern receives the configured
default for its logical type, and a pattern that came from the catalog is
always kept as is.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Mapping

from .config import DEFAULT_DATE_PATTERN
from .errors import ConfigError, InvalidSchema
from .logging_utils import log_extra
from .models import FieldSchema, LogicalType, TableSchema
from .typemap import is_compatible

_log = logging.getLogger(__name__)


def _default_for(
    logical_type: LogicalType,
    default_pattern: str,
    patterns: Mapping[LogicalType, str] | None,
) -> str:
    if patterns:
        configured = patterns.get(logical_type)
        if configured:
            return configured
    return default_pattern


def enrich_field(
    item: FieldSchema,
    default_pattern: str,
    patterns: Mapping[LogicalType, str] | None = None,
) -> FieldSchema:
    if not item.logical_type.is_temporal:
        return item
    if not is_compatible(item.logical_type, item.physical_type):
        raise InvalidSchema(
            f"Field {item.name!r} is {item.logical_type.value} "
            f"but represented as {item.physical_type.value}"
        )
    if item.pattern:
        return item
    pattern = _default_for(item.logical_type, default_pattern, patterns)
    _log.debug(
        "Applied default pattern",
        extra=log_extra(field=item.name, logical_type=item.logical_type.value, pattern=pattern),
    )
    return dataclasses.replace(item, pattern=pattern)


def enrich(
    raw: TableSchema,
    default_pattern: str,
    patterns: Mapping[LogicalType, str] | None = None,
) -> TableSchema:
    """Return a copy of ``raw`` where every temporal field carries a pattern.

    Args:
        raw: Schema as produced by the fetcher.
        default_pattern: Pattern used for temporal fields with no pattern and
            no entry in ``patterns``.
        patterns: Optional per-logical-type defaults.

    Raises:
        ConfigError: If ``default_pattern`` is empty.
        InvalidSchema: If a temporal field has an incompatible representation.
    """
    if not default_pattern:
        raise ConfigError("Default pattern must be a non-empty string")
    return TableSchema(
        name=raw.name,
        fields=[enrich_field(item, default_pattern, patterns) for item in raw],
    )


class SchemaEnricher:
    def __init__(
        self,
        patterns: Mapping[LogicalType, str] | None = None,
        default_pattern: str = DEFAULT_DATE_PATTERN,
    ) -> None:
        if not default_pattern:
            raise ConfigError("Default pattern must be a non-empty string")
        self._patterns = dict(patterns or {})
        self._default_pattern = default_pattern

    @property
    def default_pattern(self) -> str:
        return self._default_pattern

    def pattern_for(self, logical_type: LogicalType) -> str:
        return _default_for(logical_type, self._default_pattern, self._patterns)

    def enrich(self, raw: TableSchema) -> TableSchema:
        return enrich(raw, self._default_pattern, self._patterns)
