"""Static column annotations loaded from CSV files.

Annotations carry per-column information the warehouse catalog does not
hold, most importantly an explicit display pattern for temporal columns.
Files live at ``<directory>/<catalog>/<schema>/<table>.csv`` with the
columns ``column_name``, ``pattern`` and ``description``.
"""

from __future__ import annotations

import csv
import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path

from .models import ColumnDescriptor


@dataclass(frozen=True)
class ColumnAnnotation:
    column_name: str
    pattern: str | None = None
    description: str | None = None


class AnnotationLoader:
    """Load and cache column annotations from CSV files."""

    def __init__(self, directory: str | Path | None = None, enabled: bool = True):
        """Initialize the annotation loader.

        Args:
            directory: Root directory of annotation files. If None, loading is disabled.
            enabled: Whether annotation loading is enabled.
        """
        self._enabled = enabled and directory is not None
        self._directory = Path(directory) if directory else None
        self._cache: dict[tuple[str, str, str], dict[str, ColumnAnnotation]] = {}
        self._log = logging.getLogger(__name__)

        if self._enabled and self._directory and not self._directory.exists():
            self._log.warning(f"Annotation directory does not exist: {self._directory}")
            self._enabled = False

    def get_table_annotations(
        self, catalog: str, schema: str, table: str
    ) -> dict[str, ColumnAnnotation] | None:
        """Get annotations for a table keyed by lower-cased column name.

        Returns:
            Mapping of column annotations, or None if no file exists
        """
        if not self._enabled:
            return None

        cache_key = (catalog, schema, table)
        if cache_key in self._cache:
            return self._cache[cache_key]

        annotations = self._load(catalog, schema, table)
        if annotations:
            self._cache[cache_key] = annotations
        return annotations

    def _load(
        self, catalog: str, schema: str, table: str
    ) -> dict[str, ColumnAnnotation] | None:
        if not self._directory:
            return None

        csv_path = self._directory / catalog / schema / f"{table}.csv"
        if not csv_path.exists():
            self._log.debug(f"No annotations found for {catalog}.{schema}.{table}")
            return None

        try:
            with open(csv_path, "r", encoding="utf-8", newline="") as f:
                rows = list(csv.DictReader(f))
        except (OSError, csv.Error) as exc:
            self._log.error(f"Failed to read annotations from {csv_path}: {exc}", exc_info=True)
            return None

        annotations = {}
        for row in rows:
            name = (row.get("column_name") or "").strip()
            if not name:
                continue
            annotations[name.lower()] = ColumnAnnotation(
                column_name=name,
                pattern=(row.get("pattern") or "").strip() or None,
                description=(row.get("description") or "").strip() or None,
            )
        self._log.info(
            f"Loaded {len(annotations)} column annotations for {catalog}.{schema}.{table}"
        )
        return annotations

    def clear_cache(self) -> None:
        self._cache.clear()

    def is_enabled(self) -> bool:
        return self._enabled


def apply_annotations(
    columns: list[ColumnDescriptor],
    annotations: dict[str, ColumnAnnotation] | None,
) -> list[ColumnDescriptor]:
    """Merge annotations onto catalog columns.

    A pattern already reported by the driver wins over the annotation one;
    annotation descriptions only fill columns without a catalog comment.
    """
    if not annotations:
        return columns

    merged = []
    for col in columns:
        note = annotations.get(col.name.lower())
        if note is None:
            merged.append(col)
            continue
        merged.append(
            dataclasses.replace(
                col,
                pattern=col.pattern or note.pattern,
                description=col.description or note.description,
            )
        )
    return merged
