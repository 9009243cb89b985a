from __future__ import annotations

import logging
from typing import Any

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=_FORMAT,
    )


def log_extra(**kwargs: Any) -> dict[str, Any]:
    """Build a ``extra=`` mapping for structured log records, skipping unset values."""
    return {k: v for k, v in kwargs.items() if v is not None}


def table_ref(schema: str, table: str, catalog: str | None = None) -> str:
    parts = [catalog, schema, table] if catalog else [schema, table]
    return ".".join(parts)
