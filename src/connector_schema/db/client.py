from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from threading import Semaphore
from typing import Any, Iterator

import databricks.sql
from databricks.sql.exc import Error as DatabricksError

from ..annotations import AnnotationLoader
from ..auth import OAuthTokenProvider
from ..config import AppConfig
from ..enricher import SchemaEnricher
from ..errors import CatalogUnavailable
from ..fetcher import SchemaFetcher
from ..identifiers import require_name
from ..logging_utils import log_extra, table_ref
from ..models import LogicalType, TableSchema
from .catalog import SqlCatalog


class SchemaClient:
    def __init__(
        self,
        config: AppConfig,
        token_provider: OAuthTokenProvider,
        annotations: AnnotationLoader | None = None,
    ) -> None:
        self._config = config
        self._token_provider = token_provider
        self._annotations = annotations
        self._fetcher = SchemaFetcher()
        self._enricher = SchemaEnricher(
            patterns=config.patterns.by_logical_type(),
            default_pattern=config.patterns.date,
        )
        self._log = logging.getLogger(__name__)
        self._semaphore = Semaphore(config.limits.max_concurrent_fetches)

    def date_patterns(self) -> dict[str, str]:
        return {
            logical_type.value: self._enricher.pattern_for(logical_type)
            for logical_type in LogicalType
            if logical_type.is_temporal
        }

    def table_schema(
        self, schema: str, table: str, request_id: str | None = None
    ) -> TableSchema:
        """Fetch the schema of ``schema.table`` and apply default date/time patterns.

        Parameters:
        schema (str): Schema (namespace) holding the table
        table (str): Table name
        request_id (str | None): Request tracking ID

        Returns:
        TableSchema: Enriched schema in catalog column order

        Raises:
        CatalogUnavailable: If no connection to the warehouse can be opened
        TableNotFound: If the catalog reports no columns for the table
        QueryError: If a metadata query fails
        """
        safe_schema = require_name(schema, "schema")
        safe_table = require_name(table, "table")
        fetch_id = str(uuid.uuid4())

        with self._semaphore:
            with self._open_catalog(request_id) as catalog:
                raw = self._fetcher.fetch(catalog, safe_schema, safe_table)

        enriched = self._enricher.enrich(raw)
        self._log.info(
            "Table schema ready",
            extra=log_extra(
                request_id=request_id,
                fetch_id=fetch_id,
                table=table_ref(safe_schema, safe_table, catalog=self._config.connection.catalog),
            ),
        )
        return enriched

    @contextmanager
    def _open_catalog(self, request_id: str | None = None) -> Iterator[SqlCatalog]:
        connection = self._connect(request_id)
        try:
            yield SqlCatalog(
                connection,
                catalog=self._config.connection.catalog,
                annotations=self._annotations,
            )
        finally:
            connection.close()

    def _connect(self, request_id: str | None = None) -> Any:
        access_token = self._token_provider.get_token()
        try:
            return databricks.sql.connect(
                server_hostname=self._config.connection.host,
                http_path=self._config.connection.http_path,
                access_token=access_token,
            )
        except DatabricksError as exc:
            self._log.warning(
                "Warehouse connection failed",
                extra=log_extra(
                    request_id=request_id,
                    host=self._config.connection.host,
                    error_message=str(exc),
                ),
            )
            self._token_provider.invalidate()
            raise CatalogUnavailable(f"Could not connect to warehouse: {exc}") from exc
