import pytest

from connector_schema.enricher import SchemaEnricher, enrich
from connector_schema.errors import ConfigError, InvalidSchema
from connector_schema.models import FieldSchema, LogicalType, PhysicalType, TableSchema

EXPECTED_DATE_PATTERN = "yyyy-MM-dd"


def date_field(name: str = "logicalDate", pattern: str | None = None) -> FieldSchema:
    return FieldSchema(
        name=name,
        logical_type=LogicalType.LOGICAL_DATE,
        physical_type=PhysicalType.INT,
        pattern=pattern,
    )


def mixed_schema() -> TableSchema:
    return TableSchema(
        name="events",
        fields=[
            FieldSchema(
                name="id", logical_type=LogicalType.PLAIN, physical_type=PhysicalType.LONG,
                nullable=False, is_primary_key=True,
            ),
            date_field("event_date"),
            FieldSchema(
                name="event_time", logical_type=LogicalType.LOGICAL_TIME, physical_type=PhysicalType.INT,
            ),
            FieldSchema(
                name="created_at",
                logical_type=LogicalType.LOGICAL_TIMESTAMP,
                physical_type=PhysicalType.LONG,
                pattern="yyyy-MM-dd'T'HH:mm:ss",
            ),
            FieldSchema(
                name="label", logical_type=LogicalType.PLAIN, physical_type=PhysicalType.STRING,
                pattern="",
            ),
        ],
    )


def test_default_date_pattern_applied() -> None:
    raw = TableSchema(name="SchemaToEdit", fields=[date_field()])

    result = enrich(raw, EXPECTED_DATE_PATTERN)

    assert result.field("logicalDate").pattern == EXPECTED_DATE_PATTERN


def test_explicit_date_pattern_preserved() -> None:
    raw = TableSchema(name="SchemaToEdit", fields=[date_field(pattern="yyyy/MM/dd")])

    result = enrich(raw, EXPECTED_DATE_PATTERN)

    assert result.field("logicalDate").pattern == "yyyy/MM/dd"
    assert result.field("logicalDate").pattern != EXPECTED_DATE_PATTERN


def test_empty_pattern_replaced() -> None:
    raw = TableSchema(name="t", fields=[date_field(pattern="")])

    assert enrich(raw, EXPECTED_DATE_PATTERN).field("logicalDate").pattern == EXPECTED_DATE_PATTERN


def test_every_temporal_field_has_pattern() -> None:
    result = enrich(mixed_schema(), EXPECTED_DATE_PATTERN)

    for field in result:
        if field.logical_type.is_temporal:
            assert field.pattern


def test_single_default_applies_to_all_temporal_types() -> None:
    result = enrich(mixed_schema(), EXPECTED_DATE_PATTERN)

    assert result.field("event_date").pattern == EXPECTED_DATE_PATTERN
    assert result.field("event_time").pattern == EXPECTED_DATE_PATTERN
    assert result.field("created_at").pattern == "yyyy-MM-dd'T'HH:mm:ss"


def test_per_type_patterns() -> None:
    patterns = {
        LogicalType.LOGICAL_DATE: "dd.MM.yyyy",
        LogicalType.LOGICAL_TIME: "HH:mm",
    }

    result = enrich(mixed_schema(), EXPECTED_DATE_PATTERN, patterns)

    assert result.field("event_date").pattern == "dd.MM.yyyy"
    assert result.field("event_time").pattern == "HH:mm"
    assert result.field("created_at").pattern == "yyyy-MM-dd'T'HH:mm:ss"


def test_non_temporal_fields_unchanged() -> None:
    raw = mixed_schema()

    result = enrich(raw, EXPECTED_DATE_PATTERN)

    assert result.field("id") is raw.field("id")
    assert result.field("label") is raw.field("label")
    assert result.field("label").pattern == ""


def test_idempotent() -> None:
    once = enrich(mixed_schema(), EXPECTED_DATE_PATTERN)
    twice = enrich(once, EXPECTED_DATE_PATTERN)

    assert twice == once


def test_input_not_mutated() -> None:
    raw = mixed_schema()

    enrich(raw, EXPECTED_DATE_PATTERN)

    assert raw.field("event_date").pattern is None
    assert raw.field_names == ["id", "event_date", "event_time", "created_at", "label"]


def test_empty_default_pattern_rejected() -> None:
    with pytest.raises(ConfigError):
        enrich(mixed_schema(), "")
    with pytest.raises(ConfigError):
        SchemaEnricher(default_pattern="")


def test_incompatible_representation() -> None:
    raw = TableSchema(
        name="t",
        fields=[
            FieldSchema(
                name="d", logical_type=LogicalType.LOGICAL_DATE, physical_type=PhysicalType.STRING,
            )
        ],
    )

    with pytest.raises(InvalidSchema, match="'d'"):
        enrich(raw, EXPECTED_DATE_PATTERN)


class TestSchemaEnricher:
    def test_pattern_for(self) -> None:
        enricher = SchemaEnricher({LogicalType.LOGICAL_TIMESTAMP: "yyyy-MM-dd HH:mm:ss"})

        assert enricher.default_pattern == EXPECTED_DATE_PATTERN
        assert enricher.pattern_for(LogicalType.LOGICAL_DATE) == EXPECTED_DATE_PATTERN
        assert enricher.pattern_for(LogicalType.LOGICAL_TIMESTAMP) == "yyyy-MM-dd HH:mm:ss"

    def test_enrich_uses_configuration(self) -> None:
        enricher = SchemaEnricher({LogicalType.LOGICAL_TIME: "HH:mm:ss"}, default_pattern="yyyyMMdd")

        result = enricher.enrich(mixed_schema())

        assert result.field("event_date").pattern == "yyyyMMdd"
        assert result.field("event_time").pattern == "HH:mm:ss"
