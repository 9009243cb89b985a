"""Tests for column annotation loading and merging."""

import csv
from pathlib import Path

import pytest

from connector_schema.annotations import AnnotationLoader, ColumnAnnotation, apply_annotations
from connector_schema.models import ColumnDescriptor, SqlType


@pytest.fixture
def annotation_dir(tmp_path: Path) -> Path:
    """Create a temporary annotation directory structure."""
    root = tmp_path / "annotations"
    table_dir = root / "main" / "sales"
    table_dir.mkdir(parents=True)

    with open(table_dir / "orders.csv", "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=["column_name", "pattern", "description"])
        writer.writeheader()
        writer.writerow({"column_name": "Ordered_On", "pattern": "dd/MM/yyyy", "description": "Order date"})
        writer.writerow({"column_name": "customer", "pattern": "", "description": "Customer code"})
        writer.writerow({"column_name": "", "pattern": "ignored", "description": ""})

    return root


def test_loader_disabled() -> None:
    loader = AnnotationLoader(directory=None, enabled=True)
    assert not loader.is_enabled()
    assert loader.get_table_annotations("main", "sales", "orders") is None


def test_loader_missing_directory() -> None:
    loader = AnnotationLoader(directory="/nonexistent/path", enabled=True)
    assert not loader.is_enabled()


def test_loader_reads_annotations(annotation_dir: Path) -> None:
    loader = AnnotationLoader(annotation_dir)
    assert loader.is_enabled()

    annotations = loader.get_table_annotations("main", "sales", "orders")

    assert annotations == {
        "ordered_on": ColumnAnnotation("Ordered_On", pattern="dd/MM/yyyy", description="Order date"),
        "customer": ColumnAnnotation("customer", pattern=None, description="Customer code"),
    }


def test_loader_missing_table(annotation_dir: Path) -> None:
    loader = AnnotationLoader(annotation_dir)
    assert loader.get_table_annotations("main", "sales", "missing") is None


def test_loader_cache(annotation_dir: Path) -> None:
    loader = AnnotationLoader(annotation_dir)

    first = loader.get_table_annotations("main", "sales", "orders")
    second = loader.get_table_annotations("main", "sales", "orders")
    assert first is second

    loader.clear_cache()
    third = loader.get_table_annotations("main", "sales", "orders")
    assert third is not first
    assert third == first


def test_apply_annotations() -> None:
    columns = [
        ColumnDescriptor(name="ordered_on", sql_type=SqlType.DATE),
        ColumnDescriptor(name="shipped_on", sql_type=SqlType.DATE, pattern="yyyyMMdd"),
        ColumnDescriptor(name="customer", sql_type=SqlType.VARCHAR, description="From catalog"),
        ColumnDescriptor(name="amount", sql_type=SqlType.DECIMAL),
    ]
    annotations = {
        "ordered_on": ColumnAnnotation("Ordered_On", pattern="dd/MM/yyyy", description="Order date"),
        "shipped_on": ColumnAnnotation("shipped_on", pattern="dd/MM/yyyy"),
        "customer": ColumnAnnotation("customer", description="Customer code"),
    }

    merged = apply_annotations(columns, annotations)

    assert merged[0].pattern == "dd/MM/yyyy"
    assert merged[0].description == "Order date"
    assert merged[1].pattern == "yyyyMMdd"
    assert merged[2].description == "From catalog"
    assert merged[3] is columns[3]


def test_apply_annotations_without_annotations() -> None:
    columns = [ColumnDescriptor(name="a", sql_type=SqlType.DATE)]
    assert apply_annotations(columns, None) is columns
