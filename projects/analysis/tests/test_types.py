"""Tests for type definitions."""

import json
from dataclasses import FrozenInstanceError, asdict

import pytest

from analysis.reporting import stats_to_dict
from analysis.types import (
    BOOLEAN_NUMERIC_VALUES,
    BOOLEAN_STRING_VALUES,
    ColumnStats,
    ColumnType,
    format_display,
)


def test_boolean_value_sets() -> None:
    """Test derived boolean value sets."""
    assert BOOLEAN_STRING_VALUES == {"true", "false", "yes", "no", "1", "0", "y", "n"}
    assert BOOLEAN_NUMERIC_VALUES == {"1", "0"}


def test_column_type_display_names() -> None:
    """Test human-readable type names."""
    assert ColumnType.INTEGER.display_name == "Integer"
    assert ColumnType.MIXED.display_name == "Mixed"
    assert [t.value for t in ColumnType] == [
        "text",
        "integer",
        "decimal",
        "date",
        "boolean",
        "empty",
        "mixed",
    ]


def test_fill_rate_is_derived() -> None:
    """Test fill rate calculation and the zero-count edge case."""
    stats = ColumnStats(
        type=ColumnType.TEXT,
        count=8,
        non_empty_count=6,
        distinct_count=3,
        null_count=2,
    )

    assert stats.fill_rate == 75.0
    assert "fill_rate" not in asdict(stats)

    empty = ColumnStats(
        type=ColumnType.EMPTY,
        count=0,
        non_empty_count=0,
        distinct_count=0,
        null_count=0,
    )
    assert empty.fill_rate == 0.0


def test_column_stats_is_immutable() -> None:
    """Test that statistics cannot be changed after construction."""
    stats = ColumnStats(
        type=ColumnType.TEXT,
        count=1,
        non_empty_count=1,
        distinct_count=1,
        null_count=0,
    )

    with pytest.raises(FrozenInstanceError):
        stats.count = 2  # type: ignore[misc]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (60.0, "60.00"),
        (2.346, "2.35"),
        (1234.5, "1,234.5"),
        (1000000.0, "1,000,000"),
        (-2500.25, "-2,500.25"),
    ],
)
def test_format_display(value: float, expected: str) -> None:
    """Test sum and average display formatting."""
    assert format_display(value) == expected


def test_formatted_sum_and_average() -> None:
    """Test formatted accessors for numeric and non-numeric columns."""
    numeric = ColumnStats(
        type=ColumnType.INTEGER,
        count=3,
        non_empty_count=3,
        distinct_count=3,
        null_count=0,
        sum=60.0,
        average=20.0,
    )
    text = ColumnStats(
        type=ColumnType.TEXT,
        count=1,
        non_empty_count=1,
        distinct_count=1,
        null_count=0,
    )

    assert numeric.formatted_sum == "60.00"
    assert numeric.formatted_average == "20.00"
    assert text.formatted_sum is None
    assert text.formatted_average is None


def test_stats_to_dict_serializes() -> None:
    """Test conversion of statistics to a JSON-ready dictionary."""
    stats = ColumnStats(
        type=ColumnType.DECIMAL,
        count=3,
        non_empty_count=2,
        distinct_count=2,
        null_count=1,
        min="1",
        max="2.5",
        sum=3.5,
        average=1.75,
        top_values=(("1", 1), ("2.5", 1), ("", 1)),
    )

    parsed = json.loads(json.dumps(stats_to_dict(stats)))

    assert parsed["type"] == "decimal"
    assert parsed["fill_rate"] == 66.67
    assert parsed["top_values"][0] == {"value": "1", "count": 1}
    assert parsed["min"] == "1"
    assert parsed["sum"] == 3.5
