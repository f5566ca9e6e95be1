"""Per-value type detection and per-column statistics."""

from __future__ import annotations

import re
from collections import Counter
from datetime import datetime
from math import fsum, isfinite
from typing import TYPE_CHECKING, NamedTuple

from .types import (
    BOOLEAN_NUMERIC_VALUES,
    BOOLEAN_STRING_VALUES,
    ColumnStats,
    ColumnType,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class DatePattern(NamedTuple):
    """A date layout: a quick shape check plus the format that validates it."""

    name: str
    regex: re.Pattern[str]
    format: str


# Compiled regex patterns for efficient pattern matching, tried in order
_DATE_PATTERNS = [
    DatePattern("iso_date", re.compile(r"^\d{4}-\d{2}-\d{2}$"), "%Y-%m-%d"),
    DatePattern(
        "iso_datetime",
        re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$"),
        "%Y-%m-%dT%H:%M:%S",
    ),
    DatePattern(
        "iso_datetime_offset",
        re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:Z|[+-]\d{2}:?\d{2})$"),
        "%Y-%m-%dT%H:%M:%S%z",
    ),
    DatePattern(
        "datetime_space",
        re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$"),
        "%Y-%m-%d %H:%M:%S",
    ),
    DatePattern("us_slash", re.compile(r"^\d{2}/\d{2}/\d{4}$"), "%m/%d/%Y"),
    DatePattern("eu_slash", re.compile(r"^\d{2}/\d{2}/\d{4}$"), "%d/%m/%Y"),
    DatePattern("us_slash_short", re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$"), "%m/%d/%Y"),
    DatePattern("us_dash", re.compile(r"^\d{2}-\d{2}-\d{4}$"), "%m-%d-%Y"),
    DatePattern("eu_dash", re.compile(r"^\d{2}-\d{2}-\d{4}$"), "%d-%m-%Y"),
    DatePattern("yyyy_slash", re.compile(r"^\d{4}/\d{2}/\d{2}$"), "%Y/%m/%d"),
    DatePattern(
        "month_abbr",
        re.compile(r"^[A-Za-z]{3} \d{1,2}, \d{4}$"),
        "%b %d, %Y",
    ),
    DatePattern(
        "month_name",
        re.compile(r"^[A-Za-z]{3,9} \d{1,2}, \d{4}$"),
        "%B %d, %Y",
    ),
]

_INTEGER = re.compile(r"^-?\d+$")
_DECIMAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

# Thousands separator stripped before decimal parsing
THOUSANDS_SEPARATOR = ","

# Fractional digits kept when displaying numbers
LARGE_NUMBER_DIGITS = 2
SMALL_NUMBER_DIGITS = 4
LARGE_NUMBER_THRESHOLD = 1000


def match_date_pattern(value: str) -> DatePattern | None:
    """Return the first date pattern ``value`` matches as a real date."""
    for pattern in _DATE_PATTERNS:
        if not pattern.regex.match(value):
            continue
        try:
            datetime.strptime(value, pattern.format)  # noqa: DTZ007
        except ValueError:
            continue
        return pattern
    return None


def is_date(value: str) -> bool:
    """Check if a string is a date in one of the supported layouts."""
    return match_date_pattern(value) is not None


def parse_number(value: str) -> float | None:
    """Parse an integer or decimal string, ignoring thousands separators.

    Values outside the float range (``1e400``) are not numbers.
    """
    normalized = value.replace(THOUSANDS_SEPARATOR, "")
    if not _DECIMAL.match(normalized):
        return None
    number = float(normalized)
    return number if isfinite(number) else None


def detect_type(value: str) -> ColumnType:  # noqa: PLR0911
    """Detect the type of a single value.

    Checks run in priority order: empty, boolean, integer, decimal, date,
    then text.
    """
    trimmed = value.strip()

    if not trimmed:
        return ColumnType.EMPTY

    if trimmed.lower() in BOOLEAN_STRING_VALUES:
        return ColumnType.BOOLEAN

    if _INTEGER.match(trimmed):
        return ColumnType.INTEGER

    if parse_number(trimmed) is not None:
        return ColumnType.DECIMAL

    if is_date(trimmed):
        return ColumnType.DATE

    return ColumnType.TEXT


def fold_numeric_booleans(
    type_counts: Mapping[ColumnType, int],
    numeric_boolean_count: int,
) -> Counter[ColumnType]:
    """Count ``0``/``1`` booleans as integers inside otherwise numeric columns.

    Only applies when every boolean in the column is ``0`` or ``1`` and all
    other non-empty values are integers or decimals.
    """
    folded = Counter(type_counts)
    booleans = folded[ColumnType.BOOLEAN]
    others = {
        column_type
        for column_type, count in folded.items()
        if count and column_type not in {ColumnType.BOOLEAN, ColumnType.EMPTY}
    }

    if booleans and booleans == numeric_boolean_count and others and all(
        column_type.is_numeric for column_type in others
    ):
        folded[ColumnType.INTEGER] += folded.pop(ColumnType.BOOLEAN)

    return folded


def dominant_type(type_counts: Mapping[ColumnType, int]) -> ColumnType:
    """Reduce per-value type counts to a single column type.

    A mix of integers and decimals is a decimal column; any other mix of two
    or more types is ``mixed``.
    """
    present = {
        column_type
        for column_type, count in type_counts.items()
        if count and column_type is not ColumnType.EMPTY
    }

    if not present:
        return ColumnType.EMPTY
    if len(present) == 1:
        return present.pop()
    if present == {ColumnType.INTEGER, ColumnType.DECIMAL}:
        return ColumnType.DECIMAL
    return ColumnType.MIXED


def format_number(value: float) -> str:
    """Format a number for display, dropping unnecessary decimals."""
    if value.is_integer():
        return f"{value:.0f}"
    if abs(value) >= LARGE_NUMBER_THRESHOLD:
        return f"{value:.{LARGE_NUMBER_DIGITS}f}"
    return f"{value:.{SMALL_NUMBER_DIGITS}f}".rstrip("0").rstrip(".")


def rank_values(
    value_counts: Counter[str],
    limit: int | None = None,
) -> tuple[tuple[str, int], ...]:
    """Sort values by descending frequency, ties in first-seen order."""
    # sorted() is stable, and Counter keeps insertion order
    ranked = sorted(value_counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(ranked if limit is None else ranked[:limit])


class ColumnAnalyzer:
    """Computes column statistics from raw string values."""

    # Maximum number of (value, frequency) pairs kept in top_values
    MAX_TOP_VALUES = 20

    # Default limit for distinct value listings
    MAX_DISTINCT_VALUES = 100

    def classify(self, values: Iterable[str]) -> ColumnStats:
        """Detect the column type and compute statistics for ``values``."""
        type_counts: Counter[ColumnType] = Counter()
        value_counts: Counter[str] = Counter()
        non_empty: list[str] = []
        numeric_booleans = 0
        count = 0

        for value in values:
            count += 1
            trimmed = value.strip()
            value_counts[trimmed] += 1

            value_type = detect_type(trimmed)
            type_counts[value_type] += 1

            if value_type is ColumnType.EMPTY:
                continue
            non_empty.append(trimmed)
            if value_type is ColumnType.BOOLEAN and trimmed in BOOLEAN_NUMERIC_VALUES:
                numeric_booleans += 1

        column_type = dominant_type(fold_numeric_booleans(type_counts, numeric_booleans))
        value_range = self._value_range(column_type, non_empty)

        return ColumnStats(
            type=column_type,
            count=count,
            non_empty_count=len(non_empty),
            distinct_count=len(set(non_empty)),
            null_count=type_counts[ColumnType.EMPTY],
            top_values=rank_values(value_counts, self.MAX_TOP_VALUES),
            **value_range,
        )

    def distinct_values(
        self,
        values: Iterable[str],
        limit: int | None = None,
    ) -> tuple[tuple[str, int], ...]:
        """List trimmed values with their counts, most frequent first."""
        value_counts = Counter(value.strip() for value in values)
        return rank_values(
            value_counts,
            self.MAX_DISTINCT_VALUES if limit is None else limit,
        )

    @staticmethod
    def _value_range(
        column_type: ColumnType,
        non_empty: list[str],
    ) -> dict[str, str | float | None]:
        """Compute min/max (and sum/average for numeric columns)."""
        if not non_empty:
            return {}

        if column_type.is_numeric:
            numbers = [
                number
                for value in non_empty
                if (number := parse_number(value)) is not None
            ]
            if not numbers:
                return {}
            try:
                total = fsum(numbers)
            except OverflowError:
                # Finite values whose sum exceeds the float range
                total = sum(numbers)
            return {
                "min": format_number(min(numbers)),
                "max": format_number(max(numbers)),
                "sum": total,
                "average": total / len(numbers),
            }

        if column_type in {ColumnType.DATE, ColumnType.TEXT, ColumnType.MIXED}:
            # String ordering, not chronological ordering, for dates
            return {"min": min(non_empty), "max": max(non_empty)}

        return {}
