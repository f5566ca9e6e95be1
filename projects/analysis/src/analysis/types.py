"""Type definitions for the analysis module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto

# Boolean value patterns - single source of truth
# Each tuple is a (true, false) spelling; matching is case-insensitive
BOOLEAN_VALUE_PAIRS = [
    ("true", "false"),  # String boolean
    ("yes", "no"),  # String yes/no
    ("y", "n"),  # String abbreviation
    ("1", "0"),  # Numeric flag
]

# Derive flattened values for efficient matching
BOOLEAN_STRING_VALUES = {v for pair in BOOLEAN_VALUE_PAIRS for v in pair}

# Boolean spellings that are also valid integers
BOOLEAN_NUMERIC_VALUES = {v for v in BOOLEAN_STRING_VALUES if v.isdigit()}

# Values at or above this magnitude use thousands grouping for display
GROUPING_THRESHOLD = 1000


class ColumnType(StrEnum):
    """Semantic type of a single value or of a whole column."""

    TEXT = auto()
    INTEGER = auto()
    DECIMAL = auto()
    DATE = auto()
    BOOLEAN = auto()
    EMPTY = auto()
    MIXED = auto()

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.capitalize()

    @property
    def is_numeric(self) -> bool:
        """Whether columns of this type get numeric statistics."""
        return self in {ColumnType.INTEGER, ColumnType.DECIMAL}


def format_display(value: float) -> str:
    """Format a sum or average for display.

    Large values are grouped (``12,345.6``), smaller ones get two decimals.
    """
    if abs(value) >= GROUPING_THRESHOLD:
        return f"{value:,.2f}".rstrip("0").rstrip(".")
    return f"{value:.2f}"


@dataclass(frozen=True)
class ColumnStats:
    """Statistics computed for a single column."""

    type: ColumnType
    count: int
    non_empty_count: int
    distinct_count: int
    null_count: int

    # Numeric columns: formatted numbers; text, date and mixed: lexicographic
    min: str | None = None
    max: str | None = None

    # Numeric columns only
    sum: float | None = None
    average: float | None = None

    # (value, frequency) pairs, most frequent first
    top_values: tuple[tuple[str, int], ...] = field(default_factory=tuple)

    @property
    def fill_rate(self) -> float:
        """Percentage of non-empty values."""
        if self.count == 0:
            return 0.0
        return self.non_empty_count / self.count * 100

    @property
    def formatted_sum(self) -> str | None:
        """Sum formatted for display."""
        return None if self.sum is None else format_display(self.sum)

    @property
    def formatted_average(self) -> str | None:
        """Average formatted for display."""
        return None if self.average is None else format_display(self.average)
