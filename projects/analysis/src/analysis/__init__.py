"""Column type detection and descriptive statistics for parsed tables."""

from .main import (
    analyze,
    classify,
    distinct_values,
    generate_report,
    report_to_json,
    report_to_markdown,
    stats_for_column,
)
from .statistics import ColumnAnalyzer, detect_type, format_number
from .types import ColumnStats, ColumnType

__all__ = [
    "ColumnAnalyzer",
    "ColumnStats",
    "ColumnType",
    "analyze",
    "classify",
    "detect_type",
    "distinct_values",
    "format_number",
    "generate_report",
    "report_to_json",
    "report_to_markdown",
    "stats_for_column",
]
