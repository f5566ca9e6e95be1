"""Main analysis module for column type detection and statistics."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Literal

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .reporting import TEMPLATE_DIR, stats_to_dict
from .statistics import ColumnAnalyzer

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from tabular import Table

    from .types import ColumnStats

type ReportFormat = Literal["json", "markdown"]

# Jinja2 environment for markdown template rendering
_JINJA_ENV = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(),
    trim_blocks=True,
    lstrip_blocks=True,
)

# Holds no state between calls, safe to share
_ANALYZER = ColumnAnalyzer()


def classify(values: Iterable[str]) -> ColumnStats:
    """Detect the type of a column and compute its statistics.

    Args:
        values: Raw values of one column, empty strings included

    Returns:
        Column statistics

    """
    return _ANALYZER.classify(values)


def analyze(table: Table) -> dict[str, ColumnStats]:
    """Compute statistics for every column of a table.

    Args:
        table: Parsed table

    Returns:
        Mapping from header name to column statistics, in header order.
        When header names repeat, the last column with that name wins.

    """
    return {
        header: _ANALYZER.classify(table.column(index))
        for index, header in enumerate(table.headers)
    }


def stats_for_column(table: Table, column: str | int) -> ColumnStats | None:
    """Compute statistics for one column, by header name or index.

    Returns ``None`` when the table has no such column.
    """
    if isinstance(column, str):
        if column not in table.headers:
            return None
        column = table.headers.index(column)
    elif not 0 <= column < table.total_columns:
        return None
    return _ANALYZER.classify(table.column(column))


def distinct_values(
    values: Iterable[str],
    limit: int = ColumnAnalyzer.MAX_DISTINCT_VALUES,
) -> tuple[tuple[str, int], ...]:
    """List distinct trimmed values with their counts, most frequent first."""
    return _ANALYZER.distinct_values(values, limit)


def report_to_json(stats: Mapping[str, ColumnStats]) -> str:
    """Convert column statistics to a JSON string.

    Args:
        stats: Mapping from header name to column statistics

    Returns:
        JSON string representation

    """
    report = {name: stats_to_dict(column) for name, column in stats.items()}
    return json.dumps(report, indent=2, ensure_ascii=False)


def report_to_markdown(stats: Mapping[str, ColumnStats]) -> str:
    """Convert column statistics to a Markdown table.

    Args:
        stats: Mapping from header name to column statistics

    Returns:
        Markdown string representation

    """
    template = _JINJA_ENV.get_template("stats.md")
    return template.render(stats=stats)


def generate_report(stats: Mapping[str, ColumnStats], fmt: ReportFormat) -> str:
    """Render column statistics in the requested format."""
    if fmt == "json":
        return report_to_json(stats)
    if fmt == "markdown":
        return report_to_markdown(stats)
    msg = f"Unsupported report format: {fmt}"
    raise ValueError(msg)
