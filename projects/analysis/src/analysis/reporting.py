"""Report generation utilities for analysis results."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .types import ColumnStats

TEMPLATE_DIR = Path(__file__).parent / "templates"


def stats_to_dict(stats: ColumnStats) -> dict[str, Any]:
    """Convert column statistics to a JSON-ready dictionary.

    Derived values (``fill_rate``) are included.
    """
    data = asdict(stats)
    data["type"] = stats.type.value
    data["top_values"] = [
        {"value": value, "count": count} for value, count in stats.top_values
    ]
    data["fill_rate"] = round(stats.fill_rate, 2)
    return data
