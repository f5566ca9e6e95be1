"""Type definitions for parsed delimited text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

type Record = tuple[str, ...]

TAB = "\t"


class DecodedText(NamedTuple):
    """Text decoded from raw bytes, with the encoding that succeeded."""

    text: str
    encoding: str


@dataclass(frozen=True)
class Table:
    """Result of parsing a delimited text file.

    Every record in ``rows`` has exactly ``len(headers)`` fields.
    """

    headers: tuple[str, ...]
    rows: tuple[Record, ...]
    delimiter: str = ","
    has_headers: bool = False
    encoding: str = "utf-8"

    @property
    def total_rows(self) -> int:
        """Number of data rows (header row excluded)."""
        return len(self.rows)

    @property
    def total_columns(self) -> int:
        """Number of columns."""
        return len(self.headers)

    def column(self, index: int) -> list[str]:
        """Return all values of the column at ``index``."""
        if not 0 <= index < len(self.headers):
            return []
        return [row[index] for row in self.rows]

    def column_named(self, name: str) -> list[str]:
        """Return all values of the first column whose header is ``name``."""
        try:
            index = self.headers.index(name)
        except ValueError:
            return []
        return self.column(index)

    @property
    def summary(self) -> str:
        """One-line description, e.g. ``1,024 rows × 5 columns (CSV)``."""
        kind = "TSV" if self.delimiter == TAB else "CSV"
        return f"{self.total_rows:,} rows × {self.total_columns} columns ({kind})"
