"""Render parsed tables as Markdown, JSON or SQL.

Renderers are pure formatting: header order and row order are kept exactly
as parsed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, select_autoescape
from sqlalchemy import Column, MetaData, Text, insert
from sqlalchemy import Table as SQLTable
from sqlalchemy.dialects import sqlite
from sqlalchemy.schema import CreateTable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.sql.expression import ClauseElement

    from .types import Record, Table

TEMPLATE_DIR = Path(__file__).parent / "templates"

_JINJA_ENV = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(),
    trim_blocks=True,
    lstrip_blocks=True,
)

_SQL_DIALECT = sqlite.dialect()


def _display_rows(table: Table, max_rows: int | None) -> Sequence[Record]:
    return table.rows if max_rows is None else table.rows[:max_rows]


def markdown_cell(value: str) -> str:
    """Escape a value for use inside a Markdown table cell."""
    return value.replace("|", "\\|").replace("\n", "<br>")


def to_markdown(table: Table, max_rows: int | None = None) -> str:
    """Format the table as a Markdown table.

    A trailing ``| ... | N more rows |`` line is added when rows are cut off.
    """
    if not table.headers:
        return ""

    rows = _display_rows(table, max_rows)
    template = _JINJA_ENV.get_template("table.md")
    return template.render(
        headers=[markdown_cell(header) for header in table.headers],
        rows=[[markdown_cell(value) for value in row] for row in rows],
        remaining=table.total_rows - len(rows),
    )


def to_records(
    table: Table,
    max_rows: int | None = None,
) -> list[dict[str, str]]:
    """Convert rows to dictionaries keyed by header name."""
    return [
        dict(zip(table.headers, row, strict=True))
        for row in _display_rows(table, max_rows)
    ]


def to_json(table: Table, max_rows: int | None = None, *, pretty: bool = True) -> str:
    """Format the table as a JSON array of objects."""
    return json.dumps(
        to_records(table, max_rows),
        indent=2 if pretty else None,
        sort_keys=pretty,
        ensure_ascii=False,
    )


def sql_column_names(headers: Iterable[str]) -> list[str]:
    """Make header names usable as distinct SQL column names.

    Blank headers become ``column_<n>`` and repeated names get a numeric
    suffix (``name_2``, ``name_3``...). Names are compared case-insensitively,
    as SQLite does.
    """
    names: list[str] = []
    seen: set[str] = set()
    for position, header in enumerate(headers, start=1):
        base = header or f"column_{position}"
        name, suffix = base, 1
        while name.casefold() in seen:
            suffix += 1
            name = f"{base}_{suffix}"
        seen.add(name.casefold())
        names.append(name)
    return names


def _compile(statement: ClauseElement) -> str:
    compiled = statement.compile(
        dialect=_SQL_DIALECT,
        compile_kwargs={"literal_binds": True},
    )
    return str(compiled).strip()


def to_sql(table: Table, table_name: str = "data", max_rows: int | None = None) -> str:
    """Format the table as a ``CREATE TABLE`` statement plus one ``INSERT`` per row.

    All columns are ``TEXT``; values are rendered as escaped SQLite literals.
    """
    if not table.headers:
        return ""

    sql_table = SQLTable(
        table_name,
        MetaData(),
        *(Column(name, Text) for name in sql_column_names(table.headers)),
    )

    lines = [_compile(CreateTable(sql_table, if_not_exists=True)) + ";", ""]
    lines.extend(
        _compile(
            insert(sql_table).values(
                dict(zip(sql_table.columns, row, strict=True)),
            ),
        )
        + ";"
        for row in _display_rows(table, max_rows)
    )
    return "\n".join(lines)
