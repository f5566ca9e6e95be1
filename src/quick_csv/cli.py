"""Command line interface for Quick CSV."""

import logging
import sys
from pathlib import Path
from typing import Literal

from analysis import analyze, generate_report
from analysis.types import ColumnStats
from cyclopts import App
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table as RichTable
from tabular import Table, UndecodableError, read_file, to_json, to_markdown, to_sql

from quick_csv.settings import Settings, load_settings

app = App(help="Quick CSV: preview and profile delimited text files")

type PreviewFormat = Literal["table", "markdown", "json", "sql"]
type StatsFormat = Literal["table", "json", "markdown"]

console = Console()
err_console = Console(stderr=True)

# Names accepted on the command line for characters that are awkward to type
DELIMITER_ALIASES = {
    "tab": "\t",
    "\\t": "\t",
    "comma": ",",
    "semicolon": ";",
    "pipe": "|",
}


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[bold red]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print success message to stderr."""
    err_console.print(f"[bold green]✓[/] {message}")


def print_info(message: str) -> None:
    """Print info message to stderr."""
    err_console.print(f"[bold blue]i[/] {message}")


def configure_logging(*, verbose: bool) -> None:
    """Send debug logs to stderr through rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def validate_file_location(file: Path) -> None:
    """Validate input file location."""
    if not file.exists():
        print_error(f"File does not exist: {file}")
        sys.exit(1)
    if not file.is_file():
        print_error(f"Path is not a file: {file}")
        sys.exit(1)


def read_settings(config: Path | None) -> Settings:
    """Load settings or exit with an error."""
    try:
        return load_settings(config)
    except (ValueError, OSError) as e:
        print_error(f"Failed to load settings: {e}")
        sys.exit(1)


def load_table(
    file: Path,
    *,
    config: Path | None,
    max_rows: int | None,
    delimiter: str | None,
    headers: bool | None,
) -> Table:
    """Read and parse a file, applying settings and command line overrides."""
    validate_file_location(file)
    options = read_settings(config).parse_options()

    if max_rows is not None:
        if max_rows <= 0:
            print_error(f"Max rows must be positive, got {max_rows}")
            sys.exit(1)
        options["max_rows"] = max_rows
    if delimiter is not None:
        options["delimiter"] = DELIMITER_ALIASES.get(delimiter.lower(), delimiter)
    if headers is not None:
        options["has_headers"] = headers

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=err_console,
            transient=True,
        ) as progress:
            progress.add_task(f"Parsing {file.name}...", total=None)
            table = read_file(file, **options)
    except UndecodableError as e:
        print_error(f"Cannot decode file: {e}")
        sys.exit(1)
    except ValueError as e:
        print_error(f"Invalid options: {e}")
        sys.exit(1)
    except OSError as e:
        print_error(f"Failed to read file: {e}")
        sys.exit(1)

    print_info(f"{file.name}: {table.summary}, encoding {table.encoding}")
    return table


def format_data_table(table: Table) -> None:
    """Format parsed rows as a rich table."""
    if not table.headers:
        console.print("No data found.")
        return

    rich_table = RichTable(title=None if table.has_headers else "(generated headers)")
    for header in table.headers:
        rich_table.add_column(escape(header), overflow="fold")
    for row in table.rows:
        rich_table.add_row(*(escape(value) for value in row))
    console.print(rich_table)


def format_stats_table(stats: dict[str, ColumnStats]) -> None:
    """Format column statistics as a rich table."""
    if not stats:
        console.print("No columns found.")
        return

    rich_table = RichTable(title="Column Statistics")
    rich_table.add_column("Column", style="bold cyan")
    rich_table.add_column("Type", style="bold yellow")
    rich_table.add_column("Count", justify="right")
    rich_table.add_column("Empty", justify="right")
    rich_table.add_column("Distinct", justify="right")
    rich_table.add_column("Fill", justify="right")
    rich_table.add_column("Min")
    rich_table.add_column("Max")
    rich_table.add_column("Sum", justify="right")
    rich_table.add_column("Average", justify="right")

    for name, column in stats.items():
        rich_table.add_row(
            escape(name),
            column.type.display_name,
            str(column.count),
            str(column.null_count),
            str(column.distinct_count),
            f"{column.fill_rate:.1f}%",
            escape(column.min or ""),
            escape(column.max or ""),
            column.formatted_sum or "",
            column.formatted_average or "",
        )

    console.print(rich_table)


@app.command
def preview(
    file: Path,
    fmt: PreviewFormat = "table",
    *,
    max_rows: int | None = None,
    delimiter: str | None = None,
    headers: bool | None = None,
    table_name: str = "data",
    config: Path | None = None,
    verbose: bool = False,
) -> None:
    """Parse a delimited text file and print its rows."""
    configure_logging(verbose=verbose)
    table = load_table(
        file,
        config=config,
        max_rows=max_rows,
        delimiter=delimiter,
        headers=headers,
    )

    # Output to stdout in requested format (keep stdout clean for data)
    if fmt == "table":
        format_data_table(table)
    elif fmt == "markdown":
        sys.stdout.write(to_markdown(table))
    elif fmt == "json":
        sys.stdout.write(to_json(table))
    elif fmt == "sql":
        sys.stdout.write(to_sql(table, table_name=table_name))


@app.command
def stats(
    file: Path,
    fmt: StatsFormat = "table",
    *,
    max_rows: int | None = None,
    delimiter: str | None = None,
    headers: bool | None = None,
    config: Path | None = None,
    verbose: bool = False,
) -> None:
    """Detect column types and print per-column statistics."""
    configure_logging(verbose=verbose)
    table = load_table(
        file,
        config=config,
        max_rows=max_rows,
        delimiter=delimiter,
        headers=headers,
    )

    column_stats = analyze(table)

    if fmt == "table":
        format_stats_table(column_stats)
    else:
        sys.stdout.write(generate_report(column_stats, fmt))

    print_success(f"Analyzed {table.total_columns} columns")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
