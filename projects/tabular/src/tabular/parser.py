"""Parse delimited text into a rectangular table."""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from .decoding import decode_bytes
from .detection import DEFAULT_DELIMITER, detect_delimiter, looks_like_header
from .scanner import NEWLINE, QUOTE, normalize_newlines, scan_records
from .types import Record, Table

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = getLogger(__name__)


def synthetic_headers(count: int, start: int = 1) -> tuple[str, ...]:
    """Generate ``Column 1`` … ``Column N`` style header names."""
    return tuple(f"Column {number}" for number in range(start, start + count))


def pad_record(record: Record, width: int) -> Record:
    """Pad a record on the right with empty fields up to ``width``."""
    if len(record) >= width:
        return record
    return record + ("",) * (width - len(record))


def validate_delimiter(delimiter: str) -> None:
    """Reject delimiters the scanner cannot use."""
    if len(delimiter) != 1:
        msg = f"Delimiter must be a single character, got {delimiter!r}"
        raise ValueError(msg)
    if delimiter in (QUOTE, NEWLINE, "\r"):
        msg = f"Delimiter cannot be a quote or line break: {delimiter!r}"
        raise ValueError(msg)


def _split_header(
    records: Sequence[Record],
    *,
    first_is_header: bool,
    max_rows: int | None,
) -> tuple[tuple[str, ...], Sequence[Record]]:
    """Separate headers from data rows and pad everything to a common width."""
    # Width covers every scanned record, including those past max_rows
    width = max((len(record) for record in records), default=0)

    data = records[1:] if first_is_header else records
    if max_rows is not None:
        data = data[:max_rows]

    header_row = records[0] if first_is_header else ()

    if first_is_header:
        # Columns beyond the header row get generated names
        headers = header_row + synthetic_headers(
            width - len(header_row),
            start=len(header_row) + 1,
        )
    else:
        headers = synthetic_headers(width)

    return headers, [pad_record(record, width) for record in data]


def parse(
    text: str,
    *,
    max_rows: int | None = None,
    has_headers: bool | None = None,
    delimiter: str | None = None,
) -> Table:
    """Parse delimited text into a ``Table``.

    Args:
        text: Decoded file content, any mix of CRLF, CR and LF line endings
        max_rows: Maximum number of data rows to return (header excluded).
            Scanning stops once the limit is reached.
        has_headers: Whether the first record is a header row (default:
            auto-detect)
        delimiter: Field delimiter (default or empty string: auto-detect)

    Returns:
        Parsed table. Parsing never fails; empty input gives an empty table.

    Raises:
        ValueError: If ``delimiter`` is not a usable single character or
            ``max_rows`` is negative

    """
    if delimiter:
        validate_delimiter(delimiter)
    if max_rows is not None and max_rows < 0:
        msg = f"max_rows must not be negative, got {max_rows}"
        raise ValueError(msg)

    if not text:
        return Table(headers=(), rows=(), delimiter=delimiter or DEFAULT_DELIMITER)

    normalized = normalize_newlines(text)
    used_delimiter = delimiter or detect_delimiter(normalized)

    # One extra record is read in case the first one turns out to be headers
    limit = None
    if max_rows is not None:
        limit = max(max_rows, 1) if has_headers is False else max_rows + 1

    records = scan_records(normalized, used_delimiter, limit)
    if limit is not None and len(records) == limit:
        logger.debug("Stopped scanning after %d records", limit)

    if not records:
        return Table(headers=(), rows=(), delimiter=used_delimiter)

    if has_headers is None:
        first_is_header = looks_like_header(records)
        logger.debug("Header row detected: %s", first_is_header)
    else:
        first_is_header = has_headers

    headers, rows = _split_header(
        records,
        first_is_header=first_is_header,
        max_rows=max_rows,
    )

    return Table(
        headers=headers,
        rows=tuple(rows),
        delimiter=used_delimiter,
        has_headers=first_is_header,
    )


def read_file(
    path: Path,
    *,
    max_rows: int | None = None,
    has_headers: bool | None = None,
    delimiter: str | None = None,
) -> Table:
    """Read, decode and parse a delimited text file.

    Raises:
        OSError: If the file cannot be read
        UndecodableError: If no supported encoding can decode the file

    """
    decoded = decode_bytes(path.read_bytes())
    table = parse(
        decoded.text,
        max_rows=max_rows,
        has_headers=has_headers,
        delimiter=delimiter,
    )
    return replace(table, encoding=decoded.encoding)
