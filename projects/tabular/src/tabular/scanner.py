"""Quote-aware field and record scanner for delimited text.

The scanner is a two-state machine (``DEFAULT`` and ``QUOTED``) walking the
text left to right. Each character is mapped to a ``CharClass`` and the pair
(state, class) decides what happens to the current field and record.

Input must already use ``\\n`` as the only line terminator; see
``normalize_newlines``.
"""

from __future__ import annotations

from enum import Enum, auto
from itertools import islice
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .types import Record

QUOTE = '"'
NEWLINE = "\n"

# Surrounding whitespace stripped from every extracted field
FIELD_WHITESPACE = " \t"


class ScanState(Enum):
    """Scanner state."""

    DEFAULT = auto()
    QUOTED = auto()


class CharClass(Enum):
    """Role of a character for a given delimiter."""

    QUOTE = auto()
    DELIMITER = auto()
    NEWLINE = auto()
    OTHER = auto()


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def char_classes(delimiter: str) -> dict[str, CharClass]:
    """Build the character-class lookup for ``delimiter``."""
    # Quote and newline keep their role even if passed as the delimiter
    return {
        delimiter: CharClass.DELIMITER,
        QUOTE: CharClass.QUOTE,
        NEWLINE: CharClass.NEWLINE,
    }


def _finish_field(field: list[str]) -> str:
    return "".join(field).strip(FIELD_WHITESPACE)


def iter_records(text: str, delimiter: str) -> Iterator[Record]:
    """Yield records from ``text`` one at a time.

    Records made only of empty fields (blank lines) are skipped. An
    unterminated quoted field at the end of the input is flushed as the
    last field instead of raising.
    """
    classes = char_classes(delimiter)
    state = ScanState.DEFAULT
    field: list[str] = []
    record: list[str] = []

    position = 0
    length = len(text)
    while position < length:
        char = text[position]
        char_class = classes.get(char, CharClass.OTHER)

        if state is ScanState.QUOTED:
            if char_class is CharClass.QUOTE:
                if position + 1 < length and text[position + 1] == QUOTE:
                    # Escaped quote
                    field.append(QUOTE)
                    position += 1
                else:
                    state = ScanState.DEFAULT
            else:
                field.append(char)
        elif char_class is CharClass.QUOTE:
            state = ScanState.QUOTED
        elif char_class is CharClass.DELIMITER:
            record.append(_finish_field(field))
            field = []
        elif char_class is CharClass.NEWLINE:
            record.append(_finish_field(field))
            field = []
            if any(record):
                yield tuple(record)
            record = []
        else:
            field.append(char)

        position += 1

    if field or record:
        record.append(_finish_field(field))
        if any(record):
            yield tuple(record)


def scan_records(
    text: str,
    delimiter: str,
    limit: int | None = None,
) -> list[Record]:
    """Collect records from ``text``, stopping after ``limit`` records."""
    records = iter_records(text, delimiter)
    if limit is None:
        return list(records)
    return list(islice(records, limit))


def count_fields(line: str, delimiter: str) -> int:
    """Count the fields on a single physical line, respecting quotes."""
    classes = char_classes(delimiter)
    state = ScanState.DEFAULT
    count = 1
    for char in line:
        char_class = classes.get(char, CharClass.OTHER)
        if state is ScanState.QUOTED:
            # An escaped quote closes and reopens, leaving the state unchanged
            if char_class is CharClass.QUOTE:
                state = ScanState.DEFAULT
        elif char_class is CharClass.QUOTE:
            state = ScanState.QUOTED
        elif char_class is CharClass.DELIMITER:
            count += 1
    return count
