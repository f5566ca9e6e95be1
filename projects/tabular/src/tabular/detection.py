"""Heuristics for guessing the delimiter and the presence of a header row.

Both heuristics are best guesses, not guarantees. They work on already
tokenized data so they can be exercised without files, and the parser lets
callers override either decision explicitly.
"""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING

from .scanner import count_fields

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .types import Record

logger = getLogger(__name__)

# Candidates in priority order, earlier wins ties
CANDIDATE_DELIMITERS = (",", "\t", ";", "|")
DEFAULT_DELIMITER = ","

# Delimiter scoring parameters
SAMPLE_LINES = 10
CONSISTENCY_WEIGHT = 0.7
BREADTH_WEIGHT = 0.3
BREADTH_SATURATION = 10  # Field count at which breadth stops improving

# Header detection parameters
MAX_HEADER_LENGTH = 100
HEADER_LOOKAHEAD_ROWS = 5

_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def is_number(value: str) -> bool:
    """Check if a field is a plain number such as ``42``, ``-3.5`` or ``1e6``."""
    return _NUMBER.match(value) is not None


def sample_lines(text: str, limit: int = SAMPLE_LINES) -> list[str]:
    """Return the first ``limit`` non-blank physical lines of ``text``."""
    lines: list[str] = []
    for line in text.split("\n"):
        if not line.strip():
            continue
        lines.append(line)
        if len(lines) >= limit:
            break
    return lines


def score_delimiter(field_counts: Sequence[int]) -> float | None:
    """Score a delimiter from the field count it produces on each sample line.

    Returns ``None`` when the delimiter does not split the first line at all.
    """
    if not field_counts or field_counts[0] <= 1:
        return None

    first = field_counts[0]
    if all(count == first for count in field_counts):
        consistency = 1.0
    else:
        deviation = sum(abs(count - first) for count in field_counts) / len(
            field_counts,
        )
        consistency = max(0.0, 1.0 - deviation / first)

    breadth = min(first / BREADTH_SATURATION, 1.0)
    return CONSISTENCY_WEIGHT * consistency + BREADTH_WEIGHT * breadth


def choose_delimiter(
    field_counts: Iterable[tuple[str, Sequence[int]]],
) -> tuple[str, float]:
    """Pick the best scoring candidate; earlier candidates win ties."""
    best_delimiter, best_score = DEFAULT_DELIMITER, 0.0
    for delimiter, counts in field_counts:
        score = score_delimiter(counts)
        if score is not None and score > best_score:
            best_delimiter, best_score = delimiter, score
    return best_delimiter, best_score


def detect_delimiter(
    text: str,
    candidates: Sequence[str] = CANDIDATE_DELIMITERS,
) -> str:
    """Guess the field delimiter from the first lines of normalized text."""
    lines = sample_lines(text)
    if not lines:
        return DEFAULT_DELIMITER

    delimiter, score = choose_delimiter(
        (candidate, [count_fields(line, candidate) for line in lines])
        for candidate in candidates
    )
    logger.debug("Detected delimiter %r (score %.3f)", delimiter, score)
    return delimiter


def looks_like_header(records: Sequence[Record]) -> bool:
    """Decide whether the first record is a header row.

    The first record counts as a header when all of its fields are non-empty,
    non-numeric and shorter than ``MAX_HEADER_LENGTH``, and either one of the
    following records contains a number or there are no following records.
    A header row made of numeric-looking names (years, for example) is
    therefore read as data.
    """
    if not records:
        return False

    first, data = records[0], records[1 : 1 + HEADER_LOOKAHEAD_ROWS]

    all_non_empty = all(first)
    no_numbers = not any(is_number(value) for value in first)
    reasonably_short = all(len(value) < MAX_HEADER_LENGTH for value in first)
    data_has_numbers = any(is_number(value) for row in data for value in row)

    return (
        all_non_empty
        and no_numbers
        and reasonably_short
        and (data_has_numbers or not data)
    )
