"""Tests for delimiter and header detection heuristics."""

import pytest

from tabular.detection import (
    choose_delimiter,
    detect_delimiter,
    is_number,
    looks_like_header,
    sample_lines,
    score_delimiter,
)


def test_detect_tab_delimiter() -> None:
    """Test that ten lines of four tab-separated fields select tab."""
    text = "\n".join("\t".join(f"v{row}{col}" for col in range(4)) for row in range(10))

    assert detect_delimiter(text) == "\t"


def test_detect_each_candidate() -> None:
    """Test detection of every supported delimiter."""
    for delimiter in (",", "\t", ";", "|"):
        text = "\n".join(delimiter.join(["a", "b", "c"]) for _ in range(5))
        assert detect_delimiter(text) == delimiter


def test_semicolon_beats_decimal_commas() -> None:
    """Test that consistent semicolons win over inconsistent commas."""
    text = "name;price;qty\nApple;1,50;3\nPear;2;10\nFig;0,75;1\n"

    assert detect_delimiter(text) == ";"


def test_quoted_delimiters_are_not_counted() -> None:
    """Test that commas inside quotes do not affect detection."""
    text = 'a;"x,y,z";c\nd;"p,q,r";f\n'

    assert detect_delimiter(text) == ";"


def test_detect_defaults_to_comma() -> None:
    """Test that text without any candidate falls back to comma."""
    assert detect_delimiter("just one column\nanother value\n") == ","
    assert detect_delimiter("") == ","


def test_score_disqualifies_single_field_first_line() -> None:
    """Test that a delimiter absent from the first line is not considered."""
    assert score_delimiter([1, 3, 3]) is None
    assert score_delimiter([]) is None


def test_score_consistent_counts() -> None:
    """Test the score for perfectly consistent field counts."""
    assert score_delimiter([4, 4, 4]) == pytest.approx(0.7 + 0.3 * 0.4)
    assert score_delimiter([20, 20]) == pytest.approx(1.0)


def test_score_inconsistent_counts() -> None:
    """Test that deviation from the first line lowers the score."""
    # Mean absolute deviation: (0 + 2 + 0 + 2) / 4 = 1, relative to 4 fields
    expected = 0.7 * (1 - 1 / 4) + 0.3 * 0.4

    assert score_delimiter([4, 2, 4, 6]) == pytest.approx(expected)


def test_score_consistency_floors_at_zero() -> None:
    """Test that consistency never goes negative."""
    assert score_delimiter([2, 20, 20]) == pytest.approx(0.3 * 0.2)


def test_choose_delimiter_tie_keeps_first_candidate() -> None:
    """Test that equal scores keep the earlier candidate."""
    counts = [(",", [3, 3]), (";", [3, 3]), ("|", [2, 2])]

    assert choose_delimiter(counts)[0] == ","


def test_sample_lines_skips_blank_lines() -> None:
    """Test that blank lines are not part of the sample."""
    text = "\n\na\n   \nb\n" + "\n".join(str(i) for i in range(20))

    lines = sample_lines(text)

    assert lines[:2] == ["a", "b"]
    assert len(lines) == 10


def test_header_detected_with_numeric_data() -> None:
    """Test that a text row followed by numbers is a header."""
    assert looks_like_header([("name", "age"), ("Alice", "30")]) is True


def test_header_rejected_when_data_has_no_numbers() -> None:
    """Test that an all-text file is read as data."""
    assert looks_like_header([("name", "city"), ("Alice", "Paris")]) is False


def test_header_rejected_with_numeric_field() -> None:
    """Test that numeric-looking names make the first row data."""
    assert looks_like_header([("2021", "2022"), ("5", "6")]) is False


def test_header_rejected_with_empty_field() -> None:
    """Test that a header row must not have empty names."""
    assert looks_like_header([("name", ""), ("Alice", "30")]) is False


def test_header_rejected_when_too_long() -> None:
    """Test that very long values are not header names."""
    assert looks_like_header([("x" * 100, "age"), ("Alice", "30")]) is False


def test_single_record_is_header() -> None:
    """Test that a lone text record is treated as headers only."""
    assert looks_like_header([("name", "age")]) is True
    assert looks_like_header([("1", "2")]) is False


def test_header_lookahead_is_limited() -> None:
    """Test that only the next five records are checked for numbers."""
    records = [("a", "b")] + [("x", "y")] * 5 + [("1", "2")]

    assert looks_like_header(records) is False


def test_is_number() -> None:
    """Test plain number recognition."""
    assert is_number("42")
    assert is_number("-3.5")
    assert is_number("1e6")
    assert is_number(".5")
    assert not is_number("nan")
    assert not is_number("1,000")
    assert not is_number("")
