"""Delimited text parsing with delimiter and header detection."""

from .decoding import DEFAULT_ENCODINGS, UndecodableError, decode_bytes
from .detection import detect_delimiter, looks_like_header, score_delimiter
from .export import to_json, to_markdown, to_records, to_sql
from .parser import parse, read_file
from .scanner import count_fields, iter_records, normalize_newlines
from .types import DecodedText, Record, Table

__all__ = [
    "DEFAULT_ENCODINGS",
    "DecodedText",
    "Record",
    "Table",
    "UndecodableError",
    "count_fields",
    "decode_bytes",
    "detect_delimiter",
    "iter_records",
    "looks_like_header",
    "normalize_newlines",
    "parse",
    "read_file",
    "score_delimiter",
    "to_json",
    "to_markdown",
    "to_records",
    "to_sql",
]
