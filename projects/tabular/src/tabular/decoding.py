"""Decode raw file bytes into text by trying a list of encodings."""

from __future__ import annotations

from codecs import BOM_UTF16_BE, BOM_UTF16_LE
from logging import getLogger
from typing import TYPE_CHECKING

from .types import DecodedText

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = getLogger(__name__)

# Tried in order, first success wins
DEFAULT_ENCODINGS = ("utf-8", "utf-16", "cp1252", "latin-1")

# Codec actually used for each advertised encoding
_CODECS = {
    "utf-8": "utf-8-sig",  # Accept and drop a byte order mark
}


class UndecodableError(ValueError):
    """Raised when bytes cannot be decoded with any of the given encodings."""


def _has_utf16_bom(data: bytes) -> bool:
    return data.startswith((BOM_UTF16_LE, BOM_UTF16_BE))


def decode_bytes(
    data: bytes,
    encodings: Sequence[str] = DEFAULT_ENCODINGS,
) -> DecodedText:
    """Decode ``data`` with the first encoding that succeeds.

    UTF-16 is only attempted when the data starts with a UTF-16 byte order
    mark, since almost any even-length byte string decodes as UTF-16.
    """
    for encoding in encodings:
        if encoding.replace("_", "-").lower() == "utf-16" and not _has_utf16_bom(
            data,
        ):
            continue
        try:
            text = data.decode(_CODECS.get(encoding, encoding))
        except UnicodeDecodeError:
            logger.debug("Could not decode as %s, trying next encoding", encoding)
            continue
        return DecodedText(text, encoding)

    msg = f"Could not decode data with any of: {', '.join(encodings)}"
    raise UndecodableError(msg)
