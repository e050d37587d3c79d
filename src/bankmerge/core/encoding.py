#!/usr/bin/env python3
"""
Text Encoding Detection

Bank exports arrive as UTF-8 (with or without a byte-order mark) or in the
legacy Windows-1251 code page. Detection never fails; it degrades to the
platform default encoding as a last resort.
"""

import codecs
import locale
import logging
from typing import BinaryIO

logger = logging.getLogger(__name__)

LEGACY_ENCODING = "cp1251"

# Share of U+FFFD replacement characters tolerated in a UTF-8 decode
MAX_REPLACEMENT_RATIO = 0.01


def detect_encoding(stream: BinaryIO) -> str:
    """
    Detect the most likely text encoding of a seekable byte stream.

    The stream is repositioned to its start before returning.

    Args:
        stream: Seekable binary stream

    Returns:
        Python codec name: "utf-8-sig" when a UTF-8 BOM is present, "utf-8",
        "cp1251", or the platform default encoding
    """
    stream.seek(0)
    data = stream.read()
    stream.seek(0)
    return detect_bytes_encoding(data)


def detect_bytes_encoding(data: bytes) -> str:
    """Detect the encoding of an in-memory byte string (see detect_encoding)."""
    if data.startswith(codecs.BOM_UTF8):
        logger.debug("UTF-8 byte-order mark found")
        return "utf-8-sig"

    if looks_like_utf8(data):
        return "utf-8"

    try:
        data.decode(LEGACY_ENCODING)
    except UnicodeDecodeError:
        fallback = locale.getpreferredencoding(False)
        logger.debug("Falling back to platform encoding %s", fallback)
        return fallback

    logger.debug("Falling back to legacy encoding %s", LEGACY_ENCODING)
    return LEGACY_ENCODING


def looks_like_utf8(data: bytes) -> bool:
    """
    Check whether data decodes as UTF-8 with fewer than 1% replacement characters.

    An empty byte string counts as UTF-8. Literal question marks are not
    counted: the "replace" error handler only ever inserts U+FFFD, so a '?'
    in the decoded text was a '?' in the input.
    """
    if not data:
        return True
    text = data.decode("utf-8", errors="replace")
    bad = text.count("\ufffd")
    return bad / len(text) < MAX_REPLACEMENT_RATIO
