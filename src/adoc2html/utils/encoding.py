#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/utils/encoding.py
"""Character encoding detection for AsciiDoc sources.

Bytes are decoded with the encoding chardet reports when it is confident,
then with a list of fallback encodings.
"""

from __future__ import annotations

import logging
from typing import IO

import chardet

logger = logging.getLogger(__name__)


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Detect character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None if detection fails or confidence is
        below the threshold

    """
    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: No encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    if confidence < confidence_threshold:
        logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
        return None
    return encoding


def read_text_with_encoding_detection(data: bytes, fallback_encodings: list[str] | None = None) -> str:
    """Decode bytes as text, trying chardet first and then the fallbacks.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : list[str] | None, default None
        Encodings to try in order; defaults to utf-8, utf-8-sig, latin-1

    Returns
    -------
    str
        Decoded text content

    """
    if fallback_encodings is None:
        fallback_encodings = ["utf-8", "utf-8-sig", "latin-1"]

    candidates = [detect_encoding(data)] + fallback_encodings
    for encoding in candidates:
        if not encoding:
            continue
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
            continue
        logger.debug(f"Successfully decoded with encoding: {encoding}")
        return text.lstrip("\ufeff")

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: IO[bytes] | IO[str]) -> str:
    """Read a binary or text stream fully and return its text."""
    data = stream.read()
    if isinstance(data, bytes):
        return read_text_with_encoding_detection(data)
    return data
