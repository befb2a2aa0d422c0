"""Read export files from disk and decode them to text.

KakaoTalk exports are normally UTF-8, but older Windows clients save CP949
(EUC-KR superset) and some tools re-save as UTF-16. Decoding is best effort
and never fails on undecodable bytes.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER = logging.getLogger(__name__)

FALLBACK_ENCODINGS = ("utf-8", "cp949")


class LoadError(Exception):
    """Raised when an export file cannot be read."""


def decode_best_effort(raw: bytes) -> str:
    """Decode export bytes, trying BOM-marked and common Korean encodings.

    Falls back to UTF-8 with replacement characters when nothing decodes
    cleanly.
    """

    if raw.startswith(b"\xef\xbb\xbf"):
        return raw.decode("utf-8-sig", errors="replace")
    if raw.startswith((b"\xff\xfe", b"\xfe\xff")):
        return raw.decode("utf-16", errors="replace")
    for enc in FALLBACK_ENCODINGS:
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    LOGGER.warning("Could not decode export cleanly; replacing invalid bytes")
    return raw.decode("utf-8", errors="replace")


def read_text_best_effort(path: Path) -> str:
    """Read ``path`` and decode it with :func:`decode_best_effort`."""

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise LoadError(f"Cannot read {path}: {e}") from e
    return decode_best_effort(raw)
