"""Checks applied around parsing: before reading a file and after parsing it.

The parser itself never fails; these helpers decide whether an input file
or a parse result is acceptable and produce the user-facing messages.
"""

from __future__ import annotations

from pathlib import Path

from .models import ChatLog

MAX_EXPORT_BYTES = 10 * 1024 * 1024
EXPORT_SUFFIX = ".txt"

INVALID_EXPORT_MESSAGE = "올바른 카카오톡 채팅 내보내기 파일이 아닙니다."
NOT_TEXT_MESSAGE = "텍스트 파일(.txt)만 업로드할 수 있습니다."
TOO_LARGE_MESSAGE = "파일 크기가 너무 큽니다. 10MB 이하의 파일을 선택해주세요."


class ExportFileError(Exception):
    """Raised when a file is not acceptable as a chat export."""


class InvalidChatLogError(Exception):
    """Raised when a parse result does not look like a chat export."""


def check_export_file(path: Path, *, max_bytes: int = MAX_EXPORT_BYTES) -> None:
    """Raise :class:`ExportFileError` unless ``path`` is a small ``.txt`` file.

    Parameters
    ----------
    path:
        Candidate export file.
    max_bytes:
        Size limit in bytes (default 10 MB).
    """

    if path.suffix.lower() != EXPORT_SUFFIX:
        raise ExportFileError(NOT_TEXT_MESSAGE)
    try:
        size = path.stat().st_size
    except OSError as e:
        raise ExportFileError(f"{path}: {e}") from e
    if size > max_bytes:
        raise ExportFileError(TOO_LARGE_MESSAGE)


def is_valid_chat_log(log: ChatLog) -> bool:
    """Return True when ``log`` has a title and at least one message."""

    return bool(log.title) and bool(log.messages)


def ensure_valid_chat_log(log: ChatLog) -> ChatLog:
    """Return ``log`` unchanged, or raise :class:`InvalidChatLogError`."""

    if not is_valid_chat_log(log):
        raise InvalidChatLogError(INVALID_EXPORT_MESSAGE)
    return log
