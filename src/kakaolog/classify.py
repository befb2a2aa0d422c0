"""Heuristic classifier for the content kind of a chat message.

Rules are checked top to bottom and the first match wins. The order matters:
a URL ending in ``.pdf`` is a link, not a file.
"""

from __future__ import annotations

import re

from .models import MessageKind

MEDIA_PLACEHOLDERS = frozenset({"사진", "동영상", "사진 여러 장"})

EMOTICON_PLACEHOLDER = "이모티콘"
EMOTICON_PREFIX = "이모티콘:"

LINK_MARKERS = ("http://", "https://")

FILE_MARKER = "파일:"
FILE_EXT_RE = re.compile(r"\.(pdf|doc|docx|xls|xlsx|ppt|pptx|txt|zip|rar)\Z", re.I)

VOICE_MARKER = "음성메시지"

SYSTEM_PHRASES = (
    "님이 들어왔습니다",
    "님이 나갔습니다",
    "대화방을 개설했습니다",
)


def classify_content(content: str) -> MessageKind:
    """Return the :class:`MessageKind` for a message body."""

    if not content:
        return MessageKind.EMPTY

    if content in MEDIA_PLACEHOLDERS:
        return MessageKind.MEDIA

    if content == EMOTICON_PLACEHOLDER or content.startswith(EMOTICON_PREFIX):
        return MessageKind.EMOTICON

    if any(marker in content for marker in LINK_MARKERS):
        return MessageKind.LINK

    if FILE_MARKER in content or FILE_EXT_RE.search(content):
        return MessageKind.FILE

    if VOICE_MARKER in content:
        return MessageKind.VOICE

    if any(phrase in content for phrase in SYSTEM_PHRASES):
        return MessageKind.SYSTEM

    return MessageKind.TEXT
