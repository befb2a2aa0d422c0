"""
Tests for message content-kind classification.
"""

from __future__ import annotations

import pytest

from kakaolog.classify import classify_content
from kakaolog.models import MessageKind


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("", MessageKind.EMPTY),
        ("사진", MessageKind.MEDIA),
        ("동영상", MessageKind.MEDIA),
        ("사진 여러 장", MessageKind.MEDIA),
        ("이모티콘", MessageKind.EMOTICON),
        ("이모티콘: (하트)", MessageKind.EMOTICON),
        ("https://example.com", MessageKind.LINK),
        ("여기 봐 http://example.com/x", MessageKind.LINK),
        ("파일: 회의록.hwp", MessageKind.FILE),
        ("report.PDF", MessageKind.FILE),
        ("backup.zip", MessageKind.FILE),
        ("음성메시지", MessageKind.VOICE),
        ("음성메시지 0:05", MessageKind.VOICE),
        ("철수 님이 들어왔습니다.", MessageKind.SYSTEM),
        ("영희 님이 나갔습니다.", MessageKind.SYSTEM),
        ("민수님이 대화방을 개설했습니다.", MessageKind.SYSTEM),
        ("그냥 텍스트", MessageKind.TEXT),
        ("사진 보내줘", MessageKind.TEXT),
    ],
)
def test_classify_content(content: str, expected: MessageKind) -> None:
    """Each placeholder or marker maps to its kind."""

    assert classify_content(content) is expected


def test_link_wins_over_file_extension() -> None:
    """A URL ending in a document extension is still a link."""

    assert classify_content("https://example.com/paper.pdf") is MessageKind.LINK


def test_emoticon_wins_over_link() -> None:
    """The emoticon prefix is checked before links."""

    assert classify_content("이모티콘: https://emoticon") is MessageKind.EMOTICON


def test_file_extension_must_end_content() -> None:
    """An extension in the middle of a message does not make it a file."""

    assert classify_content("a.pdf 보냈어") is MessageKind.TEXT
    assert classify_content("a.pdf\n") is MessageKind.TEXT


def test_classification_is_idempotent() -> None:
    """Classifying the same content repeatedly returns the same kind."""

    content = "https://example.com\n사진"
    assert {classify_content(content) for _ in range(3)} == {MessageKind.LINK}


def test_message_kind_values_are_strings() -> None:
    """Kinds serialise to their lowercase names."""

    assert [k.value for k in MessageKind] == [
        "text",
        "media",
        "emoticon",
        "link",
        "file",
        "voice",
        "system",
        "empty",
    ]
