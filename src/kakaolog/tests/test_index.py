"""
Tests for search, calendar lookups, current-user detection and date helpers.
"""

from __future__ import annotations

import datetime

import pytest

from kakaolog.index import (
    available_dates,
    determine_current_user,
    find_date_index,
    highlight,
    search_messages,
    sender_ranking,
    title_user,
)
from kakaolog.parser import parse
from kakaolog.timestamps import (
    display_for_iso_date,
    iso_date,
    parse_date_display,
    short_date_label,
    to_24h,
)

SAMPLE = "\n".join(
    [
        "민수 님과 카카오톡 대화",
        "저장한 날짜 : 2025-05-21 09:12:30",
        "--------------- 2025년 5월 20일 화요일 ---------------",
        "[민수] [오후 2:03] 안녕",
        "[지은] [오후 2:04] 여러 줄로",
        "이어지는 메시지",
        "[민수] [오후 2:05] 사진",
        "--------------- 2025년 5월 21일 수요일 ---------------",
        "[지은] [오전 9:00] https://Example.com",
        "[민수] [오전 9:01] 좋다",
    ]
)


def test_search_returns_hit_with_date() -> None:
    """A hit carries the event index and the day it belongs to."""

    hits = search_messages(parse(SAMPLE), "메시지")

    assert len(hits) == 1
    assert hits[0].index == 2
    assert hits[0].date == "2025년 5월 20일 화요일"
    assert hits[0].message.sender == "지은"


def test_search_is_case_insensitive() -> None:
    """Query and content are compared without case."""

    hits = search_messages(parse(SAMPLE), "EXAMPLE")

    assert [h.index for h in hits] == [5]
    assert hits[0].date == "2025년 5월 21일 수요일"


def test_search_orders_newest_first() -> None:
    """Later messages come first in the results."""

    log = parse("[A] [10:00] foo\n[B] [10:01] bar\n[C] [10:02] foo bar")

    assert [h.index for h in search_messages(log, "foo")] == [2, 0]


@pytest.mark.parametrize("query", ["", "   "])
def test_search_with_blank_query_is_empty(query: str) -> None:
    """Blank queries never match everything."""

    assert search_messages(parse(SAMPLE), query) == []


def test_highlight_treats_query_literally() -> None:
    """Regex metacharacters in the query are matched as text."""

    assert highlight("a.b axb A.B", "a.b") == "[a.b] axb [A.B]"
    assert highlight("abc", "") == "abc"
    assert highlight("abc", "b", ("<mark>", "</mark>")) == "a<mark>b</mark>c"


def test_available_dates_are_iso_and_unique() -> None:
    """Each date marker contributes one ISO date."""

    log = parse(SAMPLE + "\n--------------- 2025년 5월 21일 수요일 ---------------")

    assert available_dates(log) == ["2025-05-20", "2025-05-21"]


def test_find_date_index() -> None:
    """The index points at the first marker for that day."""

    log = parse(SAMPLE)

    assert find_date_index(log, "2025-05-21") == 4
    assert find_date_index(log, "2025-05-20") == 0
    assert find_date_index(log, "2025-05-22") is None
    assert find_date_index(log, "not-a-date") is None


def test_find_date_index_does_not_match_longer_day() -> None:
    """Day 2 does not match a marker for day 20."""

    log = parse("--------------- 2025년 5월 20일 화요일 ---------------")

    assert find_date_index(log, "2025-05-02") is None


def test_sender_ranking() -> None:
    """Senders are ordered by message count."""

    assert sender_ranking(parse(SAMPLE)) == [("민수", 3), ("지은", 2)]


def test_current_user_is_not_the_title_user() -> None:
    """The title names the partner, so the other sender is "me"."""

    assert determine_current_user(parse(SAMPLE)) == "지은"


def test_current_user_when_title_user_is_alone() -> None:
    """The title user is returned when nobody else speaks."""

    log = parse("민수 님과 카카오톡 대화\n[민수] [10:00] hi")

    assert determine_current_user(log) == "민수"


def test_current_user_without_title_is_most_active() -> None:
    """Without a usable title the most active sender is "me"."""

    log = parse("[A] [10:00] 1\n[B] [10:01] 2\n[B] [10:02] 3")

    assert determine_current_user(log) == "B"
    assert determine_current_user(parse("")) is None


def test_title_user_accepts_full_header() -> None:
    """Both a stored title and the header line resolve to the name."""

    assert title_user("공주 님과 카카오톡 대화") == "공주"
    assert title_user("공주") == "공주"
    assert title_user("") is None


def test_date_display_helpers() -> None:
    """Display labels convert to dates, ISO strings and short labels."""

    label = "2025년 5월 20일 화요일"

    assert parse_date_display(label) == datetime.date(2025, 5, 20)
    assert iso_date(label) == "2025-05-20"
    assert short_date_label(label) == "2025.05.20 화"
    assert display_for_iso_date("2025-05-20") == "2025년 5월 20일"


def test_date_display_helpers_on_bad_input() -> None:
    """Unreadable labels are tolerated."""

    assert parse_date_display("2025년 2월 30일 일요일") is None
    assert iso_date("") is None
    assert short_date_label("whenever") == "whenever"
    assert short_date_label("") == ""
    assert display_for_iso_date("2025/05/20") is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("오후 2:03", "14:03"),
        ("오전 9:05", "09:05"),
        ("오전 12:10", "00:10"),
        ("오후 12:30", "12:30"),
        ("14:03", "14:03"),
        ("오후 13:00", None),
        ("나중에", None),
    ],
)
def test_to_24h(text: str, expected) -> None:
    """Korean AM/PM clock labels convert to 24-hour time."""

    assert to_24h(text) == expected
