"""Date and clock-time helpers for KakaoTalk display strings.

Exports label days as ``2025년 5월 20일 화요일`` and times as ``오후 2:03``.
This module converts those labels into forms that are easier to compare or
show compactly:

* ISO dates (``2025-05-20``) for calendar lookups,
* short labels (``2025.05.20 화``) for search listings, and
* 24-hour clock strings (``14:03``).
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

DISPLAY_DATE_RE = re.compile(r"(\d{4})년\s*(\d{1,2})월\s*(\d{1,2})일\s*(.*)")
CLOCK_RE = re.compile(r"^(오전|오후)\s*(\d{1,2}):(\d{2})$")
PLAIN_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

WEEKDAY_SHORT = {
    "월요일": "월",
    "화요일": "화",
    "수요일": "수",
    "목요일": "목",
    "금요일": "금",
    "토요일": "토",
    "일요일": "일",
}


def parse_date_display(text: Optional[str]) -> Optional[date]:
    """Parse a ``<y>년 <m>월 <d>일`` label into a :class:`datetime.date`.

    Returns ``None`` when the label is empty, does not match, or names a day
    that does not exist.
    """

    if not text:
        return None
    m = DISPLAY_DATE_RE.search(text)
    if not m:
        return None
    year, month, day = (int(g) for g in m.groups()[:3])
    try:
        return date(year, month, day)
    except ValueError:
        return None


def iso_date(text: Optional[str]) -> Optional[str]:
    """Return ``YYYY-MM-DD`` for a display label, or ``None``."""

    parsed = parse_date_display(text)
    return parsed.isoformat() if parsed else None


def short_date_label(text: str) -> str:
    """Return a compact ``YYYY.MM.DD 요`` label for a display date.

    Parameters
    ----------
    text:
        Display label such as ``2025년 5월 20일 화요일``.

    Returns
    -------
    str
        ``2025.05.20 화`` for the example above. Unknown weekday tokens are
        kept verbatim; labels that do not match are returned unchanged.
    """

    if not text:
        return ""
    m = DISPLAY_DATE_RE.search(text)
    if not m:
        return text
    year, month, day, weekday = m.groups()
    weekday = weekday.strip()
    short = WEEKDAY_SHORT.get(weekday, weekday)
    label = f"{year}.{month.zfill(2)}.{day.zfill(2)}"
    return f"{label} {short}" if short else label


def display_for_iso_date(iso: str) -> Optional[str]:
    """Return the ``<y>년 <m>월 <d>일`` prefix used by separators for an ISO date."""

    try:
        parsed = date.fromisoformat(iso)
    except (TypeError, ValueError):
        return None
    return f"{parsed.year}년 {parsed.month}월 {parsed.day}일"


def to_24h(time_text: str) -> Optional[str]:
    """Convert ``오전 9:05`` / ``오후 2:03`` (or ``14:03``) to ``HH:MM``.

    Returns ``None`` for anything else.
    """

    text = (time_text or "").strip()
    m = CLOCK_RE.match(text)
    if m:
        period, hour_s, minute_s = m.groups()
        hour, minute = int(hour_s), int(minute_s)
        if hour > 12 or minute > 59:
            return None
        if period == "오후" and hour != 12:
            hour += 12
        if period == "오전" and hour == 12:
            hour = 0
        return f"{hour:02d}:{minute:02d}"
    m = PLAIN_CLOCK_RE.match(text)
    if m:
        hour, minute = int(m.group(1)), int(m.group(2))
        if hour > 23 or minute > 59:
            return None
        return f"{hour:02d}:{minute:02d}"
    return None
