"""Read-only lookups over a parsed chat log.

These helpers back the viewer features that sit on top of the parser:
message search, the calendar of days that have messages, jumping to a day,
and deciding which sender is "me".
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .models import ChatLog, DateMarker, Message
from .timestamps import display_for_iso_date, iso_date

TITLE_USER_RE = re.compile(r"^(.+?)\s*님과\s*카카오톡\s*대화$")


@dataclass(frozen=True)
class SearchHit:
    """A message matching a search query.

    ``index`` is the position of the message in ``ChatLog.events`` and
    ``date`` the display text of the day it belongs to.
    """

    index: int
    message: Message
    date: str


def search_messages(log: ChatLog, query: str) -> List[SearchHit]:
    """Return messages whose content contains ``query``, newest first.

    Matching is case-insensitive. An empty or whitespace-only query yields
    no hits.
    """

    if not query or not query.strip():
        return []
    needle = query.lower()

    hits: List[SearchHit] = []
    current_date = ""
    for idx, event in enumerate(log.events):
        if isinstance(event, DateMarker):
            current_date = event.display_text
        elif needle in event.content.lower():
            hits.append(SearchHit(index=idx, message=event, date=current_date))
    hits.reverse()
    return hits


def highlight(content: str, query: str, marker: Tuple[str, str] = ("[", "]")) -> str:
    """Wrap every case-insensitive occurrence of ``query`` with ``marker``.

    The query is matched literally, never as a regular expression.
    """

    if not query:
        return content
    opening, closing = marker
    pattern = re.compile(re.escape(query), re.I)
    return pattern.sub(lambda m: f"{opening}{m.group(0)}{closing}", content)


def available_dates(log: ChatLog) -> List[str]:
    """Return the ISO dates of all date markers, in order and de-duplicated."""

    seen = set()
    out: List[str] = []
    for marker in log.date_markers:
        iso = iso_date(marker.display_text)
        if iso and iso not in seen:
            seen.add(iso)
            out.append(iso)
    return out


def find_date_index(log: ChatLog, iso: str) -> Optional[int]:
    """Return the event index of the first date marker for ``iso``.

    Parameters
    ----------
    log:
        Parsed chat log.
    iso:
        Date in ``YYYY-MM-DD`` form.

    Returns
    -------
    Optional[int]
        Index into ``log.events``, or ``None`` when the day has no marker or
        ``iso`` is not a valid date.
    """

    prefix = display_for_iso_date(iso)
    if prefix is None:
        return None
    for idx, event in enumerate(log.events):
        if isinstance(event, DateMarker) and (
            event.display_text == prefix
            or event.display_text.startswith(prefix + " ")
        ):
            return idx
    return None


def sender_ranking(log: ChatLog) -> List[Tuple[str, int]]:
    """Return ``(sender, count)`` pairs sorted by count, most active first.

    Ties keep first-appearance order.
    """

    counts: Counter[str] = Counter(msg.sender for msg in log.messages)
    return sorted(counts.items(), key=lambda item: -item[1])


def title_user(title: str) -> Optional[str]:
    """Return the conversation partner named by a room title, if any.

    Accepts both a bare name (as stored on ``ChatLog.title``) and the full
    ``<name> 님과 카카오톡 대화`` header.
    """

    text = (title or "").strip()
    if not text:
        return None
    m = TITLE_USER_RE.match(text)
    if m:
        return m.group(1).strip()
    return text


def determine_current_user(log: ChatLog) -> Optional[str]:
    """Guess which sender exported the chat.

    The room title names the other party, so the most active sender other
    than that person is "me". When the title user is the only sender, they
    are returned; without a usable title the most active sender is used.
    Returns ``None`` for a log without messages.
    """

    ranking = sender_ranking(log)
    if not ranking:
        return None

    partner = title_user(log.title)
    senders = [name for name, _ in ranking]
    if partner and partner in senders:
        others = [name for name in senders if name != partner]
        return others[0] if others else partner
    return senders[0]
