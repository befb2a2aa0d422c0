"""Typed events produced by parsing a KakaoTalk chat export.

A parse yields a single :class:`ChatLog` holding the room title, the save
date, and an ordered tuple of events. Each event is either a
:class:`DateMarker` (a day boundary) or a :class:`Message`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple, Union


class MessageKind(str, Enum):
    """Content category of a message, derived from its text."""

    TEXT = "text"
    MEDIA = "media"
    EMOTICON = "emoticon"
    LINK = "link"
    FILE = "file"
    VOICE = "voice"
    SYSTEM = "system"
    EMPTY = "empty"


@dataclass(frozen=True)
class DateMarker:
    """A day boundary such as ``2025년 5월 20일 화요일``."""

    display_text: str
    raw: str = ""


@dataclass(frozen=True)
class Message:
    """A single chat message, possibly spanning several physical lines.

    ``date`` is the display text of the nearest preceding date marker at the
    time the message was parsed, or an empty string when none precedes it.
    """

    sender: str
    time: str
    content: str
    kind: MessageKind
    date: str = ""
    raw: str = ""


Event = Union[DateMarker, Message]


@dataclass(frozen=True)
class ChatLog:
    """Root value returned by a parse: room metadata plus ordered events."""

    title: str = ""
    save_date: str = ""
    events: Tuple[Event, ...] = ()

    @property
    def messages(self) -> Tuple[Message, ...]:
        """Return only the message events, in source order."""

        return tuple(ev for ev in self.events if isinstance(ev, Message))

    @property
    def date_markers(self) -> Tuple[DateMarker, ...]:
        """Return only the date marker events, in source order."""

        return tuple(ev for ev in self.events if isinstance(ev, DateMarker))


@dataclass(frozen=True)
class SenderStats:
    """Message count and rounded share for one sender."""

    count: int
    percentage: int


@dataclass(frozen=True)
class Stats:
    """Read-only statistics derived from a :class:`ChatLog`.

    Parameters
    ----------
    total_messages:
        Number of message events.
    total_days:
        Number of date markers.
    participants:
        Number of distinct senders.
    sender_stats:
        Per-sender counts keyed by sender name, in first-appearance order.
    """

    total_messages: int
    total_days: int
    participants: int
    sender_stats: Dict[str, SenderStats] = field(default_factory=dict)
