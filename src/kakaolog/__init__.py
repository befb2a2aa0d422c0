"""Parse KakaoTalk plain-text chat exports into typed events.

Submodules
----------
parser
    Line-oriented export parser producing a :class:`ChatLog`.
classify
    Message content-kind heuristics.
stats
    Message and per-sender statistics.
index
    Search, calendar and current-user lookups over a parsed log.
commands
    ``kakaolog`` command-line interface.
"""

from __future__ import annotations

from .classify import classify_content
from .models import ChatLog, DateMarker, Event, Message, MessageKind, SenderStats, Stats
from .parser import ExportParser, parse
from .stats import get_stats
from .validation import InvalidChatLogError, is_valid_chat_log

__all__ = [
    "ChatLog",
    "DateMarker",
    "Event",
    "ExportParser",
    "InvalidChatLogError",
    "Message",
    "MessageKind",
    "SenderStats",
    "Stats",
    "classify_content",
    "get_stats",
    "is_valid_chat_log",
    "parse",
]
