"""Helpers for turning parsed chat logs and stats into JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .models import ChatLog, DateMarker, Event, Stats


def ensure_dir(p: Path) -> None:
    """Create directory `p` and all parents if they do not exist."""

    p.mkdir(parents=True, exist_ok=True)


def _sanitize(obj):
    """Recursively coerce strings to valid UTF-8 for safe JSON writing."""

    if isinstance(obj, str):
        # Replace invalid surrogates with U+FFFD to keep JSON valid
        return obj.encode("utf-8", errors="replace").decode("utf-8")
    if isinstance(obj, dict):
        return {k: _sanitize(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_sanitize(x) for x in obj]
    return obj


def event_to_dict(event: Event) -> Dict[str, Any]:
    """Return a JSON-ready mapping for one event, tagged by ``type``."""

    if isinstance(event, DateMarker):
        return {"type": "date", "date": event.display_text}
    return {
        "type": "message",
        "sender": event.sender,
        "time": event.time,
        "date": event.date,
        "content": event.content,
        "kind": event.kind.value,
    }


def chatlog_to_dict(log: ChatLog) -> Dict[str, Any]:
    """Return a JSON-ready mapping for a whole chat log."""

    return {
        "title": log.title,
        "save_date": log.save_date,
        "events": [event_to_dict(ev) for ev in log.events],
    }


def stats_to_dict(stats: Stats) -> Dict[str, Any]:
    """Return a JSON-ready mapping for statistics."""

    return {
        "total_messages": stats.total_messages,
        "total_days": stats.total_days,
        "participants": stats.participants,
        "sender_stats": {
            sender: {"count": item.count, "percentage": item.percentage}
            for sender, item in stats.sender_stats.items()
        },
    }


def dumps_json(obj) -> str:
    """Serialise ``obj`` as pretty-printed JSON, keeping Hangul readable."""

    return json.dumps(_sanitize(obj), ensure_ascii=False, indent=2)


def write_json(path: Path, obj) -> None:
    """Write an object as pretty-printed UTF-8 JSON after sanitizing strings."""

    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(dumps_json(obj))
        f.write("\n")
