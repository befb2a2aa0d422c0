"""Statistics derived from a parsed chat log.

``get_stats`` is a pure projection over :class:`~kakaolog.models.ChatLog`;
the pandas helpers turn the per-sender part into a table for CSV export.
"""

from __future__ import annotations

import math
from collections import Counter
from pathlib import Path
from typing import Dict

import pandas as pd

from .models import ChatLog, SenderStats, Stats

SENDER_COLUMNS = ["sender", "count", "percentage"]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up."""

    return int(math.floor(value + 0.5))


def get_stats(log: ChatLog) -> Stats:
    """Compute message, day and per-sender counts for ``log``.

    Percentages are ``round(100 * count / total_messages)`` with halves
    rounded up. Senders keep the order of their first message.
    """

    messages = log.messages
    total = len(messages)
    counts: Counter[str] = Counter(msg.sender for msg in messages)

    sender_stats: Dict[str, SenderStats] = {}
    for sender, count in counts.items():
        sender_stats[sender] = SenderStats(
            count=count,
            percentage=round_half_up(100 * count / total),
        )

    return Stats(
        total_messages=total,
        total_days=len(log.date_markers),
        participants=len(sender_stats),
        sender_stats=sender_stats,
    )


def sender_stats_frame(stats: Stats) -> pd.DataFrame:
    """Return per-sender statistics as a DataFrame sorted by count.

    Parameters
    ----------
    stats:
        Statistics from :func:`get_stats`.

    Returns
    -------
    pandas.DataFrame
        Columns ``sender``, ``count`` and ``percentage``. Ties keep
        first-appearance order.
    """

    rows = [
        {"sender": sender, "count": item.count, "percentage": item.percentage}
        for sender, item in stats.sender_stats.items()
    ]
    if not rows:
        return pd.DataFrame(columns=SENDER_COLUMNS)
    frame = pd.DataFrame(rows, columns=SENDER_COLUMNS)
    frame = frame.sort_values("count", ascending=False, kind="stable")
    return frame.reset_index(drop=True)


def write_sender_csv(stats: Stats, output_path: Path) -> Path:
    """Write the per-sender table to ``output_path`` and return the resolved path."""

    resolved = output_path.expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    sender_stats_frame(stats).to_csv(resolved, index=False, encoding="utf-8")
    return resolved
