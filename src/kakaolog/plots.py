"""
Matplotlib-based chart rendering for chat statistics.
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt

from .models import Stats
from .stats import sender_stats_frame

LOGGER = logging.getLogger(__name__)

COLOR_BAR = "#f9e000"
COLOR_EDGE = "#3c1e1e"
COLOR_TEXT_MUTED = "#6b7280"


def render_sender_chart(stats: Stats, output_path: Path) -> bool:
    """Render a bar chart of message counts per sender.

    Parameters
    ----------
    stats:
        Statistics from :func:`kakaolog.stats.get_stats`.
    output_path:
        Path where the PNG chart should be written.

    Returns
    -------
    bool
        True when a chart was written, False when there was nothing to plot.
    """

    frame = sender_stats_frame(stats)
    if frame.empty:
        LOGGER.warning("No messages counted; skipping chart.")
        return False

    plt.switch_backend("Agg")
    labels = list(frame["sender"])
    values = [int(v) for v in frame["count"]]

    width = max(6.0, 0.75 * len(labels))
    height = 4.5
    fig, ax = plt.subplots(figsize=(width, height))
    bars = ax.bar(range(len(labels)), values, color=COLOR_BAR, edgecolor=COLOR_EDGE)
    for bar, pct in zip(bars, frame["percentage"]):
        ax.annotate(
            f"{int(pct)}%",
            (bar.get_x() + bar.get_width() / 2, bar.get_height()),
            ha="center",
            va="bottom",
            fontsize=8,
            color=COLOR_TEXT_MUTED,
        )
    ax.set_ylabel("Messages")
    ax.set_title("Messages per Sender")
    ax.set_ylim(0, max(values) * 1.15)
    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels, rotation=45, ha="right")
    fig.tight_layout()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    LOGGER.debug("Saved chart to %s", output_path)
    return True
