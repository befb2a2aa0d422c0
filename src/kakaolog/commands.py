"""CLI entry points for parsing and inspecting KakaoTalk chat exports.

Subcommands:

- ``parse``: print (or write) the parsed chat log as JSON.
- ``stats``: print message statistics, optionally as CSV or a bar chart.
- ``search``: list messages containing a query, newest first.
- ``dates``: list the days that have a date separator.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .index import available_dates, determine_current_user, highlight, search_messages
from .models import ChatLog
from .parser import parse
from .plots import render_sender_chart
from .stats import get_stats, write_sender_csv
from .textloaders import LoadError, read_text_best_effort
from .timestamps import short_date_label
from .util import chatlog_to_dict, dumps_json, stats_to_dict, write_json
from .validation import (
    ExportFileError,
    InvalidChatLogError,
    check_export_file,
    ensure_valid_chat_log,
)

LOGGER = logging.getLogger("kakaolog")


def _build_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser with all subcommands."""

    parser = argparse.ArgumentParser(
        prog="kakaolog",
        description="Parse KakaoTalk plain-text chat exports",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", help="Also write a detailed log to this file")

    sub = parser.add_subparsers(dest="cmd", required=True)

    def _add_input(p: argparse.ArgumentParser) -> None:
        p.add_argument("input", type=Path, help="Exported chat .txt file")
        p.add_argument(
            "--allow-invalid",
            action="store_true",
            help="Continue even if the file has no title or no messages",
        )

    p_parse = sub.add_parser("parse", help="Dump the parsed chat log as JSON")
    _add_input(p_parse)
    p_parse.add_argument(
        "-o", "--output", type=Path, help="Write JSON here instead of stdout"
    )

    p_stats = sub.add_parser("stats", help="Show message statistics")
    _add_input(p_stats)
    p_stats.add_argument("--json", action="store_true", help="Print stats as JSON")
    p_stats.add_argument("--csv", type=Path, help="Write the per-sender table as CSV")
    p_stats.add_argument("--chart", type=Path, help="Write a per-sender bar chart PNG")

    p_search = sub.add_parser("search", help="Search message contents")
    _add_input(p_search)
    p_search.add_argument("query", help="Text to look for (case-insensitive)")
    p_search.add_argument(
        "--limit", type=int, default=0, help="Show at most N hits (0 = all)"
    )

    p_dates = sub.add_parser("dates", help="List days that have messages")
    _add_input(p_dates)

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    """Attach console and optional file handlers to the package logger."""

    for handler in list(LOGGER.handlers):
        LOGGER.removeHandler(handler)
        handler.close()
    LOGGER.setLevel(logging.DEBUG if args.verbose else logging.INFO)
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO if args.verbose else logging.WARNING)
    ch.setFormatter(logging.Formatter("%(message)s"))
    LOGGER.addHandler(ch)
    if args.log_file:
        lf_path = Path(args.log_file).expanduser()
        lf_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(lf_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        LOGGER.addHandler(fh)


def load_chat_log(path: Path, *, allow_invalid: bool = False) -> ChatLog:
    """Check, read and parse one export file.

    Raises ExportFileError, LoadError or InvalidChatLogError.
    """

    path = path.expanduser()
    check_export_file(path)
    text = read_text_best_effort(path)
    log = parse(text)
    LOGGER.info(
        "[OK] %s: title=%r events=%d", path.name, log.title, len(log.events)
    )
    if not allow_invalid:
        ensure_valid_chat_log(log)
    return log


def cmd_parse(args: argparse.Namespace, log: ChatLog) -> None:
    """Print or write the chat log as JSON."""

    payload = chatlog_to_dict(log)
    if args.output:
        write_json(args.output, payload)
        print(f"Wrote {len(log.events)} events to {args.output}")
    else:
        print(dumps_json(payload))


def cmd_stats(args: argparse.Namespace, log: ChatLog) -> None:
    """Print statistics and write the optional CSV and chart outputs."""

    stats = get_stats(log)
    if args.json:
        print(dumps_json(stats_to_dict(stats)))
    else:
        me = determine_current_user(log)
        print(f"Title: {log.title}")
        print(f"Saved: {log.save_date}")
        print(
            f"Messages: {stats.total_messages:,}  Days: {stats.total_days}  "
            f"Participants: {stats.participants}"
        )
        for sender, item in stats.sender_stats.items():
            mark = " (me)" if sender == me else ""
            print(f"  {sender}{mark}: {item.count} ({item.percentage}%)")

    if args.csv:
        out = write_sender_csv(stats, args.csv)
        print(f"Wrote sender table to {out}")
    if args.chart:
        if render_sender_chart(stats, args.chart):
            print(f"Saved chart to {args.chart}")


def cmd_search(args: argparse.Namespace, log: ChatLog) -> None:
    """Print messages containing the query, newest first."""

    hits = search_messages(log, args.query)
    shown = hits[: args.limit] if args.limit > 0 else hits
    for hit in shown:
        msg = hit.message
        print(
            f"#{hit.index} {short_date_label(hit.date)} {msg.time} "
            f"{msg.sender}: {highlight(msg.content, args.query)}"
        )
    print(f"{len(hits)} result(s) for {args.query!r}")


def cmd_dates(_args: argparse.Namespace, log: ChatLog) -> None:
    """Print ISO dates of all days in the log."""

    for iso in available_dates(log):
        print(iso)


COMMANDS = {
    "parse": cmd_parse,
    "stats": cmd_stats,
    "search": cmd_search,
    "dates": cmd_dates,
}


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Main CLI dispatcher. Returns a process exit status."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    _configure_logging(args)

    try:
        log = load_chat_log(args.input, allow_invalid=args.allow_invalid)
        COMMANDS[args.cmd](args, log)
    except (ExportFileError, InvalidChatLogError, LoadError) as e:
        LOGGER.error("[FAIL] %s: %s", args.input, e)
        return 1
    except OSError as e:
        LOGGER.error("[CRASH] %s: %s", args.input, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
