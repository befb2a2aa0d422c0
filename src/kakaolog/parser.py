"""Parser for KakaoTalk plain-text chat exports.

The export is line oriented and loosely delimited, for example:

  민수 님과 카카오톡 대화
  저장한 날짜 : 2025-05-21 09:12:30

  --------------- 2025년 5월 20일 화요일 ---------------
  [민수] [오후 2:03] 안녕
  [지은] [오후 2:04] 여러 줄로
  이어지는 메시지

Each physical line is run through an ordered set of rules (blank line, title
header, save-date header, date separator, message header, continuation) and
the first rule that accepts the line wins. A message stays open and keeps
absorbing continuation lines until the next header, separator or message
header closes it.

Parsing never raises for text input; lines that match nothing and do not
belong to an open message are dropped.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Tuple

from .classify import classify_content
from .models import ChatLog, DateMarker, Event, Message, MessageKind

LOGGER = logging.getLogger(__name__)

TITLE_PHRASE = "님과 카카오톡 대화"
TITLE_SUFFIX = " " + TITLE_PHRASE
SAVE_DATE_PREFIX = "저장한 날짜 :"
DATE_RULE_PREFIX = "-" * 15
BOM = "\ufeff"

MESSAGE_RE = re.compile(r"^\[([^\]]+)\]\s*\[([^\]]+)\]\s*(.*)$")
DATE_RE = re.compile(r"(\d{4})년\s*(\d{1,2})월\s*(\d{1,2})일\s*(\S+)")


def split_lines(text: str) -> List[str]:
    """Split text into physical lines, accepting LF, CRLF and CR endings."""

    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def extract_date_display(line: str) -> str:
    """Return the normalised ``<y>년 <m>월 <d>일 <weekday>`` text of a separator.

    Falls back to the stripped line when the date grammar does not match.
    """

    m = DATE_RE.search(line)
    if not m:
        return line.strip()
    year, month, day, weekday = m.groups()
    return f"{year}년 {month}월 {day}일 {weekday}"


class _MessageBuilder:
    """Accumulator for the message currently accepting continuation lines.

    A blank line adds a newline to the content but no classifiable text, so
    it leaves the kind as it was; every other line re-classifies the whole
    content.
    """

    def __init__(self, sender: str, time: str, content: str, date: str, raw: str):
        self.sender = sender
        self.time = time
        self.date = date
        self.content = content
        self.kind: MessageKind = classify_content(content)
        self._raw: List[str] = [raw]

    def add_blank(self) -> None:
        self.content += "\n"
        self._raw.append("")

    def add_line(self, line: str) -> None:
        self.content += "\n" + line
        self._raw.append(line)
        # later lines can change the kind, e.g. a URL on the third line
        self.kind = classify_content(self.content)

    def build(self) -> Message:
        return Message(
            sender=self.sender,
            time=self.time,
            content=self.content,
            kind=self.kind,
            date=self.date,
            raw="\n".join(self._raw),
        )


class _ParseRun:
    """State of one parse call. Never shared between calls."""

    def __init__(self) -> None:
        self.title: Optional[str] = None
        self.save_date: Optional[str] = None
        self.current_date = ""
        self.open_message: Optional[_MessageBuilder] = None
        self.events: List[Event] = []
        self.dropped = 0
        self.rules: Tuple[Callable[[str, str], bool], ...] = (
            self._blank,
            self._title_header,
            self._save_date_header,
            self._date_separator,
            self._message_header,
            self._continuation,
        )

    def feed(self, raw_line: str) -> None:
        line = raw_line.strip()
        for rule in self.rules:
            if rule(line, raw_line):
                return
        self.dropped += 1

    def close_message(self) -> None:
        if self.open_message is not None:
            self.events.append(self.open_message.build())
            self.open_message = None

    def finish(self) -> ChatLog:
        self.close_message()
        return ChatLog(
            title=self.title or "",
            save_date=self.save_date or "",
            events=tuple(self.events),
        )

    # --- Rules, in precedence order ---------------------------------

    def _blank(self, line: str, _raw: str) -> bool:
        if line:
            return False
        if self.open_message is not None:
            self.open_message.add_blank()
        return True

    def _title_header(self, line: str, _raw: str) -> bool:
        if self.title is not None or TITLE_PHRASE not in line:
            return False
        self.close_message()
        self.title = line.replace(TITLE_SUFFIX, "").strip()
        return True

    def _save_date_header(self, line: str, _raw: str) -> bool:
        if self.save_date is not None or not line.startswith(SAVE_DATE_PREFIX):
            return False
        self.close_message()
        self.save_date = line[len(SAVE_DATE_PREFIX):].strip()
        return True

    def _date_separator(self, line: str, _raw: str) -> bool:
        if not line.startswith(DATE_RULE_PREFIX):
            return False
        if "년" not in line or "월" not in line:
            return False
        self.close_message()
        self.current_date = extract_date_display(line)
        self.events.append(DateMarker(display_text=self.current_date, raw=line))
        return True

    def _message_header(self, line: str, _raw: str) -> bool:
        m = MESSAGE_RE.match(line)
        if not m:
            return False
        self.close_message()
        sender, time, content = m.groups()
        self.open_message = _MessageBuilder(
            sender=sender.strip(),
            time=time.strip(),
            content=content.strip(),
            date=self.current_date,
            raw=line,
        )
        return True

    def _continuation(self, _line: str, raw: str) -> bool:
        if self.open_message is None:
            return False
        self.open_message.add_line(raw.rstrip())
        return True


class ExportParser:
    """Convert the decoded text of one export file into a :class:`ChatLog`.

    The parser holds no state between calls; each :meth:`parse` builds a new,
    independent result, so one instance can be reused or shared freely.
    """

    def parse(self, raw_text: str) -> ChatLog:
        """Parse ``raw_text`` and return the resulting :class:`ChatLog`.

        Parameters
        ----------
        raw_text:
            Full decoded text of one export file. A leading byte-order mark
            is ignored.

        Returns
        -------
        ChatLog
            Title, save date and ordered events. Fields stay empty when the
            corresponding header lines are absent.
        """

        run = _ParseRun()
        text = raw_text or ""
        if text.startswith(BOM):
            text = text[len(BOM):]
        lines = split_lines(text)
        for raw_line in lines:
            run.feed(raw_line)
        log = run.finish()
        LOGGER.debug(
            "Parsed %d lines into %d events (%d dropped)",
            len(lines),
            len(log.events),
            run.dropped,
        )
        return log


def parse(raw_text: str) -> ChatLog:
    """Parse export text with a fresh :class:`ExportParser`."""

    return ExportParser().parse(raw_text)
