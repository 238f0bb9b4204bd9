"""Parsing of the archive's ``.jsonStream`` line format.

Each line of a stream body is a session-relative timestamp
(``HH:MM:SS.mmm``) immediately followed by a JSON document, for example::

    00:01:02.345{"Status":"1","Message":"AllClear"}

Lines are separated by CRLF. A line may carry a bare timestamp with no
payload; such records keep an explicit :data:`EMPTY_PAYLOAD` marker.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List

from .errors import MalformedPayloadError

TIMESTAMP_PATTERN = re.compile(r"\d{2}:\d{2}:\d{2}\.\d{3}", re.ASCII)
LINE_DELIMITER = "\r\n"
BYTE_ORDER_MARK = "\ufeff"


class _EmptyPayload:
    _instance: "_EmptyPayload | None" = None

    def __new__(cls) -> "_EmptyPayload":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY_PAYLOAD"

    def __bool__(self) -> bool:
        return False


EMPTY_PAYLOAD = _EmptyPayload()


@dataclass(frozen=True)
class Record:
    timestamp: str
    payload: Any = EMPTY_PAYLOAD

    @property
    def is_empty(self) -> bool:
        return self.payload is EMPTY_PAYLOAD

    def to_json(self) -> Dict[str, Any]:
        return {self.timestamp: "" if self.is_empty else self.payload}


def split_line(line: str) -> tuple[str, str]:
    """Split ``line`` right after its first timestamp.

    A line without any timestamp is returned whole with an empty remainder.
    """
    match = TIMESTAMP_PATTERN.search(line)
    if match is None:
        return line, ""
    return line[: match.end()], line[match.end():]


def parse_line(line: str, line_number: int = 1) -> Record:
    timestamp, remainder = split_line(line)
    if not remainder:
        return Record(timestamp=timestamp)
    try:
        payload = json.loads(remainder)
    except json.JSONDecodeError as exc:
        raise MalformedPayloadError(line_number, line, exc.msg) from exc
    return Record(timestamp=timestamp, payload=payload)


def parse_stream(raw_text: str) -> List[Record]:
    text = raw_text.strip().lstrip(BYTE_ORDER_MARK).strip()
    return [parse_line(line, number) for number, line in enumerate(text.split(LINE_DELIMITER), start=1)]


def records_to_json(records: List[Record]) -> List[Dict[str, Any]]:
    return [record.to_json() for record in records]
