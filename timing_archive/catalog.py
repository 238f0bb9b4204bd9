from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union


@dataclass(frozen=True)
class Session:
    path: str | None
    key: Any = None
    name: str | None = None
    type: str | None = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Session":
        return cls(
            path=payload.get("Path") or None,
            key=payload.get("Key"),
            name=payload.get("Name"),
            type=payload.get("Type"),
        )


@dataclass(frozen=True)
class Meeting:
    key: Any = None
    name: str | None = None
    location: str | None = None
    sessions: Tuple[Session, ...] = ()

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Meeting":
        sessions = payload.get("Sessions")
        if not isinstance(sessions, list):
            sessions = []
        return cls(
            key=payload.get("Key"),
            name=payload.get("Name"),
            location=payload.get("Location"),
            sessions=tuple(Session.from_payload(item) for item in sessions if isinstance(item, dict)),
        )


@dataclass(frozen=True)
class Catalog:
    """Season index as published by the archive, meetings in remote order."""

    location: str
    meetings: Tuple[Meeting, ...] = ()
    raw: Any = field(default=None, compare=False, repr=False)

    @classmethod
    def from_payload(cls, location: str, payload: Any) -> "Catalog":
        meetings = payload.get("Meetings") if isinstance(payload, dict) else None
        if not isinstance(meetings, list):
            meetings = []
        return cls(
            location=location,
            meetings=tuple(Meeting.from_payload(item) for item in meetings if isinstance(item, dict)),
            raw=payload,
        )


@dataclass(frozen=True)
class IndexNotFound:
    location: str
    status: str = "not_found"


IndexResult = Union[Catalog, IndexNotFound]


def enumerate_sessions(result: IndexResult) -> List[str]:
    if isinstance(result, IndexNotFound):
        return []
    return [session.path for meeting in result.meetings for session in meeting.sessions if session.path]
