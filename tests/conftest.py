from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List
from unittest.mock import patch

import pytest

from timing_archive.config import ArchiveConfig, StreamDescriptor

BASE_URL = "https://archive.test/static/"


@dataclass
class FakeResponse:
    status_code: int
    content: bytes = b""


@dataclass
class FakeArchive:
    """In-memory stand-in for the remote archive, keyed by full URL."""

    bodies: Dict[str, bytes] = field(default_factory=dict)
    calls: List[str] = field(default_factory=list)

    def add(self, relative: str, body: str, bom: bool = False) -> None:
        raw = body.encode("utf-8")
        self.bodies[BASE_URL + relative] = (b"\xef\xbb\xbf" + raw) if bom else raw

    def get(self, url: str, headers=None, timeout=None) -> FakeResponse:
        self.calls.append(url)
        if url not in self.bodies:
            return FakeResponse(status_code=404)
        return FakeResponse(status_code=200, content=self.bodies[url])


@pytest.fixture
def archive():
    fake = FakeArchive()
    with patch("timing_archive.remote.requests.get", side_effect=fake.get):
        yield fake


@pytest.fixture
def streams():
    return (
        StreamDescriptor(name="TrackStatus", wire_filename="TrackStatus.jsonStream"),
        StreamDescriptor(name="Position.z", wire_filename="Position.z.jsonStream"),
    )


@pytest.fixture
def config(tmp_path: Path, streams) -> ArchiveConfig:
    return ArchiveConfig(base_url=BASE_URL, data_root=tmp_path / "data", streams=streams)
