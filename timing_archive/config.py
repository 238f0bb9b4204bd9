from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from .common import getenv
from .errors import ConfigError


DEFAULT_BASE_URL = "https://livetiming.formula1.com/static/"
DEFAULT_DATA_ROOT = "data"
WIRE_EXTENSION = ".jsonStream"
LOCAL_EXTENSION = ".json"

DEFAULT_STREAM_NAMES = (
    "SessionInfo",
    "ArchiveStatus",
    "TrackStatus",
    "ExtrapolatedClock",
    "Position.z",
    "CarData.z",
    "AudioStreams",
    "DriverList",
    "TimingDataF1",
    "SPFeed",
    "TimingAppData",
    "TimingData",
    "TopThree",
    "LapSeries",
    "TimingStats",
    "SessionStatus",
    "TyreStintSeries",
    "Heartbeat",
    "WeatherData",
    "WeatherDataSeries",
    "TlaRcm",
    "RaceControlMessages",
    "TeamRadio",
    "DriverScore",
    "CurrentTyres",
    "PitLaneTimeCollection",
)


@dataclass(frozen=True)
class StreamDescriptor:
    name: str
    wire_filename: str

    @property
    def local_filename(self) -> str:
        if self.wire_filename.endswith(WIRE_EXTENSION):
            return self.wire_filename[: -len(WIRE_EXTENSION)] + LOCAL_EXTENSION
        return self.wire_filename + LOCAL_EXTENSION


DEFAULT_STREAMS: Tuple[StreamDescriptor, ...] = tuple(
    StreamDescriptor(name=name, wire_filename=f"{name}{WIRE_EXTENSION}") for name in DEFAULT_STREAM_NAMES
)


# Archive paths stay under data_root even when they start with a separator.
def _relative(path: str) -> str:
    return path.lstrip("/\\")


@dataclass(frozen=True)
class ArchiveConfig:
    base_url: str = DEFAULT_BASE_URL
    data_root: Path = Path(DEFAULT_DATA_ROOT)
    streams: Tuple[StreamDescriptor, ...] = field(default=DEFAULT_STREAMS)
    max_concurrent_sessions: int = 4
    request_timeout: float = 60.0

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")
        object.__setattr__(self, "data_root", Path(self.data_root))
        object.__setattr__(self, "streams", tuple(self.streams))
        if self.max_concurrent_sessions < 1:
            raise ConfigError("max_concurrent_sessions must be at least 1")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")

    def index_url(self, location: str) -> str:
        return f"{self.base_url}{location}/Index.json"

    def index_path(self, location: str) -> Path:
        return self.data_root / _relative(f"{location}/Index.json")

    def stream_url(self, session_path: str, stream: StreamDescriptor) -> str:
        return f"{self.base_url}{session_path}{stream.wire_filename}"

    def stream_path(self, session_path: str, stream: StreamDescriptor) -> Path:
        return self.data_root / _relative(f"{session_path}{stream.local_filename}")


def load_streams(path: str | Path) -> Tuple[StreamDescriptor, ...]:
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        payload = yaml.safe_load(fh) or {}

    if not isinstance(payload, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    raw: Any = payload.get("streams")
    if not isinstance(raw, dict) or not raw:
        raise ConfigError(f"{path}: 'streams' must be a non-empty mapping of name to wire filename")

    streams = []
    for name, wire_filename in raw.items():
        if not isinstance(wire_filename, str) or not wire_filename:
            raise ConfigError(f"{path}: stream {name!r} has no wire filename")
        streams.append(StreamDescriptor(name=str(name), wire_filename=wire_filename))
    return tuple(streams)


def _env_number(name: str, default: float, cast: type) -> Any:
    raw = getenv(name)
    if raw is None:
        return cast(default)
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name}={raw!r} is not a valid {cast.__name__}") from exc


def load_config(streams_path: str | Path | None = None) -> ArchiveConfig:
    streams_path = streams_path or getenv("TIMING_ARCHIVE_STREAMS_FILE")
    streams = load_streams(streams_path) if streams_path else DEFAULT_STREAMS

    options: Dict[str, Any] = {
        "base_url": getenv("TIMING_ARCHIVE_BASE_URL", DEFAULT_BASE_URL),
        "data_root": Path(getenv("TIMING_ARCHIVE_DATA_ROOT", DEFAULT_DATA_ROOT) or DEFAULT_DATA_ROOT),
        "streams": streams,
        "max_concurrent_sessions": _env_number("TIMING_ARCHIVE_MAX_SESSIONS", 4, int),
        "request_timeout": _env_number("TIMING_ARCHIVE_TIMEOUT", 60.0, float),
    }
    return ArchiveConfig(**options)
