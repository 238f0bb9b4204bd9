from __future__ import annotations

from typing import Any, List, Tuple


class TimingArchiveError(Exception):
    """Base class for archive mirror failures."""


class ConfigError(TimingArchiveError):
    pass


class RemoteReadError(TimingArchiveError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"remote read failed for {url}: {reason}")
        self.url = url
        self.reason = reason


class MalformedPayloadError(TimingArchiveError, ValueError):
    def __init__(self, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"line {line_number}: invalid JSON payload ({reason}): {line[:120]!r}")
        self.line_number = line_number
        self.line = line


class WalkError(TimingArchiveError):
    """Raised after every session has finished when at least one of them failed."""

    def __init__(self, failures: List[Tuple[str, BaseException]], report: Any = None) -> None:
        paths = ", ".join(path for path, _ in failures)
        super().__init__(f"{len(failures)} session(s) failed: {paths}")
        self.failures = failures
        self.report = report
