from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .catalog import IndexNotFound, enumerate_sessions
from .config import ArchiveConfig, load_config
from .errors import WalkError
from .index import IndexResolver
from .streams import StreamCache, StreamOutcome

logger = logging.getLogger(__name__)


@dataclass
class WalkReport:
    location: str
    found: bool = True
    sessions: int = 0
    fetched: int = 0
    cached: int = 0
    unavailable: int = 0
    failures: List[Tuple[str, str]] = field(default_factory=list)

    def record(self, outcomes: List[StreamOutcome]) -> None:
        self.sessions += 1
        for outcome in outcomes:
            if outcome is StreamOutcome.FETCHED:
                self.fetched += 1
            elif outcome is StreamOutcome.CACHED:
                self.cached += 1
            else:
                self.unavailable += 1

    def summary(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "sessions": self.sessions,
            "fetched": self.fetched,
            "cached": self.cached,
            "unavailable": self.unavailable,
            "failed_sessions": [path for path, _ in self.failures],
        }


async def walk_catalog(year: int | str, config: ArchiveConfig | None = None) -> WalkReport:
    """Cache every configured stream of every session listed in the season index.

    All session tasks are joined before returning. If any of them failed,
    :class:`WalkError` is raised afterwards with every failure attached.
    """
    config = config or load_config()
    location = str(year)
    report = WalkReport(location=location)

    result = await IndexResolver(config).resolve_index(location)
    if isinstance(result, IndexNotFound) or not result.meetings:
        logger.debug("No meetings found for %s", location)
        report.found = False
        return report

    session_paths = enumerate_sessions(result)
    cache = StreamCache(config)
    semaphore = asyncio.Semaphore(config.max_concurrent_sessions)

    async def walk_session(session_path: str) -> List[StreamOutcome]:
        async with semaphore:
            return await cache.cache_session(session_path)

    results = await asyncio.gather(*(walk_session(path) for path in session_paths), return_exceptions=True)

    failures: List[Tuple[str, BaseException]] = []
    for session_path, outcome in zip(session_paths, results):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.error("Session %s failed: %s", session_path, outcome)
            failures.append((session_path, outcome))
            report.failures.append((session_path, str(outcome)))
            continue
        report.record(outcome)

    logger.info(
        "Walk of %s done: %d sessions, %d fetched, %d cached, %d unavailable, %d failed",
        location,
        report.sessions,
        report.fetched,
        report.cached,
        report.unavailable,
        len(failures),
    )
    if failures:
        raise WalkError(failures, report=report)
    return report


def run_walk(year: int | str, config: ArchiveConfig | None = None) -> WalkReport:
    return asyncio.run(walk_catalog(year, config))
