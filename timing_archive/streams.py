from __future__ import annotations

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import List

from .common import ensure_dirs, write_json
from .config import ArchiveConfig, StreamDescriptor
from .errors import RemoteReadError
from .inflight import InFlightGuard
from .parser import parse_stream, records_to_json
from .remote import fetch_text_async

logger = logging.getLogger(__name__)


class StreamOutcome(str, Enum):
    FETCHED = "fetched"
    CACHED = "cached"
    UNAVAILABLE = "unavailable"


class StreamCache:
    def __init__(self, config: ArchiveConfig) -> None:
        self.config = config
        self._inflight = InFlightGuard()

    async def cache_stream(self, session_path: str, stream_name: str, descriptor: StreamDescriptor) -> StreamOutcome:
        path = self.config.stream_path(session_path, descriptor)
        return await self._inflight.run(path, lambda: self._cache(session_path, stream_name, descriptor, path))

    async def cache_session(self, session_path: str) -> List[StreamOutcome]:
        outcomes: List[StreamOutcome] = []
        for descriptor in self.config.streams:
            outcomes.append(await self.cache_stream(session_path, descriptor.name, descriptor))
        return outcomes

    async def _cache(self, session_path: str, stream_name: str, descriptor: StreamDescriptor, path: Path) -> StreamOutcome:
        # Any existing file counts as cached, whatever it contains.
        if await asyncio.to_thread(path.exists):
            logger.debug("%s %s: cached at %s", session_path, stream_name, path)
            return StreamOutcome.CACHED

        await asyncio.to_thread(ensure_dirs, path.parent)

        url = self.config.stream_url(session_path, descriptor)
        try:
            body = await fetch_text_async(url, self.config.request_timeout)
        except RemoteReadError as exc:
            logger.warning("%s %s: %s", session_path, stream_name, exc)
            return StreamOutcome.UNAVAILABLE
        if body is None:
            logger.debug("%s %s: not available", session_path, stream_name)
            return StreamOutcome.UNAVAILABLE

        records = parse_stream(body)
        await asyncio.to_thread(write_json, records_to_json(records), path)
        logger.debug("%s %s: %d records written to %s", session_path, stream_name, len(records), path)
        return StreamOutcome.FETCHED
