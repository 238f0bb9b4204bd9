from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from .catalog import Catalog, IndexNotFound, IndexResult
from .common import read_json, write_json
from .config import ArchiveConfig
from .inflight import InFlightGuard
from .remote import fetch_text_async

logger = logging.getLogger(__name__)


class IndexResolver:
    def __init__(self, config: ArchiveConfig) -> None:
        self.config = config
        self._inflight = InFlightGuard()

    async def resolve_index(self, location: str | int) -> IndexResult:
        """Return the season catalog for ``location``, reading the local copy when one exists.

        A non-200 answer from the archive is returned as :class:`IndexNotFound`
        and nothing is written.
        """
        location = str(location)
        path = self.config.index_path(location)
        return await self._inflight.run(path, lambda: self._resolve(location, path))

    async def _resolve(self, location: str, path: Path) -> IndexResult:
        if await asyncio.to_thread(path.exists):
            payload = await asyncio.to_thread(read_json, path)
            logger.info("Index for %s read from %s", location, path)
            return Catalog.from_payload(location, payload)

        url = self.config.index_url(location)
        body = await fetch_text_async(url, self.config.request_timeout)
        if body is None:
            logger.info("Index for %s not found at %s", location, url)
            return IndexNotFound(location=location)

        payload = json.loads(body)
        await asyncio.to_thread(write_json, payload, path)
        logger.info("Index for %s fetched and written to %s", location, path)
        return Catalog.from_payload(location, payload)
