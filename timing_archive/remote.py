from __future__ import annotations

import asyncio
import logging
from typing import Dict

import requests

from .errors import RemoteReadError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: Dict[str, str] = {
    "accept": "application/json, text/plain, */*",
    "user-agent": "timing-archive-mirror/0.1 (+static-archive-cache)",
}


def fetch_text(url: str, timeout: float = 60.0) -> str | None:
    """GET ``url`` and return its body as text, or ``None`` when the archive does not answer 200."""
    try:
        response = requests.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
    except requests.RequestException as exc:
        raise RemoteReadError(url, exc.__class__.__name__) from exc

    if response.status_code != 200:
        logger.debug("GET %s -> %s", url, response.status_code)
        return None
    # Archive bodies are UTF-8 and usually carry a byte-order mark; invalid bytes become U+FFFD.
    return response.content.decode("utf-8-sig", errors="replace")


async def fetch_text_async(url: str, timeout: float = 60.0) -> str | None:
    return await asyncio.to_thread(fetch_text, url, timeout)
