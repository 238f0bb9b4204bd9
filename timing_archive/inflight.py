from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict


class InFlightGuard:
    """Share one pending fetch between concurrent callers targeting the same local path."""

    def __init__(self) -> None:
        self._pending: Dict[Path, "asyncio.Task[Any]"] = {}

    async def run(self, key: Path, factory: Callable[[], Awaitable[Any]]) -> Any:
        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._pending[key] = task
            task.add_done_callback(lambda _: self._pending.pop(key, None))
        return await task
