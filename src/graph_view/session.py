from __future__ import annotations

import asyncio
import logging
from typing import Callable, TypeVar

from diary_entries.sources import EntrySource

from .controller import GraphViewController

T = TypeVar("T")


class GraphViewSession:
    """Serializes ticks and input handlers on one controller."""

    def __init__(self, controller: GraphViewController, source: EntrySource | None = None) -> None:
        self.controller = controller
        self.source = source
        self._lock = asyncio.Lock()
        self._logger = logging.getLogger("graph-view-session")

    async def apply(self, operation: Callable[[GraphViewController], T]) -> T:
        async with self._lock:
            return operation(self.controller)

    async def tick(self, count: int = 1) -> int:
        ran = 0
        async with self._lock:
            for _ in range(max(0, count)):
                if not self.controller.tick():
                    break
                ran += 1
        return ran

    async def load(self, user_id: str) -> int:
        if self.source is None:
            raise ValueError("no entry source configured")
        entries = await self.source.get_entries(user_id)
        async with self._lock:
            self.controller.load_entries(entries)
        self._logger.info("entries loaded user=%s count=%d", user_id, len(entries))
        return len(entries)
