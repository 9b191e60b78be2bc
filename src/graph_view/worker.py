from __future__ import annotations

import asyncio
import logging

from .session import GraphViewSession


class FrameLoopWorker:
    """Host-side frame scheduler: one tick per frame while nodes exist."""

    def __init__(self, session: GraphViewSession, interval_ms: int) -> None:
        self._session = session
        self._interval = max(1, interval_ms) / 1000.0
        self._logger = logging.getLogger("graph-view-worker")
        self._running = False
        self._task: asyncio.Task | None = None
        self.frames = 0

    @property
    def running(self) -> bool:
        return self._running

    async def _frame_loop(self) -> None:
        self._logger.info("frame loop started interval_ms=%d", int(self._interval * 1000))
        while self._running:
            try:
                self.frames += await self._session.tick()
            except Exception:
                self._logger.exception("simulation tick failed")
            await asyncio.sleep(self._interval)
        self._logger.info("frame loop stopped frames=%d", self.frames)

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._frame_loop())

    async def stop(self) -> None:
        self._running = False
        if self._task:
            await self._task
            self._task = None
