"""Asynchronous wrapper that runs one forecast at a time and tracks busy state."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .data import RawRows
from .pipeline import ForecastConfig, RunContext, run_forecast

logger = logging.getLogger(__name__)


class PipelineBusyError(RuntimeError):
    pass


class ForecastSession:
    def __init__(self, config: Optional[ForecastConfig] = None) -> None:
        self.config = config or ForecastConfig()
        self._task: Optional[asyncio.Task] = None
        self._last_run: Optional[RunContext] = None

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def last_run(self) -> Optional[RunContext]:
        return self._last_run

    def start(self, rows: RawRows) -> asyncio.Task:
        """Schedule a run on the running loop; the task resolves to its RunContext."""
        if self.busy:
            raise PipelineBusyError("A forecast run is already in progress.")
        self._task = asyncio.get_running_loop().create_task(self._run(rows))
        return self._task

    async def submit(self, rows: RawRows) -> RunContext:
        return await self.start(rows)

    async def _run(self, rows: RawRows) -> RunContext:
        loop = asyncio.get_running_loop()
        try:
            context = await loop.run_in_executor(None, run_forecast, rows, self.config)
        except Exception:
            logger.exception("Forecast run failed; keeping previous results")
            raise
        self._last_run = context
        return context
