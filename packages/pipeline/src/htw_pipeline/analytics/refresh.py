"""
analytics/refresh.py — Drop dashboard results that a newer refresh has superseded.

Each refresh takes the next generation number before it starts loading.
When the load finishes, the result is applied only if no later refresh
has started in the meantime, so a slow "monthly" response can never
overwrite a faster "yearly" one that was requested after it.

Usage:
    refresher = DashboardRefresher(lambda tf: build_dashboard(store, timeframe=tf))
    applied = await refresher.refresh("yearly")
    analytics = refresher.current.unwrap()
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import structlog

from htw_shared.result import Result

log = structlog.get_logger(__name__)

Loader = Callable[[str], Result[Any]]


class DashboardRefresher:
    """Holds the latest applied dashboard Result for one screen."""

    def __init__(self, loader: Loader) -> None:
        self._loader = loader
        self._generation = 0
        self.current: Result[Any] | None = None
        self.current_timeframe: str | None = None

    @property
    def generation(self) -> int:
        return self._generation

    async def refresh(self, timeframe: str) -> bool:
        """
        Load the dashboard for ``timeframe`` in a worker thread.

        Returns:
            True when the result was applied to ``current``, False when a
            newer refresh started while this one was loading.
        """
        self._generation += 1
        generation = self._generation

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, self._loader, timeframe)

        if generation != self._generation:
            log.info(
                "stale_refresh_discarded",
                timeframe=timeframe,
                generation=generation,
                latest=self._generation,
            )
            return False

        self.current = result
        self.current_timeframe = timeframe
        return True
