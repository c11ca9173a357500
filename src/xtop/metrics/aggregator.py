from __future__ import annotations

import asyncio
import logging

from xtop.metrics.models import Metrics, Result, Snapshot

logger = logging.getLogger(__name__)


class Aggregator:
    """Single writer of the session's Metrics.

    Results are applied one at a time. Writes and :meth:`snapshot` share one
    lock so a snapshot never mixes fields from different updates.
    """

    def __init__(self) -> None:
        self._metrics = Metrics()
        self._lock = asyncio.Lock()

    async def apply(self, result: Result) -> None:
        async with self._lock:
            metrics = self._metrics
            metrics.total += 1
            if not result.is_success:
                return
            status = result.status or ""
            header_value = result.header_value or ""
            metrics.statuses[status] = metrics.statuses.get(status, 0) + 1
            metrics.header_values[header_value] = metrics.header_values.get(header_value, 0) + 1

    async def snapshot(self) -> Snapshot:
        async with self._lock:
            return Snapshot(
                total=self._metrics.total,
                statuses=dict(self._metrics.statuses),
                header_values=dict(self._metrics.header_values),
            )

    async def run(self, queue: asyncio.Queue[Result]) -> None:
        logger.debug("aggregator.started")
        while True:
            result = await queue.get()
            try:
                await self.apply(result)
            finally:
                queue.task_done()
