from __future__ import annotations

import asyncio
import logging
from typing import Mapping

from xtop.config import DEFAULT_INTERVAL_SEC, TargetConfig
from xtop.metrics import Aggregator, Snapshot
from xtop.ui.display import Display

logger = logging.getLogger(__name__)


def percentage(count: int, total: int) -> int:
    if total <= 0:
        msg = "percentage is undefined when total is 0"
        raise ValueError(msg)
    return count * 100 // total


def sort_statuses(statuses: Mapping[str, int]) -> list[tuple[str, int]]:
    # stable: equal counts keep the mapping's iteration order
    return sorted(statuses.items(), key=lambda item: item[1], reverse=True)


def sort_header_values(header_values: Mapping[str, int]) -> list[tuple[str, int]]:
    return sorted(header_values.items(), key=lambda item: item[0])


def format_report(target: TargetConfig, snapshot: Snapshot) -> str:
    total = snapshot.total
    lines = [
        f"Target: {target.url}",
        f"Header to check: {target.header}",
        f"Concurrent requests: {target.concurrency}",
        "",
        "=== Response status ===",
    ]
    if total > 0:
        for status, count in sort_statuses(snapshot.statuses):
            lines.append(f"{percentage(count, total):>4}% [{count}/{total}] {status}")
    lines.append("")
    lines.append(f"=== Response header {target.header} ===")
    if total > 0:
        for seq, (value, count) in enumerate(sort_header_values(snapshot.header_values), start=1):
            lines.append(f"{percentage(count, total):>4}% [{count}/{total}] {seq} {value}")
    lines.append("")
    return "\n".join(lines)


class SnapshotRenderer:
    def __init__(
        self,
        target: TargetConfig,
        aggregator: Aggregator,
        display: Display,
        interval_sec: float = DEFAULT_INTERVAL_SEC,
    ) -> None:
        self.target = target
        self.aggregator = aggregator
        self.display = display
        self.interval_sec = interval_sec

    async def render_once(self) -> str:
        snapshot = await self.aggregator.snapshot()
        report = format_report(self.target, snapshot)
        self.display.clear()
        self.display.write(report)
        return report

    async def run(self) -> None:
        logger.debug("renderer.started interval_sec=%s", self.interval_sec)
        while True:
            await self.render_once()
            await asyncio.sleep(self.interval_sec)
