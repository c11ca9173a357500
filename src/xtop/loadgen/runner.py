from __future__ import annotations

import asyncio
import logging

import httpx

from xtop.config import RenderConfig, TargetConfig
from xtop.loadgen.client import build_client, send_request
from xtop.metrics import Aggregator, Result, Snapshot
from xtop.ui.display import Display
from xtop.ui.render import SnapshotRenderer

logger = logging.getLogger(__name__)


async def request_worker(
    client: httpx.AsyncClient,
    target: TargetConfig,
    queue: asyncio.Queue[Result],
) -> None:
    while True:
        result = await send_request(client, target)
        await queue.put(result)


async def run_session(
    target: TargetConfig,
    display: Display,
    render: RenderConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> Snapshot:
    """Drive workers, aggregator and renderer until the display asks to quit.

    In-flight requests are abandoned on quit. If a background task dies, the
    session stops and its exception is raised once everything is torn down.
    Returns the last snapshot taken.
    """
    render = render or RenderConfig()
    queue: asyncio.Queue[Result] = asyncio.Queue(maxsize=target.concurrency)
    aggregator = Aggregator()
    renderer = SnapshotRenderer(target, aggregator, display, interval_sec=render.interval_sec)
    stop = asyncio.Event()
    failures: list[BaseException] = []

    def _on_done(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("session.task_failed task=%s", task.get_name(), exc_info=exc)
            failures.append(exc)
            stop.set()

    owns_client = client is None
    if client is None:
        client = build_client(target)
    logger.debug("session.started url=%s concurrency=%d header=%s", target.url, target.concurrency, target.header)
    tasks: list[asyncio.Task[None]] = [
        asyncio.create_task(request_worker(client, target, queue), name=f"xtop-worker-{i}")
        for i in range(target.concurrency)
    ]
    tasks.append(asyncio.create_task(aggregator.run(queue), name="xtop-aggregator"))
    tasks.append(asyncio.create_task(renderer.run(), name="xtop-renderer"))
    for task in tasks:
        task.add_done_callback(_on_done)
    try:
        await display.run(stop)
    finally:
        stop.set()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if owns_client:
            await client.aclose()
        logger.debug("session.stopped")
    if failures:
        raise failures[0]
    return await aggregator.snapshot()
