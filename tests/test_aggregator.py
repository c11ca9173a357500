from __future__ import annotations

import asyncio

from hypothesis import given, strategies as st

from xtop.metrics import Aggregator, ErrorType, Result, Snapshot

results = st.one_of(
    st.builds(Result.ok, st.sampled_from(["200 OK", "404 Not Found", "502 Bad Gateway"]), st.sampled_from(["", "a", "b"])),
    st.builds(Result.failed, st.sampled_from(list(ErrorType))),
)


async def _feed(items: list[Result]) -> Snapshot:
    aggregator = Aggregator()
    for item in items:
        await aggregator.apply(item)
    return await aggregator.snapshot()


@given(st.lists(results, max_size=60))
def test_totals_match_successes_and_failures(items: list[Result]) -> None:
    snapshot = asyncio.run(_feed(items))
    successes = sum(1 for item in items if item.is_success)
    assert snapshot.total == len(items)
    assert sum(snapshot.statuses.values()) == successes
    assert sum(snapshot.header_values.values()) == successes
    assert snapshot.failures == len(items) - successes


def test_failure_counts_toward_total_only() -> None:
    snapshot = asyncio.run(_feed([Result.failed(ErrorType.CONNECT)]))
    assert snapshot.total == 1
    assert snapshot.statuses == {}
    assert snapshot.header_values == {}


def test_missing_header_is_tallied_as_empty_string() -> None:
    snapshot = asyncio.run(_feed([Result.ok("200 OK"), Result.ok("200 OK", "nginx")]))
    assert snapshot.statuses == {"200 OK": 2}
    assert snapshot.header_values == {"": 1, "nginx": 1}


def test_snapshot_is_a_copy() -> None:
    async def scenario() -> tuple[Snapshot, Snapshot]:
        aggregator = Aggregator()
        await aggregator.apply(Result.ok("200 OK", "nginx"))
        first = await aggregator.snapshot()
        await aggregator.apply(Result.ok("200 OK", "nginx"))
        return first, await aggregator.snapshot()

    first, second = asyncio.run(scenario())
    assert first.total == 1
    assert first.statuses == {"200 OK": 1}
    assert second.statuses == {"200 OK": 2}


def test_concurrent_producers_lose_nothing() -> None:
    producers = 8
    per_producer = 250

    async def scenario() -> Snapshot:
        aggregator = Aggregator()
        queue: asyncio.Queue[Result] = asyncio.Queue(maxsize=producers)
        consumer = asyncio.create_task(aggregator.run(queue))

        async def produce(n: int) -> None:
            for i in range(per_producer):
                if i % 5 == 0:
                    await queue.put(Result.failed(ErrorType.TIMEOUT))
                else:
                    await queue.put(Result.ok("200 OK", f"node-{n}"))
                await asyncio.sleep(0)

        await asyncio.gather(*(produce(n) for n in range(producers)))
        await queue.join()
        consumer.cancel()
        await asyncio.gather(consumer, return_exceptions=True)
        return await aggregator.snapshot()

    snapshot = asyncio.run(scenario())
    assert snapshot.total == producers * per_producer
    assert snapshot.statuses == {"200 OK": producers * per_producer * 4 // 5}
    assert len(snapshot.header_values) == producers
    assert all(count == per_producer * 4 // 5 for count in snapshot.header_values.values())


def test_each_aggregator_owns_fresh_metrics() -> None:
    async def scenario() -> tuple[Snapshot, Snapshot]:
        first = Aggregator()
        await first.apply(Result.ok("200 OK", "nginx"))
        second = Aggregator()
        return await first.snapshot(), await second.snapshot()

    used, fresh = asyncio.run(scenario())
    assert used.total == 1
    assert fresh == Snapshot(total=0, statuses={}, header_values={})
