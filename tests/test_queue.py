"""
Queue manager tests: dedup against the seen set, batch caps, refill guard
and removal.

Run:
----
    pytest tests/test_queue.py -v
"""

import asyncio

import pytest

from feed_engine.errors import AllSourcesFailedError
from feed_engine.models.config import FeedConfig
from feed_engine.stages.queue import QueueManager

from .fakes import GatedSource, StaticSource, make_item


class TestIngest:
    def test_never_admits_seen_identity(self):
        queue = QueueManager()
        queue.mark_seen(["a"])
        added = queue.ingest([make_item("a"), make_item("b")])
        assert [i.identity for i in added] == ["b"]
        assert "a" not in queue

    def test_same_batch_twice_adds_nothing_second_time(self):
        queue = QueueManager()
        batch = [make_item("a"), make_item("b"), make_item("c")]
        queue.ingest(batch)
        assert queue.ingest(batch) == []
        assert len(queue) == 3

    def test_duplicates_within_batch(self):
        queue = QueueManager()
        queue.ingest([make_item("a"), make_item("a", source="B")])
        assert len(queue) == 1

    def test_missing_url_rejected(self):
        queue = QueueManager()
        queue.ingest([make_item("a", url=""), make_item("b", url="   ")])
        assert len(queue) == 0
        assert queue.seen == set()

    def test_batch_cap(self):
        queue = QueueManager(config=FeedConfig(ingest_cap=4))
        added = queue.ingest([make_item(f"i{n}") for n in range(10)])
        assert len(added) == 4
        assert [i.identity for i in queue.items] == ["i0", "i1", "i2", "i3"]
        # Items beyond the cap were never admitted, so they may arrive later.
        assert "i5" not in queue.seen


class TestRemoval:
    def test_take_and_discard(self):
        queue = QueueManager()
        queue.ingest([make_item("a"), make_item("b"), make_item("c")])
        assert queue.take(1).identity == "b"
        assert queue.discard("c").identity == "c"
        assert queue.discard("missing") is None
        assert [i.identity for i in queue.items] == ["a"]
        assert {"b", "c"} <= queue.seen

    def test_needs_refill_below_watermark(self):
        queue = QueueManager(config=FeedConfig(low_watermark=2))
        queue.ingest([make_item("a")])
        assert queue.needs_refill()
        queue.ingest([make_item("b")])
        assert not queue.needs_refill()


class TestRefill:
    def test_refill_ingests_from_sources(self):
        source = StaticSource("A", [make_item("a"), make_item("b")])
        queue = QueueManager([source])
        added = asyncio.run(queue.refill())
        assert [i.identity for i in added] == ["a", "b"]
        assert not queue.fetching

    def test_second_refill_while_fetching_is_skipped(self):
        async def scenario():
            source = GatedSource("A", [make_item("a")])
            queue = QueueManager([source])
            first = asyncio.ensure_future(queue.refill())
            await asyncio.sleep(0)
            assert queue.fetching
            second = await queue.refill()
            source.release()
            return source.calls, second, await first

        calls, second, first = asyncio.run(scenario())
        assert calls == 1
        assert second == []
        assert [i.identity for i in first] == ["a"]

    def test_guard_released_after_all_sources_fail(self):
        source = StaticSource("A", [], fail=True)
        queue = QueueManager([source])
        with pytest.raises(AllSourcesFailedError):
            asyncio.run(queue.refill())
        assert not queue.fetching
