"""
Source merge tests: parallel fetch with independent failures.

Run:
----
    pytest tests/test_sources.py -v
"""

import asyncio

import pytest

from feed_engine.errors import AllSourcesFailedError
from feed_engine.stages.sources import fetch_from_sources

from .fakes import StaticSource, make_item


class TestFetchFromSources:
    def test_concatenates_in_source_order(self):
        sources = [
            StaticSource("A", [make_item("a1"), make_item("a2")]),
            StaticSource("B", [make_item("b1", source="B")]),
        ]
        items = asyncio.run(fetch_from_sources(sources))
        assert [i.identity for i in items] == ["a1", "a2", "b1"]

    def test_partial_failure_is_tolerated(self, caplog):
        sources = [
            StaticSource("A", [make_item("a1")], fail=True),
            StaticSource("B", [make_item("b1", source="B")]),
        ]
        items = asyncio.run(fetch_from_sources(sources))
        assert [i.identity for i in items] == ["b1"]
        assert "SOURCE_FETCH_FAILED source=A" in caplog.text

    def test_all_failed_raises_with_every_source(self):
        sources = [StaticSource("A", [], fail=True), StaticSource("B", [], fail=True)]
        with pytest.raises(AllSourcesFailedError) as excinfo:
            asyncio.run(fetch_from_sources(sources))
        assert [f.source for f in excinfo.value.failures] == ["A", "B"]
        assert "A, B" in str(excinfo.value)

    def test_empty_source_list_returns_nothing(self):
        assert asyncio.run(fetch_from_sources([])) == []

    def test_source_returning_empty_batch_is_success(self):
        items = asyncio.run(fetch_from_sources([StaticSource("A", [])]))
        assert items == []
