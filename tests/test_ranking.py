"""
Recommender tests: hybrid scoring and best-candidate selection.

Run:
----
    pytest tests/test_ranking.py -v
"""

import asyncio
import random

import numpy as np
import pytest

from feed_engine.models.config import FeedConfig
from feed_engine.models.preferences import PreferenceWeights
from feed_engine.stages.embedding_cache import EmbeddingCache
from feed_engine.stages.preference import PreferenceModel
from feed_engine.stages.queue import QueueManager
from feed_engine.stages.ranking import hybrid_score, pick_best, rank_candidates

from .fakes import FakeEmbeddingModel, make_item

NO_NOISE = FeedConfig(noise_scale=0.0)


class TestHybridScore:
    def test_metadata_only_without_centroid(self):
        scored = hybrid_score(make_item("a"), PreferenceWeights(), None, np.array([1.0, 0.0]), 0.1)
        assert scored.final_score == pytest.approx(0.1)
        assert scored.similarity_score is None
        assert scored.exploration_bonus == 0.0

    def test_similarity_term(self):
        centroid = np.array([1.0, 0.0])
        scored = hybrid_score(make_item("a"), PreferenceWeights(), centroid, np.array([1.0, 0.0]), 0.0)
        assert scored.similarity_score == pytest.approx(1.0)
        assert scored.final_score == pytest.approx(2.2)

    def test_exploration_bonus_when_embedding_missing(self):
        scored = hybrid_score(make_item("a"), PreferenceWeights(), np.array([1.0, 0.0]), None, 0.0)
        assert scored.exploration_bonus == pytest.approx(0.06)
        assert scored.final_score == pytest.approx(0.06)

    def test_visual_similarity_outweighs_metadata(self):
        model = PreferenceModel()
        metadata_match = make_item("meta", source="A", tags=["cute"])
        model.like(metadata_match)
        visual_match = make_item("vis", source="B", tags=["other"], width=600, height=800)
        centroid = np.array([1.0, 0.0])

        meta_scored = hybrid_score(metadata_match, model.weights, centroid, np.array([0.0, 1.0]), 0.0)
        vis_scored = hybrid_score(visual_match, model.weights, centroid, np.array([1.0, 0.0]), 0.0)
        assert vis_scored.final_score > meta_scored.final_score


class TestPickBest:
    def test_removes_exactly_one(self):
        queue = QueueManager()
        queue.ingest([make_item(f"i{n}") for n in range(5)])
        rng = random.Random(1)
        for expected in range(4, -1, -1):
            chosen = pick_best(queue, PreferenceWeights(), rng=rng)
            assert chosen.identity not in queue
            assert len(queue) == expected

    def test_empty_queue(self):
        assert pick_best(QueueManager(), PreferenceWeights()) is None

    def test_ties_keep_earliest(self):
        queue = QueueManager()
        queue.ingest([make_item("first"), make_item("second")])
        assert pick_best(queue, PreferenceWeights(), config=NO_NOISE).identity == "first"

    def test_prefers_liked_features(self):
        model = PreferenceModel(NO_NOISE)
        model.like(make_item("old", source="A", tags=["cute"]))
        queue = QueueManager()
        queue.ingest([
            make_item("plain", source="B", tags=["other"]),
            make_item("match", source="A", tags=["cute"]),
        ])
        assert pick_best(queue, model.weights, config=NO_NOISE).identity == "match"

    def test_missing_embeddings_are_prefetched(self):
        model = FakeEmbeddingModel()
        items = [make_item(f"i{n}") for n in range(3)]

        async def scenario():
            cache = EmbeddingCache(model, NO_NOISE)
            queue = QueueManager()
            queue.ingest(items)
            chosen = pick_best(queue, PreferenceWeights(), cache, config=NO_NOISE)
            await cache.tracker.wait_idle()
            return chosen, cache.size

        chosen, size = asyncio.run(scenario())
        assert chosen.identity == "i0"
        assert size == 3

    def test_visually_closest_wins_once_centroid_exists(self):
        model = FakeEmbeddingModel({
            "https://img.test/far.jpg": (0.0, 1.0),
            "https://img.test/near.jpg": (1.0, 0.1),
            "https://img.test/liked.jpg": (1.0, 0.0),
        })

        async def scenario():
            cache = EmbeddingCache(model, NO_NOISE)
            await cache.record_like(make_item("liked"))
            queue = QueueManager()
            queue.ingest([make_item("far"), make_item("near")])
            for item in queue.items:
                await cache.get_embedding(item)
            return pick_best(queue, PreferenceWeights(), cache, config=NO_NOISE)

        assert asyncio.run(scenario()).identity == "near"


class TestRankCandidates:
    def test_sorted_best_first_without_removal(self):
        model = PreferenceModel(NO_NOISE)
        model.like(make_item("old", source="A", tags=["cute"]))
        candidates = [make_item("b", source="B"), make_item("a", source="A", tags=["cute"])]
        ranked = rank_candidates(candidates, model.weights, config=NO_NOISE)
        assert [s.item.identity for s in ranked] == ["a", "b"]
        assert ranked[0].final_score >= ranked[1].final_score
