"""
Preference model tests.

Covers feature extraction (orientation, media kind, tags), the exact weight
deltas applied by feedback, metadata scoring and the liked-history
rehydration and clear-history scenarios.

Run:
----
    pytest tests/test_preference.py -v
"""

import random

import pytest

from feed_engine.models.config import FeedConfig
from feed_engine.models.preferences import PreferenceWeights
from feed_engine.stages.preference import (
    PreferenceModel,
    apply_feedback,
    draw_noise,
    extract_features,
    metadata_score,
)

from .fakes import make_item


class TestExtractFeatures:
    @pytest.mark.parametrize(
        "width,height,expected",
        [(800, 600, "landscape"), (600, 800, "portrait"), (500, 500, "square"), (0, 0, "square")],
    )
    def test_orientation(self, width, height, expected):
        item = make_item("x", width=width, height=height)
        assert extract_features(item).orientation == expected

    def test_gif_mime_is_animated(self):
        assert extract_features(make_item("x", mime="image/GIF")).media == "animated"
        assert extract_features(make_item("y", mime="image/png")).media == "static"

    def test_tags_lowercased_and_capped(self):
        config = FeedConfig(max_tags=2)
        item = make_item("x", tags=["Cute", "ORANGE", "sleepy"])
        assert extract_features(item, config).tags == ["cute", "orange"]

    def test_source_passed_through(self):
        assert extract_features(make_item("x", source="CATAAS")).source == "CATAAS"


class TestApplyFeedback:
    def test_exact_deltas_on_empty_weights(self):
        weights = PreferenceWeights()
        item = make_item("x", source="A", tags=["cute", "fluffy"], width=800, height=600)
        apply_feedback(weights, item, 2.0)

        assert weights.tags == {"cute": 2.0, "fluffy": 2.0}
        assert weights.source == {"A": 2.0}
        assert weights.orientation == {"landscape": pytest.approx(1.4)}
        assert weights.media == {"static": pytest.approx(1.0)}

    def test_like_and_pass_accumulate(self):
        model = PreferenceModel()
        item = make_item("x", source="A", tags=["cute"])
        model.like(item)
        model.dislike(item)
        assert model.weights.tags["cute"] == pytest.approx(1.0 - 0.35)
        assert model.weights.source["A"] == pytest.approx(0.65)


class TestMetadataScore:
    def test_untouched_weights_score_is_noise(self):
        item = make_item("x", tags=["cute"])
        assert metadata_score(item, PreferenceWeights(), 0.13) == pytest.approx(0.13)

    def test_liked_item_outscores_disjoint_item(self):
        model = PreferenceModel()
        liked = make_item("a", source="A", tags=["cute"], width=800, height=600)
        other = make_item("b", source="B", tags=["other"], width=600, height=800, mime="image/gif")
        model.like(liked)
        assert model.score(liked) > model.score(other)
        assert model.score(other) == 0.0

    def test_noise_is_bounded(self):
        rng = random.Random(7)
        draws = [draw_noise(rng, 0.2) for _ in range(200)]
        assert all(0.0 <= d < 0.2 for d in draws)


class TestHistoryScenarios:
    def test_rehydrated_history_prefers_matching_item(self):
        model = PreferenceModel()
        count = model.rehydrate([make_item("old", source="A", tags=["cute"])])
        assert count == 1

        matching = make_item("new1", source="A", tags=["cute"])
        unrelated = make_item("new2", source="B", tags=["other"])
        assert model.score(matching) > model.score(unrelated)

    def test_reset_equalizes_scores(self):
        model = PreferenceModel()
        liked = make_item("a", source="A", tags=["cute"])
        passed = make_item("b", source="B", tags=["grumpy"], width=600, height=800)
        model.like(liked)
        model.dislike(passed)
        assert model.score(liked) != model.score(passed)

        model.reset()
        assert model.weights.is_empty()
        assert model.score(liked) == model.score(passed) == 0.0
