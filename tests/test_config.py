"""
Feed configuration tests: defaults, validation, nested dict loading and presets.

Run:
----
    pytest tests/test_config.py -v
"""

import pytest
from pydantic import ValidationError

from feed_engine.models.config import (
    DEFAULT_CONFIG,
    MULTI_SOURCE_CONFIG,
    PRESETS,
    FeedConfig,
    resolve_config,
)


class TestFeedConfig:
    def test_swipe_threshold_uses_larger_of_minimum_and_fraction(self):
        assert DEFAULT_CONFIG.swipe_threshold == pytest.approx(72.0)
        assert DEFAULT_CONFIG.with_viewport(1000).swipe_threshold == pytest.approx(180.0)

    def test_with_viewport_leaves_original_untouched(self):
        wide = DEFAULT_CONFIG.with_viewport(800)
        assert wide.viewport_width == 800
        assert DEFAULT_CONFIG.viewport_width == 390.0

    @pytest.mark.parametrize(
        "like_delta,pass_delta",
        [(1.0, -1.0), (1.0, -1.5), (0.0, -0.2), (1.0, 0.1)],
    )
    def test_pass_must_cost_less_than_like(self, like_delta, pass_delta):
        with pytest.raises(ValidationError):
            FeedConfig(like_delta=like_delta, pass_delta=pass_delta)

    def test_from_dict_merges_sections(self):
        config = FeedConfig.from_dict({
            "preference": {"pass_delta": -0.55},
            "scoring": {"tag_score_weight": 0.55},
            "queue": {"ingest_cap": 12},
            "gesture": {"viewport_width": 500},
            "noise_scale": 0.0,
            "unknown_key": 3,
        })
        assert config.pass_delta == -0.55
        assert config.tag_score_weight == 0.55
        assert config.ingest_cap == 12
        assert config.viewport_width == 500
        assert config.noise_scale == 0.0
        assert config.like_delta == DEFAULT_CONFIG.like_delta

    def test_presets(self):
        assert PRESETS["default"] is DEFAULT_CONFIG
        assert MULTI_SOURCE_CONFIG.ingest_cap == 90
        assert MULTI_SOURCE_CONFIG.low_watermark == 30
        assert MULTI_SOURCE_CONFIG.liked_history_limit == 160
        assert MULTI_SOURCE_CONFIG.swipe_distance_fraction == 0.22

    def test_resolve_config(self):
        custom = FeedConfig(ingest_cap=5)
        assert resolve_config(None) is DEFAULT_CONFIG
        assert resolve_config(custom) is custom
