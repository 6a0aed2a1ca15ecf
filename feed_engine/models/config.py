"""
Feed configuration — preference learning, scoring, embeddings, queue, history and gesture parameters.

FeedConfig defaults are defined here. The server may pass a dict
(e.g. from a JSON file); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, model_validator


class FeedConfig(BaseModel):
    """Configuration for the swipe feed."""

    # -------------------------------------------------------------------------
    # Preference learning
    # weights[feature] += delta * factor on every decision
    # -------------------------------------------------------------------------

    # Delta applied to every feature of a liked item.
    like_delta: float = 1.0
    # Delta applied on a pass. |pass_delta| < like_delta.
    pass_delta: float = -0.35
    # Orientation and media updates are damped relative to tags/source.
    orientation_feedback_factor: float = 0.7
    media_feedback_factor: float = 0.5
    # Only the first N (lowercased) tags of an item are used as features.
    max_tags: int = 8

    # -------------------------------------------------------------------------
    # Metadata scoring
    # score = noise + Σ tag*w_tag + source*w_source + orientation*w_orient + media*w_media
    # -------------------------------------------------------------------------

    tag_score_weight: float = 0.45
    source_score_weight: float = 0.25
    orientation_score_weight: float = 0.22
    media_score_weight: float = 0.15
    # Uniform noise in [0, noise_scale) keeps exploration alive when weights are flat.
    noise_scale: float = 0.2

    # -------------------------------------------------------------------------
    # Visual similarity
    # score += cosine(embedding, centroid) * similarity_weight
    # -------------------------------------------------------------------------

    similarity_weight: float = 2.2
    # Flat bonus for candidates whose embedding is not computed yet (centroid present).
    exploration_bonus: float = 0.06
    # Most recent liked vectors kept for the centroid.
    liked_vector_limit: int = 60
    # Liked items re-embedded at startup to rebuild the centroid.
    rebuild_from_history_limit: int = 25
    # Candidates embedded eagerly after each refill.
    warm_limit: int = 10

    # -------------------------------------------------------------------------
    # Queue
    # -------------------------------------------------------------------------

    # Hard cap on items accepted from a single refill.
    ingest_cap: int = 36
    # Refill is triggered when the queue drops below this length.
    low_watermark: int = 10

    # -------------------------------------------------------------------------
    # Liked history
    # -------------------------------------------------------------------------

    liked_history_limit: int = 120

    # -------------------------------------------------------------------------
    # Gesture
    # threshold = max(swipe_min_distance, viewport_width * swipe_distance_fraction)
    # -------------------------------------------------------------------------

    deadzone_px: float = 8.0
    swipe_min_distance: float = 72.0
    swipe_distance_fraction: float = 0.18
    # px per ms; a release faster than this commits regardless of distance.
    flick_velocity: float = 0.45
    # Offset past which the like/pass badge is shown while dragging.
    badge_offset: float = 22.0
    viewport_width: float = 390.0

    @model_validator(mode="after")
    def likes_outweigh_passes(self):
        if self.like_delta <= 0 or self.pass_delta >= 0:
            raise ValueError(
                f"like_delta must be positive and pass_delta negative, got {self.like_delta}/{self.pass_delta}"
            )
        if abs(self.pass_delta) >= self.like_delta:
            raise ValueError(
                f"A pass must cost less than a like gains, got {self.pass_delta} vs {self.like_delta}"
            )
        return self

    @property
    def swipe_threshold(self) -> float:
        """Distance a horizontal drag must exceed to commit."""
        return max(self.swipe_min_distance, self.viewport_width * self.swipe_distance_fraction)

    def with_viewport(self, viewport_width: float) -> "FeedConfig":
        """Copy of this config for a different viewport width."""
        return self.model_copy(update={"viewport_width": viewport_width})

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "FeedConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        for section in ("preference", "scoring", "embedding", "queue", "history", "gesture"):
            if section in config_dict:
                flat.update(config_dict[section])
        # Top-level keys override section values.
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = FeedConfig()

# Deployment pulling from three sources at once: larger batches, earlier refills.
MULTI_SOURCE_CONFIG = FeedConfig(
    ingest_cap=90,
    low_watermark=30,
    liked_history_limit=160,
    swipe_distance_fraction=0.22,
)

PRESETS: Dict[str, FeedConfig] = {
    "default": DEFAULT_CONFIG,
    "multi_source": MULTI_SOURCE_CONFIG,
}


def resolve_config(config: Optional["FeedConfig"]) -> "FeedConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
