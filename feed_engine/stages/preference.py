"""
Preference model: feature extraction, additive online weight updates, metadata scoring.

Every decision nudges the weights of the item's features: a like adds
like_delta, a pass adds pass_delta. Scoring is a weighted sum of the
candidate's feature weights plus a small random perturbation.
"""

import logging
import random
from typing import Iterable, Optional

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.item import ContentItem
from ..models.preferences import FeatureSet, PreferenceWeights

logger = logging.getLogger(__name__)


def extract_features(item: ContentItem, config: FeedConfig = DEFAULT_CONFIG) -> FeatureSet:
    """Derive orientation, media kind, lowercase tags and source from an item."""
    if item.width > item.height:
        orientation = "landscape"
    elif item.width < item.height:
        orientation = "portrait"
    else:
        orientation = "square"
    media = "animated" if "gif" in (item.mime or "").lower() else "static"
    return FeatureSet(
        orientation=orientation,
        media=media,
        tags=[tag.lower() for tag in item.tags][: config.max_tags],
        source=item.source,
    )


def apply_feedback(
    weights: PreferenceWeights,
    item: ContentItem,
    delta: float,
    config: FeedConfig = DEFAULT_CONFIG,
) -> None:
    """Add delta to every feature weight of item (damped for orientation and media). Mutates weights."""
    features = extract_features(item, config)
    for tag in features.tags:
        weights.add("tags", tag, delta)
    weights.add("source", features.source, delta)
    weights.add("orientation", features.orientation, delta * config.orientation_feedback_factor)
    weights.add("media", features.media, delta * config.media_feedback_factor)


def draw_noise(rng: Optional[random.Random] = None, scale: float = DEFAULT_CONFIG.noise_scale) -> float:
    """Uniform perturbation in [0, scale) drawn once per scoring call."""
    return (rng or random).random() * scale


def metadata_score(
    item: ContentItem,
    weights: PreferenceWeights,
    noise: float,
    config: FeedConfig = DEFAULT_CONFIG,
) -> float:
    """noise + Σ tag weights*w_tag + source*w_source + orientation*w_orient + media*w_media."""
    features = extract_features(item, config)
    score = noise
    for tag in features.tags:
        score += weights.weight_of("tags", tag) * config.tag_score_weight
    score += weights.weight_of("source", features.source) * config.source_score_weight
    score += weights.weight_of("orientation", features.orientation) * config.orientation_score_weight
    score += weights.weight_of("media", features.media) * config.media_score_weight
    return score


class PreferenceModel:
    """Owns the shared PreferenceWeights and applies decisions to them."""

    def __init__(self, config: FeedConfig = DEFAULT_CONFIG, weights: Optional[PreferenceWeights] = None):
        self.config = config
        self.weights = weights if weights is not None else PreferenceWeights()

    def like(self, item: ContentItem) -> None:
        apply_feedback(self.weights, item, self.config.like_delta, self.config)

    def dislike(self, item: ContentItem) -> None:
        apply_feedback(self.weights, item, self.config.pass_delta, self.config)

    def score(self, item: ContentItem, noise: float = 0.0) -> float:
        return metadata_score(item, self.weights, noise, self.config)

    def rehydrate(self, history: Iterable[ContentItem]) -> int:
        """Replay liked history as likes. Returns the number of items applied."""
        count = 0
        for item in history:
            self.like(item)
            count += 1
        logger.info("[preference] REHYDRATED liked_items=%s", count)
        return count

    def reset(self) -> None:
        self.weights.clear()
