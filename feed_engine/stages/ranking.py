"""
Recommender: hybrid scoring and best-candidate selection.

final = metadata score (with noise)
        + cosine(embedding, centroid) * similarity_weight   if centroid and embedding
        + exploration_bonus                                 if centroid and no embedding yet
"""

import logging
import random
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.item import ContentItem
from ..models.preferences import PreferenceWeights
from ..models.scoring import ScoredItem
from ..utils.vector import cosine_similarity
from .embedding_cache import EmbeddingCache
from .preference import draw_noise, metadata_score

if TYPE_CHECKING:
    from .queue import QueueManager

logger = logging.getLogger(__name__)


def hybrid_score(
    item: ContentItem,
    weights: PreferenceWeights,
    centroid: Optional[np.ndarray],
    embedding: Optional[np.ndarray],
    noise: float,
    config: FeedConfig = DEFAULT_CONFIG,
) -> ScoredItem:
    """Score one candidate from metadata weights and, when available, visual similarity."""
    meta = metadata_score(item, weights, noise, config)
    similarity = None
    bonus = 0.0
    final = meta
    if centroid is not None:
        if embedding is not None:
            similarity = cosine_similarity(embedding, centroid)
            final += similarity * config.similarity_weight
        else:
            bonus = config.exploration_bonus
            final += bonus
    return ScoredItem(
        item=item,
        metadata_score=meta,
        similarity_score=similarity,
        exploration_bonus=bonus,
        final_score=final,
    )


def _score_candidate(
    item: ContentItem,
    weights: PreferenceWeights,
    embeddings: Optional[EmbeddingCache],
    rng: Optional[random.Random],
    config: FeedConfig,
) -> ScoredItem:
    centroid = embeddings.centroid if embeddings is not None else None
    embedding = embeddings.cached(item) if embeddings is not None else None
    scored = hybrid_score(item, weights, centroid, embedding, draw_noise(rng, config.noise_scale), config)
    # Missing vectors are computed in the background; they count from the next pick on.
    if embeddings is not None and embeddings.enabled and embedding is None:
        embeddings.prefetch(item)
    return scored


def rank_candidates(
    candidates: List[ContentItem],
    weights: PreferenceWeights,
    embeddings: Optional[EmbeddingCache] = None,
    rng: Optional[random.Random] = None,
    config: FeedConfig = DEFAULT_CONFIG,
) -> List[ScoredItem]:
    """Score every candidate (without removing any), best first."""
    scored = [_score_candidate(item, weights, embeddings, rng, config) for item in candidates]
    scored.sort(key=lambda s: s.final_score, reverse=True)
    return scored


def pick_best(
    queue: "QueueManager",
    weights: PreferenceWeights,
    embeddings: Optional[EmbeddingCache] = None,
    rng: Optional[random.Random] = None,
    config: FeedConfig = DEFAULT_CONFIG,
) -> Optional[ContentItem]:
    """
    Remove and return the highest-scoring candidate from the queue.

    Linear scan; the strict maximum wins, so ties keep the earliest candidate.
    Returns None for an empty queue.
    """
    candidates = queue.items
    if not candidates:
        return None

    best_index = 0
    best_score = float("-inf")
    for index, item in enumerate(candidates):
        scored = _score_candidate(item, weights, embeddings, rng, config)
        if scored.final_score > best_score:
            best_score = scored.final_score
            best_index = index

    chosen = queue.take(best_index)
    logger.debug(
        "[ranking] PICKED identity=%s score=%.4f candidates=%s",
        chosen.identity, best_score, len(candidates),
    )
    return chosen
