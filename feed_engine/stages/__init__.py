"""Feed stages: preference model, embeddings, ranking, queue, sources, history, orchestration."""

from .embedding_cache import EmbeddingCache, EmbeddingModel
from .history import LikedHistory, SessionStore
from .orchestrator import FETCH_ERROR_HINT, FeedContext, FeedController
from .preference import PreferenceModel, apply_feedback, draw_noise, extract_features, metadata_score
from .queue import QueueManager
from .ranking import hybrid_score, pick_best, rank_candidates
from .sources import ContentSource, fetch_from_sources

__all__ = [
    "EmbeddingCache",
    "EmbeddingModel",
    "LikedHistory",
    "SessionStore",
    "FETCH_ERROR_HINT",
    "FeedContext",
    "FeedController",
    "PreferenceModel",
    "apply_feedback",
    "draw_noise",
    "extract_features",
    "metadata_score",
    "QueueManager",
    "hybrid_score",
    "pick_best",
    "rank_candidates",
    "ContentSource",
    "fetch_from_sources",
]
