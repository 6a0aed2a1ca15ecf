"""
SwipeFeed engine — personalized swipe-to-like content feed.

Single entry point for the engine package:
- models/: FeedConfig, ContentItem, PreferenceWeights, ScoredItem, gesture events/states
- stages/: preference model, embedding cache, ranking, queue, sources, history, orchestrator
- gesture/: swipe state machine
- utils/: vector math, coalescing cache, background task tracking
"""

from .errors import (
    AllSourcesFailedError,
    EmbeddingError,
    FeedError,
    ImageUnavailableError,
    SourceFetchError,
    StorageCorruptError,
)
from .gesture import GestureController, transition
from .models import (
    DEFAULT_CONFIG,
    MULTI_SOURCE_CONFIG,
    PRESETS,
    ContentItem,
    Decision,
    EventType,
    FeedConfig,
    GestureEvent,
    GestureState,
    GestureStep,
    Phase,
    PreferenceWeights,
    ScoredItem,
    resolve_config,
)
from .stages import (
    ContentSource,
    EmbeddingCache,
    EmbeddingModel,
    FeedController,
    LikedHistory,
    PreferenceModel,
    QueueManager,
    SessionStore,
    apply_feedback,
    extract_features,
    fetch_from_sources,
    hybrid_score,
    metadata_score,
    pick_best,
)
from .utils import centroid_of, cosine_similarity, normalize

__all__ = [
    "AllSourcesFailedError",
    "EmbeddingError",
    "FeedError",
    "ImageUnavailableError",
    "SourceFetchError",
    "StorageCorruptError",
    "GestureController",
    "transition",
    "DEFAULT_CONFIG",
    "MULTI_SOURCE_CONFIG",
    "PRESETS",
    "ContentItem",
    "Decision",
    "EventType",
    "FeedConfig",
    "GestureEvent",
    "GestureState",
    "GestureStep",
    "Phase",
    "PreferenceWeights",
    "ScoredItem",
    "resolve_config",
    "ContentSource",
    "EmbeddingCache",
    "EmbeddingModel",
    "FeedController",
    "LikedHistory",
    "PreferenceModel",
    "QueueManager",
    "SessionStore",
    "apply_feedback",
    "extract_features",
    "fetch_from_sources",
    "hybrid_score",
    "metadata_score",
    "pick_best",
    "centroid_of",
    "cosine_similarity",
    "normalize",
]
