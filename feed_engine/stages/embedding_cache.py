"""
Embedding cache: per-item visual vectors and the centroid of liked vectors.

Vectors are computed lazily through an EmbeddingModel, unit-normalized and
memoized by item identity; concurrent requests for the same identity share
one computation. Visual personalization is an enhancement only: every
failure degrades to "no vector" and is never raised to callers.
"""

import logging
from typing import Iterable, List, Optional, Protocol, Sequence, Set

import numpy as np

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.item import ContentItem
from ..utils.coalescing import CoalescingCache
from ..utils.tasks import TaskTracker
from ..utils.vector import centroid_of, normalize

logger = logging.getLogger(__name__)


class EmbeddingModel(Protocol):
    """Boundary to the visual embedding model. Implementations may raise on failure."""

    async def embed(self, url: str) -> Sequence[float]:
        """Return a fixed-length feature vector for the image at url."""
        ...


class EmbeddingCache:
    """
    Memoized item embeddings plus the running centroid of liked items.

    With no model configured the cache is disabled: lookups return None and
    the centroid stays None.
    """

    def __init__(
        self,
        model: Optional[EmbeddingModel] = None,
        config: FeedConfig = DEFAULT_CONFIG,
        tracker: Optional[TaskTracker] = None,
    ):
        self.model = model
        self.config = config
        self.tracker = tracker or TaskTracker("embedding")
        self._vectors: CoalescingCache[str, np.ndarray] = CoalescingCache(self.tracker)
        self.liked_vectors: List[np.ndarray] = []
        self._liked_ids: Set[str] = set()
        self.centroid: Optional[np.ndarray] = None
        # Bumped on reset; like-vector additions started before a reset are dropped.
        self.generation = 0

    @property
    def enabled(self) -> bool:
        return self.model is not None

    @property
    def size(self) -> int:
        return len(self._vectors)

    @property
    def pending(self) -> int:
        return self._vectors.pending_count

    def cached(self, item: ContentItem) -> Optional[np.ndarray]:
        """Cached vector for item, without starting a computation."""
        return self._vectors.get(item.identity)

    async def _compute(self, item: ContentItem) -> Optional[np.ndarray]:
        try:
            raw = await self.model.embed(item.url)
        except Exception as exc:
            logger.warning(
                "[embedding] EMBEDDING_FAILED identity=%s url=%s error=%r",
                item.identity, item.url, exc,
            )
            return None
        vector = normalize(raw)
        if vector.size == 0 or not np.any(vector):
            logger.warning("[embedding] EMBEDDING_EMPTY identity=%s", item.identity)
            return None
        return vector

    async def get_embedding(self, item: ContentItem) -> Optional[np.ndarray]:
        """Cached vector, else the in-flight result for this identity, else a new computation."""
        if not self.enabled:
            return None
        return await self._vectors.get_or_compute(item.identity, lambda: self._compute(item))

    def prefetch(self, item: ContentItem) -> None:
        """Start computing item's vector in the background if not cached or in flight."""
        if not self.enabled:
            return
        self._vectors.start(item.identity, lambda: self._compute(item))

    def warm(self, items: Iterable[ContentItem], limit: Optional[int] = None) -> None:
        """Prefetch the first `limit` items."""
        limit = self.config.warm_limit if limit is None else limit
        for i, item in enumerate(items):
            if i >= limit:
                break
            self.prefetch(item)

    def forget(self, item: ContentItem) -> None:
        """Drop item's cached vector (e.g. its image became unavailable)."""
        self._vectors.discard(item.identity)

    def add_liked(self, item: ContentItem, vector: Optional[np.ndarray]) -> bool:
        """
        Record a liked item's vector and recompute the centroid.

        No-op when vector is None or the item was already recorded.
        """
        if vector is None or item.identity in self._liked_ids:
            return False
        self._liked_ids.add(item.identity)
        self.liked_vectors.insert(0, vector)
        del self.liked_vectors[self.config.liked_vector_limit:]
        self.centroid = centroid_of(self.liked_vectors)
        return True

    async def record_like(self, item: ContentItem) -> bool:
        """Embed a liked item and add it to the centroid, unless a reset happened meanwhile."""
        if not self.enabled:
            return False
        generation = self.generation
        vector = await self.get_embedding(item)
        if generation != self.generation:
            logger.info("[embedding] STALE_LIKE_DROPPED identity=%s", item.identity)
            return False
        return self.add_liked(item, vector)

    async def rebuild_from_history(self, history: Sequence[ContentItem], limit: Optional[int] = None) -> int:
        """Re-embed the most recent liked items to rebuild the centroid. Returns vectors added."""
        if not self.enabled:
            return 0
        limit = self.config.rebuild_from_history_limit if limit is None else limit
        added = 0
        # Oldest first, so the most recent like ends up at the front.
        for item in reversed(history[:limit]):
            if await self.record_like(item):
                added += 1
        logger.info("[embedding] CENTROID_REBUILT added=%s history=%s", added, len(history))
        return added

    def reset(self) -> None:
        """Drop liked vectors and centroid. Per-item vectors stay cached."""
        self.liked_vectors = []
        self._liked_ids = set()
        self.centroid = None
        self.generation += 1
