"""
Queue manager: the bounded, duplicate-free pool of not-yet-shown candidates.

ingest() filters incoming items against everything ever seen this session,
caps the batch, and appends. refill() pulls from the content sources with a
single-flight guard, so at most one refill runs at a time.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Set

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.item import ContentItem
from .sources import ContentSource, fetch_from_sources

logger = logging.getLogger(__name__)


class QueueManager:
    """Owns the candidate queue and the session's seen set."""

    def __init__(self, sources: Sequence[ContentSource] = (), config: FeedConfig = DEFAULT_CONFIG):
        self.sources = list(sources)
        self.config = config
        self._items: List[ContentItem] = []
        # Never shrinks within a session.
        self.seen: Set[str] = set()
        self.fetching = False

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, identity: str) -> bool:
        return any(item.identity == identity for item in self._items)

    @property
    def items(self) -> List[ContentItem]:
        """Snapshot of the queue in order."""
        return list(self._items)

    def mark_seen(self, identities: Iterable[str]) -> None:
        self.seen.update(identities)

    def ingest(self, new_items: Iterable[ContentItem]) -> List[ContentItem]:
        """
        Append unseen items with a usable URL, capped at ingest_cap.

        Returns the items actually added.
        """
        accepted: List[ContentItem] = []
        batch_ids: Set[str] = set()
        for item in new_items:
            if len(accepted) >= self.config.ingest_cap:
                break
            if not item.has_usable_url:
                continue
            if item.identity in self.seen or item.identity in batch_ids:
                continue
            batch_ids.add(item.identity)
            accepted.append(item)

        self.seen.update(batch_ids)
        self._items.extend(accepted)
        logger.debug("[queue] INGESTED accepted=%s queue=%s seen=%s", len(accepted), len(self._items), len(self.seen))
        return accepted

    def needs_refill(self) -> bool:
        return len(self._items) < self.config.low_watermark

    async def refill(self) -> List[ContentItem]:
        """
        Fetch from all sources and ingest the result.

        Returns [] without fetching when a refill is already in flight.
        AllSourcesFailedError propagates after the guard is released.
        """
        if self.fetching:
            logger.debug("[queue] REFILL_SKIPPED fetching=True")
            return []
        self.fetching = True
        try:
            fetched = await fetch_from_sources(self.sources)
            return self.ingest(fetched)
        finally:
            self.fetching = False

    def take(self, index: int) -> ContentItem:
        """Remove and return the item at index."""
        return self._items.pop(index)

    def discard(self, identity: str) -> Optional[ContentItem]:
        """Remove the item with this identity, if queued. It stays in the seen set."""
        for index, item in enumerate(self._items):
            if item.identity == identity:
                return self._items.pop(index)
        return None
