"""
Liked history: most-recent-first list of liked items, bounded and persisted after every change.
"""

import logging
from typing import Iterator, List, Optional, Protocol

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.item import ContentItem

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Persistence boundary for the liked history."""

    def load(self) -> List[ContentItem]:
        """Return the stored history, or [] when absent or unreadable. Never raises for corrupt data."""
        ...

    def save(self, history: List[ContentItem]) -> None:
        """Overwrite the stored history."""
        ...


class LikedHistory:
    """Bounded liked-items list backed by an optional SessionStore."""

    def __init__(self, store: Optional[SessionStore] = None, config: FeedConfig = DEFAULT_CONFIG):
        self.store = store
        self.config = config
        self.items: List[ContentItem] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[ContentItem]:
        return iter(self.items)

    @property
    def identities(self) -> List[str]:
        return [item.identity for item in self.items]

    def load(self) -> List[ContentItem]:
        """Replace in-memory history with the stored one (deduplicated, trimmed)."""
        stored = self.store.load() if self.store is not None else []
        items: List[ContentItem] = []
        seen = set()
        for item in stored:
            if item.identity in seen:
                continue
            seen.add(item.identity)
            items.append(item)
        self.items = items[: self.config.liked_history_limit]
        logger.info("[history] LOADED liked=%s", len(self.items))
        return self.items

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save(self.items)

    def add(self, item: ContentItem) -> None:
        """Put item at the front (moving it if already present), trim, persist."""
        self.items = [item] + [i for i in self.items if i.identity != item.identity]
        del self.items[self.config.liked_history_limit:]
        self._persist()

    def clear(self) -> None:
        self.items = []
        self._persist()
