"""
Error taxonomy for the feed.

Only AllSourcesFailedError is meant to reach the user-visible layer; the
others are absorbed at the component boundary where they occur.
"""

from typing import Optional


class FeedError(Exception):
    """Base class for feed errors."""


class SourceFetchError(FeedError):
    """One content source could not be fetched."""

    def __init__(self, source: str, cause: Optional[BaseException] = None):
        self.source = source
        self.cause = cause
        super().__init__(f"Content source '{source}' failed: {cause}")


class AllSourcesFailedError(FeedError):
    """Every content source failed on a refill attempt."""

    def __init__(self, failures: Optional[list] = None):
        self.failures = list(failures or [])
        names = ", ".join(f.source for f in self.failures) or "none configured"
        super().__init__(f"All content sources failed ({names})")


class ImageUnavailableError(FeedError):
    """The media behind an item could not be loaded."""

    def __init__(self, identity: str, url: str = "", cause: Optional[BaseException] = None):
        self.identity = identity
        self.url = url
        self.cause = cause
        super().__init__(f"Image unavailable for {identity}: {url or '?'}")


class EmbeddingError(FeedError):
    """Embedding inference failed for an item."""


class StorageCorruptError(FeedError):
    """Persisted liked history could not be decoded."""
