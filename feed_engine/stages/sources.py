"""
Content sources: the fetch boundary and the parallel merge across sources.

Sources are queried concurrently and fail independently; the merge only
fails when every source did.
"""

import asyncio
import logging
from typing import List, Protocol, Sequence

from ..errors import AllSourcesFailedError, SourceFetchError
from ..models.item import ContentItem

logger = logging.getLogger(__name__)


class ContentSource(Protocol):
    """Protocol for a supplier of candidate items."""

    name: str

    async def fetch(self) -> List[ContentItem]:
        """Return zero or more candidates. May raise on failure."""
        ...


async def fetch_from_sources(sources: Sequence[ContentSource]) -> List[ContentItem]:
    """
    Query every source in parallel and concatenate the successes in source order.

    A failing source is logged as SourceFetchError and skipped.
    Raises AllSourcesFailedError when every source failed.
    """
    if not sources:
        return []
    results = await asyncio.gather(*(s.fetch() for s in sources), return_exceptions=True)

    items: List[ContentItem] = []
    failures: List[SourceFetchError] = []
    for source, result in zip(sources, results):
        if isinstance(result, BaseException):
            failure = SourceFetchError(source.name, result)
            failures.append(failure)
            logger.warning("[sources] SOURCE_FETCH_FAILED source=%s error=%r", source.name, result)
            continue
        items.extend(result)

    if len(failures) == len(sources):
        raise AllSourcesFailedError(failures)
    logger.info(
        "[sources] FETCHED items=%s sources_ok=%s sources_failed=%s",
        len(items), len(sources) - len(failures), len(failures),
    )
    return items
