"""
Scoring model — ScoredItem, a candidate with its hybrid score components.
"""

from typing import Optional

from pydantic import BaseModel

from .item import ContentItem


class ScoredItem(BaseModel):
    """A candidate with all its scoring components."""

    item: ContentItem
    metadata_score: float
    # None when there is no centroid or the item has no embedding yet.
    similarity_score: Optional[float] = None
    exploration_bonus: float = 0.0
    final_score: float
