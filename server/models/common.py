"""Common Pydantic models shared across routes."""

from typing import List, Optional

from pydantic import BaseModel


class ItemCard(BaseModel):
    identity: str
    source: str
    url: str
    width: int
    height: int
    orientation: str
    media: str
    tags: List[str] = []
    mime: str = "image/jpeg"


class ScoredCard(BaseModel):
    card: ItemCard
    metadata_score: float
    similarity_score: Optional[float] = None
    exploration_bonus: float = 0.0
    final_score: float
    queue_position: Optional[int] = None
