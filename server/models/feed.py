"""Request/response models for the feed routes."""

from typing import List, Optional

from pydantic import BaseModel

from feed_engine.models.gesture import Decision, EventType

from .common import ItemCard, ScoredCard


class VoteRequest(BaseModel):
    decision: Decision


class GestureRequest(BaseModel):
    type: EventType
    pointer_id: int = 0
    x: Optional[float] = None
    y: Optional[float] = None
    timestamp: float = 0.0
    key: Optional[str] = None
    decision: Optional[Decision] = None


class ImageErrorRequest(BaseModel):
    identity: str


class FeedResponse(BaseModel):
    current: Optional[ItemCard] = None
    queue_size: int = 0
    liked_count: int = 0
    fetch_error: Optional[str] = None


class GestureResponse(FeedResponse):
    phase: str
    badge: str = "none"
    decision: Optional[Decision] = None
    reset: bool = False
    offset_x: float = 0.0
    offset_y: float = 0.0


class LikedResponse(BaseModel):
    items: List[ItemCard]
    total: int


class RankingResponse(BaseModel):
    candidates: List[ScoredCard]
    queue_size: int
    centroid: bool
