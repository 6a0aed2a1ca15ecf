"""Pydantic request/response models for the API."""

from .common import ItemCard, ScoredCard
from .feed import (
    FeedResponse,
    GestureRequest,
    GestureResponse,
    ImageErrorRequest,
    LikedResponse,
    RankingResponse,
    VoteRequest,
)

__all__ = [
    "ItemCard",
    "ScoredCard",
    "FeedResponse",
    "GestureRequest",
    "GestureResponse",
    "ImageErrorRequest",
    "LikedResponse",
    "RankingResponse",
    "VoteRequest",
]
