"""Shared utilities: vector math, coalescing cache, background task tracking."""

from .coalescing import CoalescingCache
from .tasks import TaskTracker
from .vector import centroid_of, cosine_similarity, normalize

__all__ = [
    "CoalescingCache",
    "TaskTracker",
    "centroid_of",
    "cosine_similarity",
    "normalize",
]
