"""Data models for the swipe feed."""

from .config import DEFAULT_CONFIG, MULTI_SOURCE_CONFIG, PRESETS, FeedConfig, resolve_config
from .gesture import (
    IDLE_STATE,
    Axis,
    Decision,
    DragState,
    EventType,
    GestureEvent,
    GestureState,
    GestureStep,
    Phase,
)
from .item import ContentItem
from .preferences import FeatureSet, PreferenceWeights
from .scoring import ScoredItem

__all__ = [
    "DEFAULT_CONFIG",
    "MULTI_SOURCE_CONFIG",
    "PRESETS",
    "FeedConfig",
    "resolve_config",
    "IDLE_STATE",
    "Axis",
    "Decision",
    "DragState",
    "EventType",
    "GestureEvent",
    "GestureState",
    "GestureStep",
    "Phase",
    "ContentItem",
    "FeatureSet",
    "PreferenceWeights",
    "ScoredItem",
]
