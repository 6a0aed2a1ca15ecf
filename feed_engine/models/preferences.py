"""
Preference models — derived item features and the additive weight maps learned from swipes.
"""

from typing import Dict, List, Literal

from pydantic import BaseModel, Field

Orientation = Literal["landscape", "portrait", "square"]
MediaKind = Literal["animated", "static"]


class FeatureSet(BaseModel):
    """Categorical features of an item used for scoring. Derived, never stored."""

    orientation: Orientation
    media: MediaKind
    tags: List[str] = Field(default_factory=list)
    source: str


class PreferenceWeights(BaseModel):
    """
    Four independent feature -> weight maps.

    Weights are unbounded in sign and magnitude and only ever change by
    addition. A feature that was never updated weighs 0.
    """

    tags: Dict[str, float] = Field(default_factory=dict)
    source: Dict[str, float] = Field(default_factory=dict)
    orientation: Dict[str, float] = Field(default_factory=dict)
    media: Dict[str, float] = Field(default_factory=dict)

    def weight_of(self, category: str, key: str) -> float:
        return getattr(self, category).get(key, 0.0)

    def add(self, category: str, key: str, delta: float) -> None:
        mapping: Dict[str, float] = getattr(self, category)
        mapping[key] = mapping.get(key, 0.0) + delta

    def clear(self) -> None:
        """Drop every learned weight (clear history)."""
        self.tags.clear()
        self.source.clear()
        self.orientation.clear()
        self.media.clear()

    def is_empty(self) -> bool:
        return not (self.tags or self.source or self.orientation or self.media)
