"""
Content item model — one presentable candidate fetched from a content source.

Used by the queue, preference model, ranking and embedding stages.
Built from source payloads or stored history via ContentItem.model_validate(d).
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ContentItem(BaseModel):
    """
    A candidate item, immutable once fetched.

    identity: stable unique key across sources (e.g. "cataas:abc123").
    mime: media-type marker; "gif" anywhere in it marks the item as animated.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    identity: str
    source: str
    url: str = ""
    width: int = 0
    height: int = 0
    tags: List[str] = Field(default_factory=list)
    mime: str = "image/jpeg"

    @property
    def has_usable_url(self) -> bool:
        return bool(self.url and self.url.strip())

