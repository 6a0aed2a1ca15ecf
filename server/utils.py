"""Pure helpers: card formatting for API responses."""

from typing import List, Optional

from feed_engine.models.item import ContentItem
from feed_engine.models.scoring import ScoredItem
from feed_engine.stages.preference import extract_features

from .models import ItemCard, ScoredCard

DEFAULT_LIKED_LIMIT = 48
DEFAULT_RANKING_LIMIT = 10


def to_item_card(item: Optional[ContentItem]) -> Optional[ItemCard]:
    """Convert a ContentItem to an ItemCard with derived orientation and media kind."""
    if item is None:
        return None
    features = extract_features(item)
    return ItemCard(
        identity=item.identity,
        source=item.source,
        url=item.url,
        width=item.width,
        height=item.height,
        orientation=features.orientation,
        media=features.media,
        tags=list(item.tags),
        mime=item.mime,
    )


def to_scored_cards(scored: List[ScoredItem]) -> List[ScoredCard]:
    return [
        ScoredCard(
            card=to_item_card(s.item),
            metadata_score=round(s.metadata_score, 4),
            similarity_score=round(s.similarity_score, 4) if s.similarity_score is not None else None,
            exploration_bonus=round(s.exploration_bonus, 4),
            final_score=round(s.final_score, 4),
            queue_position=i + 1,
        )
        for i, s in enumerate(scored)
    ]
