"""
Feed orchestrator — owns the feed context and runs the swipe loop.

    ContentSource -> QueueManager -> pick_best -> presented item
        -> GestureController decision -> PreferenceModel / EmbeddingCache update
        -> refill check -> next item

FeedController is the single owner of the mutable state (queue, weights,
embedding cache, liked history, current item). Stage functions receive the
pieces they need explicitly; there are no module-level globals.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..errors import AllSourcesFailedError, ImageUnavailableError
from ..gesture.state_machine import GestureController
from ..models.config import FeedConfig, resolve_config
from ..models.gesture import Decision, EventType, GestureEvent, GestureStep
from ..models.item import ContentItem
from ..models.scoring import ScoredItem
from ..utils.tasks import TaskTracker
from .embedding_cache import EmbeddingCache, EmbeddingModel
from .history import LikedHistory, SessionStore
from .preference import PreferenceModel
from .queue import QueueManager
from .ranking import pick_best, rank_candidates
from .sources import ContentSource

logger = logging.getLogger(__name__)

FETCH_ERROR_HINT = "Could not load more items right now."


@dataclass
class FeedContext:
    """Everything one feed session mutates."""

    config: FeedConfig
    queue: QueueManager
    preferences: PreferenceModel
    embeddings: EmbeddingCache
    history: LikedHistory
    gesture: GestureController
    tracker: TaskTracker
    rng: random.Random = field(default_factory=random.Random)
    current: Optional[ContentItem] = None
    # User-visible retry hint after every source failed; cleared by the next successful refill.
    fetch_error: Optional[str] = None


class FeedController:
    """Drives one swipe feed session."""

    def __init__(
        self,
        sources: Sequence[ContentSource],
        store: Optional[SessionStore] = None,
        embedding_model: Optional[EmbeddingModel] = None,
        config: Optional[FeedConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        config = resolve_config(config)
        tracker = TaskTracker("feed")
        self.context = FeedContext(
            config=config,
            queue=QueueManager(sources, config),
            preferences=PreferenceModel(config),
            embeddings=EmbeddingCache(embedding_model, config, tracker),
            history=LikedHistory(store, config),
            gesture=GestureController(config),
            tracker=tracker,
            rng=rng or random.Random(),
        )

    @property
    def current(self) -> Optional[ContentItem]:
        return self.context.current

    @property
    def fetch_error(self) -> Optional[str]:
        return self.context.fetch_error

    # -------------------------------------------------------------------------
    # Startup and refill
    # -------------------------------------------------------------------------

    async def start(self) -> Optional[ContentItem]:
        """Load history, rehydrate preferences, fill the queue and present the first item."""
        ctx = self.context
        history = ctx.history.load()
        ctx.preferences.rehydrate(history)
        ctx.queue.mark_seen(ctx.history.identities)
        if ctx.embeddings.enabled and history:
            ctx.tracker.spawn(ctx.embeddings.rebuild_from_history(list(history)), name="rebuild-centroid")
        await self.fill_queue()
        if ctx.current is None:
            self.show_next()
        return ctx.current

    async def fill_queue(self) -> List[ContentItem]:
        """Run one refill. Failure of every source sets the retry hint instead of raising."""
        ctx = self.context
        if ctx.queue.fetching:
            return []
        try:
            added = await ctx.queue.refill()
        except AllSourcesFailedError as exc:
            logger.warning("[feed] REFILL_FAILED error=%s", exc)
            ctx.fetch_error = FETCH_ERROR_HINT
            return []
        ctx.fetch_error = None
        ctx.embeddings.warm(added)
        if ctx.current is None:
            self.show_next()
        return added

    def schedule_refill(self) -> None:
        """Start a background refill when the queue is below the low watermark."""
        queue = self.context.queue
        if queue.needs_refill() and not queue.fetching:
            self.context.tracker.spawn(self.fill_queue(), name="refill")

    # -------------------------------------------------------------------------
    # Presentation and decisions
    # -------------------------------------------------------------------------

    def show_next(self) -> Optional[ContentItem]:
        """Pick the best queued candidate and make it current."""
        ctx = self.context
        ctx.current = pick_best(
            ctx.queue,
            ctx.preferences.weights,
            ctx.embeddings,
            ctx.rng,
            ctx.config,
        )
        if ctx.current is not None:
            ctx.embeddings.prefetch(ctx.current)
        return ctx.current

    async def vote(self, decision: Decision) -> Optional[ContentItem]:
        """
        Apply a like/pass to the current item and advance. Returns the new current item.

        The item is consumed before any await, so a second vote arriving while
        the like's embedding is computed finds no current item and is ignored.
        """
        ctx = self.context
        item = ctx.current
        if item is None:
            return None
        ctx.current = None

        try:
            if decision == Decision.LIKE:
                ctx.history.add(item)
                ctx.preferences.like(item)
                if ctx.embeddings.enabled:
                    await ctx.embeddings.record_like(item)
            else:
                ctx.preferences.dislike(item)
            logger.info("[feed] VOTE decision=%s identity=%s", decision.value, item.identity)
        finally:
            # The feed advances even when persisting the like failed.
            if ctx.current is None:
                self.show_next()
            self.schedule_refill()
        return ctx.current

    async def handle_gesture(self, event: GestureEvent) -> GestureStep:
        """Feed one input event; a committed decision is voted and the gesture completed."""
        ctx = self.context
        step = ctx.gesture.handle(event)
        if step.decision is not None:
            try:
                await self.vote(step.decision)
            finally:
                ctx.gesture.complete()
        return step

    async def press(self, decision: Decision) -> GestureStep:
        """Button path: inject a decision directly."""
        return await self.handle_gesture(GestureEvent(type=EventType.BUTTON, decision=decision))

    def clear_history(self) -> None:
        """Reset learned weights, liked history and embedding-derived state together."""
        ctx = self.context
        ctx.history.clear()
        ctx.preferences.reset()
        ctx.embeddings.reset()
        ctx.gesture.reset()
        logger.info("[feed] HISTORY_CLEARED")

    def report_image_error(self, identity: str) -> Optional[ContentItem]:
        """
        Recover from an item whose media failed to load: drop it from queue and
        caches, advance if it was the current item, refill when low.
        """
        ctx = self.context
        if ctx.current is not None and ctx.current.identity == identity:
            item = ctx.current
            ctx.current = None
            self.show_next()
        else:
            item = ctx.queue.discard(identity)
        if item is not None:
            ctx.embeddings.forget(item)
            error = ImageUnavailableError(identity, item.url)
            logger.warning("[feed] IMAGE_UNAVAILABLE %s", error)
        self.schedule_refill()
        return ctx.current

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def ranking(self, limit: int = 10, rng: Optional[random.Random] = None) -> List[ScoredItem]:
        """Scored view of the queue. Draws noise from its own rng so picks stay reproducible."""
        ctx = self.context
        scored = rank_candidates(
            ctx.queue.items,
            ctx.preferences.weights,
            ctx.embeddings,
            rng or random.Random(),
            ctx.config,
        )
        return scored[:limit]

    def stats(self) -> Dict[str, Any]:
        ctx = self.context
        return {
            "queue": len(ctx.queue),
            "seen": len(ctx.queue.seen),
            "liked": len(ctx.history),
            "fetching": ctx.queue.fetching,
            "embeddings_enabled": ctx.embeddings.enabled,
            "embeddings_cached": ctx.embeddings.size,
            "embeddings_pending": ctx.embeddings.pending,
            "centroid": ctx.embeddings.centroid is not None,
            "gesture_phase": ctx.gesture.phase.value,
            "fetch_error": ctx.fetch_error,
        }

    async def wait_idle(self) -> None:
        """Wait for background refills and embedding computations to finish."""
        await self.context.tracker.wait_idle()
