"""Application state: the configured feed controller and its collaborators."""

import logging
import random
from typing import Optional

from feed_engine import FeedController

from .config import ServerConfig, get_config
from .services import (
    BlobSessionStore,
    ColorHistogramEmbeddingModel,
    FileBlobStore,
    build_sources,
)

logger = logging.getLogger(__name__)


def build_controller(config: ServerConfig) -> FeedController:
    """Wire sources, the file-backed session store and the embedding model per config."""
    rng = random.Random(config.random_seed)
    sources = build_sources(config.content_sources, config.content_json_path, rng=rng)
    store = BlobSessionStore(FileBlobStore(config.data_dir))
    model = ColorHistogramEmbeddingModel() if config.embeddings_enabled else None
    logger.info(
        "[startup] Feed: preset=%s sources=%s embeddings=%s",
        config.feed_preset,
        [s.name for s in sources],
        model is not None,
    )
    return FeedController(
        sources,
        store=store,
        embedding_model=model,
        config=config.feed_config(),
        rng=rng,
    )


class AppState:
    """Global application state."""

    def __init__(self, config: ServerConfig, controller: Optional[FeedController] = None):
        self.config = config
        self.controller = controller or build_controller(config)
        self.started = False

    async def start(self) -> None:
        if self.started:
            return
        current = await self.controller.start()
        self.started = True
        logger.info(
            "[startup] Feed ready: current=%s queue=%s liked=%s",
            current.identity if current else None,
            len(self.controller.context.queue),
            len(self.controller.context.history),
        )

    async def shutdown(self) -> None:
        await self.controller.context.tracker.cancel_all()


# Global state instance
_state: Optional[AppState] = None


def get_state() -> AppState:
    """Get the global application state."""
    global _state
    if _state is None:
        _state = AppState(get_config())
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace the global state (tests inject controllers with in-memory collaborators)."""
    global _state
    _state = state
