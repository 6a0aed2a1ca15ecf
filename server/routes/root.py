"""Root and health endpoints."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/")
async def root():
    state = get_state()
    controller = state.controller
    return {
        "name": "SwipeFeed API",
        "version": "1.0.0",
        "status": "ready" if state.started else "starting",
        "preset": state.config.feed_preset,
        "sources": [source.name for source in controller.context.queue.sources],
        "queue": len(controller.context.queue),
        "liked": len(controller.context.history),
        "endpoints": {
            "feed": [
                "/api/feed/current",
                "/api/feed/vote",
                "/api/feed/gesture",
                "/api/feed/image-error",
                "/api/feed/clear",
                "/api/feed/liked",
                "/api/feed/ranking",
            ],
            "stats": ["/api/stats"],
        },
    }


@router.get("/api/health")
async def health():
    state = get_state()
    return {
        "status": "healthy",
        "started": state.started,
        "embeddings": state.controller.context.embeddings.enabled,
        "fetch_error": state.controller.fetch_error,
    }
