"""Feed endpoints: current card, votes, gestures, image errors, history."""

from fastapi import APIRouter, HTTPException, Query

from feed_engine.models.gesture import GestureEvent

from ..models import (
    FeedResponse,
    GestureRequest,
    GestureResponse,
    ImageErrorRequest,
    LikedResponse,
    RankingResponse,
    VoteRequest,
)
from ..state import get_state
from ..utils import DEFAULT_LIKED_LIMIT, DEFAULT_RANKING_LIMIT, to_item_card, to_scored_cards

router = APIRouter()


def _feed_response(controller) -> FeedResponse:
    ctx = controller.context
    return FeedResponse(
        current=to_item_card(ctx.current),
        queue_size=len(ctx.queue),
        liked_count=len(ctx.history),
        fetch_error=ctx.fetch_error,
    )


@router.get("/current", response_model=FeedResponse)
async def get_current():
    """Return the presented item. 404 when the queue is exhausted."""
    controller = get_state().controller
    if controller.current is None:
        controller.show_next()
    if controller.current is None:
        # Nothing to show: a refill may have failed or still be running.
        controller.schedule_refill()
        raise HTTPException(
            status_code=404,
            detail={"message": "No item available", "fetch_error": controller.fetch_error},
        )
    return _feed_response(controller)


@router.post("/vote", response_model=FeedResponse)
async def vote(request: VoteRequest):
    """Like or pass the current item (button / keyboard path)."""
    controller = get_state().controller
    if controller.current is None:
        raise HTTPException(status_code=404, detail="No current item to vote on")
    await controller.press(request.decision)
    return _feed_response(controller)


@router.post("/gesture", response_model=GestureResponse)
async def gesture(request: GestureRequest):
    """Forward one pointer/key event to the swipe state machine."""
    controller = get_state().controller
    event = GestureEvent(**request.model_dump())
    step = await controller.handle_gesture(event)
    base = _feed_response(controller)
    return GestureResponse(
        **base.model_dump(),
        phase=controller.context.gesture.phase.value,
        badge=step.badge,
        decision=step.decision,
        reset=step.reset,
        offset_x=step.state.drag.offset_x,
        offset_y=step.state.drag.offset_y,
    )


@router.post("/image-error", response_model=FeedResponse)
async def image_error(request: ImageErrorRequest):
    """Drop an item whose media failed to load and advance if it was current."""
    controller = get_state().controller
    controller.report_image_error(request.identity)
    return _feed_response(controller)


@router.post("/clear", response_model=FeedResponse)
async def clear_history():
    """Reset learned preferences, liked history and visual centroid."""
    controller = get_state().controller
    controller.clear_history()
    return _feed_response(controller)


@router.get("/liked", response_model=LikedResponse)
async def liked(limit: int = Query(DEFAULT_LIKED_LIMIT, ge=1, le=500)):
    """Most recent likes first."""
    history = get_state().controller.context.history
    return LikedResponse(
        items=[to_item_card(item) for item in history.items[:limit]],
        total=len(history),
    )


@router.get("/ranking", response_model=RankingResponse)
async def ranking(limit: int = Query(DEFAULT_RANKING_LIMIT, ge=1, le=200)):
    """Debug view: queued candidates ordered by hybrid score."""
    controller = get_state().controller
    return RankingResponse(
        candidates=to_scored_cards(controller.ranking(limit)),
        queue_size=len(controller.context.queue),
        centroid=controller.context.embeddings.centroid is not None,
    )
