"""Stats endpoint."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/stats")
async def get_stats():
    """Get current statistics."""
    state = get_state()
    return {"started": state.started, **state.controller.stats()}
