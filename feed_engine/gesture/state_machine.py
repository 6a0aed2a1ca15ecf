"""
Swipe gesture state machine.

    IDLE --pointer down--> DRAGGING(axis=none)
    DRAGGING --moved past deadzone--> axis locks to the dominant axis
        vertical lock   -> IDLE (treated as a scroll, card resets)
    DRAGGING(horizontal) --release--> COMMITTING(like|pass) if far or fast enough
                                  or -> IDLE with reset otherwise
    DRAGGING --cancel / lost capture--> IDLE with reset
    COMMITTING --complete()--> IDLE
    keyboard / button -> COMMITTING directly, bypassing the drag logic

transition() is pure: (state, event) -> GestureStep. GestureController keeps
the current state for callers that want a mutable handle.
"""

from typing import Optional

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.gesture import (
    IDLE_STATE,
    Axis,
    Badge,
    Decision,
    DragState,
    EventType,
    GestureEvent,
    GestureState,
    GestureStep,
    Phase,
)

KEY_DECISIONS = {
    "ArrowRight": Decision.LIKE,
    "ArrowLeft": Decision.PASS,
}


def _unchanged(state: GestureState) -> GestureStep:
    return GestureStep(state=state)


def _reset() -> GestureStep:
    return GestureStep(state=IDLE_STATE, reset=True)


def _commit(decision: Decision) -> GestureStep:
    return GestureStep(
        state=GestureState(phase=Phase.COMMITTING, direction=decision),
        decision=decision,
        badge=decision.value,
    )


def _badge_for(drag: DragState, config: FeedConfig) -> Badge:
    if drag.axis != Axis.HORIZONTAL:
        return "none"
    if drag.offset_x > config.badge_offset:
        return "like"
    if drag.offset_x < -config.badge_offset:
        return "pass"
    return "none"


def _track(drag: DragState, event: GestureEvent, config: FeedConfig) -> DragState:
    """Update the offset from the event position and lock the axis once past the deadzone."""
    if event.x is None or event.y is None:
        return drag
    dx = event.x - drag.start_x
    dy = event.y - drag.start_y
    axis = drag.axis
    if axis == Axis.NONE and (abs(dx) > config.deadzone_px or abs(dy) > config.deadzone_px):
        axis = Axis.HORIZONTAL if abs(dx) > abs(dy) else Axis.VERTICAL
    return drag.model_copy(update={"offset_x": dx, "offset_y": dy, "axis": axis})


def _release_decision(drag: DragState, released_at: float, config: FeedConfig) -> Optional[Decision]:
    """Like/pass for a horizontal release, or None when neither far nor fast enough."""
    elapsed = max(released_at - drag.started_at, 1.0)
    velocity = drag.offset_x / elapsed
    threshold = config.swipe_threshold
    if drag.offset_x > threshold or velocity > config.flick_velocity:
        return Decision.LIKE
    if drag.offset_x < -threshold or velocity < -config.flick_velocity:
        return Decision.PASS
    return None


def _direct(state: GestureState, event: GestureEvent) -> GestureStep:
    if state.phase == Phase.COMMITTING:
        return _unchanged(state)
    if event.type == EventType.KEY:
        decision = KEY_DECISIONS.get(event.key or "")
    else:
        decision = event.decision
    if decision is None:
        return _unchanged(state)
    return _commit(decision)


def transition(
    state: GestureState,
    event: GestureEvent,
    config: FeedConfig = DEFAULT_CONFIG,
) -> GestureStep:
    """Feed one input event to the state machine."""
    if event.type in (EventType.KEY, EventType.BUTTON):
        return _direct(state, event)

    if state.phase == Phase.COMMITTING:
        # The decision is already out; input waits for complete().
        return _unchanged(state)

    if event.type in (EventType.POINTER_CANCEL, EventType.LOST_CAPTURE):
        if state.phase == Phase.DRAGGING and event.pointer_id != state.drag.pointer_id:
            return _unchanged(state)
        return _reset()

    if event.type == EventType.POINTER_DOWN:
        if state.phase == Phase.DRAGGING:
            return _unchanged(state)
        drag = DragState(
            active=True,
            pointer_id=event.pointer_id,
            start_x=event.x or 0.0,
            start_y=event.y or 0.0,
            started_at=event.timestamp,
        )
        return GestureStep(state=GestureState(phase=Phase.DRAGGING, drag=drag))

    # Move / up: only for the pointer that started the drag.
    if state.phase != Phase.DRAGGING or event.pointer_id != state.drag.pointer_id:
        return _unchanged(state)

    drag = _track(state.drag, event, config)
    if drag.axis == Axis.VERTICAL:
        return _reset()

    if event.type == EventType.POINTER_MOVE:
        return GestureStep(
            state=state.model_copy(update={"drag": drag}),
            badge=_badge_for(drag, config),
        )

    # POINTER_UP
    if drag.axis != Axis.HORIZONTAL:
        return _reset()
    decision = _release_decision(drag, event.timestamp, config)
    if decision is None:
        return _reset()
    return _commit(decision)


def complete(state: GestureState) -> GestureState:
    """COMMITTING -> IDLE once the decision was dispatched and the card replaced."""
    if state.phase == Phase.COMMITTING:
        return IDLE_STATE
    return state


class GestureController:
    """Holds the current gesture state and advances it one event at a time."""

    def __init__(self, config: FeedConfig = DEFAULT_CONFIG):
        self.config = config
        self.state: GestureState = IDLE_STATE

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def handle(self, event: GestureEvent) -> GestureStep:
        step = transition(self.state, event, self.config)
        self.state = step.state
        return step

    def complete(self) -> None:
        self.state = complete(self.state)

    def reset(self) -> None:
        self.state = IDLE_STATE
