"""
Gesture models — input events, drag state and the states of the swipe state machine.

All models are frozen: transitions build new states instead of mutating.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class Decision(str, Enum):
    LIKE = "like"
    PASS = "pass"


class Phase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"


class Axis(str, Enum):
    NONE = "none"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class EventType(str, Enum):
    POINTER_DOWN = "pointer_down"
    POINTER_MOVE = "pointer_move"
    POINTER_UP = "pointer_up"
    POINTER_CANCEL = "pointer_cancel"
    LOST_CAPTURE = "lost_capture"
    KEY = "key"
    BUTTON = "button"


Badge = Literal["none", "like", "pass"]


class GestureEvent(BaseModel):
    """
    One abstract input event.

    Coordinates are viewport pixels (None when the event carries none), timestamp is milliseconds.
    key is set for KEY events ("ArrowRight"/"ArrowLeft"); decision for BUTTON events.
    """

    model_config = ConfigDict(frozen=True)

    type: EventType
    pointer_id: int = 0
    x: Optional[float] = None
    y: Optional[float] = None
    timestamp: float = 0.0
    key: Optional[str] = None
    decision: Optional[Decision] = None


class DragState(BaseModel):
    """Transient drag bookkeeping owned by the gesture controller."""

    model_config = ConfigDict(frozen=True)

    active: bool = False
    pointer_id: Optional[int] = None
    start_x: float = 0.0
    start_y: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    axis: Axis = Axis.NONE
    started_at: float = 0.0


class GestureState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.IDLE
    drag: DragState = DragState()
    # Set only while COMMITTING.
    direction: Optional[Decision] = None


IDLE_STATE = GestureState()


class GestureStep(BaseModel):
    """Result of feeding one event: the next state plus what the caller must do."""

    model_config = ConfigDict(frozen=True)

    state: GestureState
    decision: Optional[Decision] = None
    # True when the card should snap back to rest.
    reset: bool = False
    badge: Badge = "none"
