"""Swipe gesture state machine."""

from .state_machine import KEY_DECISIONS, GestureController, complete, transition

__all__ = [
    "KEY_DECISIONS",
    "GestureController",
    "complete",
    "transition",
]
