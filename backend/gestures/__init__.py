from .state import (
    DEFAULT_GESTURE_CONFIG,
    GestureConfig,
    GestureEvent,
    GesturePhase,
    GestureState,
    PanEnd,
    PanUpdate,
    PinchEnd,
    PinchUpdate,
    apply_event,
    on_pan_end,
    on_pan_update,
    on_pinch_end,
    on_pinch_update,
    reset_gesture,
    settle,
)

__all__ = [
    "DEFAULT_GESTURE_CONFIG",
    "GestureConfig",
    "GestureEvent",
    "GesturePhase",
    "GestureState",
    "PanEnd",
    "PanUpdate",
    "PinchEnd",
    "PinchUpdate",
    "apply_event",
    "on_pan_end",
    "on_pan_update",
    "on_pinch_end",
    "on_pinch_update",
    "reset_gesture",
    "settle",
]
