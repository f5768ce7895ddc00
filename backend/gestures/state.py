from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Union


class GesturePhase(str, Enum):
    idle = "idle"
    active = "active"


@dataclass(frozen=True)
class GestureConfig:
    """
    Clamp rules for pinch-zoom and pan-drag.

    `pan_limit_per_zoom` is K in: |pan| <= (committed_scale - 1) * K, so there is
    no pan freedom at 1x and it grows with every zoom step.
    """

    min_scale: float = 1.0
    max_scale: float = 5.0
    pan_limit_per_zoom: float = 100.0
    # Drags shorter than this are taps, not pans.
    min_pan_distance: float = 10.0


DEFAULT_GESTURE_CONFIG = GestureConfig()


@dataclass(frozen=True)
class GestureState:
    """
    Zoom/pan state of one map view.

    `committed_*` is what the view rests at between gestures; `live_*` is what an
    in-flight gesture shows. Transitions return a new state, so a renderer always
    sees either the old or the new values, never a mix.
    """

    committed_scale: float = 1.0
    committed_x: float = 0.0
    committed_y: float = 0.0
    live_scale: float = 1.0
    live_x: float = 0.0
    live_y: float = 0.0
    pinching: bool = False
    panning: bool = False

    @property
    def phase(self) -> GesturePhase:
        return GesturePhase.active if (self.pinching or self.panning) else GesturePhase.idle

    @property
    def scale(self) -> float:
        return self.live_scale if self.pinching else self.committed_scale

    @property
    def x(self) -> float:
        return self.live_x if self.panning else self.committed_x

    @property
    def y(self) -> float:
        return self.live_y if self.panning else self.committed_y


@dataclass(frozen=True)
class PinchUpdate:
    # Cumulative scale factor since the pinch started.
    scale: float


@dataclass(frozen=True)
class PinchEnd:
    pass


@dataclass(frozen=True)
class PanUpdate:
    # Cumulative translation since the pan started.
    dx: float
    dy: float


@dataclass(frozen=True)
class PanEnd:
    pass


GestureEvent = Union[PinchUpdate, PinchEnd, PanUpdate, PanEnd]


def reset_gesture() -> GestureState:
    return GestureState()


def settle(
    scale: float = 1.0,
    x: float = 0.0,
    y: float = 0.0,
    config: GestureConfig = DEFAULT_GESTURE_CONFIG,
) -> GestureState:
    """Idle state at a given zoom/pan, e.g. restored from a URL."""
    s = _clamp(scale, config.min_scale, config.max_scale)
    limit = _pan_limit(s, config)
    px = _clamp(x, -limit, limit)
    py = _clamp(y, -limit, limit)
    return GestureState(
        committed_scale=s, committed_x=px, committed_y=py, live_scale=s, live_x=px, live_y=py
    )


def on_pinch_update(
    state: GestureState, factor: float, config: GestureConfig = DEFAULT_GESTURE_CONFIG
) -> GestureState:
    live = _clamp(state.committed_scale * factor, config.min_scale, config.max_scale)
    return replace(state, live_scale=live, pinching=True)


def on_pinch_end(
    state: GestureState, config: GestureConfig = DEFAULT_GESTURE_CONFIG
) -> GestureState:
    if not state.pinching:
        return state
    # Zooming out shrinks pan freedom; pull both resting and in-flight offsets
    # back inside it.
    limit = _pan_limit(state.live_scale, config)
    x = _clamp(state.committed_x, -limit, limit)
    y = _clamp(state.committed_y, -limit, limit)
    return replace(
        state,
        committed_scale=state.live_scale,
        committed_x=x,
        committed_y=y,
        live_x=_clamp(state.live_x, -limit, limit) if state.panning else x,
        live_y=_clamp(state.live_y, -limit, limit) if state.panning else y,
        pinching=False,
    )


def on_pan_update(
    state: GestureState,
    dx: float,
    dy: float,
    config: GestureConfig = DEFAULT_GESTURE_CONFIG,
) -> GestureState:
    if not state.panning and math.hypot(dx, dy) < config.min_pan_distance:
        return state

    limit = _pan_limit(state.committed_scale, config)
    return replace(
        state,
        live_x=_clamp(state.committed_x + dx, -limit, limit),
        live_y=_clamp(state.committed_y + dy, -limit, limit),
        panning=True,
    )


def on_pan_end(state: GestureState) -> GestureState:
    if not state.panning:
        return state
    return replace(state, committed_x=state.live_x, committed_y=state.live_y, panning=False)


def apply_event(
    state: GestureState,
    event: GestureEvent,
    config: GestureConfig = DEFAULT_GESTURE_CONFIG,
) -> GestureState:
    if isinstance(event, PinchUpdate):
        return on_pinch_update(state, event.scale, config)
    if isinstance(event, PinchEnd):
        return on_pinch_end(state, config)
    if isinstance(event, PanUpdate):
        return on_pan_update(state, event.dx, event.dy, config)
    if isinstance(event, PanEnd):
        return on_pan_end(state)
    raise TypeError(f"Unknown gesture event: {event!r}")


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def _pan_limit(scale: float, config: GestureConfig) -> float:
    return max(0.0, (scale - 1.0) * config.pan_limit_per_zoom)
