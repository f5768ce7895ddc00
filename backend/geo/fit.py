from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from geo.bounds import BoundingBox


class PaddingMode(str, Enum):
    # Pad the bounds by a fraction of their own size, then fit edge-to-edge.
    geometry_space_percent = "geometry_space_percent"
    # Fit edge-to-edge, then shrink the scale by a margin on each side.
    scale_space_margin = "scale_space_margin"


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float

    def __post_init__(self) -> None:
        if not (self.width > 0 and self.height > 0):
            raise ValueError(f"Viewport must be positive, got {self.width}x{self.height}")

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2.0, self.height / 2.0)


@dataclass(frozen=True)
class ViewportFit:
    """
    Geometry -> screen transform: (x, y) -> (x*scale + tx, -y*scale + ty).

    Y is negated because geometry y grows upward while screen y grows downward.
    Sources that are already y-down (pre-projected frames) use `flip_y=False`:
    (x, y) -> (x*scale + tx, y*scale + ty).
    """

    scale: float
    translate_x: float
    translate_y: float
    flip_y: bool = True

    @property
    def y_scale(self) -> float:
        return -self.scale if self.flip_y else self.scale

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (x * self.scale + self.translate_x, y * self.y_scale + self.translate_y)

    def invert(self, sx: float, sy: float) -> tuple[float, float]:
        return ((sx - self.translate_x) / self.scale, (sy - self.translate_y) / self.y_scale)


def fit(
    bounds: BoundingBox,
    viewport: Viewport,
    *,
    padding: float = 0.0,
    mode: PaddingMode = PaddingMode.geometry_space_percent,
    flip_y: bool = True,
) -> ViewportFit:
    """
    Scale + translate that centers `bounds` in `viewport`.

    The two padding modes are numerically different; e.g. padding=0.1 in
    geometry space shrinks the scale by 1/1.2, while a 0.1 scale-space margin
    shrinks it by 0.8.
    """
    if mode == PaddingMode.geometry_space_percent:
        target = bounds.padded(padding)
        scale = _fit_scale(target, viewport)
    else:
        target = bounds
        scale = _fit_scale(target, viewport) * (1.0 - 2.0 * padding)
        if scale <= 0:
            scale = _fit_scale(target, viewport)

    translate_x = (viewport.width - target.width * scale) / 2.0 - target.min_x * scale
    if flip_y:
        translate_y = (viewport.height + target.height * scale) / 2.0 + target.min_y * scale
    else:
        translate_y = (viewport.height - target.height * scale) / 2.0 - target.min_y * scale
    return ViewportFit(
        scale=scale, translate_x=translate_x, translate_y=translate_y, flip_y=flip_y
    )


def _fit_scale(bounds: BoundingBox, viewport: Viewport) -> float:
    # Collinear input: fit along the axis that still has extent.
    ratios: list[float] = []
    if bounds.width > 0:
        ratios.append(viewport.width / bounds.width)
    if bounds.height > 0:
        ratios.append(viewport.height / bounds.height)
    if not ratios:
        return 1.0
    return min(ratios)
