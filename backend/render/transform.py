from __future__ import annotations

from dataclasses import dataclass

from geo.fit import Viewport, ViewportFit
from geo.path import format_number
from gestures.state import GestureState


@dataclass(frozen=True)
class Affine:
    """
    Axis-aligned affine map: (x, y) -> (sx*x + tx, sy*y + ty).

    Enough to express both the fit (sy = -sx when it flips vertically) and the gesture
    transform (uniform zoom plus pan); no rotation or skew is ever needed.
    """

    sx: float = 1.0
    sy: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def from_fit(cls, fit: ViewportFit) -> "Affine":
        return cls(sx=fit.scale, sy=fit.y_scale, tx=fit.translate_x, ty=fit.translate_y)

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.sx * x + self.tx, self.sy * y + self.ty)

    def invert(self, x: float, y: float) -> tuple[float, float]:
        return ((x - self.tx) / self.sx, (y - self.ty) / self.sy)

    def then(self, outer: "Affine") -> "Affine":
        """`outer` applied after `self`."""
        return Affine(
            sx=outer.sx * self.sx,
            sy=outer.sy * self.sy,
            tx=outer.sx * self.tx + outer.tx,
            ty=outer.sy * self.ty + outer.ty,
        )

    def svg_matrix(self) -> str:
        vals = (self.sx, 0.0, 0.0, self.sy, self.tx, self.ty)
        return "matrix(" + " ".join(format_number(v) for v in vals) + ")"


IDENTITY = Affine()


def gesture_transform(state: GestureState | None, viewport: Viewport) -> Affine:
    """
    Zoom about the viewport center, then pan (translate -> scale order of a
    center-origin view transform).
    """
    if state is None:
        return IDENTITY
    s = state.scale
    cx, cy = viewport.center
    return Affine(sx=s, sy=s, tx=cx * (1.0 - s) + state.x, ty=cy * (1.0 - s) + state.y)
