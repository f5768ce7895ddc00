from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from geo.path import format_number
from layers.types import Feature, Geometry, Ring, iter_geometry_rings


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned box in planar geometry units.

    Convention used throughout this repo:
    - min_x, min_y, max_x, max_y
    - y grows "north"; the fit transform flips it for rendering
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_x + self.width / 2.0, self.min_y + self.height / 2.0)

    def padded(self, fraction: float) -> "BoundingBox":
        """Grow by `fraction` of the box's own width/height on each side."""
        dx = self.width * fraction
        dy = self.height * fraction
        return self.expanded(dx, dy)

    def expanded(self, dx: float, dy: float | None = None) -> "BoundingBox":
        dy = dx if dy is None else dy
        return BoundingBox(
            min_x=self.min_x - dx,
            min_y=self.min_y - dy,
            max_x=self.max_x + dx,
            max_y=self.max_y + dy,
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)


# Frame of the pre-projected (Albers) whole-country topology.
DEFAULT_VIEW_BOX = BoundingBox(min_x=0.0, min_y=0.0, max_x=975.0, max_y=610.0)


def geometry_bounds(geometry: Geometry | None) -> BoundingBox | None:
    return _bounds_of_rings(iter_geometry_rings(geometry))


def compute_bounds(features: Iterable[Feature]) -> BoundingBox | None:
    """
    Bounds over every coordinate of every feature.

    Returns None when there is nothing to measure (no features, or only features
    without geometry). Callers should then fall back to an unfitted default view
    instead of fitting to an infinite box.
    """
    return _bounds_of_rings(r for f in features for r in iter_geometry_rings(f.geometry))


def _bounds_of_rings(rings: Iterable[Ring]) -> BoundingBox | None:
    min_x = math.inf
    min_y = math.inf
    max_x = -math.inf
    max_y = -math.inf

    for ring in rings:
        for x, y in ring:
            if x < min_x:
                min_x = x
            if y < min_y:
                min_y = y
            if x > max_x:
                max_x = x
            if y > max_y:
                max_y = y

    if min_x > max_x or min_y > max_y:
        return None
    return BoundingBox(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)


def view_box(bounds: BoundingBox | None, padding: float = 0.0) -> str:
    """
    SVG viewBox ("minX minY width height") for bounds padded by a fraction of
    their own size. Falls back to the whole-country frame.
    """
    b = DEFAULT_VIEW_BOX if bounds is None else bounds.padded(padding)
    return " ".join(format_number(v) for v in (b.min_x, b.min_y, b.width, b.height))
