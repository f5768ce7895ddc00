from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, TypeAlias, Union


Point: TypeAlias = tuple[float, float]
Ring: TypeAlias = list[Point]  # implicitly closed; last point need not repeat the first


@dataclass(frozen=True)
class PolygonGeometry:
    # [outer_ring, hole, ...]; every ring becomes its own sub-path.
    rings: list[Ring]

    def iter_rings(self) -> Iterator[Ring]:
        yield from self.rings


@dataclass(frozen=True)
class MultiPolygonGeometry:
    polygons: list[list[Ring]]

    def iter_rings(self) -> Iterator[Ring]:
        for rings in self.polygons:
            yield from rings


Geometry: TypeAlias = Union[PolygonGeometry, MultiPolygonGeometry]


@dataclass(frozen=True)
class Feature:
    """
    A mapped region (state or congressional district).

    `id` is an opaque region identifier (e.g. a FIPS code) used to join against the
    reference tables. `geometry=None` means the source carried no coordinate data;
    renderers treat such features as empty rather than failing.
    """

    id: str
    geometry: Geometry | None
    properties: dict[str, Any] = field(default_factory=dict)


def iter_geometry_rings(geometry: Geometry | None) -> Iterator[Ring]:
    if isinstance(geometry, (PolygonGeometry, MultiPolygonGeometry)):
        yield from geometry.iter_rings()
