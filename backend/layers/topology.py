from __future__ import annotations

import logging
from typing import Any

from layers.types import Feature, Geometry, MultiPolygonGeometry, PolygonGeometry, Ring

logger = logging.getLogger(__name__)


class TopologyError(ValueError):
    """Raised when a TopoJSON document cannot be decoded."""


def topology_object_names(topology: dict[str, Any]) -> list[str]:
    return list((topology or {}).get("objects") or {})


def decode_topology(topology: dict[str, Any], object_name: str) -> list[Feature]:
    """
    Decode one named geometry collection of a TopoJSON topology into features.

    TopoJSON notes:
    - arcs are shared between neighbouring regions and delta-encoded
    - a quantized topology carries `transform: {scale, translate}`
    - a negative arc index `~i` means arc `i` traversed backwards

    Only Polygon / MultiPolygon are rendered; other geometry types are kept as
    features with `geometry=None` so that id-based joins still see them.
    """
    if (topology or {}).get("type") != "Topology":
        raise TopologyError("Input is not a TopoJSON topology (missing type='Topology')")

    objects = topology.get("objects") or {}
    obj = objects.get(object_name)
    if obj is None:
        raise TopologyError(f"Topology object {object_name!r} not found")

    arcs = topology.get("arcs") or []
    decoder = _ArcDecoder(arcs, topology.get("transform"))

    geometries = obj.get("geometries")
    if geometries is None:
        geometries = [obj]

    out: list[Feature] = []
    for i, geom in enumerate(geometries):
        props = dict((geom or {}).get("properties") or {})
        raw_id = (geom or {}).get("id")
        fid = str(raw_id) if raw_id is not None else f"{object_name}-{i}"
        out.append(
            Feature(id=fid, geometry=_decode_geometry(geom or {}, decoder), properties=props)
        )

    logger.debug("Decoded %d features from topology object %r", len(out), object_name)
    return out


def _decode_geometry(geom: dict[str, Any], decoder: "_ArcDecoder") -> Geometry | None:
    gtype = geom.get("type")
    arc_groups = geom.get("arcs")
    if not arc_groups:
        return None

    if gtype == "Polygon":
        rings = [decoder.ring(r) for r in arc_groups]
        return PolygonGeometry(rings=[r for r in rings if r])
    if gtype == "MultiPolygon":
        polygons = [[decoder.ring(r) for r in poly] for poly in arc_groups]
        return MultiPolygonGeometry(
            polygons=[[r for r in rings if r] for rings in polygons if rings]
        )
    return None


class _ArcDecoder:
    def __init__(self, arcs: list[list[list[float]]], transform: dict[str, Any] | None):
        self._arcs = arcs
        self._scale: tuple[float, float] | None = None
        self._translate = (0.0, 0.0)
        if transform:
            sx, sy = transform.get("scale") or (1.0, 1.0)
            tx, ty = transform.get("translate") or (0.0, 0.0)
            self._scale = (float(sx), float(sy))
            self._translate = (float(tx), float(ty))
        self._cache: dict[int, Ring] = {}

    def ring(self, arc_indexes: list[int]) -> Ring:
        out: Ring = []
        for idx in arc_indexes or []:
            points = self.arc(int(idx))
            # Consecutive arcs share their junction point.
            out.extend(points[1:] if out else points)
        return out

    def arc(self, idx: int) -> Ring:
        if idx < 0:
            return list(reversed(self._absolute(~idx)))
        return self._absolute(idx)

    def _absolute(self, idx: int) -> Ring:
        cached = self._cache.get(idx)
        if cached is not None:
            return cached
        try:
            raw = self._arcs[idx]
        except IndexError as e:
            raise TopologyError(f"Arc index {idx} out of range") from e

        pts: Ring = []
        if self._scale is None:
            for p in raw:
                pts.append((float(p[0]), float(p[1])))
        else:
            sx, sy = self._scale
            tx, ty = self._translate
            x = 0.0
            y = 0.0
            for p in raw:
                x += p[0]
                y += p[1]
                pts.append((x * sx + tx, y * sy + ty))
        self._cache[idx] = pts
        return pts
