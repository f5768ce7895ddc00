from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from shapely.geometry import MultiPolygon, Point, Polygon
from shapely.strtree import STRtree

from geo.regions import FEATURE_ID, KeySelector
from layers.types import Feature, MultiPolygonGeometry, PolygonGeometry, Ring

logger = logging.getLogger(__name__)


@dataclass
class RegionHitIndex:
    """
    Point-in-region lookup for taps, in geometry coordinates.

    A tap is mapped back through the scene transforms first (see
    `MapScene.screen_to_geometry`); the selected region id is then handed to the
    navigation layer.
    """

    tree: STRtree
    geoms: list[Polygon | MultiPolygon]
    region_ids: list[str]

    def region_at(self, x: float, y: float) -> str | None:
        pt = Point(x, y)
        for i in _to_int_list(self.tree.query(pt)):
            # covers() so that taps on a shared border still select a region
            if self.geoms[i].covers(pt):
                return self.region_ids[i]
        return None

    def __len__(self) -> int:
        return len(self.region_ids)


def build_hit_index(features: Iterable[Feature], key: KeySelector = FEATURE_ID) -> RegionHitIndex:
    geoms: list[Polygon | MultiPolygon] = []
    ids: list[str] = []
    for f in features:
        g = _to_shapely(f)
        if g is None:
            continue
        geoms.append(g)
        ids.append(key(f) or f.id)
    return RegionHitIndex(tree=STRtree(geoms), geoms=geoms, region_ids=ids)


def _to_shapely(feature: Feature) -> Polygon | MultiPolygon | None:
    geometry = feature.geometry
    if isinstance(geometry, PolygonGeometry):
        polys = _polygons(geometry.rings)
    elif isinstance(geometry, MultiPolygonGeometry):
        polys = [p for rings in geometry.polygons for p in _polygons(rings)]
    else:
        return None

    if not polys:
        logger.debug("Feature %s has no usable rings for hit testing", feature.id)
        return None
    if len(polys) == 1:
        return polys[0]
    return MultiPolygon(polys)


def _polygons(rings: list[Ring]) -> list[Polygon]:
    if not rings or len(rings[0]) < 3:
        return []
    holes = [r for r in rings[1:] if len(r) >= 3]
    poly = Polygon(rings[0], holes=holes or None)
    if not poly.is_valid:
        poly = poly.buffer(0)
    if poly.is_empty:
        return []
    if isinstance(poly, MultiPolygon):
        return list(poly.geoms)
    return [poly] if isinstance(poly, Polygon) else []


def _to_int_list(arr) -> list[int]:
    # Shapely STRtree returns numpy.ndarray of indices.
    try:
        return [int(x) for x in arr.tolist()]
    except AttributeError:
        return [int(x) for x in arr]
