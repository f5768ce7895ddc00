from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from layers.topology import TopologyError, decode_topology
from layers.types import Feature, Geometry, MultiPolygonGeometry, PolygonGeometry, Ring


def load_yaml(path: Path) -> dict[str, Any]:
    raw = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid yaml root: {path}")
    return data


def load_topology(path: Path) -> dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise TopologyError(f"Invalid topology root: {path}")
    return data


def load_topology_features(path: Path, object_name: str) -> list[Feature]:
    return decode_topology(load_topology(path), object_name)


def load_geojson_features(path: Path) -> list[Feature]:
    """
    Input: a GeoJSON FeatureCollection whose coordinates are already planar.

    Unlike the topology decoder, features are read as-is; a missing or unsupported
    geometry is kept as `geometry=None`.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    features = data.get("features") or []

    out: list[Feature] = []
    for i, feature in enumerate(features):
        geom = (feature or {}).get("geometry") or {}
        props = (feature or {}).get("properties") or {}
        raw_id = (feature or {}).get("id")
        fid = str(raw_id if raw_id is not None else props.get("id") or f"feature-{i}")
        out.append(Feature(id=fid, geometry=geojson_geometry(geom), properties=dict(props)))
    return out


def geojson_geometry(geom: dict[str, Any]) -> Geometry | None:
    gtype = geom.get("type")
    coords = geom.get("coordinates")
    if not coords:
        return None

    if gtype == "Polygon":
        return PolygonGeometry(rings=[_to_ring(r) for r in coords])
    if gtype == "MultiPolygon":
        return MultiPolygonGeometry(polygons=[[_to_ring(r) for r in poly] for poly in coords])
    return None


def _to_ring(ring: Any) -> Ring:
    out: Ring = []
    for p in ring or []:
        if not p or len(p) < 2:
            continue
        out.append((float(p[0]), float(p[1])))
    return out
