from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from functools import lru_cache
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from geo.index import RegionHitIndex, build_hit_index
from geo.regions import filter_by_region, property_key
from gestures.state import GestureState, settle
from layers.loaders import load_topology_features
from layers.topology import TopologyError
from layers.types import Feature
from regions.registry import district_count, get_state_by_fips, get_state_info, list_states
from render.scene import (
    DISTRICT_STATE_KEY,
    MapScene,
    build_country_scene,
    build_district_scene,
    build_state_scene,
    district_region_id,
)
from render.svg import scene_to_svg
from views.config import (
    districts_object_name,
    districts_topology_path,
    log_level,
    states_object_name,
    states_topology_path,
)
from views.registry import get_view
from views.types import MapViewConfig

logging.basicConfig(
    level=log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="TrackAmerica map engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class OutputFormat(str, Enum):
    json = "json"
    svg = "svg"


class HitView(str, Enum):
    usa = "usa"
    districts = "districts"


class ApiGesture(BaseModel):
    scale: float = 1.0
    x: float = 0.0
    y: float = 0.0


class ApiHitRequest(BaseModel):
    view: HitView = HitView.usa
    state: str | None = None
    x: float
    y: float
    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    gesture: ApiGesture | None = None


@lru_cache(maxsize=4)
def _features(path: str, object_name: str) -> tuple[Feature, ...]:
    logger.info("Loading topology object %r from %s", object_name, path)
    return tuple(load_topology_features(Path(path), object_name))


def state_features() -> tuple[Feature, ...]:
    return _load_or_503(str(states_topology_path()), states_object_name())


def district_features() -> tuple[Feature, ...]:
    return _load_or_503(str(districts_topology_path()), districts_object_name())


def clear_feature_cache() -> None:
    _features.cache_clear()


def _load_or_503(path: str, object_name: str) -> tuple[Feature, ...]:
    try:
        return _features(path, object_name)
    except FileNotFoundError as e:
        logger.error("Topology file not found: %s", path)
        raise HTTPException(status_code=503, detail="Map data not available") from e
    except TopologyError as e:
        logger.error("Failed to decode topology %s: %s", path, e)
        raise HTTPException(status_code=503, detail="Map data not available") from e


def _gesture(view: MapViewConfig, zoom: float, pan_x: float, pan_y: float) -> GestureState:
    return settle(zoom, pan_x, pan_y, view.gesture_config())


def _respond(scene: MapScene, fmt: OutputFormat):
    if fmt == OutputFormat.svg:
        return Response(content=scene_to_svg(scene), media_type="image/svg+xml")
    return scene.to_dict()


def _require_state(code: str):
    info = get_state_info(code)
    if info is None:
        raise HTTPException(status_code=404, detail=f"State {code!r} not found")
    return info


@app.get("/health")
def health():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": "TrackAmerica map engine is running",
    }


@app.get("/states")
def states():
    return [
        {**s.model_dump(), "districtCount": district_count(s.code)} for s in list_states()
    ]


@app.get("/map/usa")
def map_usa(
    state: str | None = None,
    width: float | None = Query(default=None, gt=0),
    height: float | None = Query(default=None, gt=0),
    zoom: float = 1.0,
    panX: float = 0.0,
    panY: float = 0.0,
    fmt: OutputFormat = Query(default=OutputFormat.json, alias="format"),
):
    view = get_view("usa")
    scene = build_country_scene(
        state_features(),
        view=view,
        viewport=view.viewport(width, height),
        gesture=_gesture(view, zoom, panX, panY),
        state_code=state,
    )
    return _respond(scene, fmt)


@app.get("/map/states/{code}")
def map_state(
    code: str,
    width: float | None = Query(default=None, gt=0),
    height: float | None = Query(default=None, gt=0),
    fmt: OutputFormat = Query(default=OutputFormat.json, alias="format"),
):
    _require_state(code)
    view = get_view("state")
    scene = build_state_scene(
        state_features(), code, view=view, viewport=view.viewport(width, height)
    )
    return _respond(scene, fmt)


@app.get("/map/states/{code}/districts")
def map_districts(
    code: str,
    width: float | None = Query(default=None, gt=0),
    height: float | None = Query(default=None, gt=0),
    zoom: float = 1.0,
    panX: float = 0.0,
    panY: float = 0.0,
    fmt: OutputFormat = Query(default=OutputFormat.json, alias="format"),
):
    _require_state(code)
    view = get_view("districts")
    scene = build_district_scene(
        district_features(),
        code,
        view=view,
        viewport=view.viewport(width, height),
        gesture=_gesture(view, zoom, panX, panY),
    )
    return _respond(scene, fmt)


@app.post("/map/hit")
def map_hit(body: ApiHitRequest):
    """
    Resolve a tap (screen coordinates of the given view) to a region id.

    The caller decides what to do with it (e.g. navigate to /{state code}).
    """
    g = body.gesture or ApiGesture()
    if body.view == HitView.districts:
        if not body.state:
            raise HTTPException(status_code=422, detail="`state` is required for districts")
        info = _require_state(body.state)
        view = get_view("districts")
        features = district_features()
        scene = build_district_scene(
            features,
            info.code,
            view=view,
            viewport=view.viewport(body.width, body.height),
            gesture=_gesture(view, g.scale, g.x, g.y),
        )
        index = build_hit_index(
            filter_by_region(features, info.fips, property_key(DISTRICT_STATE_KEY)),
            key=district_region_id,
        )
    else:
        view = get_view("usa")
        features = state_features()
        scene = build_country_scene(
            features,
            view=view,
            viewport=view.viewport(body.width, body.height),
            gesture=_gesture(view, g.scale, g.x, g.y),
            state_code=body.state,
        )
        index = None if scene.no_data else _country_index(features, body.state)

    region_id = _hit(scene, index, body.x, body.y)
    out: dict = {"regionId": region_id}
    if body.view == HitView.usa and region_id is not None:
        ref = get_state_by_fips(region_id)
        out["stateCode"] = ref.code if ref else None
    return out


def _country_index(features: tuple[Feature, ...], state: str | None) -> RegionHitIndex:
    if state:
        info = _require_state(state)
        return build_hit_index(filter_by_region(features, info.fips))
    return build_hit_index(features)


def _hit(scene: MapScene, index: RegionHitIndex | None, x: float, y: float) -> str | None:
    if scene.no_data or index is None:
        return None
    gx, gy = scene.screen_to_geometry(x, y)
    return index.region_at(gx, gy)
