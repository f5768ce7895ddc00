from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from geo.bounds import BoundingBox, compute_bounds, geometry_bounds, view_box
from geo.fit import Viewport, ViewportFit, fit
from geo.path import format_number, generate_path
from geo.regions import filter_by_region, find_region, property_key
from gestures.state import GestureState
from layers.types import Feature
from regions.registry import get_state_by_fips, get_state_info, resolve_colors, state_colors
from render.transform import IDENTITY, Affine, gesture_transform
from views.types import MapViewConfig

logger = logging.getLogger(__name__)

# District dataset join key (parent state FIPS) and per-district fields.
DISTRICT_STATE_KEY = "STATEFP"
DISTRICT_ID_KEY = "GEOID"
DISTRICT_NAME_KEY = "NAMELSAD"

# Neutral district colors until party data is joined in.
DISTRICT_FILL = "#E5E7EB"
DISTRICT_STROKE = "#6B7280"


@dataclass(frozen=True)
class RenderedPath:
    region_id: str
    d: str
    fill: str
    stroke: str
    stroke_width: float = 1.0
    label: str | None = None


@dataclass(frozen=True)
class MapScene:
    """
    Everything a renderer needs for one map view.

    `path_transform` maps path coordinates to the fitted viewport (identity when
    the paths were pre-transformed); `gesture` is layered on top at render time.
    """

    view: str
    viewport: Viewport
    paths: list[RenderedPath] = field(default_factory=list)
    fit: ViewportFit | None = None
    bounds: BoundingBox | None = None
    path_transform: Affine = IDENTITY
    gesture: Affine = IDENTITY
    no_data: str | None = None

    def effective_transform(self) -> Affine:
        return self.path_transform.then(self.gesture)

    def screen_to_geometry(self, x: float, y: float) -> tuple[float, float]:
        gx, gy = self.gesture.invert(x, y)
        if self.fit is None:
            return (gx, gy)
        return self.fit.invert(gx, gy)

    def svg_view_box(self) -> str:
        if self.fit is None:
            return view_box(None)
        return f"0 0 {format_number(self.viewport.width)} {format_number(self.viewport.height)}"

    def to_dict(self) -> dict[str, Any]:
        t = self.effective_transform()
        return {
            "view": self.view,
            "viewport": {"width": self.viewport.width, "height": self.viewport.height},
            "viewBox": self.svg_view_box(),
            "fit": None
            if self.fit is None
            else {
                "scale": self.fit.scale,
                "translateX": self.fit.translate_x,
                "translateY": self.fit.translate_y,
            },
            "transform": t.svg_matrix(),
            "noData": self.no_data,
            "paths": [
                {
                    "id": p.region_id,
                    "d": p.d,
                    "fill": p.fill,
                    "stroke": p.stroke,
                    "strokeWidth": p.stroke_width,
                    "label": p.label,
                }
                for p in self.paths
            ],
        }


def build_country_scene(
    features: Sequence[Feature],
    *,
    view: MapViewConfig,
    viewport: Viewport | None = None,
    gesture: GestureState | None = None,
    state_code: str | None = None,
) -> MapScene:
    """
    Whole-country map (states keyed by FIPS feature id), optionally narrowed to
    one state.
    """
    vp = viewport or view.viewport()
    g = gesture_transform(gesture, vp)

    selected = list(features)
    if state_code:
        info = get_state_info(state_code)
        if info is None:
            logger.warning("Unknown state code: %s", state_code)
            return _no_data_scene("usa", vp, f"Unknown state: {state_code}", g)
        selected = filter_by_region(selected, info.fips)

    bounds = compute_bounds(selected)
    if bounds is None:
        logger.warning("No regions to display (state filter: %s)", state_code)
        return _no_data_scene("usa", vp, "No regions to display", g)

    f = fit(bounds, vp, padding=view.padding, mode=view.padding_mode, flip_y=view.flip_y)
    paths: list[RenderedPath] = []
    for feature in selected:
        colors = resolve_colors(feature.id)
        ref = get_state_by_fips(feature.id)
        paths.append(
            RenderedPath(
                region_id=feature.id,
                d=generate_path(feature.geometry),
                fill=colors.fill,
                stroke=colors.stroke,
                stroke_width=0.75,
                label=ref.displayName if ref else None,
            )
        )

    logger.debug("Country scene: %d paths, scale=%.4f", len(paths), f.scale)
    return MapScene(
        view="usa",
        viewport=vp,
        paths=paths,
        fit=f,
        bounds=bounds,
        path_transform=Affine.from_fit(f),
        gesture=g,
    )


def build_state_scene(
    features: Sequence[Feature],
    state_code: str,
    *,
    view: MapViewConfig,
    viewport: Viewport | None = None,
) -> MapScene:
    """Single state outline for the state detail page (no gestures)."""
    vp = viewport or view.viewport()
    info = get_state_info(state_code)
    if info is None:
        logger.warning("Unknown state code: %s", state_code)
        return _no_data_scene("state", vp, f"State {state_code!r} not found")

    feature = find_region(features, info.fips)
    bounds = geometry_bounds(feature.geometry) if feature is not None else None
    if feature is None or bounds is None:
        logger.warning("No geometry for state %s (FIPS %s)", info.name, info.fips)
        return _no_data_scene("state", vp, f"No map data for {info.displayName}")

    f = fit(bounds, vp, padding=view.padding, mode=view.padding_mode, flip_y=view.flip_y)
    colors = state_colors(info.political)
    path = RenderedPath(
        region_id=feature.id,
        d=generate_path(feature.geometry),
        fill=colors.fill,
        stroke=colors.stroke,
        stroke_width=1.5,
        label=info.displayName,
    )
    return MapScene(
        view="state",
        viewport=vp,
        paths=[path],
        fit=f,
        bounds=bounds,
        path_transform=Affine.from_fit(f),
    )


def build_district_scene(
    features: Sequence[Feature],
    state_code: str,
    *,
    view: MapViewConfig,
    viewport: Viewport | None = None,
    gesture: GestureState | None = None,
) -> MapScene:
    """
    Congressional districts of one state. Paths are emitted already fitted to
    the viewport; only the gesture transform is left for the renderer.
    """
    vp = viewport or view.viewport()
    g = gesture_transform(gesture, vp)
    info = get_state_info(state_code)
    if info is None:
        logger.warning("Unknown state code: %s", state_code)
        return _no_data_scene("districts", vp, f"Unknown state: {state_code}", g)

    districts = filter_by_region(features, info.fips, property_key(DISTRICT_STATE_KEY))
    bounds = compute_bounds(districts)
    if bounds is None:
        logger.warning("No districts found for state: %s (FIPS: %s)", state_code, info.fips)
        return _no_data_scene("districts", vp, f"No districts found for {info.name}", g)

    logger.info("Rendering %d districts for %s", len(districts), info.name)
    f = fit(bounds, vp, padding=view.padding, mode=view.padding_mode, flip_y=view.flip_y)
    paths: list[RenderedPath] = []
    for district in districts:
        props = district.properties or {}
        paths.append(
            RenderedPath(
                region_id=district_region_id(district),
                d=generate_path(district.geometry, f),
                fill=DISTRICT_FILL,
                stroke=DISTRICT_STROKE,
                stroke_width=1.0,
                label=str(props.get(DISTRICT_NAME_KEY) or "Unknown District"),
            )
        )

    return MapScene(
        view="districts",
        viewport=vp,
        paths=paths,
        fit=f,
        bounds=bounds,
        gesture=g,
    )


def district_region_id(feature: Feature) -> str:
    # Same fallback as the hit index: the decoded feature id.
    return property_key(DISTRICT_ID_KEY)(feature) or feature.id


def _no_data_scene(
    view: str, viewport: Viewport, message: str, gesture: Affine = IDENTITY
) -> MapScene:
    # Unfitted: renderers fall back to the default whole-country frame.
    return MapScene(view=view, viewport=viewport, gesture=gesture, no_data=message)
