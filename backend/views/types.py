from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from geo.fit import PaddingMode, Viewport
from gestures.state import GestureConfig


class MapViewConfig(BaseModel):
    """
    How one kind of map view fits its geometry and clamps gestures.

    The whole-country and state views pad the bounds in geometry units; the
    district view shrinks the fitted scale instead. Only the district source
    (lon/lat) is flipped vertically; the others come pre-projected, y-down.
    """

    padding_mode: PaddingMode = PaddingMode.geometry_space_percent
    padding: float = Field(default=0.1, ge=0.0)
    # False for sources already in a y-down frame (pre-projected Albers).
    flip_y: bool = True
    min_scale: float = Field(default=1.0, gt=0.0)
    max_scale: float = Field(default=5.0, gt=0.0)
    pan_limit_per_zoom: float = Field(default=100.0, ge=0.0)
    min_pan_distance: float = Field(default=10.0, ge=0.0)
    width: float = Field(default=975.0, gt=0.0)
    height: float = Field(default=500.0, gt=0.0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "MapViewConfig":
        if self.min_scale > self.max_scale:
            raise ValueError("min_scale must not exceed max_scale")
        if self.padding_mode == PaddingMode.scale_space_margin and self.padding >= 0.5:
            raise ValueError("scale_space_margin padding must be < 0.5")
        return self

    def gesture_config(self) -> GestureConfig:
        return GestureConfig(
            min_scale=self.min_scale,
            max_scale=self.max_scale,
            pan_limit_per_zoom=self.pan_limit_per_zoom,
            min_pan_distance=self.min_pan_distance,
        )

    def viewport(self, width: float | None = None, height: float | None = None) -> Viewport:
        return Viewport(width=width or self.width, height=height or self.height)


class ViewPresets(BaseModel):
    usa: MapViewConfig = Field(default_factory=lambda: MapViewConfig(flip_y=False))
    state: MapViewConfig = Field(
        default_factory=lambda: MapViewConfig(padding=0.2, height=400.0, flip_y=False)
    )
    districts: MapViewConfig = Field(
        default_factory=lambda: MapViewConfig(
            padding_mode=PaddingMode.scale_space_margin,
            padding=0.025,
            width=500.0,
            height=400.0,
        )
    )
