from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


PoliticalCategory = Literal["red", "blue", "purple", "neutral"]


class ColorPair(BaseModel):
    fill: str
    stroke: str
    textColor: str | None = None


class StateInfo(BaseModel):
    # Two-letter abbreviation, lowercase.
    code: str = Field(min_length=2, max_length=2)
    name: str
    # FIPS code; the join key of the whole-country topology.
    fips: str
    political: PoliticalCategory
    displayName: str


class StateTable(BaseModel):
    colors: dict[PoliticalCategory, ColorPair]
    states: list[StateInfo]


class DistrictTable(BaseModel):
    districtCounts: dict[str, int] = Field(default_factory=dict)
