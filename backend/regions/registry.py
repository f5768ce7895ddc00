from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from layers.loaders import load_yaml
from regions.types import ColorPair, DistrictTable, PoliticalCategory, StateInfo, StateTable

logger = logging.getLogger(__name__)

# Used for regions the reference table does not know (lookup miss, not an error).
UNKNOWN_REGION_COLORS = ColorPair(fill="#d6d6da", stroke="#ffffff")


def _data_root() -> Path:
    return Path(__file__).resolve().parent / "data"


@lru_cache(maxsize=1)
def get_state_table() -> StateTable:
    return StateTable.model_validate(load_yaml(_data_root() / "states.yaml"))


@lru_cache(maxsize=1)
def get_district_table() -> DistrictTable:
    return DistrictTable.model_validate(load_yaml(_data_root() / "districts.yaml"))


@lru_cache(maxsize=1)
def _states_by_code() -> dict[str, StateInfo]:
    return {s.code.lower(): s for s in get_state_table().states}


@lru_cache(maxsize=1)
def _states_by_fips() -> dict[str, StateInfo]:
    return {s.fips: s for s in get_state_table().states}


def list_states() -> list[StateInfo]:
    return list(get_state_table().states)


def get_state_info(code: str | None) -> StateInfo | None:
    return _states_by_code().get((code or "").strip().lower())


def get_state_by_fips(fips: str | None) -> StateInfo | None:
    return _states_by_fips().get((fips or "").strip())


def state_colors(category: PoliticalCategory) -> ColorPair:
    return get_state_table().colors.get(category, UNKNOWN_REGION_COLORS)


def resolve_colors(fips: str | None) -> ColorPair:
    info = get_state_by_fips(fips)
    if info is None:
        logger.debug("No reference entry for region %r; using neutral colors", fips)
        return UNKNOWN_REGION_COLORS
    return state_colors(info.political)


def district_count(code: str | None) -> int:
    return get_district_table().districtCounts.get((code or "").strip().lower(), 0)


def districts_for_state(code: str | None) -> list[int]:
    """
    District numbers of a state: 1..N, or [0] for a single at-large seat.
    """
    count = district_count(code)
    if count == 0:
        logger.warning("Unknown state code: %s", code)
        return []
    if count == 1:
        return [0]
    return list(range(1, count + 1))


def is_at_large(code: str | None) -> bool:
    return district_count(code) == 1


def clear_registry_cache() -> None:
    for fn in (get_state_table, get_district_table, _states_by_code, _states_by_fips):
        fn.cache_clear()
