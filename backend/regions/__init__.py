from .registry import (
    UNKNOWN_REGION_COLORS,
    district_count,
    districts_for_state,
    get_state_by_fips,
    get_state_info,
    is_at_large,
    list_states,
    resolve_colors,
    state_colors,
)
from .types import ColorPair, StateInfo

__all__ = [
    "UNKNOWN_REGION_COLORS",
    "ColorPair",
    "StateInfo",
    "district_count",
    "districts_for_state",
    "get_state_by_fips",
    "get_state_info",
    "is_at_large",
    "list_states",
    "resolve_colors",
    "state_colors",
]
