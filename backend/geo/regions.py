from __future__ import annotations

from typing import Callable, Iterable

from layers.types import Feature

# Join-key selector: which field of a feature carries the region identifier.
KeySelector = Callable[[Feature], "str | None"]


def FEATURE_ID(feature: Feature) -> str | None:
    return feature.id


def property_key(name: str) -> KeySelector:
    """
    Select a region id from `feature.properties[name]`.

    The district dataset is keyed by a parent-state property (e.g. STATEFP)
    rather than by feature id.
    """

    def select(feature: Feature) -> str | None:
        v = (feature.properties or {}).get(name)
        return None if v is None else str(v)

    return select


def filter_by_region(
    features: Iterable[Feature],
    region_id: str,
    key: KeySelector = FEATURE_ID,
) -> list[Feature]:
    # Exact match; an unknown region simply selects nothing.
    return [f for f in features if key(f) == region_id]


def find_region(
    features: Iterable[Feature],
    region_id: str,
    key: KeySelector = FEATURE_ID,
) -> Feature | None:
    for f in features:
        if key(f) == region_id:
            return f
    return None
