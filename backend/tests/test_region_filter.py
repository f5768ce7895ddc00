from __future__ import annotations

from geo.bounds import compute_bounds
from geo.regions import FEATURE_ID, filter_by_region, find_region, property_key


def test_filter_by_feature_id(state_features):
    out = filter_by_region(state_features, "34")
    assert [f.id for f in out] == ["34"]


def test_filter_by_property_key(district_features):
    out = filter_by_region(district_features, "42", property_key("STATEFP"))
    assert [f.properties["GEOID"] for f in out] == ["4201", "4202"]


def test_join_keys_are_not_interchangeable(state_features, district_features):
    # States are keyed by id, districts by a property.
    assert filter_by_region(district_features, "42", FEATURE_ID) == []
    assert filter_by_region(state_features, "42", property_key("STATEFP")) == []


def test_unknown_region_yields_empty_list_and_no_bounds(state_features):
    out = filter_by_region(state_features, "00")
    assert out == []
    assert compute_bounds(out) is None


def test_match_is_exact(state_features):
    assert filter_by_region(state_features, "4") == []
    assert filter_by_region(state_features, " 42") == []


def test_find_region(state_features):
    assert find_region(state_features, "15").id == "15"
    assert find_region(state_features, "06") is None
