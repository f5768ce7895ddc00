from __future__ import annotations

from geo.bounds import DEFAULT_VIEW_BOX, BoundingBox, compute_bounds, geometry_bounds, view_box
from layers.types import Feature, MultiPolygonGeometry, PolygonGeometry


def _rect(fid: str, x0: float, y0: float, x1: float, y1: float) -> Feature:
    ring = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    return Feature(id=fid, geometry=PolygonGeometry(rings=[ring]), properties={})


def test_bounds_span_all_features():
    b = compute_bounds([_rect("a", 0, 0, 10, 5), _rect("b", 5, -2, 20, 3)])
    assert b == BoundingBox(min_x=0, min_y=-2, max_x=20, max_y=5)
    assert b.width == 20
    assert b.height == 7


def test_empty_input_signals_no_data():
    assert compute_bounds([]) is None


def test_features_without_geometry_signal_no_data():
    assert compute_bounds([Feature(id="x", geometry=None)]) is None


def test_multipolygon_islands_are_included(state_features):
    hawaii = next(f for f in state_features if f.id == "15")
    b = geometry_bounds(hawaii.geometry)
    assert b.as_tuple() == (30.0, 0.0, 35.0, 2.0)


def test_single_geometry_variant_matches_collection_variant(state_features):
    pa = state_features[0]
    assert geometry_bounds(pa.geometry) == compute_bounds([pa])


def test_geometry_bounds_of_multipolygon_with_empty_polygon():
    g = MultiPolygonGeometry(polygons=[[], [[(1.0, 1.0), (2.0, 3.0)]]])
    assert geometry_bounds(g) == BoundingBox(1.0, 1.0, 2.0, 3.0)


def test_padding_is_relative_to_own_size():
    b = BoundingBox(0, 0, 10, 20).padded(0.1)
    assert b.as_tuple() == (-1.0, -2.0, 11.0, 22.0)
    assert BoundingBox(0, 0, 10, 20).center == (5.0, 10.0)


def test_view_box_strings():
    assert view_box(BoundingBox(0, 0, 10, 20), 0.1) == "-1 -2 12 24"
    assert view_box(None) == "0 0 975 610"
    assert DEFAULT_VIEW_BOX.width == 975
