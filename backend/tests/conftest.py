import json
import sys
from pathlib import Path

import pytest


# Ensure `backend/` is on sys.path so tests can import local modules
# like `geo.*`, `layers.*`, and `main`.
BACKEND_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_ROOT))


def _states_topology() -> dict:
    """
    Three states on a tiny planar grid (quantized, delta-encoded arcs):
    PA (42) = [0,10]x[0,10], NJ (34) = [10,20]x[0,10] sharing PA's east edge,
    HI (15) = two islands, plus an id (99) without geometry.
    """
    return {
        "type": "Topology",
        "transform": {"scale": [1, 1], "translate": [0, 0]},
        "objects": {
            "states": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "id": "42", "arcs": [[0, 1]]},
                    {"type": "Polygon", "id": "34", "arcs": [[-1, 2]]},
                    {"type": "MultiPolygon", "id": "15", "arcs": [[[3]], [[4]]]},
                    {"type": None, "id": "99"},
                ],
            }
        },
        "arcs": [
            [[10, 0], [0, 10]],
            [[10, 10], [-10, 0], [0, -10], [10, 0]],
            [[10, 0], [10, 0], [0, 10], [-10, 0]],
            [[30, 0], [2, 0], [0, 2], [-2, 0], [0, -2]],
            [[34, 0], [1, 0], [0, 1], [-1, 0], [0, -1]],
        ],
    }


def _districts_topology() -> dict:
    # Unquantized: arcs are absolute coordinates.
    return {
        "type": "Topology",
        "objects": {
            "us-congressional-districts-119": {
                "type": "GeometryCollection",
                "geometries": [
                    {
                        "type": "Polygon",
                        "arcs": [[0]],
                        "properties": {
                            "STATEFP": "42",
                            "GEOID": "4201",
                            "NAMELSAD": "Congressional District 1",
                        },
                    },
                    {
                        "type": "Polygon",
                        "arcs": [[1]],
                        "properties": {
                            "STATEFP": "42",
                            "GEOID": "4202",
                            "NAMELSAD": "Congressional District 2",
                        },
                    },
                    {
                        "type": "Polygon",
                        "arcs": [[2]],
                        "properties": {"STATEFP": "34", "GEOID": "3401"},
                    },
                ],
            }
        },
        "arcs": [
            [[-80.0, 40.0], [-78.0, 40.0], [-78.0, 42.0], [-80.0, 42.0], [-80.0, 40.0]],
            [[-78.0, 40.0], [-75.0, 40.0], [-75.0, 41.0], [-78.0, 41.0], [-78.0, 40.0]],
            [[-75.0, 39.0], [-74.0, 39.0], [-74.0, 41.0], [-75.0, 41.0], [-75.0, 39.0]],
        ],
    }


@pytest.fixture
def states_topology() -> dict:
    return _states_topology()


@pytest.fixture
def districts_topology() -> dict:
    return _districts_topology()


@pytest.fixture
def state_features(states_topology):
    from layers.topology import decode_topology

    return decode_topology(states_topology, "states")


@pytest.fixture
def district_features(districts_topology):
    from layers.topology import decode_topology

    return decode_topology(districts_topology, "us-congressional-districts-119")


@pytest.fixture
def topology_files(tmp_path, monkeypatch, states_topology, districts_topology):
    """Write both topologies to disk and point the app config at them."""
    states_path = tmp_path / "states.json"
    districts_path = tmp_path / "districts.topojson"
    states_path.write_text(json.dumps(states_topology), encoding="utf-8")
    districts_path.write_text(json.dumps(districts_topology), encoding="utf-8")

    monkeypatch.setenv("TRACKMAP_STATES_TOPOLOGY", str(states_path))
    monkeypatch.setenv("TRACKMAP_DISTRICTS_TOPOLOGY", str(districts_path))
    monkeypatch.delenv("TRACKMAP_STATES_OBJECT", raising=False)
    monkeypatch.delenv("TRACKMAP_DISTRICTS_OBJECT", raising=False)

    from main import clear_feature_cache

    clear_feature_cache()
    yield states_path, districts_path
    clear_feature_cache()
