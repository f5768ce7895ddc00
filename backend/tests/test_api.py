from __future__ import annotations

from fastapi.testclient import TestClient

from main import app, clear_feature_cache


client = TestClient(app)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_states_listing():
    r = client.get("/states")
    assert r.status_code == 200
    by_code = {s["code"]: s for s in r.json()}
    assert len(by_code) == 57
    assert by_code["pa"]["districtCount"] == 17
    assert by_code["pr"]["districtCount"] == 0


def test_usa_map(topology_files):
    r = client.get("/map/usa")
    assert r.status_code == 200
    body = r.json()
    assert body["noData"] is None
    assert [p["id"] for p in body["paths"]] == ["42", "34", "15", "99"]


def test_usa_map_single_state_as_svg(topology_files):
    r = client.get("/map/usa", params={"state": "pa", "format": "svg"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("image/svg+xml")
    assert 'data-region-id="42"' in r.text
    assert 'data-region-id="34"' not in r.text


def test_usa_map_unknown_state_is_no_data(topology_files):
    body = client.get("/map/usa", params={"state": "zz"}).json()
    assert body["noData"] == "Unknown state: zz"
    assert body["viewBox"] == "0 0 975 610"


def test_state_map(topology_files):
    r = client.get("/map/states/NJ")
    assert r.status_code == 200
    assert r.json()["paths"][0]["id"] == "34"
    assert client.get("/map/states/zz").status_code == 404


def test_district_map(topology_files):
    body = client.get("/map/states/pa/districts", params={"width": 500, "height": 400}).json()
    assert [p["id"] for p in body["paths"]] == ["4201", "4202"]
    assert body["viewBox"] == "0 0 500 400"


def test_missing_topology_is_service_unavailable(topology_files, monkeypatch, tmp_path):
    monkeypatch.setenv("TRACKMAP_STATES_TOPOLOGY", str(tmp_path / "missing.json"))
    clear_feature_cache()
    r = client.get("/map/usa")
    assert r.status_code == 503
    assert r.json()["detail"] == "Map data not available"


def test_hit_country(topology_files):
    # The viewport center maps to the center of the fitted bounds.
    r = client.post("/map/hit", json={"x": 487.5, "y": 250})
    assert r.json() == {"regionId": "34", "stateCode": "nj"}

    r = client.post("/map/hit", json={"x": 487.5, "y": 250, "state": "pa"})
    assert r.json() == {"regionId": "42", "stateCode": "pa"}


def test_hit_with_gesture(topology_files):
    r = client.post(
        "/map/hit",
        json={"x": 537.5, "y": 250, "gesture": {"scale": 2, "x": 50, "y": 0}},
    )
    assert r.json()["regionId"] == "34"


def test_hit_outside_regions(topology_files):
    r = client.post("/map/hit", json={"x": 1, "y": 1})
    assert r.json() == {"regionId": None}


def test_hit_districts(topology_files):
    r = client.post(
        "/map/hit",
        json={"view": "districts", "state": "pa", "x": 107.5, "y": 200, "width": 500, "height": 400},
    )
    assert r.json() == {"regionId": "4201"}
    assert client.post("/map/hit", json={"view": "districts", "x": 1, "y": 1}).status_code == 422


def test_hit_unknown_state_matches_map_no_data(topology_files):
    r = client.post("/map/hit", json={"x": 487.5, "y": 250, "state": "zz"})
    assert r.status_code == 200
    assert r.json() == {"regionId": None}
