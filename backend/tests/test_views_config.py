from __future__ import annotations

import pytest
from pydantic import ValidationError

from geo.fit import PaddingMode, Viewport
from views.config import districts_object_name, states_topology_path
from views.registry import clear_view_cache, get_view
from views.types import MapViewConfig


@pytest.fixture
def views_file(tmp_path, monkeypatch):
    path = tmp_path / "views.yaml"
    monkeypatch.setenv("TRACKMAP_VIEWS_PATH", str(path))
    clear_view_cache()
    yield path
    clear_view_cache()


def test_packaged_presets():
    clear_view_cache()
    usa = get_view("usa")
    districts = get_view("districts")
    assert usa.padding_mode == PaddingMode.geometry_space_percent
    assert usa.padding == 0.1
    assert get_view("state").padding == 0.2
    assert districts.padding_mode == PaddingMode.scale_space_margin
    assert districts.padding == 0.025
    assert districts.gesture_config().max_scale == 5.0
    assert not usa.flip_y
    assert districts.flip_y


def test_defaults_merge_into_each_view(views_file):
    views_file.write_text(
        "usa:\n  max_scale: 4\nstate:\n  padding: 0.3\ndefaults:\n  max_scale: 3\n",
        encoding="utf-8",
    )
    assert get_view("usa").max_scale == 4
    assert get_view("state").max_scale == 3
    assert get_view("state").padding == 0.3


def test_missing_views_file_uses_built_in_presets(views_file):
    assert get_view("districts").viewport() == Viewport(500, 400)


def test_invalid_view_config_is_rejected():
    with pytest.raises(ValidationError):
        MapViewConfig(min_scale=3, max_scale=2)
    with pytest.raises(ValidationError):
        MapViewConfig(padding_mode=PaddingMode.scale_space_margin, padding=0.5)


def test_viewport_override():
    cfg = MapViewConfig()
    assert cfg.viewport() == Viewport(975, 500)
    assert cfg.viewport(300, None) == Viewport(300, 500)


def test_data_paths_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("TRACKMAP_STATES_TOPOLOGY", str(tmp_path / "s.json"))
    monkeypatch.setenv("TRACKMAP_DISTRICTS_OBJECT", " cd118 ")
    assert states_topology_path() == tmp_path / "s.json"
    assert districts_object_name() == "cd118"


def test_views_file_must_be_a_mapping(views_file):
    views_file.write_text("- usa\n- state\n", encoding="utf-8")
    with pytest.raises(ValueError):
        get_view("usa")
