from __future__ import annotations

import os
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _package_data() -> Path:
    return Path(__file__).resolve().parent / "data"


def views_path() -> Path:
    return Path(os.getenv("TRACKMAP_VIEWS_PATH") or (_package_data() / "views.yaml"))


def states_topology_path() -> Path:
    # Pre-projected (Albers) states topology, e.g. us-atlas states-albers-10m.json.
    return Path(
        os.getenv("TRACKMAP_STATES_TOPOLOGY")
        or (_repo_root() / "data" / "maps" / "states-albers-10m.json")
    )


def states_object_name() -> str:
    return (os.getenv("TRACKMAP_STATES_OBJECT") or "states").strip()


def districts_topology_path() -> Path:
    return Path(
        os.getenv("TRACKMAP_DISTRICTS_TOPOLOGY")
        or (_repo_root() / "data" / "maps" / "us-congressional-districts-119.topojson")
    )


def districts_object_name() -> str:
    return (os.getenv("TRACKMAP_DISTRICTS_OBJECT") or "us-congressional-districts-119").strip()


def log_level() -> str:
    return (os.getenv("TRACKMAP_LOG_LEVEL") or "INFO").strip().upper()
