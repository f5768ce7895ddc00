from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from layers.loaders import load_yaml
from views.config import views_path
from views.types import MapViewConfig, ViewPresets

logger = logging.getLogger(__name__)

ViewName = Literal["usa", "state", "districts"]


@lru_cache(maxsize=1)
def get_view_presets() -> ViewPresets:
    path = views_path()
    if not path.exists():
        logger.warning("Views config %s not found; using built-in presets", path)
        return ViewPresets()

    data = load_yaml(path)
    # `defaults` applies to every view unless the view sets the key itself.
    defaults = data.pop("defaults", None) or {}
    merged = {name: {**defaults, **(cfg or {})} for name, cfg in data.items()}
    return ViewPresets.model_validate(merged)


def get_view(name: ViewName) -> MapViewConfig:
    return getattr(get_view_presets(), name)


def clear_view_cache() -> None:
    """
    Clear the cached view presets.

    Useful during development and in tests that point TRACKMAP_VIEWS_PATH elsewhere.
    """
    get_view_presets.cache_clear()
