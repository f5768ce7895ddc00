from __future__ import annotations

from typing import TYPE_CHECKING

from layers.types import Geometry, MultiPolygonGeometry, PolygonGeometry, Ring

if TYPE_CHECKING:
    from geo.fit import ViewportFit


def generate_path(geometry: Geometry | None, transform: "ViewportFit | None" = None) -> str:
    """
    SVG path data for a Polygon / MultiPolygon.

    Every ring (outer boundaries and holes alike) becomes one closed sub-path:
    `M` to the first point, `L` to each following point, then `Z`. Points are
    emitted in native coordinates unless a fit transform is given.

    Missing or unsupported geometry yields "" so one bad feature never stops the
    rest of the map from rendering.
    """
    if isinstance(geometry, PolygonGeometry):
        rings = geometry.rings
    elif isinstance(geometry, MultiPolygonGeometry):
        rings = [r for rings in geometry.polygons for r in rings]
    else:
        return ""
    return "".join(_ring_path(r, transform) for r in rings if r)


def _ring_path(ring: Ring, transform: "ViewportFit | None") -> str:
    parts: list[str] = []
    for i, (x, y) in enumerate(ring):
        if transform is not None:
            x, y = transform.apply(x, y)
        parts.append(f"{'M' if i == 0 else 'L'}{format_number(x)},{format_number(y)}")
    parts.append("Z")
    return "".join(parts)


def format_number(v: float) -> str:
    f = float(v)
    if f.is_integer():
        return str(int(f))
    return repr(f)
