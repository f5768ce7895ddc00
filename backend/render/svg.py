from __future__ import annotations

import svgwrite

from geo.bounds import DEFAULT_VIEW_BOX
from geo.path import format_number
from render.scene import MapScene

NO_DATA_TEXT_COLOR = "#6b7280"


def scene_to_svg(scene: MapScene) -> str:
    """
    Standalone SVG document for a scene.

    All paths share one group carrying the effective (fit + gesture) transform, so
    the path data itself stays in the coordinates the scene produced.
    """
    w = scene.viewport.width
    h = scene.viewport.height
    dwg = svgwrite.Drawing(
        size=(format_number(w), format_number(h)),
        viewBox=scene.svg_view_box(),
        debug=False,
    )

    group = dwg.g(transform=scene.effective_transform().svg_matrix())
    for p in scene.paths:
        if not p.d:
            continue
        el = dwg.path(d=p.d, fill=p.fill, stroke=p.stroke, stroke_width=p.stroke_width)
        el["data-region-id"] = p.region_id
        if p.label:
            el.set_desc(title=p.label)
        group.add(el)
    dwg.add(group)

    if scene.no_data:
        cx, cy = scene.viewport.center if scene.fit is not None else DEFAULT_VIEW_BOX.center
        dwg.add(
            dwg.text(
                scene.no_data,
                insert=(cx, cy),
                text_anchor="middle",
                fill=NO_DATA_TEXT_COLOR,
            )
        )
    return dwg.tostring()
