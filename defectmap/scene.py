"""Backend-agnostic scene assembly and the SVG painter used by the UI and API.

A :class:`Scene` is a flat list of primitives already mapped into surface
coordinates, in paint order: canvas background, rectangle outline, then one
circle per defect.  Painting it is left to whichever backend the host uses;
:func:`render_svg` is the one shipped here.
"""
from __future__ import annotations

import math
from html import escape
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple, Union

from .config import DotStyle
from .defects import Defect
from .errors import InvalidGeometry
from .geometry import Canvas, Rectangle, ViewTransform

BACKGROUND_FILL = "white"
OUTLINE_STROKE = "black"
OUTLINE_WIDTH = 2.0


@dataclass(frozen=True)
class FilledRect:
    x: float
    y: float
    width: float
    height: float
    fill: str
    kind: str = "filled_rect"


@dataclass(frozen=True)
class StrokedRect:
    x: float
    y: float
    width: float
    height: float
    stroke: str
    stroke_width: float
    kind: str = "stroked_rect"


@dataclass(frozen=True)
class FilledCircle:
    cx: float
    cy: float
    r: float
    fill: str
    defect_id: str = ""
    kind: str = "filled_circle"


Primitive = Union[FilledRect, StrokedRect, FilledCircle]


@dataclass
class Scene:
    """Ordered drawable primitives plus the view box they live in."""

    view_box: Tuple[float, float, float, float]
    primitives: List[Primitive] = field(default_factory=list)

    @property
    def circles(self) -> List[FilledCircle]:
        return [p for p in self.primitives if isinstance(p, FilledCircle)]

    def to_dict(self) -> Dict[str, Any]:
        items: List[Dict[str, Any]] = []
        for prim in self.primitives:
            if isinstance(prim, FilledRect):
                items.append(
                    {"type": prim.kind, "x": prim.x, "y": prim.y, "width": prim.width,
                     "height": prim.height, "fill": prim.fill}
                )
            elif isinstance(prim, StrokedRect):
                items.append(
                    {"type": prim.kind, "x": prim.x, "y": prim.y, "width": prim.width,
                     "height": prim.height, "stroke": prim.stroke, "stroke_width": prim.stroke_width}
                )
            else:
                items.append(
                    {"type": prim.kind, "cx": prim.cx, "cy": prim.cy, "r": prim.r,
                     "fill": prim.fill, "defect_id": prim.defect_id}
                )
        return {"view_box": list(self.view_box), "primitives": items}


def _surface_rect(transform: ViewTransform, p0: Tuple[float, float], p1: Tuple[float, float]):
    ax, ay = transform.apply(*p0)
    bx, by = transform.apply(*p1)
    return min(ax, bx), min(ay, by), abs(bx - ax), abs(by - ay)


def build_scene(
    canvas: Canvas,
    rectangle: Rectangle,
    transform: ViewTransform,
    defects: Iterable[Defect],
    dot_style: DotStyle,
) -> Scene:
    """Combine geometry, defects and dot style into a painted-in-order scene."""

    if not (math.isfinite(canvas.width) and math.isfinite(canvas.height)):
        raise InvalidGeometry(f"canvas size must be finite, got {canvas.width!r} x {canvas.height!r}")
    if canvas.width <= 0 or canvas.height <= 0:
        raise InvalidGeometry(f"canvas size must be positive, got {canvas.width!r} x {canvas.height!r}")
    if not transform.is_finite() or transform.view_box[2] <= 0 or transform.view_box[3] <= 0:
        raise InvalidGeometry(f"malformed view transform: {transform!r}")
    if transform.scale_y != -1.0:
        raise InvalidGeometry(f"view transform must flip Y onto a Y-down surface, got scale_y={transform.scale_y!r}")

    x0, x1, y0, y1 = canvas.extent
    bx, by, bw, bh = _surface_rect(transform, (x0, y0), (x1, y1))
    primitives: List[Primitive] = [FilledRect(x=bx, y=by, width=bw, height=bh, fill=BACKGROUND_FILL)]

    rx, ry, rw, rh = _surface_rect(transform, *rectangle.corners())
    primitives.append(
        StrokedRect(x=rx, y=ry, width=rw, height=rh, stroke=OUTLINE_STROKE, stroke_width=OUTLINE_WIDTH)
    )

    for defect in defects:
        cx, cy = transform.apply(defect.x, defect.y)
        primitives.append(FilledCircle(cx=cx, cy=cy, r=dot_style.size, fill=dot_style.color, defect_id=defect.id))

    return Scene(view_box=transform.view_box, primitives=primitives)


def render_svg(scene: Scene, *, css_class: str = "") -> str:
    """Paint ``scene`` as a standalone SVG document."""

    elements: List[str] = []
    for prim in scene.primitives:
        if isinstance(prim, FilledRect):
            elements.append(
                f'<rect x="{prim.x:.2f}" y="{prim.y:.2f}" width="{prim.width:.2f}" height="{prim.height:.2f}" '
                f'fill="{escape(prim.fill)}" />'
            )
        elif isinstance(prim, StrokedRect):
            elements.append(
                f'<rect x="{prim.x:.2f}" y="{prim.y:.2f}" width="{prim.width:.2f}" height="{prim.height:.2f}" '
                f'fill="none" stroke="{escape(prim.stroke)}" stroke-width="{prim.stroke_width:.2f}" />'
            )
        else:
            elements.append(
                f'<circle data-defect="{escape(prim.defect_id)}" cx="{prim.cx:.2f}" cy="{prim.cy:.2f}" '
                f'r="{prim.r:.2f}" fill="{escape(prim.fill)}" />'
            )
    view_box = " ".join(f"{v:.2f}" for v in scene.view_box)
    class_attr = f' class="{escape(css_class)}"' if css_class else ""
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg"{class_attr} viewBox="{view_box}" '
        f'preserveAspectRatio="xMidYMid meet">' + "".join(elements) + "</svg>"
    )


__all__ = [
    "FilledRect",
    "StrokedRect",
    "FilledCircle",
    "Primitive",
    "Scene",
    "build_scene",
    "render_svg",
]
