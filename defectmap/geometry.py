"""Canvas geometry and the world-to-surface view transform.

World coordinates put the origin at the centre of the inspection rectangle with
Y pointing up.  Drawing surfaces (SVG, most canvases) are Y-down, so the view
transform declares its view box in natural surface terms and flips the Y
component of every point it maps.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidGeometry

XY = Tuple[float, float]


def _require_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidGeometry(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(value):
        raise InvalidGeometry(f"{name} must be finite, got {value!r}")
    return value


def _require_positive(name: str, value: float) -> float:
    value = _require_finite(name, value)
    if value <= 0:
        raise InvalidGeometry(f"{name} must be positive, got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rectangle:
    """Inspection surface centred on the world origin."""

    width: float
    height: float

    def corners(self) -> Tuple[XY, XY]:
        """Return the lower-left and upper-right corners in world space."""
        hw, hh = self.width / 2.0, self.height / 2.0
        return (-hw, -hh), (hw, hh)


@dataclass(frozen=True)
class Canvas:
    """Padded drawable region around the rectangle, also centred on the origin."""

    width: float
    height: float

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        hw, hh = self.width / 2.0, self.height / 2.0
        return -hw, hw, -hh, hh


@dataclass(frozen=True)
class ViewTransform:
    """Map world points into drawing-surface coordinates.

    ``view_box`` is ``(min_x, min_y, width, height)`` in surface units, ready
    to be used as an SVG ``viewBox``.  ``scale_y`` is ``-1`` so that larger
    world Y values land higher on a Y-down surface.
    """

    view_box: Tuple[float, float, float, float]
    scale_y: float = -1.0

    def apply(self, x: float, y: float) -> XY:
        # + 0.0 folds -0.0 into 0.0
        return float(x) + 0.0, float(y) * self.scale_y + 0.0

    def to_pixels(self, x: float, y: float, width_px: float, height_px: float) -> XY:
        """Map a world point onto a pixel viewport with uniform 'meet' scaling."""
        width_px = _require_positive("viewport width", width_px)
        height_px = _require_positive("viewport height", height_px)
        min_x, min_y, vb_w, vb_h = self.view_box
        scale = min(width_px / vb_w, height_px / vb_h)
        pad_x = (width_px - vb_w * scale) / 2.0
        pad_y = (height_px - vb_h * scale) / 2.0
        sx, sy = self.apply(x, y)
        return pad_x + (sx - min_x) * scale, pad_y + (sy - min_y) * scale

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (*self.view_box, self.scale_y))


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------


def compute_canvas(rectangle: Rectangle, margin_ratio: float) -> Canvas:
    """Pad ``rectangle`` by ``margin_ratio`` on each axis.

    ``margin_ratio`` is a fraction (``0.2`` for a 20 percent margin).  Bad
    inputs raise :class:`InvalidGeometry` instead of yielding a NaN or negative
    canvas.
    """

    width = _require_positive("rectangle width", rectangle.width)
    height = _require_positive("rectangle height", rectangle.height)
    margin = _require_finite("margin ratio", margin_ratio)
    if margin < 0:
        raise InvalidGeometry(f"margin ratio must not be negative, got {margin!r}")
    scale = 1.0 + margin
    return Canvas(width=width * scale, height=height * scale)


def compute_view_transform(canvas: Canvas) -> ViewTransform:
    width = _require_positive("canvas width", canvas.width)
    height = _require_positive("canvas height", canvas.height)
    return ViewTransform(view_box=(-width / 2.0, -height / 2.0, width, height))


def margin_ratio_from_percent(percent: float) -> float:
    return _require_finite("margin percent", percent) / 100.0


__all__ = [
    "XY",
    "Rectangle",
    "Canvas",
    "ViewTransform",
    "compute_canvas",
    "compute_view_transform",
    "margin_ratio_from_percent",
]
