"""Editor state holder shared by the NiceGUI page and the HTTP API."""
from __future__ import annotations

import logging
import math
import re
import threading
import time
from typing import Any, Dict, List, Optional

from .config import DotStyle, EditorSettings
from .defects import Defect, DefectCollection
from .errors import InvalidCoordinate, InvalidGeometry, InvalidStyle
from .geometry import (
    Canvas,
    Rectangle,
    ViewTransform,
    compute_canvas,
    compute_view_transform,
    margin_ratio_from_percent,
)
from .scene import Scene, build_scene, render_svg

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _format_number(value: float) -> str:
    return f"{value:g}"


def _to_float(name: str, value: Any, error: type) -> float:
    # bool is a Real subclass, but True is never a size
    if isinstance(value, bool):
        raise error(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise error(f"{name} must be a number, got {value!r}") from exc


class EditorController:
    """Own the rectangle, margin, dot style and defect list of one session.

    Every mutating command validates its input before touching state, so a
    rejected command leaves the previous state fully in place.  Derived values
    (canvas, transform, scene) are recomputed on demand from the current state.
    """

    def __init__(self, settings: Optional[EditorSettings] = None) -> None:
        self.settings = settings or EditorSettings()
        self._lock = threading.Lock()
        self._status: List[str] = []
        # one collection per controller so ids never repeat across session resets
        self.defects = DefectCollection()
        self.restore_defaults()

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    def restore_defaults(self) -> None:
        cfg = self.settings
        with self._lock:
            self.rectangle = Rectangle(width=cfg.rect_width, height=cfg.rect_height)
            self.margin_percent = float(cfg.margin_percent)
            self.dot_style = DotStyle(size=cfg.dot.size, color=cfg.dot.color)
            self.pending_x = cfg.pending_x
            self.pending_y = cfg.pending_y
            self.defects.reset()
            for x, y in cfg.seed_defects:
                self.defects.add(x, y)
        self.append_status("Session initialised with default values")

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def set_geometry(self, width: Any = None, height: Any = None, margin_percent: Any = None) -> Canvas:
        """Update any subset of width, height and margin; all or nothing."""
        with self._lock:
            w = self.rectangle.width if width is None else _to_float("rectangle width", width, InvalidGeometry)
            h = self.rectangle.height if height is None else _to_float("rectangle height", height, InvalidGeometry)
            percent = (
                self.margin_percent
                if margin_percent is None
                else _to_float("margin percent", margin_percent, InvalidGeometry)
            )
            rectangle = Rectangle(width=w, height=h)
            canvas = compute_canvas(rectangle, margin_ratio_from_percent(percent))
            self.rectangle = rectangle
            self.margin_percent = percent
        if width is not None or height is not None:
            self.append_status(f"Rectangle set to {_format_number(w)} × {_format_number(h)}")
        if margin_percent is not None:
            self.append_status(f"Canvas margin set to {_format_number(percent)}%")
        return canvas

    def set_rectangle(self, width: Any, height: Any) -> Rectangle:
        if width is None or height is None:
            raise InvalidGeometry(f"rectangle size must be numeric, got {width!r} x {height!r}")
        self.set_geometry(width=width, height=height)
        return self.rectangle

    def set_margin_percent(self, percent: Any) -> float:
        if percent is None:
            raise InvalidGeometry("margin percent must be numeric, got None")
        self.set_geometry(margin_percent=percent)
        return self.margin_percent

    def canvas(self) -> Canvas:
        with self._lock:
            return compute_canvas(self.rectangle, margin_ratio_from_percent(self.margin_percent))

    def transform(self) -> ViewTransform:
        return compute_view_transform(self.canvas())

    # ------------------------------------------------------------------
    # Dot style
    # ------------------------------------------------------------------
    def _checked_size(self, size: Any) -> float:
        value = _to_float("dot size", size, InvalidStyle)
        if not math.isfinite(value) or value <= 0:
            raise InvalidStyle(f"dot size must be a positive number, got {size!r}")
        return self.settings.clamp_dot_size(value)

    @staticmethod
    def _checked_color(color: Any) -> str:
        text = color.strip() if isinstance(color, str) else ""
        if not _HEX_COLOR.match(text):
            raise InvalidStyle(f"dot colour must look like #rrggbb, got {color!r}")
        return text.lower()

    def set_style(self, size: Any = None, color: Any = None) -> DotStyle:
        """Update dot size and/or colour; a bad value rejects the whole update."""
        with self._lock:
            new_size = self.dot_style.size if size is None else self._checked_size(size)
            new_color = self.dot_style.color if color is None else self._checked_color(color)
            self.dot_style = style = DotStyle(size=new_size, color=new_color)
        if size is not None:
            self.append_status(f"Dot size set to {_format_number(new_size)}px")
        if color is not None:
            self.append_status(f"Dot colour set to {new_color}")
        return style

    def set_dot_size(self, size: Any) -> float:
        if size is None:
            raise InvalidStyle("dot size must be numeric, got None")
        return self.set_style(size=size).size

    def set_dot_color(self, color: Any) -> str:
        if color is None:
            raise InvalidStyle("dot colour must look like #rrggbb, got None")
        return self.set_style(color=color).color

    # ------------------------------------------------------------------
    # Defects
    # ------------------------------------------------------------------
    def set_pending(self, x: Any = None, y: Any = None) -> None:
        if x is not None:
            self.pending_x = str(x)
        if y is not None:
            self.pending_y = str(y)

    def add_pending(self) -> Optional[Defect]:
        return self.add_defect(self.pending_x, self.pending_y)

    def add_defect(self, x: Any, y: Any) -> Optional[Defect]:
        """Append a defect, or return ``None`` when a coordinate is not numeric."""
        try:
            with self._lock:
                defect = self.defects.add(x, y)
                position = len(self.defects)
        except InvalidCoordinate as exc:
            logger.warning("Rejected defect (%r, %r): %s", x, y, exc)
            self.append_status(f"Defect not added: {exc}")
            return None
        self.append_status(
            f"Added defect #{position} at X: {_format_number(defect.x)}, Y: {_format_number(defect.y)}"
        )
        return defect

    def remove_defect(self, defect_id: str) -> bool:
        with self._lock:
            removed = self.defects.remove(defect_id)
        if removed:
            self.append_status(f"Removed defect {defect_id}")
        return removed

    def reset_defects(self) -> None:
        with self._lock:
            count = len(self.defects)
            self.defects.reset()
        self.append_status(f"Cleared {count} defect(s)")

    def defect_rows(self) -> List[Dict[str, Any]]:
        rows = []
        for index, defect in enumerate(self.defects.snapshot(), start=1):
            rows.append(
                {
                    "index": index,
                    "id": defect.id,
                    "x": defect.x,
                    "y": defect.y,
                    "label": f"#{index}: X: {_format_number(defect.x)}, Y: {_format_number(defect.y)}",
                }
            )
        return rows

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def scene(self) -> Scene:
        canvas = self.canvas()
        transform = compute_view_transform(canvas)
        with self._lock:
            defects = self.defects.snapshot()
            rectangle = self.rectangle
            style = self.dot_style
        return build_scene(canvas, rectangle, transform, defects, style)

    def svg(self, *, css_class: str = "") -> str:
        return render_svg(self.scene(), css_class=css_class)

    def summary(self) -> Dict[str, Any]:
        canvas = self.canvas()
        with self._lock:
            return {
                "rectangle": {"width": self.rectangle.width, "height": self.rectangle.height},
                "margin_percent": self.margin_percent,
                "canvas": {
                    "width": canvas.width,
                    "height": canvas.height,
                    "rounded": [round(canvas.width), round(canvas.height)],
                },
                "dot": {"size": self.dot_style.size, "color": self.dot_style.color},
                "defect_count": len(self.defects),
            }

    # ------------------------------------------------------------------
    # Status log
    # ------------------------------------------------------------------
    def append_status(self, message: str) -> None:
        logger.info(message)
        timestamp = time.strftime("%H:%M:%S")
        with self._lock:
            self._status.append(f"[{timestamp}] {message}")
            del self._status[: -self.settings.status_history]

    def status_messages(self) -> List[str]:
        with self._lock:
            return list(self._status)


__all__ = ["EditorController"]
