"""Configuration models for the defect map editor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

XY = Tuple[float, float]


@dataclass
class DotStyle:
    """Marker appearance shared by every defect."""

    size: float = 6.0
    color: str = "#ef4444"


@dataclass
class EditorSettings:
    """Session defaults and input ranges exposed by the UI."""

    rect_width: float = 200.0
    rect_height: float = 120.0
    margin_percent: float = 20.0
    margin_range: Tuple[float, float] = (0.0, 100.0)
    dot_size_range: Tuple[float, float] = (2.0, 20.0)
    dot: DotStyle = field(default_factory=DotStyle)
    pending_x: str = "0"
    pending_y: str = "0"
    seed_defects: List[XY] = field(default_factory=lambda: [(-30.0, 20.0), (40.0, -10.0)])
    status_history: int = 250

    def clamp_dot_size(self, value: float) -> float:
        lo, hi = self.dot_size_range
        return max(lo, min(hi, value))
