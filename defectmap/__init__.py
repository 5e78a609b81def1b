"""Top-level package for the defect map editor.

This package exposes the geometry calculator, the defect collection and the
scene assembly used by the browser UI and the HTTP API.
"""

from .config import DotStyle, EditorSettings
from .controller import EditorController
from .defects import Defect, DefectCollection, parse_coordinate
from .errors import DefectMapError, InvalidCoordinate, InvalidGeometry, InvalidStyle
from .geometry import Canvas, Rectangle, ViewTransform, compute_canvas, compute_view_transform
from .scene import Scene, build_scene, render_svg

__all__ = [
    "DotStyle",
    "EditorSettings",
    "EditorController",
    "Defect",
    "DefectCollection",
    "parse_coordinate",
    "DefectMapError",
    "InvalidCoordinate",
    "InvalidGeometry",
    "InvalidStyle",
    "Canvas",
    "Rectangle",
    "ViewTransform",
    "compute_canvas",
    "compute_view_transform",
    "Scene",
    "build_scene",
    "render_svg",
]
