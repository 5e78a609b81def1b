"""Exceptions raised by the defect map core."""

from __future__ import annotations


class DefectMapError(ValueError):
    """Base class for rejected editor operations."""


class InvalidGeometry(DefectMapError):
    """Raised when rectangle, margin or canvas values cannot produce a valid view."""


class InvalidCoordinate(DefectMapError):
    """Raised when a defect coordinate is not a finite number."""


class InvalidStyle(DefectMapError):
    """Raised when a dot size or colour cannot be used for rendering."""


__all__ = ["DefectMapError", "InvalidGeometry", "InvalidCoordinate", "InvalidStyle"]
