"""Ordered defect collection with session-unique identities."""
from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .errors import InvalidCoordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Defect:
    """Single point of interest in world coordinates (origin at centre, Y up)."""

    id: str
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y}


def parse_coordinate(value: Any, *, name: str = "coordinate") -> float:
    """Parse numeric input or numeric text into a finite float.

    Empty text, booleans and anything non-numeric raise
    :class:`InvalidCoordinate`; nothing is silently coerced to zero.
    """

    if isinstance(value, bool):
        raise InvalidCoordinate(f"{name} must be a number, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidCoordinate(f"{name} is empty")
        try:
            number = float(text)
        except ValueError as exc:
            raise InvalidCoordinate(f"{name} is not a number: {value!r}") from exc
    elif isinstance(value, Real):
        number = float(value)
    else:
        raise InvalidCoordinate(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(number):
        raise InvalidCoordinate(f"{name} must be finite, got {value!r}")
    return number


class DefectCollection:
    """Owns the defect list and hands out ids that are never reused.

    The id counter belongs to the collection and survives :meth:`remove` and
    :meth:`reset`, so a UI keyed by defect id never sees two logical defects
    share an id during a session.
    """

    def __init__(self, prefix: str = "d") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)
        self._items: List[Defect] = []

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def add(self, x: Any, y: Any) -> Defect:
        px = parse_coordinate(x, name="x")
        py = parse_coordinate(y, name="y")
        defect = Defect(id=f"{self._prefix}{next(self._counter)}", x=px, y=py)
        self._items.append(defect)
        logger.debug("Added defect %s at (%g, %g)", defect.id, px, py)
        return defect

    def remove(self, defect_id: str) -> bool:
        for index, defect in enumerate(self._items):
            if defect.id == defect_id:
                del self._items[index]
                logger.debug("Removed defect %s", defect_id)
                return True
        return False

    def reset(self) -> None:
        self._items = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def snapshot(self) -> Tuple[Defect, ...]:
        return tuple(self._items)

    def get(self, defect_id: str) -> Optional[Defect]:
        for defect in self._items:
            if defect.id == defect_id:
                return defect
        return None

    def __iter__(self) -> Iterator[Defect]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, defect_id: object) -> bool:
        return any(d.id == defect_id for d in self._items)


__all__ = ["Defect", "DefectCollection", "parse_coordinate"]
