"""Planar geometry helpers shared by the pattern piece builders."""

from __future__ import annotations

from typing import Iterable, NamedTuple, Sequence

import numpy as np

__all__ = [
    "BoundingBox",
    "Point",
    "bounding_box",
    "fp",
    "point",
    "polyline_length",
]


class Point(NamedTuple):
    """2D coordinate in millimetres."""

    x: float
    y: float

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(fp(self.x + dx), fp(self.y + dy))

    def to_mapping(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


def fp(value: float) -> float:
    """Round a coordinate to the fixed 0.01 mm precision used across the IR."""

    return round(float(value), 2) + 0.0


def point(x: float, y: float) -> Point:
    return Point(fp(x), fp(y))


class BoundingBox(NamedTuple):
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def to_mapping(self) -> dict[str, float]:
        return {
            "minX": self.min_x,
            "minY": self.min_y,
            "maxX": self.max_x,
            "maxY": self.max_y,
        }


def polyline_length(points: Sequence[Point]) -> float:
    """Return the open polyline length through ``points``."""

    if len(points) < 2:
        return 0.0
    coords = np.asarray(points, dtype=float)
    segments = np.diff(coords, axis=0)
    return float(np.hypot(segments[:, 0], segments[:, 1]).sum())


def bounding_box(points: Iterable[Point]) -> BoundingBox:
    coords = np.asarray(list(points), dtype=float)
    if coords.size == 0:
        raise ValueError("Cannot compute a bounding box without points.")
    mins = coords.min(axis=0)
    maxs = coords.max(axis=0)
    return BoundingBox(fp(mins[0]), fp(mins[1]), fp(maxs[0]), fp(maxs[1]))
