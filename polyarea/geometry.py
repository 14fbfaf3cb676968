"""Polygon geometry on a regular n-gon of marked points.

The unit-circle coordinates are pre-computed once per board size so the
search only performs table lookups and a shoelace sum per state.

Usage:
    from polyarea.geometry import CircleTable, polygon_area

    circle = CircleTable.for_points(7)
    area = polygon_area((1, 2, 4), circle)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Sequence

import numpy as np

from .errors import InvalidParametersError

# Coordinates are (k, 2) float64 arrays: column 0 is x, column 1 is y.
Coordinates = np.ndarray


class CircleTable:
    """Read-only unit-circle coordinates for ``n`` equally spaced points.

    Point ``i`` sits at angle ``2*pi*i/n``.
    """

    __slots__ = ("n", "points")

    def __init__(self, n: int):
        if n < 1:
            raise InvalidParametersError(
                "Circle needs at least one point", n=n
            )
        self.n = n
        angles = 2.0 * np.pi * (np.arange(n, dtype=np.float64) / n)
        points = np.column_stack((np.cos(angles), np.sin(angles)))
        points.setflags(write=False)
        self.points: np.ndarray = points

    @classmethod
    @lru_cache(maxsize=32)
    def for_points(cls, n: int) -> CircleTable:
        """Return a shared table for ``n`` points (tables are immutable)."""
        return cls(n)

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return f"CircleTable(n={self.n})"


def precompute_unit_circle(n: int) -> CircleTable:
    return CircleTable.for_points(n)


def vertex_offsets(gaps: Sequence[int], n: int) -> np.ndarray:
    """Circle index of every counter: counter i sits at sum(gaps[:i]) mod n."""
    offsets = np.zeros(len(gaps), dtype=np.int64)
    if len(gaps) > 1:
        np.cumsum(gaps[:-1], out=offsets[1:])
    return offsets % n


def coordinates_of(gaps: Sequence[int], circle: CircleTable) -> Coordinates:
    """Polygon vertices, in counter order, for a gap sequence."""
    return circle.points[vertex_offsets(gaps, circle.n)]


def area_of(coordinates: Coordinates) -> float:
    """Absolute shoelace area; either winding order is accepted."""
    coords = np.asarray(coordinates, dtype=np.float64)
    if len(coords) < 3:
        return 0.0
    x = coords[:, 0]
    y = coords[:, 1]
    twice_area = np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))
    return float(abs(twice_area) / 2.0)


def polygon_area(gaps: Sequence[int], circle: CircleTable) -> float:
    return area_of(coordinates_of(gaps, circle))
