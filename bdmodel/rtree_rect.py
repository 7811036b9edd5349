"""Axis-aligned bounding rectangles used by the R-tree."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

__all__ = ["Rect", "unit_sphere_volume"]

# Volumes of the unit spheres for dimensions 0 to 20.
_UNIT_SPHERE_VOLUMES: tuple[float, ...] = (
    0.000000, 2.000000, 3.141593,
    4.188790, 4.934802, 5.263789,
    5.167713, 4.724766, 4.058712,
    3.298509, 2.550164, 1.884104,
    1.335263, 0.910629, 0.599265,
    0.381443, 0.235331, 0.140981,
    0.082146, 0.046622, 0.025807,
)


def unit_sphere_volume(dims: int) -> float:
    """Volume of the unit sphere in ``dims`` dimensions (0 to 20)."""
    if not 0 <= dims < len(_UNIT_SPHERE_VOLUMES):
        raise ValueError(
            f"dimensions must be between 0 and {len(_UNIT_SPHERE_VOLUMES) - 1}, got {dims}"
        )
    return _UNIT_SPHERE_VOLUMES[dims]


def _round_half_away(value: float) -> int:
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


@dataclass(frozen=True)
class Rect:
    """An n-dimensional box given by its lower and upper corners."""

    low: tuple[float, ...]
    high: tuple[float, ...]

    def __post_init__(self) -> None:
        low = tuple(self.low)
        high = tuple(self.high)
        if len(low) != len(high):
            raise ValueError("low and high corners must have the same dimensions")
        if any(lo > hi for lo, hi in zip(low, high)):
            raise ValueError("every low coordinate must not exceed its high coordinate")
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "high", high)

    @property
    def dims(self) -> int:
        """Number of dimensions."""
        return len(self.low)

    def _check_dims(self, other: "Rect") -> None:
        if other.dims != self.dims:
            raise ValueError(f"dimension mismatch: {self.dims} and {other.dims}")

    def overlaps(self, other: "Rect") -> bool:
        """Whether the two boxes intersect; touching edges count."""
        self._check_dims(other)
        return all(
            not (a_lo > b_hi or b_lo > a_hi)
            for a_lo, a_hi, b_lo, b_hi in zip(self.low, self.high, other.low, other.high)
        )

    def combine(self, other: "Rect") -> "Rect":
        """The smallest box containing both boxes."""
        self._check_dims(other)
        return Rect(
            tuple(min(a, b) for a, b in zip(self.low, other.low)),
            tuple(max(a, b) for a, b in zip(self.high, other.high)),
        )

    def volume(self) -> float:
        """Product of the box's extents."""
        return math.prod(hi - lo for lo, hi in zip(self.low, self.high))

    def spherical_volume(self) -> float:
        """Volume of the sphere that bounds the box."""
        sum_of_squares = sum(((hi - lo) * 0.5) ** 2 for lo, hi in zip(self.low, self.high))
        unit = unit_sphere_volume(self.dims)
        if self.dims == 2:
            return sum_of_squares * unit
        radius = math.sqrt(sum_of_squares)
        if self.dims == 3:
            return radius * radius * radius * unit
        return radius**self.dims * unit

    def min_dist(self, point: Sequence[float]) -> int:
        """Euclidean distance from ``point`` to the box, rounded to an integer.

        Coordinates are compared on whole units, as the nearest-neighbour
        search works on an integer metric.
        """
        if len(point) != self.dims:
            raise ValueError(f"point has {len(point)} dimensions, box has {self.dims}")
        total = 0.0
        for q, lo, hi in zip(point, self.low, self.high):
            if q < lo:
                nearest = math.trunc(lo)
            elif q > hi:
                nearest = math.trunc(hi)
            else:
                nearest = math.trunc(q)
            total += (q - nearest) ** 2
        return _round_half_away(math.sqrt(total))