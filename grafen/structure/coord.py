"""
grafen/structure/coord.py

Three-dimensional coordinates.

A Coord is an immutable value: every operation returns a new Coord.  Lengths
are in nanometres throughout grafen.

Usage
-----
    from grafen.structure.coord import Coord

    c = Coord(2.5, -0.5, 0.0) + Coord(0.1, 0.0, 0.0)
    c.with_pbc(Coord(2.0, 1.0, 0.0))   # Coord(0.6, 0.5, 0.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np


@dataclass(frozen=True)
class Coord:
    """A real-valued (x, y, z) triple."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Coord) -> Coord:
        return Coord(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Coord) -> Coord:
        return Coord(self.x - other.x, self.y - other.y, self.z - other.z)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def add(self, other: Coord) -> Coord:
        """Add a coordinate to this one."""
        return self + other

    def scale(self, factor: float) -> Coord:
        return Coord(self.x * factor, self.y * factor, self.z * factor)

    def with_pbc(self, box_size: Coord) -> Coord:
        """
        Fold the coordinate into a periodic box.

        Each axis is reduced modulo the box length along that axis into
        [0, box_length).  Axes with a box length of zero (or less) are left
        unchanged, e.g. the z axis of a flat lattice.
        """
        return Coord(
            _fold(self.x, box_size.x),
            _fold(self.y, box_size.y),
            _fold(self.z, box_size.z),
        )

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, values: Sequence[float] | np.ndarray) -> Coord:
        """Build a Coord from any sequence of three numbers."""
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)


ORIGO = Coord(0.0, 0.0, 0.0)


def _fold(value: float, length: float) -> float:
    if length <= 0.0:
        return value

    folded = value % length
    # Tiny negative values round up to exactly `length`
    if folded >= length:
        folded -= length
    return folded
