"""
grafen/components/volume.py

Volume components: residues scattered uniformly through a region.

The number of residues is the density (residues per nm³) times the volume,
rounded to the nearest integer.  Positions are drawn with a NumPy random
generator; pass a seeded generator for reproducible output.

Usage
-----
    import numpy as np
    from grafen.components.volume import Cuboid

    box = Cuboid(size=Coord(2.0, 2.0, 2.0), density=33.4, residue=water)
    box = box.build(np.random.default_rng(1))
"""

from __future__ import annotations

import math
from typing import ClassVar, Literal

import numpy as np

from grafen.components.base import ALIGNMENT, ComponentBase, align
from grafen.structure.coord import ORIGO, Coord


def _num_residues(density: float | None, volume: float) -> int:
    if density is None or density <= 0.0 or volume <= 0.0:
        return 0
    return int(round(density * volume))


class Cuboid(ComponentBase):
    """
    A rectangular box of residues.

    Fields
    ------
    size : Coord
        Box lengths along x, y and z (nm).
    density : float | None
        Residues per nm³.  Without a density `build` leaves coords as is.
    """

    kind: Literal["volume-cuboid"] = "volume-cuboid"
    label: ClassVar[str] = "Cuboid volume"

    size: Coord = ORIGO
    density: float | None = None

    def box_size(self) -> Coord:
        return self.size

    def volume(self) -> float:
        return self.size.x * self.size.y * self.size.z

    def build(self, rng: np.random.Generator | None = None) -> Cuboid:
        if self.density is None:
            return self.model_copy(deep=True)
        if rng is None:
            rng = np.random.default_rng()

        n = _num_residues(self.density, self.volume())
        points = rng.random((n, 3)) * self.size.to_array()
        coords = [Coord.from_array(point) for point in points]

        return self.model_copy(update={"coords": coords}, deep=True)

    def _describe_fields(self) -> list[str]:
        return [
            f"Size: ({self.size.x:.3f}, {self.size.y:.3f}, {self.size.z:.3f})",
            f"Density: {self.density}",
        ]


class VolumeCylinder(ComponentBase):
    """
    A filled cylinder of residues.

    The cylinder's box corner is at origin; its axis runs through the centre
    of the box along the alignment axis.
    """

    kind: Literal["volume-cylinder"] = "volume-cylinder"
    label: ClassVar[str] = "Cylinder volume"

    alignment: Literal["x", "y", "z"] = ALIGNMENT.Z
    radius: float = 0.0
    height: float = 0.0
    density: float | None = None

    def box_size(self) -> Coord:
        diameter = 2.0 * self.radius
        return align(Coord(diameter, diameter, self.height), self.alignment)

    def volume(self) -> float:
        return math.pi * self.radius ** 2 * self.height

    def build(self, rng: np.random.Generator | None = None) -> VolumeCylinder:
        if self.density is None:
            return self.model_copy(deep=True)
        if rng is None:
            rng = np.random.default_rng()

        n = _num_residues(self.density, self.volume())

        # sqrt of a uniform deviate gives a uniform density over the disc
        r = self.radius * np.sqrt(rng.random(n))
        theta = 2.0 * math.pi * rng.random(n)
        z = self.height * rng.random(n)

        xs = self.radius + r * np.cos(theta)
        ys = self.radius + r * np.sin(theta)
        coords = [
            align(Coord(float(x), float(y), float(h)), self.alignment)
            for x, y, h in zip(xs, ys, z)
        ]

        return self.model_copy(update={"coords": coords}, deep=True)

    def _describe_fields(self) -> list[str]:
        return [
            f"Alignment: {self.alignment}",
            f"Radius: {self.radius:.3f}, height: {self.height:.3f}",
            f"Density: {self.density}",
        ]
