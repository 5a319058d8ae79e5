"""
grafen/components/surface.py

Surface components: residues placed on the points of a 2D lattice.

A Sheet is a flat lattice in the xy plane.  A SurfaceCylinder is a lattice
rolled up into the mantle of a cylinder.  In both cases the requested
dimensions are snapped to the closest tileable lattice size when the
component is built, so that the surface is periodic.

Usage
-----
    from grafen.components.surface import HexagonalLattice, Sheet

    sheet = Sheet(lattice=HexagonalLattice(a=0.142), length=5.0, width=5.0,
                  residue=GRAPHENE_RESIDUE).build()
"""

from __future__ import annotations

import math
from typing import Annotated, ClassVar, Literal, Union

import numpy as np
from pydantic import BaseModel, Field

from grafen.components.base import ALIGNMENT, ComponentBase, align
from grafen.structure.coord import Coord
from grafen.structure.lattice import CrystalBasis, Lattice, LatticeBuilder


# ---------------------------------------------------------------------------
# Lattice definitions stored with a surface
# ---------------------------------------------------------------------------

class HexagonalLattice(BaseModel):
    """Honeycomb lattice with spacing a (nm)."""

    type: Literal["hexagonal"] = "hexagonal"
    a: float

    def basis(self) -> CrystalBasis:
        return CrystalBasis.hexagonal(self.a)

    def describe(self) -> str:
        return f"Hexagonal lattice (a = {self.a:.3f})"


class TriclinicLattice(BaseModel):
    """Lattice with vectors of length (a, b) separated by gamma radians."""

    type: Literal["triclinic"] = "triclinic"
    a: float
    b: float
    gamma: float

    def basis(self) -> CrystalBasis:
        return CrystalBasis.triclinic(self.a, self.b, self.gamma)

    def describe(self) -> str:
        return (
            f"Triclinic lattice (a = {self.a:.3f}, b = {self.b:.3f}, "
            f"gamma = {math.degrees(self.gamma):.1f} deg)"
        )


LatticeDefinition = Annotated[
    Union[HexagonalLattice, TriclinicLattice],
    Field(discriminator="type"),
]


def _build_lattice(definition: HexagonalLattice | TriclinicLattice,
                   size_x: float, size_y: float) -> Lattice:
    return LatticeBuilder(definition.basis()).from_size(size_x, size_y).finalize()


# ---------------------------------------------------------------------------
# Sheet
# ---------------------------------------------------------------------------

class Sheet(ComponentBase):
    """
    A flat lattice of residues in the xy plane.

    Fields
    ------
    lattice : HexagonalLattice | TriclinicLattice
        Lattice the residues are placed on.
    std_z : float | None
        If set, every residue is displaced along z by a normal deviate with
        this standard deviation (nm).
    length, width : float
        Size along x and y (nm).  Snapped to the lattice by `build`.
    """

    kind: Literal["surface-sheet"] = "surface-sheet"
    label: ClassVar[str] = "Sheet surface"

    lattice: LatticeDefinition
    std_z: float | None = None
    length: float = 0.0
    width: float = 0.0

    def box_size(self) -> Coord:
        return Coord(self.length, self.width, 0.0)

    def build(self, rng: np.random.Generator | None = None) -> Sheet:
        lattice = _build_lattice(self.lattice, self.length, self.width)
        coords = list(lattice.coords)

        if self.std_z is not None and self.std_z > 0.0:
            if rng is None:
                rng = np.random.default_rng()
            noise = rng.normal(0.0, self.std_z, len(coords))
            coords = [coord + Coord(0.0, 0.0, float(dz)) for coord, dz in zip(coords, noise)]

        return self.model_copy(
            update={
                "coords": coords,
                "length": lattice.box_size.x,
                "width": lattice.box_size.y,
            },
            deep=True,
        )

    def _describe_fields(self) -> list[str]:
        return [
            self.lattice.describe(),
            f"Length: {self.length:.3f}, width: {self.width:.3f}",
            f"Std. z: {self.std_z}",
        ]


# ---------------------------------------------------------------------------
# Cylinder surface
# ---------------------------------------------------------------------------

class SurfaceCylinder(ComponentBase):
    """
    A lattice rolled into the mantle of a cylinder.

    The lattice is built with a length equal to the circumference and a width
    equal to the height, then wrapped around the cylinder axis.  The radius
    and height are snapped so that the lattice closes on itself.
    """

    kind: Literal["surface-cylinder"] = "surface-cylinder"
    label: ClassVar[str] = "Cylinder surface"

    lattice: LatticeDefinition
    alignment: Literal["x", "y", "z"] = ALIGNMENT.Z
    radius: float = 0.0
    height: float = 0.0

    def box_size(self) -> Coord:
        diameter = 2.0 * self.radius
        return align(Coord(diameter, diameter, self.height), self.alignment)

    def build(self, rng: np.random.Generator | None = None) -> SurfaceCylinder:
        circumference = 2.0 * math.pi * self.radius
        lattice = _build_lattice(self.lattice, circumference, self.height)

        radius = lattice.box_size.x / (2.0 * math.pi)
        coords = []
        for point in lattice.coords:
            angle = point.x / radius
            axis = Coord(radius, radius, point.y)
            local = axis + Coord(math.cos(angle), math.sin(angle), 0.0).scale(radius)
            coords.append(align(local, self.alignment))

        return self.model_copy(
            update={
                "coords": coords,
                "radius": radius,
                "height": lattice.box_size.y,
            },
            deep=True,
        )

    def _describe_fields(self) -> list[str]:
        return [
            self.lattice.describe(),
            f"Alignment: {self.alignment}",
            f"Radius: {self.radius:.3f}, height: {self.height:.3f}",
        ]
