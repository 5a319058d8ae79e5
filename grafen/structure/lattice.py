"""
grafen/structure/lattice.py

Construct tileable 2D lattices from a crystal basis.

A lattice is built in two steps.  A LatticeBuilder collects the number of
bins along x and y, either explicitly or derived from a requested size, and
`finalize()` turns it into an immutable Lattice: the ordered grid points and
the size of the box that holds them.

The box is always an exact multiple of the basis spacing, so that the lattice
replicates seamlessly under periodic boundary conditions.  Requested sizes are
rounded to the closest tileable size, never honoured exactly.

Hexagonal lattices get a honeycomb topology: every third grid point is the
centre of a hexagon and is removed, shifted by one column for every row.
This requires the column count to be a multiple of 3 and the row count a
multiple of 2, so both are raised to the next such multiple when finalizing.

Usage
-----
    from grafen.structure.lattice import Lattice

    lattice = Lattice.hexagonal(0.142).from_size(5.0, 5.0).finalize()
    print(lattice.box_size, len(lattice))

    lattice = Lattice.triclinic(1.0, 1.0, math.radians(60)).from_bins(3, 2).finalize()
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from grafen.structure.coord import Coord

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lattice families
# ---------------------------------------------------------------------------

class FAMILY:
    """Namespace of crystal basis families."""
    HEXAGONAL = "hexagonal"
    GENERIC   = "generic"

    @classmethod
    def all(cls) -> set[str]:
        return {cls.HEXAGONAL, cls.GENERIC}


# ---------------------------------------------------------------------------
# Crystal basis
# ---------------------------------------------------------------------------

class Spacing(NamedTuple):
    """Grid spacing derived from a crystal basis."""

    dx: float           # distance between columns along x
    dy: float           # distance between rows along y
    dx_per_row: float   # shift along x for every row


@dataclass(frozen=True)
class CrystalBasis:
    """
    Two-vector translation basis of a 2D crystal.

    Attributes
    ----------
    a, b:
        Lengths of the two basis vectors (nm).  Assumed positive.
    gamma:
        Angle between the vectors in radians, 0 < gamma < pi.
    family:
        FAMILY constant selecting the generation rules.
    """

    a: float
    b: float
    gamma: float
    family: str = FAMILY.GENERIC

    @classmethod
    def hexagonal(cls, a: float) -> CrystalBasis:
        """Hexagonal basis: common vector length a and an angle of 120 degrees."""
        return cls(a=a, b=a, gamma=2.0 * math.pi / 3.0, family=FAMILY.HEXAGONAL)

    @classmethod
    def triclinic(cls, a: float, b: float, gamma: float) -> CrystalBasis:
        """General basis: vectors of length (a, b) separated by gamma radians."""
        return cls(a=a, b=b, gamma=gamma, family=FAMILY.GENERIC)

    def spacing(self) -> Spacing:
        return Spacing(
            dx=self.a,
            dy=self.b * math.sin(self.gamma),
            dx_per_row=self.b * math.cos(self.gamma),
        )


# ---------------------------------------------------------------------------
# Finalized lattice
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Lattice:
    """
    Grid points of a finalized lattice and the box that contains them.

    Points are ordered row by row (rows outer, columns inner).  Atom numbering
    of generated substrates follows this order.
    """

    box_size: Coord
    coords: tuple[Coord, ...]

    @staticmethod
    def hexagonal(a: float) -> LatticeBuilder:
        """Start building a hexagonal (honeycomb) lattice with spacing a."""
        return LatticeBuilder(CrystalBasis.hexagonal(a))

    @staticmethod
    def triclinic(a: float, b: float, gamma: float) -> LatticeBuilder:
        """Start building a triclinic lattice with vectors (a, b) at angle gamma."""
        return LatticeBuilder(CrystalBasis.triclinic(a, b, gamma))

    def __len__(self) -> int:
        return len(self.coords)

    def translate(self, offset: Coord) -> Lattice:
        """Return a lattice with every point shifted.  The box size is kept."""
        return Lattice(
            box_size=self.box_size,
            coords=tuple(coord + offset for coord in self.coords),
        )

    def to_array(self) -> np.ndarray:
        """Grid points as an (N, 3) array."""
        if not self.coords:
            return np.zeros((0, 3))
        return np.array([coord.to_array() for coord in self.coords])


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class LatticeBuilder:
    """
    Mutable accumulator for the bin counts of a lattice.

    The setters return the builder so that calls can be chained.
    `finalize()` may raise nx and ny to satisfy the tiling constraint of the
    basis family; it never lowers them.
    """

    def __init__(self, basis: CrystalBasis) -> None:
        self.basis = basis
        self.nx = 0
        self.ny = 0

    def from_bins(self, nx: int, ny: int) -> LatticeBuilder:
        """Set the number of columns and rows explicitly."""
        if nx < 0 or ny < 0:
            raise ValueError(f"bin counts must be >= 0, got ({nx}, {ny}).")
        self.nx = int(nx)
        self.ny = int(ny)
        return self

    def from_size(self, size_x: float, size_y: float) -> LatticeBuilder:
        """
        Set the bin counts closest to a requested size.

        The counts are size / spacing rounded half away from zero.  Negative
        sizes give zero bins.
        """
        if not (math.isfinite(size_x) and math.isfinite(size_y)):
            raise ValueError(f"lattice size must be finite, got ({size_x}, {size_y}).")

        spacing = self.basis.spacing()
        nx = max(_round_half_away(size_x / spacing.dx), 0)
        ny = max(_round_half_away(size_y / spacing.dy), 0)
        return self.from_bins(nx, ny)

    def finalize(self) -> Lattice:
        """Generate the grid points and box size of the lattice."""
        if self.basis.family == FAMILY.HEXAGONAL:
            self._fit_hexagonal_periodicity()

        rows, cols = np.meshgrid(
            np.arange(self.ny), np.arange(self.nx), indexing="ij",
        )
        rows = rows.ravel()
        cols = cols.ravel()

        if self.basis.family == FAMILY.HEXAGONAL:
            keep = (cols + rows + 1) % 3 != 0
            rows = rows[keep]
            cols = cols[keep]

        spacing = self.basis.spacing()
        xs = cols * spacing.dx + rows * spacing.dx_per_row
        ys = rows * spacing.dy

        coords = tuple(Coord(float(x), float(y), 0.0) for x, y in zip(xs, ys))
        box_size = Coord(self.nx * spacing.dx, self.ny * spacing.dy, 0.0)

        return Lattice(box_size=box_size, coords=coords)

    def _fit_hexagonal_periodicity(self) -> None:
        nx = _ceil_to_multiple(self.nx, 3)
        ny = _ceil_to_multiple(self.ny, 2)

        if (nx, ny) != (self.nx, self.ny):
            log.debug(
                f"Hexagonal lattice bins raised from ({self.nx}, {self.ny}) "
                f"to ({nx}, {ny}) for periodicity"
            )

        self.nx = nx
        self.ny = ny


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _ceil_to_multiple(value: int, multiple: int) -> int:
    return -(-value // multiple) * multiple
