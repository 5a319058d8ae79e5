"""
grafen/structure/substrate.py

Generate graphene and silica substrates.

Each material fixes a crystal basis, a bond length, a half-thickness and a
residue template.  A lattice sized to the requested footprint is moved up by
the half-thickness and one residue is placed at every lattice point.  The
resulting system is as thick as twice the half-thickness, so that the atoms
above and below the mid-plane fit inside the box.

The footprint is rounded to the closest size which tiles perfectly under
periodic boundary conditions (see grafen.structure.lattice), so the returned
dimensions generally differ slightly from the requested ones.

Usage
-----
    from grafen.structure.substrate import generate_substrate, MATERIAL

    system = generate_substrate(5.0, 5.0, MATERIAL.GRAPHENE)
    print(system.dimensions, len(system))
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from grafen.components.residue import Residue, ResidueAtom
from grafen.errors import SizeError
from grafen.structure.atoms import Atom, instantiate_atoms
from grafen.structure.coord import Coord
from grafen.structure.lattice import CrystalBasis, LatticeBuilder

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Materials
# ---------------------------------------------------------------------------

class MATERIAL:
    """Namespace of the substrate materials that can be generated."""
    GRAPHENE = "graphene"
    SILICA   = "silica"

    @classmethod
    def all(cls) -> set[str]:
        return {cls.GRAPHENE, cls.SILICA}


@dataclass(frozen=True)
class MaterialSpec:
    """Fixed generation parameters of a substrate material."""

    basis: CrystalBasis
    bond_length: float      # nm
    half_thickness: float   # nm, z of the mid-plane
    residue: Residue


GRAPHENE_BOND_LENGTH = 0.142
SILICA_BOND_LENGTH = 0.450

# A single carbon atom at every lattice point, in the mid-plane.
GRAPHENE_RESIDUE = Residue(
    code="GRPH",
    atoms=(
        ResidueAtom(
            code="C",
            position=Coord(GRAPHENE_BOND_LENGTH / 2.0, GRAPHENE_BOND_LENGTH / 2.0, 0.0),
        ),
    ),
)

# A rigid SiO2 molecule at every lattice point, oxygens above and below.
_SILICA_BASE = Coord(SILICA_BOND_LENGTH / 4.0, SILICA_BOND_LENGTH / 6.0, 0.0)
_SILICA_DZ = 0.151

SILICA_RESIDUE = Residue(
    code="SIO",
    atoms=(
        ResidueAtom(code="O1", position=_SILICA_BASE + Coord(0.0, 0.0, _SILICA_DZ)),
        ResidueAtom(code="SI", position=_SILICA_BASE),
        ResidueAtom(code="O2", position=_SILICA_BASE + Coord(0.0, 0.0, -_SILICA_DZ)),
    ),
)

MATERIALS: dict[str, MaterialSpec] = {
    MATERIAL.GRAPHENE: MaterialSpec(
        basis=CrystalBasis.hexagonal(GRAPHENE_BOND_LENGTH),
        bond_length=GRAPHENE_BOND_LENGTH,
        half_thickness=GRAPHENE_BOND_LENGTH / 2.0,
        residue=GRAPHENE_RESIDUE,
    ),
    MATERIAL.SILICA: MaterialSpec(
        basis=CrystalBasis.triclinic(
            SILICA_BOND_LENGTH, SILICA_BOND_LENGTH, math.radians(60.0),
        ),
        bond_length=SILICA_BOND_LENGTH,
        half_thickness=0.30,
        residue=SILICA_RESIDUE,
    ),
}


def get_material(material: str) -> MaterialSpec:
    """Look up a material by name (case-insensitive)."""
    try:
        return MATERIALS[material.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown substrate material '{material}'.  "
            f"Available: {sorted(MATERIAL.all())}"
        ) from None


# ---------------------------------------------------------------------------
# Generated system
# ---------------------------------------------------------------------------

@dataclass
class System:
    """
    A generated substrate.

    Attributes
    ----------
    dimensions:
        Size of the periodic box (nm).
    atoms:
        All atoms, numbered in lattice order.
    """

    dimensions: Coord
    atoms: list[Atom] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.atoms)


def generate_substrate(size_x: float, size_y: float, material: str) -> System:
    """
    Create a substrate of a material with a footprint close to (size_x, size_y).

    Parameters
    ----------
    size_x, size_y:
        Requested footprint (nm).
    material:
        A MATERIAL constant.

    Returns
    -------
    System

    Raises
    ------
    SizeError:
        If either size is zero, negative or not finite.
    ValueError:
        If the material is unknown.
    """
    if not (_positive(size_x) and _positive(size_y)):
        raise SizeError(
            f"Substrate sizes must be positive and finite, got ({size_x}, {size_y})."
        )

    spec = get_material(material)

    lattice = (
        LatticeBuilder(spec.basis)
        .from_size(size_x, size_y)
        .finalize()
        .translate(Coord(0.0, 0.0, spec.half_thickness))
    )
    atoms = list(instantiate_atoms(lattice.coords, spec.residue))
    dimensions = lattice.box_size + Coord(0.0, 0.0, 2.0 * spec.half_thickness)

    log.info(
        f"Generated {material} substrate: {len(atoms)} atoms in box "
        f"({dimensions.x:.3f}, {dimensions.y:.3f}, {dimensions.z:.3f}) nm "
        f"(requested {size_x:.3f} x {size_y:.3f})"
    )

    return System(dimensions=dimensions, atoms=atoms)


def _positive(size: float) -> bool:
    return math.isfinite(size) and size > 0.0
