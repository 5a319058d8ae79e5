"""
grafen/components/residue.py

Residues: named groups of atoms with fixed positions relative to a point.

A Residue is expanded once for every point of a lattice or component, and is
also stored as a standalone record in the catalog.  Residues are immutable.

Usage
-----
    from grafen.components.residue import Residue, ResidueAtom
    from grafen.structure.coord import Coord

    water = Residue(code="SOL", atoms=(
        ResidueAtom(code="OW", position=Coord(0.0, 0.0, 0.0)),
        ResidueAtom(code="HW1", position=Coord(0.0957, 0.0, 0.0)),
    ))
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from grafen.structure.coord import ORIGO, Coord


class ResidueAtom(BaseModel):
    """One atom of a residue: its name and its position relative to the residue."""

    model_config = ConfigDict(frozen=True)

    code: str
    position: Coord = ORIGO


class Residue(BaseModel):
    """
    A named group of atoms.

    Fields
    ------
    code : str
        Residue name written to output files (e.g. "GRPH").
    atoms : tuple[ResidueAtom, ...]
        The atoms in output order.  Stored as a JSON list.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    atoms: tuple[ResidueAtom, ...] = ()

    @property
    def num_atoms(self) -> int:
        return len(self.atoms)

    def describe_short(self) -> str:
        return f"{self.code} ({self.num_atoms} atoms)"

    def describe(self) -> str:
        lines = [f"Residue {self.describe_short()}"]
        for atom in self.atoms:
            p = atom.position
            lines.append(f"  {atom.code:<5s} ({p.x:.3f}, {p.y:.3f}, {p.z:.3f})")
        return "\n".join(lines)
