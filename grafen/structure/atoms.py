"""
grafen/structure/atoms.py

Expand points against a residue template into numbered atoms.

For every point (in order) and every atom of the residue (in order) one Atom
is produced.  Numbering is 0-based:

    residue_number = index of the point
    atom_number    = residue_number * atoms_per_residue + index within residue

so the atom list of a lattice is fully determined by its point order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from grafen.components.residue import Residue
from grafen.structure.coord import ORIGO, Coord


@dataclass(frozen=True)
class Atom:
    """A single atom of a generated system, with its output bookkeeping."""

    residue_name: str
    residue_number: int
    atom_name: str
    atom_number: int
    position: Coord


def instantiate_atoms(
    points: Iterable[Coord],
    residue: Residue,
    origin: Coord = ORIGO,
) -> Iterator[Atom]:
    """
    Lazily yield the atoms of a residue placed at each point.

    Parameters
    ----------
    points:
        Residue positions, relative to origin.
    residue:
        The template whose atoms are placed at every point.
    origin:
        Added to every position.  Components use this for their own origin.
    """
    per_residue = residue.num_atoms

    for residue_number, point in enumerate(points):
        base = origin + point
        for offset_index, residue_atom in enumerate(residue.atoms):
            yield Atom(
                residue_name=residue.code,
                residue_number=residue_number,
                atom_name=residue_atom.code,
                atom_number=residue_number * per_residue + offset_index,
                position=base + residue_atom.position,
            )
