"""
grafen/structure/export.py

Convert generated atoms to ASE and write GROMACS structure files.

grafen works in nanometres while ASE works in Ångström, so positions and the
cell are converted on the way out.  Residue names, residue numbers and atom
names are carried as the per-atom arrays that ASE's GROMACS writer reads
(`residuenames`, `residuenumbers`, `atomtypes`).  Residue numbers are written
1-based, as GROMACS expects.

Usage
-----
    from grafen.structure.export import write_gro
    from grafen.structure.substrate import generate_substrate

    system = generate_substrate(5.0, 5.0, "graphene")
    write_gro("graphene.gro", system.atoms, system.dimensions)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import numpy as np
from ase import Atoms, units
from ase.data import chemical_symbols
from ase.io import write

from grafen.structure.atoms import Atom
from grafen.structure.coord import Coord

log = logging.getLogger(__name__)


def atom_symbol(atom_name: str) -> str:
    """
    Guess the chemical symbol of an atom from its name.

    Digits are dropped and the remaining letters are matched against the
    periodic table, first as a two-letter symbol ("SI" -> "Si"), then by
    the first letter alone ("OW" -> "O").  Unknown names map to "X".
    """
    letters = "".join(ch for ch in atom_name if ch.isalpha())
    if not letters:
        return "X"

    candidate = letters[:2].capitalize()
    if len(candidate) == 2 and candidate in chemical_symbols:
        return candidate

    candidate = letters[0].upper()
    if candidate in chemical_symbols:
        return candidate
    return "X"


def to_atoms(atoms: Iterable[Atom], dimensions: Coord) -> Atoms:
    """
    Build an ASE Atoms object from generated atoms.

    Parameters
    ----------
    atoms:
        Atoms in output order.
    dimensions:
        Box size in nm, used as an orthogonal cell.  Periodic along x and y.

    Returns
    -------
    Atoms
        Positions and cell in Å, with residue bookkeeping arrays set.
    """
    atoms = list(atoms)

    positions = np.array([atom.position.to_array() for atom in atoms], dtype=float)
    positions = positions.reshape(-1, 3) * units.nm

    structure = Atoms(
        symbols=[atom_symbol(atom.atom_name) for atom in atoms],
        positions=positions,
        cell=dimensions.to_array() * units.nm,
        pbc=[True, True, False],
    )
    structure.set_array(
        "residuenames",
        np.array([atom.residue_name for atom in atoms], dtype=object),
    )
    structure.set_array(
        "residuenumbers",
        np.array([atom.residue_number + 1 for atom in atoms], dtype=int),
    )
    structure.set_array(
        "atomtypes",
        np.array([atom.atom_name for atom in atoms], dtype=object),
    )
    return structure


def write_gro(path: str | Path, atoms: Iterable[Atom], dimensions: Coord) -> Path:
    """Write atoms to a GROMACS .gro file and return the path written."""
    path = Path(path)
    structure = to_atoms(atoms, dimensions)
    write(str(path), structure, format="gromacs")
    log.info(f"Wrote {len(structure)} atoms to {path}")
    return path
