"""
grafen/components/base.py

Shared base for every component kind.

A component owns an optional name, an optional residue, an origin and an
ordered list of residue positions (`coords`) relative to that origin.  Each
kind adds its own geometric fields and defines its box size and how its
coordinates are built.

Components are plain pydantic models so that they serialise directly into the
catalog document.  Every concrete kind declares a literal `kind` field which
tags it in that document.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import ClassVar, Iterator

import numpy as np
from pydantic import BaseModel, Field

from grafen.components.residue import Residue
from grafen.structure.atoms import Atom, instantiate_atoms
from grafen.structure.coord import ORIGO, Coord


class ALIGNMENT:
    """Namespace of the axes a cylinder can be aligned along."""
    X = "x"
    Y = "y"
    Z = "z"

    @classmethod
    def all(cls) -> set[str]:
        return {cls.X, cls.Y, cls.Z}


def align(coord: Coord, alignment: str) -> Coord:
    """
    Rotate a coordinate from a z-aligned frame to the given alignment.

    The axes are permuted cyclically so that the z component ends up along
    the alignment axis.
    """
    if alignment == ALIGNMENT.X:
        return Coord(coord.z, coord.x, coord.y)
    if alignment == ALIGNMENT.Y:
        return Coord(coord.y, coord.z, coord.x)
    return coord


class ComponentBase(BaseModel):
    """
    Fields and behaviour common to all component kinds.

    Fields
    ------
    name : str | None
        Optional label shown in descriptions.
    residue : Residue | None
        Residue placed at every coordinate.  Without one the component has
        no atoms.
    origin : Coord
        Position of the component's box corner.
    coords : list[Coord]
        Residue positions relative to origin.
    """

    name: str | None = None
    residue: Residue | None = None
    origin: Coord = ORIGO
    coords: list[Coord] = Field(default_factory=list)

    #: Human-readable label of the kind, used in descriptions
    label: ClassVar[str] = "Component"

    @abstractmethod
    def box_size(self) -> Coord:
        """Size of the box that holds the component."""

    @abstractmethod
    def build(self, rng: np.random.Generator | None = None) -> ComponentBase:
        """Return a copy with its coordinates generated from its fields."""

    # ------------------------------------------------------------------
    # Atoms
    # ------------------------------------------------------------------

    def num_atoms(self) -> int:
        if self.residue is None:
            return 0
        return len(self.coords) * self.residue.num_atoms

    def iter_atoms(self) -> Iterator[Atom]:
        """Lazily yield every atom, with absolute positions."""
        if self.residue is None:
            return iter(())
        return instantiate_atoms(self.coords, self.residue, self.origin)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(self, offset: Coord) -> ComponentBase:
        """Return a copy moved by offset."""
        return self.model_copy(update={"origin": self.origin + offset}, deep=True)

    def translate_in_place(self, offset: Coord) -> None:
        self.origin = self.origin + offset

    # ------------------------------------------------------------------
    # Descriptions
    # ------------------------------------------------------------------

    def describe_short(self) -> str:
        name = self.name if self.name is not None else "(Unnamed)"
        return f"{name} ({self.label})"

    def describe(self) -> str:
        box = self.box_size()
        residue = self.residue.code if self.residue is not None else "None"
        lines = [
            self.describe_short(),
            f"  Residue: {residue}",
            f"  Origin: ({self.origin.x:.3f}, {self.origin.y:.3f}, {self.origin.z:.3f})",
            f"  Box size: ({box.x:.3f}, {box.y:.3f}, {box.z:.3f})",
        ]
        lines.extend(f"  {line}" for line in self._describe_fields())
        lines.append(f"  Residues: {len(self.coords)}, atoms: {self.num_atoms()}")
        return "\n".join(lines)

    def _describe_fields(self) -> list[str]:
        return []
