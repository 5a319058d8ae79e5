"""
grafen/components/entry.py

ComponentEntry: one interface over every component kind.

The catalog, the definition editor and the writers all handle components
without knowing their concrete kind.  ComponentEntry is a closed tagged union
of the kinds below, discriminated by their `kind` field, which exposes the
shared capabilities:

    coordinates   get_coords / set_coords
    residue       get_residue
    geometry      box_size, with_pbc
    atoms         iter_atoms, num_atoms
    movement      translate (returns a new entry), translate_in_place
    construction  from_component, build
    descriptions  describe, describe_short

Operations derived from these, such as `with_pbc`, are written once here
against the shared interface.

Serialised form (one entry of `component_definitions`)::

    {"kind": "surface-sheet", "name": "graphene", "residue": {...},
     "origin": {"x": 0.0, "y": 0.0, "z": 0.0}, "coords": [...],
     "lattice": {"type": "hexagonal", "a": 0.142}, "length": 5.0, ...}
"""

from __future__ import annotations

from typing import Annotated, Iterable, Iterator, Sequence, Union

import numpy as np
from pydantic import Field, RootModel

from grafen.components.residue import Residue
from grafen.components.surface import Sheet, SurfaceCylinder
from grafen.components.volume import Cuboid, VolumeCylinder
from grafen.structure.atoms import Atom
from grafen.structure.coord import Coord

Component = Annotated[
    Union[Cuboid, VolumeCylinder, Sheet, SurfaceCylinder],
    Field(discriminator="kind"),
]

#: All kinds, by their serialised tag
COMPONENT_KINDS = {
    "volume-cuboid": Cuboid,
    "volume-cylinder": VolumeCylinder,
    "surface-sheet": Sheet,
    "surface-cylinder": SurfaceCylinder,
}


class ComponentEntry(RootModel[Component]):
    """A component of any kind, behind the shared component interface."""

    root: Component

    @classmethod
    def from_component(
        cls, component: Cuboid | VolumeCylinder | Sheet | SurfaceCylinder,
    ) -> ComponentEntry:
        """Wrap a concrete component.  The entry takes ownership of it."""
        return cls(component)

    @property
    def kind(self) -> str:
        return self.root.kind

    @property
    def name(self) -> str | None:
        return self.root.name

    # ------------------------------------------------------------------
    # Shared accessors
    # ------------------------------------------------------------------

    def get_coords(self) -> list[Coord]:
        return self.root.coords

    def set_coords(self, coords: Iterable[Coord | Sequence[float]]) -> None:
        """Replace the coordinates.  Any sequence of three numbers is accepted."""
        self.root.coords = [Coord.from_array(coord) for coord in coords]

    def get_residue(self) -> Residue | None:
        return self.root.residue

    def box_size(self) -> Coord:
        return self.root.box_size()

    def iter_atoms(self) -> Iterator[Atom]:
        return self.root.iter_atoms()

    def num_atoms(self) -> int:
        return self.root.num_atoms()

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def translate(self, offset: Coord) -> ComponentEntry:
        return ComponentEntry(self.root.translate(offset))

    def translate_in_place(self, offset: Coord) -> None:
        self.root.translate_in_place(offset)

    def with_pbc(self) -> ComponentEntry:
        """
        Return a copy with every coordinate folded into the component box.

        Each axis is reduced modulo the box size along it.  Axes where the
        box size is zero are not folded.
        """
        box_size = self.box_size()
        entry = self.model_copy(deep=True)
        entry.set_coords([coord.with_pbc(box_size) for coord in self.get_coords()])
        return entry

    def build(self, rng: np.random.Generator | None = None) -> ComponentEntry:
        """Return a copy with its coordinates generated from its fields."""
        return ComponentEntry(self.root.build(rng))

    # ------------------------------------------------------------------
    # Descriptions
    # ------------------------------------------------------------------

    def describe(self) -> str:
        return self.root.describe()

    def describe_short(self) -> str:
        return self.root.describe_short()
