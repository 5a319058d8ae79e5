"""
grafen/database/definitions.py

Create component definitions from catalog entries, and edit definition lists.

A definition is made by duplicating a catalog entry, merging optional
overrides into the copy and building its coordinates.  The catalog itself is
never modified by this.  Overrides map onto the component kinds as follows:

    position   origin of every kind
    size       Sheet (length, width); Cuboid (x, y, z)
    radius     VolumeCylinder, SurfaceCylinder
    height     VolumeCylinder, SurfaceCylinder

Usage
-----
    from grafen.database.definitions import create_definition, swap_items

    definitions = []
    definitions.append(create_definition(db, 0, position=(0.0, 0.0, 1.0), size=(5.0, 5.0)))
    definitions.append(create_definition(db, 2, radius=1.0, height=4.0))
    swap_items(definitions, 0, 1)
"""

from __future__ import annotations

import logging
from typing import Sequence, TypeVar

import numpy as np

from grafen.components.entry import ComponentEntry
from grafen.components.surface import Sheet, SurfaceCylinder
from grafen.components.volume import Cuboid, VolumeCylinder
from grafen.database.db import DataBase
from grafen.errors import CatalogIndexError
from grafen.structure.coord import Coord

log = logging.getLogger(__name__)

T = TypeVar("T")


def select_component(database: DataBase, index: int) -> ComponentEntry:
    """
    Return a copy of the catalog component at index.

    Raises
    ------
    CatalogIndexError:
        If index is not a valid position in `database.component_defs`.
    """
    _check_index(database.component_defs, index)
    return database.component_defs[index].model_copy(deep=True)


def create_definition(
    database: DataBase,
    index: int,
    *,
    position: Sequence[float] | None = None,
    size: Sequence[float] | None = None,
    radius: float | None = None,
    height: float | None = None,
    rng: np.random.Generator | None = None,
) -> ComponentEntry:
    """
    Create a built component from a catalog entry and optional overrides.

    Parameters
    ----------
    database:
        The catalog to select from.
    index:
        Position of the entry in `database.component_defs`.
    position, size, radius, height:
        Overrides merged into the copy before it is built.
    rng:
        Random generator used by kinds with random placement.

    Raises
    ------
    CatalogIndexError:
        If index is out of range.
    ValueError:
        If an override does not apply to the selected kind, or has the
        wrong number of values.
    """
    entry = select_component(database, index)
    component = entry.root

    if position is not None:
        component.origin = _to_coord(position, "position")

    if size is not None:
        if isinstance(component, Sheet):
            length, width = _values(size, 2, "size")
            component.length = length
            component.width = width
        elif isinstance(component, Cuboid):
            component.size = _to_coord(size, "size")
        else:
            raise ValueError(f"A size cannot be set for '{entry.kind}' components.")

    if radius is not None or height is not None:
        if not isinstance(component, (VolumeCylinder, SurfaceCylinder)):
            raise ValueError(
                f"A radius or height cannot be set for '{entry.kind}' components."
            )
        if radius is not None:
            component.radius = float(radius)
        if height is not None:
            component.height = float(height)

    definition = entry.build(rng)
    log.debug(
        f"Created definition from catalog entry {index}: "
        f"{definition.describe_short()}, {definition.num_atoms()} atoms"
    )
    return definition


# ---------------------------------------------------------------------------
# List editing
# ---------------------------------------------------------------------------

def remove_item(items: list[T], index: int) -> T:
    """Remove and return the item at index."""
    _check_index(items, index)
    return items.pop(index)


def swap_items(items: list[T], i: int, j: int) -> None:
    """Swap the items at indices i and j in place."""
    _check_index(items, i)
    _check_index(items, j)
    items[i], items[j] = items[j], items[i]


def describe_definitions(definitions: Sequence[ComponentEntry]) -> str:
    """Numbered long descriptions of a definition list."""
    if not definitions:
        return "(No definitions have been created)"

    lines = ["Definitions:"]
    for i, definition in enumerate(definitions):
        lines.append(f"{i}. {definition.describe()}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _check_index(items: Sequence, index: int) -> None:
    if not 0 <= index < len(items):
        raise CatalogIndexError(
            f"'{index}' is not a valid index (list has {len(items)} item(s))."
        )


def _values(values: Sequence[float], n: int, name: str) -> list[float]:
    values = [float(v) for v in values]
    if len(values) != n:
        raise ValueError(f"{name} requires {n} values, got {len(values)}.")
    return values


def _to_coord(values: Sequence[float], name: str) -> Coord:
    return Coord(*_values(values, 3, name))
