"""
tests/conftest.py

Shared pytest fixtures for the grafen test suite.

All fixtures are pure geometry or temp-file based; no network access.

Fixture overview
----------------
Residues
    two_atom_residue    A small residue with two atoms
    graphene_residue    The graphene template used for substrates

Components
    sheet               Unbuilt hexagonal Sheet with a residue
    cuboid              Unbuilt Cuboid with a density
    volume_cylinder     Unbuilt VolumeCylinder with a density
    surface_cylinder    Unbuilt SurfaceCylinder on a square lattice

Catalog
    database            DataBase holding all the above, without a path
    catalog_file        `database` saved to a temp file; returns the path

Config
    config_dict         A grafen.yaml-equivalent dict
    run_file            config_dict written to a temp grafen.yaml
"""

from __future__ import annotations

import math

import pytest

from grafen.components.residue import Residue, ResidueAtom
from grafen.structure.coord import Coord


# ---------------------------------------------------------------------------
# Residue fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def two_atom_residue() -> Residue:
    return Residue(
        code="RES",
        atoms=(
            ResidueAtom(code="A1", position=Coord(0.0, 1.0, 2.0)),
            ResidueAtom(code="A2", position=Coord(3.0, 4.0, 5.0)),
        ),
    )


@pytest.fixture
def graphene_residue() -> Residue:
    from grafen.structure.substrate import GRAPHENE_RESIDUE
    return GRAPHENE_RESIDUE


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sheet(graphene_residue):
    from grafen.components.surface import HexagonalLattice, Sheet
    return Sheet(
        name="graphene",
        residue=graphene_residue,
        lattice=HexagonalLattice(a=0.142),
        length=1.0,
        width=1.0,
    )


@pytest.fixture
def cuboid(two_atom_residue):
    from grafen.components.volume import Cuboid
    return Cuboid(
        name="box",
        residue=two_atom_residue,
        size=Coord(2.0, 1.0, 1.0),
        density=10.0,
    )


@pytest.fixture
def volume_cylinder(two_atom_residue):
    from grafen.components.volume import VolumeCylinder
    return VolumeCylinder(
        name="tube fill",
        residue=two_atom_residue,
        radius=1.0,
        height=2.0,
        density=5.0,
    )


@pytest.fixture
def surface_cylinder(graphene_residue):
    from grafen.components.surface import SurfaceCylinder, TriclinicLattice
    return SurfaceCylinder(
        name="tube",
        residue=graphene_residue,
        lattice=TriclinicLattice(a=1.0, b=1.0, gamma=math.pi / 2.0),
        radius=1.0,
        height=3.0,
    )


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def database(two_atom_residue, graphene_residue, sheet, cuboid,
             volume_cylinder, surface_cylinder):
    """A catalog with two residues and one component of every kind."""
    from grafen.components.entry import ComponentEntry
    from grafen.database.db import DataBase
    return DataBase(
        residue_defs=[two_atom_residue, graphene_residue],
        component_defs=[
            ComponentEntry.from_component(sheet),
            ComponentEntry.from_component(cuboid),
            ComponentEntry.from_component(volume_cylinder),
            ComponentEntry.from_component(surface_cylinder),
        ],
    )


@pytest.fixture
def catalog_file(tmp_path, database):
    """`database` written to tmp_path/catalog.json."""
    from grafen.database.db import write_database
    database.set_path(tmp_path / "catalog")
    write_database(database)
    return database.path


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def config_dict(catalog_file, tmp_path) -> dict:
    """A complete grafen.yaml-equivalent dict."""
    return {
        "database": str(catalog_file),
        "output_dir": str(tmp_path / "out"),
        "seed": 7,
        "substrates": [
            {"name": "graphene", "material": "graphene", "size": [1.0, 1.0]},
            {"name": "silica", "material": "Silica", "size": [1, 2]},
        ],
        "components": [
            {"name": "sheet", "index": 0, "position": [0.0, 0.0, 1.0],
             "size": [2.0, 2.0]},
            {"name": "tube", "index": 3, "radius": 0.5, "height": 2.0},
        ],
    }


@pytest.fixture
def run_file(tmp_path, config_dict):
    import yaml
    path = tmp_path / "grafen.yaml"
    path.write_text(yaml.dump(config_dict))
    return path
