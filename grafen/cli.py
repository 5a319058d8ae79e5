"""
grafen/cli.py

Command-line interface for grafen.

Commands
--------
  grafen init        Write a template grafen.yaml.
  grafen substrate   Generate one graphene or silica substrate.
  grafen run         Generate every substrate and definition listed in grafen.yaml.
  grafen define      Create one definition from a catalog entry and write its atoms.
  grafen catalog     Show, move and edit a catalog (show | move | remove | swap).

Usage
-----
    grafen init [--config grafen.yaml]
    grafen substrate graphene 5.0 5.0 [--output graphene.gro]
    grafen run [--config grafen.yaml]
    grafen define components.json 0 [--position X Y Z] [--size L,W]
                  [--radius R] [--height H] [--output def.gro]
    grafen catalog show components.json [--short]
    grafen catalog move components.json new_location
    grafen catalog remove components.json INDEX
    grafen catalog swap components.json I J
"""

from __future__ import annotations

import sys
import logging
from pathlib import Path

import click

from grafen.errors import GrafenError

# ---------------------------------------------------------------------------
# Logging, configured by each command
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
        level=level,
        stream=sys.stderr,
    )


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

_config_option = click.option(
    "--config", "-c",
    default="grafen.yaml",
    show_default=True,
    type=click.Path(exists=False, dir_okay=False),
    help="Path to the grafen.yaml run file.",
)

_verbose_option = click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)

_database_argument = click.argument(
    "database",
    type=click.Path(exists=False, dir_okay=False),
)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="grafen")
def cli() -> None:
    """
    grafen: create substrates and system components for MD simulations.

    Generate a periodic substrate directly with `grafen substrate`, or list
    several jobs in a grafen.yaml file (template: `grafen init`) and execute
    them with `grafen run`.
    """


# ---------------------------------------------------------------------------
# grafen init
# ---------------------------------------------------------------------------

@cli.command("init")
@_config_option
@_verbose_option
def cmd_init(config: str, verbose: bool) -> None:
    """Write a commented template run file."""
    _setup_logging(verbose)
    config_path = Path(config)
    if config_path.exists():
        _fail(f"{config_path} already exists; not overwriting it.")

    from grafen.config import generate_example_config
    generate_example_config(config_path)
    click.echo(f"✓ Template written: {config_path}")


# ---------------------------------------------------------------------------
# grafen substrate
# ---------------------------------------------------------------------------

@cli.command("substrate")
@click.argument("material", type=click.Choice(["graphene", "silica"], case_sensitive=False))
@click.argument("size_x", type=float)
@click.argument("size_y", type=float)
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False),
              help="Output .gro file.  Default: <material>.gro")
@_verbose_option
def cmd_substrate(material: str, size_x: float, size_y: float,
                  output: str | None, verbose: bool) -> None:
    """
    Generate a substrate of MATERIAL close to SIZE_X by SIZE_Y nm.

    The size is rounded to the closest size which is periodic along x and y.
    """
    _setup_logging(verbose)

    from grafen.structure.export import write_gro
    from grafen.structure.substrate import generate_substrate

    try:
        system = generate_substrate(size_x, size_y, material)
    except GrafenError as exc:
        _fail(str(exc))

    output_path = Path(output) if output else Path(f"{material.lower()}.gro")
    write_gro(output_path, system.atoms, system.dimensions)

    d = system.dimensions
    click.echo(
        f"✓ {len(system)} atoms, box ({d.x:.3f}, {d.y:.3f}, {d.z:.3f}) nm "
        f"→ {output_path}"
    )


# ---------------------------------------------------------------------------
# grafen run
# ---------------------------------------------------------------------------

@cli.command("run")
@_config_option
@_verbose_option
def cmd_run(config: str, verbose: bool) -> None:
    """Generate every substrate and component definition in the run file."""
    _setup_logging(verbose)
    log = logging.getLogger(__name__)
    config_path = Path(config)

    if not config_path.exists():
        _fail(f"config file not found: {config_path}")

    try:
        from grafen.config import load_config
        cfg = load_config(config_path)
    except Exception as exc:
        _fail(f"config validation failed:\n  {exc}")

    import numpy as np
    from grafen.database.db import read_database
    from grafen.database.definitions import create_definition, describe_definitions
    from grafen.structure.export import write_gro
    from grafen.structure.substrate import generate_substrate

    output_dir = Path(cfg.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(cfg.seed)

    try:
        for job in cfg.substrates:
            system = generate_substrate(job.size[0], job.size[1], job.material)
            write_gro(output_dir / f"{job.name}.gro", system.atoms, system.dimensions)

        if cfg.components:
            database = read_database(cfg.database)
            definitions = []
            for job in cfg.components:
                definition = create_definition(
                    database, job.index,
                    position=job.position, size=job.size,
                    radius=job.radius, height=job.height, rng=rng,
                )
                definitions.append(definition)
                write_gro(
                    output_dir / f"{job.name}.gro",
                    definition.iter_atoms(),
                    definition.box_size(),
                )
            log.debug(describe_definitions(definitions))
    except (GrafenError, OSError, ValueError) as exc:
        log.debug("Run failed", exc_info=True)
        _fail(str(exc))

    n_jobs = len(cfg.substrates) + len(cfg.components)
    click.echo(f"✓ {n_jobs} job(s) written to {output_dir}")


# ---------------------------------------------------------------------------
# grafen define
# ---------------------------------------------------------------------------

@cli.command("define")
@_database_argument
@click.argument("index", type=int)
@click.option("--position", nargs=3, type=float, default=None,
              help="Origin of the definition (x y z).")
@click.option("--size", type=str, default=None,
              help="Comma-separated size: 'L,W' for sheets, 'X,Y,Z' for cuboids.")
@click.option("--radius", type=float, default=None, help="Cylinder radius.")
@click.option("--height", type=float, default=None, help="Cylinder height.")
@click.option("--seed", type=int, default=None,
              help="Random seed for components with random placement.")
@click.option("--output", "-o", default="definition.gro", show_default=True,
              type=click.Path(dir_okay=False), help="Output .gro file.")
@_verbose_option
def cmd_define(database: str, index: int, position, size: str | None,
               radius: float | None, height: float | None, seed: int | None,
               output: str, verbose: bool) -> None:
    """Create a definition from entry INDEX of DATABASE and write its atoms."""
    _setup_logging(verbose)

    import numpy as np
    from grafen.database.db import read_database
    from grafen.database.definitions import create_definition
    from grafen.structure.export import write_gro

    try:
        sizes = [float(v) for v in size.split(",")] if size else None
    except ValueError:
        _fail(f"'{size}' is not a comma-separated list of numbers.")

    try:
        db = read_database(database)
        definition = create_definition(
            db, index,
            position=position or None, size=sizes,
            radius=radius, height=height,
            rng=np.random.default_rng(seed),
        )
    except (GrafenError, OSError, ValueError) as exc:
        _fail(str(exc))

    write_gro(output, definition.iter_atoms(), definition.box_size())
    click.echo(f"✓ {definition.describe_short()}: {definition.num_atoms()} atoms → {output}")


# ---------------------------------------------------------------------------
# grafen catalog
# ---------------------------------------------------------------------------

@cli.group("catalog")
def cmd_catalog() -> None:
    """Inspect and edit a catalog of residue and component definitions."""


def _read_catalog(database: str):
    from grafen.database.db import read_database
    try:
        return read_database(database)
    except (GrafenError, OSError) as exc:
        _fail(str(exc))


@cmd_catalog.command("show")
@_database_argument
@click.option("--short", is_flag=True, default=False, help="One-line summary.")
@_verbose_option
def cmd_catalog_show(database: str, short: bool, verbose: bool) -> None:
    """Describe the definitions in DATABASE."""
    _setup_logging(verbose)
    db = _read_catalog(database)
    click.echo(db.describe_short() if short else db.describe())


@cmd_catalog.command("move")
@_database_argument
@click.argument("new_path", type=str)
@_verbose_option
def cmd_catalog_move(database: str, new_path: str, verbose: bool) -> None:
    """Save DATABASE under NEW_PATH (the extension is set to .json)."""
    _setup_logging(verbose)
    db = _read_catalog(database)
    try:
        db.set_path(new_path)
        db.save()
    except (GrafenError, OSError) as exc:
        _fail(str(exc))
    click.echo(f"✓ Catalog saved to {db.get_path_pretty()}")


@cmd_catalog.command("remove")
@_database_argument
@click.argument("index", type=int)
@_verbose_option
def cmd_catalog_remove(database: str, index: int, verbose: bool) -> None:
    """Remove component definition INDEX from DATABASE."""
    _setup_logging(verbose)
    from grafen.database.definitions import remove_item

    db = _read_catalog(database)
    try:
        removed = remove_item(db.component_defs, index)
        db.save()
    except (GrafenError, OSError) as exc:
        _fail(str(exc))
    click.echo(f"✓ Removed component at index {index}: {removed.describe_short()}")


@cmd_catalog.command("swap")
@_database_argument
@click.argument("i", type=int)
@click.argument("j", type=int)
@_verbose_option
def cmd_catalog_swap(database: str, i: int, j: int, verbose: bool) -> None:
    """Swap component definitions I and J in DATABASE."""
    _setup_logging(verbose)
    from grafen.database.definitions import swap_items

    db = _read_catalog(database)
    try:
        swap_items(db.component_defs, i, j)
        db.save()
    except (GrafenError, OSError) as exc:
        _fail(str(exc))
    click.echo(f"✓ Swapped components at index {i} and {j}.")
