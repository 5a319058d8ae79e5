"""
grafen/config.py

Load and validate a grafen.yaml run file into typed configuration models.

A run file lists substrates to generate and component definitions to create
from a catalog.  `grafen run` executes every job and writes one .gro file per
job into `output_dir`.

Usage
-----
    from grafen.config import load_config

    cfg = load_config("grafen.yaml")
    for job in cfg.substrates:
        print(job.name, job.material, job.size)

All models use pydantic v2.
"""

from __future__ import annotations

import math
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator, model_validator

from grafen.structure.substrate import MATERIAL


# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------


class SubstrateJob(BaseModel):
    """
    One substrate to generate.

    The output file is `<output_dir>/<name>.gro`.
    """

    name: str
    material: str                       # graphene | silica
    size: tuple[float, float]           # requested footprint (nm)

    @field_validator("material")
    @classmethod
    def _valid_material(cls, v: str) -> str:
        v = v.lower()
        if v not in MATERIAL.all():
            raise ValueError(
                f"material must be one of {sorted(MATERIAL.all())}, got '{v}'."
            )
        return v

    @field_validator("size")
    @classmethod
    def _positive_size(cls, v: tuple[float, float]) -> tuple[float, float]:
        if not all(math.isfinite(s) and s > 0 for s in v):
            raise ValueError(f"substrate size must be positive and finite, got {list(v)}.")
        return v


class ComponentJob(BaseModel):
    """
    One definition to create from a catalog entry.

    Overrides left as None keep the value stored in the catalog.
    """

    name: str
    index: int                                  # position in component_definitions
    position: tuple[float, float, float] | None = None
    size: list[float] | None = None             # [length, width] or [x, y, z]
    radius: float | None = None
    height: float | None = None

    @field_validator("index")
    @classmethod
    def _non_negative_index(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"index must be >= 0, got {v}.")
        return v

    @field_validator("size")
    @classmethod
    def _size_length(cls, v: list[float] | None) -> list[float] | None:
        if v is not None and len(v) not in (2, 3):
            raise ValueError(f"size must have 2 or 3 values, got {len(v)}.")
        return v


# ---------------------------------------------------------------------------
# Root config model
# ---------------------------------------------------------------------------


class GrafenConfig(BaseModel):
    """
    Root configuration object loaded from grafen.yaml.

    Example
    -------
    .. code-block:: yaml

        database: components.json
        output_dir: out

        substrates:
          - name: graphene
            material: graphene
            size: [5.0, 5.0]

        components:
          - name: sheet
            index: 0
            position: [0.0, 0.0, 1.0]
            size: [4.0, 4.0]
    """

    database: str | None = None
    output_dir: str = "."
    seed: int | None = None
    substrates: list[SubstrateJob] = []
    components: list[ComponentJob] = []

    @model_validator(mode="after")
    def _components_need_database(self) -> "GrafenConfig":
        if self.components and self.database is None:
            raise ValueError(
                "A 'database' must be given to create component definitions."
            )
        return self

    @model_validator(mode="after")
    def _unique_job_names(self) -> "GrafenConfig":
        names = [job.name for job in self.substrates] + [job.name for job in self.components]
        if len(names) != len(set(names)):
            raise ValueError(f"Job names must be unique, got: {names}")
        return self


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def load_config(path: str | Path) -> GrafenConfig:
    """
    Load and validate a grafen.yaml file.

    Parameters
    ----------
    path:
        Path to the YAML configuration file.

    Returns
    -------
    GrafenConfig
        Fully validated configuration object.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the file is empty or its top level is not a mapping.
    pydantic.ValidationError
        If the YAML content fails validation.
    yaml.YAMLError
        If the file is not valid YAML.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)

    if raw is None:
        raise ValueError(
            f"{path} contains no YAML keys.\n"
            "Generate a template with: grafen init"
        )
    if not isinstance(raw, dict):
        raise ValueError(
            f"Expected a YAML mapping at the top level, got {type(raw).__name__}."
        )

    return GrafenConfig.model_validate(raw)


def generate_example_config(path: str | Path = "grafen.yaml") -> Path:
    """Write a commented example grafen.yaml to disk and return its path."""
    example = """\
# grafen.yaml: grafen run file
# Lengths are in nm.

# Catalog with component definitions (needed for 'components' below)
database: components.json

# Directory receiving one .gro file per job
output_dir: .

# Seed for components with random placement (omit for a random seed)
seed: null

# ---------------------------------------------------------------------------
# Substrates
# ---------------------------------------------------------------------------
# The size is rounded to the closest size which is periodic in x and y.
substrates:
  - name: graphene
    material: graphene         # graphene | silica
    size: [5.0, 5.0]

# ---------------------------------------------------------------------------
# Components created from catalog entries
# ---------------------------------------------------------------------------
# Overrides: position (all kinds), size (sheets: [length, width],
# cuboids: [x, y, z]), radius and height (cylinders).
components:
  - name: sheet
    index: 0
    position: [0.0, 0.0, 1.0]
    size: [4.0, 4.0]
"""
    path = Path(path)
    path.write_text(example)
    return path
