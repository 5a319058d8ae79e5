"""
grafen/database/db.py

The persisted catalog of residue and component definitions.

A DataBase holds two ordered lists, `residue_defs` and `component_defs`, and
optionally the path of the file it belongs to.  It is written to disk as a
JSON document:

    {
      "residue_definitions":   [ {Residue}, ... ],
      "component_definitions": [ {ComponentEntry}, ... ]
    }

Both lists default to empty when missing from a document.

Path policy
-----------
`path` is session state, not catalog content.  It is excluded when the
document is written, ignored if a document happens to contain it, and set
from the file location when a catalog is read.  Consequently a catalog read
from one location and saved to another reproduces its definitions exactly,
while its path always reflects where it was last read from or assigned.

Usage
-----
    from grafen.database.db import DataBase, read_database, write_database

    db = DataBase()
    db.set_path("components")          # -> components.json
    db.residue_defs.append(residue)
    write_database(db)

    db = read_database("components.json")
    print(db.describe())
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import PydanticSerializationError

from grafen.components.entry import ComponentEntry
from grafen.components.residue import Residue
from grafen.errors import BadPathError, DatabaseError

log = logging.getLogger(__name__)

#: Extension given to every catalog path
CATALOG_SUFFIX = ".json"


class DataBase(BaseModel):
    """
    Catalog of residue and component definitions.

    Fields
    ------
    path : Path | None
        Location of the catalog on disk.  Never serialised.
    residue_defs : list[Residue]
        Stored as `residue_definitions`.
    component_defs : list[ComponentEntry]
        Stored as `component_definitions`.
    """

    model_config = ConfigDict(populate_by_name=True)

    path: Path | None = Field(default=None, exclude=True)
    residue_defs: list[Residue] = Field(
        default_factory=list, alias="residue_definitions",
    )
    component_defs: list[ComponentEntry] = Field(
        default_factory=list, alias="component_definitions",
    )

    # ------------------------------------------------------------------
    # Path management
    # ------------------------------------------------------------------

    def set_path(self, new_path: str | Path) -> None:
        """
        Set the catalog path, with its extension replaced by `.json`.

        Raises
        ------
        BadPathError:
            If the path has no file stem (e.g. an empty string).  The current
            path is left unchanged.
        """
        path = Path(new_path)
        if path.name in ("", ".", ".."):
            raise BadPathError(f"'{new_path}' is not a valid catalog file path.")

        if path.name.endswith("."):
            # empty extension: "name." becomes "name.json"
            self.path = path.with_name(path.name[:-1] + CATALOG_SUFFIX)
        else:
            self.path = path.with_suffix(CATALOG_SUFFIX)

    def get_path_pretty(self) -> str:
        """The path in single quotes, or "None" if no path is set."""
        if self.path is None:
            return "None"
        return f"'{self.path}'"

    # ------------------------------------------------------------------
    # Document codec
    # ------------------------------------------------------------------

    def to_json(self) -> str:
        """
        Serialise the definitions (never the path) to a JSON document.

        Raises
        ------
        DatabaseError:
            If a definition holds values that cannot be serialised.
        """
        try:
            return self.model_dump_json(by_alias=True, indent=2)
        except PydanticSerializationError as exc:
            raise DatabaseError(f"Could not serialise the catalog: {exc}") from exc

    @classmethod
    def from_json(cls, text: str) -> DataBase:
        """
        Parse a JSON catalog document.

        Raises
        ------
        DatabaseError:
            If the text is not JSON, not an object, or does not validate.
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DatabaseError(f"Catalog is not valid JSON: {exc}") from exc

        if not isinstance(raw, dict):
            raise DatabaseError(
                f"Expected a JSON object at the top level of the catalog, "
                f"got {type(raw).__name__}."
            )
        raw.pop("path", None)

        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise DatabaseError(f"Invalid catalog document:\n{exc}") from exc

    # ------------------------------------------------------------------
    # Disk I/O
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path) -> DataBase:
        return read_database(path)

    def save(self) -> None:
        write_database(self)

    # ------------------------------------------------------------------
    # Descriptions
    # ------------------------------------------------------------------

    def describe(self) -> str:
        lines = [f"Database path: {self.get_path_pretty()}", ""]

        lines.append("Component definitions:")
        if not self.component_defs:
            lines.append("(none)")
        for i, entry in enumerate(self.component_defs):
            lines.append(f"{i}. {entry.describe_short()}")
        lines.append("")

        lines.append("Residue definitions:")
        if not self.residue_defs:
            lines.append("(none)")
        for i, residue in enumerate(self.residue_defs):
            lines.append(f"{i}. {residue.describe()}")

        return "\n".join(lines)

    def describe_short(self) -> str:
        return (
            f"Database {self.get_path_pretty()}: "
            f"{len(self.component_defs)} component(s), "
            f"{len(self.residue_defs)} residue(s)"
        )


# ---------------------------------------------------------------------------
# Read / write
# ---------------------------------------------------------------------------

def read_database(path: str | Path) -> DataBase:
    """
    Read a catalog from a JSON file.  The returned catalog's path is `path`.

    Raises
    ------
    FileNotFoundError:
        If the file does not exist.
    DatabaseError:
        If the file content is not a valid catalog.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        text = fh.read()

    database = DataBase.from_json(text)
    database.path = path

    log.info(
        f"Read catalog {path}: {len(database.component_defs)} component(s), "
        f"{len(database.residue_defs)} residue(s)"
    )
    return database


def write_database(database: DataBase) -> None:
    """
    Write a catalog to its own path.

    Raises
    ------
    DatabaseError:
        If no path has been set, or the catalog cannot be serialised.  The
        file is left untouched in both cases.
    OSError:
        If the file cannot be written.
    """
    if database.path is None:
        raise DatabaseError(
            "No path was set when trying to write the catalog to disk."
        )

    # The file is only truncated once serialisation has succeeded
    text = database.to_json()
    with database.path.open("w", encoding="utf-8") as fh:
        fh.write(text)

    log.info(f"Wrote catalog to {database.path}")
