"""
grafen/errors.py

Exception types raised by grafen.

Every generation and catalog operation either returns its result or raises
one of these (or a plain OSError for file system failures).  Presentation of
the failure is left to the caller; the CLI prints them and exits with status 1.

    GrafenError
    ├── BadPathError        path assignment with no usable file stem
    ├── SizeError           non-positive substrate dimension
    ├── DatabaseError       malformed catalog document, or save without a path
    └── CatalogIndexError   catalog / definition list index out of range
"""

from __future__ import annotations


class GrafenError(Exception):
    """Base class for all grafen errors."""


class BadPathError(GrafenError, ValueError):
    """A catalog path was given without a file stem (e.g. an empty string)."""


class SizeError(GrafenError, ValueError):
    """A requested substrate dimension was zero or negative."""


class DatabaseError(GrafenError):
    """A catalog document could not be parsed, or could not be written."""


class CatalogIndexError(GrafenError, IndexError):
    """An index into a catalog or definition list is out of range."""
