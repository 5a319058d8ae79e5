"""
grafen.database

The catalog of residue and component definitions.

Submodules
----------
db           DataBase model, path management and JSON read/write
definitions  Create definitions from catalog entries; index-based list edits
"""
