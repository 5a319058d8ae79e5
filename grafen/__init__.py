"""
grafen

Generate substrates and other system components for molecular dynamics
simulations.

Subpackages
-----------
structure   Coordinates, crystal lattices, atom instantiation and export
components  Residues and the geometric component kinds kept in a catalog
database    The persisted catalog of residue and component definitions
"""

__version__ = "0.10.0"
