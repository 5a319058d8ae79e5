"""
grafen.components

Residues and the geometric components that are kept in the catalog.

Submodules
----------
residue     Residue and ResidueAtom records
base        Shared fields and behaviour of every component kind
volume      Volume kinds: Cuboid, VolumeCylinder
surface     Surface kinds built from lattices: Sheet, SurfaceCylinder
entry       ComponentEntry, the tagged wrapper over all component kinds
"""
