"""
grafen.structure

Coordinates, lattices and substrate generation.

Submodules
----------
coord       Immutable (x, y, z) coordinate with periodic folding
lattice     Crystal bases and the builder for tileable 2D lattices
atoms       Numbered atoms expanded from lattice points and residue templates
substrate   Graphene and silica substrate generation
export      Conversion to ASE Atoms and GROMACS .gro output
"""
