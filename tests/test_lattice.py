"""
tests/test_lattice.py

Tests for:
  - Coord arithmetic and periodic folding (coord.py)
  - CrystalBasis spacing (lattice.py)
  - LatticeBuilder / Lattice generation (lattice.py)
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from grafen.structure.coord import Coord


# ===========================================================================
# coord.py
# ===========================================================================

class TestCoord:

    def test_add(self):
        coord = Coord(0.0, 1.0, 2.0)
        assert coord + Coord(1.0, -1.0, 0.5) == Coord(1.0, 0.0, 2.5)
        assert coord.add(Coord(1.0, -1.0, 0.5)) == Coord(1.0, 0.0, 2.5)

    def test_scale(self):
        assert Coord(1.0, -2.0, 0.5).scale(2.0) == Coord(2.0, -4.0, 1.0)

    def test_coord_is_immutable(self):
        from dataclasses import FrozenInstanceError
        coord = Coord(1.0, 2.0, 3.0)
        with pytest.raises(FrozenInstanceError):
            coord.x = 5.0

    def test_with_pbc_folds_into_box(self):
        box = Coord(2.0, 1.0, 1.0)
        assert Coord(2.5, -0.25, 3.5).with_pbc(box) == Coord(0.5, 0.75, 0.5)

    def test_with_pbc_skips_zero_box_axes(self):
        box = Coord(2.0, 1.0, 0.0)
        assert Coord(2.5, 1.5, 7.0).with_pbc(box) == Coord(0.5, 0.5, 7.0)

    def test_with_pbc_tiny_negative_stays_below_box(self):
        folded = Coord(-1e-20, 0.0, 0.0).with_pbc(Coord(1.0, 1.0, 1.0))
        assert 0.0 <= folded.x < 1.0

    def test_array_conversion(self):
        coord = Coord(1.0, 2.0, 3.0)
        assert np.allclose(coord.to_array(), [1.0, 2.0, 3.0])
        assert Coord.from_array(np.array([1.0, 2.0, 3.0])) == coord


# ===========================================================================
# CrystalBasis
# ===========================================================================

class TestCrystalBasis:

    def test_hexagonal_basis(self):
        from grafen.structure.lattice import CrystalBasis, FAMILY
        basis = CrystalBasis.hexagonal(1.0)
        assert basis.a == 1.0
        assert basis.b == 1.0
        assert basis.gamma == 2.0 * math.pi / 3.0
        assert basis.family == FAMILY.HEXAGONAL

    def test_triclinic_basis(self):
        from grafen.structure.lattice import CrystalBasis, FAMILY
        basis = CrystalBasis.triclinic(1.0, 2.0, 3.0)
        assert (basis.a, basis.b, basis.gamma) == (1.0, 2.0, 3.0)
        assert basis.family == FAMILY.GENERIC

    def test_spacing(self):
        from grafen.structure.lattice import CrystalBasis
        spacing = CrystalBasis.triclinic(1.0, 3.0, math.pi / 3.0).spacing()
        assert spacing.dx == 1.0
        assert spacing.dy == pytest.approx(3.0 * math.sqrt(3.0) / 2.0)
        assert spacing.dx_per_row == pytest.approx(1.5)


# ===========================================================================
# Lattice generation
# ===========================================================================

def _assert_coords_close(actual, expected):
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert (a.x, a.y, a.z) == pytest.approx((e.x, e.y, e.z), abs=1e-6)


class TestGenericLattice:

    def test_triclinic_lattice_points_and_box(self):
        from grafen.structure.lattice import Lattice
        lattice = Lattice.triclinic(1.0, 1.0, math.radians(60.0)).from_bins(3, 2).finalize()

        dy = math.sin(math.radians(60.0))
        _assert_coords_close(lattice.coords, [
            Coord(0.0, 0.0, 0.0),
            Coord(1.0, 0.0, 0.0),
            Coord(2.0, 0.0, 0.0),
            Coord(0.5, dy, 0.0),
            Coord(1.5, dy, 0.0),
            Coord(2.5, dy, 0.0),
        ])
        assert lattice.box_size.x == pytest.approx(3.0)
        assert lattice.box_size.y == pytest.approx(2.0 * dy)
        assert lattice.box_size.z == 0.0

    @pytest.mark.parametrize("nx, ny", [(0, 0), (1, 1), (3, 2), (4, 7), (0, 5)])
    def test_point_count_is_nx_times_ny(self, nx, ny):
        from grafen.structure.lattice import Lattice
        lattice = Lattice.triclinic(0.5, 0.7, math.radians(75.0)).from_bins(nx, ny).finalize()
        assert len(lattice) == nx * ny

    def test_points_are_row_major(self):
        from grafen.structure.lattice import Lattice
        lattice = Lattice.triclinic(1.0, 1.0, math.pi / 2.0).from_bins(4, 3).finalize()
        ys = [c.y for c in lattice.coords]
        assert ys == sorted(ys)
        assert [c.x for c in lattice.coords[:4]] == pytest.approx([0.0, 1.0, 2.0, 3.0])

    def test_generic_bins_are_not_adjusted(self):
        from grafen.structure.lattice import Lattice
        builder = Lattice.triclinic(1.0, 1.0, math.pi / 2.0).from_bins(4, 1)
        lattice = builder.finalize()
        assert (builder.nx, builder.ny) == (4, 1)
        assert lattice.box_size == Coord(4.0, 1.0, 0.0)


class TestHexagonalLattice:

    def test_every_third_point_is_removed(self):
        from grafen.structure.lattice import CrystalBasis, Lattice
        lattice = Lattice.hexagonal(1.0).from_bins(6, 2).finalize()
        dx, dy, dx_per_row = CrystalBasis.hexagonal(1.0).spacing()

        _assert_coords_close(lattice.coords, [
            Coord(0.0, 0.0, 0.0),
            Coord(dx, 0.0, 0.0),
            Coord(3.0 * dx, 0.0, 0.0),
            Coord(4.0 * dx, 0.0, 0.0),
            Coord(dx_per_row, dy, 0.0),
            Coord(dx_per_row + 2.0 * dx, dy, 0.0),
            Coord(dx_per_row + 3.0 * dx, dy, 0.0),
            Coord(dx_per_row + 5.0 * dx, dy, 0.0),
        ])

    def test_bins_are_raised_for_periodicity(self):
        from grafen.structure.lattice import Lattice
        lattice = Lattice.hexagonal(1.0).from_bins(4, 1).finalize()
        expected = Lattice.hexagonal(1.0).from_bins(6, 2).finalize()

        assert lattice.coords == expected.coords
        assert lattice.box_size == expected.box_size

    @pytest.mark.parametrize("nx, ny", [(0, 0), (1, 1), (4, 1), (7, 3), (6, 6), (10, 5)])
    def test_adjusted_counts_and_point_count(self, nx, ny):
        from grafen.structure.lattice import Lattice
        builder = Lattice.hexagonal(1.0).from_bins(nx, ny)
        lattice = builder.finalize()

        nx_adj = math.ceil(nx / 3) * 3
        ny_adj = math.ceil(ny / 2) * 2
        assert (builder.nx, builder.ny) == (nx_adj, ny_adj)

        removed = sum(
            1
            for row in range(ny_adj)
            for col in range(nx_adj)
            if (col + row + 1) % 3 == 0
        )
        assert len(lattice) == nx_adj * ny_adj - removed
        assert len(lattice) * 3 == nx_adj * ny_adj * 2

    def test_box_uses_adjusted_bins(self):
        from grafen.structure.lattice import Lattice
        lattice = Lattice.hexagonal(1.0).from_bins(1, 1).finalize()
        assert lattice.box_size.x == pytest.approx(3.0)
        assert lattice.box_size.y == pytest.approx(2.0 * math.sqrt(3.0) / 2.0)


class TestLatticeFromSize:

    def test_from_size_matches_from_bins(self):
        from grafen.structure.lattice import Lattice
        lattice = Lattice.triclinic(1.0, 0.5, math.radians(90.0)).from_size(2.1, 0.9).finalize()
        expected = Lattice.triclinic(1.0, 0.5, math.radians(90.0)).from_bins(2, 2).finalize()

        assert lattice.coords == expected.coords
        assert lattice.box_size == expected.box_size

    def test_hexagonal_from_size_matches_from_bins(self):
        from grafen.structure.lattice import Lattice
        lattice = Lattice.hexagonal(1.0).from_size(2.1, 0.9).finalize()
        expected = Lattice.hexagonal(1.0).from_bins(3, 2).finalize()

        assert lattice.coords == expected.coords
        assert lattice.box_size == expected.box_size

    def test_rounds_half_away_from_zero(self):
        from grafen.structure.lattice import Lattice
        builder = Lattice.triclinic(1.0, 1.0, math.pi / 2.0).from_size(2.5, 0.5)
        assert (builder.nx, builder.ny) == (3, 1)

    def test_negative_size_gives_no_bins(self):
        from grafen.structure.lattice import Lattice
        builder = Lattice.triclinic(1.0, 1.0, math.pi / 2.0).from_size(-2.0, 3.0)
        assert (builder.nx, builder.ny) == (0, 3)
        assert len(builder.finalize()) == 0

    @pytest.mark.parametrize("size", [math.nan, math.inf])
    def test_non_finite_size_raises(self, size):
        from grafen.structure.lattice import Lattice
        with pytest.raises(ValueError, match="finite"):
            Lattice.hexagonal(1.0).from_size(size, 1.0)

    def test_negative_bins_raise(self):
        from grafen.structure.lattice import Lattice
        with pytest.raises(ValueError):
            Lattice.hexagonal(1.0).from_bins(-1, 2)


class TestLatticeTranslate:

    def test_translate_shifts_points_and_keeps_box(self):
        from grafen.structure.lattice import Lattice
        lattice = Lattice(
            box_size=Coord(1.0, 1.0, 1.0),
            coords=(Coord(0.0, 0.0, 0.0), Coord(2.0, 1.0, 0.0)),
        )
        moved = lattice.translate(Coord(-0.5, 0.5, 1.0))

        assert moved.coords == (Coord(-0.5, 0.5, 1.0), Coord(1.5, 1.5, 1.0))
        assert moved.box_size == lattice.box_size
        # the source lattice is untouched
        assert lattice.coords[0] == Coord(0.0, 0.0, 0.0)

    def test_to_array(self):
        from grafen.structure.lattice import Lattice
        lattice = Lattice.hexagonal(1.0).from_bins(3, 2).finalize()
        array = lattice.to_array()
        assert array.shape == (4, 3)
        assert np.allclose(array[:, 2], 0.0)
