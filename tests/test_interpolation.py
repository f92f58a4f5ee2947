"""Tests for the table interpolation helpers."""
import pytest

from corelab.analysis.interpolation import (
    bilinear_lookup, bracket, clamp, linear_interpolate,
    nearest_standard_value, table_lookup_1d,
)
from corelab.analysis.tables import DEFAULT_TABLES


LD_TABLE = [(15, 1.07), (20, 1.05), (25, 1.04), (30, 1.03), (35, 1.02)]


def test_linear_interpolate_midpoint():
    assert linear_interpolate(15, 10, 20, 1.0, 2.0) == pytest.approx(1.5)


def test_clamp():
    assert clamp(5, 10, 20) == 10
    assert clamp(25, 10, 20) == 20
    assert clamp(12.5, 10, 20) == 12.5


def test_bracket_returns_lower_index():
    points = [50, 75, 100, 125, 150]
    assert bracket(50, points) == 0
    assert bracket(93, points) == 1
    assert bracket(150, points) == 3


class TestTableLookup1D:
    def test_exact_at_breakpoints(self):
        for x, y in LD_TABLE:
            assert table_lookup_1d(x, LD_TABLE) == pytest.approx(y)

    def test_interpolates_between_breakpoints(self):
        assert table_lookup_1d(17.5, LD_TABLE) == pytest.approx(1.06)
        assert table_lookup_1d(32.5, LD_TABLE) == pytest.approx(1.025)

    def test_clamps_below_and_above(self):
        assert table_lookup_1d(0, LD_TABLE) == 1.07
        assert table_lookup_1d(13.05, LD_TABLE) == 1.07
        assert table_lookup_1d(100, LD_TABLE) == 1.02

    def test_monotonic_between_breakpoints(self):
        xs = [15 + 0.5 * i for i in range(41)]
        ys = [table_lookup_1d(x, LD_TABLE) for x in xs]
        assert all(a >= b for a, b in zip(ys, ys[1:]))


class TestBilinearLookup:
    tables = DEFAULT_TABLES

    def lookup(self, diameter, strength):
        return bilinear_lookup(diameter, strength, self.tables.fg_diameters,
                               self.tables.fg_strengths, self.tables.fg_grid)

    def test_exact_at_every_node(self):
        for i, d in enumerate(self.tables.fg_diameters):
            for j, s in enumerate(self.tables.fg_strengths):
                assert self.lookup(d, s) == pytest.approx(self.tables.fg_grid[i][j])

    def test_axis_order_invariant(self):
        t = self.tables
        swapped_grid = [list(col) for col in zip(*t.fg_grid)]
        for d, s in [(60, 17), (93, 22.5), (140, 33), (110, 15)]:
            a = bilinear_lookup(d, s, t.fg_diameters, t.fg_strengths, t.fg_grid)
            b = bilinear_lookup(s, d, t.fg_strengths, t.fg_diameters, swapped_grid)
            assert a == pytest.approx(b)

    def test_center_of_cell(self):
        # Mean of the four corners 1.12, 1.10, 1.09, 1.07
        assert self.lookup(112.5, 17.5) == pytest.approx(1.095)

    def test_clamps_strength_and_diameter(self):
        assert self.lookup(93, 9.87) == pytest.approx(self.lookup(93, 15))
        assert self.lookup(30, 50) == pytest.approx(1.08)
        assert self.lookup(200, 5) == pytest.approx(1.07)


class TestNearestStandardValue:
    candidates = (50, 75, 100, 125, 150)

    def test_nearest(self):
        assert nearest_standard_value(93, self.candidates) == 100
        assert nearest_standard_value(80, self.candidates) == 75
        assert nearest_standard_value(10, self.candidates) == 50
        assert nearest_standard_value(400, self.candidates) == 150

    def test_tie_goes_to_smaller(self):
        assert nearest_standard_value(87.5, self.candidates) == 75
        assert nearest_standard_value(87.5, (100, 75)) == 75
