"""
Tests for the Lilliefors critical tables.

Reference: n = 10, normal null, 0.05 level:
    0.888 / (sqrt(10) - 0.01 + 0.85 / sqrt(10)) = 0.2596
Lilliefors (1967) prints 0.258.

The tables are formula-derived: at n = 4, 0.01 level, the normal table
gives 1.038 / (2 - 0.01 + 0.425) = 0.4298 against the printed 0.417.
"""

import math

import numpy as np
import pytest

from pynpst.exact import CriticalPValue
from pynpst.exact.lilliefors import (
    ASYMPTOTIC_EXPONENTIAL,
    ASYMPTOTIC_NORMAL,
    MAX_N,
    MIN_N,
    P_VALUES,
)
from pynpst.tables import ALL


@pytest.fixture(scope="module")
def lilliefors(context):
    return context.lilliefors


class TestTables:

    def test_headers(self, lilliefors):
        np.testing.assert_array_equal(lilliefors.table_normal.headers, P_VALUES)
        np.testing.assert_array_equal(lilliefors.table_exponential.headers, P_VALUES)

    def test_normal_reference(self, lilliefors):
        assert lilliefors.table_normal.get(10, 2) == pytest.approx(0.258, abs=0.003)

    def test_smallest_n_is_formula_derived(self, lilliefors):
        value = lilliefors.table_normal.get(4, 1)
        assert value == pytest.approx(1.038 / (2.0 - 0.01 + 0.85 / 2.0))
        assert value == pytest.approx(0.430, abs=0.001)
        assert value - 0.417 > 0.01

    def test_rows_defined_over_range(self, lilliefors):
        assert not lilliefors.table_normal.is_defined(MIN_N - 1)
        assert all(lilliefors.table_normal.is_defined(n) for n in range(MIN_N, MAX_N + 1))
        assert not lilliefors.table_normal.is_defined(MAX_N + 1)

    def test_critical_values_shrink_with_n(self, lilliefors):
        values = [lilliefors.table_normal.get(n, 2) for n in range(MIN_N, MAX_N + 1)]
        assert np.all(np.diff(values) < 0.0)

    def test_exponential_above_normal(self, lilliefors):
        for n in (5, 20, 80):
            for column in range(len(P_VALUES)):
                assert lilliefors.table_exponential.get(n, column) > lilliefors.table_normal.get(n, column)

    def test_tables_approach_asymptotic(self, lilliefors):
        root = math.sqrt(MAX_N)
        for column, constant in enumerate(ASYMPTOTIC_NORMAL):
            assert lilliefors.table_normal.get(MAX_N, column) * root == pytest.approx(constant, rel=0.02)
        for column, constant in enumerate(ASYMPTOTIC_EXPONENTIAL):
            assert lilliefors.table_exponential.get(MAX_N, column) * root == pytest.approx(constant, rel=0.05)


class TestNormal:

    @pytest.mark.parametrize("dn, expected", [
        (0.40, 0.001),
        (0.31, 0.01),
        (0.27, 0.05),
        (0.25, 0.10),
        (0.10, ALL),
    ])
    def test_tabulated(self, lilliefors, dn, expected):
        result = lilliefors.compute_probability_normal(10, dn)
        assert result == CriticalPValue(expected, is_approximate=False)

    def test_asymptotic_beyond_table(self, lilliefors):
        result = lilliefors.compute_probability_normal(200, 0.065)
        assert result.p_value == 0.05
        assert result.is_approximate

    def test_asymptotic_non_significant(self, lilliefors):
        assert lilliefors.compute_probability_normal(400, 0.01) == CriticalPValue(ALL, True)

    def test_too_small(self, lilliefors):
        assert lilliefors.compute_probability_normal(3, 0.9) == CriticalPValue(ALL, True)

    def test_float_conversion(self, lilliefors):
        assert float(lilliefors.compute_probability_normal(10, 0.27)) == 0.05


class TestExponential:

    def test_tabulated(self, lilliefors):
        """n = 10, 0.05: 1.077 / (sqrt(10) + 0.26 + 0.5 / sqrt(10)) + 0.02 = 0.3208."""
        assert lilliefors.table_exponential.get(10, 2) == pytest.approx(0.3208, abs=1e-4)
        result = lilliefors.compute_probability_exponential(10, 0.33)
        assert result == CriticalPValue(0.05, is_approximate=False)

    def test_asymptotic_beyond_table(self, lilliefors):
        result = lilliefors.compute_probability_exponential(150, 1.3 / math.sqrt(150))
        assert result == CriticalPValue(0.01, is_approximate=True)
