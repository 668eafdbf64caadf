"""
Tests for Kendall's partial tau distribution.

For m = 20 the normal approximation uses sd = sqrt(2 * 45 / (9 * 20 * 19))
= 0.1622, so the 0.05 critical value is 1.645 * 0.1622 = 0.2668 and the
0.025 one is 1.960 * 0.1622 = 0.318.
"""

import numpy as np
import pytest

from pynpst.exact import CriticalPValue, partial_tau_distribution
from pynpst.exact.partial_correlation import MAX_EXACT_M, MAX_M, MIN_M, P_VALUES
from pynpst.tables import ALL


@pytest.fixture(scope="module")
def partial(context):
    return context.partial_correlation


class TestExactDistribution:

    @pytest.mark.parametrize("m", [3, 4, 5])
    def test_probabilities_sum_to_one(self, m):
        _, pmf = partial_tau_distribution(m)
        assert pmf.sum() == pytest.approx(1.0)

    def test_symmetric(self):
        values, pmf = partial_tau_distribution(5)
        np.testing.assert_allclose(values, -values[::-1], atol=1e-9)
        np.testing.assert_allclose(pmf, pmf[::-1])


class TestTable:

    def test_headers(self, partial):
        np.testing.assert_array_equal(partial.table.headers, P_VALUES)

    def test_exact_criticals_hold_level(self, partial):
        values, pmf = partial_tau_distribution(MAX_EXACT_M)
        defined = 0
        for column, alpha in enumerate(P_VALUES):
            critical = partial.table.get(MAX_EXACT_M, column)
            if critical is not None:
                defined += 1
                assert pmf[values >= critical - 1e-9].sum() <= alpha * (1 + 1e-9)
        assert defined > 0

    def test_normal_reference(self, partial):
        assert partial.table.get(20, P_VALUES.index(0.05)) == pytest.approx(0.2668, abs=1e-3)


class TestProbability:

    def test_large_sample(self, partial):
        assert partial.compute_probability(20, 0.3) == CriticalPValue(0.05, is_approximate=True)

    def test_sign_ignored(self, partial):
        assert partial.compute_probability(20, -0.3) == partial.compute_probability(20, 0.3)

    def test_not_significant(self, partial):
        assert partial.compute_probability(25, 0.05).p_value == ALL

    def test_small_sample_is_exact(self, partial):
        result = partial.compute_probability(MAX_EXACT_M, 1.0)
        assert not result.is_approximate
        assert result.p_value < ALL

    def test_three_items_never_significant(self, partial):
        assert partial.compute_probability(MIN_M, 1.0) == CriticalPValue(ALL, is_approximate=False)

    @pytest.mark.parametrize("m", [MIN_M - 1, MAX_M + 1])
    def test_outside_table(self, partial, m):
        assert partial.compute_probability(m, 0.5) is None
