"""
Tests for the Charkraborti-Desu W distribution.

Small closed cases:
    N = 3, length = 1, populations = 1: W uniform on {0, 1, 2}
    N = 4, length = 2, populations = 2: P(W = 0, 1, 2) = 1/6, 1/3, 1/2
"""

import pytest

from pynpst.core.exceptions import ValidationError
from pynpst.tables import ALL


@pytest.fixture(scope="module")
def cd(context):
    return context.cd


class TestPointProbability:

    @pytest.mark.parametrize("w", [0, 1, 2])
    def test_uniform_case(self, cd, w):
        assert cd.compute_point_probability(w, 3, 1, 1) == pytest.approx(1 / 3)

    @pytest.mark.parametrize("w, expected", [(0, 1 / 6), (1, 1 / 3), (2, 1 / 2)])
    def test_two_populations(self, cd, w, expected):
        assert cd.compute_point_probability(w, 4, 2, 2) == pytest.approx(expected)

    @pytest.mark.parametrize("n, populations, length", [(10, 1, 3), (20, 2, 5), (30, 3, 8), (15, 4, 4)])
    def test_sums_to_one(self, cd, n, populations, length):
        total = sum(
            cd.compute_point_probability(w, n, populations, length)
            for w in range(n - length + 1)
        )
        assert total == pytest.approx(1.0, abs=1e-12)

    def test_beyond_support(self, cd):
        assert cd.compute_point_probability(9, 10, 1, 3) == 0.0

    def test_invalid_arguments(self, cd):
        with pytest.raises(ValidationError):
            cd.compute_point_probability(-1, 10, 1, 3)
        with pytest.raises(ValidationError):
            cd.compute_point_probability(1, 10, 0, 3)


class TestExactProbability:

    def test_lower_tail(self, cd):
        assert cd.compute_exact_probability(1, 4, 2, 2) == pytest.approx(0.5)

    def test_full_support(self, cd):
        assert cd.compute_exact_probability(7, 10, 1, 3) == pytest.approx(1.0)
        assert cd.compute_exact_probability(7, 10, 1, 3) <= 1.0

    def test_monotone(self, cd):
        values = [cd.compute_exact_probability(w, 25, 2, 6) for w in range(20)]
        assert all(b >= a for a, b in zip(values, values[1:]))


class TestAsymptoticProbability:

    def test_increasing_in_w(self, cd):
        values = [cd.compute_asymptotic_probability(w, 60, 2, 10) for w in range(0, 40, 4)]
        assert all(b > a for a, b in zip(values, values[1:]))
        assert 0.0 < values[0] < values[-1] < 1.0

    def test_close_to_exact(self, cd):
        w = 12
        exact = cd.compute_exact_probability(w, 200, 3, 20)
        approximate = cd.compute_asymptotic_probability(w, 200, 3, 20)
        assert approximate == pytest.approx(exact, abs=0.05)

    def test_degenerate_variance_warns(self, cd):
        with pytest.warns(RuntimeWarning):
            assert cd.compute_asymptotic_probability(0, 5, 1, 5) == ALL
