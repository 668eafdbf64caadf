"""
Tests for the total number of runs distribution.

Reference values for n1 = n2 = 5 (C(10, 5) = 252 arrangements):
    P(R = 2) = 2/252, P(R = 3) = 8/252, P(R <= 3) = 10/252
    P(R = 10) = 2/252, P(R >= 9) = 10/252
"""

import math
from fractions import Fraction

import pytest

from pynpst.exact import runs_probabilities
from pynpst.tables import ALL


@pytest.fixture(scope="module")
def runs(context):
    return context.total_number_of_runs


class TestRunsProbabilities:

    def test_five_five(self):
        probabilities = runs_probabilities(5, 5)
        assert probabilities[2] == Fraction(2, 252)
        assert probabilities[3] == Fraction(8, 252)
        assert probabilities[10] == Fraction(2, 252)

    @pytest.mark.parametrize("n1, n2", [(1, 1), (3, 7), (6, 6), (12, 19)])
    def test_sum_to_one(self, n1, n2):
        assert sum(runs_probabilities(n1, n2)) == 1

    def test_symmetric_in_groups(self):
        assert runs_probabilities(4, 9) == runs_probabilities(9, 4)

    def test_single_group(self):
        probabilities = runs_probabilities(0, 4)
        assert probabilities[1] == 1
        assert sum(probabilities) == 1

    def test_mean(self):
        """E[R] = 1 + 2 n1 n2 / (n1 + n2)."""
        n1, n2 = 7, 11
        mean = sum(r * p for r, p in enumerate(runs_probabilities(n1, n2)))
        assert mean == 1 + Fraction(2 * n1 * n2, n1 + n2)


# ═══════════════════════════════════════════════════════════════════════
# Exact tails
# ═══════════════════════════════════════════════════════════════════════


class TestExactTails:

    def test_left_reference(self, runs):
        assert runs.compute_left_tail_probability(5, 5, 3) == pytest.approx(10 / 252, abs=1e-15)

    def test_right_reference(self, runs):
        assert runs.compute_right_tail_probability(5, 5, 9) == pytest.approx(10 / 252, abs=1e-15)
        assert runs.compute_right_tail_probability(5, 5, 10) == pytest.approx(2 / 252, abs=1e-15)

    def test_left_from_complement(self, runs):
        """P(R <= 8) is above 0.5 and comes from 1 - P(R >= 9)."""
        assert runs.table_left.get(5, 5, 8) is None
        assert runs.compute_left_tail_probability(5, 5, 8) == pytest.approx(1 - 10 / 252, abs=1e-12)

    def test_right_beyond_maximum(self, runs):
        assert runs.compute_right_tail_probability(5, 5, 11) == 0.0

    def test_group_order_irrelevant(self, runs):
        assert (runs.compute_left_tail_probability(3, 8, 4)
                == runs.compute_left_tail_probability(8, 3, 4))

    @pytest.mark.parametrize("n1, n2", [(2, 9), (5, 5), (8, 12), (9, 12), (12, 12)])
    def test_left_tail_matches_closed_form(self, runs, n1, n2):
        probabilities = runs_probabilities(n1, n2)
        cumulative = Fraction(0)
        for r in range(n1 + n2 + 1):
            cumulative += probabilities[r]
            assert runs.compute_left_tail_probability(n1, n2, r) == pytest.approx(
                float(cumulative), abs=1e-12
            )

    @pytest.mark.parametrize("n1, n2", [(2, 9), (6, 7), (10, 12)])
    def test_right_tail_matches_closed_form(self, runs, n1, n2):
        probabilities = runs_probabilities(n1, n2)
        for r in range(1, n1 + n2 + 1):
            expected = float(sum(probabilities[r:]))
            assert runs.compute_right_tail_probability(n1, n2, r) == pytest.approx(expected, abs=1e-12)

    @pytest.mark.parametrize("n1, n2", [(13, 13), (5, 16), (9, 13)])
    def test_left_outside_chart(self, runs, n1, n2):
        assert runs.compute_left_tail_probability(n1, n2, 5) is None

    @pytest.mark.parametrize("n1, n2", [(13, 13), (9, 12), (10, 13)])
    def test_right_outside_chart(self, runs, n1, n2):
        assert runs.compute_right_tail_probability(n1, n2, 5) is None


# ═══════════════════════════════════════════════════════════════════════
# Normal approximation
# ═══════════════════════════════════════════════════════════════════════


class TestAsymptotic:

    def test_left_reference(self, runs):
        """n1 = n2 = 10: mean 11, variance 36000 / 7600."""
        expected = 0.5 * math.erfc(-(0.5 / math.sqrt(36000 / 7600)) / math.sqrt(2.0))
        assert runs.compute_asymptotic_left_tail_probability(10, 10, 11) == pytest.approx(expected, abs=1e-12)

    def test_tails_overlap_at_mean(self, runs):
        left = runs.compute_asymptotic_left_tail_probability(10, 10, 11)
        right = runs.compute_asymptotic_right_tail_probability(10, 10, 11)
        assert left == pytest.approx(right)
        assert left > 0.5

    def test_double_tail(self, runs):
        left = runs.compute_asymptotic_left_tail_probability(20, 25, 15)
        double = runs.compute_asymptotic_double_tail_probability(20, 25, 15)
        assert double == pytest.approx(2 * left)
        assert runs.compute_asymptotic_double_tail_probability(20, 25, 23) == 1.0

    def test_close_to_exact(self, runs):
        exact = runs.compute_left_tail_probability(12, 12, 8)
        approximate = runs.compute_asymptotic_left_tail_probability(12, 12, 8)
        assert approximate == pytest.approx(exact, abs=0.01)

    def test_degenerate_variance_warns(self, runs):
        with pytest.warns(RuntimeWarning):
            assert runs.compute_asymptotic_left_tail_probability(0, 6, 1) == ALL
