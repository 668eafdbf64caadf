"""
Distribution of the total number of runs in a two-group sequence.

With n1 items of one kind and n2 of the other arranged at random, the
number of runs R has the closed form

    P(R = 2m)     = 2 C(n1-1, m-1) C(n2-1, m-1) / C(n1+n2, n1)
    P(R = 2m + 1) = [C(n1-1, m) C(n2-1, m-1) + C(n1-1, m-1) C(n2-1, m)] / C(n1+n2, n1)

Two incomplete tables hold the left tails P(R <= r) and the right tails
P(R >= r) that do not exceed 0.5, for the charted region of group sizes;
a missing tail is recovered as the complement of the opposite table.
Outside the charted region callers use the normal approximation.
"""

from __future__ import annotations

import math
from fractions import Fraction

from pynpst.core.validation import check_non_negative_int
from pynpst.exact._common import ExactDistribution
from pynpst.tables import ALL, Incomplete3KeyTable

MAX_N1 = 12
MAX_N2 = 19
MAX_RUNS = 2 * MAX_N1 + 1

# Tails above this are left out of the tables, as in printed charts
_TAIL_LIMIT = 0.5


def _comb(m: int, k: int) -> int:
    if m < 0 or k < 0 or k > m:
        return 0
    return math.comb(m, k)


def runs_probabilities(n1: int, n2: int) -> list[Fraction]:
    """Exact P(R = r) for r = 0..n1+n2."""
    n = n1 + n2
    probabilities = [Fraction(0)] * (n + 1)
    if n == 0:
        return probabilities
    if n1 == 0 or n2 == 0:
        probabilities[1] = Fraction(1)
        return probabilities

    total = math.comb(n, n1)
    for r in range(2, n + 1):
        m = r // 2
        if r % 2 == 0:
            count = 2 * _comb(n1 - 1, m - 1) * _comb(n2 - 1, m - 1)
        else:
            count = (_comb(n1 - 1, m) * _comb(n2 - 1, m - 1)
                     + _comb(n1 - 1, m - 1) * _comb(n2 - 1, m))
        probabilities[r] = Fraction(count, total)
    return probabilities


def _left_charted(n1: int, n2: int) -> bool:
    return not (n1 > 12 or (n1 < 9 and n1 + n2 > 20) or (n1 > 8 and n2 > 12))


def _right_charted(n1: int, n2: int) -> bool:
    return not (n1 > 12 or (n1 < 10 and n1 + n2 > 20) or (n1 > 9 and n2 > 12))


class TotalNumberOfRunsDistribution(ExactDistribution):
    """Exact and asymptotic tail probabilities of the number of runs."""

    def _build_tables(self) -> None:
        shape = (MAX_N1 + 1, MAX_N2 + 1, MAX_RUNS + 2)
        self.table_left = Incomplete3KeyTable(*shape)
        self.table_right = Incomplete3KeyTable(*shape)

        for n1 in range(1, MAX_N1 + 1):
            for n2 in range(n1, MAX_N2 + 1):
                if not (_left_charted(n1, n2) or _right_charted(n1, n2)):
                    continue
                probabilities = runs_probabilities(n1, n2)
                left = Fraction(0)
                right = Fraction(1)
                for r, probability in enumerate(probabilities):
                    left += probability
                    if left <= _TAIL_LIMIT:
                        self.table_left.add(n1, n2, r, float(left))
                    if right <= _TAIL_LIMIT:
                        self.table_right.add(n1, n2, r, float(right))
                    right -= probability
                # P(R >= n + 1) = 0
                self.table_right.add(n1, n2, len(probabilities), 0.0)

    def compute_left_tail_probability(self, n1: int, n2: int, runs: int) -> float | None:
        """
        Exact P(R <= runs).

        Returns None outside the charted group sizes and ALL when neither
        table charts the requested tail.
        """
        a, b, runs = self._check(n1, n2, runs)
        if not _left_charted(a, b):
            return None
        left = self.table_left.get(a, b, runs)
        if left is not None:
            return left
        right = self.table_right.get(a, b, runs + 1)
        if right is None:
            return ALL
        return 1.0 - right

    def compute_right_tail_probability(self, n1: int, n2: int, runs: int) -> float | None:
        """
        Exact P(R >= runs).

        Returns None outside the charted group sizes and ALL when neither
        table charts the requested tail.
        """
        a, b, runs = self._check(n1, n2, runs)
        if not _right_charted(a, b):
            return None
        if runs > a + b:
            return 0.0
        right = self.table_right.get(a, b, runs)
        if right is not None:
            return right
        left = self.table_left.get(a, b, runs - 1)
        if left is None:
            return ALL
        return 1.0 - left

    def compute_asymptotic_left_tail_probability(self, n1: int, n2: int, runs: int) -> float:
        mean, variance = self._moments(n1, n2)
        return self._normal_tail(runs + 0.5 - mean, variance, lower_tail=True)

    def compute_asymptotic_right_tail_probability(self, n1: int, n2: int, runs: int) -> float:
        mean, variance = self._moments(n1, n2)
        return self._normal_tail(runs - 0.5 - mean, variance, lower_tail=False)

    def compute_asymptotic_double_tail_probability(self, n1: int, n2: int, runs: int) -> float:
        left = self.compute_asymptotic_left_tail_probability(n1, n2, runs)
        right = self.compute_asymptotic_right_tail_probability(n1, n2, runs)
        return min(2.0 * min(left, right), 1.0)

    @staticmethod
    def _check(n1: int, n2: int, runs: int) -> tuple[int, int, int]:
        n1 = check_non_negative_int(n1, "n1")
        n2 = check_non_negative_int(n2, "n2")
        runs = check_non_negative_int(runs, "runs")
        return min(n1, n2), max(n1, n2), runs

    @staticmethod
    def _moments(n1: int, n2: int) -> tuple[float, float]:
        n1 = check_non_negative_int(n1, "n1")
        n2 = check_non_negative_int(n2, "n2")
        n = float(n1 + n2)
        product = 2.0 * n1 * n2
        mean = 1.0 + product / n if n > 0 else 0.0
        variance = product * (product - n) / (n * n * (n - 1.0)) if n > 1 else 0.0
        return mean, variance
