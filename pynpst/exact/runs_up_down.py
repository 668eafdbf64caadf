"""
Distribution of the number of runs up and down in a sequence of n distinct
values.

The number of permutations of 1..n with r runs up and down satisfies
(Andre's recurrence)

    f(n, r) = r f(n-1, r) + 2 f(n-1, r-1) + (n - r) f(n-1, r-2),  f(2, 1) = 2

and P(R = r) = f(n, r) / n!. For n = 3..25 the table holds the left tail
P(R <= r) for r up to LEFT_LIMITS[n] and the right tail P(R >= r) above it,
as in the printed charts; a query for the tail on the other side of that
split reports ALL.
"""

from __future__ import annotations

import math

from pynpst.core.validation import check_finite, check_non_negative_int
from pynpst.exact._common import ExactDistribution
from pynpst.tables import ALL, Incomplete2KeyTable

MIN_N, MAX_N = 3, 25

# Largest r charted as a left tail, indexed by n
LEFT_LIMITS = (0, 0, 0, 1, 1, 2, 3, 3, 4, 5, 5, 6, 7, 7, 8,
               9, 9, 10, 11, 11, 12, 13, 13, 14, 15, 15)


def runs_up_down_counts(n: int) -> list[int]:
    """f(n, r) for r = 0..n-1: permutations of 1..n with r runs up and down."""
    counts = [0, 2]
    for m in range(3, n + 1):
        previous = counts + [0, 0]
        counts = [0] * m
        for r in range(1, m):
            counts[r] = (r * previous[r]
                         + 2 * previous[r - 1]
                         + (m - r) * (previous[r - 2] if r >= 2 else 0))
    return counts


class RunsUpDownDistribution(ExactDistribution):
    """Exact and asymptotic tail probabilities of runs up and down."""

    def _build_tables(self) -> None:
        self.table = Incomplete2KeyTable(MAX_N + 1, MAX_N)
        for n in range(MIN_N, MAX_N + 1):
            counts = runs_up_down_counts(n)
            total = math.factorial(n)
            limit = LEFT_LIMITS[n]
            for r in range(1, n):
                if r <= limit:
                    tail = sum(counts[:r + 1])
                else:
                    tail = sum(counts[r:])
                self.table.add(n, r, tail / total)

    def compute_exact_probability(self, n: int, runs: int, left_tail: bool) -> float | None:
        """
        Exact tail probability of the number of runs up and down.

        Parameters
        ----------
        n : int
            Sequence length (3..25 tabulated).
        runs : int
            Observed number of runs (1..n-1).
        left_tail : bool
            True for P(R <= runs), False for P(R >= runs).

        Returns
        -------
        float or None
            None outside the table, ALL when the requested tail lies on
            the other side of the charted split.
        """
        n = check_non_negative_int(n, "n")
        runs = check_non_negative_int(runs, "runs")
        if n < MIN_N or n > MAX_N or runs >= n or runs < 1:
            return None
        if left_tail and runs > LEFT_LIMITS[n]:
            return ALL
        if not left_tail and runs <= LEFT_LIMITS[n]:
            return ALL
        return self.table.get(n, runs)

    def compute_asymptotic_left_tail_probability(self, n: int, runs: float) -> float:
        mean, variance = self._moments(n)
        runs = check_finite(runs, "runs")
        return self._normal_tail(runs + 0.5 - mean, variance, lower_tail=True)

    def compute_asymptotic_right_tail_probability(self, n: int, runs: float) -> float:
        mean, variance = self._moments(n)
        runs = check_finite(runs, "runs")
        return self._normal_tail(runs - 0.5 - mean, variance, lower_tail=False)

    def compute_asymptotic_double_tail_probability(self, n: int, runs: float) -> float:
        left = self.compute_asymptotic_left_tail_probability(n, runs)
        right = self.compute_asymptotic_right_tail_probability(n, runs)
        return min(2.0 * min(left, right), 1.0)

    @staticmethod
    def _moments(n: int) -> tuple[float, float]:
        n = check_non_negative_int(n, "n")
        return (2.0 * n - 1.0) / 3.0, (16.0 * n - 29.0) / 90.0
