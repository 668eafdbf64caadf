"""
Wilcoxon signed-rank distribution.

Under the null every rank 1..n carries a positive sign independently with
probability 1/2, so the number of sign patterns giving T+ = t is the number
of subsets of {1, ..., n} summing to t. The table holds the exact
double-tail p-values min(2 P(T+ <= t), 1) for n = 1..50 and every t in the
lower half of the support; the upper half follows by symmetry.

Beyond the table the normal approximation with mean n(n+1)/4, variance
n(n+1)(2n+1)/24 - ties/48 and a continuity correction is used, where ties
is sum(t^3 - t) over the groups of tied absolute differences.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from pynpst.core.exceptions import ValidationError
from pynpst.core.validation import check_finite, check_positive_int
from pynpst.exact._common import ExactDistribution, as_probability
from pynpst.tables import ALL, Incomplete2KeyTable

MAX_N = 50
MAX_R = MAX_N * (MAX_N + 1) // 4


def signed_rank_counts(n: int) -> NDArray[np.float64]:
    """
    Number of subsets of {1, ..., n} for each sum t = 0..n(n+1)/2.

    The counts sum to 2**n; they are exact in double precision for n <= 52.
    """
    n = check_positive_int(n, "n")
    max_sum = n * (n + 1) // 2
    counts = np.zeros(max_sum + 1, dtype=np.float64)
    counts[0] = 1.0
    for rank in range(1, n + 1):
        # The right-hand side is built first, so each rank is used once
        counts[rank:] = counts[rank:] + counts[:-rank]
    return counts


class WilcoxonDistribution(ExactDistribution):
    """Exact and asymptotic p-values for the Wilcoxon signed-rank statistic."""

    def _build_tables(self) -> None:
        # Indexed [n, t]
        self.table = Incomplete2KeyTable(MAX_N + 1, MAX_R + 1)
        for n in range(1, MAX_N + 1):
            lower = np.cumsum(signed_rank_counts(n)) / 2.0 ** n
            for t in range(n * (n + 1) // 4 + 1):
                double = as_probability(2.0 * lower[t], "2 P(T+ <= t)")
                self.table.add(n, t, double)

    def compute_exact_probability(self, n: int, R: float) -> float | None:
        """
        Exact double-tail p-value of the signed-rank sum R, for n <= 50.

        A midrank sum (R not an integer) averages the p-values of the two
        neighbouring integers. Returns None when n is beyond the table.
        """
        n = check_positive_int(n, "n")
        R = check_finite(R, "R")
        if n > MAX_N:
            return None
        if math.floor(R) == R:
            return self._lookup(n, int(R))
        return 0.5 * (self._lookup(n, math.floor(R)) + self._lookup(n, math.ceil(R)))

    def _lookup(self, n: int, t: int) -> float:
        total = n * (n + 1) // 2
        t = min(t, total - t)
        if t < 0:
            return 0.0
        value = self.table.get(n, t)
        return ALL if value is None else value

    def compute_asymptotic_left_tail_probability(self, n: int, R: float, ties: float = 0.0) -> float:
        mean, variance = self._moments(n, ties)
        return self._normal_tail(check_finite(R, "R") + 0.5 - mean, variance, lower_tail=True)

    def compute_asymptotic_right_tail_probability(self, n: int, R: float, ties: float = 0.0) -> float:
        mean, variance = self._moments(n, ties)
        return self._normal_tail(check_finite(R, "R") - 0.5 - mean, variance, lower_tail=False)

    def compute_asymptotic_double_tail_probability(self, n: int, R: float, ties: float = 0.0) -> float:
        left = self.compute_asymptotic_left_tail_probability(n, R, ties)
        right = self.compute_asymptotic_right_tail_probability(n, R, ties)
        return min(2.0 * min(left, right), 1.0)

    @staticmethod
    def _moments(n: int, ties: float) -> tuple[float, float]:
        n = check_positive_int(n, "n")
        ties = check_finite(ties, "ties")
        if ties < 0.0:
            raise ValidationError(f"ties: must be >= 0, got {ties}")
        mean = n * (n + 1) / 4.0
        variance = n * (n + 1) * (2 * n + 1) / 24.0 - ties / 48.0
        return mean, variance
