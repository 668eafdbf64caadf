"""
Distribution of the Charkraborti-Desu W statistic.

W counts the observations of the pooled sample that precede the first
block (of `length` observations) of a control sample, for N observations
from `populations` samples. Under the null

    P(W = w) = (length / N) C(N - length, w) C(length - 1, populations - 1)
               / C(N - 1, w + populations - 1)

The exact p-value is the lower tail P(W <= w); the asymptotic one is the
normal approximation with continuity correction.
"""

from __future__ import annotations

import math

from pynpst.core.validation import check_finite, check_non_negative_int, check_positive_int
from pynpst.distributions import log_combinatorial
from pynpst.exact._common import ExactDistribution, as_probability


class CDDistribution(ExactDistribution):
    """Exact and asymptotic p-values for the Charkraborti-Desu test."""

    def _build_tables(self) -> None:
        # Closed form, nothing to tabulate
        pass

    def compute_point_probability(self, w: int, n: int, populations: int, length: int) -> float:
        """P(W = w)."""
        w, n, populations, length = self._check(w, n, populations, length)
        log_p = (
            math.log(length / n)
            + log_combinatorial(n - length, w)
            + log_combinatorial(length - 1, populations - 1)
            - log_combinatorial(n - 1, w + populations - 1)
        )
        if math.isnan(log_p):
            return 0.0
        return math.exp(log_p)

    def compute_exact_probability(self, w: int, n: int, populations: int, length: int) -> float:
        """P(W <= w) by summing the point probabilities."""
        w, n, populations, length = self._check(w, n, populations, length)
        total = sum(
            self.compute_point_probability(j, n, populations, length)
            for j in range(w + 1)
        )
        return as_probability(total, "P(W <= w)")

    def compute_asymptotic_probability(self, w: float, n: int, populations: int, length: int) -> float:
        """Lower-tail normal approximation with continuity correction."""
        _, n, populations, length = self._check(0, n, populations, length)
        w = check_finite(w, "w")
        mean = (n - length) * populations / (length + 1.0)
        variance = (
            populations * (length - populations + 1.0) * (n + 1.0) * (n - length)
            / ((length + 1.0) ** 2 * (length + 2.0))
        )
        return self._normal_tail(w - mean + 0.5, variance, lower_tail=True)

    @staticmethod
    def _check(w: int, n: int, populations: int, length: int) -> tuple[int, int, int, int]:
        return (
            check_non_negative_int(w, "w"),
            check_positive_int(n, "n"),
            check_positive_int(populations, "populations"),
            check_positive_int(length, "length"),
        )
