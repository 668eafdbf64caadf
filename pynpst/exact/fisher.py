"""
Fisher's exact test distribution for a 2x2 table.

With margins fixed (N observations, n1 in the first row, n2 in the second
and Y in the first column), the count n00 of the top-left cell is
hypergeometric:

    P(n00 = i) = C(n1, i) C(n2, Y - i) / C(N, Y)

The left and right exact probabilities sum this mass from n00 up to n1 and
from 0 up to n00. The asymptotic probability is the chi-square cumulative
probability of the Pearson statistic Q.
"""

from __future__ import annotations

from scipy import stats as sp_stats

from pynpst.core.exceptions import ValidationError
from pynpst.core.validation import check_finite, check_non_negative_int, check_positive_int
from pynpst.distributions import ChiSquareDistribution
from pynpst.exact._common import ExactDistribution, as_probability


class FisherDistribution(ExactDistribution):
    """Hypergeometric tails and chi-square approximation for 2x2 tables."""

    def _build_tables(self) -> None:
        # Closed form, nothing to tabulate
        pass

    def compute_left_exact_probability(self, N: int, n1: int, n2: int, Y: int, n00: int) -> float:
        """P(X >= n00): sum of C(n1, i) C(n2, Y - i) / C(N, Y) for i = n00..n1."""
        N, n1, Y, n00 = self._check(N, n1, n2, Y, n00)
        tail = sp_stats.hypergeom.sf(n00 - 1, N, n1, Y)
        return as_probability(float(tail), "P(X >= n00)")

    def compute_right_exact_probability(self, N: int, n1: int, n2: int, Y: int, n00: int) -> float:
        """P(X <= n00): sum of C(n1, i) C(n2, Y - i) / C(N, Y) for i = 0..n00."""
        N, n1, Y, n00 = self._check(N, n1, n2, Y, n00)
        tail = sp_stats.hypergeom.cdf(n00, N, n1, Y)
        return as_probability(float(tail), "P(X <= n00)")

    def compute_asymptotic_probability(self, Q: float, freedom: int = 1) -> float:
        """Chi-square cumulative probability P(X^2 <= Q); the p-value is its complement."""
        Q = check_finite(Q, "Q")
        freedom = check_positive_int(freedom, "freedom")
        return ChiSquareDistribution(freedom).compute_cumulative_probability(Q)

    @staticmethod
    def _check(N: int, n1: int, n2: int, Y: int, n00: int) -> tuple[int, int, int, int]:
        N = check_non_negative_int(N, "N")
        n1 = check_non_negative_int(n1, "n1")
        n2 = check_non_negative_int(n2, "n2")
        Y = check_non_negative_int(Y, "Y")
        n00 = check_non_negative_int(n00, "n00")
        if n1 + n2 != N:
            raise ValidationError(f"n1 + n2 must equal N, got {n1} + {n2} != {N}")
        if Y > N:
            raise ValidationError(f"Y: must be <= N ({N}), got {Y}")
        return N, n1, Y, n00
