"""
Page's L distribution for ordered alternatives in a randomized block design.

L = sum_j j * R_j, where R_j is the rank sum of treatment j over k blocks
of n treatments. Under the null the ranks in every block are an independent
uniform permutation, so the exact distribution of L is the k-fold
convolution of the one-block distribution of sum_j j * pi(j).

The critical table covers k = 2..12 blocks and n = 3..8 treatments at the
levels 0.001, 0.01 and 0.05: the critical value at alpha is the smallest L
with P(L >= critical) <= alpha. Levels that no value of L reaches (very
small designs) are left undefined.

Reference
---------
Page, E. B. (1963). Ordered hypotheses for multiple treatments: a
significance test for linear ranks. JASA 58, 216-230.
"""

from __future__ import annotations

import math

import numpy as np

from pynpst.core.tolerances import EXACT
from pynpst.core.validation import check_finite, check_positive_int
from pynpst.exact._common import ExactDistribution
from pynpst.exact._permutations import rank_product_probabilities
from pynpst.tables import Critical2KeyTable

P_VALUES = (0.001, 0.01, 0.05)

MIN_TREATMENTS, MAX_TREATMENTS = 3, 8
MIN_BLOCKS, MAX_BLOCKS = 2, 12


class PageDistribution(ExactDistribution):
    """Exact and asymptotic p-values for Page's L statistic."""

    def _build_tables(self) -> None:
        # Indexed [blocks, treatments]
        self.table = Critical2KeyTable(MAX_BLOCKS + 1, MAX_TREATMENTS + 1, P_VALUES)
        for n in range(MIN_TREATMENTS, MAX_TREATMENTS + 1):
            block = rank_product_probabilities(n)
            pmf = block
            for k in range(2, MAX_BLOCKS + 1):
                pmf = np.convolve(pmf, block)
                self.table.add_row(k, n, self._critical_values(pmf))

    @staticmethod
    def _critical_values(pmf: np.ndarray) -> list[float | None]:
        # upper[l] = P(L >= l), non-increasing in l
        upper = np.cumsum(pmf[::-1])[::-1]
        criticals = []
        for alpha in P_VALUES:
            reached = np.flatnonzero(upper <= alpha * (1.0 + EXACT.rtol))
            criticals.append(float(reached[0]) if reached.size else None)
        return criticals

    def compute_exact_probability(self, n: int, k: int, L: float) -> float | None:
        """
        Smallest tabulated level at which L is significant.

        Parameters
        ----------
        n : int
            Number of treatments (3..8 tabulated).
        k : int
            Number of blocks (2..12 tabulated).
        L : float
            Page statistic.

        Returns
        -------
        float or None
            Level from P_VALUES, ALL (1.0) if L is below every critical
            value, None if (n, k) is outside the table.
        """
        n = check_positive_int(n, "n")
        k = check_positive_int(k, "k")
        L = check_finite(L, "L")
        if MIN_TREATMENTS <= n <= MAX_TREATMENTS and MIN_BLOCKS <= k <= MAX_BLOCKS:
            return self.table.estimate(k, n, L)
        return None

    def compute_asymptotic_probability(self, n: int, k: int, L: float) -> float:
        """Upper-tail normal approximation with continuity correction."""
        n = check_positive_int(n, "n")
        k = check_positive_int(k, "k")
        L = check_finite(L, "L")
        numerator = 12.0 * (L - 0.5) - 3.0 * k * n * (n + 1.0) ** 2
        scale = n * (n + 1.0)
        # z = numerator / (n (n+1) sqrt(k (n-1)))
        return self._normal_tail(numerator / scale, k * (n - 1.0), lower_tail=False)
