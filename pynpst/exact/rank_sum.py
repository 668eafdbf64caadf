"""
Wilcoxon rank-sum distribution.

W is the rank sum of a sample of size n within the pooled ranks 1..n+m.
Under the null every n-subset of ranks is equally likely, so the exact
distribution is obtained by counting n-subsets of {1, ..., n+m} by their
sum. The table holds the left tails P(W <= w) for n, m = 1..10 and w up to
floor(n(n+m+1)/2), the lower half of the support; right tails follow from
the symmetry of W about n(n+m+1)/2.

The same table yields the Mann-Whitney critical count used for the
Hodges-Lehmann confidence interval of a location shift.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from pynpst.core.validation import check_finite, check_non_negative_int, check_positive_int, check_probability
from pynpst.exact._common import ExactDistribution, as_probability
from pynpst.tables import Incomplete3KeyTable

MAX_N = 10
MAX_W = MAX_N * (2 * MAX_N + 1) // 2


def rank_sum_counts(n: int, m: int) -> NDArray[np.float64]:
    """
    Number of n-subsets of {1, ..., n+m} for each sum w = 0..n(2m+n+1)/2.

    The counts sum to C(n+m, n).
    """
    n = check_positive_int(n, "n")
    m = check_non_negative_int(m, "m")
    max_sum = n * (2 * m + n + 1) // 2
    # counts[k, w]: k-subsets of the ranks seen so far with sum w
    counts = np.zeros((n + 1, max_sum + 1), dtype=np.float64)
    counts[0, 0] = 1.0
    for rank in range(1, n + m + 1):
        for k in range(min(rank, n), 0, -1):
            counts[k, rank:] += counts[k - 1, :max_sum + 1 - rank]
    return counts[n]


class WilcoxonRankSumDistribution(ExactDistribution):
    """Exact tails of the Wilcoxon rank-sum statistic for small samples."""

    def _build_tables(self) -> None:
        # Indexed [n, m, w]
        self.table = Incomplete3KeyTable(MAX_N + 1, MAX_N + 1, MAX_W + 1)
        for n in range(1, MAX_N + 1):
            for m in range(1, MAX_N + 1):
                lower = np.cumsum(rank_sum_counts(n, m)) / math.comb(n + m, n)
                for w in range(self._half(n, m) + 1):
                    self.table.add(n, m, w, as_probability(lower[w], "P(W <= w)"))

    @staticmethod
    def _half(n: int, m: int) -> int:
        return n * (n + m + 1) // 2

    @staticmethod
    def _in_table(n: int, m: int) -> bool:
        return 1 <= n <= MAX_N and 1 <= m <= MAX_N

    def compute_left_probability(self, n: int, m: int, R: float) -> float | None:
        """
        P(W <= R) for the rank sum of the sample of size n.

        Returns None when n or m exceeds 10 or R lies above the middle of
        the support (take the complement of the right tail there).
        """
        n = check_positive_int(n, "n")
        m = check_positive_int(m, "m")
        w = math.floor(check_finite(R, "R"))
        if not self._in_table(n, m):
            return None
        if w < 0:
            return 0.0
        return self.table.get(n, m, w)

    def compute_right_probability(self, n: int, m: int, R: float) -> float | None:
        """
        P(W >= R) for the rank sum of the sample of size n.

        Returns None when n or m exceeds 10 or R does not lie above the
        middle of the support.
        """
        n = check_positive_int(n, "n")
        m = check_positive_int(m, "m")
        w = math.ceil(check_finite(R, "R"))
        if not self._in_table(n, m) or w <= self._half(n, m):
            return None
        reflected = n * (n + m + 1) - w
        if reflected < 0:
            return 0.0
        return self.table.get(n, m, reflected)

    def find_critical_value(self, n: int, m: int, alpha: float) -> int | None:
        """
        Mann-Whitney critical count for a two-sided level alpha.

        Smallest u with P(U <= u) >= alpha / 2, where U = W - m(m+1)/2 is
        the Mann-Whitney count of the sample of size m. The confidence
        interval for the shift runs from the u-th smallest to the u-th
        largest pairwise difference. Returns None outside the table.
        """
        n = check_positive_int(n, "n")
        m = check_positive_int(m, "m")
        alpha = check_probability(alpha, "alpha")
        if not self._in_table(n, m):
            return None
        minimum = m * (m + 1) // 2
        for u in range(self._half(m, n) - minimum + 1):
            if self.table.get(m, n, minimum + u) >= alpha / 2.0:
                return u
        return None

    def inverse_find_critical_value(self, n: int, m: int, u: int) -> float | None:
        """
        Two-sided level attained by the critical count u: 2 P(U <= u - 1).

        Returns None outside the table.
        """
        n = check_positive_int(n, "n")
        m = check_positive_int(m, "m")
        u = check_non_negative_int(u, "u")
        if not self._in_table(n, m):
            return None
        if u == 0:
            return 0.0
        lower = self.table.get(m, n, m * (m + 1) // 2 + u - 1)
        if lower is None:
            return None
        return min(2.0 * lower, 1.0)
