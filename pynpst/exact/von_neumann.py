"""
Rank von Neumann distributions.

For ranks r_1..r_n in time order, NM = sum (r_i - r_{i+1})^2 and the rank
version of the von Neumann ratio is

    RVN = NM / sum (r_i - (n+1)/2)^2 = 12 NM / (n (n^2 - 1))

Under randomness the ranks are a uniform permutation, so the exact
distribution of NM for n <= 10 comes from enumerating permutations.

NMDistribution charts, like the printed tables, the left tails P(NM <= x)
and right tails P(NM >= x) at attainable values x where the tail does not
exceed 0.5. A statistic falling between charted values is answered with
the nearest conservative entry and flagged approximate.

RVNDistribution holds lower critical values of RVN for n = 4..100 at the
levels 0.005..0.10: exact for n <= 10, and from Bartels' beta
approximation (RVN / 4 ~ Beta(a, a) with the exact variance of RVN) above.
Upper critical values are taken as 4 minus the lower ones, RVN being
symmetric about 2 in the limit.

Reference
---------
Bartels, R. (1982). The rank version of von Neumann's ratio test for
randomness. JASA 77, 40-46.
"""

from __future__ import annotations

import math

import numpy as np
from scipy import stats as sp_stats

from pynpst.core.tolerances import EXACT
from pynpst.core.validation import check_finite, check_positive_int
from pynpst.exact._common import CriticalPValue, ExactDistribution, as_probability
from pynpst.exact._permutations import squared_difference_counts
from pynpst.tables import ALL, Critical1KeyTable, Incomplete2KeyTable

P_VALUES = (0.005, 0.01, 0.025, 0.05, 0.10)

MIN_NM_N, MAX_NM_N = 3, 10
MIN_RVN_N, MAX_RVN_N = 4, 100
MAX_NM = (MAX_NM_N - 1) ** 3

# Tails above this are left out of the NM tables
_TAIL_LIMIT = 0.5


def _nm_distribution(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Attainable values of NM and their probabilities."""
    counts = squared_difference_counts(n)
    values = np.flatnonzero(counts)
    return values, counts[values] / math.factorial(n)


def rvn_variance(n: int) -> float:
    """Exact null variance of RVN (mean 2); zero below n = 3."""
    if n < 3:
        return 0.0
    return 4.0 * (n - 2) * (5.0 * n * n - 2.0 * n - 9.0) / (5.0 * n * (n + 1.0) * (n - 1.0) ** 2)


class NMDistribution(ExactDistribution):
    """Exact tails of the rank von Neumann NM statistic for n = 3..10."""

    def _build_tables(self) -> None:
        # Indexed [n, NM]
        self.table_left = Incomplete2KeyTable(MAX_NM_N + 1, MAX_NM + 1)
        self.table_right = Incomplete2KeyTable(MAX_NM_N + 1, MAX_NM + 1)
        for n in range(MIN_NM_N, MAX_NM_N + 1):
            values, pmf = _nm_distribution(n)
            left = np.cumsum(pmf)
            right = np.cumsum(pmf[::-1])[::-1]
            for value, lower, upper in zip(values, left, right):
                if lower <= _TAIL_LIMIT:
                    self.table_left.add(n, int(value), as_probability(lower, "P(NM <= x)"))
                if upper <= _TAIL_LIMIT:
                    self.table_right.add(n, int(value), as_probability(upper, "P(NM >= x)"))

    def compute_left_probability(self, n: int, nm: float) -> CriticalPValue | None:
        """
        P(NM <= nm), read at ceil(nm) or at the next charted value above it.

        Returns None when n is outside 3..10.
        """
        n = check_positive_int(n, "n")
        nm = check_finite(nm, "nm")
        if not MIN_NM_N <= n <= MAX_NM_N:
            return None
        start = max(math.ceil(nm), 0)
        for value in range(start, MAX_NM + 1):
            tail = self.table_left.get(n, value)
            if tail is not None:
                return CriticalPValue(tail, is_approximate=value != start)
        return CriticalPValue(ALL, is_approximate=True)

    def compute_right_probability(self, n: int, nm: float) -> CriticalPValue | None:
        """
        P(NM >= nm), read at floor(nm) or at the next charted value below it.

        Returns None when n is outside 3..10.
        """
        n = check_positive_int(n, "n")
        nm = check_finite(nm, "nm")
        if not MIN_NM_N <= n <= MAX_NM_N:
            return None
        start = min(math.floor(nm), MAX_NM)
        for value in range(start, -1, -1):
            tail = self.table_right.get(n, value)
            if tail is not None:
                return CriticalPValue(tail, is_approximate=value != start)
        return CriticalPValue(ALL, is_approximate=True)


class RVNDistribution(ExactDistribution):
    """Critical values of the rank von Neumann ratio for n = 4..100."""

    def _build_tables(self) -> None:
        # Stored as 4 - lower critical value, so values fall along the headers
        self.table = Critical1KeyTable(MAX_RVN_N + 1, P_VALUES)
        for n in range(MIN_RVN_N, MAX_RVN_N + 1):
            if n <= MAX_NM_N:
                lower = self._exact_lower_criticals(n)
            else:
                a = (4.0 / rvn_variance(n) - 1.0) / 2.0
                lower = list(4.0 * sp_stats.beta.ppf(P_VALUES, a, a))
            self.table.add_row(n, [None if v is None else 4.0 - v for v in lower])

    @staticmethod
    def _exact_lower_criticals(n: int) -> list[float | None]:
        values, pmf = _nm_distribution(n)
        rvn = 12.0 * values / (n * (n * n - 1.0))
        left = np.cumsum(pmf)
        criticals = []
        for alpha in P_VALUES:
            reached = np.flatnonzero(left <= alpha * (1.0 + EXACT.rtol))
            criticals.append(float(rvn[reached[-1]]) if reached.size else None)
        return criticals

    def compute_left_probability(self, n: int, rvn: float) -> CriticalPValue | None:
        """
        p-value bound for small RVN (positive serial correlation).

        Returns None when n is outside 4..100 or no level is tabulated.
        """
        n, rvn = self._check(n, rvn)
        if not self.table.is_defined(n):
            return None
        p_value = self.table.estimate(n, 4.0 - rvn + EXACT.atol)
        return CriticalPValue(p_value, is_approximate=n > MAX_NM_N)

    def compute_right_probability(self, n: int, rvn: float) -> CriticalPValue | None:
        """
        p-value bound for large RVN (negative serial correlation).

        Returns None when n is outside 4..100 or no level is tabulated.
        """
        n, rvn = self._check(n, rvn)
        if not self.table.is_defined(n):
            return None
        p_value = self.table.estimate(n, rvn + EXACT.atol)
        return CriticalPValue(p_value, is_approximate=n > MAX_NM_N)

    def compute_asymptotic_left_tail_probability(self, n: int, rvn: float) -> float:
        n, rvn = self._check(n, rvn)
        return self._normal_tail(rvn - 2.0, rvn_variance(n), lower_tail=True)

    def compute_asymptotic_right_tail_probability(self, n: int, rvn: float) -> float:
        n, rvn = self._check(n, rvn)
        return self._normal_tail(rvn - 2.0, rvn_variance(n), lower_tail=False)

    @staticmethod
    def _check(n: int, rvn: float) -> tuple[int, float]:
        return check_positive_int(n, "n"), check_finite(rvn, "rvn")
