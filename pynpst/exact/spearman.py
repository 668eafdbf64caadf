"""
Spearman's rank correlation distribution.

For n = 2..10 the exact upper tail P(rho >= r) is tabulated for every
attainable r >= 0, keyed by the value of r itself and looked up with the
approximate-key table (attainable values of rho are more than 2 * EPSILON
apart). For n = 11..30 a critical table holds the upper critical values of
rho at the levels 0.001..0.10 from the t approximation

    t = r sqrt((n - 2) / (1 - r^2)) ~ t(n - 2),  so  r = t / sqrt(n - 2 + t^2)

Larger samples use z = rho * sqrt(n - 1).
"""

from __future__ import annotations

import math

import numpy as np
from scipy import stats as sp_stats

from pynpst.core.tolerances import EXACT
from pynpst.core.validation import check_finite, check_positive_int
from pynpst.exact._common import CriticalPValue, ExactDistribution
from pynpst.exact._permutations import rank_product_probabilities
from pynpst.tables import Approximate1KeyTable, Critical1KeyTable

MIN_N, MAX_N = 2, 10
ROW_CAPACITY = 85

P_VALUES = (0.001, 0.005, 0.01, 0.025, 0.05, 0.10)
MAX_CRITICAL_N = 30


class SpearmanDistribution(ExactDistribution):
    """Exact and asymptotic p-values for Spearman's rho."""

    def _build_tables(self) -> None:
        self.exact_table = Approximate1KeyTable(MAX_N + 1, ROW_CAPACITY)
        for n in range(MIN_N, MAX_N + 1):
            rho, upper = self._upper_tail(n)
            keep = rho >= 0.0
            self.exact_table.add_row(n, rho[keep], upper[keep])

        self.critical_table = Critical1KeyTable(MAX_CRITICAL_N + 1, P_VALUES)
        for n in range(MAX_N + 1, MAX_CRITICAL_N + 1):
            t = sp_stats.t.isf(P_VALUES, n - 2)
            self.critical_table.add_row(n, t / np.sqrt(n - 2 + t * t))

    @staticmethod
    def _upper_tail(n: int) -> tuple[np.ndarray, np.ndarray]:
        pmf = rank_product_probabilities(n)
        products = np.flatnonzero(pmf)
        # sum d^2 = 2 * (sum j^2 - sum j * pi(j))
        squares = n * (n + 1) * (2 * n + 1) / 6.0
        rho = 1.0 - 12.0 * (squares - products) / (n * (n * n - 1.0))
        # rho grows with the rank product; P(rho >= r) is the upper tail
        upper = np.cumsum(pmf[products][::-1])[::-1]
        return rho, np.minimum(upper, 1.0)

    def compute_exact_probability(self, n: int, rho: float) -> float | None:
        """
        P(rho_n >= |rho|) under independence, for n = 2..10.

        Returns None when n is outside the table or |rho| is not an
        attainable value (within EPSILON).
        """
        n = check_positive_int(n, "n")
        rho = abs(check_finite(rho, "rho"))
        if not MIN_N <= n <= MAX_N:
            return None
        return self.exact_table.get(n, rho)

    def compute_asymptotic_probability(self, n: int, rho: float, upper_tail: bool = True) -> float:
        """Normal approximation with z = rho * sqrt(n - 1)."""
        n = check_positive_int(n, "n")
        rho = check_finite(rho, "rho")
        z = rho * math.sqrt(n - 1.0)
        return self._normal.tipified_probability(z, lower_tail=not upper_tail)

    def compute_critical_probability(self, n: int, rho: float) -> CriticalPValue | None:
        """
        p-value bound for |rho| from the critical table, for n = 11..30.

        Returns None outside that range.
        """
        n = check_positive_int(n, "n")
        rho = abs(check_finite(rho, "rho"))
        if not MAX_N < n <= MAX_CRITICAL_N:
            return None
        p_value = self.critical_table.estimate(n, rho + EXACT.atol)
        return CriticalPValue(p_value, is_approximate=True)
