"""
Kolmogorov distribution: critical values of the one-sample two-sided
Kolmogorov-Smirnov statistic D_n with a fully specified null.

The table for n = 1..40 holds the exact quantiles of D_n from
scipy.stats.kstwo; larger samples use the classical c_alpha / sqrt(n).
"""

from __future__ import annotations

import math

from scipy import stats as sp_stats

from pynpst.core.validation import check_finite, check_non_negative_int
from pynpst.exact._common import CriticalPValue, ExactDistribution
from pynpst.tables import ALL, Critical1KeyTable

P_VALUES = (0.01, 0.02, 0.05, 0.10, 0.20)
ASYMPTOTIC = (1.63, 1.52, 1.36, 1.22, 1.07)

MAX_N = 40


class KolmogorovDistribution(ExactDistribution):
    """Critical values of the one-sample Kolmogorov-Smirnov statistic."""

    def _build_tables(self) -> None:
        self.table = Critical1KeyTable(MAX_N + 1, P_VALUES)
        for n in range(1, MAX_N + 1):
            self.table.add_row(n, sp_stats.kstwo.isf(P_VALUES, n))

    def compute_probability(self, n: int, dn: float) -> CriticalPValue:
        """p-value bound for statistic dn on a sample of size n."""
        n = check_non_negative_int(n, "n")
        dn = check_finite(dn, "dn")

        if n == 0:
            return CriticalPValue(ALL, is_approximate=True)
        if n <= MAX_N:
            return CriticalPValue(self.table.estimate(n, dn), is_approximate=False)

        root = math.sqrt(n)
        for column, constant in enumerate(ASYMPTOTIC):
            if dn >= constant / root:
                return CriticalPValue(self.table.get_header(column), is_approximate=True)
        return CriticalPValue(ALL, is_approximate=True)
