"""
Two-sample Kolmogorov-Smirnov distribution for equal sample sizes.

For two samples of size n the statistic D takes the values k / n. Under the
null the merged order is a uniformly random lattice path from (0, 0) to
(n, n), and D >= k / n exactly when the path touches |i - j| = k. Counting
the paths that stay strictly inside the band gives the exact tail
P(D >= k / n) for n = 1..20; the critical table holds, for each level, the
smallest k whose tail does not exceed it.

Beyond n = 20 the asymptotic critical values c_alpha * sqrt(2 / n) are used.
"""

from __future__ import annotations

import math

from pynpst.core.tolerances import EXACT
from pynpst.core.validation import check_finite, check_positive_int
from pynpst.exact._common import CriticalPValue, ExactDistribution, as_probability
from pynpst.tables import ALL, Critical1KeyTable, Incomplete2KeyTable

P_VALUES = (0.01, 0.02, 0.05, 0.10, 0.20)
ASYMPTOTIC = (1.63, 1.52, 1.36, 1.22, 1.07)

MAX_N = 20


def _paths_inside_band(n: int, k: int) -> int:
    """Monotone lattice paths (0, 0) -> (n, n) with |i - j| < k throughout."""
    row = [1 if j < k else 0 for j in range(n + 1)]
    for i in range(1, n + 1):
        previous, row = row, [0] * (n + 1)
        for j in range(n + 1):
            if abs(i - j) >= k:
                continue
            row[j] = previous[j] + (row[j - 1] if j > 0 else 0)
    return row[n]


def two_sample_ks_tail(n: int, k: int) -> float:
    """Exact P(D >= k / n) for two samples of size n."""
    n = check_positive_int(n, "n")
    if k <= 0:
        return 1.0
    inside = _paths_inside_band(n, k)
    return as_probability(1.0 - inside / math.comb(2 * n, n), "P(D >= k/n)")


def _lattice_steps(n: int, dn: float) -> int:
    """Smallest k with k / n >= dn, treating n * dn within EXACT of an integer as that integer."""
    scaled = n * dn
    nearest = round(scaled)
    if EXACT.matches(scaled, nearest):
        return int(nearest)
    return math.ceil(scaled)


class KolmogorovTwoSampleDistribution(ExactDistribution):
    """Exact tails and critical values of the two-sample KS statistic."""

    def _build_tables(self) -> None:
        # Indexed [n, k]
        self.exact_table = Incomplete2KeyTable(MAX_N + 1, MAX_N + 1)
        self.table = Critical1KeyTable(MAX_N + 1, P_VALUES)
        for n in range(1, MAX_N + 1):
            tails = [two_sample_ks_tail(n, k) for k in range(n + 1)]
            for k, tail in enumerate(tails):
                self.exact_table.add(n, k, tail)
            criticals = []
            for alpha in P_VALUES:
                reached = [k for k, tail in enumerate(tails) if tail <= alpha * (1.0 + EXACT.rtol)]
                criticals.append(float(reached[0]) if reached else None)
            self.table.add_row(n, criticals)

    def compute_exact_probability(self, n: int, dn: float) -> float | None:
        """
        Exact P(D >= dn) for two samples of size n <= 20.

        Returns None when n is beyond the table.
        """
        n = check_positive_int(n, "n")
        dn = check_finite(dn, "dn")
        if n > MAX_N:
            return None
        k = _lattice_steps(n, dn)
        if k <= 0:
            return 1.0
        if k > n:
            return 0.0
        return self.exact_table.get(n, k)

    def compute_probability(self, n: int, dn: float) -> CriticalPValue:
        """p-value bound for statistic dn on two samples of size n."""
        n = check_positive_int(n, "n")
        dn = check_finite(dn, "dn")

        if n <= MAX_N:
            return CriticalPValue(self.table.estimate(n, _lattice_steps(n, dn)), is_approximate=False)

        size = math.sqrt(2.0 / n)
        for column, constant in enumerate(ASYMPTOTIC):
            if dn >= constant * size:
                return CriticalPValue(self.table.get_header(column), is_approximate=True)
        return CriticalPValue(ALL, is_approximate=True)
