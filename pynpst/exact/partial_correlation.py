"""
Kendall partial rank correlation distribution.

The partial tau of X and Y given Z is

    tau_xy.z = (tau_xy - tau_xz tau_yz) / sqrt((1 - tau_xz^2) (1 - tau_yz^2))

The critical table holds upper critical values of tau_xy.z at the levels
0.005..0.05 for m = 3..30. For m <= 6 they come from the exact null
distribution: with Z fixed in natural order, X and Y run over all pairs
of permutations, and samples where the statistic is undefined (X or Y
perfectly ordered by Z) are left out. For larger m the partial tau is
taken as normal with the variance of Kendall's tau, 2(2m + 5) / (9m(m - 1)),
and results are flagged approximate.

Reference
---------
Maghsoodloo, S. (1975). Estimates of the quantiles of Kendall's partial
rank correlation coefficient. J. Statist. Comput. Simul. 4, 155-164.
"""

from __future__ import annotations

import itertools
import math

import numpy as np

from pynpst.core.tolerances import EXACT
from pynpst.core.validation import check_finite, check_positive_int
from pynpst.exact._common import CriticalPValue, ExactDistribution
from pynpst.tables import Critical1KeyTable

P_VALUES = (0.005, 0.01, 0.025, 0.05)

MIN_M, MAX_M = 3, 30
MAX_EXACT_M = 6

# Partial tau values closer than this are the same attainable value
_DECIMALS = 9


def partial_tau_distribution(m: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Attainable values of Kendall's partial tau for m items and their null
    probabilities, conditional on the statistic being defined.
    """
    m = check_positive_int(m, "m")
    permutations = np.array(list(itertools.permutations(range(m))))
    first, second = np.triu_indices(m, 1)
    signs = np.sign(permutations[:, second] - permutations[:, first]).astype(np.float64)
    pairs = float(first.size)

    tau_z = signs.sum(axis=1) / pairs
    tau_xy = signs @ signs.T / pairs
    tau_xz = tau_z[:, np.newaxis]
    tau_yz = tau_z[np.newaxis, :]
    denominator = np.sqrt((1.0 - tau_xz ** 2) * (1.0 - tau_yz ** 2))

    defined = np.broadcast_to(denominator > 0.0, tau_xy.shape)
    numerator = tau_xy - tau_xz * tau_yz
    partial = numerator[defined] / np.broadcast_to(denominator, tau_xy.shape)[defined]

    values, counts = np.unique(np.round(partial, _DECIMALS), return_counts=True)
    return values, counts / counts.sum()


class PartialCorrelationDistribution(ExactDistribution):
    """Critical values of Kendall's partial tau."""

    def _build_tables(self) -> None:
        self.table = Critical1KeyTable(MAX_M + 1, P_VALUES)
        for m in range(MIN_M, MAX_EXACT_M + 1):
            self.table.add_row(m, self._exact_criticals(m))
        for m in range(MAX_EXACT_M + 1, MAX_M + 1):
            sd = math.sqrt(2.0 * (2 * m + 5) / (9.0 * m * (m - 1)))
            self.table.add_row(
                m, [self._normal.inverse_normal_distribution(1.0 - alpha) * sd for alpha in P_VALUES]
            )

    @staticmethod
    def _exact_criticals(m: int) -> list[float | None]:
        values, pmf = partial_tau_distribution(m)
        upper = np.cumsum(pmf[::-1])[::-1]
        criticals = []
        for alpha in P_VALUES:
            reached = np.flatnonzero(upper <= alpha * (1.0 + EXACT.rtol))
            criticals.append(float(values[reached[0]]) if reached.size else None)
        return criticals

    def compute_probability(self, m: int, tau: float) -> CriticalPValue | None:
        """
        p-value bound for |tau| on m items, or None when m is outside 3..30.
        """
        m = check_positive_int(m, "m")
        tau = abs(check_finite(tau, "tau"))
        if not MIN_M <= m <= MAX_M:
            return None
        p_value = self.table.estimate(m, tau + EXACT.atol)
        return CriticalPValue(p_value, is_approximate=m > MAX_EXACT_M)
