"""
McNemar test distribution.

Three ways of turning the discordant counts of a paired 2x2 table into a
cumulative probability: the exact binomial with p = 1/2 over the S
discordant pairs, the standard normal for the continuity-corrected z, and
the chi-square with one degree of freedom for the squared statistic.
"""

from __future__ import annotations

from functools import lru_cache

from pynpst.core.validation import check_finite, check_non_negative_int
from pynpst.distributions import BinomialDistribution, ChiSquareDistribution
from pynpst.exact._common import ExactDistribution


@lru_cache(maxsize=64)
def _binomial(trials: int) -> BinomialDistribution:
    return BinomialDistribution(trials, 0.5)


class McNemarDistribution(ExactDistribution):
    """Binomial, normal and chi-square adjustments for McNemar's test."""

    def _build_tables(self) -> None:
        self._chi = ChiSquareDistribution(1)

    def compute_binomial_adjustment(self, S: int, x: int) -> float:
        """P(X <= x) for X ~ Binomial(S, 1/2); S is the number of discordant pairs."""
        S = check_non_negative_int(S, "S")
        x = check_non_negative_int(x, "x")
        return _binomial(S).compute_cumulative_probability(x)

    def compute_normal_adjustment(self, Z: float) -> float:
        """Standard normal P(Z' <= Z)."""
        return self._normal.tipified_probability(check_finite(Z, "Z"), lower_tail=True)

    def compute_chi_adjustment(self, T: float) -> float:
        """Chi-square (one degree of freedom) P(X^2 <= T)."""
        return self._chi.compute_cumulative_probability(check_finite(T, "T"))
