"""
Discrete distributions: Uniform, Binomial, Poisson and Geometric.

All families are immutable and validate their parameters at construction
(ValidationError on invalid values). compute_probability returns the mass
at floor(value); compute_cumulative_probability returns P(X <= floor(value)).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from scipy import special

from pynpst.core.exceptions import ValidationError
from pynpst.core.validation import (
    check_non_negative_int,
    check_positive,
    check_positive_int,
    check_probability,
)
from pynpst.distributions._common import floor_argument, regularized_gamma_q


@dataclass(frozen=True)
class UniformDistribution:
    """Discrete uniform distribution on 1..n."""
    n: int = 1

    def __post_init__(self):
        object.__setattr__(self, "n", check_positive_int(self.n, "n"))

    def compute_probability(self, value: float) -> float:
        x = floor_argument(value)
        if math.isnan(x):
            return math.nan
        if 1 <= x <= self.n:
            return 1.0 / self.n
        return 0.0

    def compute_cumulative_probability(self, value: float) -> float:
        x = floor_argument(value)
        if math.isnan(x):
            return math.nan
        if x < 1:
            return 0.0
        if x >= self.n:
            return 1.0
        return x / self.n

    def __str__(self) -> str:
        return f"Uniform distribution. Parameters N: {self.n}"


@dataclass(frozen=True)
class BinomialDistribution:
    """
    Binomial distribution with n trials and success probability p.

    The mass function over the whole support is evaluated once, in log
    space, at construction: C(n, k) p^k (1-p)^(n-k) stays finite for large n.
    The cumulative function is the running sum of the masses, capped at 1.

    Parameters
    ----------
    n : int
        Number of trials, n >= 0.
    p : float
        Success probability, 0 <= p <= 1.
    """
    n: int = 1
    p: float = 0.5
    _masses: NDArray[np.float64] = field(init=False, repr=False, compare=False)
    _cumulative: NDArray[np.float64] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        n = check_non_negative_int(self.n, "n")
        p = check_probability(self.p, "p")
        object.__setattr__(self, "n", n)
        object.__setattr__(self, "p", p)

        k = np.arange(n + 1, dtype=np.float64)
        log_masses = (
            special.gammaln(n + 1) - special.gammaln(k + 1) - special.gammaln(n - k + 1)
            + special.xlogy(k, p) + special.xlog1py(n - k, -p)
        )
        masses = np.exp(log_masses)
        cumulative = np.minimum(np.cumsum(masses), 1.0)
        cumulative[-1] = 1.0
        masses.setflags(write=False)
        cumulative.setflags(write=False)
        object.__setattr__(self, "_masses", masses)
        object.__setattr__(self, "_cumulative", cumulative)

    def compute_probability(self, value: float) -> float:
        x = floor_argument(value)
        if math.isnan(x):
            return math.nan
        if x < 0 or x > self.n:
            return 0.0
        return float(self._masses[int(x)])

    def compute_cumulative_probability(self, value: float) -> float:
        x = floor_argument(value)
        if math.isnan(x):
            return math.nan
        if x < 0:
            return 0.0
        if x >= self.n:
            return 1.0
        return float(self._cumulative[int(x)])

    def lesser_cumulative_probability(self, alpha: float) -> int | None:
        """
        Largest k such that P(X <= k) <= alpha.

        Used for the lower bound of order-statistic confidence intervals.
        Returns None when even P(X <= 0) exceeds alpha.
        """
        alpha = check_probability(alpha, "alpha")
        hits = np.flatnonzero(self._cumulative <= alpha)
        if hits.size == 0:
            return None
        return int(hits[-1])

    def upper_cumulative_probability(self, alpha: float) -> int | None:
        """
        Smallest k such that P(X <= k) >= alpha.

        Used for the upper bound of order-statistic confidence intervals.
        Returns None when no k in 0..n reaches alpha.
        """
        alpha = check_probability(alpha, "alpha")
        hits = np.flatnonzero(self._cumulative >= alpha)
        if hits.size == 0:
            return None
        return int(hits[0])

    def __str__(self) -> str:
        return f"Binomial distribution. Parameters N: {self.n} P: {self.p}"


@dataclass(frozen=True)
class PoissonDistribution:
    """Poisson distribution with the given mean (> 0)."""
    mean: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "mean", check_positive(self.mean, "mean"))

    def compute_probability(self, value: float) -> float:
        x = floor_argument(value)
        if math.isnan(x):
            return math.nan
        if x < 0 or math.isinf(x):
            return 0.0
        log_mass = special.xlogy(x, self.mean) - self.mean - special.gammaln(x + 1.0)
        return float(np.exp(log_mass))

    def compute_cumulative_probability(self, value: float) -> float:
        x = floor_argument(value)
        if math.isnan(x):
            return math.nan
        if x < 0:
            return 0.0
        # P(X <= k) = Q(k + 1, mean)
        return regularized_gamma_q(x + 1.0, self.mean)

    def __str__(self) -> str:
        return f"Poisson distribution. Parameters Mean: {self.mean}"


@dataclass(frozen=True)
class GeometricDistribution:
    """
    Geometric distribution: number of trials up to the first success.

    Support is 1, 2, ...; success probability p must be in (0, 1].
    """
    p: float = 0.5

    def __post_init__(self):
        p = check_probability(self.p, "p")
        if p == 0.0:
            raise ValidationError("p: must be in (0, 1], got 0.0")
        object.__setattr__(self, "p", p)

    def compute_probability(self, value: float) -> float:
        x = floor_argument(value)
        if math.isnan(x):
            return math.nan
        if x < 1 or math.isinf(x):
            return 0.0
        return float(np.exp(special.xlog1py(x - 1.0, -self.p)) * self.p)

    def compute_cumulative_probability(self, value: float) -> float:
        x = floor_argument(value)
        if math.isnan(x):
            return math.nan
        if x < 1:
            return 0.0
        if self.p == 1.0 or math.isinf(x):
            return 1.0
        return -math.expm1(x * math.log1p(-self.p))

    def __str__(self) -> str:
        return f"Geometric distribution. Parameters P: {self.p}"
