"""
Continuous distributions.

Normal, UniformC (continuous uniform), ChiSquare, Exponential, Gamma,
Laplace, Logistic and Weibull. Every family is immutable and validates its
parameters at construction. Densities are evaluated in log space where a
power of the argument is involved, and cumulative probabilities go through
scipy.special (ndtr, gammainc, expit) so that tails stay accurate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from scipy import special

from pynpst.core.validation import (
    check_finite,
    check_interval,
    check_positive,
    check_positive_int,
    check_probability,
)
from pynpst.distributions._common import regularized_gamma_p, regularized_gamma_q

_LOG_SQRT_2PI = 0.5 * math.log(2.0 * math.pi)


@dataclass(frozen=True)
class NormalDistribution:
    """
    Normal distribution with the given mean and standard deviation.

    Besides density and CDF, exposes the standard-normal tail area
    (tipified_probability) and its inverse, which the exact tests use for
    their asymptotic p-values and normal scores.
    """
    mean: float = 0.0
    sigma: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "mean", check_finite(self.mean, "mean"))
        object.__setattr__(self, "sigma", check_positive(self.sigma, "sigma"))

    def compute_probability(self, value: float) -> float:
        z = (value - self.mean) / self.sigma
        return math.exp(-0.5 * z * z - _LOG_SQRT_2PI) / self.sigma

    def compute_cumulative_probability(self, value: float) -> float:
        return self.tipified_probability((value - self.mean) / self.sigma)

    @staticmethod
    def tipified_probability(z: float, lower_tail: bool = True) -> float:
        """
        Area under the standard normal curve left of z (or right of z).

        Parameters
        ----------
        z : float
            Standardized value.
        lower_tail : bool
            True for P(Z <= z), False for P(Z >= z).
        """
        if lower_tail:
            return float(special.ndtr(z))
        return float(special.ndtr(-z))

    @staticmethod
    def inverse_normal_distribution(p: float) -> float:
        """
        Standard normal quantile: z such that P(Z <= z) = p.

        Returns -inf at p = 0 and +inf at p = 1.
        """
        p = check_probability(p, "p")
        if p == 0.0:
            return -math.inf
        if p == 1.0:
            return math.inf
        return float(special.ndtri(p))

    def quantile(self, p: float) -> float:
        """Quantile of this distribution: mean + sigma * z_p."""
        return self.mean + self.sigma * self.inverse_normal_distribution(p)

    def __str__(self) -> str:
        return f"Normal distribution. Mean: {self.mean} Sigma: {self.sigma}"


@dataclass(frozen=True)
class UniformCDistribution:
    """Continuous uniform distribution on [start, end], start < end."""
    start: float = 0.0
    end: float = 1.0

    def __post_init__(self):
        start, end = check_interval(self.start, self.end, ("start", "end"))
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def compute_probability(self, value: float) -> float:
        if math.isnan(value):
            return math.nan
        if self.start <= value <= self.end:
            return 1.0 / (self.end - self.start)
        return 0.0

    def compute_cumulative_probability(self, value: float) -> float:
        if math.isnan(value):
            return math.nan
        prob = (value - self.start) / (self.end - self.start)
        return max(min(prob, 1.0), 0.0)

    def __str__(self) -> str:
        return f"Continuous Uniform distribution. Start: {self.start} End: {self.end}"


@dataclass(frozen=True)
class GammaDistribution:
    """
    Gamma distribution with shape alpha and scale beta.

    CDF is the regularized lower incomplete gamma P(alpha, x / beta).
    """
    alpha: float = 1.0
    beta: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "alpha", check_positive(self.alpha, "alpha"))
        object.__setattr__(self, "beta", check_positive(self.beta, "beta"))

    @property
    def lam(self) -> float:
        """Rate parameter, 1 / beta."""
        return 1.0 / self.beta

    def compute_probability(self, value: float) -> float:
        if math.isnan(value):
            return math.nan
        if value < 0.0 or math.isinf(value):
            return 0.0
        log_density = (
            special.xlogy(self.alpha - 1.0, value) - value / self.beta
            - special.gammaln(self.alpha) - self.alpha * math.log(self.beta)
        )
        return float(np.exp(log_density))

    def compute_cumulative_probability(self, value: float) -> float:
        if math.isnan(value):
            return math.nan
        return regularized_gamma_p(self.alpha, value / self.beta)

    def compute_right_tail_probability(self, value: float) -> float:
        """P(X >= value), computed directly to keep precision in the tail."""
        if math.isnan(value):
            return math.nan
        return regularized_gamma_q(self.alpha, value / self.beta)

    def __str__(self) -> str:
        return f"Gamma distribution. Parameters Alpha: {self.alpha} Beta: {self.beta}"


@dataclass(frozen=True)
class ChiSquareDistribution:
    """
    Chi-square distribution with `degree` degrees of freedom.

    Equivalent to Gamma(degree / 2, 2).
    """
    degree: int = 1
    _gamma: GammaDistribution = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        degree = check_positive_int(self.degree, "degree")
        object.__setattr__(self, "degree", degree)
        object.__setattr__(self, "_gamma", GammaDistribution(degree / 2.0, 2.0))

    def compute_probability(self, value: float) -> float:
        return self._gamma.compute_probability(value)

    def compute_cumulative_probability(self, value: float) -> float:
        return self._gamma.compute_cumulative_probability(value)

    def compute_right_tail_probability(self, value: float) -> float:
        """P(X >= value); the p-value of an observed chi-square statistic."""
        return self._gamma.compute_right_tail_probability(value)

    def __str__(self) -> str:
        return f"Chi-square distribution. Degrees of freedom: {self.degree}"


@dataclass(frozen=True)
class ExponentialDistribution:
    """Exponential distribution with the given mean (> 0)."""
    mean: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "mean", check_positive(self.mean, "mean"))

    @property
    def lam(self) -> float:
        """Rate parameter, 1 / mean."""
        return 1.0 / self.mean

    def compute_probability(self, value: float) -> float:
        if value < 0.0:
            return 0.0
        return math.exp(-value / self.mean) / self.mean

    def compute_cumulative_probability(self, value: float) -> float:
        if value < 0.0:
            return 0.0
        return -math.expm1(-value / self.mean)

    def __str__(self) -> str:
        return f"Exponential distribution. Parameters Lambda: {self.lam}"


@dataclass(frozen=True)
class LaplaceDistribution:
    """Laplace (double exponential) distribution."""
    mean: float = 0.0
    scale: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "mean", check_finite(self.mean, "mean"))
        object.__setattr__(self, "scale", check_positive(self.scale, "scale"))

    def compute_probability(self, value: float) -> float:
        return math.exp(-abs(value - self.mean) / self.scale) / (2.0 * self.scale)

    def compute_cumulative_probability(self, value: float) -> float:
        if value < self.mean:
            return 0.5 * math.exp((value - self.mean) / self.scale)
        return 1.0 - 0.5 * math.exp((self.mean - value) / self.scale)

    def __str__(self) -> str:
        return f"Laplace distribution. Mean: {self.mean} Scale: {self.scale}"


@dataclass(frozen=True)
class LogisticDistribution:
    """Logistic distribution with location `mean` and scale `s`."""
    mean: float = 0.0
    s: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "mean", check_finite(self.mean, "mean"))
        object.__setattr__(self, "s", check_positive(self.s, "s"))

    def compute_probability(self, value: float) -> float:
        z = (value - self.mean) / self.s
        return float(special.expit(z) * special.expit(-z)) / self.s

    def compute_cumulative_probability(self, value: float) -> float:
        return float(special.expit((value - self.mean) / self.s))

    def __str__(self) -> str:
        return f"Logistic distribution. Mean: {self.mean} S: {self.s}"


@dataclass(frozen=True)
class WeibullDistribution:
    """Weibull distribution with scale `lam` and shape `k`."""
    lam: float = 1.0
    k: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "lam", check_positive(self.lam, "lam"))
        object.__setattr__(self, "k", check_positive(self.k, "k"))

    def compute_probability(self, value: float) -> float:
        if math.isnan(value):
            return math.nan
        if value < 0.0 or math.isinf(value):
            return 0.0
        u = value / self.lam
        # u ** k overflows to inf for large u; the density is then 0
        with np.errstate(over="ignore"):
            power = np.power(u, self.k)
        log_density = math.log(self.k / self.lam) + special.xlogy(self.k - 1.0, u) - power
        return float(np.exp(log_density))

    def compute_cumulative_probability(self, value: float) -> float:
        if value < 0.0:
            return 0.0
        with np.errstate(over="ignore"):
            power = np.power(value / self.lam, self.k)
        return float(-np.expm1(-power))

    def __str__(self) -> str:
        return f"Weibull distribution. Lambda: {self.lam} K: {self.k}"
