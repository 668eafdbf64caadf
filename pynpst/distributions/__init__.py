"""
Common probability distributions.

Discrete:
    UniformDistribution(n)          - uniform on 1..n
    BinomialDistribution(n, p)      - with tail inversion helpers
    PoissonDistribution(mean)
    GeometricDistribution(p)        - trials up to the first success

Continuous:
    NormalDistribution(mean, sigma) - with tipified area and inverse
    UniformCDistribution(start, end)
    ChiSquareDistribution(degree)
    ExponentialDistribution(mean)
    GammaDistribution(alpha, beta)
    LaplaceDistribution(mean, scale)
    LogisticDistribution(mean, s)
    WeibullDistribution(lam, k)

Every family satisfies the pynpst.core.Distribution protocol.
"""

from pynpst.distributions.discrete import (
    UniformDistribution,
    BinomialDistribution,
    PoissonDistribution,
    GeometricDistribution,
)
from pynpst.distributions.continuous import (
    NormalDistribution,
    UniformCDistribution,
    ChiSquareDistribution,
    ExponentialDistribution,
    GammaDistribution,
    LaplaceDistribution,
    LogisticDistribution,
    WeibullDistribution,
)
from pynpst.distributions._common import (
    combinatorial,
    log_combinatorial,
    regularized_gamma_p,
    regularized_gamma_q,
)

__all__ = [
    "UniformDistribution",
    "BinomialDistribution",
    "PoissonDistribution",
    "GeometricDistribution",
    "NormalDistribution",
    "UniformCDistribution",
    "ChiSquareDistribution",
    "ExponentialDistribution",
    "GammaDistribution",
    "LaplaceDistribution",
    "LogisticDistribution",
    "WeibullDistribution",
    "combinatorial",
    "log_combinatorial",
    "regularized_gamma_p",
    "regularized_gamma_q",
]
