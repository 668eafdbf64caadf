"""
Shared helpers for the common distributions.

Discrete families evaluate their mass at floor(value): a fractional
argument is truncated toward -inf, the same way a count is read off a
discrete support. Infinities pass through unchanged and NaN propagates.
"""

from __future__ import annotations

import math

from scipy import special


def floor_argument(value: float) -> float:
    """Floor of value for discrete supports; infinities and NaN pass through."""
    value = float(value)
    if not math.isfinite(value):
        return value
    return float(math.floor(value))


def log_combinatorial(m: int, k: int) -> float:
    """log C(m, k) via log-gamma; -inf outside 0 <= k <= m."""
    if k < 0 or k > m:
        return -math.inf
    return float(special.gammaln(m + 1) - special.gammaln(k + 1) - special.gammaln(m - k + 1))


def combinatorial(m: int, k: int) -> float:
    """C(m, k) as a float, 0.0 outside 0 <= k <= m."""
    return math.exp(log_combinatorial(m, k))


def regularized_gamma_p(a: float, x: float) -> float:
    """Regularized lower incomplete gamma P(a, x) for a > 0, x >= 0."""
    if x <= 0.0:
        return 0.0
    if math.isinf(x):
        return 1.0
    return float(special.gammainc(a, x))


def regularized_gamma_q(a: float, x: float) -> float:
    """Regularized upper incomplete gamma Q(a, x) = 1 - P(a, x)."""
    if x <= 0.0:
        return 1.0
    if math.isinf(x):
        return 0.0
    return float(special.gammaincc(a, x))
