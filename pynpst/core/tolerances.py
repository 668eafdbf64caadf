"""
Tolerance tiers for numerical comparison.

Defines precision expectations for the different ways a probability is
obtained:
- EXACT: closed forms and special functions evaluated in double precision
- TABLE_KEY: matching of real-valued keys in approximate tables
- APPROXIMATION: rational approximations and asymptotic formulas

Used by the table engine (TABLE_KEY.atol is the key-matching EPSILON),
by the exact distributions when comparing tail sums with nominal levels
and snapping statistics onto lattices (EXACT), and by as_probability,
which tolerates APPROXIMATION.atol of rounding outside [0, 1].
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance pair for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str

    def matches(self, a: float, b: float) -> bool:
        """True when |a - b| <= atol + rtol * |b|."""
        return abs(a - b) <= self.atol + self.rtol * abs(b)


EXACT = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='exact',
    description='Closed forms and special functions in double precision',
)

# Tabulated statistics are printed with three decimals
TABLE_KEY = ToleranceTier(
    rtol=0.0,
    atol=0.002,
    name='table_key',
    description='Real-valued key matching in approximate tables',
)

APPROXIMATION = ToleranceTier(
    rtol=0.0,
    atol=1e-4,
    name='approximation',
    description='Rational approximations and asymptotic formulas',
)
