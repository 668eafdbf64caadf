"""
Core protocols for pynpst.

These define structural interfaces that distribution implementations must
satisfy. We use Protocol (structural typing) rather than ABC (nominal typing)
so that any object exposing the two query operations can be used wherever a
distribution is expected.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Parameters are owned by the implementation and never exposed here
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Distribution(Protocol):
    """
    Minimal protocol for any probability distribution.

    Discrete families return a point mass from compute_probability,
    continuous families a density. compute_cumulative_probability always
    returns P(X <= value) in [0, 1].
    """

    def compute_probability(self, value: float) -> float:
        """Point mass (discrete) or density (continuous) at value."""
        ...

    def compute_cumulative_probability(self, value: float) -> float:
        """P(X <= value)."""
        ...
