"""
Core infrastructure for pynpst.

This module provides shared abstractions and utilities used by the table
engine, the common distributions and the test-specific distributions.

Key components:
    protocols: Distribution protocol
    exceptions: Exception hierarchy
    validation: Scalar parameter validators
    tolerances: Numerical tolerance tiers
"""

from pynpst.core.protocols import Distribution
from pynpst.core.exceptions import (
    PyNPSTError,
    ValidationError,
    DimensionError,
    TableOrderError,
    NumericalError,
)
from pynpst.core.tolerances import ToleranceTier, EXACT, TABLE_KEY, APPROXIMATION

__all__ = [
    # Protocols
    "Distribution",
    # Exceptions
    "PyNPSTError",
    "ValidationError",
    "DimensionError",
    "TableOrderError",
    "NumericalError",
    # Tolerances
    "ToleranceTier",
    "EXACT",
    "TABLE_KEY",
    "APPROXIMATION",
]
