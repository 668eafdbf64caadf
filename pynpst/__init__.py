"""
pynpst: probability distributions and reference tables for nonparametric
statistical tests.

Submodules:
    tables: Critical, approximate-key and incomplete lookup tables
    distributions: Discrete and continuous probability distributions
    exact: Test-specific distributions with exact tables and asymptotic fallbacks
"""

__version__ = "0.1.0"

from pynpst import tables
from pynpst import distributions
from pynpst import exact
from pynpst.exact import DistributionContext

__all__ = [
    "__version__",
    "tables",
    "distributions",
    "exact",
    "DistributionContext",
]
