"""
Table engine.

Lookup structures backing the exact tests:
    Approximate1KeyTable - integer key + tolerance-matched real key
    Critical1KeyTable    - one integer key -> critical values per p-value
    Critical2KeyTable    - two integer keys -> critical values per p-value
    Incomplete2KeyTable  - bounds-tolerant 2D grid
    Incomplete3KeyTable  - bounds-tolerant 3D grid

Missing values are reported as None (UNDEFINED); ALL (1.0) marks a
statistic outside the charted region.
"""

from pynpst.tables._common import UNDEFINED, ALL, EPSILON
from pynpst.tables.approximate import Approximate1KeyTable
from pynpst.tables.critical import Critical1KeyTable, Critical2KeyTable
from pynpst.tables.incomplete import Incomplete2KeyTable, Incomplete3KeyTable

__all__ = [
    "UNDEFINED",
    "ALL",
    "EPSILON",
    "Approximate1KeyTable",
    "Critical1KeyTable",
    "Critical2KeyTable",
    "Incomplete2KeyTable",
    "Incomplete3KeyTable",
]
