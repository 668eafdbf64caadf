"""
Approximate1KeyTable: exact integer key plus tolerance-matched real key.

Each row holds (real key -> value) pairs. Lookup scans the row in order
and returns the value of the first key within EPSILON of the query. Rows
are expected to be written already sorted by the owning distribution.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from pynpst.core.exceptions import DimensionError
from pynpst.core.validation import check_shape
from pynpst.tables._common import EPSILON, UNDEFINED, as_row, to_cell


class Approximate1KeyTable:
    """
    Table indexed by an integer key and an approximate real key.

    Parameters
    ----------
    integer_length : int
        Number of rows (valid integer keys are 0..integer_length-1).
    real_length : int
        Capacity of each row.
    """

    def __init__(self, integer_length: int, real_length: int):
        self._shape = check_shape(integer_length, real_length, name="Approximate1KeyTable")
        self._keys = np.empty(self._shape, dtype=np.float64)
        self._values = np.empty(self._shape, dtype=np.float64)
        self.clear()

    @property
    def shape(self) -> tuple[int, int]:
        return self._shape

    def clear(self) -> None:
        """Reset every cell to UNDEFINED."""
        self._keys.fill(np.nan)
        self._values.fill(np.nan)

    def erase(self, index: int) -> None:
        """Reset one row to UNDEFINED."""
        self._keys[index].fill(np.nan)
        self._values[index].fill(np.nan)

    def add_row(self, index: int, keys: ArrayLike, values: ArrayLike) -> None:
        """
        Write a row of (key, value) pairs starting at slot 0.

        Slots past the supplied pairs keep their previous content.
        """
        key_row = as_row(keys, self._shape[1], "keys")
        value_row = as_row(values, self._shape[1], "values")
        if key_row.size != value_row.size:
            raise DimensionError(
                f"keys and values must have the same length, "
                f"got {key_row.size} and {value_row.size}"
            )
        self._keys[index, :key_row.size] = key_row
        self._values[index, :value_row.size] = value_row

    def get(self, index: int, approximate: float) -> float | None:
        """
        Value of the first key within EPSILON of `approximate`.

        The scan stops at the first unfilled key or at the end of the row.
        Returns None when no key matches.
        """
        keys = self._keys[index]
        for pointer in range(keys.size):
            key = keys[pointer]
            if np.isnan(key):
                break
            if abs(key - approximate) <= EPSILON:
                return to_cell(self._values[index, pointer])
        return UNDEFINED
