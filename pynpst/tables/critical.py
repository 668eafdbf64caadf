"""
Critical-value tables.

A critical table maps one or two integer keys to a row of critical
statistics, one per significance level. The significance levels (headers)
ascend, the critical values do not increase along them, so a linear scan
finds the smallest p-value whose critical value the statistic reaches.

Ordering is enforced when rows are written: a table populated out of
order raises TableOrderError instead of silently returning a wrong
boundary later.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynpst.core.validation import check_shape
from pynpst.tables._common import (
    as_row,
    check_critical_order,
    check_headers,
    scan_critical,
    to_cell,
)


class Critical1KeyTable:
    """
    Critical values keyed by one integer.

    Parameters
    ----------
    length : int
        Number of rows.
    p_values : array-like
        Strictly ascending significance levels, one per column.
    """

    def __init__(self, length: int, p_values: ArrayLike):
        self._headers = check_headers(p_values)
        (n_rows,) = check_shape(length, name="Critical1KeyTable")
        self._body = np.empty((n_rows, self._headers.size), dtype=np.float64)
        self.clear()

    @property
    def headers(self) -> NDArray[np.float64]:
        """Read-only array of p-value headers."""
        return self._headers

    @property
    def shape(self) -> tuple[int, int]:
        return self._body.shape

    def get_header(self, index: int) -> float:
        """p-value label of column `index`."""
        return float(self._headers[index])

    def clear(self) -> None:
        self._body.fill(np.nan)

    def erase(self, index: int) -> None:
        self._body[index].fill(np.nan)

    def add_row(self, index: int, values: ArrayLike) -> None:
        """Write the critical values of row `index`, starting at column 0."""
        row = as_row(values, self._headers.size, "values")
        candidate = self._body[index].copy()
        candidate[:row.size] = row
        check_critical_order(candidate, index)
        self._body[index] = candidate

    def get(self, index: int, column: int) -> float | None:
        return to_cell(self._body[index, column])

    def is_defined(self, index: int) -> bool:
        """True when row `index` exists and holds at least one value."""
        if not 0 <= index < self._body.shape[0]:
            return False
        return bool(np.any(~np.isnan(self._body[index])))

    def estimate(self, index: int, statistic: float) -> float:
        """Smallest p-value whose critical value is <= statistic, else ALL."""
        return scan_critical(self._body[index], self._headers, statistic)


class Critical2KeyTable:
    """
    Critical values keyed by two integers.

    Parameters
    ----------
    dim1, dim2 : int
        Number of values of each integer key.
    p_values : array-like
        Strictly ascending significance levels, one per slot.
    """

    def __init__(self, dim1: int, dim2: int, p_values: ArrayLike):
        self._headers = check_headers(p_values)
        shape = check_shape(dim1, dim2, name="Critical2KeyTable")
        self._body = np.empty(shape + (self._headers.size,), dtype=np.float64)
        self.clear()

    @property
    def headers(self) -> NDArray[np.float64]:
        return self._headers

    @property
    def shape(self) -> tuple[int, int, int]:
        return self._body.shape

    def get_header(self, index: int) -> float:
        return float(self._headers[index])

    def clear(self) -> None:
        self._body.fill(np.nan)

    def erase(self, dim1: int, dim2: int) -> None:
        self._body[dim1, dim2].fill(np.nan)

    def add_row(self, dim1: int, dim2: int, values: ArrayLike) -> None:
        """Write all critical values of cell (dim1, dim2) at once."""
        row = as_row(values, self._headers.size, "values")
        candidate = self._body[dim1, dim2].copy()
        candidate[:row.size] = row
        check_critical_order(candidate, (dim1, dim2))
        self._body[dim1, dim2] = candidate

    def set(self, dim1: int, dim2: int, column: int, value: float) -> None:
        """Write a single critical value, checked against its neighbours."""
        candidate = self._body[dim1, dim2].copy()
        candidate[column] = value
        check_critical_order(candidate, (dim1, dim2))
        self._body[dim1, dim2] = candidate

    def get(self, dim1: int, dim2: int, column: int) -> float | None:
        return to_cell(self._body[dim1, dim2, column])

    def estimate(self, dim1: int, dim2: int, statistic: float) -> float:
        """
        Smallest p-value at which `statistic` is significant.

        Scans the slots in header order and returns the header of the first
        slot whose critical value is <= statistic, or ALL (1.0) when the
        statistic is below every threshold.
        """
        return scan_critical(self._body[dim1, dim2], self._headers, statistic)
