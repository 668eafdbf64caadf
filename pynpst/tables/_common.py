"""
Common definitions for the table engine.

Cells that hold no value are stored as NaN inside the numpy grids and are
reported to callers as None (UNDEFINED), so that "no value" never collides
with a legitimate negative statistic.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynpst.core.exceptions import DimensionError, TableOrderError
from pynpst.core.tolerances import TABLE_KEY

# No value stored / key not found
UNDEFINED = None

# Probability certain: statistic outside the charted region, non-significant
ALL = 1.0

EPSILON = TABLE_KEY.atol


def to_cell(value: float) -> float | None:
    """Convert a raw grid value to the public representation."""
    value = float(value)
    if math.isnan(value):
        return UNDEFINED
    return value


def as_row(values: ArrayLike, capacity: int, name: str) -> NDArray[np.float64]:
    """
    Convert a row to a 1D float64 array that fits in `capacity` slots.

    None entries become NaN (unfilled).
    """
    row = np.array(
        [np.nan if v is None else v for v in np.ravel(np.asarray(values, dtype=object))],
        dtype=np.float64,
    )
    if row.size > capacity:
        raise DimensionError(
            f"{name}: row of length {row.size} does not fit {capacity} slots"
        )
    return row


def check_headers(p_values: ArrayLike) -> NDArray[np.float64]:
    """Copy critical-table headers, requiring strictly ascending p-values."""
    headers = np.array(p_values, dtype=np.float64).ravel()
    if headers.size == 0:
        raise DimensionError("critical table needs at least one p-value header")
    if np.any(np.diff(headers) <= 0.0):
        raise TableOrderError(
            f"p-value headers must be strictly ascending, got {headers.tolist()}",
            values=tuple(headers.tolist()),
        )
    headers.setflags(write=False)
    return headers


def check_critical_order(row: NDArray[np.float64], index: int | tuple[int, ...]) -> None:
    """
    Require the defined critical values of a row to be non-increasing.

    Headers ascend, so the critical values must not grow along them for a
    linear scan to stop at the smallest p-value reached.
    """
    defined = row[~np.isnan(row)]
    if np.any(np.diff(defined) > 0.0):
        raise TableOrderError(
            f"critical values at {index} must not increase along ascending "
            f"p-values, got {defined.tolist()}",
            index=index,
            values=tuple(defined.tolist()),
        )


def scan_critical(row: NDArray[np.float64], headers: NDArray[np.float64], statistic: float) -> float:
    """Header of the first slot whose critical value is <= statistic, else ALL."""
    for pointer in range(headers.size):
        critical = row[pointer]
        if not np.isnan(critical) and statistic >= critical:
            return float(headers[pointer])
    return ALL
