"""
Incomplete tables: dense grids with permissive bounds checking.

Out-of-range writes and erasures are ignored and out-of-range reads
return None, so partially charted reference data can be looked up
without guarding every index at the call site.
"""

from __future__ import annotations

import numpy as np

from pynpst.core.validation import check_shape
from pynpst.tables._common import UNDEFINED, to_cell


class _IncompleteTable:
    """Shared implementation for the 2- and 3-key incomplete tables."""

    def __init__(self, *dims: int):
        self._shape = check_shape(*dims, name=type(self).__name__)
        self._body = np.empty(self._shape, dtype=np.float64)
        self.clear()

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    def _in_range(self, index: tuple[int, ...]) -> bool:
        return all(0 <= i < dim for i, dim in zip(index, self._shape))

    def clear(self) -> None:
        self._body.fill(np.nan)

    def _erase(self, index: tuple[int, ...]) -> None:
        if self._in_range(index):
            self._body[index] = np.nan

    def _add(self, index: tuple[int, ...], value: float) -> None:
        if self._in_range(index):
            self._body[index] = np.nan if value is None else value

    def _get(self, index: tuple[int, ...]) -> float | None:
        if not self._in_range(index):
            return UNDEFINED
        return to_cell(self._body[index])


class Incomplete2KeyTable(_IncompleteTable):
    """Two-key grid; see module docstring for the bounds policy."""

    def __init__(self, dim1: int, dim2: int):
        super().__init__(dim1, dim2)

    def erase(self, dim1: int, dim2: int) -> None:
        self._erase((dim1, dim2))

    def add(self, dim1: int, dim2: int, value: float) -> None:
        self._add((dim1, dim2), value)

    def get(self, dim1: int, dim2: int) -> float | None:
        return self._get((dim1, dim2))


class Incomplete3KeyTable(_IncompleteTable):
    """Three-key grid; see module docstring for the bounds policy."""

    def __init__(self, dim1: int, dim2: int, dim3: int):
        super().__init__(dim1, dim2, dim3)

    def erase(self, dim1: int, dim2: int, dim3: int) -> None:
        self._erase((dim1, dim2, dim3))

    def add(self, dim1: int, dim2: int, dim3: int, value: float) -> None:
        self._add((dim1, dim2, dim3), value)

    def get(self, dim1: int, dim2: int, dim3: int) -> float | None:
        return self._get((dim1, dim2, dim3))
