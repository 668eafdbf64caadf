"""
Common machinery for the test-specific distributions.

ExactDistribution subclasses build their reference tables once and are
read-only afterwards. Instances are obtained through get_instance(), which
hands out one shared instance per class; creation is serialized by a
module-level lock with a double check, so concurrent first callers never
see a half-built table. Calling the class directly raises TypeError.
"""

from __future__ import annotations

import math
import threading
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TypeVar

from pynpst.core.exceptions import NumericalError
from pynpst.core.tolerances import APPROXIMATION
from pynpst.distributions import NormalDistribution
from pynpst.tables import ALL

_INSTANCE_LOCK = threading.RLock()

E = TypeVar('E', bound='ExactDistribution')


@dataclass(frozen=True)
class CriticalPValue:
    """
    p-value read from a table, with a flag telling how it was obtained.

    Attributes
    ----------
    p_value : float
        For critical tables, the smallest tabulated significance level
        reached by the statistic (the p-value is at most this), or ALL
        (1.0) when none is reached. For tail tables, the tail probability
        itself.
    is_approximate : bool
        True when the value did not come from the exact table: asymptotic
        critical values were used, or the nearest charted entry stood in
        for the requested one.
    """
    p_value: float
    is_approximate: bool

    def __float__(self) -> float:
        return self.p_value


def as_probability(value: float, quantity: str) -> float:
    """
    Clip a computed probability into [0, 1].

    Rounding in tail sums may overshoot by a few ulps; anything further
    out than APPROXIMATION.atol is a numerical failure.

    Raises
    ------
    NumericalError
        If value is NaN or lies outside [-atol, 1 + atol].
    """
    if not -APPROXIMATION.atol <= value <= 1.0 + APPROXIMATION.atol:
        raise NumericalError(
            f"{quantity} = {value} is not a probability",
            quantity=quantity,
            value=value,
        )
    return min(max(float(value), 0.0), 1.0)


class ExactDistribution(ABC):
    """
    Base class for distributions backed by precomputed tables.

    Subclasses implement _build_tables(); it runs exactly once per class.
    Use get_instance() to obtain the shared instance.
    """

    def __init__(self):
        raise TypeError(
            f"{type(self).__name__} is shared; use {type(self).__name__}.get_instance()"
        )

    def _initialize(self) -> None:
        self._normal = NormalDistribution()
        self._build_tables()

    @abstractmethod
    def _build_tables(self) -> None:
        """Populate the reference tables."""

    @classmethod
    def get_instance(cls: type[E]) -> E:
        """Shared instance of this distribution, built on first access."""
        instance = cls.__dict__.get("_instance")
        if instance is None:
            with _INSTANCE_LOCK:
                instance = cls.__dict__.get("_instance")
                if instance is None:
                    # object.__new__ still refuses abstract classes
                    instance = cls.__new__(cls)
                    instance._initialize()
                    cls._instance = instance
        return instance

    def _normal_tail(self, numerator: float, variance: float, lower_tail: bool) -> float:
        """
        Normal-approximation tail for z = numerator / sqrt(variance).

        A degenerate variance gives no usable approximation: warn and
        report ALL.
        """
        if not variance > 0.0:
            warnings.warn(
                f"{type(self).__name__}: normal approximation undefined "
                f"(variance={variance}), p-value set to {ALL}",
                RuntimeWarning,
                stacklevel=3,
            )
            return ALL
        z = numerator / math.sqrt(variance)
        return self._normal.tipified_probability(z, lower_tail=lower_tail)
