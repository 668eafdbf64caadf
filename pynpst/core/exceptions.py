"""
Exception hierarchy for pynpst.

All exceptions inherit from PyNPSTError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information

Probability queries never raise: table misses are reported as None or
ALL. Exceptions are reserved for invalid parameters and for tables that
are populated against their ordering contract.
"""


class PyNPSTError(Exception):
    """Base exception for all pynpst errors."""
    pass


class ValidationError(PyNPSTError):
    """
    Input validation failed.

    Raised when a distribution parameter or a query argument is outside
    its domain (sigma <= 0, p outside [0, 1], negative counts).
    """
    pass


class DimensionError(ValidationError):
    """
    Table dimensions or row sizes are incorrect.

    Raised when a table is created with a negative size or a row does
    not fit the table it is written to.
    """
    pass


class TableOrderError(ValidationError):
    """
    Critical-value table populated out of order.

    Critical tables are scanned linearly by estimate(); the scan only
    returns the right boundary when headers ascend and critical values
    do not increase along them.

    Attributes:
        index: Key (row index or index tuple) of the offending row
        values: Critical values that broke the ordering
    """

    def __init__(
        self,
        message: str,
        index: int | tuple[int, ...] | None = None,
        values: tuple[float, ...] | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.values = values


class NumericalError(PyNPSTError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.

    Attributes:
        quantity: Name of the quantity that could not be computed
        value: Offending value, if available
    """

    def __init__(
        self,
        message: str,
        quantity: str | None = None,
        value: float | None = None,
    ):
        super().__init__(message)
        self.quantity = quantity
        self.value = value
