"""
Tests for pynpst exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyNPSTError)
    - Diagnostic attributes on TableOrderError and NumericalError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pynpst.core.exceptions import (
    DimensionError,
    NumericalError,
    PyNPSTError,
    TableOrderError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyNPSTError."""

    def test_validation_error_is_pynpst_error(self):
        with pytest.raises(PyNPSTError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_table_order_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise TableOrderError("out of order")

    def test_numerical_error_is_pynpst_error(self):
        with pytest.raises(PyNPSTError):
            raise NumericalError("computation failed")

    def test_numerical_error_is_not_validation_error(self):
        assert not issubclass(NumericalError, ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestTableOrderError:

    def test_attributes(self):
        err = TableOrderError("bad row", index=(2, 3), values=(1.0, 2.0))
        assert err.index == (2, 3)
        assert err.values == (1.0, 2.0)
        assert str(err) == "bad row"

    def test_defaults_none(self):
        err = TableOrderError("bad row")
        assert err.index is None
        assert err.values is None


class TestNumericalError:

    def test_attributes(self):
        err = NumericalError("overflow", quantity="variance", value=-1.0)
        assert err.quantity == "variance"
        assert err.value == -1.0

    def test_defaults_none(self):
        err = NumericalError("overflow")
        assert err.quantity is None
        assert err.value is None
