import pytest
from decimal import Decimal as D

from py_decimal import DecimalVector, TimeSeries, SeriesIterator
from py_decimal.errors import (
    PyDecimalError,
    PyDecimalIndexError,
    PyDecimalKeyError,
    PyDecimalLengthError,
    PyDecimalStateError,
    PyDecimalTypeError,
    PyDecimalUnexpectedValueError,
    PyDecimalValueError,
)


@pytest.mark.parametrize("cls,builtin", [
    (PyDecimalTypeError, TypeError),
    (PyDecimalValueError, ValueError),
    (PyDecimalLengthError, ValueError),
    (PyDecimalUnexpectedValueError, ValueError),
    (PyDecimalIndexError, IndexError),
    (PyDecimalKeyError, KeyError),
    (PyDecimalStateError, RuntimeError),
])
def test_hierarchy(cls, builtin):
    assert issubclass(cls, PyDecimalError)
    assert issubclass(cls, builtin)


def test_wrong_element_type_raises_pydecimal_typeerror():
    with pytest.raises(TypeError):
        DecimalVector([1, 2])


def test_out_of_range_raises_pydecimal_indexerror():
    v = DecimalVector([D(1)])
    with pytest.raises(IndexError, match='out of range for vector length 1'):
        v.get(1)


def test_length_mismatch_is_a_valueerror():
    with pytest.raises(ValueError, match='same number of elements'):
        DecimalVector([D(1)]).covar(DecimalVector([D(1), D(2)]))


def test_missing_timestamp_raises_pydecimal_keyerror():
    with pytest.raises(PyDecimalKeyError):
        TimeSeries().get(0)


def test_bad_transform_raises_unexpected_value():
    with pytest.raises(PyDecimalUnexpectedValueError):
        DecimalVector([D(1)]).apply(float)


def test_iterator_misuse_raises_state_error():
    it = SeriesIterator(TimeSeries({0: D(1)}))
    next(it)
    with pytest.raises(RuntimeError):
        it.set_key_mode(SeriesIterator.KEY_AS_DATETIME)
