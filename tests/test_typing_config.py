"""Element typing, numeric ingestion, instant resolution and precision settings"""
import pytest
from datetime import date, datetime, timezone
from decimal import Decimal as D

from py_decimal import DecimalVector, config
from py_decimal.errors import PyDecimalTypeError, PyDecimalValueError
from py_decimal.typing import (
    DECIMAL,
    DataType,
    from_epoch_seconds,
    is_numeric,
    to_datetime,
    to_decimal,
    to_epoch_seconds,
    to_timestamp,
    validate_all,
    validate_scalar,
)


@pytest.fixture
def restore_precision():
    saved = config.get_precision()
    yield
    config.set_precision(saved)


class TestDataType:

    def test_repr(self):
        assert repr(DECIMAL) == '<Decimal>'
        assert DataType(D) == DECIMAL

    def test_validate_scalar(self):
        assert validate_scalar(D(1)) == D(1)
        with pytest.raises(PyDecimalTypeError, match='Expected instance of Decimal, given: int'):
            validate_scalar(1)

    def test_validate_scalar_custom_error(self):
        with pytest.raises(KeyError):
            validate_scalar('x', DECIMAL, KeyError('custom'))

    def test_validate_all_materializes(self):
        assert validate_all(iter([D(1), D(2)])) == [D(1), D(2)]


class TestNumericIngestion:

    @pytest.mark.parametrize("value,expected", [
        (D('1.5'), True),
        (3, True),
        (2.5, True),
        ('1.5e3', True),
        (' 42 ', True),
        (True, False),
        (float('nan'), False),
        (float('inf'), False),
        ('NaN', False),
        ('12 apples', False),
        ('', False),
        (None, False),
        ([1], False),
    ])
    def test_is_numeric(self, value, expected):
        assert is_numeric(value) is expected

    def test_to_decimal_float_uses_shortest_repr(self):
        assert to_decimal(0.1) == D('0.1')

    def test_to_decimal_passthrough(self):
        d = D('1.23456789')
        assert to_decimal(d) is d

    def test_to_decimal_rounds_to_precision(self):
        assert to_decimal('1.23456789', precision=3) == D('1.23')

    def test_to_decimal_rejects(self):
        with pytest.raises(PyDecimalValueError):
            to_decimal('abc')


class TestInstants:

    def test_epoch_round_trip_truncates(self):
        instant = datetime(2020, 5, 17, 8, 30, 15, 999999, tzinfo=timezone.utc)
        ts = to_epoch_seconds(instant)
        assert from_epoch_seconds(ts) == instant.replace(microsecond=0)

    @pytest.mark.parametrize("value,expected", [
        (86400, 86400),
        ('86400', 86400),
        (D('86400.0'), 86400),
        (86400.0, 86400),
        (date(1970, 1, 2), 86400),
        (datetime(1970, 1, 2), 86400),
    ])
    def test_to_timestamp(self, value, expected):
        assert to_timestamp(value) == expected

    def test_to_datetime(self):
        assert to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert to_datetime(date(2000, 1, 1)).tzinfo is not None

    @pytest.mark.parametrize("value", [False, 'tomorrow', object(), '1.5', 1.7, D('86400.7')])
    def test_to_timestamp_rejects(self, value):
        with pytest.raises(PyDecimalTypeError):
            to_timestamp(value)


class TestPrecision:

    def test_default(self):
        assert config.get_precision() == config.DEFAULT_PRECISION == 28

    def test_decimal_context(self):
        with config.decimal_context(4):
            assert D(1) / D(3) == D('0.3333')

    @pytest.mark.parametrize("precision", [0, -1, 2.5, True])
    def test_invalid_precision(self, precision):
        with pytest.raises(PyDecimalValueError):
            config.set_precision(precision)

    def test_set_precision_affects_computations(self, restore_precision):
        config.set_precision(config.IEEE_DECIMAL32)
        v = DecimalVector([D(1), D(2), D(3)])
        assert (v / D(3)).first() == D('0.3333333')
        assert v.mean() == D(2)
