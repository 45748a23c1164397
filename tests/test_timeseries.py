"""TimeSeries - keys, lazy ordering, lookups and interval inference"""
import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal as D

from py_decimal import DecimalVector, TimeSeries
from py_decimal.errors import (
    PyDecimalIndexError,
    PyDecimalKeyError,
    PyDecimalTypeError,
    PyDecimalUnexpectedValueError,
)

UTC = timezone.utc
DAY = 86400


def day(n):
    return datetime(2019, 1, n, tzinfo=UTC)


@pytest.fixture
def series():
    ts = TimeSeries(name='close')
    ts.set(day(3), D('3'))
    ts.set(day(1), D('1'))
    ts.set(day(2), D('2'))
    return ts


class TestCreation:
    """Hydration from mappings and pairs"""

    def test_from_mapping(self):
        ts = TimeSeries({day(2): D(2), day(1): D(1)})
        assert ts.values() == [D(1), D(2)]

    def test_from_pairs(self):
        ts = TimeSeries([(day(1), D(1)), (DAY * 10, D(5))])
        assert ts.count() == 2
        assert ts.get(datetime(1970, 1, 11, tzinfo=UTC)) == D(5)

    def test_from_other_series(self, series):
        ts = TimeSeries(series)
        assert ts == series

    def test_rejects_non_decimal(self):
        with pytest.raises(PyDecimalTypeError):
            TimeSeries({day(1): 1})

    def test_rejects_bad_key(self):
        with pytest.raises(PyDecimalTypeError):
            TimeSeries({'yesterday': D(1)})

    def test_rejects_vector_of_values(self):
        with pytest.raises(PyDecimalTypeError, match='pairs'):
            TimeSeries(DecimalVector.from_iterable([1, 2]))

    @pytest.mark.parametrize("source", [5, 'abc', [(day(1), D(1), D(2))]])
    def test_rejects_non_pair_sources(self, source):
        with pytest.raises(PyDecimalTypeError):
            TimeSeries(source)

    def test_update_is_incremental(self):
        ts = TimeSeries()
        with pytest.raises(PyDecimalTypeError):
            ts.update([(day(1), D(1)), (day(2), 2)])
        assert ts.has(day(1))
        assert not ts.has(day(2))

    def test_from_iterable(self):
        ts = TimeSeries.from_iterable({day(1): '1.5', day(2): 2})
        assert ts.values() == [D('1.5'), D(2)]

    def test_from_iterable_strict(self):
        with pytest.raises(PyDecimalUnexpectedValueError):
            TimeSeries.from_iterable({day(1): 'n/a'})

    def test_from_iterable_lenient(self):
        ts = TimeSeries.from_iterable({day(1): 'n/a', day(2): '4'}, strict=False)
        assert ts.keys() == [DAY * 17898]
        assert ts.get(day(2)) == D(4)


class TestKeys:
    """Calendar instant and timestamp resolution"""

    def test_equivalent_keys(self):
        ts = TimeSeries()
        ts.set(datetime(1970, 1, 2, tzinfo=UTC), D(1))
        assert ts.has(DAY)
        assert ts.has(date(1970, 1, 2))
        assert ts.has(datetime(1970, 1, 2))
        assert ts.has_timestamp(DAY)

    def test_truncates_to_seconds(self):
        ts = TimeSeries()
        ts.set(datetime(2019, 1, 1, 0, 0, 0, 900000, tzinfo=UTC), D(1))
        assert ts.has(day(1))

    def test_aware_datetimes_are_converted_to_utc(self):
        ts = TimeSeries()
        plus_two = timezone(timedelta(hours=2))
        ts.set(datetime(2019, 1, 1, 2, tzinfo=plus_two), D(1))
        assert ts.has(day(1))

    def test_set_overwrites(self):
        ts = TimeSeries()
        ts.set(day(1), D(1))
        ts[day(1)] = D(2)
        assert ts.count() == 1
        assert ts[day(1)] == D(2)

    @pytest.mark.parametrize("key", [True, 'abc', None, 1.5j])
    def test_unresolvable_keys(self, key):
        with pytest.raises(PyDecimalTypeError):
            TimeSeries().has(key)


class TestLookup:
    """get/unset/clear"""

    def test_get_missing(self, series):
        with pytest.raises(PyDecimalKeyError):
            series.get(day(9))
        with pytest.raises(KeyError):
            series[day(9)]

    def test_get_timestamp(self, series):
        assert series.get_timestamp(series.keys()[0]) == D(1)

    def test_unset(self, series):
        series.unset(day(2))
        assert not series.has(day(2))
        assert len(series) == 2

    def test_unset_missing_is_noop(self, series):
        series.unset(day(9))
        assert len(series) == 3

    def test_delitem_missing_raises(self, series):
        with pytest.raises(PyDecimalKeyError):
            del series[day(9)]
        del series[day(1)]
        assert day(1) not in series

    def test_clear(self, series):
        series.clear()
        assert series.is_empty()
        assert not series


class TestOrdering:
    """Lazy chronological ordering"""

    def test_keys_strictly_ascending(self):
        ts = TimeSeries()
        for n in (5, 3, 9, 1, 3, 7):
            ts.set(day(n), D(n))
        keys = ts.keys()
        assert keys == sorted(set(keys))
        assert len(keys) == 5

    def test_mutation_marks_dirty(self, series):
        assert series._dirty
        series.keys()
        assert not series._dirty
        series.set(day(4), D(4))
        assert series._dirty
        series.unset(day(4))
        assert series._dirty

    def test_first_last(self, series):
        assert series.first() == (DAY * 17897, D(1))
        assert series.last() == (DAY * 17899, D(3))
        assert series.first_datetime() == day(1)
        assert series.last_datetime() == day(3)

    @pytest.mark.parametrize("method", ['first', 'last', 'first_datetime', 'last_datetime'])
    def test_first_last_empty(self, method):
        with pytest.raises(PyDecimalIndexError):
            getattr(TimeSeries(), method)()

    def test_values_is_vector(self, series):
        values = series.values()
        assert isinstance(values, DecimalVector)
        assert values == [D(1), D(2), D(3)]
        assert values.name == 'close'

    def test_serialization(self, series):
        assert list(series.to_dict().values()) == [D(1), D(2), D(3)]
        assert series.to_pairs()[0] == (day(1), D(1))
        assert series.to_json() == {DAY * 17897: '1', DAY * 17898: '2', DAY * 17899: '3'}
        assert series.datetimes() == [day(1), day(2), day(3)]
        assert series.items()[-1] == (DAY * 17899, D(3))

    def test_iteration(self, series):
        assert list(series) == [(0, D(1)), (1, D(2)), (2, D(3))]

    def test_copy_is_independent(self, series):
        c = series.copy()
        c.set(day(9), D(9))
        assert len(series) == 3
        assert c != series


class TestIntervals:
    """Minimum interval, period and gaps"""

    def test_min_date_interval(self):
        ts = TimeSeries({day(1): D(1), day(2): D(2), day(31): D(31)})
        assert ts.min_date_interval() == timedelta(days=1)

    def test_min_date_interval_single_entry(self):
        assert TimeSeries({day(1): D(1)}).min_date_interval() is None

    def test_min_date_interval_empty(self):
        with pytest.raises(PyDecimalIndexError):
            TimeSeries().min_date_interval()

    def test_date_period_covers_gaps(self):
        ts = TimeSeries({day(1): D(1), day(2): D(2), day(31): D(31)})
        period = ts.date_period()
        assert len(period) == 31
        assert period[0] == day(1)
        assert period[-1] == day(31)

    def test_date_period_single_entry(self):
        assert TimeSeries({day(5): D(1)}).date_period() == [day(5)]

    def test_date_intervals(self):
        ts = TimeSeries({day(31): D(3), day(1): D(1), day(2): D(2)})
        assert ts.date_intervals() == [timedelta(0), timedelta(days=1), timedelta(days=29)]

    def test_date_intervals_empty(self):
        assert TimeSeries().date_intervals() == []


class TestRepr:
    """Row display"""

    def test_empty(self):
        assert repr(TimeSeries()) == '# empty'

    def test_rows(self, series):
        lines = repr(series).splitlines()
        assert lines[1].startswith('2019-01-01T00:00:00+00:00')
        assert lines[1].endswith('1')
        assert lines[-1] == '# 3 entry time series <Decimal>'
