"""
Element typing for DecimalVector / TimeSeries.

Containers are restricted to a single element kind (Decimal). The check happens
at the interface boundary (construction, insertion, transform results) through
validate_scalar / validate_all; nothing past the boundary re-checks types.

Numeric ingestion (to_decimal) and calendar-instant resolution (to_datetime,
to_timestamp) live here as well, since both decide what a container accepts.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional, Type
import math

from .config import make_context
from .errors import PyDecimalTypeError, PyDecimalValueError


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)


@dataclass(frozen=True)
class DataType:
    """
    Describes the element type of a container.

    Attributes
    ----------
    kind : Type
        Python type every element must be an instance of

    Examples
    --------
    >>> DataType(Decimal)
    <Decimal>
    """

    kind: Type[Any]

    def __repr__(self):
        return f"<{self.kind.__name__}>"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, self.kind)


DECIMAL = DataType(Decimal)


def _describe(value: Any) -> str:
    return type(value).__name__


def validate_scalar(value: Any, dtype: DataType = DECIMAL, error: Optional[Exception] = None) -> Any:
    """
    Validate a scalar before writing it into a container.

    Parameters
    ----------
    value : Any
        Scalar to validate
    dtype : DataType
        Target dtype
    error : Exception, optional
        Exception to raise instead of the default PyDecimalTypeError

    Returns
    -------
    Any
        The value, unchanged

    Raises
    ------
    PyDecimalTypeError
        If value is not an instance of dtype.kind
    """
    if not dtype.accepts(value):
        if error is not None:
            raise error
        raise PyDecimalTypeError(
            f"Expected instance of {dtype.kind.__name__}, given: {_describe(value)}"
        )
    return value


def validate_all(values: Iterable[Any], dtype: DataType = DECIMAL, error: Optional[Exception] = None) -> List[Any]:
    """Materialize and validate every value; raises before anything is returned."""
    out = list(values)
    for v in out:
        validate_scalar(v, dtype, error)
    return out


# ============================================================
# Numeric ingestion
# ============================================================

def _parse_numeric_string(value: str) -> Optional[Decimal]:
    text = value.strip()
    if not text:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    if not parsed.is_finite():
        return None
    return parsed


def is_numeric(value: Any) -> bool:
    """
    True for Decimal, int (bool excluded), finite float and numeric strings.

    Examples
    --------
    >>> is_numeric("1.5e3")
    True
    >>> is_numeric("12 apples")
    False
    >>> is_numeric(True)
    False
    """
    if isinstance(value, Decimal):
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        return _parse_numeric_string(value) is not None
    return False


def to_decimal(value: Any, precision: Optional[int] = None) -> Decimal:
    """
    Convert a numeric value to Decimal.

    Decimal instances are returned as-is. Floats are converted through their
    shortest repr (``str(0.1) == '0.1'``) rather than their binary expansion.
    Other values are rounded to ``precision`` significant digits.

    Raises
    ------
    PyDecimalValueError
        If value is not numeric
    """
    if isinstance(value, Decimal):
        return value
    if not is_numeric(value):
        raise PyDecimalValueError(
            f"Number must be Decimal, int, float, or numeric string, given: {value!r}"
        )
    ctx = make_context(precision)
    if isinstance(value, str):
        return ctx.create_decimal(value.strip())
    if isinstance(value, float):
        return ctx.create_decimal(str(value))
    return ctx.create_decimal(value)


# ============================================================
# Calendar instants
# ============================================================

def from_epoch_seconds(timestamp: int) -> datetime:
    """Aware UTC datetime for a Unix timestamp."""
    return EPOCH + timedelta(seconds=timestamp)


def to_epoch_seconds(instant: datetime) -> int:
    """Unix timestamp of an instant, truncated to whole seconds."""
    return (_as_utc(instant) - EPOCH) // _ONE_SECOND


def _as_utc(value: date) -> datetime:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime.combine(value, datetime.min.time(), tzinfo=timezone.utc)


def to_timestamp(value: Any) -> int:
    """
    Resolve a series key to a Unix timestamp.

    Accepts a raw timestamp (int, or an integral numeric string/Decimal/float),
    a datetime (naive values are read as UTC) or a date (midnight UTC).

    Raises
    ------
    PyDecimalTypeError
        If value cannot be resolved to a calendar instant, or is a raw
        timestamp with a fractional part
    """
    if isinstance(value, date):
        return to_epoch_seconds(_as_utc(value))
    if isinstance(value, bool):
        raise PyDecimalTypeError("Expecting timestamp or instance of datetime, given: bool")
    if isinstance(value, int):
        return value
    if is_numeric(value):
        number = to_decimal(value)
        if number != number.to_integral_value():
            raise PyDecimalTypeError(f"Timestamp must be a whole number of seconds, given: {value!r}")
        return int(number)
    raise PyDecimalTypeError(
        f"Expecting timestamp or instance of datetime, given: {_describe(value)}"
    )


def to_datetime(value: Any) -> datetime:
    """Resolve a series key to an aware UTC datetime."""
    if isinstance(value, date):
        return _as_utc(value).replace(microsecond=0)
    return from_epoch_seconds(to_timestamp(value))
