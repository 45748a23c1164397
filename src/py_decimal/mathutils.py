"""
Free-standing helpers over Decimal.

The aggregates (dmax, dmin, dsum, dmean, dprod) take either several numbers
or a single iterable / DecimalVector, and accept anything ``to_decimal`` does:

>>> dsum(1, "2.5", Decimal("0.5"))
Decimal('4.0')
>>> dmax([3, 9, 4])
Decimal('9')
"""

from __future__ import annotations
from decimal import Decimal
from typing import Any, List, Optional
import re

from .config import IEEE_DECIMAL128, decimal_context, get_precision, make_context
from .errors import PyDecimalUnexpectedValueError, PyDecimalValueError
from .typing import is_numeric, to_decimal, validate_scalar
from .vector import DecimalVector


# Pi to 98 decimal places
PI = (
    "3.14159265358979323846264338327950288419716939937510"
    "582097494459230781640628620899862803482534211707"
)
_PI_DIGITS = len(PI) - 2

# Characters kept when pulling a number out of formatted text
_NON_NUMERIC = re.compile(r"[^0-9+\-.eE]")


def pi(digits: int = IEEE_DECIMAL128) -> Decimal:
    """
    Pi rounded to ``digits`` places after the decimal point.

    Unlike precision elsewhere, ``digits`` counts decimal places, not
    significant digits.

    Raises
    ------
    PyDecimalValueError
        If digits is negative or more than 98
    """
    if digits < 0 or digits > _PI_DIGITS:
        raise PyDecimalValueError(f"Pi is available to between 0 and {_PI_DIGITS} decimal places, got {digits}")
    return make_context(digits + 1).create_decimal(PI)


def cuberoot(x: Decimal) -> Decimal:
    """Real cube root; negative input gives a negative root."""
    validate_scalar(x)
    precision = get_precision()
    # guard digits so exact cubes come back exact after rounding
    with decimal_context(precision + 6):
        root = abs(x) ** (Decimal(1) / Decimal(3))
    with decimal_context(precision):
        root = +root
        return -root if x < 0 else root


def gcd(a: Decimal, b: Decimal) -> Decimal:
    """
    Greatest common divisor of ``a`` and ``b`` by Euclid's algorithm.

    gcd(a, 0) is abs(a); gcd(0, 0) is 0.
    """
    validate_scalar(a)
    validate_scalar(b)
    with decimal_context():
        a, b = abs(a), abs(b)
        while b:
            a, b = b, a % b
        return a


def lcm(a: Decimal, b: Decimal) -> Decimal:
    """Least common multiple of ``a`` and ``b``; 0 if either is 0."""
    validate_scalar(a)
    validate_scalar(b)
    if not a or not b:
        return Decimal(0)
    with decimal_context():
        return abs(a * b) / gcd(a, b)


def decimal_range(start: int, stop: int, step: int = 1) -> List[Decimal]:
    """
    Decimals from ``start`` to ``stop`` inclusive.

    The range counts down when start is greater than stop; ``step`` is the
    (positive) distance between values either way.
    """
    if step <= 0:
        raise PyDecimalValueError(f"Step must be positive, got {step}")
    if start <= stop:
        return [Decimal(n) for n in range(start, stop + 1, step)]
    return [Decimal(n) for n in range(start, stop - 1, -step)]


def parse_to_decimal(text: str, precision: Optional[int] = None) -> Decimal:
    """
    Parse a formatted number.

    Handles percentages (``"23.5%"`` gives ``0.235``), thousands separators
    (``"2,345"``) and currency symbols (``"$ 123.00"``).

    Raises
    ------
    PyDecimalUnexpectedValueError
        If no number can be recovered from the text
    """
    if "%" in text:
        number = text.replace("%", "").strip()
        if is_numeric(number):
            with decimal_context(precision):
                return to_decimal(number, precision) / 100
    else:
        number = _NON_NUMERIC.sub("", text)
        if is_numeric(number):
            return to_decimal(number, precision)
    raise PyDecimalUnexpectedValueError(f"String could not be parsed to a number: {text!r}")


# ============================================================
# Variadic aggregates
# ============================================================

def _collect(name: str, values: tuple) -> List[Decimal]:
    if len(values) == 1 and not isinstance(values[0], (str, bytes)) and hasattr(values[0], "__iter__"):
        values = tuple(values[0])
    if not values:
        raise PyDecimalValueError(f"{name}() requires at least one value")
    return [to_decimal(v) for v in values]


def dmax(*values: Any) -> Decimal:
    """Largest of the given numbers."""
    if len(values) == 1 and isinstance(values[0], DecimalVector):
        return values[0].max()
    return max(_collect("dmax", values))


def dmin(*values: Any) -> Decimal:
    """Smallest of the given numbers."""
    if len(values) == 1 and isinstance(values[0], DecimalVector):
        return values[0].min()
    return min(_collect("dmin", values))


def dsum(*values: Any) -> Decimal:
    if len(values) == 1 and isinstance(values[0], DecimalVector):
        return values[0].sum()
    decimals = _collect("dsum", values)
    with decimal_context():
        return sum(decimals, Decimal(0))


def dmean(*values: Any) -> Decimal:
    if len(values) == 1 and isinstance(values[0], DecimalVector):
        return values[0].mean()
    decimals = _collect("dmean", values)
    with decimal_context():
        return sum(decimals, Decimal(0)) / len(decimals)


def dprod(*values: Any) -> Decimal:
    """Product of the given numbers; an empty vector gives 1."""
    if len(values) == 1 and isinstance(values[0], DecimalVector):
        return values[0].prod()
    product = Decimal(1)
    with decimal_context():
        for d in _collect("dprod", values):
            product = product * d
    return product
