"""
Precision and display settings for py-decimal.

All arithmetic performed by DecimalVector, TimeSeries and the math helpers runs
inside a local decimal context built from these settings, so results do not
depend on whatever the caller left in the thread's current context.
"""

from __future__ import annotations
from contextlib import contextmanager
from decimal import Context, ROUND_HALF_EVEN, localcontext
from typing import Iterator, Optional

from .errors import PyDecimalValueError


# Significant digits (same default as decimal.DefaultContext)
DEFAULT_PRECISION = 28

# IEEE 754R decimal interchange formats
IEEE_DECIMAL32 = 7
IEEE_DECIMAL64 = 16
IEEE_DECIMAL128 = 34

DEFAULT_ROUNDING = ROUND_HALF_EVEN

# How many rows to show before inserting "..."
MAX_HEAD_ROWS = 5

_precision = DEFAULT_PRECISION


def _check_precision(precision) -> int:
    if isinstance(precision, bool) or not isinstance(precision, int) or precision <= 0:
        raise PyDecimalValueError(f"Precision must be a positive integer, got {precision!r}")
    return precision


def get_precision() -> int:
    """Current number of significant digits used for computations."""
    return _precision


def set_precision(precision: int) -> None:
    """Change the process-wide number of significant digits."""
    global _precision
    _precision = _check_precision(precision)


def make_context(precision: Optional[int] = None) -> Context:
    """
    Build a fresh decimal Context.

    Parameters
    ----------
    precision : int, optional
        Significant digits; defaults to ``get_precision()``.

    Returns
    -------
    Context
        Context with the configured rounding. Traps are inherited from
        ``decimal.DefaultContext`` (InvalidOperation, DivisionByZero, Overflow),
        so arithmetic faults propagate as exceptions.
    """
    if precision is None:
        precision = _precision
    else:
        precision = _check_precision(precision)
    return Context(prec=precision, rounding=DEFAULT_ROUNDING)


@contextmanager
def decimal_context(precision: Optional[int] = None) -> Iterator[Context]:
    """Run the enclosed block with a local context of the given precision."""
    with localcontext(make_context(precision)) as ctx:
        yield ctx
