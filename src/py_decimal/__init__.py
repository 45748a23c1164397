"""
py-decimal: exact decimal vectors and time series

Built on the standard library ``decimal`` module, so values never pick up
binary floating point error.

Main classes:
	- DecimalVector: 1D vector of Decimals with sequence algebra and statistics
	- TimeSeries: chronological mapping of calendar instants to Decimals
	- SeriesIterator: cursor over one TimeSeries
	- DualSeriesIterator: lock-step cursor over two TimeSeries yielding DatedDecimalPair

Zero external dependencies - pure Python stdlib only.
"""

from .config import DEFAULT_PRECISION, IEEE_DECIMAL32, IEEE_DECIMAL64, IEEE_DECIMAL128
from .config import decimal_context, get_precision, set_precision
from .errors import (
	PyDecimalError,
	PyDecimalTypeError,
	PyDecimalValueError,
	PyDecimalLengthError,
	PyDecimalUnexpectedValueError,
	PyDecimalIndexError,
	PyDecimalKeyError,
	PyDecimalStateError,
)
from .pair import DecimalPair, DatedDecimalPair
from .vector import DecimalVector
from .timeseries import TimeSeries
from .iterators import SeriesIterator, DualSeriesIterator, AlignmentSnapshot
from .typing import to_decimal, is_numeric
from .mathutils import pi, cuberoot, gcd, lcm, decimal_range, parse_to_decimal
from .mathutils import dmax, dmin, dsum, dmean, dprod

__version__ = "0.1.0"
__all__ = [
	"DecimalVector",
	"TimeSeries",
	"SeriesIterator",
	"DualSeriesIterator",
	"AlignmentSnapshot",
	"DecimalPair",
	"DatedDecimalPair",
	"to_decimal",
	"is_numeric",
	"pi",
	"cuberoot",
	"gcd",
	"lcm",
	"decimal_range",
	"parse_to_decimal",
	"dmax",
	"dmin",
	"dsum",
	"dmean",
	"dprod",
	"decimal_context",
	"get_precision",
	"set_precision",
	"DEFAULT_PRECISION",
	"IEEE_DECIMAL32",
	"IEEE_DECIMAL64",
	"IEEE_DECIMAL128",
	"PyDecimalError",
	"PyDecimalTypeError",
	"PyDecimalValueError",
	"PyDecimalLengthError",
	"PyDecimalUnexpectedValueError",
	"PyDecimalIndexError",
	"PyDecimalKeyError",
	"PyDecimalStateError",
]
