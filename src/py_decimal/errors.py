class PyDecimalError(Exception):
    """Base exception for py-decimal library."""
    pass


class PyDecimalTypeError(PyDecimalError, TypeError):
    """Raised when a value is not a Decimal (or other required type)."""
    pass


class PyDecimalValueError(PyDecimalError, ValueError):
    """Raised for invalid argument values (negative sizes, non-numeric input)."""
    pass


class PyDecimalLengthError(PyDecimalValueError):
    """Raised when paired vectors do not contain the same number of elements."""
    pass


class PyDecimalUnexpectedValueError(PyDecimalValueError):
    """Raised when a callback or ingested item produces a non-conforming value."""
    pass


class PyDecimalIndexError(PyDecimalError, IndexError):
    """Raised for out of range indexes and access into an empty container."""
    pass


class PyDecimalKeyError(PyDecimalError, KeyError):
    """Raised when a time series has no entry for a timestamp."""
    pass


class PyDecimalStateError(PyDecimalError, RuntimeError):
    """Raised when an iterator is reconfigured after iteration has started."""
    pass
