import logging
import operator
import warnings

from .config import decimal_context
from .display import _printr
from .errors import PyDecimalIndexError
from .errors import PyDecimalLengthError
from .errors import PyDecimalTypeError
from .errors import PyDecimalUnexpectedValueError
from .errors import PyDecimalValueError
from .typing import DECIMAL
from .typing import is_numeric
from .typing import to_decimal
from .typing import validate_all
from .typing import validate_scalar

from decimal import Decimal
from functools import cmp_to_key

from typing import Any
from typing import Callable
from typing import Iterable
from typing import List
from typing import Optional

logger = logging.getLogger(__name__)


class DecimalVector():
	""" Ordered, growable vector of Decimals """
	_dtype = DECIMAL
	_underlying = None
	_name = None

	def schema(self):
		"""Get the DataType schema of this vector."""
		return self._dtype


	def __init__(self, initial=(), name=None):
		"""
		Initialize a new DecimalVector.

		Every element must already be a Decimal; nothing is stored if any is not.
		Use ``DecimalVector.from_iterable`` to convert plain numbers.

		Raises
		------
		PyDecimalTypeError
			If any element is not a Decimal
		"""
		self._name = name
		if isinstance(initial, DecimalVector):
			self._underlying = list(initial._underlying)
		else:
			self._underlying = validate_all(initial, self._dtype)


	@classmethod
	def _wrap(cls, values: List[Decimal], name=None):
		""" Build a vector around an already-validated list (no copy, no checks) """
		vec = cls.__new__(cls)
		vec._underlying = values
		vec._name = name
		return vec


	@classmethod
	def from_iterable(cls, numbers: Iterable[Any], strict: bool = True, name=None):
		"""
		Create a vector from an iterable of numbers.

		Decimals are kept as-is; ints, floats and numeric strings are converted.
		A non-numeric value raises when ``strict`` is true, and is dropped
		otherwise.

		Raises
		------
		PyDecimalUnexpectedValueError
			If strict and a non-numeric value is encountered

		Examples
		--------
		>>> DecimalVector.from_iterable([1, '2.5', 3.1]).to_list()
		[Decimal('1'), Decimal('2.5'), Decimal('3.1')]
		>>> len(DecimalVector.from_iterable([1, 'n/a', 2], strict=False))
		2
		"""
		out = []
		dropped = 0
		for position, num in enumerate(numbers):
			if isinstance(num, Decimal):
				out.append(num)
			elif is_numeric(num):
				out.append(to_decimal(num))
			elif strict:
				raise PyDecimalUnexpectedValueError(
					f"Encountered non-numeric value at position {position}: {num!r}"
				)
			else:
				dropped += 1
		if dropped:
			logger.debug("Dropped %s non-numeric value(s) during ingestion", dropped)
		return cls._wrap(out, name=name)

	@classmethod
	def range(cls, start: int, stop: int, step: int = 1, name=None):
		""" Vector of the Decimals from start to stop inclusive """
		from .mathutils import decimal_range
		return cls._wrap(decimal_range(start, stop, step), name=name)


	def copy(self, new_values=None, name=...):
		# Use sentinel value (...) to distinguish between name=None (clear) and not passing name (preserve)
		use_name = self._name if name is ... else name
		if new_values is None:
			return self._wrap(list(self._underlying), name=use_name)
		return type(self)(new_values, name=use_name)

	@property
	def name(self):
		return self._name

	def rename(self, new_name):
		"""Rename this vector (returns self for chaining)"""
		self._name = new_name
		return self

	def __repr__(self):
		return _printr(self)

	def to_list(self) -> List[Decimal]:
		""" Plain list of the Decimals, in order """
		return list(self._underlying)

	def to_json(self) -> List[str]:
		""" JSON-ready list of decimal strings """
		return [str(v) for v in self._underlying]


	def __iter__(self):
		return iter(self._underlying)

	def __reversed__(self):
		return reversed(self._underlying)

	def __len__(self):
		return len(self._underlying)

	def count(self):
		return len(self._underlying)

	def __bool__(self):
		return bool(self._underlying)

	def is_empty(self):
		return not self._underlying

	def __contains__(self, value):
		return self.contains(value)

	def __eq__(self, other):
		if isinstance(other, DecimalVector):
			return self._underlying == other._underlying
		if isinstance(other, (list, tuple)):
			return self._underlying == list(other)
		return NotImplemented

	__hash__ = None


	#-----------------------------------------------------
	# Index access
	#-----------------------------------------------------

	def _check_index(self, index, allow_end=False):
		""" Normalize a negative index and bounds-check it """
		if isinstance(index, bool) or not isinstance(index, int):
			raise PyDecimalTypeError(f"Vector indices must be integers, not {type(index).__name__}")
		n = len(self._underlying)
		key = index + n if index < 0 else index
		upper = n if allow_end else n - 1
		if not (0 <= key <= upper):
			raise PyDecimalIndexError(f"Index {index} out of range for vector length {n}")
		return key

	def get(self, index):
		""" Value at a given index (negative indexes count from the end) """
		return self._underlying[self._check_index(index)]

	def set(self, index, value):
		""" Replace the value at a given index """
		validate_scalar(value, self._dtype)
		self._underlying[self._check_index(index)] = value

	def __getitem__(self, key):
		""" Get item(s) from self. Behavior varies by input type:
			# Int: a single Decimal
			# Slice: a new vector with the slice elements
			# List of bool: logical indexing (masking), length must match
			# List of int: the elements at each index
		"""
		if isinstance(key, int) and not isinstance(key, bool):
			return self.get(key)
		if isinstance(key, slice):
			return self._wrap(self._underlying[key], name=self._name)
		if isinstance(key, (list, tuple)) and key and all(isinstance(e, bool) for e in key):
			if len(key) != len(self):
				raise PyDecimalLengthError("Boolean mask length must match vector length.")
			return self._wrap([x for x, flag in zip(self._underlying, key) if flag], name=self._name)
		if isinstance(key, (list, tuple)) and all(isinstance(e, int) and not isinstance(e, bool) for e in key):
			if len(self) > 1000:
				warnings.warn('Subscript indexing is sub-optimal for large vectors; prefer slices or boolean masks')
			return self._wrap([self.get(i) for i in key], name=self._name)
		raise PyDecimalTypeError(f'Vector indices must be integers, slices, boolean masks or integer lists, not {type(key).__name__}')

	def __setitem__(self, key, value):
		if isinstance(key, slice):
			if isinstance(value, (str, bytes)) or not hasattr(value, '__iter__'):
				raise PyDecimalTypeError("Slice assignment expects an iterable of Decimals")
			values = validate_all(value, self._dtype)
			start, stop, step = key.indices(len(self))
			if step != 1 and len(range(start, stop, step)) != len(values):
				raise PyDecimalLengthError("Slice length and value length must match.")
			self._underlying[key] = values
			return
		self.set(key, value)

	def __delitem__(self, key):
		if isinstance(key, slice):
			del self._underlying[key]
			return
		self.remove(key)


	#-----------------------------------------------------
	# Sequence operations
	#-----------------------------------------------------

	def append(self, value):
		""" Fast push() for a single Decimal """
		validate_scalar(value, self._dtype)
		self._underlying.append(value)

	def push(self, *values):
		""" Add values to the end """
		self._underlying.extend(validate_all(values, self._dtype))

	def unshift(self, *values):
		""" Add values to the front """
		self._underlying[0:0] = validate_all(values, self._dtype)

	def insert(self, index, *values):
		""" Insert values at a given index, 0 <= index <= len """
		key = self._check_index(index, allow_end=True)
		self._underlying[key:key] = validate_all(values, self._dtype)

	def remove(self, index):
		""" Remove and return the value at a given index """
		return self._underlying.pop(self._check_index(index))

	def _require_elements(self, op_name):
		if not self._underlying:
			raise PyDecimalIndexError(f"Cannot {op_name} an empty vector")

	def pop(self):
		""" Remove and return the last value """
		self._require_elements('pop from')
		return self._underlying.pop()

	def shift(self):
		""" Remove and return the first value """
		self._require_elements('shift from')
		return self._underlying.pop(0)

	def first(self):
		self._require_elements('take the first value of')
		return self._underlying[0]

	def last(self):
		self._require_elements('take the last value of')
		return self._underlying[-1]

	def clear(self):
		self._underlying = []

	def slice(self, index, length=None):
		"""
		Sub-vector starting at ``index`` with up to ``length`` elements.

		A negative index counts from the end. A negative length stops that many
		elements before the end. Out of range bounds are clipped.

		Examples
		--------
		>>> v = DecimalVector.from_iterable([1, 2, 3, 4, 5])
		>>> v.slice(1, 2).to_list()
		[Decimal('2'), Decimal('3')]
		>>> v.slice(-2).to_list()
		[Decimal('4'), Decimal('5')]
		>>> v.slice(1, -1).to_list()
		[Decimal('2'), Decimal('3'), Decimal('4')]
		"""
		n = len(self._underlying)
		start = max(n + index, 0) if index < 0 else min(index, n)
		if length is None:
			stop = n
		elif length < 0:
			stop = max(n + length, start)
		else:
			stop = min(start + length, n)
		return self._wrap(self._underlying[start:stop], name=self._name)

	def sort(self, comparator: Optional[Callable[[Decimal, Decimal], int]] = None):
		""" Sort in place, ascending or by a cmp-style comparator """
		key = cmp_to_key(comparator) if comparator is not None else None
		self._underlying.sort(key=key)

	def sorted(self, comparator: Optional[Callable[[Decimal, Decimal], int]] = None):
		""" Sorted copy """
		vec = self.copy()
		vec.sort(comparator)
		return vec

	def reverse(self):
		self._underlying.reverse()

	def reversed(self):
		return self._wrap(self._underlying[::-1], name=self._name)

	def rotate(self, rotations: int):
		"""
		Rotate in place. A positive count moves values from the front to the
		back (``push(shift())`` per rotation), a negative count the other way.
		"""
		n = len(self._underlying)
		if n == 0:
			return
		r = rotations % n
		self._underlying = self._underlying[r:] + self._underlying[:r]

	def chunk(self, size: int):
		"""
		Break the vector into a list of vectors of ``size`` elements each.

		The last chunk may be shorter. A size of 0 gives a single empty vector.

		Raises
		------
		PyDecimalValueError
			If size is negative
		"""
		if size < 0:
			raise PyDecimalValueError("Size must not be negative")
		if size == 0:
			return [type(self)()]
		if size == len(self._underlying):
			return [self.copy()]
		return [
			self._wrap(self._underlying[i:i + size])
			for i in range(0, len(self._underlying), size)
		]

	def pad(self, size: int, value: Optional[Decimal] = None):
		"""
		Copy of the vector padded at the end with ``value`` (default 0) up to
		``size`` elements.

		Raises
		------
		PyDecimalValueError
			If size is negative or less than the current length
		"""
		if size < 0:
			raise PyDecimalValueError("Size must not be negative")
		n = len(self._underlying)
		if size < n:
			raise PyDecimalValueError(f"Cannot pad to less than current size ({size} < {n})")
		if value is None:
			value = Decimal(0)
		validate_scalar(value, self._dtype)
		return self._wrap(self._underlying + [value] * (size - n), name=self._name)


	#-----------------------------------------------------
	# Functional operations
	#-----------------------------------------------------

	def map(self, callback: Callable[[Decimal], Decimal]):
		""" New vector of ``callback(v)`` for each value """
		results = [callback(v) for v in self._underlying]
		validate_all(results, self._dtype, PyDecimalUnexpectedValueError(
			"Callback passed to map() must return Decimal instances"
		))
		return self._wrap(results, name=self._name)

	def filter(self, callback: Optional[Callable[[Decimal], bool]] = None):
		""" New vector of the values for which ``callback`` is truthy (non-zero values if omitted) """
		if callback is None:
			return self._wrap([v for v in self._underlying if v], name=self._name)
		return self._wrap([v for v in self._underlying if callback(v)], name=self._name)

	def reduce(self, callback: Callable[[Optional[Decimal], Decimal], Optional[Decimal]], initial: Optional[Decimal] = None):
		"""
		Fold the vector into a single value.

		The first call receives ``initial`` as the carry, even when it is None.

		Raises
		------
		PyDecimalTypeError
			If initial is given and is not a Decimal
		PyDecimalUnexpectedValueError
			If the final result is neither a Decimal nor None
		"""
		if initial is not None:
			validate_scalar(initial, self._dtype)
		carry = initial
		for v in self._underlying:
			carry = callback(carry, v)
		if carry is None or isinstance(carry, Decimal):
			return carry
		raise PyDecimalUnexpectedValueError(
			"Callback passed to reduce() must return a Decimal instance or None."
		)

	def merge(self, values):
		""" New vector with ``values`` appended """
		if isinstance(values, (str, bytes)) or not hasattr(values, '__iter__'):
			raise PyDecimalTypeError("Expecting an iterable of Decimals")
		return self._wrap(self._underlying + validate_all(values, self._dtype), name=self._name)

	def apply(self, callback: Callable[[Decimal], Decimal]):
		"""
		Update every value in place with ``callback(v)``.

		All results are computed, then all are validated, and only then stored.
		If any result is not a Decimal the vector is left untouched.

		Raises
		------
		PyDecimalUnexpectedValueError
			If the callback returns a non-Decimal value
		"""
		results = [callback(v) for v in self._underlying]
		validate_all(results, self._dtype, PyDecimalUnexpectedValueError(
			"Encountered non-Decimal value after applying callback"
		))
		self._underlying = results

	def contains(self, *values):
		""" True if every given value is in the vector (non-Decimals never are) """
		return all(isinstance(v, Decimal) and v in self._underlying for v in values)

	def find(self, value):
		""" Index of the first occurrence of ``value``, or None """
		if not isinstance(value, Decimal):
			return None
		try:
			return self._underlying.index(value)
		except ValueError:
			return None

	def join(self, glue=""):
		return (glue or "").join(str(v) for v in self._underlying)


	""" Math operations """
	def _check_length(self, other):
		if len(other) != len(self._underlying):
			raise PyDecimalLengthError("Vectors must contain the same number of elements")

	def _elementwise_operation(self, other, op_func, op_symbol: str):
		"""Helper function to handle element-wise operations with broadcasting."""
		try:
			with decimal_context():
				if isinstance(other, DecimalVector):
					self._check_length(other)
					result_values = [op_func(x, y) for x, y in zip(self._underlying, other._underlying)]
				elif hasattr(other, '__iter__') and not isinstance(other, (str, bytes, bytearray)):
					other = list(other)
					self._check_length(other)
					result_values = [op_func(x, y) for x, y in zip(self._underlying, other)]
				else:
					result_values = [op_func(x, other) for x in self._underlying]
		except TypeError:
			raise PyDecimalTypeError(f"Unsupported operand type(s) for '{op_symbol}': 'Decimal' and '{type(other).__name__}'.")
		return self._wrap(result_values)

	def _unary_operation(self, op_func):
		"""Helper function to handle unary operations on each element."""
		with decimal_context():
			return self._wrap([op_func(x) for x in self._underlying], name=self._name)

	def __add__(self, other):
		return self._elementwise_operation(other, operator.add, '+')

	def __sub__(self, other):
		return self._elementwise_operation(other, operator.sub, '-')

	def __mul__(self, other):
		return self._elementwise_operation(other, operator.mul, '*')

	def __truediv__(self, other):
		return self._elementwise_operation(other, operator.truediv, '/')

	def __pow__(self, other):
		return self._elementwise_operation(other, operator.pow, '**')

	def __radd__(self, other):
		return self._elementwise_operation(other, lambda y, x: x + y, '+')

	def __rsub__(self, other):
		return self._elementwise_operation(other, lambda y, x: x - y, '-')

	def __rmul__(self, other):
		return self._elementwise_operation(other, lambda y, x: x * y, '*')

	def __rtruediv__(self, other):
		return self._elementwise_operation(other, lambda y, x: x / y, '/')

	def __neg__(self):
		return self._unary_operation(operator.neg)

	def __pos__(self):
		return self._unary_operation(operator.pos)

	def __abs__(self):
		return self._unary_operation(operator.abs)


	"""
	Aggregates
	"""
	def max(self):
		self._require_elements('take the max of')
		return max(self._underlying)

	def min(self):
		self._require_elements('take the min of')
		return min(self._underlying)

	def sum(self):
		with decimal_context():
			return sum(self._underlying, Decimal(0))

	def prod(self):
		""" Product of all values; an empty vector gives Decimal(1) """
		product = Decimal(1)
		with decimal_context():
			for v in self._underlying:
				product = product * v
		return product

	product = prod

	def mean(self):
		""" Arithmetic mean. An empty vector raises decimal.InvalidOperation (0/0). """
		with decimal_context():
			return self.sum() / len(self._underlying)

	avg = mean

	def delta(self):
		"""
		Vector of the difference between each value and the one before it,
		i.e. ``v[i] - v[i-1]`` for i >= 1 (one element shorter than self).
		"""
		u = self._underlying
		with decimal_context():
			return self._wrap([u[i] - u[i - 1] for i in range(1, len(u))])

	def rdelta(self):
		"""
		Relative change between each value and the one before it,
		``(v[i] - v[i-1]) / v[i-1]`` for i >= 1.
		"""
		u = self._underlying
		with decimal_context():
			return self._wrap([(u[i] - u[i - 1]) / u[i - 1] for i in range(1, len(u))])

	def diff(self, y):
		""" Element-wise ``self[i] - y[i]`` """
		self._require_vector(y)
		self._check_length(y)
		with decimal_context():
			return self._wrap([x - w for x, w in zip(self._underlying, y._underlying)])

	def _require_vector(self, y):
		if not isinstance(y, DecimalVector):
			raise PyDecimalTypeError(f"Expecting a DecimalVector, given: {type(y).__name__}")


	"""
	Statistics
	"""
	def central_moment(self, k: int, sample: bool = True) -> Decimal:
		"""
		Central moment of order ``k``: the mean of ``(v - mean)**k``.

		Parameters
		----------
		k : int
			Order of the moment
		sample : bool
			Divide by n - 1 (sample) instead of n (population)

		Returns
		-------
		Decimal
		"""
		n = len(self._underlying)
		count = n - 1 if sample else n
		with decimal_context():
			m = self.mean()
			total = sum(((v - m) ** k for v in self._underlying), Decimal(0))
			return total / count

	def skewness(self) -> Decimal:
		""" Third central moment over the second central moment raised to 2/3 """
		with decimal_context():
			return self.central_moment(3) / (self.central_moment(2) ** (Decimal(2) / Decimal(3)))

	def var(self) -> Decimal:
		""" Variance, treating the data as a sample """
		return self.central_moment(2)

	def varp(self) -> Decimal:
		""" Variance, treating the data as a population """
		return self.central_moment(2, sample=False)

	def stdev(self) -> Decimal:
		""" Standard deviation, treating the data as a sample """
		with decimal_context():
			return self.var().sqrt()

	def stdevp(self) -> Decimal:
		""" Standard deviation, treating the data as a population """
		with decimal_context():
			return self.varp().sqrt()

	def coefficient_of_variation(self) -> Decimal:
		""" Relative standard deviation, stdev / mean """
		with decimal_context():
			return self.stdev() / self.mean()

	relstdev = coefficient_of_variation

	def index_of_dispersion(self) -> Decimal:
		""" Variance-to-mean ratio, var / mean """
		with decimal_context():
			return self.var() / self.mean()

	relvar = index_of_dispersion

	def covar(self, y) -> Decimal:
		"""
		Population covariance with ``y``:
		``(sum(x*y) - sum(x)*sum(y)/n) / n``

		Raises
		------
		PyDecimalLengthError
			If y does not have the same number of elements
		"""
		self._require_vector(y)
		self._check_length(y)
		n = len(self._underlying)
		with decimal_context():
			a = self.sum() * y.sum() / n
			s = sum((x * w for x, w in zip(self._underlying, y._underlying)), Decimal(0))
			return (s - a) / n

	def correl(self, y) -> Decimal:
		""" Pearson correlation coefficient, covar / (stdevp(x) * stdevp(y)) """
		with decimal_context():
			return self.covar(y) / (self.stdevp() * y.stdevp())

	pearson_r = correl

	def regression_sum_of_squares(self, ybar) -> Decimal:
		"""
		Explained sum of squares, ``sum((x - ybar)**2)``.

		Parameters
		----------
		ybar : Decimal or DecimalVector
			Response variable mean, or a vector to take the mean of
		"""
		if isinstance(ybar, DecimalVector):
			ybar = ybar.mean()
		elif not isinstance(ybar, Decimal):
			raise PyDecimalTypeError("Argument must be Decimal or DecimalVector")
		with decimal_context():
			return sum(((v - ybar) ** 2 for v in self._underlying), Decimal(0))

	def residual_sum_of_squares(self, y) -> Decimal:
		""" Sum of squared residuals, ``sum((x - y)**2)`` """
		self._require_vector(y)
		self._check_length(y)
		with decimal_context():
			return sum(((x - w) ** 2 for x, w in zip(self._underlying, y._underlying)), Decimal(0))

	def total_sum_of_squares(self, y) -> Decimal:
		""" regression_sum_of_squares(y) + residual_sum_of_squares(y) """
		self._require_vector(y)
		self._check_length(y)
		with decimal_context():
			return self.regression_sum_of_squares(y) + self.residual_sum_of_squares(y)
