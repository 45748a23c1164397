import logging

from .display import _printr
from .errors import PyDecimalIndexError
from .errors import PyDecimalKeyError
from .errors import PyDecimalTypeError
from .errors import PyDecimalUnexpectedValueError
from .typing import DECIMAL
from .typing import from_epoch_seconds
from .typing import is_numeric
from .typing import to_decimal
from .typing import to_timestamp
from .typing import validate_scalar
from .vector import DecimalVector

from datetime import datetime
from datetime import timedelta
from decimal import Decimal

from typing import Dict
from typing import List
from typing import Optional
from typing import Tuple

logger = logging.getLogger(__name__)


class TimeSeries():
	"""
	Chronological mapping of calendar instants to Decimals.

	Keys are stored as Unix timestamps (whole seconds); any datetime, date or
	raw timestamp that resolves to the same second addresses the same entry.

	Insertion order is not kept. The series carries a dirty tag that every
	mutation sets, and every read that exposes more than one element (keys,
	values, first/last, iteration, intervals) re-sorts first when it is set.

	Examples
	--------
	>>> ts = TimeSeries()
	>>> ts.set(datetime(2019, 1, 2), Decimal('2'))
	>>> ts.set(datetime(2019, 1, 1), Decimal('1'))
	>>> ts.values().to_list()
	[Decimal('1'), Decimal('2')]
	"""
	_dtype = DECIMAL

	def __init__(self, values=None, name=None):
		"""
		Parameters
		----------
		values : mapping or iterable of (key, Decimal) pairs, optional
			Keys are datetimes, dates or Unix timestamps.
		name : str, optional

		Raises
		------
		PyDecimalTypeError
			If a value is not a Decimal or a key is not a timestamp/datetime.
			Pairs before the offending one have already been inserted.
		"""
		self._map: Dict[int, Decimal] = {}
		self._dirty = False
		self._name = name
		if values:
			self.update(values)

	@staticmethod
	def _pairs(source):
		""" Yield (key, value) from a mapping or an iterable of pairs """
		items = source.items() if hasattr(source, 'items') else source
		if isinstance(items, (str, bytes)) or not hasattr(items, '__iter__'):
			raise PyDecimalTypeError(f"Expecting a mapping or an iterable of (key, Decimal) pairs, given: {type(source).__name__}")
		for item in items:
			try:
				key, value = item
			except (TypeError, ValueError):
				raise PyDecimalTypeError(f"Expecting (key, Decimal) pairs, given: {item!r}") from None
			yield key, value

	def update(self, source):
		"""
		Insert every (key, Decimal) pair of a mapping or iterable.

		Pairs are inserted one at a time, so a failure part way leaves the
		earlier pairs in the series.
		"""
		for key, value in self._pairs(source):
			validate_scalar(value, self._dtype)
			self.set(key, value)
		logger.debug("Hydrated time series with %s entries", len(self._map))

	@classmethod
	def from_iterable(cls, source, strict: bool = True, name=None):
		"""
		Create a series from a mapping (or pairs) of keys to plain numbers.

		Numeric values are converted to Decimal. A non-numeric value raises
		when ``strict`` is true and is skipped otherwise.

		Raises
		------
		PyDecimalUnexpectedValueError
			If strict and a non-numeric value is encountered
		"""
		ts = cls(name=name)
		dropped = 0
		for key, value in cls._pairs(source):
			if isinstance(value, Decimal) or is_numeric(value):
				ts.set(key, to_decimal(value))
			elif strict:
				raise PyDecimalUnexpectedValueError(f"Encountered non-numeric value for key {key!r}: {value!r}")
			else:
				dropped += 1
		if dropped:
			logger.debug("Dropped %s non-numeric value(s) during ingestion", dropped)
		return ts

	def schema(self):
		return self._dtype

	@property
	def name(self):
		return self._name

	def rename(self, new_name):
		self._name = new_name
		return self

	def copy(self, name=...):
		ts = type(self)(name=self._name if name is ... else name)
		ts._map = dict(self._map)
		ts._dirty = self._dirty
		return ts

	def __repr__(self):
		return _printr(self)


	#-----------------------------------------------------
	# Mutation
	#-----------------------------------------------------

	def set(self, key, value: Decimal):
		""" Associate a Decimal with an instant, replacing any existing entry """
		validate_scalar(value, self._dtype)
		self._map[to_timestamp(key)] = value
		self._dirty = True

	def unset(self, key):
		""" Remove the entry for an instant, if there is one """
		timestamp = to_timestamp(key)
		if timestamp in self._map:
			del self._map[timestamp]
			self._dirty = True

	def clear(self):
		self._map = {}
		self._dirty = False

	def __setitem__(self, key, value):
		self.set(key, value)

	def __delitem__(self, key):
		if not self.has(key):
			raise PyDecimalKeyError(f"No entry for {key!r}")
		self.unset(key)


	#-----------------------------------------------------
	# Lookup
	#-----------------------------------------------------

	def has(self, key) -> bool:
		return to_timestamp(key) in self._map

	def has_timestamp(self, timestamp: int) -> bool:
		return timestamp in self._map

	def get(self, key) -> Decimal:
		"""
		The Decimal associated with an instant.

		Raises
		------
		PyDecimalKeyError
			If there is no entry for the instant
		"""
		timestamp = to_timestamp(key)
		try:
			return self._map[timestamp]
		except KeyError:
			raise PyDecimalKeyError(f"No entry for {from_epoch_seconds(timestamp).isoformat()}") from None

	def get_timestamp(self, timestamp: int) -> Decimal:
		return self.get(timestamp)

	def __getitem__(self, key):
		return self.get(key)

	def __contains__(self, key):
		return self.has(key)

	def count(self) -> int:
		return len(self._map)

	def __len__(self):
		return len(self._map)

	def is_empty(self) -> bool:
		return not self._map

	def __bool__(self):
		return bool(self._map)

	def __eq__(self, other):
		if not isinstance(other, TimeSeries):
			return NotImplemented
		return self._map == other._map

	__hash__ = None


	#-----------------------------------------------------
	# Ordered views (all sort first)
	#-----------------------------------------------------

	def sort(self):
		"""
		Ensure ascending chronological order.

		Called internally by every method that returns multiple elements, so
		callers normally never need it.
		"""
		if self._dirty:
			self._map = dict(sorted(self._map.items()))
			self._dirty = False
			logger.debug("Re-sorted time series of %s entries", len(self._map))

	def __iter__(self):
		""" Iterate (key, value) in chronological order, keys as positional indexes """
		from .iterators import SeriesIterator
		self.sort()
		return iter(SeriesIterator(self))

	def to_dict(self) -> Dict[int, Decimal]:
		""" Timestamp to Decimal, oldest first """
		self.sort()
		return dict(self._map)

	def to_pairs(self) -> List[Tuple[datetime, Decimal]]:
		""" (datetime, Decimal) tuples, oldest first """
		self.sort()
		return [(from_epoch_seconds(ts), v) for ts, v in self._map.items()]

	def to_json(self) -> Dict[int, str]:
		""" JSON-ready mapping of timestamp to decimal string """
		self.sort()
		return {ts: str(v) for ts, v in self._map.items()}

	def items(self) -> List[Tuple[int, Decimal]]:
		self.sort()
		return list(self._map.items())

	def keys(self) -> List[int]:
		self.sort()
		return list(self._map)

	def values(self) -> DecimalVector:
		self.sort()
		return DecimalVector._wrap(list(self._map.values()), name=self._name)

	def datetimes(self) -> List[datetime]:
		return [from_epoch_seconds(ts) for ts in self.keys()]

	def _require_entries(self, which):
		if not self._map:
			raise PyDecimalIndexError(f"Cannot take the {which} entry of an empty time series")

	def first(self) -> Tuple[int, Decimal]:
		""" (timestamp, Decimal) of the earliest entry """
		self._require_entries('first')
		self.sort()
		timestamp = next(iter(self._map))
		return timestamp, self._map[timestamp]

	def last(self) -> Tuple[int, Decimal]:
		""" (timestamp, Decimal) of the latest entry """
		self._require_entries('last')
		self.sort()
		timestamp = next(reversed(self._map))
		return timestamp, self._map[timestamp]

	def first_datetime(self) -> datetime:
		return from_epoch_seconds(self.first()[0])

	def last_datetime(self) -> datetime:
		return from_epoch_seconds(self.last()[0])


	#-----------------------------------------------------
	# Interval inference
	#-----------------------------------------------------

	def min_date_interval(self) -> Optional[timedelta]:
		"""
		Smallest gap between two chronologically adjacent entries.

		Returns None when the series has a single entry (there is no gap).

		Raises
		------
		PyDecimalIndexError
			If the series is empty
		"""
		self._require_entries('first')
		keys = self.keys()
		minimum = None
		for previous, timestamp in zip(keys, keys[1:]):
			gap = timestamp - previous
			if gap > 0 and (minimum is None or gap < minimum):
				minimum = gap
		if minimum is None:
			return None
		return timedelta(seconds=minimum)

	def date_period(self) -> List[datetime]:
		"""
		Every instant from the first to the last entry, stepping by the
		minimum interval, both ends included.

		With irregular data the period contains instants that have no entry.
		For example entries on Jan 1st, Jan 2nd and Jan 31st have a minimum
		interval of one day, so the period holds every day of January.
		"""
		interval = self.min_date_interval()
		start = self.first_datetime()
		if interval is None:
			return [start]
		# extend the end by one step so the last instant is included
		end = self.last_datetime() + interval
		period = []
		current = start
		while current < end:
			period.append(current)
			current = current + interval
		return period

	def date_intervals(self) -> List[timedelta]:
		""" Gap between each entry and the one before it (zero for the first) """
		keys = self.keys()
		if not keys:
			return []
		intervals = []
		previous = keys[0]
		for timestamp in keys:
			intervals.append(timedelta(seconds=timestamp - previous))
			previous = timestamp
		return intervals
