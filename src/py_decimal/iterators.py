"""
Cursors over TimeSeries.

SeriesIterator walks one series in chronological order. DualSeriesIterator
walks two series in lock-step, yielding a DatedDecimalPair for every instant
of the first series that the second one also has.

Both take a snapshot of the series keys when rewound. Mutating a series while
a cursor over it is in use is unsupported and not detected.
"""

import logging

from .errors import PyDecimalStateError
from .errors import PyDecimalValueError
from .pair import DatedDecimalPair
from .typing import from_epoch_seconds

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from typing import Iterator
from typing import Optional
from typing import Tuple

logger = logging.getLogger(__name__)


class SeriesIterator():
	"""
	Read-only forward cursor over a TimeSeries, oldest entry first.

	The key reported for each entry depends on the key mode, which can only be
	changed before the cursor is first rewound:

	KEY_AS_INDEX
		(default) position of the entry in chronological order
	KEY_AS_TIMESTAMP
		Unix timestamp of the entry
	KEY_AS_DATETIME
		aware UTC datetime of the entry

	Examples
	--------
	>>> it = SeriesIterator(ts, SeriesIterator.KEY_AS_DATETIME)
	>>> for instant, value in it:
	...     print(instant, value)
	"""
	KEY_AS_INDEX = 0
	KEY_AS_TIMESTAMP = 1
	KEY_AS_DATETIME = 2
	_KEY_MODES = (KEY_AS_INDEX, KEY_AS_TIMESTAMP, KEY_AS_DATETIME)

	def __init__(self, series, key_mode=KEY_AS_INDEX):
		self._series = series
		self._key_mode = self._check_mode(key_mode)
		self._timestamps: Tuple[int, ...] = ()
		self._position = None
		self._yielded = False

	def _check_mode(self, mode):
		if mode not in self._KEY_MODES:
			raise PyDecimalValueError(f"Unknown key mode: {mode!r}")
		return mode

	@property
	def key_mode(self):
		return self._key_mode

	def set_key_mode(self, mode):
		"""
		Raises
		------
		PyDecimalStateError
			If iteration has already started
		"""
		if self._position is not None:
			raise PyDecimalStateError("Cannot change the key mode after iteration starts")
		self._key_mode = self._check_mode(mode)

	def rewind(self):
		self._timestamps = tuple(self._series.keys())
		self._position = 0
		self._yielded = False

	def valid(self) -> bool:
		return self._position is not None and self._position < len(self._timestamps)

	def next(self):
		if self._position is None:
			raise PyDecimalStateError("Iterator must be rewound before advancing")
		self._position += 1

	def _require_valid(self):
		if not self.valid():
			raise PyDecimalStateError("Iterator is not positioned on an entry")

	def current(self) -> Decimal:
		self._require_valid()
		return self._series.get_timestamp(self._timestamps[self._position])

	def key(self):
		self._require_valid()
		if self._key_mode == self.KEY_AS_TIMESTAMP:
			return self._timestamps[self._position]
		if self._key_mode == self.KEY_AS_DATETIME:
			return from_epoch_seconds(self._timestamps[self._position])
		return self._position

	def current_datetime(self) -> Optional[datetime]:
		if not self.valid():
			return None
		return from_epoch_seconds(self._timestamps[self._position])

	def __iter__(self):
		self.rewind()
		return self

	def __next__(self):
		if self._position is None:
			self.rewind()
		if self._yielded:
			self.next()
		if not self.valid():
			raise StopIteration
		self._yielded = True
		return self.key(), self.current()


@dataclass(frozen=True)
class AlignmentSnapshot:
	"""
	Resolved alignment of two series at one point in time.

	``timestamps`` are the keys of the first series in chronological order;
	``pairs[i]`` is the DatedDecimalPair at ``timestamps[i]``, or None when the
	second series has no entry there.
	"""

	timestamps: Tuple[int, ...]
	pairs: Tuple[Optional[DatedDecimalPair], ...]

	@classmethod
	def capture(cls, x, y) -> "AlignmentSnapshot":
		timestamps = tuple(x.keys())
		pairs = tuple(
			DatedDecimalPair(x.get_timestamp(t), y.get_timestamp(t), from_epoch_seconds(t))
			if y.has_timestamp(t) else None
			for t in timestamps
		)
		return cls(timestamps, pairs)

	def __len__(self):
		return len(self.timestamps)

	def peek(self, index: int) -> Optional[DatedDecimalPair]:
		""" Pair at a position; negative positions count from the end """
		if index < 0:
			index = len(self.timestamps) + index
		if index < 0 or index >= len(self.timestamps):
			return None
		return self.pairs[index]


class DualSeriesIterator():
	"""
	Synchronous cursor over two TimeSeries.

	The instants of the first series (x) are the candidate positions. At each
	position the cursor holds a DatedDecimalPair of the x and y values when y
	also has an entry for that instant, and None otherwise.

	Linear iteration ends at the first position y has no entry for, even if
	later positions align again. ``peek`` and friends look at any position
	without moving the cursor, and ``aligned()`` yields every aligned pair.

	Examples
	--------
	>>> it = DualSeriesIterator(prices, benchmark)
	>>> for pair in it:
	...     prev = it.peek_prev()
	...     if prev is not None:
	...         print(pair.datetime, pair.x / prev.x, pair.y / prev.y)
	"""

	def __init__(self, x, y):
		self._x = x
		self._y = y
		self._snapshot = AlignmentSnapshot.capture(x, y)
		self._position = 0
		self._current = self._snapshot.peek(0)
		self._yielded = False

	@property
	def snapshot(self) -> AlignmentSnapshot:
		return self._snapshot

	def _set_position(self, index):
		self._position = index
		self._current = self._snapshot.peek(index) if index < len(self._snapshot) else None

	def rewind(self):
		""" Re-resolve the alignment and move back to the first position """
		self._snapshot = AlignmentSnapshot.capture(self._x, self._y)
		self._yielded = False
		self._set_position(0)
		logger.debug(
			"Aligned %s of %s timestamps",
			sum(1 for p in self._snapshot.pairs if p is not None),
			len(self._snapshot),
		)

	def next(self):
		self._set_position(self._position + 1)

	def valid(self) -> bool:
		return self._current is not None

	def current(self) -> Optional[DatedDecimalPair]:
		return self._current

	def key(self) -> int:
		return self._position

	def date(self) -> Optional[datetime]:
		""" Instant of the current pair """
		return self._current.datetime if self._current is not None else None

	def peek(self, index: int) -> Optional[DatedDecimalPair]:
		"""
		Pair at a position without moving the cursor.

		Negative positions count from the end: ``peek(-1)`` is the last
		position. Returns None when the position is out of range or not
		aligned.
		"""
		return self._snapshot.peek(index)

	def peek_next(self) -> Optional[DatedDecimalPair]:
		return self.peek(self._position + 1)

	def peek_prev(self) -> Optional[DatedDecimalPair]:
		if self._position > 0:
			return self.peek(self._position - 1)
		return None

	def peek_rel(self, offset: int) -> Optional[DatedDecimalPair]:
		""" Pair ``offset`` positions away from the current one (never wraps) """
		index = self._position + offset
		if index < 0:
			return None
		return self.peek(index)

	def aligned(self) -> Iterator[DatedDecimalPair]:
		""" Every aligned pair, oldest first, skipping positions y is missing """
		for pair in self._snapshot.pairs:
			if pair is not None:
				yield pair

	def __iter__(self):
		self.rewind()
		return self

	def __next__(self):
		if self._yielded:
			self.next()
		if not self.valid():
			raise StopIteration
		self._yielded = True
		return self._current
