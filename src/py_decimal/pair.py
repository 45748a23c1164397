"""Immutable pairs of Decimals, optionally tied to a calendar instant."""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterator

from .config import decimal_context
from .typing import to_datetime, to_epoch_seconds, validate_scalar


@dataclass(frozen=True)
class DecimalPair:
	"""
	A pair of Decimals (x, y).

	Examples
	--------
	>>> p = DecimalPair(Decimal('1.5'), Decimal('4'))
	>>> p.diff()
	Decimal('2.5')
	>>> x, y = p
	"""

	x: Decimal
	y: Decimal

	def __post_init__(self):
		validate_scalar(self.x)
		validate_scalar(self.y)

	def __iter__(self) -> Iterator[Decimal]:
		yield self.x
		yield self.y

	def diff(self) -> Decimal:
		""" y - x """
		with decimal_context():
			return self.y - self.x


@dataclass(frozen=True)
class DatedDecimalPair(DecimalPair):
	"""
	A DecimalPair observed at a specific instant.

	The instant is stored as an aware UTC datetime truncated to whole seconds,
	which is what two time series are aligned on.
	"""

	datetime: datetime

	def __post_init__(self):
		super().__post_init__()
		# frozen: bypass __setattr__ to normalise the instant
		object.__setattr__(self, 'datetime', to_datetime(self.datetime))

	@property
	def timestamp(self) -> int:
		return to_epoch_seconds(self.datetime)
