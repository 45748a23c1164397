"""Display and repr logic for DecimalVector and TimeSeries."""

from __future__ import annotations
from typing import List

from .config import MAX_HEAD_ROWS


def _needs_quoting(name: str) -> bool:
	"""A name needs quoting if it contains anything outside [A-Za-z0-9_]
	OR has leading/trailing whitespace."""
	if not name:
		return False
	if name != name.strip():
		return True
	return not all(c.isalnum() or c == "_" for c in name)


def _preview(vals: list, max_preview: int = MAX_HEAD_ROWS) -> list:
	"""Symmetric head/tail preview with a '...' marker in between."""
	if len(vals) > max_preview * 2:
		return list(vals[:max_preview]) + ['...'] + list(vals[-max_preview:])
	return list(vals)


def _format_column(vals, align_right=True) -> List[str]:
	"""Returns a list of strings representing that column, truncated for display."""
	out = []
	for v in _preview(vals):
		if isinstance(v, str):
			out.append(v)
		elif hasattr(v, 'isoformat'):
			out.append(v.isoformat())
		else:
			out.append(str(v))

	max_len = max(len(s) for s in out) if out else 0
	if align_right:
		return [s.rjust(max_len) for s in out]
	return [s.ljust(max_len) for s in out]


def _header(name):
	return repr(name) if _needs_quoting(name) else name


def _repr_vector(v) -> str:
	"""Pretty repr for a DecimalVector."""
	if not len(v):
		return "# empty"

	formatted = _format_column(v._underlying)

	data_width = max(len(s) for s in formatted) if formatted else 0
	header_width = 0
	if v._name:
		header_text = _header(v._name)
		header_width = len(header_text)

	width = max(data_width, header_width)
	formatted = [s.rjust(width) for s in formatted]

	lines = []
	if v._name:
		lines.append(header_text.rjust(width))
	lines.extend(formatted)
	lines.append("")
	lines.append(f"# {len(v)} element vector {v.schema()!r}")
	return "\n".join(lines)


def _repr_series(ts) -> str:
	"""Pretty repr for a TimeSeries: one row per entry, oldest first."""
	if ts.is_empty():
		return "# empty"

	pairs = ts.to_pairs()
	dates = _format_column([d for d, _ in pairs], align_right=False)
	values = _format_column([v for _, v in pairs])

	lines = []
	if ts._name:
		header_text = _header(ts._name)
		width = max(len(values[0]), len(header_text))
		values = [s.rjust(width) for s in values]
		lines.append(" " * len(dates[0]) + "  " + header_text.rjust(width))
	for d, val in zip(dates, values):
		lines.append(f"{d}  {val}")
	lines.append("")
	lines.append(f"# {len(ts)} entry time series <Decimal>")
	return "\n".join(lines)


def _printr(obj) -> str:
	"""Entry point used by DecimalVector.__repr__ and TimeSeries.__repr__."""
	if hasattr(obj, 'to_pairs'):
		return _repr_series(obj)
	return _repr_vector(obj)
