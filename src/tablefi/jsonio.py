"""JSON form of slices and tables: arrays (of arrays) of cell strings."""

from __future__ import annotations
import json
import warnings
from decimal import Decimal
from typing import Any, List

from .errors import TablefiParseError


def _nested_default(value):
	# Nested numbers only survive as JSON text, where a float is what any reader sees
	if isinstance(value, Decimal):
		return float(value)
	raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _is_nested(value) -> bool:
	return isinstance(value, (list, dict))


def _warn_nested(count: int) -> None:
	# stacklevel 4: here -> decode_* -> from_json -> caller
	warnings.warn(
		f"{count} nested JSON array/object value(s) flattened into text cells.",
		stacklevel=4,
	)


def coerce_json_value(value: Any):
	"""
	Map one decoded JSON value to something Cell() accepts.

	  string        -> itself (classified later)
	  number        -> int / Decimal (exact)
	  true / false  -> "true" / "false"
	  null          -> ""
	  array/object  -> compact JSON text
	"""
	if isinstance(value, str):
		return value
	if isinstance(value, bool):
		return "true" if value else "false"
	if value is None:
		return ""
	if isinstance(value, (int, Decimal)):
		return value
	if _is_nested(value):
		return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_nested_default)
	return str(value)


def loads(text) -> Any:
	"""Decode JSON without binary-float rounding. NaN/Infinity stay text."""
	try:
		return json.loads(text, parse_float=Decimal, parse_constant=str)
	except json.JSONDecodeError as e:
		raise TablefiParseError(f"Malformed JSON: {e}") from e
	except TypeError as e:
		raise TablefiParseError(f"JSON input must be str or bytes, not {type(text).__name__}") from e


def decode_slice_values(text) -> List[Any]:
	"""Decode a JSON array into a list of cell-ready values."""
	data = loads(text)
	if not isinstance(data, list):
		raise TablefiParseError(f"Expected a JSON array, got {type(data).__name__}")

	nested = sum(1 for v in data if _is_nested(v))
	if nested:
		_warn_nested(nested)
	return [coerce_json_value(v) for v in data]


def decode_table_values(text) -> List[List[Any]]:
	"""Decode a JSON array of equal-length arrays into rows of cell-ready values."""
	data = loads(text)
	if not isinstance(data, list):
		raise TablefiParseError(f"Expected a JSON array of rows, got {type(data).__name__}")

	width = None
	nested = 0
	for idx, row in enumerate(data):
		if not isinstance(row, list):
			raise TablefiParseError(f"Row {idx} must be a JSON array, not {type(row).__name__}")
		if width is None:
			width = len(row)
		elif len(row) != width:
			raise TablefiParseError(
				f"Row {idx} has {len(row)} cells; expected {width} like the rows before it"
			)
		nested += sum(1 for v in row if _is_nested(v))

	if nested:
		_warn_nested(nested)
	return [[coerce_json_value(v) for v in row] for row in data]


def dumps(data) -> str:
	"""Compact JSON with non-ASCII text kept as-is."""
	return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
