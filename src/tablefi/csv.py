"""
CSV output (RFC 4180 subset).

  - comma delimiter, one record per line, records end with a bare LF
  - a field is quoted only if it contains a comma, double quote, CR or LF
  - embedded double quotes are doubled
"""

from __future__ import annotations
from typing import Iterable


DELIMITER = ","
QUOTE = '"'
LINE_TERMINATOR = "\n"

_NEEDS_QUOTING = frozenset((DELIMITER, QUOTE, "\r", "\n"))


def escape_field(text: str) -> str:
	"""Quote a single field if needed.

	>>> escape_field('ano"ther')
	'"ano""ther"'
	>>> escape_field("plain")
	'plain'
	"""
	if any(ch in _NEEDS_QUOTING for ch in text):
		return QUOTE + text.replace(QUOTE, QUOTE + QUOTE) + QUOTE
	return text


def format_record(cells: Iterable) -> str:
	"""Render one row of cells as a CSV line, terminator included."""
	return DELIMITER.join(escape_field(str(cell)) for cell in cells) + LINE_TERMINATOR


def write_records(records: Iterable[Iterable], stream) -> int:
	"""
	Write rows of cells to a text stream.

	The stream belongs to the caller: it is neither flushed nor closed here.
	Returns the number of records written.
	"""
	count = 0
	for record in records:
		stream.write(format_record(record))
		count += 1
	return count
