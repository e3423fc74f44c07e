"""Literal classification: decide whether raw text is an exact decimal number.

A numeric literal is an optional sign, an integer part that is either a plain
run of digits or digits grouped in threes by commas, and an optional fraction
after a single decimal point. A bare fraction (".5") is also numeric.

    12345678        -> number
    -12,345,678.901 -> number
    .5              -> number
    1234.56.78      -> text
    -12,34,567,8.9  -> text
    1.              -> text
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation


_DIGITS = frozenset("0123456789")
_SIGNS = frozenset("+-")
_KEEP = _DIGITS | _SIGNS | {"."}

GROUP_SEPARATOR = ","
DECIMAL_POINT = "."


def _scan_digits(literal: str, pos: int) -> int:
	"""Return the index just past the run of ASCII digits starting at pos."""
	n = len(literal)
	while pos < n and literal[pos] in _DIGITS:
		pos += 1
	return pos


def _scan_groups(literal: str, pos: int) -> int:
	"""Consume ",ddd" groups starting at pos. Returns -1 on a malformed group."""
	n = len(literal)
	while pos < n and literal[pos] == GROUP_SEPARATOR:
		end = pos + 4
		if end > n or _scan_digits(literal, pos + 1) != end:
			return -1
		pos = end
	return pos


def is_numeric_literal(literal: str) -> bool:
	"""True if literal is a numeric candidate (sign, grouped digits, fraction)."""
	n = len(literal)
	pos = 0

	if pos < n and literal[pos] in _SIGNS:
		pos += 1

	# Integer part
	start = pos
	pos = _scan_digits(literal, pos)
	int_len = pos - start

	if pos < n and literal[pos] == GROUP_SEPARATOR:
		# Grouping needs a 1-3 digit lead
		if not 1 <= int_len <= 3:
			return False
		pos = _scan_groups(literal, pos)
		if pos < 0:
			return False

	# Fraction
	if pos < n and literal[pos] == DECIMAL_POINT:
		frac_start = pos + 1
		pos = _scan_digits(literal, frac_start)
		if pos == frac_start:
			return False
	elif int_len == 0:
		return False

	return pos == n


def strip_grouping(literal: str) -> str:
	"""Drop everything but digits, signs and the decimal point."""
	return "".join(ch for ch in literal if ch in _KEEP)


def parse_numeric_literal(literal: str) -> Decimal | None:
	"""Parse literal as an exact decimal, or return None if it is text."""
	if not is_numeric_literal(literal):
		return None
	try:
		return Decimal(strip_grouping(literal))
	except InvalidOperation:
		return None


def classify(literal):
	"""
	Classify a raw literal into a Cell.

	Parameters
	----------
	literal : str, Decimal, int or Cell
		Raw text, e.g. from JSON or user input. Anything else is handed to
		``Cell(...)`` unchanged, so a Decimal such as 1E+5 stays a number.

	Returns
	-------
	Cell
		A Number cell when the literal parses as a decimal, otherwise a Text
		cell holding the literal unchanged.

	Examples
	--------
	>>> str(classify("12,345,678"))
	'12345678'
	>>> classify("1234.56.78").is_text()
	True
	"""
	from .cell import Cell

	if not isinstance(literal, str):
		return Cell(literal)
	number = parse_numeric_literal(literal)
	if number is None:
		return Cell.text(literal)
	return Cell.number(number)
