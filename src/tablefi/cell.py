"""
Cell: the smallest table unit, holding either text or an exact decimal.

Arithmetic follows spreadsheet rules rather than raising:
  - Number (op) Number      -> Number with the exact decimal result
  - Number / Number(0)      -> Text "#DIV/0"
  - anything with a Text    -> copy of the left operand
"""

from __future__ import annotations
import warnings
from decimal import Context, Decimal, ROUND_HALF_EVEN

from .classify import parse_numeric_literal
from .errors import TablefiTypeError, TablefiValueError
from .typing import CellKind


DIV0 = "#DIV/0"

# Cell arithmetic runs here, not in the thread's current context. Division
# rounds to this precision; +, - and * widen it to fit their operands.
DECIMAL_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)


def format_decimal(value: Decimal) -> str:
	"""Canonical form: fixed-point, ungrouped, no sign on zero."""
	if value.is_zero() and value.is_signed():
		value = value.copy_abs()
	return format(value, "f")


def _finite(value: Decimal) -> Decimal:
	if not value.is_finite():
		raise TablefiValueError(f"Cell numbers must be finite, not {value}")
	return value


def _coerce(value):
	"""Map a Python value to (kind, payload)."""
	if isinstance(value, Cell):
		return value._kind, value._value

	if isinstance(value, str):
		number = parse_numeric_literal(value)
		if number is None:
			return CellKind.TEXT, value
		return CellKind.NUMBER, number

	if isinstance(value, Decimal):
		return CellKind.NUMBER, _finite(value)

	# bool is an int subclass but has no sensible decimal meaning here
	if isinstance(value, bool):
		raise TablefiTypeError("Cannot build a Cell from bool; pass 'true'/'false' text instead.")

	if isinstance(value, int):
		return CellKind.NUMBER, Decimal(value)

	if isinstance(value, float):
		warnings.warn(
			f"Cell built from float {value!r}; binary floating point may already have "
			"rounded it. Pass a str or Decimal to keep the exact value.",
			stacklevel=3,
		)
		return CellKind.NUMBER, _finite(Decimal(repr(value)))

	raise TablefiTypeError(
		f"Cannot build a Cell from {type(value).__name__}; expected str, Decimal, int or Cell."
	)


def _as_cell(value) -> "Cell":
	if isinstance(value, Cell):
		return value
	return Cell(value)


def _as_decimal(value) -> Decimal:
	"""Resolve the argument of an in-place mutator to a Decimal."""
	cell = _as_cell(value)
	if cell._kind is CellKind.NUMBER:
		return cell._value
	raise TablefiTypeError(f"Expected a numeric value, got {value!r}")


def _widened(prec: int) -> Context:
	context = DECIMAL_CONTEXT.copy()
	context.prec = max(context.prec, prec)
	return context


def _sum_digits(a: Decimal, b: Decimal) -> int:
	"""Upper bound on the digits of a + b or a - b."""
	lowest = min(a.as_tuple().exponent, b.as_tuple().exponent)
	return max(a.adjusted(), b.adjusted()) - lowest + 2


def exact_add(a: Decimal, b: Decimal) -> Decimal:
	return _widened(_sum_digits(a, b)).add(a, b)


def exact_subtract(a: Decimal, b: Decimal) -> Decimal:
	return _widened(_sum_digits(a, b)).subtract(a, b)


def exact_multiply(a: Decimal, b: Decimal) -> Decimal:
	prec = len(a.as_tuple().digits) + len(b.as_tuple().digits)
	return _widened(prec).multiply(a, b)


def _add(a: Decimal, b: Decimal) -> "Cell":
	return Cell.number(exact_add(a, b))


def _subtract(a: Decimal, b: Decimal) -> "Cell":
	return Cell.number(exact_subtract(a, b))


def _multiply(a: Decimal, b: Decimal) -> "Cell":
	return Cell.number(exact_multiply(a, b))


def _divide(a: Decimal, b: Decimal) -> "Cell":
	if b.is_zero():
		return Cell.text(DIV0)
	return Cell.number(DECIMAL_CONTEXT.divide(a, b))


class Cell:
	"""
	A tagged value: Text(str) or Number(Decimal).

	Parameters
	----------
	value : str, Decimal, int, float or Cell
		Strings are classified (see ``tablefi.classify``); decimals and ints
		become numbers; a Cell is copied by value.

	Examples
	--------
	>>> str(Cell("12,345.67"))
	'12345.67'
	>>> (Cell("123.456") + Cell("8")).to_decimal()
	Decimal('131.456')
	>>> str(Cell("1") / Cell("0"))
	'#DIV/0'
	"""
	__slots__ = ("_kind", "_value")
	__hash__ = None  # mutable

	def __init__(self, value=""):
		self._kind, self._value = _coerce(value)

	@classmethod
	def text(cls, value: str) -> "Cell":
		"""Build a Text cell without classification."""
		if not isinstance(value, str):
			raise TablefiTypeError(f"Text cells hold str, not {type(value).__name__}")
		cell = cls.__new__(cls)
		cell._kind = CellKind.TEXT
		cell._value = value
		return cell

	@classmethod
	def number(cls, value) -> "Cell":
		"""Build a Number cell from a Decimal or int."""
		if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
			raise TablefiTypeError(f"Number cells hold Decimal, not {type(value).__name__}")
		cell = cls.__new__(cls)
		cell._kind = CellKind.NUMBER
		cell._value = _finite(Decimal(value))
		return cell

	#-----------------------------------------------------
	# Queries
	#-----------------------------------------------------

	@property
	def kind(self) -> CellKind:
		return self._kind

	@property
	def value(self):
		"""Raw payload: str for Text, Decimal for Number."""
		return self._value

	def is_text(self) -> bool:
		return self._kind is CellKind.TEXT

	def is_number(self) -> bool:
		return self._kind is CellKind.NUMBER

	def to_decimal(self) -> Decimal | None:
		if self._kind is CellKind.NUMBER:
			return self._value
		return None

	def is_divide_by_zero(self) -> bool:
		"""Whether this cell holds the divide-by-zero sentinel."""
		return self._kind is CellKind.TEXT and self._value == DIV0

	def copy(self) -> "Cell":
		cell = Cell.__new__(Cell)
		cell._kind = self._kind
		cell._value = self._value
		return cell

	def __copy__(self):
		return self.copy()

	def __deepcopy__(self, memo):
		return self.copy()

	def __str__(self):
		if self._kind is CellKind.NUMBER:
			return format_decimal(self._value)
		return self._value

	def __repr__(self):
		if self._kind is CellKind.NUMBER:
			return f"Number({format_decimal(self._value)})"
		return f"Text({self._value!r})"

	def __eq__(self, other):
		if not isinstance(other, Cell):
			return NotImplemented
		return self._kind is other._kind and self._value == other._value

	#-----------------------------------------------------
	# Comparison
	#-----------------------------------------------------

	def compare_value(self, other) -> int | None:
		"""
		Compare with a str, Decimal, int or Cell.

		The other value is classified first. Returns -1, 0 or 1 when both sides
		are numbers or both are text, and None when the kinds differ.

		Examples
		--------
		>>> Cell("10").compare_value("5")
		1
		>>> Cell("apple").compare_value("banana")
		-1
		>>> Cell("10").compare_value("banana") is None
		True
		"""
		other = _as_cell(other)
		if self._kind is not other._kind:
			return None
		a, b = self._value, other._value
		return (a > b) - (a < b)

	def equal_value(self, other) -> bool:
		return self.compare_value(other) == 0

	#-----------------------------------------------------
	# Binary operators
	#-----------------------------------------------------

	def _binary_operation(self, other, op_func):
		"""Apply op_func to two numbers; otherwise pass the left operand through."""
		try:
			other = _as_cell(other)
		except TablefiTypeError:
			return NotImplemented
		if self._kind is CellKind.NUMBER and other._kind is CellKind.NUMBER:
			return op_func(self._value, other._value)
		return self.copy()

	def _reflected_operation(self, other, op_func):
		try:
			left = _as_cell(other)
		except TablefiTypeError:
			return NotImplemented
		return left._binary_operation(self, op_func)

	def __add__(self, other):
		return self._binary_operation(other, _add)

	def __sub__(self, other):
		return self._binary_operation(other, _subtract)

	def __mul__(self, other):
		return self._binary_operation(other, _multiply)

	def __truediv__(self, other):
		return self._binary_operation(other, _divide)

	def __radd__(self, other):
		return self._reflected_operation(other, _add)

	def __rsub__(self, other):
		return self._reflected_operation(other, _subtract)

	def __rmul__(self, other):
		return self._reflected_operation(other, _multiply)

	def __rtruediv__(self, other):
		return self._reflected_operation(other, _divide)

	#-----------------------------------------------------
	# In-place mutators
	#-----------------------------------------------------

	def replace_value(self, value) -> "Cell":
		"""Overwrite kind and content unconditionally."""
		self._kind, self._value = _coerce(value)
		return self

	def add_value(self, value) -> "Cell":
		"""Add value to a Number cell. Text cells are unchanged."""
		amount = _as_decimal(value)
		if self._kind is CellKind.NUMBER:
			self._value = exact_add(self._value, amount)
		return self

	def sub_value(self, value) -> "Cell":
		"""Subtract value from a Number cell. Text cells are unchanged."""
		amount = _as_decimal(value)
		if self._kind is CellKind.NUMBER:
			self._value = exact_subtract(self._value, amount)
		return self

	def mul_value(self, value) -> "Cell":
		"""Multiply a Number cell by value. Text cells are unchanged."""
		amount = _as_decimal(value)
		if self._kind is CellKind.NUMBER:
			self._value = exact_multiply(self._value, amount)
		return self

	def div_value(self, value) -> "Cell":
		"""
		Divide a Number cell by value.

		Dividing by zero turns a Number cell into the "#DIV/0" text sentinel.
		Text cells, the sentinel included, are unchanged.
		"""
		amount = _as_decimal(value)
		if self._kind is CellKind.NUMBER:
			if amount.is_zero():
				self._kind, self._value = CellKind.TEXT, DIV0
			else:
				self._value = DECIMAL_CONTEXT.divide(self._value, amount)
		return self
