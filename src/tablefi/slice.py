import operator
import warnings
from decimal import Decimal

from .cell import Cell
from .display import _printr
from .errors import TablefiIndexError
from .errors import TablefiTypeError
from .jsonio import decode_slice_values
from .jsonio import dumps
from .typing import CellKind
from .typing import infer_kind

from typing import List
from typing import Optional


_ZERO = Decimal(0)
_ONE = Decimal(1)

_SCALARS = (str, Cell, Decimal, int, float)


class Slice():
	""" Ordered sequence of cells: one row or one column """
	_cells = None

	def __init__(self, initial=()):
		"""
		Build a slice from an iterable of str, Decimal, int or Cell values.

		Strings are classified into numbers or text; cells are copied.
		"""
		if isinstance(initial, (str, bytes, bytearray)):
			raise TablefiTypeError("Slice needs an iterable of values; use Slice.from_json() for JSON text")
		if isinstance(initial, Slice):
			initial = initial._cells
		self._cells = [Cell(v) for v in initial]

	@classmethod
	def _wrap(cls, cells: List[Cell]) -> "Slice":
		"""Adopt an already-owned list of cells without copying."""
		instance = cls.__new__(cls)
		instance._cells = cells
		return instance

	@classmethod
	def from_json(cls, text) -> "Slice":
		"""
		Decode a JSON array into a slice.

		>>> Slice.from_json('["a","b","1"]').to_list()
		['a', 'b', '1']
		"""
		return cls(decode_slice_values(text))

	@classmethod
	def new(cls, value, length: int) -> "Slice":
		""" create a new slice of length copies of value """
		if not isinstance(length, int) or length < 0:
			raise TablefiTypeError(f"length must be a non-negative int, not {length!r}")
		cell = Cell(value)
		return cls._wrap([cell.copy() for _ in range(length)])

	def copy(self) -> "Slice":
		return Slice._wrap([cell.copy() for cell in self._cells])

	#-----------------------------------------------------
	# Access
	#-----------------------------------------------------

	def size(self):
		return (len(self._cells),)

	def __len__(self):
		return len(self._cells)

	def __iter__(self):
		""" iterate over the live cells """
		return iter(self._cells)

	def __bool__(self):
		is_non_empty = bool(self._cells)
		if is_non_empty and self.is_numeric():
			warnings.warn(
				"Slice is being used in a boolean context (e.g., 'if row:'). "
				"This checks for emptiness (len > 0), not the cell values.",
				stacklevel=2
			)
		return is_non_empty

	def _normalize_index(self, idx: int) -> int:
		n = len(self._cells)
		if idx < 0:
			idx += n
		if not (0 <= idx < n):
			raise TablefiIndexError(f"Index {idx} out of range for slice length {n}")
		return idx

	def __getitem__(self, key):
		"""
		slice[i] returns the live cell at i (negative indices count from the end).
		slice[a:b] returns a new Slice of copies.
		"""
		if isinstance(key, bool):
			raise TablefiTypeError("Slice indices must be integers or slices, not bool")
		if isinstance(key, int):
			return self._cells[self._normalize_index(key)]
		if isinstance(key, slice):
			return Slice._wrap([cell.copy() for cell in self._cells[key]])
		raise TablefiTypeError(f"Slice indices must be integers or slices, not {type(key).__name__}")

	def __setitem__(self, key, value):
		if isinstance(key, bool) or not isinstance(key, int):
			raise TablefiTypeError(f"Slice assignment needs an integer index, not {type(key).__name__}")
		self._cells[self._normalize_index(key)] = Cell(value)

	def cell(self, idx: int) -> Optional[Cell]:
		"""Detached copy of the cell at idx, or None when out of range."""
		found = self.mut_cell(idx)
		return None if found is None else found.copy()

	def mut_cell(self, idx: int) -> Optional[Cell]:
		"""The live cell at idx, or None when out of range."""
		if 0 <= idx < len(self._cells):
			return self._cells[idx]
		return None

	def kind(self) -> Optional[CellKind]:
		"""Common kind of all cells, or None if empty or mixed."""
		return infer_kind(self._cells)

	def is_numeric(self) -> bool:
		return self.kind() is CellKind.NUMBER

	def to_list(self) -> List[str]:
		"""Canonical string of every cell."""
		return [str(cell) for cell in self._cells]

	def to_json(self) -> str:
		return dumps(self.to_list())

	def __str__(self):
		return self.to_json()

	def __repr__(self):
		return _printr(self)

	def __eq__(self, other):
		if not isinstance(other, Slice):
			return NotImplemented
		return self._cells == other._cells

	__hash__ = None

	#-----------------------------------------------------
	# Elementwise arithmetic
	#-----------------------------------------------------

	def _operand_cells(self, other) -> List[Cell]:
		"""Resolve the right operand: another slice, an iterable, or a scalar to broadcast."""
		if isinstance(other, Slice):
			return other._cells
		if isinstance(other, _SCALARS):
			return [Cell(other)] * len(self._cells)
		if hasattr(other, '__iter__'):
			return [Cell(v) for v in other]
		raise TablefiTypeError(f"Unsupported operand type for slice arithmetic: {type(other).__name__}")

	def _elementwise_operation(self, other, op_func, identity):
		"""
		Pair cells by index; a missing right cell acts as the identity.

		The result has the left length. Each pair follows the Cell rule, so
		text on either side passes the left cell through.
		"""
		try:
			right = self._operand_cells(other)
		except TablefiTypeError:
			return NotImplemented
		fill = Cell.number(identity)
		n = len(right)
		return Slice._wrap([
			op_func(cell, right[i] if i < n else fill)
			for i, cell in enumerate(self._cells)
		])

	def _reflected_operation(self, other, op_func, identity):
		try:
			left = Slice._wrap([cell.copy() for cell in self._operand_cells(other)])
		except TablefiTypeError:
			return NotImplemented
		return left._elementwise_operation(self, op_func, identity)

	def __add__(self, other):
		return self._elementwise_operation(other, operator.add, _ZERO)

	def __sub__(self, other):
		return self._elementwise_operation(other, operator.sub, _ZERO)

	def __mul__(self, other):
		return self._elementwise_operation(other, operator.mul, _ONE)

	def __truediv__(self, other):
		return self._elementwise_operation(other, operator.truediv, _ONE)

	def __radd__(self, other):
		return self._reflected_operation(other, operator.add, _ZERO)

	def __rsub__(self, other):
		return self._reflected_operation(other, operator.sub, _ZERO)

	def __rmul__(self, other):
		return self._reflected_operation(other, operator.mul, _ONE)

	def __rtruediv__(self, other):
		return self._reflected_operation(other, operator.truediv, _ONE)

	#-----------------------------------------------------
	# Broadcast mutators
	#-----------------------------------------------------

	def add_value(self, value) -> "Slice":
		"""Add value to every number cell. Text cells are unchanged."""
		for cell in self._cells:
			cell.add_value(value)
		return self

	def sub_value(self, value) -> "Slice":
		"""Subtract value from every number cell. Text cells are unchanged."""
		for cell in self._cells:
			cell.sub_value(value)
		return self

	def mul_value(self, value) -> "Slice":
		"""Multiply every number cell by value. Text cells are unchanged."""
		for cell in self._cells:
			cell.mul_value(value)
		return self

	def div_value(self, value) -> "Slice":
		"""Divide every number cell by value. A zero turns number cells into "#DIV/0"."""
		for cell in self._cells:
			cell.div_value(value)
		return self
