import io

from .cell import Cell
from .csv import write_records
from .display import _printr
from .errors import TablefiIndexError, TablefiTypeError, TablefiValueError
from .jsonio import decode_table_values, dumps
from .slice import Slice

from typing import Iterator, List, Optional, Tuple


def _owned_cells(values) -> List[Cell]:
	"""Copy a Slice (or any iterable of cell values) into fresh cells."""
	if isinstance(values, Slice):
		return [cell.copy() for cell in values]
	if isinstance(values, (str, bytes, bytearray)):
		raise TablefiTypeError("Rows and columns must be a Slice or an iterable of values, not text")
	return [Cell(v) for v in values]


class Table():
	"""
	Row-major grid of cells where every row has the same number of columns.

	Cells live in one flat list indexed by ``row * column_count + col``.
	Rows and columns read from the table are detached copies; write them back
	with ``replace_row`` / ``replace_column`` to change the table.

	Examples
	--------
	>>> t = Table.from_json('[["a","b","c"],["1","2","3"]]')
	>>> t.push_row(["4", "5", "6"])
	>>> t.push_row(t.row(1) + t.row(2))
	>>> t.mut_cell(3, 2).mul_value(2)
	Number(18)
	>>> t.to_csv()
	'a,b,c\\n1,2,3\\n4,5,6\\n5,7,18\\n'
	"""
	_cells = None
	_rows = 0
	_cols = 0

	def __init__(self, initial=()):
		"""
		Build a table from an iterable of rows.

		Each row is a Slice or an iterable of str, Decimal, int or Cell values.
		"""
		if isinstance(initial, (str, bytes, bytearray)):
			raise TablefiTypeError("Table needs an iterable of rows; use Table.from_json() for JSON text")
		self._cells = []
		self._rows = 0
		self._cols = 0
		for row in initial:
			self.push_row(row)

	@classmethod
	def from_json(cls, text) -> "Table":
		"""
		Decode a JSON array of equal-length arrays.

		Raises TablefiParseError on malformed JSON or ragged rows; nothing is
		built in that case.
		"""
		return cls(decode_table_values(text))

	def copy(self) -> "Table":
		table = Table.__new__(Table)
		table._cells = [cell.copy() for cell in self._cells]
		table._rows = self._rows
		table._cols = self._cols
		return table

	#-----------------------------------------------------
	# Shape
	#-----------------------------------------------------

	def row_count(self) -> int:
		return self._rows

	def column_count(self) -> int:
		return self._cols

	def size(self) -> Tuple[int, int]:
		return (self._rows, self._cols)

	def __len__(self):
		""" number of rows """
		return self._rows

	def is_empty(self) -> bool:
		return not self._cells

	def _is_blank(self) -> bool:
		"""A table holding no cells (0×0, 0×n or n×0) accepts a row or column of any length."""
		return not self._cells

	#-----------------------------------------------------
	# Cell access
	#-----------------------------------------------------

	def _in_range(self, row: int, col: int) -> bool:
		return 0 <= row < self._rows and 0 <= col < self._cols

	def cell(self, row: int, col: int) -> Optional[Cell]:
		"""Detached copy of the cell at (row, col), or None when out of range."""
		found = self.mut_cell(row, col)
		return None if found is None else found.copy()

	def mut_cell(self, row: int, col: int) -> Optional[Cell]:
		"""The live cell at (row, col), or None when out of range."""
		if not self._in_range(row, col):
			return None
		return self._cells[row * self._cols + col]

	def set_cell(self, row: int, col: int, value) -> Optional[Cell]:
		"""Replace the cell at (row, col). Returns the prior cell, or None when out of range."""
		if not self._in_range(row, col):
			return None
		idx = row * self._cols + col
		prior = self._cells[idx]
		self._cells[idx] = Cell(value)
		return prior

	def _normalize_key(self, key) -> int:
		if not (isinstance(key, tuple) and len(key) == 2):
			raise TablefiTypeError(
				f"Table indexing takes a (row, col) pair, not {type(key).__name__}; "
				"use row(i) or column(j) for whole slices"
			)
		row, col = key
		if isinstance(row, bool) or isinstance(col, bool) or not (isinstance(row, int) and isinstance(col, int)):
			raise TablefiTypeError("Table indices must be integers")
		if row < 0:
			row += self._rows
		if col < 0:
			col += self._cols
		if not self._in_range(row, col):
			raise TablefiIndexError(f"Cell ({key[0]}, {key[1]}) out of range for {self._rows}×{self._cols} table")
		return row * self._cols + col

	def __getitem__(self, key):
		""" table[row, col] returns the live cell; negative indices count from the end """
		return self._cells[self._normalize_key(key)]

	def __setitem__(self, key, value):
		self._cells[self._normalize_key(key)] = Cell(value)

	#-----------------------------------------------------
	# Row / column extraction
	#-----------------------------------------------------

	def _row_cells(self, row: int) -> List[Cell]:
		start = row * self._cols
		return self._cells[start:start + self._cols]

	def _column_cells(self, col: int) -> List[Cell]:
		return self._cells[col::self._cols]

	def row(self, idx: int) -> Optional[Slice]:
		"""Detached copy of row idx, or None when out of range."""
		if not 0 <= idx < self._rows:
			return None
		return Slice._wrap([cell.copy() for cell in self._row_cells(idx)])

	def column(self, idx: int) -> Optional[Slice]:
		"""Detached copy of column idx, or None when out of range."""
		if not 0 <= idx < self._cols:
			return None
		return Slice._wrap([cell.copy() for cell in self._column_cells(idx)])

	def rows(self) -> List[Slice]:
		return [self.row(r) for r in range(self._rows)]

	def columns(self) -> List[Slice]:
		return [self.column(c) for c in range(self._cols)]

	def __iter__(self) -> Iterator[Slice]:
		"""Iterate over detached row slices."""
		for r in range(self._rows):
			yield self.row(r)

	#-----------------------------------------------------
	# Structural mutation: rows
	#-----------------------------------------------------

	def insert_row(self, idx: int, values) -> None:
		"""
		Insert a row before idx, shifting later rows down.

		Raises
		------
		TablefiIndexError
			idx is outside 0..row_count().
		TablefiValueError
			The row length differs from column_count() (unless the table holds no cells).
		"""
		if not 0 <= idx <= self._rows:
			raise TablefiIndexError(f"Row insert index {idx} out of range for {self._rows} rows")
		cells = _owned_cells(values)
		if len(cells) != self._cols:
			if not self._is_blank():
				raise TablefiValueError(f"Row has {len(cells)} cells; table has {self._cols} columns")
			# Adopt the new width; earlier zero-width rows are dropped
			self._rows, self._cols, idx = 0, len(cells), 0

		pos = idx * self._cols
		self._cells[pos:pos] = cells
		self._rows += 1

	def push_row(self, values) -> None:
		"""Append a row at the end."""
		self.insert_row(self._rows, values)

	def remove_row(self, idx: int) -> Optional[Slice]:
		"""Remove row idx and return it, or None (table unchanged) when out of range."""
		if not 0 <= idx < self._rows:
			return None
		start = idx * self._cols
		removed = self._cells[start:start + self._cols]
		del self._cells[start:start + self._cols]
		self._rows -= 1
		if self._rows == 0:
			self._cols = 0
		return Slice._wrap(removed)

	def replace_row(self, idx: int, values) -> Optional[Slice]:
		"""Swap in a new row at idx. Returns the prior row, or None (table unchanged) when out of range."""
		if not 0 <= idx < self._rows:
			return None
		cells = _owned_cells(values)
		if len(cells) != self._cols:
			raise TablefiValueError(f"Row has {len(cells)} cells; table has {self._cols} columns")
		start = idx * self._cols
		prior = self._cells[start:start + self._cols]
		self._cells[start:start + self._cols] = cells
		return Slice._wrap(prior)

	#-----------------------------------------------------
	# Structural mutation: columns
	#-----------------------------------------------------

	def insert_column(self, idx: int, values) -> None:
		"""
		Insert a column before idx, shifting later columns right.

		Raises
		------
		TablefiIndexError
			idx is outside 0..column_count().
		TablefiValueError
			The column length differs from row_count() (unless the table holds no cells).
		"""
		if not 0 <= idx <= self._cols:
			raise TablefiIndexError(f"Column insert index {idx} out of range for {self._cols} columns")
		cells = _owned_cells(values)
		if len(cells) != self._rows:
			if not self._is_blank():
				raise TablefiValueError(f"Column has {len(cells)} cells; table has {self._rows} rows")
			# Adopt the new height; earlier zero-height columns are dropped
			self._rows, self._cols, idx = len(cells), 0, 0

		# Rebuild the buffer row by row
		rebuilt = []
		for r in range(self._rows):
			row = self._row_cells(r)
			row.insert(idx, cells[r])
			rebuilt.extend(row)
		self._cells = rebuilt
		self._cols += 1

	def push_column(self, values) -> None:
		"""Append a column at the end."""
		self.insert_column(self._cols, values)

	def remove_column(self, idx: int) -> Optional[Slice]:
		"""Remove column idx and return it, or None (table unchanged) when out of range."""
		if not 0 <= idx < self._cols:
			return None
		cols = self._cols
		removed = self._column_cells(idx)
		self._cells = [cell for pos, cell in enumerate(self._cells) if pos % cols != idx]
		self._cols -= 1
		if self._cols == 0:
			self._rows = 0
		return Slice._wrap(removed)

	def replace_column(self, idx: int, values) -> Optional[Slice]:
		"""Swap in a new column at idx. Returns the prior column, or None (table unchanged) when out of range."""
		if not 0 <= idx < self._cols:
			return None
		cells = _owned_cells(values)
		if len(cells) != self._rows:
			raise TablefiValueError(f"Column has {len(cells)} cells; table has {self._rows} rows")
		prior = self._column_cells(idx)
		self._cells[idx::self._cols] = cells
		return Slice._wrap(prior)

	#-----------------------------------------------------
	# Whole-table transforms
	#-----------------------------------------------------

	def transpose(self) -> "Table":
		"""New table with rows and columns swapped."""
		table = Table.__new__(Table)
		table._cells = [
			self._cells[r * self._cols + c].copy()
			for c in range(self._cols)
			for r in range(self._rows)
		]
		table._rows = self._cols
		table._cols = self._rows
		return table

	@property
	def T(self):
		return self.transpose()

	def __eq__(self, other):
		if not isinstance(other, Table):
			return NotImplemented
		return self.size() == other.size() and self._cells == other._cells

	__hash__ = None

	#-----------------------------------------------------
	# Encodings
	#-----------------------------------------------------

	def to_list(self) -> List[List[str]]:
		"""Canonical string of every cell, row by row."""
		return [[str(cell) for cell in self._row_cells(r)] for r in range(self._rows)]

	def to_json(self) -> str:
		"""
		JSON array of rows; every cell is a JSON string so decimals keep their precision.

		>>> Table.from_json('[["a","b","c"],["1","2","3"]]').to_json()
		'[["a","b","c"],["1","2","3"]]'
		"""
		return dumps(self.to_list())

	def write_csv(self, stream) -> int:
		"""
		Write the table as CSV to a caller-owned text stream.

		Rows end with a bare LF. The stream is not flushed or closed.
		Returns the number of rows written.
		"""
		return write_records((self._row_cells(r) for r in range(self._rows)), stream)

	def to_csv(self) -> str:
		buffer = io.StringIO()
		self.write_csv(buffer)
		return buffer.getvalue()

	def __str__(self):
		return self.to_json()

	def __repr__(self):
		return _printr(self)
