"""
tablefi: a typed, in-memory table with exact decimal arithmetic

Cells hold either text or a decimal.Decimal; rows and columns can be
inserted, removed, replaced and combined elementwise, and a table
round-trips through nested-array JSON and writes RFC 4180 CSV.

Main classes:
    - Cell: Text(str) or Number(Decimal), spreadsheet-style arithmetic
    - Slice: one row or column of cells with elementwise arithmetic
    - Table: row-major grid of cells with equal-length rows

Zero external dependencies - pure Python stdlib only.
"""

from .cell import Cell, DIV0
from .classify import classify, is_numeric_literal
from .slice import Slice
from .table import Table
from .typing import CellKind
from .errors import TablefiError, TablefiTypeError, TablefiValueError, TablefiIndexError, TablefiParseError

__version__ = "0.1.0"
__all__ = [
	"Cell",
	"CellKind",
	"DIV0",
	"Slice",
	"Table",
	"classify",
	"is_numeric_literal",
	"TablefiError",
	"TablefiTypeError",
	"TablefiValueError",
	"TablefiIndexError",
	"TablefiParseError",
]
