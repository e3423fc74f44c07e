"""Display and repr logic for Slice and Table."""

from __future__ import annotations
from typing import List

from .typing import CellKind, infer_kind, kind_label


# How many rows/columns to show before inserting "..."
MAX_HEAD_ROWS = 5
MAX_HEAD_COLS = 5

ELLIPSIS = "..."


def _format_cell(cell) -> str:
	if cell.kind is CellKind.NUMBER:
		return str(cell)
	return repr(str(cell))


def _preview(cells, max_preview: int) -> list:
	"""Symmetric head/tail preview, with None standing in for the gap."""
	cells = list(cells)
	if len(cells) > max_preview * 2:
		return cells[:max_preview] + [None] + cells[-max_preview:]
	return cells


def _format_column(cells, max_preview: int = MAX_HEAD_ROWS) -> List[str]:
	"""Returns a list of strings representing a run of cells, truncated for display."""
	out = [ELLIPSIS if c is None else _format_cell(c) for c in _preview(cells, max_preview)]
	return _align(out, infer_kind(cells) is CellKind.NUMBER)


def _align(strings: List[str], numeric: bool, width: int = 0) -> List[str]:
	# numeric right, others left
	width = max([width] + [len(s) for s in strings])
	if numeric:
		return [s.rjust(width) for s in strings]
	return [s.ljust(width) for s in strings]


def _repr_slice(s) -> str:
	"""Pretty repr for a Slice."""
	lines = _format_column(list(s))
	lines.append("")
	lines.append(f"# {len(s)} cell slice <{kind_label(s)}>")
	return "\n".join(lines)


def _repr_table(tbl) -> str:
	"""Pretty repr for a Table."""
	rows, cols = tbl.size()
	if rows == 0 or cols == 0:
		return f"# {rows}×{cols} table"

	col_indices = _preview(range(cols), MAX_HEAD_COLS)

	formatted_cols = []
	for idx in col_indices:
		if idx is None:
			height = len(formatted_cols[0])
			formatted_cols.append([ELLIPSIS] * height)
		else:
			formatted_cols.append(_format_column(list(tbl.column(idx))))

	lines = []
	for r in range(len(formatted_cols[0])):
		lines.append("  ".join(col[r] for col in formatted_cols).rstrip())

	lines.append("")
	lines.append(f"# {rows}×{cols} table")
	return "\n".join(lines)


def _printr(obj) -> str:
	"""Entry point used by Slice.__repr__ and Table.__repr__."""
	nd = len(obj.size())
	if nd == 1:
		return _repr_slice(obj)
	return _repr_table(obj)
