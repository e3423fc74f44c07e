"""
Cell kinds for tablefi.

A cell is a closed sum of two variants:
  - TEXT holds a str, used verbatim
  - NUMBER holds an exact decimal.Decimal

Kind inference over a run of cells is used by Slice.kind() and by the
display layer to decide alignment.
"""

from __future__ import annotations
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional


class CellKind(Enum):
    """
    The variant held by a Cell.

    Attributes
    ----------
    TEXT
        Free text, stored as ``str``.
    NUMBER
        Exact decimal, stored as ``decimal.Decimal``.

    Examples
    --------
    >>> CellKind.NUMBER.python_type
    <class 'decimal.Decimal'>
    """

    TEXT = "text"
    NUMBER = "number"

    def __repr__(self):
        return f"<{self.value}>"

    @property
    def python_type(self) -> type:
        if self is CellKind.NUMBER:
            return Decimal
        return str


def infer_kind(cells: Iterable) -> Optional[CellKind]:
    """
    Infer the common kind of a sequence of cells.

    Returns None for an empty sequence or when both kinds are present.
    """
    kind = None
    for cell in cells:
        if kind is None:
            kind = cell.kind
        elif cell.kind is not kind:
            return None
    return kind


def kind_label(cells) -> str:
    """Short label used by display footers: 'number', 'text', 'mixed' or 'empty'."""
    cells = tuple(cells)
    if not cells:
        return "empty"
    kind = infer_kind(cells)
    if kind is None:
        return "mixed"
    return kind.value
