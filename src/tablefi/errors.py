class TablefiError(Exception):
    """Base exception for tablefi."""
    pass


class TablefiTypeError(TablefiError, TypeError):
    """A value cannot become a cell (bool, list, object), a mutator got a
    non-numeric argument, or a slice/table index is not an integer."""
    pass


class TablefiValueError(TablefiError, ValueError):
    """A row or column does not fit the table's shape on insert/replace,
    or a decimal is NaN or infinite."""
    pass


class TablefiIndexError(TablefiError, IndexError):
    """``slice[i]`` / ``table[r, c]`` out of range, or an insert position
    outside 0..count."""
    pass


class TablefiParseError(TablefiValueError):
    """JSON input is malformed, is not an array, or has ragged rows."""
    pass
