"""Exceptions raised while configuring or laying out a table."""

from __future__ import annotations


class LayoutError(Exception):
    """Base class for every gridwrap error."""


class InvalidColumnCount(LayoutError):
    """A table was constructed with fewer than one column."""

    def __init__(self, count: int) -> None:
        super().__init__(f"a table needs at least one column, got {count}")
        self.count = count


class InsufficientSpace(LayoutError):
    """The viewport cannot hold the margins, fixed widths and minimums.

    *column* names the column at which the space ran out, when one can be
    blamed.
    """

    def __init__(
        self,
        column: int | None = None,
        required: int | None = None,
        available: int | None = None,
    ) -> None:
        message = "insufficient space"
        if column is not None:
            message += f" for column {column}"
        if required is not None and available is not None:
            message += f": {required} cells required, {available} available"
        super().__init__(message)
        self.column = column
        self.required = required
        self.available = available


class TooManyColumns(LayoutError):
    """A row holds more cells than the table has columns."""

    def __init__(self, row: int, length: int, expected: int) -> None:
        super().__init__(f"row {row} has {length} cells but the table has {expected} columns")
        self.row = row
        self.length = length
        self.expected = expected


class ZeroWidthColumn(LayoutError):
    """Visible text was routed to a column whose content width is zero."""

    def __init__(self, column: int | None = None, row: int | None = None) -> None:
        message = "cannot wrap visible text into zero width"
        if column is not None:
            message += f" (column {column}"
            message += ")" if row is None else f", row {row})"
        super().__init__(message)
        self.column = column
        self.row = row


class MinGreaterThanMax(LayoutError):
    """A column's minimum width would exceed its maximum width."""

    def __init__(self, column: int, min_width: int, max_width: int) -> None:
        super().__init__(
            f"column {column}: minimum width {min_width} exceeds maximum width {max_width}"
        )
        self.column = column
        self.min_width = min_width
        self.max_width = max_width


class ColumnOutOfBounds(LayoutError, IndexError):
    """A column index outside the table was used."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"column index {index} out of range for {count} columns")
        self.index = index
        self.count = count
