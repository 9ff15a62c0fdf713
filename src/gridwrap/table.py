"""Table layout: configuration, cached column widths and row assembly.

A :class:`Table` holds the viewport width and one :class:`ColumnSpec` per
column. Column widths are allocated lazily on the first ``tabulate`` or
``macerate`` call and cached until the configuration changes.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import replace
from typing import Any, Callable, Iterable, Sequence

from gridwrap.align import align_line, align_vertical
from gridwrap.allocate import allocate
from gridwrap.column import ALIGNMENTS, VERTICAL_ALIGNMENTS, Alignment, ColumnSpec, VerticalAlignment
from gridwrap.errors import (
    ColumnOutOfBounds,
    InsufficientSpace,
    InvalidColumnCount,
    MinGreaterThanMax,
    TooManyColumns,
    ZeroWidthColumn,
)
from gridwrap.wrap import iter_wrapped

logger = logging.getLogger(__name__)

Row = Sequence[Any]
Transform = Callable[[ColumnSpec], ColumnSpec]


def _check_size(name: str, value: int) -> int:
    if not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def _check_alignment(alignment: str) -> Alignment:
    if alignment not in ALIGNMENTS:
        raise ValueError(f"unknown alignment {alignment!r}, expected one of {ALIGNMENTS}")
    return alignment  # type: ignore[return-value]


def _check_vertical_alignment(alignment: str) -> VerticalAlignment:
    if alignment not in VERTICAL_ALIGNMENTS:
        raise ValueError(
            f"unknown vertical alignment {alignment!r}, expected one of {VERTICAL_ALIGNMENTS}"
        )
    return alignment  # type: ignore[return-value]


def _check_limits(index: int, spec: ColumnSpec) -> ColumnSpec:
    if spec.min_width is not None and spec.max_width is not None and spec.min_width > spec.max_width:
        raise MinGreaterThanMax(index, spec.min_width, spec.max_width)
    return spec


def _unfix(spec: ColumnSpec) -> ColumnSpec:
    """Turn a fixed width into equal min and max limits."""
    if spec.fixed_width is None:
        return spec
    return replace(spec, min_width=spec.fixed_width, max_width=spec.fixed_width, fixed_width=None)


def _margins(specs: Sequence[ColumnSpec]) -> list[int]:
    return [spec.margin(index) for index, spec in enumerate(specs)]


# ---------------------------------------------------------------------------
# Column handle
# ---------------------------------------------------------------------------


class Column:
    """Chainable view of one column of a :class:`Table`.

    Every setter validates, updates the table and returns the handle, so
    calls can be chained::

        table.column(0).set_alignment("right").set_left_margin(8)
    """

    def __init__(self, table: Table, index: int) -> None:
        self._table = table
        self._index = index

    def __repr__(self) -> str:
        return f"Column({self._index}, {self.spec!r})"

    @property
    def index(self) -> int:
        return self._index

    @property
    def spec(self) -> ColumnSpec:
        return self._table._specs[self._index]

    @property
    def margin(self) -> int:
        return self.spec.margin(self._index)

    @property
    def width(self) -> int:
        """Resolved content width; allocates the layout if needed."""
        return self._table._resolve()[self._index]

    def _set(self, **changes: Any) -> Column:
        self._table._update([self._index], **changes)
        return self

    def set_alignment(self, alignment: Alignment) -> Column:
        return self._set(alignment=_check_alignment(alignment))

    def set_vertical_alignment(self, alignment: VerticalAlignment) -> Column:
        return self._set(vertical_alignment=_check_vertical_alignment(alignment))

    def set_left_margin(self, margin: int) -> Column:
        return self._set(left_margin=_check_size("left margin", margin))

    def set_fixed_width(self, width: int) -> Column:
        return self._set(fixed_width=_check_size("fixed width", width), min_width=None, max_width=None)

    def set_min_width(self, width: int) -> Column:
        self._table._update([self._index], _unfix, min_width=_check_size("minimum width", width))
        return self

    def set_max_width(self, width: int) -> Column:
        self._table._update([self._index], _unfix, max_width=_check_size("maximum width", width))
        return self

    def clear_limits(self) -> Column:
        return self._set(min_width=None, max_width=None, fixed_width=None)

    def set_padding(self, padding: int) -> Column:
        _check_size("padding", padding)
        return self._set(
            padding_left=padding, padding_right=padding, padding_top=padding, padding_bottom=padding
        )

    def set_padding_horizontal(self, padding: int) -> Column:
        _check_size("padding", padding)
        return self._set(padding_left=padding, padding_right=padding)

    def set_padding_vertical(self, padding: int) -> Column:
        _check_size("padding", padding)
        return self._set(padding_top=padding, padding_bottom=padding)

    def set_padding_left(self, padding: int) -> Column:
        return self._set(padding_left=_check_size("padding", padding))

    def set_padding_right(self, padding: int) -> Column:
        return self._set(padding_right=_check_size("padding", padding))

    def set_padding_top(self, padding: int) -> Column:
        return self._set(padding_top=_check_size("padding", padding))

    def set_padding_bottom(self, padding: int) -> Column:
        return self._set(padding_bottom=_check_size("padding", padding))

    def reset(self) -> Column:
        """Restore every setting of this column to its default."""
        self._table._replace({self._index: ColumnSpec()})
        return self


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------


class Table:
    """Lays out rows of text as aligned, wrapped columns in a fixed viewport.

    Setters on the table apply to every column and return the table::

        table = Table(3, 80)
        table.set_left_margin(4).set_fixed_width(15).set_spaces_between_rows(1)
        table.column(1).set_alignment("center").clear_limits()
        for line in table.tabulate(rows):
            print(line)
    """

    def __init__(self, columns: int, width: int) -> None:
        if not isinstance(columns, int) or columns < 1:
            raise InvalidColumnCount(columns)
        self._width = _check_size("width", width)
        self._specs: list[ColumnSpec] = [ColumnSpec() for _ in range(columns)]
        self._spaces_between_rows = 0

        # Cache
        self._layout: list[int] | None = None

        self._check_space(self._specs, self._width)

    @classmethod
    def for_terminal(cls, columns: int, fallback: int = 80) -> Table:
        """Create a table as wide as the terminal, or *fallback* cells."""
        size = shutil.get_terminal_size((fallback, 24))
        return cls(columns, size.columns)

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return f"Table(columns={len(self._specs)}, width={self._width})"

    # --- Introspection ---

    @property
    def width(self) -> int:
        """Viewport width in cells."""
        return self._width

    @property
    def spaces_between_rows(self) -> int:
        return self._spaces_between_rows

    @property
    def margins(self) -> list[int]:
        """Blank cells placed before each column."""
        return _margins(self._specs)

    @property
    def column_widths(self) -> list[int]:
        """Resolved content width of every column."""
        return list(self._resolve())

    @property
    def columns(self) -> list[Column]:
        return [Column(self, index) for index in range(len(self._specs))]

    def column(self, index: int) -> Column:
        if not isinstance(index, int) or not 0 <= index < len(self._specs):
            raise ColumnOutOfBounds(index, len(self._specs))
        return Column(self, index)

    # --- Cache ---

    def reset(self) -> Table:
        """Drop the cached column widths so the next layout recomputes them."""
        if self._layout is not None:
            logger.debug("discarding cached column widths %s", self._layout)
        self._layout = None
        return self

    def lay_out(self) -> list[int]:
        """Allocate column widths now and return them."""
        self.reset()
        return self.column_widths

    def _resolve(self) -> list[int]:
        if self._layout is None:
            self._layout = allocate(self._width, self._specs, self.margins)
        return self._layout

    # --- Configuration ---

    @staticmethod
    def _check_space(specs: Sequence[ColumnSpec], width: int) -> None:
        """Raise InsufficientSpace if margins and lower bounds exceed *width*."""
        required = 0
        for index, spec in enumerate(specs):
            upper = spec.upper_bound
            if upper is not None and upper < spec.horizontal_padding:
                raise InsufficientSpace(
                    column=index, required=spec.horizontal_padding, available=upper
                )
            required += spec.margin(index) + spec.lower_bound
            if required > width:
                raise InsufficientSpace(column=index, required=required, available=width)

    def _replace(self, changes: dict[int, ColumnSpec], width: int | None = None) -> None:
        specs = list(self._specs)
        for index, spec in changes.items():
            specs[index] = _check_limits(index, spec)
        width = self._width if width is None else width
        if specs == self._specs and width == self._width:
            return
        self._check_space(specs, width)
        self._specs = specs
        self._width = width
        self.reset()

    def _update(self, indices: Iterable[int], *transforms: Transform, **changes: Any) -> None:
        updated: dict[int, ColumnSpec] = {}
        for index in indices:
            spec = self._specs[index]
            for transform in transforms:
                spec = transform(spec)
            updated[index] = replace(spec, **changes)
        self._replace(updated)

    def _update_all(self, *transforms: Transform, **changes: Any) -> Table:
        self._update(range(len(self._specs)), *transforms, **changes)
        return self

    def set_width(self, width: int) -> Table:
        """Change the viewport width."""
        self._replace({}, width=_check_size("width", width))
        return self

    def set_spaces_between_rows(self, count: int) -> Table:
        """Insert *count* blank lines between consecutive rows."""
        self._spaces_between_rows = _check_size("spaces between rows", count)
        return self

    def set_left_margin(self, margin: int) -> Table:
        """Put *margin* blank cells before every column, the first included."""
        return self._update_all(left_margin=_check_size("left margin", margin))

    def set_alignment(self, alignment: Alignment) -> Table:
        return self._update_all(alignment=_check_alignment(alignment))

    def set_vertical_alignment(self, alignment: VerticalAlignment) -> Table:
        return self._update_all(vertical_alignment=_check_vertical_alignment(alignment))

    def set_fixed_width(self, width: int) -> Table:
        return self._update_all(
            fixed_width=_check_size("fixed width", width), min_width=None, max_width=None
        )

    def set_min_width(self, width: int) -> Table:
        return self._update_all(_unfix, min_width=_check_size("minimum width", width))

    def set_max_width(self, width: int) -> Table:
        return self._update_all(_unfix, max_width=_check_size("maximum width", width))

    def clear_limits(self) -> Table:
        return self._update_all(min_width=None, max_width=None, fixed_width=None)

    def set_padding(self, padding: int) -> Table:
        _check_size("padding", padding)
        return self._update_all(
            padding_left=padding, padding_right=padding, padding_top=padding, padding_bottom=padding
        )

    def set_padding_horizontal(self, padding: int) -> Table:
        _check_size("padding", padding)
        return self._update_all(padding_left=padding, padding_right=padding)

    def set_padding_vertical(self, padding: int) -> Table:
        _check_size("padding", padding)
        return self._update_all(padding_top=padding, padding_bottom=padding)

    def set_padding_left(self, padding: int) -> Table:
        return self._update_all(padding_left=_check_size("padding", padding))

    def set_padding_right(self, padding: int) -> Table:
        return self._update_all(padding_right=_check_size("padding", padding))

    def set_padding_top(self, padding: int) -> Table:
        return self._update_all(padding_top=_check_size("padding", padding))

    def set_padding_bottom(self, padding: int) -> Table:
        return self._update_all(padding_bottom=_check_size("padding", padding))

    # --- Layout ---

    def _normalize(self, rows: Iterable[Row]) -> list[list[str]]:
        count = len(self._specs)
        table: list[list[str]] = []
        for index, row in enumerate(rows):
            cells = ["" if cell is None else str(cell) for cell in row]
            if len(cells) > count:
                raise TooManyColumns(index, len(cells), count)
            cells.extend([""] * (count - len(cells)))
            table.append(cells)
        return table

    def _render_cell(self, row: int, column: int, text: str, width: int) -> list[str]:
        spec = self._specs[column]
        inner = width - spec.horizontal_padding
        try:
            wrapped = list(iter_wrapped(text, inner))
        except ZeroWidthColumn:
            raise ZeroWidthColumn(column, row) from None

        left = " " * spec.padding_left
        right = " " * spec.padding_right
        blank = " " * width
        return (
            [blank] * spec.padding_top
            + [left + align_line(line, inner, spec.alignment) + right for line in wrapped]
            + [blank] * spec.padding_bottom
        )

    def _render_row(self, row: int, cells: list[str], widths: list[int]) -> list[list[str]]:
        rendered = [
            self._render_cell(row, column, text, widths[column])
            for column, text in enumerate(cells)
        ]
        height = max(len(lines) for lines in rendered)
        aligned = [
            align_vertical(lines, height, self._specs[column].vertical_alignment, widths[column])
            for column, lines in enumerate(rendered)
        ]
        return [list(fragments) for fragments in zip(*aligned)]

    def macerate(self, rows: Iterable[Row]) -> list[list[list[str]]]:
        """Lay out *rows* without joining the columns.

        Returns row -> line -> one aligned fragment per column. Fragments
        include cell padding but not margins; :meth:`join_line` adds those.
        Blank lines between rows are not included.
        """
        table = self._normalize(rows)
        widths = self._resolve()
        return [self._render_row(index, cells, widths) for index, cells in enumerate(table)]

    def join_line(self, fragments: Sequence[str]) -> str:
        """Join one line of column fragments, inserting each column's margin."""
        return "".join(
            " " * margin + fragment for margin, fragment in zip(self.margins, fragments)
        )

    def tabulate(self, rows: Iterable[Row]) -> list[str]:
        """Lay out *rows* and return the printable lines of the table.

        Row lines keep the trailing spaces of padded cells; the blank lines
        between rows are empty strings.
        """
        lines: list[str] = []
        for index, row in enumerate(self.macerate(rows)):
            if index:
                lines.extend([""] * self._spaces_between_rows)
            lines.extend(self.join_line(fragments) for fragments in row)
        return lines
