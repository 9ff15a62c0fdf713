"""Per-column layout settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

Alignment = Literal["left", "center", "right", "justify"]

VerticalAlignment = Literal["top", "middle", "bottom"]

ALIGNMENTS: tuple[str, ...] = get_args(Alignment)
VERTICAL_ALIGNMENTS: tuple[str, ...] = get_args(VerticalAlignment)


@dataclass(frozen=True)
class ColumnSpec:
    """How one column is sized, spaced and aligned.

    ``left_margin`` of ``None`` means the default: no margin before the
    first column, one space before every other column. ``fixed_width``
    overrides ``min_width`` and ``max_width``; a column with none of the
    three set has no limits and floats to fill the remaining space.
    Widths include the horizontal padding.
    """

    alignment: Alignment = "left"
    vertical_alignment: VerticalAlignment = "top"
    left_margin: int | None = None
    min_width: int | None = None
    max_width: int | None = None
    fixed_width: int | None = None
    padding_left: int = 0
    padding_right: int = 0
    padding_top: int = 0
    padding_bottom: int = 0

    @property
    def no_limits(self) -> bool:
        return self.min_width is None and self.max_width is None and self.fixed_width is None

    @property
    def horizontal_padding(self) -> int:
        return self.padding_left + self.padding_right

    @property
    def vertical_padding(self) -> int:
        return self.padding_top + self.padding_bottom

    @property
    def lower_bound(self) -> int:
        """Narrowest width the column accepts."""
        if self.fixed_width is not None:
            return self.fixed_width
        return max(self.min_width or 0, self.horizontal_padding)

    @property
    def upper_bound(self) -> int | None:
        """Widest width the column accepts, ``None`` when unbounded."""
        if self.fixed_width is not None:
            return self.fixed_width
        return self.max_width

    def margin(self, index: int) -> int:
        """Blank cells before this column when it sits at *index*."""
        if self.left_margin is not None:
            return self.left_margin
        return 0 if index == 0 else 1
