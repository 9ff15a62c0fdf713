"""gridwrap: wrapped, aligned multi-column text tables for fixed-width viewports."""

# Errors
from gridwrap.errors import (
    ColumnOutOfBounds,
    InsufficientSpace,
    InvalidColumnCount,
    LayoutError,
    MinGreaterThanMax,
    TooManyColumns,
    ZeroWidthColumn,
)

# Column configuration
from gridwrap.column import Alignment, ColumnSpec, VerticalAlignment

# Layout engine
from gridwrap.align import align_horizontal, align_vertical, justify
from gridwrap.allocate import allocate
from gridwrap.wrap import WrappedLine, iter_wrapped, wrap

# Table
from gridwrap.table import Column, Table

# Measurement
from gridwrap.utils import display_width, display_width_upto, take_cells

__all__ = [
    # Errors
    "ColumnOutOfBounds",
    "InsufficientSpace",
    "InvalidColumnCount",
    "LayoutError",
    "MinGreaterThanMax",
    "TooManyColumns",
    "ZeroWidthColumn",
    # Column configuration
    "Alignment",
    "ColumnSpec",
    "VerticalAlignment",
    # Layout engine
    "WrappedLine",
    "align_horizontal",
    "align_vertical",
    "allocate",
    "iter_wrapped",
    "justify",
    "wrap",
    # Table
    "Column",
    "Table",
    # Measurement
    "display_width",
    "display_width_upto",
    "take_cells",
]
