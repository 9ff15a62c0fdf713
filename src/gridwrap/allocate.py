"""Column width allocation.

Splits the viewport among the columns of a table. Margins come off the
top, fixed-width columns take exactly their width, and whatever is left is
shared as evenly as the remaining columns' minimum and maximum widths allow.
"""

from __future__ import annotations

import logging
from typing import Sequence

from gridwrap.column import ColumnSpec
from gridwrap.errors import InsufficientSpace

logger = logging.getLogger(__name__)


def allocate(
    viewport_width: int,
    columns: Sequence[ColumnSpec],
    margins: Sequence[int],
) -> list[int]:
    """Return the content width of every column.

    Raises :class:`InsufficientSpace` when the margins, fixed widths and
    minimum widths together exceed *viewport_width*.
    """
    margin_total = sum(margins)
    available = viewport_width - margin_total
    if available < 0:
        raise InsufficientSpace(required=margin_total, available=viewport_width)

    widths = [0] * len(columns)
    flexible: list[int] = []

    for index, spec in enumerate(columns):
        if spec.fixed_width is None:
            flexible.append(index)
            continue
        if spec.fixed_width < spec.horizontal_padding:
            raise InsufficientSpace(
                column=index, required=spec.horizontal_padding, available=spec.fixed_width
            )
        widths[index] = spec.fixed_width
        available -= spec.fixed_width
        if available < 0:
            raise InsufficientSpace(
                column=index, required=viewport_width - available, available=viewport_width
            )

    lower = {index: columns[index].lower_bound for index in flexible}
    upper = {index: columns[index].upper_bound for index in flexible}

    claimed = 0
    for index in flexible:
        cap = upper[index]
        if cap is not None and cap < lower[index]:
            raise InsufficientSpace(column=index, required=lower[index], available=cap)
        claimed += lower[index]
        if claimed > available:
            raise InsufficientSpace(
                column=index,
                required=viewport_width - available + claimed,
                available=viewport_width,
            )

    passes = _distribute(widths, flexible, lower, upper, available)
    logger.debug(
        "allocated widths %s (margins %s) in %d passes for viewport %d",
        widths,
        list(margins),
        passes,
        viewport_width,
    )
    return widths


def _distribute(
    widths: list[int],
    pending: list[int],
    lower: dict[int, int],
    upper: dict[int, int | None],
    pool: int,
) -> int:
    """Share *pool* among the *pending* columns, writing into *widths*.

    Each pass compares every column's bounds with the even share
    ``pool / len(pending)``. Columns capped below the share give width
    back, columns with a minimum above it take width away; whichever side
    moves more is pinned at its bounds and the rest is shared again. Every
    pass pins at least one column, so there are at most ``len(pending)``
    passes. Shares are compared scaled by the column count to stay in
    integers. Returns the number of passes.
    """
    pending = list(pending)
    passes = 0

    while pending:
        passes += 1
        count = len(pending)
        capped = [i for i in pending if upper[i] is not None and upper[i] * count < pool]
        floored = [i for i in pending if lower[i] * count > pool]

        if not capped and not floored:
            share, extra = divmod(pool, count)
            for position, index in enumerate(pending):
                widths[index] = share + (1 if position < extra else 0)
            return passes

        released = sum(pool - upper[i] * count for i in capped)
        taken = sum(lower[i] * count - pool for i in floored)

        pinned: list[int] = []
        if released >= taken:
            for index in capped:
                widths[index] = upper[index]
                pool -= upper[index]
            pinned.extend(capped)
        if taken >= released:
            for index in floored:
                widths[index] = lower[index]
                pool -= lower[index]
            pinned.extend(floored)

        pending = [index for index in pending if index not in pinned]

    if pool:
        logger.debug("every column reached its maximum width, %d cells unused", pool)
    return passes
