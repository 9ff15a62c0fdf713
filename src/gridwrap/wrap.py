"""Greedy word wrapping with hyphenation.

Wrapping works on display units (see :func:`gridwrap.utils.iter_units`), so
escape sequences and grapheme clusters are never split and widths are
measured in terminal cells.
"""

from __future__ import annotations

import logging
from typing import Iterator, NamedTuple

from gridwrap.errors import ZeroWidthColumn
from gridwrap.utils import is_break_space, iter_units

logger = logging.getLogger(__name__)

HYPHEN = "-"


class WrappedLine(NamedTuple):
    """One display line produced by the wrapper.

    ``words`` are the tokens joined by single spaces to form ``text``.
    ``ends_paragraph`` is set on the last line of every paragraph.
    """

    text: str
    width: int
    words: tuple[str, ...]
    ends_paragraph: bool


class _Token(NamedTuple):
    text: str
    width: int


def _tokenize(paragraph: str) -> Iterator[_Token]:
    """Yield the whitespace-delimited tokens of *paragraph*.

    Escape sequences stay attached to the token they touch.
    """
    parts: list[str] = []
    width = 0
    for unit in iter_units(paragraph):
        if not unit.escape and is_break_space(unit.text):
            if parts:
                yield _Token("".join(parts), width)
                parts = []
                width = 0
            continue
        parts.append(unit.text)
        width += unit.width
    if parts:
        yield _Token("".join(parts), width)


def _fit(text: str, max_cells: int) -> tuple[int, int]:
    """Return ``(length, cells)`` of the longest prefix that fits *max_cells*.

    Unlike :func:`gridwrap.utils.display_width_upto`, escape sequences
    after the last fitting grapheme are left at the start of the rest.
    """
    length = 0
    end = 0
    cells = 0
    for unit in iter_units(text):
        if cells + unit.width > max_cells:
            break
        length += len(unit.text)
        cells += unit.width
        if not unit.escape:
            end = length
    return end, cells


def _split_token(text: str, width: int) -> tuple[str, str, int, bool]:
    """Cut the head off a token too wide for *width*.

    Returns ``(head, rest, cells, hyphenated)`` where *cells* is the width
    taken from the token. The head carries a hyphen unless the column is
    one cell wide or a wide grapheme leaves no room for it.
    """
    if width > 1:
        length, cells = _fit(text, width - 1)
        if cells:
            return text[:length] + HYPHEN, text[length:], cells, True

    length, cells = _fit(text, width)
    if cells:
        return text[:length], text[length:], cells, False

    # The first grapheme alone is wider than the column
    length = 0
    for unit in iter_units(text):
        length += len(unit.text)
        if unit.width:
            cells = unit.width
            break
    logger.warning(
        "%r is %d cells wide and cannot fit a %d cell column", text[:length], cells, width
    )
    return text[:length], text[length:], cells, False


def _line(words: list[str], width: int, ends_paragraph: bool) -> WrappedLine:
    return WrappedLine(" ".join(words), width, tuple(words), ends_paragraph)


def _wrap_paragraph(paragraph: str, width: int) -> Iterator[WrappedLine]:
    words: list[str] = []
    line_width = 0

    for text, token_width in _tokenize(paragraph):
        if token_width == 0:
            # invisible tokens join the line without a separating space
            if words:
                words[-1] += text
            else:
                words.append(text)
            continue

        if width == 0:
            raise ZeroWidthColumn()

        if line_width and line_width + 1 + token_width > width:
            yield _line(words, line_width, False)
            words = []
            line_width = 0

        while token_width > width:
            head, rest, cells, hyphenated = _split_token(text, width)
            if cells == token_width:
                # a lone grapheme wider than the column keeps its own line
                break
            text = rest
            token_width -= cells
            if words:
                words[-1] += head
            else:
                words.append(head)
            yield _line(words, cells + 1 if hyphenated else cells, False)
            words = []

        if line_width:
            words.append(text)
            line_width += 1 + token_width
        else:
            if words:
                words[-1] += text
            else:
                words.append(text)
            line_width = token_width

    yield _line(words, line_width, True)


def iter_wrapped(text: str, width: int) -> Iterator[WrappedLine]:
    """Wrap *text* into lines at most *width* cells wide.

    Explicit line breaks start new paragraphs and empty paragraphs are kept
    as empty lines; empty text yields a single empty line. Raises
    :class:`ZeroWidthColumn` when *width* is zero and *text* has visible
    content.
    """
    if width < 0:
        raise ValueError(f"width must not be negative, got {width}")
    for paragraph in text.splitlines() or [""]:
        yield from _wrap_paragraph(paragraph, width)


def wrap(text: str, width: int) -> list[str]:
    """Wrap *text* to *width* cells and return the lines."""
    return [line.text for line in iter_wrapped(text, width)]
