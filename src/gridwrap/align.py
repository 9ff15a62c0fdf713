"""Horizontal and vertical alignment of wrapped cell content."""

from __future__ import annotations

from typing import Sequence

from gridwrap.column import Alignment, VerticalAlignment
from gridwrap.utils import display_width
from gridwrap.wrap import WrappedLine


def align_horizontal(line: str, width: int, alignment: Alignment = "left") -> str:
    """Pad *line* with spaces to exactly *width* cells.

    Centered text gives the odd leftover space to the right. ``justify``
    pads like ``left``; use :func:`justify` to spread words. Lines wider
    than *width* are returned unchanged, never truncated.
    """
    surplus = max(0, width - display_width(line))
    if alignment == "right":
        return " " * surplus + line
    if alignment == "center":
        left = surplus // 2
        return " " * left + line + " " * (surplus - left)
    return line + " " * surplus


def justify(words: Sequence[str], width: int) -> str:
    """Join *words* with widened gaps so the line spans *width* cells.

    The leftmost gaps take the extra spaces. Fewer than two words are
    left-aligned.
    """
    if len(words) < 2:
        return align_horizontal(" ".join(words), width)

    gaps = len(words) - 1
    spaces = max(width - sum(display_width(word) for word in words), gaps)
    gap, extra = divmod(spaces, gaps)

    parts: list[str] = []
    for position, word in enumerate(words[:-1]):
        parts.append(word)
        parts.append(" " * (gap + (1 if position < extra else 0)))
    parts.append(words[-1])
    return "".join(parts)


def align_line(line: WrappedLine, width: int, alignment: Alignment = "left") -> str:
    """Align one wrapped line; the last line of a paragraph is never justified."""
    if alignment == "justify" and not line.ends_paragraph:
        return justify(line.words, width)
    return align_horizontal(line.text, width, alignment)


def align_vertical(
    lines: Sequence[str],
    height: int,
    alignment: VerticalAlignment = "top",
    width: int = 0,
) -> list[str]:
    """Pad *lines* with blank lines of *width* spaces up to *height* lines.

    ``middle`` puts the odd leftover line below the content.
    """
    deficit = height - len(lines)
    if deficit <= 0:
        return list(lines)

    blank = " " * width
    if alignment == "bottom":
        return [blank] * deficit + list(lines)
    if alignment == "middle":
        above = deficit // 2
        return [blank] * above + list(lines) + [blank] * (deficit - above)
    return list(lines) + [blank] * deficit
