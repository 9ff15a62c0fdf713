"""Terminal text measurement: escape sequences, grapheme widths, truncation.

Text is consumed as a stream of atomic display units. A unit is either a
complete terminal escape sequence (zero width, never split) or a single
grapheme cluster with its width in terminal cells. Both the width functions
here and the wrapper in :mod:`gridwrap.wrap` walk the same unit stream.
"""

from __future__ import annotations

import unicodedata
from typing import Iterator, NamedTuple

import grapheme
import wcwidth as _wcwidth

ESC = "\x1b"
BEL = "\x07"
ST = "\x1b\\"

# Introducers of string-type sequences: OSC, DCS, SOS, PM, APC
_STRING_INTRODUCERS = "]PX^_"

# Spaces that look like whitespace but must never be broken on
NO_BREAK_SPACES = frozenset("\u00a0\u2007\u202f")


class Unit(NamedTuple):
    """One atomic piece of display text."""

    text: str
    width: int
    escape: bool


# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------


def extract_escape(text: str, pos: int) -> str | None:
    """Return the escape sequence starting at *pos* in *text*, or ``None``.

    Recognises:

    * CSI: ``ESC [`` parameter bytes, intermediate bytes, one final byte
    * OSC, DCS, SOS, PM, APC: ``ESC ]`` / ``P`` / ``X`` / ``^`` / ``_`` up to
      ``BEL`` or ``ST``
    * nF: ``ESC`` intermediate bytes followed by a final byte
    * two-character Fp / Fe / Fs escapes

    ``None`` means there is no complete sequence at *pos*: either the
    character is not ``ESC`` or the sequence is malformed or unterminated.
    Callers treat such text as literal characters.
    """
    end = len(text)
    if pos >= end or text[pos] != ESC or pos + 1 >= end:
        return None

    next_ch = text[pos + 1]

    if next_ch == "[":
        i = pos + 2
        while i < end and "\x30" <= text[i] <= "\x3f":
            i += 1
        while i < end and "\x20" <= text[i] <= "\x2f":
            i += 1
        if i < end and "\x40" <= text[i] <= "\x7e":
            return text[pos : i + 1]
        return None

    if next_ch in _STRING_INTRODUCERS:
        i = pos + 2
        while i < end:
            ch = text[i]
            if ch == BEL:
                return text[pos : i + 1]
            if ch == ESC:
                if text.startswith(ST, i):
                    return text[pos : i + 2]
                return None
            i += 1
        return None

    if "\x20" <= next_ch <= "\x2f":
        i = pos + 2
        while i < end and "\x20" <= text[i] <= "\x2f":
            i += 1
        if i < end and "\x30" <= text[i] <= "\x7e":
            return text[pos : i + 1]
        return None

    if "\x30" <= next_ch <= "\x7e":
        return text[pos : pos + 2]

    return None


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Control characters, combining marks and format characters -> 0
    2. Emoji (VS16, ZWJ sequences, skin tones, flags, pictographs) -> 2
    3. Otherwise the East Asian width of the first code point via wcwidth
       (wide and full-width -> 2, everything else -> 1)
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # skin tone modifiers
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # regional indicators
            return 2

    first = g[0]
    first_cp = ord(first)
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    category = unicodedata.category(first)
    if category.startswith("M") or category == "Cf":
        return 0

    return max(_wcwidth.wcwidth(first), 0)


# ---------------------------------------------------------------------------
# Unit stream
# ---------------------------------------------------------------------------


def _grapheme_units(run: str) -> Iterator[Unit]:
    for g in grapheme.graphemes(run):
        yield Unit(g, grapheme_width(g), False)


def iter_units(text: str) -> Iterator[Unit]:
    """Split *text* into escape sequences and grapheme clusters, in order.

    An ``ESC`` that does not begin a complete sequence stays in the
    surrounding literal text, where it measures as a zero-width control
    character and whatever follows it is measured as ordinary text.
    """
    start = 0
    pos = text.find(ESC)
    while pos != -1:
        sequence = extract_escape(text, pos)
        if sequence is None:
            pos = text.find(ESC, pos + 1)
            continue
        if start < pos:
            yield from _grapheme_units(text[start:pos])
        yield Unit(sequence, 0, True)
        start = pos + len(sequence)
        pos = text.find(ESC, start)
    if start < len(text):
        yield from _grapheme_units(text[start:])


# ---------------------------------------------------------------------------
# display_width / display_width_upto
# ---------------------------------------------------------------------------


def display_width(text: str) -> int:
    """Return the number of terminal cells *text* occupies.

    Escape sequences count as zero. Printable ASCII takes a fast path;
    other results are cached.
    """
    if not text:
        return 0

    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    return _cache_width(text, sum(unit.width for unit in iter_units(text)))


def display_width_upto(text: str, max_cells: int) -> tuple[int, int]:
    """Measure the longest prefix of *text* that fits in *max_cells* cells.

    Returns ``(length, cells)`` where *length* is the prefix length in code
    points (``text[:length]`` is the prefix) and *cells* its display width.
    The cut always falls between units. Escape sequences that precede the
    first unit that does not fit belong to the prefix.
    """
    length = 0
    cells = 0
    for unit in iter_units(text):
        if cells + unit.width > max_cells:
            break
        length += len(unit.text)
        cells += unit.width
    return length, cells


def take_cells(text: str, max_cells: int) -> str:
    """Return the prefix of *text* that fits within *max_cells* cells."""
    length, _cells = display_width_upto(text, max_cells)
    return text[:length]


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------


def is_break_space(text: str) -> bool:
    """Return ``True`` if *text* is whitespace a line may be broken on.

    Non-breaking spaces are whitespace to Python but not to the wrapper.
    """
    return text.isspace() and NO_BREAK_SPACES.isdisjoint(text)
