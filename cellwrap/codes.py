"""Code point classification for terminal layout.

Each predicate takes one integer code point and answers a single layout
question (spacing, combining, control, wide, dash). Anything that is not an
``int`` answers ``False`` so callers never need to guard their input.
"""

from __future__ import annotations

# Hangul Jamo through the Tertiary Ideographic Plane, derived from
# EastAsianWidth.txt (W and F).
_FULLWIDTH_RANGES: tuple[tuple[int, int], ...] = (
    (0x1100, 0x115F),
    (0x2329, 0x232A),
    (0x2E80, 0x303E),
    (0x3040, 0x3247),
    (0x3250, 0x4DBF),
    (0x4E00, 0xA4C6),
    (0xA960, 0xA97C),
    (0xAC00, 0xD7A3),
    (0xF900, 0xFAFF),
    (0xFE10, 0xFE19),
    (0xFE30, 0xFE6B),
    (0xFF01, 0xFF60),
    (0xFFE0, 0xFFE6),
    (0x1B000, 0x1B001),
    (0x1F200, 0x1F251),
    (0x20000, 0x3FFFD),
)

_BREAKING_DASHES = frozenset(
    {
        0x2D,  # hyphen-minus
        0x58A,  # armenian hyphen
        0x5BE,  # hebrew maqaf
        0x1400,  # canadian syllabics hyphen
        0x1806,  # mongolian soft hyphen
        0x2010,  # hyphen
        0x2012,  # figure dash
        0x2013,  # en dash
        0x2014,  # em dash
        0x2015,  # horizontal bar
        0x2E17,  # double oblique hyphen
        0x2E1A,  # hyphen with diaeresis
        0x2E3A,  # two-em dash
        0x2E3B,  # three-em dash
        0x2E40,  # double hyphen
        0x301C,  # wave dash
        0x3030,  # wavy dash
        0x30A0,  # katakana-hiragana double hyphen
        0xFE31,  # vertical em dash
        0xFE32,  # vertical en dash
        0xFE58,  # small em dash
        0xFE63,  # small hyphen-minus
        0xFF0D,  # fullwidth hyphen-minus
        0x10EAD,  # yezidi hyphenation mark
    }
)


def _is_code_point(cp: object) -> bool:
    return isinstance(cp, int) and not isinstance(cp, bool)


def is_breaking_space(cp: int) -> bool:
    """Return whether ``cp`` is a space a line may break at."""
    if not _is_code_point(cp):
        return False
    return (
        cp == 0x20
        or cp == 0x1680  # ogham space mark
        or 0x2000 <= cp <= 0x200A  # en quad .. hair space
        or cp == 0x205F  # medium mathematical space
        or cp == 0x3000  # ideographic space
    )


def is_non_breaking_space(cp: int) -> bool:
    """Return whether ``cp`` is a no-break space (U+00A0 or U+202F)."""
    if not _is_code_point(cp):
        return False
    return cp == 0xA0 or cp == 0x202F


def is_space(cp: int) -> bool:
    return is_breaking_space(cp) or is_non_breaking_space(cp)


def is_combining(cp: int) -> bool:
    """Return whether ``cp`` is a combining diacritic drawn over the previous cell."""
    return _is_code_point(cp) and 0x300 <= cp <= 0x36F


def is_control(cp: int) -> bool:
    """Return whether ``cp`` is a C0/DEL/C1 control with no visual representation."""
    return _is_code_point(cp) and (cp <= 0x1F or 0x7F <= cp <= 0x9F)


def is_surrogate(cp: int) -> bool:
    """Return whether ``cp`` lies outside the BMP.

    Such code points need a UTF-16 surrogate pair and are laid out as at
    least two cells.
    """
    return _is_code_point(cp) and cp > 0xFFFF


def is_fullwidth(cp: int) -> bool:
    """Return whether ``cp`` is East Asian Wide or Fullwidth (two cells)."""
    if not _is_code_point(cp) or cp < 0x1100:
        return False
    for low, high in _FULLWIDTH_RANGES:
        if cp < low:
            return False
        if cp <= high:
            return True
    return False


def is_breaking_dash(cp: int) -> bool:
    """Return whether ``cp`` is a dash or hyphen a line may break after."""
    return _is_code_point(cp) and cp in _BREAKING_DASHES


def is_word_breaking(cp: int) -> bool:
    return is_breaking_space(cp) or is_breaking_dash(cp)


def code_point_width(cp: int) -> int:
    """Return the cell width the line breaker assigns to one code point.

    Astral code points take two cells, combining marks and controls take
    none, wide characters take two and everything else one.
    """
    if is_surrogate(cp):
        return 2
    if is_combining(cp) or is_control(cp):
        return 0
    if is_fullwidth(cp):
        return 2
    return 1
