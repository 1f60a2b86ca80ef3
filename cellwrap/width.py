"""Visual width of styled text in terminal cells."""

from __future__ import annotations

from .ansi import strip_ansi
from .codes import is_combining, is_control, is_fullwidth, is_surrogate


def string_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies.

    Escape sequences are stripped first and count for nothing, as do
    control characters and combining marks. Wide characters count two.
    Astral code points get one extra cell on top of their normal width, so
    an emoji counts two and a wide astral ideograph counts three.
    """
    if not isinstance(text, str) or not text:
        return 0
    text = strip_ansi(text)
    if not text:
        return 0

    width = 0
    for ch in text:
        code = ord(ch)
        if is_control(code) or is_combining(code):
            continue
        if is_surrogate(code):
            width += 1
        width += 2 if is_fullwidth(code) else 1
    return width
