"""Public package surface for cellwrap.

Cell-width measurement and ANSI-preserving line breaking for terminal text.
The CLI lives in ``cellwrap.cli`` and is imported lazily by ``main``.
"""

from __future__ import annotations

from .ansi import BG_CLOSE, AnsiRun, AnsiScanner, BackgroundTokens, classify_background, match_escape, strip_ansi
from .breaking import BreakState, WrapOptions, break_line, break_lines, force_line_return
from .codes import (
    code_point_width,
    is_breaking_dash,
    is_breaking_space,
    is_combining,
    is_control,
    is_fullwidth,
    is_non_breaking_space,
    is_space,
    is_surrogate,
    is_word_breaking,
)
from .width import string_width


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "BG_CLOSE",
    "AnsiRun",
    "AnsiScanner",
    "BackgroundTokens",
    "BreakState",
    "WrapOptions",
    "break_line",
    "break_lines",
    "classify_background",
    "code_point_width",
    "force_line_return",
    "is_breaking_dash",
    "is_breaking_space",
    "is_combining",
    "is_control",
    "is_fullwidth",
    "is_non_breaking_space",
    "is_space",
    "is_surrogate",
    "is_word_breaking",
    "main",
    "match_escape",
    "string_width",
    "strip_ansi",
]
