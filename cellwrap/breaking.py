"""Width-bounded line breaking for styled text.

Breaks text at breaking spaces, after breaking dashes, or wherever a line
would overflow, without ever splitting an escape sequence. Background colors
that are open at a break are closed at the end of the line and reopened at
the start of the next one.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .ansi import BG_CLOSE, AnsiScanner, classify_background
from .codes import code_point_width, is_breaking_dash, is_breaking_space

LINE_BREAK_RE = re.compile(r"\r\n|[\r\n\v\f\x85\u2028\u2029]")

_OPTION_ALIASES = {
    "tolerance": "tolerance",
    "trim_break": "trim_break",
    "trimBreak": "trim_break",
}


@dataclass(frozen=True)
class WrapOptions:
    """Knobs for :func:`break_line`.

    ``tolerance`` is how many columns a line may overflow before a non-space
    character forces a break. ``trim_break`` drops a breaking space that
    would overflow instead of carrying it to the next line.
    """

    tolerance: int = 0
    trim_break: bool = False

    def __post_init__(self) -> None:
        tolerance = self.tolerance
        if isinstance(tolerance, float) and tolerance.is_integer():
            tolerance = int(tolerance)
        if not isinstance(tolerance, int) or isinstance(tolerance, bool) or tolerance < 0:
            tolerance = 0
        object.__setattr__(self, "tolerance", tolerance)
        object.__setattr__(self, "trim_break", bool(self.trim_break))

    @classmethod
    def coerce(cls, options: object = None, **overrides: object) -> WrapOptions:
        """Build options from ``None``, another ``WrapOptions`` or a mapping.

        Mapping keys may use ``trim_break`` or ``trimBreak``; unknown keys are
        ignored. Keyword overrides that are not ``None`` win over ``options``.
        """
        values: dict[str, object] = {}
        if isinstance(options, WrapOptions):
            values = {"tolerance": options.tolerance, "trim_break": options.trim_break}
        elif isinstance(options, Mapping):
            for key, value in options.items():
                name = _OPTION_ALIASES.get(key)
                if name is not None:
                    values[name] = value
        for key, value in overrides.items():
            name = _OPTION_ALIASES.get(key)
            if name is not None and value is not None:
                values[name] = value
        return cls(**values)


@dataclass
class BreakState:
    """Mutable state for one :func:`break_line` call."""

    lines: list[str] = field(default_factory=list)
    line: str = ""
    width: int = 0
    bg_unclosed: list[str] = field(default_factory=list)
    hung_space: bool = False

    def flush(self) -> None:
        """Close open backgrounds, emit the line, and reopen them on a fresh one."""
        if self.bg_unclosed:
            self.line += BG_CLOSE
        self.lines.append(self.line)
        self.line = "".join(self.bg_unclosed)
        self.width = 0
        self.hung_space = False

    def track_background(self, run: str) -> None:
        tokens = classify_background(run)
        if tokens.closed:
            self.bg_unclosed.clear()
        self.bg_unclosed.extend(tokens.opened)


def _wrap_width(max_width: object) -> int | None:
    """Return ``max_width`` as an int when it asks for wrapping, else ``None``."""
    if isinstance(max_width, bool):
        return None
    if isinstance(max_width, float):
        if not max_width.is_integer():
            return None
        max_width = int(max_width)
    if not isinstance(max_width, int) or max_width < 2:
        return None
    return max_width


def break_line(
    text: str,
    max_width: int,
    options: WrapOptions | Mapping[str, object] | None = None,
    **overrides: object,
) -> list[str]:
    """Break ``text`` into lines of at most ``max_width`` cells.

    Returns ``[text]`` untouched when ``text`` is empty or ``max_width`` is
    not an integer of at least 2 (``math.inf`` included). Newlines in the
    input always break. A breaking space that would overflow forces a break
    even within ``tolerance``; other characters may overflow by up to
    ``tolerance`` cells. The first breaking space of a line hangs in the
    margin and takes no width; further leading spaces count, so a line holds
    at most ``max_width + tolerance`` cells plus that one hung space. Once a
    line is full, a breaking dash ends it.
    """
    width = _wrap_width(max_width)
    if not text or not isinstance(text, str) or width is None:
        return [text]
    opts = WrapOptions.coerce(options, **overrides)

    text = LINE_BREAK_RE.sub("\n", text)
    n = len(text)
    state = BreakState()
    scanner = AnsiScanner(text)
    run = scanner.search(0)
    index = 0
    while index < n:
        if run is not None and run.start == index:
            state.line += run.text
            state.track_background(run.text)
            index = run.end
            if index == n:
                # Input left the background open; leave it that way.
                state.bg_unclosed.clear()
                break
            run = scanner.search(index)

        ch = text[index]
        if ch == "\n":
            state.flush()
            index += 1
            continue

        code = ord(ch)
        breaking_space = is_breaking_space(code)
        segment = ch
        # Only one leading space per line hangs in the margin.
        hangs = breaking_space and state.width == 0 and not state.hung_space
        segment_width = 0 if hangs else code_point_width(code)
        if state.width + segment_width > width:
            if breaking_space:
                # The space now leads the next line (or is dropped).
                if opts.trim_break:
                    segment = ""
                segment_width = 0
                state.flush()
                hangs = bool(segment)
            elif state.width + segment_width > width + opts.tolerance:
                state.flush()

        state.line += segment
        state.width += segment_width
        if hangs:
            state.hung_space = True
        if state.width >= width and index < n - 1 and is_breaking_dash(code):
            state.flush()
        index += 1

    state.flush()
    return state.lines


def break_lines(
    lines: Iterable[str],
    max_width: int,
    options: WrapOptions | Mapping[str, object] | None = None,
) -> list[str]:
    """Break every line in ``lines`` and flatten the results in order."""
    if lines is None:
        return []
    if isinstance(lines, str):
        lines = [lines]
    out: list[str] = []
    for line in lines:
        out.extend(break_line(line, max_width, options))
    return out


def force_line_return(
    text: str,
    max_width: int,
    options: WrapOptions | Mapping[str, object] | None = None,
) -> str:
    """Hard-wrap multi-line ``text`` to ``max_width`` and join it back with newlines."""
    if not isinstance(text, str):
        return text
    return "\n".join(break_lines(text.split("\n"), max_width, options))
