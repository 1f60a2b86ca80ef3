"""ANSI escape sequence scanning.

Recognizes CSI (``ESC [ params final``) and OSC (``ESC ] ... BEL|ST``)
sequences with a small explicit scanner, groups consecutive sequences into
runs, and tracks which background colors a run leaves open.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

ESC = "\x1b"
BEL = "\x07"
BG_CLOSE = "\x1b[49m"


def _csi_end(text: str, pos: int) -> int | None:
    """Return the end of a CSI body starting at ``pos`` (just past ``ESC [``)."""
    n = len(text)
    i = pos
    while i < n and "\x30" <= text[i] <= "\x3f":
        i += 1
    while i < n and "\x20" <= text[i] <= "\x2f":
        i += 1
    if i < n and "\x40" <= text[i] <= "\x7e":
        return i + 1
    return None


def _osc_end(text: str, pos: int) -> int | None:
    """Return the end of an OSC body terminated by BEL or ``ESC \\``."""
    n = len(text)
    i = pos
    while i < n:
        ch = text[i]
        if ch == BEL:
            return i + 1
        if ch == ESC:
            if i + 1 < n and text[i + 1] == "\\":
                return i + 2
            return None
        i += 1
    return None


def match_escape(text: str, pos: int) -> int | None:
    """Return the end offset of the escape sequence at ``pos``, or ``None``.

    Only the CSI and OSC shapes are recognized. A lone ESC, an unknown
    introducer, or a sequence cut off by the end of ``text`` is not a match.
    """
    if pos < 0 or pos + 1 >= len(text) or text[pos] != ESC:
        return None
    introducer = text[pos + 1]
    if introducer == "[":
        return _csi_end(text, pos + 2)
    if introducer == "]":
        return _osc_end(text, pos + 2)
    return None


def match_run(text: str, pos: int) -> int | None:
    """Return the end of the maximal run of consecutive sequences at ``pos``."""
    end = match_escape(text, pos)
    if end is None:
        return None
    while True:
        following = match_escape(text, end)
        if following is None:
            return end
        end = following


def iter_sequences(text: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` offsets of every escape sequence in ``text``."""
    pos = text.find(ESC)
    while pos != -1:
        end = match_escape(text, pos)
        if end is None:
            pos = text.find(ESC, pos + 1)
            continue
        yield pos, end
        pos = text.find(ESC, end)


def strip_ansi(text: str) -> str:
    """Remove all recognized escape sequences from ``text``."""
    if ESC not in text:
        return text
    out: list[str] = []
    last = 0
    for start, end in iter_sequences(text):
        out.append(text[last:start])
        last = end
    out.append(text[last:])
    return "".join(out)


@dataclass(frozen=True)
class AnsiRun:
    start: int
    end: int
    text: str


class AnsiScanner:
    """Forward-only search for escape runs in one string.

    Once a search comes back empty the scanner remembers it, so later
    searches from further along the string return ``None`` without
    rescanning.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._exhausted = False

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def search(self, start: int) -> AnsiRun | None:
        if self._exhausted:
            return None
        text = self.text
        pos = text.find(ESC, start)
        while pos != -1:
            end = match_run(text, pos)
            if end is not None:
                return AnsiRun(pos, end, text[pos:end])
            pos = text.find(ESC, pos + 1)
        self._exhausted = True
        return None


@dataclass
class BackgroundTokens:
    """Background state change described by one escape run.

    ``closed`` is set when the run resets the background; ``opened`` lists
    the background-setting sequences that follow the last reset.
    """

    closed: bool = False
    opened: list[str] = field(default_factory=list)


def _sgr_params(seq: str) -> str | None:
    """Return the parameter string of an SGR sequence, or ``None`` for other sequences."""
    if len(seq) < 3 or not seq.startswith(ESC + "[") or not seq.endswith("m"):
        return None
    params = seq[2:-1]
    if any(ch not in "0123456789;:" for ch in params):
        return None
    return params


def background_effect(params: str) -> str | None:
    """Return ``"open"``, ``"close"`` or ``None`` for an SGR parameter string.

    The last parameter that touches the background wins. Extended color
    arguments (``38;5;n``, ``48;2;r;g;b``) are skipped so their numbers are
    not read as color codes.
    """
    effect: str | None = None
    fields = params.split(";") if params else []
    i = 0
    while i < len(fields):
        head, _, sub = fields[i].partition(":")
        i += 1
        if not head.isdigit():
            continue
        code = int(head)
        if 40 <= code <= 47 or 100 <= code <= 107:
            effect = "open"
        elif code == 49:
            effect = "close"
        elif code in (38, 48):
            if code == 48:
                effect = "open"
            if sub:
                continue
            mode = fields[i] if i < len(fields) else ""
            if mode == "5":
                i += 2
            elif mode == "2":
                i += 4
    return effect


def classify_background(run: str) -> BackgroundTokens:
    """Classify the background sequences in an escape run.

    A close drops every open token collected so far; opens after the last
    close are kept verbatim and in order.
    """
    tokens = BackgroundTokens()
    for start, end in iter_sequences(run):
        seq = run[start:end]
        params = _sgr_params(seq)
        if params is None:
            continue
        effect = background_effect(params)
        if effect == "close":
            tokens.closed = True
            tokens.opened.clear()
        elif effect == "open":
            tokens.opened.append(seq)
    return tokens
