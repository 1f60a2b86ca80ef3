"""Source loading and Pygments colorizing for the CLI.

Pygments is imported on first use so library users of the wrapping core
never pay for it. Any lexing or formatting failure returns the source as-is.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_PYGMENTS_READY = False
_PYGMENTS_AVAILABLE = False
_PYGMENTS_HIGHLIGHT = None
_PYGMENTS_GET_LEXER_FOR_FILENAME = None
_PYGMENTS_GUESS_LEXER = None
_PYGMENTS_TEXT_LEXER = None
_PYGMENTS_TERMINAL_FORMATTER = None
_PYGMENTS_GET_STYLE_BY_NAME = None
_FORMATTERS: dict[str, object] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def _ensure_pygments_loaded() -> bool:
    global _PYGMENTS_READY
    global _PYGMENTS_AVAILABLE
    global _PYGMENTS_HIGHLIGHT
    global _PYGMENTS_GET_LEXER_FOR_FILENAME
    global _PYGMENTS_GUESS_LEXER
    global _PYGMENTS_TEXT_LEXER
    global _PYGMENTS_TERMINAL_FORMATTER
    global _PYGMENTS_GET_STYLE_BY_NAME

    if _PYGMENTS_READY:
        return _PYGMENTS_AVAILABLE

    _PYGMENTS_READY = True
    try:
        from pygments import highlight as pygments_highlight
        from pygments.formatters import TerminalFormatter
        from pygments.lexers import TextLexer, get_lexer_for_filename, guess_lexer
        from pygments.styles import get_style_by_name
    except ImportError:
        logger.debug("Pygments is not installed; highlighting disabled")
        _PYGMENTS_AVAILABLE = False
        return False

    _PYGMENTS_HIGHLIGHT = pygments_highlight
    _PYGMENTS_GET_LEXER_FOR_FILENAME = get_lexer_for_filename
    _PYGMENTS_GUESS_LEXER = guess_lexer
    _PYGMENTS_TEXT_LEXER = TextLexer
    _PYGMENTS_TERMINAL_FORMATTER = TerminalFormatter
    _PYGMENTS_GET_STYLE_BY_NAME = get_style_by_name
    _PYGMENTS_AVAILABLE = True
    return True


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        assert _PYGMENTS_GET_STYLE_BY_NAME is not None
        _PYGMENTS_GET_STYLE_BY_NAME(style)
    except Exception:
        logger.debug("Unknown Pygments style %r, using %s", style, DEFAULT_STYLE)
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str):
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    assert _PYGMENTS_TERMINAL_FORMATTER is not None
    formatter = _PYGMENTS_TERMINAL_FORMATTER(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def _lexer_for(source: str, filename: str | None):
    if filename:
        try:
            assert _PYGMENTS_GET_LEXER_FOR_FILENAME is not None
            return _PYGMENTS_GET_LEXER_FOR_FILENAME(filename, source)
        except Exception:
            pass
    try:
        assert _PYGMENTS_GUESS_LEXER is not None
        return _PYGMENTS_GUESS_LEXER(source)
    except Exception:
        assert _PYGMENTS_TEXT_LEXER is not None
        return _PYGMENTS_TEXT_LEXER()


def colorize(source: str, filename: str | None = None, style: str = DEFAULT_STYLE) -> str:
    """Return ``source`` with ANSI syntax colors, or unchanged on any failure.

    The trailing newline Pygments appends is removed when ``source`` had none.
    """
    if not source or not _ensure_pygments_loaded():
        return source

    formatter = _formatter_for_style(_normalize_style(style))
    lexer = _lexer_for(source, filename)
    try:
        assert _PYGMENTS_HIGHLIGHT is not None
        rendered = _PYGMENTS_HIGHLIGHT(source, lexer, formatter)
    except Exception as exc:
        logger.debug("Highlighting failed for %s: %s", filename or "<stdin>", exc)
        return source

    if not source.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered
