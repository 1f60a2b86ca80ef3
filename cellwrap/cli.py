"""Command-line front door for cellwrap.

Reads a file (or stdin), optionally colorizes it with Pygments, and writes it
hard-wrapped to the requested column width. ``--measure`` reports per-line
cell widths instead.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from . import config
from .breaking import WrapOptions, force_line_return
from .highlight import colorize, read_text
from .width import string_width

logger = logging.getLogger(__name__)


def _width_arg(value: str) -> int:
    """argparse type for wrap widths (at least 2 columns)."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 2:
        raise argparse.ArgumentTypeError("value must be >= 2")
    return parsed


def _non_negative_int(value: str) -> int:
    """argparse type for tolerance values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _default_width() -> int:
    """Resolve default wrap width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(2, term.columns)


def render_wrapped(source: str, width: int, options: WrapOptions) -> str:
    """Wrap every line of ``source`` to ``width`` cells.

    A trailing newline in ``source`` is kept, and output that carries escape
    sequences ends with a full reset so the shell prompt is not styled.
    """
    trailing = source.endswith("\n")
    body = source[:-1] if trailing else source
    out = force_line_return(body, width, options)
    if "\x1b" in out:
        out += "\x1b[0m"
    return out + "\n" if trailing else out


def measure_lines(source: str) -> str:
    """Return one ``width<TAB>line`` row per input line."""
    body = source[:-1] if source.endswith("\n") else source
    rows = [f"{string_width(line)}\t{line}" for line in body.split("\n")]
    return "\n".join(rows) + "\n"


def _read_source(path_arg: str | None) -> tuple[str, str | None]:
    if path_arg is None or path_arg == "-":
        return sys.stdin.read(), None
    path = Path(path_arg)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")
    return read_text(path), path.name


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and write wrapped (or measured) text to stdout.

    Option defaults come from the user config file; flags given on the
    command line override them. ``--save-defaults`` stores the resolved
    options back into the config file.
    """
    parser = argparse.ArgumentParser(
        description="Wrap ANSI-styled text to a terminal column width."
    )
    parser.add_argument("path", nargs="?", default=None, help="File to wrap. Reads stdin when omitted or '-'.")
    parser.add_argument(
        "-w",
        "--width",
        type=_width_arg,
        default=None,
        help="Column width (default: terminal width).",
    )
    parser.add_argument(
        "--tolerance",
        type=_non_negative_int,
        default=None,
        help="Columns a word may overflow before it is split.",
    )
    parser.add_argument(
        "--trim-break",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Drop the space a line breaks at instead of carrying it over.",
    )
    parser.add_argument("--highlight", action="store_true", help="Colorize input with Pygments before wrapping.")
    parser.add_argument("--style", default=None, help="Pygments style name (for --highlight).")
    parser.add_argument("--measure", action="store_true", help="Print the cell width of each line and exit.")
    parser.add_argument("--save-defaults", action="store_true", help="Persist --tolerance/--trim-break/--style.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    options = WrapOptions.coerce(
        config.load_wrap_options(),
        tolerance=args.tolerance,
        trim_break=args.trim_break,
    )
    style = args.style or config.load_style()
    if args.save_defaults:
        config.save_wrap_options(options)
        config.save_style(style)
        logger.debug("Saved defaults to %s", config.CONFIG_PATH)

    source, filename = _read_source(args.path)
    if args.measure:
        sys.stdout.write(measure_lines(source))
        return

    if args.highlight:
        source = colorize(source, filename, style)
    width = args.width if args.width is not None else _default_width()
    logger.debug("Wrapping to %d columns with %r", width, options)
    sys.stdout.write(render_wrapped(source, width, options))


if __name__ == "__main__":
    main()
