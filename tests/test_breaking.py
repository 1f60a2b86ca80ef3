"""Line breaking tests.

Covers break decisions (spaces, dashes, tolerance), wide and zero-width
segments, background carry-over across breaks, and the identity fallbacks
for widths that do not ask for wrapping.
"""

from __future__ import annotations

import math
import unittest

from cellwrap import (
    WrapOptions,
    break_line,
    break_lines,
    force_line_return,
    string_width,
    strip_ansi,
)


class BreakDecisionTests(unittest.TestCase):
    def test_overflowing_space_breaks_and_is_carried(self) -> None:
        self.assertEqual(break_line("hello world", 5), ["hello", " world"])

    def test_trim_break_drops_the_overflowing_space(self) -> None:
        self.assertEqual(break_line("hello world", 5, WrapOptions(trim_break=True)), ["hello", "world"])
        self.assertEqual(break_line("hello world", 5, {"trimBreak": True}), ["hello", "world"])
        self.assertEqual(break_line("hello world", 5, trim_break=True), ["hello", "world"])

    def test_hard_break_without_spaces(self) -> None:
        self.assertEqual(break_line("abcdef", 3), ["abc", "def"])
        self.assertEqual(break_line("abcdefg", 3), ["abc", "def", "g"])

    def test_tolerance_absorbs_non_space_overflow(self) -> None:
        self.assertEqual(break_line("abcdef", 3, {"tolerance": 1}), ["abcd", "ef"])
        self.assertEqual(break_line("ab cd", 3, tolerance=5), ["ab cd"])

    def test_space_breaks_even_within_tolerance(self) -> None:
        self.assertEqual(break_line("abc de", 3, tolerance=5), ["abc", " de"])

    def test_words_wrap_at_width(self) -> None:
        lines = break_line("the quick brown fox", 6)
        self.assertEqual(lines, ["the qu", "ick br", "own fo", "x"])
        for line in lines:
            self.assertLessEqual(string_width(line), 6)

    def test_breaking_dash_ends_a_full_line(self) -> None:
        self.assertEqual(break_line("well-known", 5), ["well-", "known"])
        self.assertEqual(break_line("a-b", 5), ["a-b"])
        self.assertEqual(break_line("well-", 5), ["well-"])

    def test_non_breaking_space_is_not_a_break_point(self) -> None:
        self.assertEqual(break_line("ab\u00a0cd", 3), ["ab\u00a0", "cd"])

    def test_newline_variants_always_break(self) -> None:
        self.assertEqual(break_line("ab\r\ncd\ref\ngh", 10), ["ab", "cd", "ef", "gh"])
        self.assertEqual(break_line("ab\u2028cd", 10), ["ab", "cd"])
        self.assertEqual(break_line("ab\n", 10), ["ab", ""])

    def test_only_one_leading_space_hangs(self) -> None:
        self.assertEqual(break_line("    return x", 10), ["    return ", "x"])
        self.assertEqual(break_line("      ab", 3), ["    ", "  ab"])
        self.assertEqual(break_line("abc  de", 3), ["abc", "  de"])

    def test_indented_lines_stay_within_one_hung_cell(self) -> None:
        for line in break_line("        deeply indented", 4):
            self.assertLessEqual(string_width(line), 5, repr(line))


class SegmentWidthTests(unittest.TestCase):
    def test_wide_characters_take_two_cells(self) -> None:
        self.assertEqual(break_line("中文字符", 4), ["中文", "字符"])
        self.assertEqual(break_line("a中文", 4), ["a中", "文"])

    def test_astral_characters_are_never_split(self) -> None:
        self.assertEqual(break_line("\U0001F600\U0001F600\U0001F600", 4), ["\U0001F600\U0001F600", "\U0001F600"])

    def test_combining_marks_stay_with_their_base(self) -> None:
        self.assertEqual(
            break_line("e\u0301e\u0301e\u0301", 2),
            ["e\u0301e\u0301", "e\u0301"],
        )


class AnsiCarryOverTests(unittest.TestCase):
    def test_closed_background_is_not_reopened(self) -> None:
        lines = break_line("\x1b[41mred\x1b[49m text", 3)
        self.assertEqual(lines, ["\x1b[41mred\x1b[49m", " tex", "t"])

    def test_open_background_is_closed_and_reopened_on_each_line(self) -> None:
        lines = break_line("\x1b[41mabcdef\x1b[49m", 3)
        self.assertEqual(lines, ["\x1b[41mabc\x1b[49m", "\x1b[41mdef\x1b[49m"])

    def test_background_spans_newlines(self) -> None:
        lines = break_line("\x1b[44mab\ncd\x1b[49m", 5)
        self.assertEqual(lines, ["\x1b[44mab\x1b[49m", "\x1b[44mcd\x1b[49m"])

    def test_unterminated_background_is_closed_at_each_break(self) -> None:
        lines = break_line("\x1b[41mabcd", 2)
        self.assertEqual(lines, ["\x1b[41mab\x1b[49m", "\x1b[41mcd\x1b[49m"])

    def test_trailing_sequence_is_kept_without_forced_close(self) -> None:
        self.assertEqual(break_line("abc\x1b[41m", 5), ["abc\x1b[41m"])

    def test_sequences_are_never_split(self) -> None:
        text = "\x1b[1;32mgreen words\x1b[0m and \x1b[45mmagenta\x1b[49m tail"
        for width in range(2, 12):
            for line in break_line(text, width):
                self.assertNotIn("\x1b", strip_ansi(line), f"width={width} line={line!r}")

    def test_escape_sequences_take_no_width(self) -> None:
        self.assertEqual(break_line("\x1b[31mabc\x1b[0mdef", 3), ["\x1b[31mabc\x1b[0m", "def"])


class IdentityTests(unittest.TestCase):
    def test_widths_that_do_not_wrap(self) -> None:
        for width in (math.inf, math.nan, 0, 1, -4, 2.5, True, None, "5"):
            self.assertEqual(break_line("hello world", width), ["hello world"], repr(width))  # type: ignore[arg-type]

    def test_empty_and_missing_text(self) -> None:
        self.assertEqual(break_line("", 5), [""])
        self.assertEqual(break_line(None, 5), [None])  # type: ignore[arg-type]

    def test_integral_float_width_wraps(self) -> None:
        self.assertEqual(break_line("hello world", 5.0), ["hello", " world"])  # type: ignore[arg-type]

    def test_rewrap_is_idempotent(self) -> None:
        samples = [
            ("hello world", 5),
            ("well-known words", 5),
            ("abcdefg", 3),
            ("the quick brown fox", 6),
            ("\x1b[41mabcdef\x1b[49m", 3),
            ("中文字符 and text", 4),
        ]
        for text, width in samples:
            wrapped = break_line(text, width)
            self.assertEqual(break_lines(wrapped, width), wrapped, repr(text))

    def test_lines_never_exceed_width_plus_hung_space(self) -> None:
        samples = [
            "    return x",
            "      ab",
            "a  b  c  d",
            "hello   world",
            "  indented text here",
            "word  word  word",
            "xxxxxxxxxx   y",
            "\t\tdef f(x):  return  x",
        ]
        for text in samples:
            for width in range(2, len(text) + 2):
                wrapped = break_line(text, width)
                for line in wrapped:
                    self.assertLessEqual(string_width(line), width + 1, f"{text!r} width={width} line={line!r}")
                self.assertEqual(break_lines(wrapped, width), wrapped, f"{text!r} width={width}")


class BreakLinesTests(unittest.TestCase):
    def test_flattens_in_order(self) -> None:
        self.assertEqual(
            break_lines(["hello world", "abcdef"], 5),
            ["hello", " world", "abcde", "f"],
        )

    def test_degenerate_inputs(self) -> None:
        self.assertEqual(break_lines([], 5), [])
        self.assertEqual(break_lines(None, 5), [])  # type: ignore[arg-type]
        self.assertEqual(break_lines("abcdef", 3), ["abc", "def"])


class ForceLineReturnTests(unittest.TestCase):
    def test_hard_wraps_each_line(self) -> None:
        self.assertEqual(force_line_return("abcdef\nxy", 3), "abc\ndef\nxy")

    def test_width_below_two_keeps_lines(self) -> None:
        self.assertEqual(force_line_return("a\nbb\nccc", 1), "a\nbb\nccc")

    def test_non_string_passes_through(self) -> None:
        self.assertIsNone(force_line_return(None, 3))  # type: ignore[arg-type]


class WrapOptionsTests(unittest.TestCase):
    def test_invalid_tolerance_falls_back_to_zero(self) -> None:
        self.assertEqual(WrapOptions(tolerance=-3).tolerance, 0)
        self.assertEqual(WrapOptions(tolerance="x").tolerance, 0)  # type: ignore[arg-type]
        self.assertEqual(WrapOptions(tolerance=True).tolerance, 0)
        self.assertEqual(WrapOptions(tolerance=2.0).tolerance, 2)  # type: ignore[arg-type]

    def test_coerce_merges_mapping_and_overrides(self) -> None:
        self.assertEqual(WrapOptions.coerce(None), WrapOptions())
        self.assertEqual(
            WrapOptions.coerce({"tolerance": 2, "style": "ignored"}, trim_break=True),
            WrapOptions(tolerance=2, trim_break=True),
        )
        self.assertEqual(
            WrapOptions.coerce(WrapOptions(1, True), tolerance=None),
            WrapOptions(1, True),
        )
        self.assertEqual(WrapOptions.coerce("nonsense"), WrapOptions())


if __name__ == "__main__":
    unittest.main()
