"""
Recursive-descent parser for Chinese numerals.

Reads a numeral off the FRONT of the text and hands back whatever follows it
untouched. Trailing text is never an error: "stop at the first non-numeral"
is the caller's decision, not ours.

    parse_number("一万零十三章")      → (10013, "章")
    parse_number("叁佰陆拾壹万贰仟")  → (3612000, "")
    parse_number("42号")              → (42, "号")
    parse_hard_number("一零零八六")   → (10086, "")

Grammar (ordered choice: first alternative that matches wins; an optional
term that fails halfway gives back everything it consumed):

    digit(d)        = ZERO+ DIGIT? → DIGIT or d
                    / DIGIT
    four_digit      = [digit(0) THOUSAND] [digit(0) HUNDRED]
                      [digit(1)? TEN] [digit(0)]          ; at least one term
    ten_thousand    = four_digit [TEN_THOUSAND [four_digit]]
    hundred_million = ten_thousand (HUNDRED_MILLION [ten_thousand])*
    raw_number      = ASCII_DIGIT+ / hundred_million
    number          = raw_number REST
    hard_number     = (ZERO / MAGNITUDE / DIGIT)+ REST

Only the tens term may leave its digit out (十三 == 13). A bare 百 or 千 is
not a numeral on purpose; written text never elides those digits.

Errors are reported the way PEG tools do: the furthest offset any token was
tried at, and the set of everything that would have been accepted there.
"""

from __future__ import annotations

from typing import NamedTuple

from .exceptions import NumeralParseError
from .glyphs import (
    DIGIT_GLYPHS,
    HUNDRED_GLYPHS,
    HUNDRED_MILLION_GLYPHS,
    MAGNITUDE_GLYPHS,
    TEN_GLYPHS,
    TEN_THOUSAND_GLYPHS,
    THOUSAND_GLYPHS,
    ZERO_GLYPHS,
)

# ─── Token Labels (reported in NumeralParseError.expected) ───────────

ASCII_DIGIT = "ascii digit"
VALID_NUMBER = "valid number"
ZERO = "zero glyph"
DIGIT = "digit glyph"
TEN = "ten glyph"
HUNDRED = "hundred glyph"
THOUSAND = "thousand glyph"
TEN_THOUSAND = "ten-thousand glyph"
HUNDRED_MILLION = "hundred-million glyph"
MAGNITUDE = "magnitude glyph"
NUMERAL_UNIT = "numeral unit"

_ASCII_DIGITS = frozenset("0123456789")


class ParsedNumber(NamedTuple):
    """A parsed value and the text that followed it."""

    value: int
    rest: str


# ─── Public API ──────────────────────────────────────────────────────


def parse_number(text: str) -> ParsedNumber:
    """Parse a numeral (Chinese or ASCII digits) from the start of `text`.

    Raises:
        NumeralParseError: If no numeral starts at offset 0.
    """
    parser = _Parser(text)
    value = parser.raw_number()
    if value is None:
        raise parser.error()
    return ParsedNumber(value, text[parser.pos:])


def parse_hard_number(text: str) -> ParsedNumber:
    """Parse numeral glyphs digit by digit, ignoring magnitudes.

    Every glyph is one decimal digit: zeros are 0, digit glyphs are their
    value and any magnitude glyph counts as 1. Useful for codes written
    with numerals, e.g. 一零零八六 → 10086, 一零零十三 → 10013.

    Raises:
        NumeralParseError: If the text does not start with a numeral glyph.
    """
    parser = _Parser(text)
    value = parser.hard_number()
    if value is None:
        raise parser.error()
    return ParsedNumber(value, text[parser.pos:])


# ─── Parser ──────────────────────────────────────────────────────────


class _Parser:
    """One parse over one string.

    Rules return the parsed value, or None when they do not match. A rule
    that returns None leaves `pos` where it found it.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self._fail_pos = 0
        self._expected: set[str] = set()

    def error(self) -> NumeralParseError:
        return NumeralParseError(self._fail_pos, sorted(self._expected), self.text)

    # ── Tokens ──────────────────────────────────────────────────────

    def _expect(self, label: str) -> None:
        """Record that `label` was wanted at the current position."""
        if self.pos > self._fail_pos:
            self._fail_pos = self.pos
            self._expected = {label}
        elif self.pos == self._fail_pos:
            self._expected.add(label)

    def _eat(self, glyphs, label: str) -> str | None:
        if self.pos < len(self.text) and self.text[self.pos] in glyphs:
            self.pos += 1
            return self.text[self.pos - 1]
        self._expect(label)
        return None

    # ── Rules ───────────────────────────────────────────────────────

    def digit(self, default: int) -> int | None:
        """One digit; leading zeros are absorbed.

        零五 reads as 5; a run of zeros with no digit after it reads as
        `default`, which lets 零十 mean "zero, then ten" inside a group.
        """
        if self._eat(ZERO_GLYPHS, ZERO) is None:
            glyph = self._eat(DIGIT_GLYPHS, DIGIT)
            return None if glyph is None else DIGIT_GLYPHS[glyph]
        while self._eat(ZERO_GLYPHS, ZERO) is not None:
            pass
        glyph = self._eat(DIGIT_GLYPHS, DIGIT)
        return default if glyph is None else DIGIT_GLYPHS[glyph]

    def _scaled_term(self, default: int | None, glyphs, label: str, scale: int) -> int | None:
        """`digit(default) MAGNITUDE`; with default None the digit is required."""
        start = self.pos
        n = self.digit(0 if default is None else default)
        if n is None:
            if default is None:
                return None
            n = default
        if self._eat(glyphs, label) is None:
            self.pos = start
            return None
        return n * scale

    def four_digit_group(self) -> int | None:
        start = self.pos
        terms = [
            self._scaled_term(None, THOUSAND_GLYPHS, THOUSAND, 1000),
            self._scaled_term(None, HUNDRED_GLYPHS, HUNDRED, 100),
            self._scaled_term(1, TEN_GLYPHS, TEN, 10),
            self.digit(0),
        ]
        matched = [t for t in terms if t is not None]
        if not matched:
            self.pos = start
            self._expect(NUMERAL_UNIT)
            return None
        return sum(matched)

    def ten_thousand_group(self) -> int | None:
        high = self.four_digit_group()
        if high is None:
            return None
        if self._eat(TEN_THOUSAND_GLYPHS, TEN_THOUSAND) is None:
            return high
        low = self.four_digit_group()
        return high * 10_000 + (low or 0)

    def hundred_million_group(self) -> int | None:
        acc = self.ten_thousand_group()
        if acc is None:
            return None
        # Each further 亿 shifts everything so far up by another 10^8
        while self._eat(HUNDRED_MILLION_GLYPHS, HUNDRED_MILLION) is not None:
            low = self.ten_thousand_group()
            acc = acc * 100_000_000 + (low or 0)
        return acc

    def raw_number(self) -> int | None:
        start = self.pos
        while self._eat(_ASCII_DIGITS, ASCII_DIGIT) is not None:
            pass
        if self.pos > start:
            try:
                return int(self.text[start:self.pos])
            except ValueError:
                # Literal longer than the interpreter's int conversion limit
                self.pos = start
                self._expect(VALID_NUMBER)
        return self.hundred_million_group()

    def hard_number(self) -> int | None:
        digits: list[int] = []
        while self.pos < len(self.text):
            glyph = self.text[self.pos]
            if glyph in ZERO_GLYPHS:
                digits.append(0)
            elif glyph in MAGNITUDE_GLYPHS:
                digits.append(1)
            elif glyph in DIGIT_GLYPHS:
                digits.append(DIGIT_GLYPHS[glyph])
            else:
                break
            self.pos += 1
        for label in (ZERO, MAGNITUDE, DIGIT):
            self._expect(label)
        if not digits:
            return None
        acc = 0
        for d in digits:
            acc = acc * 10 + d
        return acc
