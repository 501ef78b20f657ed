"""
Line-oriented conversion — the workflow behind the CLI and /convert.

Flow, per line:

  ┌──────────┐
  │ Raw line │
  └────┬─────┘
       │
  ┌────▼─────┐
  │ Split EOL│   ← "\r\n" / "\n" / none, restored on output
  └────┬─────┘
       │
  ┌────▼─────┐
  │  Skip    │   ← first N chars (+ following whitespace) become the prefix
  └────┬─────┘
       │
  ┌────▼─────┐
  │ Convert  │   ← parse / hard parse / format the front of the target
  └────┬─────┘
       │
  ┌────▼─────┐
  │ Assemble │   ← prefix? + number + (rest | EOL)
  └──────────┘

Design principles:
  - A line that cannot be converted is NOT fatal: it carries a LineIssue
    and the run continues with the next line.
  - The numeral core never sees the prefix or the line ending.
  - Columns in issues refer to the ORIGINAL line, 1-based.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .exceptions import NumeralParseError
from .formatter import format_number
from .glyphs import GlyphStyle, glyph_set
from .models import ConversionMode, ConversionOptions, LineIssue, LineResult
from .parser import parse_hard_number, parse_number

logger = logging.getLogger(__name__)

CRLF = "\r\n"
LF = "\n"


def split_eol(line: str) -> tuple[str, str]:
    """Split 'text\\r\\n' into ('text', '\\r\\n'). Lines without an ending get ''."""
    for eol in (CRLF, LF):
        if line.endswith(eol):
            return line[: -len(eol)], eol
    return line, ""


def split_prefix(body: str, skip_chars: int) -> tuple[str, str]:
    """Split off the first `skip_chars` characters plus the whitespace after them.

    A line too short to skip into is all prefix.
    """
    if len(body) <= skip_chars:
        return body, ""
    tail = body[skip_chars:]
    cut = skip_chars + len(tail) - len(tail.lstrip())
    return body[:cut], body[cut:]


def leading_ascii_digits(text: str) -> str:
    end = 0
    while end < len(text) and "0" <= text[end] <= "9":
        end += 1
    return text[:end]


class LineConverter:
    """Converts lines one at a time according to ConversionOptions.

    Usage:
        converter = LineConverter(ConversionOptions(mode=ConversionMode.FORMAT))
        for result in converter.run(sys.stdin):
            sys.stdout.write(result.output)
    """

    def __init__(self, options: ConversionOptions | None = None):
        self.options = options or ConversionOptions()
        self.glyphs = glyph_set(self.options.style or GlyphStyle.STANDARD)

    def run(self, lines: Iterable[str]) -> Iterator[LineResult]:
        """Convert every line, numbering from 1."""
        converted = failed = 0
        for line_number, line in enumerate(lines, start=1):
            result = self.convert_line(line, line_number)
            if result.issue is None:
                converted += 1
            else:
                failed += 1
            yield result
        logger.info(
            "Converted %d line(s) in %s mode, %d without a number",
            converted,
            self.options.mode.value,
            failed,
        )

    def convert_line(self, line: str, line_number: int = 1) -> LineResult:
        # ── Step 1: Separate the line ending ───────────────────────
        body, eol = split_eol(line)

        # ── Step 2: Skip the leading characters ────────────────────
        prefix, target = split_prefix(body, self.options.skip_chars)

        # ── Step 3: Convert ────────────────────────────────────────
        if self.options.mode is ConversionMode.FORMAT:
            converted, echoed, rest, issue = self._format(target, prefix, line_number)
        else:
            converted, rest, issue = self._parse(target, prefix, line_number)
            echoed = ""

        if issue is not None:
            logger.debug("Line %d: %s", line_number, issue.message)

        # ── Step 4: Assemble the output line ───────────────────────
        parts = []
        if self.options.keep_rest:
            parts.append(prefix)
        parts.append(converted if converted is not None else echoed)
        parts.append(rest + eol if self.options.keep_rest else eol)

        return LineResult(
            line_number=line_number,
            prefix=prefix,
            target=target,
            converted=converted,
            rest=rest,
            eol=eol,
            output="".join(parts),
            issue=issue,
        )

    # ─── Modes ───────────────────────────────────────────────────────

    def _parse(
        self, target: str, prefix: str, line_number: int
    ) -> tuple[str | None, str, LineIssue | None]:
        """Chinese numerals → ASCII digits. On failure the whole target is rest."""
        parse = parse_hard_number if self.options.mode is ConversionMode.HARD else parse_number
        try:
            value, rest = parse(target)
        except NumeralParseError as e:
            issue = LineIssue(
                line_number=line_number,
                column=len(prefix) + e.offset + 1,
                message=str(e),
                expected=e.expected,
            )
            return None, target, issue
        return str(value), rest, None

    def _format(
        self, target: str, prefix: str, line_number: int
    ) -> tuple[str | None, str, str, LineIssue | None]:
        """ASCII digits → Chinese numerals. On failure the digit run is echoed."""
        digits = leading_ascii_digits(target)
        rest = target[len(digits):]
        if not digits:
            issue = LineIssue(
                line_number=line_number,
                column=len(prefix) + 1,
                message="no ASCII number at the start of the text",
            )
            return None, digits, rest, issue
        try:
            value = int(digits)
        except ValueError as e:
            issue = LineIssue(line_number=line_number, column=len(prefix) + 1, message=str(e))
            return None, digits, rest, issue
        return format_number(value, self.glyphs), "", rest, None
