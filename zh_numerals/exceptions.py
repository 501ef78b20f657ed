"""
Exception hierarchy for numeral conversion.

Every exception carries a machine-readable code and a details dict so the
CLI and the HTTP API can report failures without string-matching messages.
"""

from __future__ import annotations


class ZhNumeralError(Exception):
    """Base exception for all numeral conversion failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class NumeralParseError(ZhNumeralError, ValueError):
    """No numeral could be read at the start of the text.

    Recoverable: `offset` is the 0-based character index of the furthest
    point the parser reached, `expected` the token kinds it wanted there.
    """

    def __init__(self, offset: int, expected: list[str], text: str = ""):
        self.offset = offset
        self.expected = list(expected)
        found = repr(text[offset]) if offset < len(text) else "end of input"
        message = f"at offset {offset}: expected one of {', '.join(self.expected)}; found {found}"
        super().__init__(
            "PARSE_FAILED",
            message,
            {"offset": offset, "expected": self.expected},
        )
