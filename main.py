#!/usr/bin/env python3
"""
zh-num — Command-Line Entry Point
=================================

Convert between ASCII numbers and Chinese numerals, one line at a time,
from stdin to stdout.

Usage:
    echo 一万零十三章 | python main.py          # → 10013
    echo 一万零十三章 | python main.py -r       # → 10013章
    echo 一零零八六 | python main.py -a         # → 10086
    echo 10086 | python main.py -d              # → 一万零八十六
    echo 10086 | python main.py -D              # → 壹万零捌拾陆
    echo "第 三百章" | python main.py -s 1 -r   # → 第 300章

Lines without a number print a diagnostic on stderr and the run goes on.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from zh_numerals import __version__
from zh_numerals.config import load_settings
from zh_numerals.converter import LineConverter
from zh_numerals.glyphs import GlyphStyle
from zh_numerals.models import ConversionMode, ConversionOptions, LineIssue, LineResult

logger = logging.getLogger("zh_numerals.cli")


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_DIM = "\033[2m"
_RESET = "\033[0m"


# ─── Argument Parsing ───────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zh-num",
        description="Convert between ASCII numbers and Chinese numerals.",
    )
    parser.add_argument(
        "-d", dest="dump", action="store_true",
        help="reverse direction: ASCII numbers to Chinese numerals",
    )
    parser.add_argument(
        "-D", dest="financial", action="store_true",
        help="like -d, but with financial (大写) numerals",
    )
    parser.add_argument(
        "-r", dest="keep_rest", action="store_true",
        help="keep the text around the number in the output",
    )
    parser.add_argument(
        "-a", dest="hard", action="store_true",
        help="read numerals digit by digit, e.g. 千零二三 or 一零零十三",
    )
    parser.add_argument(
        "-s", dest="skip_chars", type=int, default=0, metavar="N",
        help="skip N leading characters before reading; kept in the output with -r",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def options_from_args(args: argparse.Namespace, default_style: GlyphStyle) -> ConversionOptions:
    """Resolve flag combinations into ConversionOptions."""
    if args.skip_chars < 0:
        raise SystemExit("zh-num: -s must not be negative")
    dump = args.dump or args.financial
    if dump and args.hard:
        print(f"{_YELLOW}warning:{_RESET} -a is ignored together with -d", file=sys.stderr)

    if dump:
        mode = ConversionMode.FORMAT
    elif args.hard:
        mode = ConversionMode.HARD
    else:
        mode = ConversionMode.PARSE

    return ConversionOptions(
        mode=mode,
        style=GlyphStyle.FINANCIAL if args.financial else default_style,
        keep_rest=args.keep_rest,
        skip_chars=args.skip_chars,
    )


# ─── Diagnostics ────────────────────────────────────────────────────


def format_diagnostic(result: LineResult, issue: LineIssue, color: bool = False) -> str:
    """One stderr line: `text` line:column expected ..."""
    red, dim, reset = (_RED, _DIM, _RESET) if color else ("", "", "")
    where = f"{issue.line_number}:{issue.column}"
    if issue.expected:
        reason = f"expected {', '.join(issue.expected)}"
    else:
        reason = issue.message
    return f"{red}`{result.target.rstrip()}`{reset} {dim}{where}{reset} {reason}"


# ─── Main ────────────────────────────────────────────────────────────


def open_input(file: int | str) -> TextIO:
    """Open text input split only at "\\n"; "\\r\\n" comes back unchanged, a lone "\\r" stays in the line."""
    return open(file, encoding="utf-8", newline="\n", closefd=not isinstance(file, int))


def _std_streams() -> tuple[TextIO, TextIO]:
    stdin = open_input(sys.stdin.fileno())
    stdout = open(sys.stdout.fileno(), "w", encoding="utf-8", newline="", closefd=False)
    return stdin, stdout


def convert_stream(
    converter: LineConverter, source: TextIO, sink: TextIO, errors: TextIO
) -> int:
    """Convert `source` into `sink`, diagnostics into `errors`.

    Returns:
        Number of lines that had no number.
    """
    color = errors.isatty()
    failed = 0
    for result in converter.run(source):
        if result.issue is not None:
            failed += 1
            sink.flush()
            print(format_diagnostic(result, result.issue, color), file=errors, flush=True)
        sink.write(result.output)
    return failed


def main(argv: Sequence[str] | None = None) -> int:
    """Convert stdin to stdout line by line."""
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    args = build_parser().parse_args(argv)
    options = options_from_args(args, settings.style)
    logger.debug("Options: %s", options.model_dump())

    stdin, stdout = _std_streams()
    with stdin, stdout:
        convert_stream(LineConverter(options), stdin, stdout, sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
