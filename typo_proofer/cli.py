"""Command line filter: read stdin, apply transformations line by line, print the result.

Run:
  typo-proofer format_french escape_html < chapter.txt
or:
  python -m typo_proofer.cli clean_quotes clean_ellipsis escape_tex
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from typo_proofer.formatting.config import ConfigBuilder, FormatterConfig
from typo_proofer.formatting.fixer import format_lines
from typo_proofer.formatting.rules import TRANSFORMS, UnknownTransformError, resolve_transforms
from typo_proofer.logging_setup import configure_console_logging

logger = logging.getLogger(__name__)

PROG = "typo-proofer"


def _print_transformations(out: TextIO) -> None:
    for name, transform in TRANSFORMS.items():
        print(f"    {name}: {transform.description}", file=out)


def _usage(out: TextIO) -> None:
    print(
        f"USAGE: {PROG} [OPTIONS] <TRANSFORMATIONS>\n\n"
        "Read standard input, sequentially apply each TRANSFORMATION on the text, and print the\n"
        "result on standard output.\n\n"
        "Valid transformations are the following:",
        file=out,
    )
    _print_transformations(out)
    print(file=out)
    print(f"EXAMPLE: {PROG} clean_quotes clean_ellipsis escape_html", file=out)


def build_parser() -> argparse.ArgumentParser:
    defaults = FormatterConfig()
    parser = argparse.ArgumentParser(prog=PROG, add_help=True)
    parser.add_argument("transforms", nargs="*", metavar="TRANSFORMATION")
    parser.add_argument("--list", action="store_true", help="List transformations and exit")
    parser.add_argument("--currency-len", type=int, default=None, help=f"(default: {defaults.currency_len})")
    parser.add_argument("--unit-len", type=int, default=None, help=f"(default: {defaults.unit_len})")
    parser.add_argument("--quote-len", type=int, default=None, help=f"(default: {defaults.quote_len})")
    parser.add_argument("--real-word-len", type=int, default=None, help=f"(default: {defaults.real_word_len})")
    parser.add_argument("--typographic-quotes", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--typographic-ellipsis", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--ligature-dashes", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--ligature-guillemets", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--log-level", default=None, help="Logging level on stderr (default: warning)")
    return parser


def config_from_args(args: argparse.Namespace) -> FormatterConfig:
    builder = ConfigBuilder(FormatterConfig.from_env())
    for name in (
        "currency_len",
        "unit_len",
        "quote_len",
        "real_word_len",
        "typographic_quotes",
        "typographic_ellipsis",
        "ligature_dashes",
        "ligature_guillemets",
    ):
        value = getattr(args, name)
        if value is not None:
            getattr(builder, name)(value)
    return builder.build()


def run(names: list[str], config: FormatterConfig, stdin: TextIO, stdout: TextIO) -> int:
    count = 0
    lines = (line.rstrip("\r\n") for line in stdin)
    for fixed, _stats in format_lines(lines, names, config):
        print(fixed, file=stdout)
        count += 1
    logger.info("processed %s lines", count)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    configure_console_logging(args.log_level)

    if args.list:
        _print_transformations(sys.stdout)
        return 0
    if not args.transforms:
        _usage(sys.stdout)
        return 0

    try:
        resolve_transforms(args.transforms)
    except UnknownTransformError as e:
        print(f"Error: transformation “{e.name}” not recognized.", file=sys.stderr)
        print("Valid transformations are:", file=sys.stderr)
        _print_transformations(sys.stderr)
        return 2

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    return run(args.transforms, config, sys.stdin, sys.stdout)


if __name__ == "__main__":
    raise SystemExit(main())
