from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from typo_proofer.formatting.config import FormatterConfig
from typo_proofer.formatting.french import FrenchFormatter
from typo_proofer.formatting.rules import apply_transforms, resolve_transforms

logger = logging.getLogger(__name__)

DEFAULT_TRANSFORMS: tuple[str, ...] = ("format_french",)


@dataclass
class FormatResult:
    text: str
    stats: dict[str, int]


def _normalize_newlines(text: str) -> str:
    if "\r" not in text:
        return text
    return text.replace("\r\n", "\n").replace("\r", "\n")


def format_lines(
    lines: Iterable[str],
    names: Sequence[str] = DEFAULT_TRANSFORMS,
    config: FormatterConfig | None = None,
) -> Iterable[tuple[str, dict[str, int]]]:
    """Format an iterable of paragraphs (lines without their newline), lazily."""

    resolve_transforms(names)
    formatter = FrenchFormatter(config)
    for line in lines:
        yield apply_transforms(line, names, formatter)


def format_txt(
    text: str,
    names: Sequence[str] = DEFAULT_TRANSFORMS,
    config: FormatterConfig | None = None,
) -> FormatResult:
    """Format a whole document, one line (paragraph) at a time.

    The French pass treats the start of its input as the start of a paragraph,
    so lines are never fed to it together. Newlines are normalized to LF and
    otherwise kept as they are, including a missing final newline.
    """

    text = _normalize_newlines(text)
    had_trailing_newline = text.endswith("\n")
    lines = text.split("\n")
    if had_trailing_newline:
        lines.pop()

    stats: dict[str, int] = {"lines": len(lines), "changed_lines": 0}
    out: list[str] = []
    for line, (fixed, line_stats) in zip(lines, format_lines(lines, names, config)):
        if fixed != line:
            stats["changed_lines"] += 1
        out.append(fixed)
        for k, v in line_stats.items():
            stats[k] = stats.get(k, 0) + v

    merged = "\n".join(out)
    if had_trailing_newline:
        merged += "\n"
    logger.debug("formatted %s lines (%s changed)", stats["lines"], stats["changed_lines"])
    return FormatResult(text=merged, stats=stats)
