"""Language-neutral typographic clean-up passes.

Every function here takes a string and returns either the very same object
(nothing to rewrite) or a freshly built replacement.
"""

from __future__ import annotations

import re

from typo_proofer.formatting.chars import NB_CHAR
from typo_proofer.formatting.quotes import typographic_quotes

_whitespace_run_re = re.compile("[ \u00a0\u202f\u2002]{2,}")
_dashes_re = re.compile(r"-{2,3}")
_guillemets_re = re.compile(r"<<|>>")
_ellipsis_re = re.compile(r"\.\.\.|\. \. \. ")

_EN_DASH = "–"
_EM_DASH = "—"
_ELLIPSIS = "…"
_NB_ELLIPSIS = f".{NB_CHAR}.{NB_CHAR}. "
_FULL_NB_ELLIPSIS = f".{NB_CHAR}.{NB_CHAR}.{NB_CHAR}"


def whitespaces(text: str) -> str:
    """Collapse runs of space-like characters to their first character.

    Tabs and newlines are left alone and nothing is trimmed:
    `"  a  b  "` becomes `" a b "`.
    """

    if _whitespace_run_re.search(text) is None:
        return text
    return _whitespace_run_re.sub(lambda m: m.group(0)[0], text)


def dashes(text: str) -> str:
    """Replace `---` with an em dash and `--` with an en dash."""

    if _dashes_re.search(text) is None:
        return text
    return _dashes_re.sub(lambda m: _EM_DASH if len(m.group(0)) == 3 else _EN_DASH, text)


def guillemets(text: str) -> str:
    """Replace `<<` and `>>` with French guillemets. Spacing is not touched."""

    if _guillemets_re.search(text) is None:
        return text
    return _guillemets_re.sub(lambda m: "«" if m.group(0) == "<<" else "»", text)


def _ellipsis_replacement(m: re.Match[str]) -> str:
    if m.group(0) == "...":
        return _ELLIPSIS
    end = m.end()
    if end < len(m.string) and m.string[end] == ".":
        return _FULL_NB_ELLIPSIS
    return _NB_ELLIPSIS


def ellipsis(text: str) -> str:
    """Replace `...` with `…`.

    A spaced `. . . ` keeps its dots but gets no-break spaces between them, so
    the run can't be split across lines. `....` only loses its first three dots.
    """

    if _ellipsis_re.search(text) is None:
        return text
    return _ellipsis_re.sub(_ellipsis_replacement, text)


# Kept under the pipeline's naming ("clean_quotes").
quotes = typographic_quotes
