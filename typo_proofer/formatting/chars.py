from __future__ import annotations

from enum import IntEnum

NB_CHAR = "\u00a0"  # no-break space
NB_CHAR_NARROW = "\u202f"  # narrow no-break space
NB_CHAR_EM = "\u2002"  # demi em space

# Space-like characters only; tabs and newlines are never part of a run.
WHITESPACE_LIKE = frozenset((" ", NB_CHAR, NB_CHAR_NARROW, NB_CHAR_EM))


class CharClass(IntEnum):
    """Coarse class of a character, ordered so that `a < b` means a word starts between them."""

    WHITESPACE = 0
    PUNCTUATION = 1
    ALPHANUMERIC = 2


def class_of(ch: str) -> CharClass:
    if ch.isalnum():
        return CharClass.ALPHANUMERIC
    if ch.isspace():
        return CharClass.WHITESPACE
    return CharClass.PUNCTUATION


def is_whitespace(ch: str) -> bool:
    return ch in WHITESPACE_LIKE
