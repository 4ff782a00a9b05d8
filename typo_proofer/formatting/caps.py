from __future__ import annotations

import re

# Whole words of two uppercase letters or more, and dotted acronyms (A.W.D).
_caps_word_re = re.compile(r"\b(?:[^\W\d_a-z](?:\.[^\W\d_a-z])+|[^\W\d_]{2,})\b")


def _is_caps(word: str) -> bool:
    letters = [c for c in word if c.isalpha()]
    return len(letters) >= 2 and all(c.isupper() for c in letters)


def latex(text: str) -> str:
    """Put uppercase words in LaTeX small caps.

    Small capitals are lowercase letters drawn in a smaller capital shape,
    so the word is lowercased inside `\\textsc{}`.

    >>> latex("Some ACRONYM or A.W.D.")
    'Some \\\\textsc{acronym} or \\\\textsc{a.w.d}.'
    """

    def _replace(m: re.Match[str]) -> str:
        word = m.group(0)
        if not _is_caps(word):
            return word
        return "\\textsc{" + word.lower() + "}"

    if not any(_is_caps(m.group(0)) for m in _caps_word_re.finditer(text)):
        return text
    return _caps_word_re.sub(_replace, text)
