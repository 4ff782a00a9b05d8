"""Straight quote to curly quote conversion.

Double quotes are easy: the class of the neighbours tells the direction and a
counter of open quotes decides whether a closing one is legitimate. Single
quotes are ambiguous since `'` is also the apostrophe (elision, possessive,
`'60s`), so an opening candidate looks ahead for a plausible closing quote.

The lookahead makes the worst case O(n^2) in the input length (a long run of
unmatched opening apostrophes each scanning to the end). Paragraph-sized input
is what this is meant for.
"""

from __future__ import annotations

from dataclasses import dataclass

from typo_proofer.formatting.chars import CharClass, class_of

OPENING_DOUBLE = "“"
CLOSING_DOUBLE = "”"
OPENING_SINGLE = "‘"
CLOSING_SINGLE = "’"


@dataclass(frozen=True)
class QuoteDecision:
    index: int
    glyph: str


@dataclass
class _QuoteState:
    open_doubles: int = 0
    # Index of the last single quote reserved as a closer by lookahead.
    pending_closer: int | None = None

    def has_pending_single(self, i: int) -> bool:
        return self.pending_closer is not None and i <= self.pending_closer


def _neighbour_classes(text: str, i: int) -> tuple[CharClass, CharClass]:
    prev = class_of(text[i - 1]) if i > 0 else CharClass.WHITESPACE
    nxt = class_of(text[i + 1]) if i < len(text) - 1 else CharClass.WHITESPACE
    return prev, nxt


def _find_single_closer(text: str, start: int, reserved: set[int]) -> int | None:
    n = len(text)
    for j in range(start, n):
        if text[j] != "'" or j in reserved:
            continue
        if text[j - 1].isspace():
            continue
        if j == n - 1 or class_of(text[j + 1]) != CharClass.ALPHANUMERIC:
            return j
    return None


def classify_quotes(text: str) -> list[QuoteDecision]:
    """Decide the glyph of every straight quote in `text`, without rewriting anything.

    Quotes that can't be resolved keep their straight glyph in the returned list.
    """

    decisions: list[QuoteDecision] = []
    state = _QuoteState()
    reserved: set[int] = set()

    for i, ch in enumerate(text):
        if ch == '"':
            prev, nxt = _neighbour_classes(text, i)
            if prev < nxt:
                state.open_doubles += 1
                decisions.append(QuoteDecision(i, OPENING_DOUBLE))
            elif state.open_doubles > 0:
                state.open_doubles -= 1
                decisions.append(QuoteDecision(i, CLOSING_DOUBLE))
            else:
                decisions.append(QuoteDecision(i, ch))
            continue

        if ch != "'":
            continue

        if i in reserved:
            decisions.append(QuoteDecision(i, CLOSING_SINGLE))
            continue

        pending = state.has_pending_single(i)
        prev, nxt = _neighbour_classes(text, i)
        if prev == CharClass.ALPHANUMERIC and nxt == CharClass.ALPHANUMERIC:
            # Elision or possessive.
            glyph = CLOSING_SINGLE
        elif prev < nxt:
            closer = _find_single_closer(text, i + 1, reserved)
            if closer is not None:
                reserved.add(closer)
                state.pending_closer = closer
            glyph = OPENING_SINGLE if closer is not None and not pending else CLOSING_SINGLE
        elif prev > nxt:
            glyph = CLOSING_SINGLE
        else:
            glyph = ch
        decisions.append(QuoteDecision(i, glyph))

    return decisions


def typographic_quotes(text: str) -> str:
    """Replace straight quotes with typographic ones.

    >>> typographic_quotes("It's a good day to say 'hi'")
    'It’s a good day to say ‘hi’'
    """

    if '"' not in text and "'" not in text:
        return text

    decisions = [d for d in classify_quotes(text) if d.glyph != text[d.index]]
    if not decisions:
        return text

    chars = list(text)
    for d in decisions:
        chars[d.index] = d.glyph
    return "".join(chars)
