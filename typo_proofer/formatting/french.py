"""French typographic spacing.

`FrenchFormatter` makes a paragraph follow French spacing conventions:

* narrow no-break space before `?`, `!` and `;`, no-break space before `:`;
* no-break spaces inside « » (narrow for a few quoted words, regular for a
  real quotation or a dialogue);
* no-break space after a dash opening an incise, and before the dash
  closing it; demi em space after a dialogue dash at the start of a line;
* narrow no-break spaces inside numbers (`10 000`) and between a number
  and its unit or currency (`50 km`, `20 €`).

It also runs the generic clean-up passes (whitespace runs, quotes, ellipsis,
optionally `--` and `<<`) first, as configured by `FormatterConfig`.

All of this is guessing from local context, and the thresholds in the
config are the knobs for the guesses. The start of the string is assumed
to be the start of a paragraph, so call it once per paragraph.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from typo_proofer.formatting import clean
from typo_proofer.formatting.chars import NB_CHAR, NB_CHAR_EM, NB_CHAR_NARROW, is_whitespace
from typo_proofer.formatting.config import FormatterConfig

logger = logging.getLogger(__name__)

TROUBLE_CHARS = "?!;:»«—–"
DASHES = frozenset("-–—")
TEX_MARKER = "~"

_trouble_re = re.compile(f"[{TROUBLE_CHARS}]")
_digit_re = re.compile("[0-9]")
_nb_spaces_re = re.compile(f"[{NB_CHAR}{NB_CHAR_NARROW}{NB_CHAR_EM}]")


@dataclass(frozen=True)
class _Span:
    opener: int
    closer: int

    def __len__(self) -> int:
        return self.closer - self.opener


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _find_next(chars: list[str], target: str, start: int) -> int | None:
    for i in range(start, len(chars)):
        if chars[i] == target:
            return i
    return None


def _is_next_char_uppercase(chars: list[str], start: int) -> bool:
    """True if the next letter after `start` (skipping spaces and symbols) is uppercase."""

    for ch in chars[start:]:
        if ch.isupper():
            return True
        if ch.islower():
            return False
    return False


def _next_word(chars: list[str], start: int) -> str:
    """The run of letters beginning at the first letter at or after `start`."""

    begin = start
    while begin < len(chars) and not chars[begin].isalpha():
        begin += 1
    end = begin
    while end < len(chars) and chars[end].isalpha():
        end += 1
    return "".join(chars[begin:end])


class FrenchFormatter:
    """(Try to) apply French typographic rules to a paragraph.

    >>> f = FrenchFormatter()
    >>> f.format_tex("« Est-ce bien formaté ? »")
    '«~Est-ce bien formaté~?~»'

    A formatter holds nothing but its (immutable) config, so one instance can
    be shared across threads.
    """

    def __init__(self, config: FormatterConfig | None = None) -> None:
        self.config = config or FormatterConfig()

    def format(self, text: str) -> str:
        """Format `text`, inserting Unicode no-break spaces.

        Returns `text` itself when nothing had to change.
        """

        return self._format(text)

    def format_tex(self, text: str) -> str:
        """Like `format`, but every no-break space variant becomes `~`.

        The marker lets a typesetting escaper handle spacing with a single
        rule instead of three Unicode characters.
        """

        formatted = self._format(text)
        if _nb_spaces_re.search(formatted) is None:
            return formatted
        return _nb_spaces_re.sub(TEX_MARKER, formatted)

    def _format(self, text: str) -> str:
        cfg = self.config
        out = clean.whitespaces(text)
        if cfg.ligature_dashes:
            out = clean.dashes(out)
        if cfg.ligature_guillemets:
            out = clean.guillemets(out)
        if cfg.typographic_quotes:
            out = clean.quotes(out)
        if cfg.typographic_ellipsis:
            out = clean.ellipsis(out)

        first_trouble = _trouble_re.search(out)
        first_number = _digit_re.search(out)
        if first_trouble is None and first_number is None:
            return text if out == text else out

        chars = list(out)
        if first_number is not None:
            self._space_numbers(chars, first_number.start())
        if first_trouble is not None:
            self._space_punctuation(chars, first_trouble.start())

        result = "".join(chars)
        if result == text:
            return text
        logger.debug("french spacing rewrote %s chars", len(result))
        return result

    # Numbers

    def _space_numbers(self, chars: list[str], first: int) -> None:
        in_number = False
        for i in range(max(first - 1, 0), len(chars) - 1):
            current = chars[i]
            if _is_digit(current):
                if i == 0 or not chars[i - 1].isalpha():
                    in_number = True
            elif is_whitespace(current):
                nxt = chars[i + 1]
                if in_number and (_is_digit(nxt) or self._is_number_symbol(chars, i + 1)):
                    chars[i] = NB_CHAR_NARROW
            else:
                in_number = False

    def _is_number_symbol(self, chars: list[str], i: int) -> bool:
        """True if `chars[i]` starts something that sticks to a preceding number."""

        cfg = self.config
        ch = chars[i]
        followed_by_letter = i < len(chars) - 1 and chars[i + 1].isalpha()
        if not followed_by_letter:
            # Lone symbol (%, €, $), single uppercase letter (F, K) or one-letter unit (m, h).
            if ch.isalpha():
                return ch.isupper() or cfg.unit_len >= 1
            return not ch.isspace()

        if ch == "°":
            return True
        if ch.isupper():
            word = _next_word(chars, i)
            return len(word) <= cfg.currency_len and word.isupper()
        if ch.isalpha():
            return len(_next_word(chars, i)) <= cfg.unit_len
        return False

    # Punctuation, dashes and guillemets

    def _space_punctuation(self, chars: list[str], first: int) -> None:
        for i in range(max(first - 1, 0), len(chars) - 1):
            current = chars[i]
            nxt = chars[i + 1]
            if is_whitespace(current):
                if nxt in "?!;":
                    chars[i] = NB_CHAR_NARROW
                elif nxt == ":":
                    chars[i] = NB_CHAR
                elif nxt == "»" and current == " ":
                    # Any other space here was chosen by the author.
                    chars[i] = NB_CHAR
            elif is_whitespace(nxt):
                if current in DASHES:
                    chars[i + 1] = self._space_after_dash(chars, i)
                elif current == "«":
                    chars[i + 1] = self._space_after_guillemet(chars, i)

    def _span_space(self, span: _Span) -> str:
        if span.opener <= 1 or len(span) > self.config.quote_len:
            return NB_CHAR
        return NB_CHAR_NARROW

    def _space_after_guillemet(self, chars: list[str], i: int) -> str:
        closing = _find_next(chars, "»", i)
        if closing is None:
            # Unclosed: most likely a dialogue going on in the next paragraph.
            return NB_CHAR
        if not is_whitespace(chars[closing - 1]):
            return NB_CHAR
        space = self._span_space(_Span(i, closing))
        chars[closing - 1] = space
        return space

    def _space_after_dash(self, chars: list[str], i: int) -> str:
        if i <= 1:
            # Dialogue dash at the start of the paragraph.
            return NB_CHAR_EM
        if chars[i - 1] in (NB_CHAR, NB_CHAR_NARROW):
            # Already glued to the previous word: this dash closes an incise.
            return " "
        closing = self._find_closing_dash(chars, i + 1)
        if closing is None:
            return NB_CHAR
        # `closing` is the space before the closing dash.
        space = self._span_space(_Span(i, closing + 1))
        chars[closing] = space
        return space

    def _find_closing_dash(self, chars: list[str], start: int) -> int | None:
        """Index of the space before the dash closing an incise, if any.

        Gives up at what looks like the end of the sentence: better leave a
        dash unpaired than glue together two unrelated sentences.
        """

        word: list[str] = []
        for j in range(start, len(chars)):
            ch = chars[j]
            if ch in "!?":
                if _is_next_char_uppercase(chars, j + 1):
                    return None
            elif ch in DASHES:
                if is_whitespace(chars[j - 1]):
                    return j - 1
            elif ch == ".":
                if not _is_next_char_uppercase(chars, j + 1) or not word:
                    continue
                # "M. Dupont" is an abbreviation, "mal. Mais" ends a sentence.
                if not word[0].isupper() or len(word) > self.config.real_word_len:
                    return None
            elif ch.isspace():
                word = []
            else:
                word.append(ch)
        return None
