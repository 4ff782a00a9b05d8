"""Escaping for HTML and LaTeX output.

Run these *after* the typographic passes: escaping first would hide the
characters the heuristics look at. `nb_spaces_tex` must come after `tex`,
since `tex` would otherwise escape the backslashes it emits.

>>> html("<foo> & <bar>")
'&lt;foo&gt; &amp; &lt;bar&gt;'
>>> tex("#2: 20%")
'\\\\#2: 20\\\\%'
"""

from __future__ import annotations

import re

from typo_proofer.formatting.chars import NB_CHAR, NB_CHAR_EM, NB_CHAR_NARROW

_html_re = re.compile(r"[<>&]")
_HTML_ENTITIES = {"<": "&lt;", ">": "&gt;", "&": "&amp;"}

_tex_re = re.compile(r"[!<>&%$#_~\-{}\[\]^\\]")
_TEX_ESCAPES = {
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "[": r"{[}",
    "]": r"{]}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
    "<": r"\textless{}",
    ">": r"\textgreater{}",
    "!": r"!{}",
    "\\": r"\textbackslash{}",
}

_nb_spaces_re = re.compile(f"[{NB_CHAR}{NB_CHAR_NARROW}{NB_CHAR_EM}]")
_NB_SPACES_TEX = {NB_CHAR_NARROW: r"\,", NB_CHAR_EM: r"\enspace ", NB_CHAR: "~"}

_nnbsp_group_re = re.compile(rf"\S*{NB_CHAR_NARROW}[\S{NB_CHAR_NARROW}]*")


def html(text: str) -> str:
    """Replace `<`, `>` and `&` with HTML entities.

    Meant for trusted, locally authored content, not as a sanitizer.
    """

    if _html_re.search(text) is None:
        return text
    return _html_re.sub(lambda m: _HTML_ENTITIES[m.group(0)], text)


def _tex_escape(m: re.Match[str]) -> str:
    ch = m.group(0)
    if ch == "-":
        # `--` and `---` are ligatures in TeX.
        end = m.end()
        if end < len(m.string) and m.string[end] == "-":
            return "-{}"
        return ch
    return _TEX_ESCAPES[ch]


def tex(text: str) -> str:
    """Escape LaTeX reserved characters.

    >>> tex("command --foo # calls command with option foo")
    'command -{}-foo \\\\# calls command with option foo'
    """

    if _tex_re.search(text) is None:
        return text
    return _tex_re.sub(_tex_escape, text)


def nb_spaces_tex(text: str) -> str:
    """Turn no-break spaces into LaTeX spacing commands (`\\,`, `\\enspace`, `~`)."""

    if _nb_spaces_re.search(text) is None:
        return text
    return _nb_spaces_re.sub(lambda m: _NB_SPACES_TEX[m.group(0)], text)


def nb_spaces_html(text: str) -> str:
    """Wrap words glued by a narrow no-break space in `<span class = "nnbsp">`.

    Some fonts lack U+202F, so the narrow space is replaced with `&#160;`
    and the span is expected to be styled, e.g. `.nnbsp { word-spacing: -0.13em; }`.
    """

    if _nnbsp_group_re.search(text) is None:
        return text
    return _nnbsp_group_re.sub(
        lambda m: '<span class = "nnbsp">' + m.group(0).replace(NB_CHAR_NARROW, "&#160;") + "</span>",
        text,
    )


def quotes(text: str) -> str:
    """Very naively replace `"` with `'` (for attribute values and the like)."""

    if '"' not in text:
        return text
    return text.replace('"', "'")
