from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from typo_proofer.formatting import caps, clean, escape
from typo_proofer.formatting.french import FrenchFormatter


class UnknownTransformError(ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"transformation {name!r} not recognized; valid ones: {', '.join(TRANSFORMS)}")


@dataclass(frozen=True)
class Transform:
    name: str
    description: str
    apply: Callable[[str, FrenchFormatter], str]


def _plain(fn: Callable[[str], str]) -> Callable[[str, FrenchFormatter], str]:
    return lambda text, _formatter: fn(text)


_TRANSFORM_LIST = (
    Transform("escape_html", "escape text for HTML display", _plain(escape.html)),
    Transform("escape_tex", "escape text for LaTeX display", _plain(escape.tex)),
    Transform("escape_nb_spaces", "escape narrow non-breaking spaces using HTML spans", _plain(escape.nb_spaces_html)),
    Transform("escape_nb_spaces_tex", "escape non-breaking spaces using LaTeX spacing commands", _plain(escape.nb_spaces_tex)),
    Transform("escape_quotes", "replace double quotes with single ones", _plain(escape.quotes)),
    Transform("clean_ellipsis", "use unicode character ‘…’ for ellipsis", _plain(clean.ellipsis)),
    Transform("clean_quotes", "try to replace straight quotes with curly ones", _plain(clean.quotes)),
    Transform("clean_dashes", "replace ‘--’ and ‘---’ with en and em dashes", _plain(clean.dashes)),
    Transform("clean_guillemets", "replace ‘<<’ and ‘>>’ with guillemets", _plain(clean.guillemets)),
    Transform("format_french", "try to apply french typographic rules", lambda text, f: f.format(text)),
    Transform(
        "format_french_tex",
        "apply french typographic rules, marking non-breaking spaces with ‘~’",
        lambda text, f: f.format_tex(text),
    ),
    Transform("caps_latex", "put uppercase words in LaTeX small caps", _plain(caps.latex)),
)

TRANSFORMS: dict[str, Transform] = {t.name: t for t in _TRANSFORM_LIST}


def resolve_transforms(names: Iterable[str]) -> list[Transform]:
    out: list[Transform] = []
    for name in names:
        transform = TRANSFORMS.get(name)
        if transform is None:
            raise UnknownTransformError(name)
        out.append(transform)
    return out


def apply_transforms(
    text: str,
    names: Iterable[str],
    formatter: FrenchFormatter | None = None,
) -> tuple[str, dict[str, int]]:
    """Collapse whitespace, then run the named transforms in order.

    Stats count the transforms that actually changed the text.
    """

    transforms = resolve_transforms(names)
    formatter = formatter or FrenchFormatter()
    stats: dict[str, int] = {}

    fixed = clean.whitespaces(text)
    if fixed is not text:
        stats["clean_whitespaces"] = stats.get("clean_whitespaces", 0) + 1

    for transform in transforms:
        new = transform.apply(fixed, formatter)
        if new != fixed:
            stats[transform.name] = stats.get(transform.name, 0) + 1
        fixed = new

    return fixed, stats
