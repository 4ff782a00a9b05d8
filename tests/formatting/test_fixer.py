from __future__ import annotations

import pytest

from typo_proofer.formatting.chars import NB_CHAR, NB_CHAR_NARROW
from typo_proofer.formatting.config import FormatterConfig
from typo_proofer.formatting.fixer import format_lines, format_txt
from typo_proofer.formatting.rules import UnknownTransformError

NB = NB_CHAR
NNB = NB_CHAR_NARROW


def test_format_txt_lines_and_stats() -> None:
    text = "« Bonjour »\r\nÇa va ?\r\n\r\n10 000 €"
    res = format_txt(text)
    assert res.text == f"«{NB}Bonjour{NB}»\nÇa va{NNB}?\n\n10{NNB}000{NNB}€"
    assert res.stats == {"lines": 4, "changed_lines": 3, "format_french": 3}


def test_format_txt_keeps_final_newline() -> None:
    assert format_txt("Ok ?\n").text == f"Ok{NNB}?\n"
    assert format_txt("Ok ?").text == f"Ok{NNB}?"


def test_format_txt_treats_each_line_as_a_paragraph() -> None:
    res = format_txt("Il dit :\n« Venez tous ici, mes chers amis »\n", ["format_french_tex"])
    assert res.text == "Il dit~:\n«~Venez tous ici, mes chers amis~»\n"


def test_format_txt_with_config() -> None:
    cfg = FormatterConfig(ligature_guillemets=True)
    res = format_txt("<< Oui >>", ["format_french", "escape_nb_spaces_tex"], cfg)
    assert res.text == "«~Oui~»"
    assert res.stats["escape_nb_spaces_tex"] == 1


def test_format_txt_unknown_transform() -> None:
    with pytest.raises(UnknownTransformError):
        format_txt("x", ["nope"])


def test_format_lines_is_lazy() -> None:
    consumed: list[str] = []

    def lines():
        for line in ("un ?", "deux !", "trois"):
            consumed.append(line)
            yield line

    it = iter(format_lines(lines(), ["format_french_tex"]))
    assert next(it) == ("un~?", {"format_french_tex": 1})
    assert consumed == ["un ?"]
