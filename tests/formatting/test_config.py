from __future__ import annotations

import dataclasses

import pytest

from typo_proofer.formatting.config import ConfigBuilder, FormatterConfig


def test_defaults() -> None:
    cfg = FormatterConfig()
    assert cfg.currency_len == 3
    assert cfg.unit_len == 2
    assert cfg.quote_len == 20
    assert cfg.real_word_len == 3
    assert cfg.typographic_quotes is True
    assert cfg.typographic_ellipsis is True
    assert cfg.ligature_dashes is False
    assert cfg.ligature_guillemets is False


def test_builder_chains_and_builds() -> None:
    builder = FormatterConfig.builder()
    assert builder.quote_len(28) is builder

    cfg = builder.unit_len(4).ligature_dashes(True).typographic_quotes(False).build()
    assert cfg == FormatterConfig(quote_len=28, unit_len=4, ligature_dashes=True, typographic_quotes=False)


def test_builder_starts_from_base() -> None:
    base = FormatterConfig(currency_len=5)
    cfg = ConfigBuilder(base).real_word_len(1).build()
    assert cfg.currency_len == 5
    assert cfg.real_word_len == 1


def test_config_is_immutable() -> None:
    cfg = FormatterConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.quote_len = 3  # type: ignore[misc]


def test_invalid_thresholds_are_rejected() -> None:
    with pytest.raises(ValueError, match="quote_len"):
        FormatterConfig(quote_len=-1)
    with pytest.raises(ValueError, match="unit_len"):
        FormatterConfig.builder().unit_len("2").build()  # type: ignore[arg-type]


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TYPO_PROOFER_QUOTE_LEN", "28")
    monkeypatch.setenv("TYPO_PROOFER_UNIT_LEN", "not-a-number")
    monkeypatch.setenv("TYPO_PROOFER_LIGATURE_DASHES", "yes")
    monkeypatch.setenv("TYPO_PROOFER_TYPOGRAPHIC_QUOTES", "0")

    cfg = FormatterConfig.from_env()
    assert cfg.quote_len == 28
    assert cfg.unit_len == 2
    assert cfg.ligature_dashes is True
    assert cfg.typographic_quotes is False
    assert cfg.typographic_ellipsis is True


def test_to_dict_round_trips_through_constructor() -> None:
    cfg = FormatterConfig(quote_len=7, ligature_guillemets=True)
    assert FormatterConfig(**cfg.to_dict()) == cfg
