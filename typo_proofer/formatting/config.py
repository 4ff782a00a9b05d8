from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any

from typo_proofer.env import env_int, env_truthy

_ENV_PREFIX = "TYPO_PROOFER_"


@dataclass(frozen=True)
class FormatterConfig:
    # Heuristic thresholds, in characters.
    # Longer than this after a number: not a currency code (EUR, USD).
    currency_len: int = 3
    # Longer than this after a number: not a unit (km, kg).
    unit_len: int = 2
    # Longer than this between « and »: a real quotation or a dialogue, not a few quoted words.
    quote_len: int = 20
    # Longer than this before a `.`: a real word ending a sentence, not an abbreviation (M. Dupont).
    real_word_len: int = 3

    # Lexical passes
    typographic_quotes: bool = True
    typographic_ellipsis: bool = True

    # Potentially ambiguous (`--` options, `<<` operators); default off.
    ligature_dashes: bool = False
    ligature_guillemets: bool = False

    def __post_init__(self) -> None:
        for name in ("currency_len", "unit_len", "quote_len", "real_word_len"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer")
            if value < 0:
                raise ValueError(f"{name} must be >= 0")

    @classmethod
    def builder(cls) -> ConfigBuilder:
        return ConfigBuilder()

    @classmethod
    def from_env(cls) -> FormatterConfig:
        """Defaults overridden by `TYPO_PROOFER_<FIELD>` environment variables."""

        defaults = cls()
        values: dict[str, Any] = {}
        for f in fields(cls):
            env_name = _ENV_PREFIX + f.name.upper()
            current = getattr(defaults, f.name)
            if isinstance(current, bool):
                if str(os.getenv(env_name, "")).strip():
                    values[f.name] = env_truthy(env_name)
            else:
                values[f.name] = env_int(env_name, current)
        return replace(defaults, **values)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class ConfigBuilder:
    """Chained construction of a `FormatterConfig`.

    >>> FormatterConfig.builder().quote_len(28).ligature_dashes(True).build().quote_len
    28
    """

    def __init__(self, base: FormatterConfig | None = None) -> None:
        self._values: dict[str, Any] = (base or FormatterConfig()).to_dict()

    def _set(self, name: str, value: Any) -> ConfigBuilder:
        self._values[name] = value
        return self

    def currency_len(self, n: int) -> ConfigBuilder:
        return self._set("currency_len", n)

    def unit_len(self, n: int) -> ConfigBuilder:
        return self._set("unit_len", n)

    def quote_len(self, n: int) -> ConfigBuilder:
        return self._set("quote_len", n)

    def real_word_len(self, n: int) -> ConfigBuilder:
        return self._set("real_word_len", n)

    def typographic_quotes(self, enabled: bool) -> ConfigBuilder:
        return self._set("typographic_quotes", bool(enabled))

    def typographic_ellipsis(self, enabled: bool) -> ConfigBuilder:
        return self._set("typographic_ellipsis", bool(enabled))

    def ligature_dashes(self, enabled: bool) -> ConfigBuilder:
        return self._set("ligature_dashes", bool(enabled))

    def ligature_guillemets(self, enabled: bool) -> ConfigBuilder:
        return self._set("ligature_guillemets", bool(enabled))

    def build(self) -> FormatterConfig:
        return FormatterConfig(**self._values)
