from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the repo root (containing `typo_proofer/`) is importable when pytest
# picks `tests/` as the rootdir (e.g., single-file runs).
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

_CONFIG_ENV_VARS = (
    "TYPO_PROOFER_CURRENCY_LEN",
    "TYPO_PROOFER_UNIT_LEN",
    "TYPO_PROOFER_QUOTE_LEN",
    "TYPO_PROOFER_REAL_WORD_LEN",
    "TYPO_PROOFER_TYPOGRAPHIC_QUOTES",
    "TYPO_PROOFER_TYPOGRAPHIC_ELLIPSIS",
    "TYPO_PROOFER_LIGATURE_DASHES",
    "TYPO_PROOFER_LIGATURE_GUILLEMETS",
)


@pytest.fixture(autouse=True)
def _clean_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment from leaking into formatter defaults."""

    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
