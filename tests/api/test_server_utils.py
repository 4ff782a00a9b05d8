from __future__ import annotations

import logging
from pathlib import Path

import pytest

import typo_proofer.api as api
import typo_proofer.logging_setup as logging_setup
import typo_proofer.server as server


def test_safe_filename_and_derive_output_filename() -> None:
    assert api._safe_filename("") == "input.txt"
    assert api._safe_filename("..\\..\\x?.txt").endswith(".txt")
    assert "?" not in api._safe_filename("a?b.txt")

    assert api._derive_output_filename("demo.txt", "_fr") == "demo_fr.txt"
    assert api._derive_output_filename("demo", "") == "demo_typo.txt"
    assert api._derive_output_filename("dir/chapitre.md", "_typo") == "chapitre_typo.md"


def test_decode_text_prefers_utf8_sig() -> None:
    assert api._decode_text(b"\xef\xbb\xbfabc") == "abc"
    assert api._decode_text("été".encode("cp1252")) == "été"


def test_ensure_file_logging_is_idempotent(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TYPO_PROOFER_DISABLE_FILE_LOG", raising=False)
    monkeypatch.delenv("TYPO_PROOFER_LOG_LEVEL", raising=False)
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        first = logging_setup.ensure_file_logging(log_dir=tmp_path)
        second = logging_setup.ensure_file_logging(log_dir=tmp_path)
        assert first == second == (tmp_path / "typo-proofer.log").resolve()
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
    finally:
        for h in root.handlers[:]:
            if h not in before:
                root.removeHandler(h)
                h.close()


def test_ensure_file_logging_can_be_disabled(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TYPO_PROOFER_DISABLE_FILE_LOG", "1")
    out = logging_setup.ensure_file_logging(log_dir=tmp_path / "logs")
    assert out == tmp_path / "logs" / "typo-proofer.log"
    assert not (tmp_path / "logs").exists()


def test_server_main_parses_and_calls_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_run(app, *, host, port, log_level, reload):
        captured["app"] = app
        captured["host"] = host
        captured["port"] = port
        captured["log_level"] = log_level
        captured["reload"] = reload

    monkeypatch.setattr(server.uvicorn, "run", fake_run)
    assert server.main(["--host", "127.0.0.1", "--port", "12345", "--log-level", "warning"]) == 0
    assert captured["app"] == "typo_proofer.api:app"
    assert captured["host"] == "127.0.0.1"
    assert captured["port"] == 12345
    assert captured["log_level"] == "warning"
    assert captured["reload"] is False
