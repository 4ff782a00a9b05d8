from __future__ import annotations

import logging
from contextlib import suppress
from logging.handlers import RotatingFileHandler
from pathlib import Path

from typo_proofer.env import env_str, env_truthy

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def log_level_from_env() -> str | None:
    return env_str("TYPO_PROOFER_LOG_LEVEL")


def configure_console_logging(level: str | None = None) -> None:
    """Log to stderr (used by the CLI; stdout carries the formatted text)."""

    lvl = (level or log_level_from_env() or "WARNING").upper()
    logging.basicConfig(level=lvl, format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def ensure_file_logging(*, log_dir: Path, filename: str = "typo-proofer.log") -> Path:
    """Attach a rotating file handler to the root logger (idempotent).

    This works well with uvicorn's logging config (we just add another handler).
    """

    if env_truthy("TYPO_PROOFER_DISABLE_FILE_LOG"):
        return log_dir / filename

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = (log_dir / filename).resolve()

    root = logging.getLogger()
    for h in root.handlers:
        base = getattr(h, "baseFilename", None)
        if getattr(h, "_typo_proofer_file_log", False):
            return Path(str(base)).resolve() if base else log_file
        if base and Path(str(base)).resolve() == log_file:
            return log_file

    handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler._typo_proofer_file_log = True  # type: ignore[attr-defined]
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(handler)

    lvl = log_level_from_env()
    if lvl:
        with suppress(ValueError):
            root.setLevel(lvl.upper())

    return log_file
