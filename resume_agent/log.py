"""Logging setup shared by the app, the CLI and the library modules.

Handlers are attached to the root logger once. ``get_logger`` does it lazily
with the environment defaults; the CLI and tests may call
``configure_logging`` first to choose the level or the log directory.

Environment:
    LOG_LEVEL              root level name (default INFO)
    RESUME_AGENT_LOG_DIR   directory for the daily log file (default ./logs)
    RESUME_AGENT_LOG_FILE  "false"/"0"/"no" disables the file handler
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import date
from pathlib import Path

DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_FALSY = ("0", "false", "no", "off")
_configured = False


def _env_level() -> int:
    return getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)


def _env_log_dir() -> Path:
    override = os.environ.get("RESUME_AGENT_LOG_DIR", "").strip()
    return Path(override) if override else DEFAULT_LOG_DIR


def _daily_file_handler(log_dir: Path, formatter: logging.Formatter) -> logging.Handler | None:
    """One file per day, ``resume_agent_YYYY-MM-DD.log``; None if unwritable."""
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(
            log_dir / f"resume_agent_{date.today().isoformat()}.log", encoding="utf-8"
        )
    except OSError:
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: int | None = None,
    *,
    log_dir: Path | None = None,
    to_file: bool | None = None,
) -> None:
    """Install stdout (and daily file) handlers on the root logger.

    Only the first call attaches handlers; later calls just adjust the level.
    Handlers installed by a host (Streamlit, pytest) are left in place.
    """
    global _configured
    level = _env_level() if level is None else level
    root = logging.getLogger()
    root.setLevel(level)
    if _configured:
        return
    _configured = True
    if root.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if to_file is None:
        to_file = os.environ.get("RESUME_AGENT_LOG_FILE", "true").strip().lower() not in _FALSY
    if to_file:
        handler = _daily_file_handler(log_dir or _env_log_dir(), formatter)
        if handler is not None:
            root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    if not _configured:
        configure_logging()
    return logging.getLogger(name)
