"""Logging bootstrap for the chatterm command.

The TUI owns the terminal while it runs, so records only go to a rotating
log file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""
    level_name: str
    level: int
    file_path: str


_RUNTIME: Optional[LoggingRuntime] = None


def _parse_level(raw: Optional[str]) -> tuple[str, int]:
    normalized = str(raw or "WARNING").strip().upper()
    level = getattr(logging, normalized, None)
    if not isinstance(level, int):
        level = logging.WARNING
    return logging.getLevelName(level), level


def _default_log_path() -> str:
    log_dir = Path(
        os.environ.get("CHATTERM_LOG_DIR", os.path.expanduser("~/.local/share/chatterm/logs"))
    )
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return str(log_dir / f"chatterm-{ts}-{os.getpid()}.log")


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(level: Optional[str] = None) -> LoggingRuntime:
    """Attach a file handler to the chatterm logger hierarchy.

    Level comes from ``level``, else $CHATTERM_LOG_LEVEL, else WARNING. The
    file is $CHATTERM_LOG_FILE or a timestamped file under the log dir.
    Idempotent: repeated calls return the originally configured runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level_value = _parse_level(level or os.environ.get("CHATTERM_LOG_LEVEL"))
    file_path = os.environ.get("CHATTERM_LOG_FILE") or _default_log_path()
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("chatterm")
    logger.setLevel(level_value)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_make_file_handler(level_value, file_path))

    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level_value, file_path=file_path)
    logger.debug("logging configured at %s -> %s", level_name, file_path)
    return _RUNTIME


def get_runtime() -> Optional[LoggingRuntime]:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME
