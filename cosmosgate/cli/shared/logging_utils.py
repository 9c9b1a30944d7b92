"""Loguru sinks for CLI commands: stderr verbosity plus per-command log files."""

from __future__ import annotations

import sys
from contextlib import suppress
from pathlib import Path

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}"

_STDERR = "<stderr>"
_SINK_IDS: dict[str, int] = {}


def get_log_dir() -> Path:
    return Path.home() / ".cosmosgate" / "logs"


def configure_stderr(verbose: bool = False) -> None:
    """Swap the stderr handler; WARNING unless verbose. File sinks are kept."""
    previous = _SINK_IDS.pop(_STDERR, 0)  # 0 is loguru's default handler
    with suppress(ValueError):
        logger.remove(previous)
    _SINK_IDS[_STDERR] = logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format=LOG_FORMAT)


def ensure_rotating_log_file(name: str, level: str = "INFO") -> Path:
    """Attach `<log dir>/<name>.log` once per process and return its path."""
    path = get_log_dir() / f"{name}.log"
    if name not in _SINK_IDS:
        path.parent.mkdir(parents=True, exist_ok=True)
        _SINK_IDS[name] = logger.add(
            str(path),
            level=level,
            format=LOG_FORMAT,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
            encoding="utf-8",
            backtrace=False,
            diagnose=False,
        )
    return path
