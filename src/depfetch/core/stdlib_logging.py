from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

_CONSOLE_HANDLER: logging.Handler | None = None
_FILE_HANDLER: logging.Handler | None = None
_CONFIGURED_LOG_PATH: str | None = None

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(
    *,
    level: str = "INFO",
    fmt: str = "%(message)s",
    log_path: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure the ``depfetch`` logger for CLI use.

    Progress goes to ``stream`` (stderr by default) so stdout stays reserved
    for the command's report. When ``log_path`` is set, a DEBUG-level file
    handler is installed as well. Safe to call repeatedly: handlers installed
    by a previous call are replaced.
    """
    global _CONSOLE_HANDLER, _FILE_HANDLER, _CONFIGURED_LOG_PATH

    logger = logging.getLogger("depfetch")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if _CONSOLE_HANDLER is not None:
        logger.removeHandler(_CONSOLE_HANDLER)
    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(_level_from_name(level))
    console.setFormatter(logging.Formatter(fmt))
    logger.addHandler(console)
    _CONSOLE_HANDLER = console

    resolved = str(Path(log_path).resolve()) if log_path else None
    if resolved == _CONFIGURED_LOG_PATH:
        return

    # Replace the installed file handler when switching paths.
    if _FILE_HANDLER is not None:
        logger.removeHandler(_FILE_HANDLER)
        _FILE_HANDLER.close()
        _FILE_HANDLER = None
        _CONFIGURED_LOG_PATH = None

    if resolved is None:
        return

    Path(resolved).parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(FILE_FORMAT))
    logger.addHandler(fh)
    _FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove handlers installed by :func:`configure_stdlib_logging`."""
    global _CONSOLE_HANDLER, _FILE_HANDLER, _CONFIGURED_LOG_PATH
    logger = logging.getLogger("depfetch")
    for handler in (_CONSOLE_HANDLER, _FILE_HANDLER):
        if handler is not None:
            logger.removeHandler(handler)
            handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    _CONSOLE_HANDLER = None
    _FILE_HANDLER = None
    _CONFIGURED_LOG_PATH = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
