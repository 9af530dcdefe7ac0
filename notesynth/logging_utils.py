"""Logging setup for the ``notesynth`` logger tree.

Everything is written to ``notesynth.log`` under ``NOTESYNTH_LOG_DIR`` (default
``~/.cache/notesynth/logs``). The console handler only shows warnings unless
``NOTESYNTH_DEBUG`` is set, and never shows records marked ``file_only``.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

PACKAGE_LOGGER = "notesynth"
LOG_DIR_ENV = "NOTESYNTH_LOG_DIR"
DEBUG_ENV = "NOTESYNTH_DEBUG"
LOG_FILE_NAME = "notesynth.log"

_LOGGER = logging.getLogger("notesynth.logging")
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_console_handler: logging.Handler | None = None
_file_handler: logging.FileHandler | None = None


class _StatusFormatter(logging.Formatter):
    """Console lines share the status symbols used by ``notesynth.feedback``."""

    _SYMBOLS = {
        logging.DEBUG: "·",
        logging.INFO: "→",
        logging.WARNING: "⚠",
        logging.ERROR: "✗",
        logging.CRITICAL: "✗",
    }

    def __init__(self) -> None:
        super().__init__("%(symbol)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        record.symbol = self._SYMBOLS.get(record.levelno, "·")
        return super().format(record)


def _console_only(record: logging.LogRecord) -> bool:
    return not getattr(record, "file_only", False)


def debug_enabled() -> bool:
    return bool(os.environ.get(DEBUG_ENV))


def get_log_dir() -> Path:
    configured = os.environ.get(LOG_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cache" / "notesynth" / "logs"


def get_log_path() -> Path:
    return get_log_dir() / LOG_FILE_NAME


def _detach(logger: logging.Logger, handler: logging.Handler | None) -> None:
    if handler is not None:
        logger.removeHandler(handler)
        handler.close()


def _open_file_handler(target: Path) -> logging.FileHandler | None:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    except OSError as exc:
        _LOGGER.warning("File logging disabled, cannot open %s: %s", target, exc)
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATE_FORMAT))
    return handler


def configure_logging(*, force: bool = False) -> Path | None:
    """Attach notesynth's console and file handlers; return the active log file.

    Safe to call repeatedly. The file handler is reopened whenever the log
    directory setting changes. ``force`` rebuilds both handlers, touching only
    the ones installed here.
    """
    global _console_handler, _file_handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG)

    if force:
        _detach(logger, _console_handler)
        _detach(logger, _file_handler)
        _console_handler = None
        _file_handler = None

    # Leave console output to the host application when it has set up logging.
    if _console_handler is None and (force or not logging.getLogger().handlers):
        _console_handler = logging.StreamHandler(stream=sys.__stderr__)
        _console_handler.setLevel(logging.DEBUG if debug_enabled() else logging.WARNING)
        _console_handler.setFormatter(_StatusFormatter())
        _console_handler.addFilter(_console_only)
        logger.addHandler(_console_handler)

    target = get_log_path()
    if _file_handler is None or _file_handler.baseFilename != os.path.abspath(target):
        _detach(logger, _file_handler)
        _file_handler = _open_file_handler(target)
        if _file_handler is not None:
            logger.addHandler(_file_handler)

    return Path(_file_handler.baseFilename) if _file_handler is not None else None


def log_exception(context: str, exc: BaseException) -> Path | None:
    """Record a failure with its traceback in the log file only.

    Returns the log file the traceback went to, or None when file logging
    could not be set up.
    """
    log_path = configure_logging()
    _LOGGER.error(
        "%s failed: %s: %s",
        context,
        type(exc).__name__,
        exc,
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"file_only": True},
    )
    return log_path
