# utils/logger.py
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


_LEVEL_MAP = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARN,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}

LEVEL_NAMES = tuple(_LEVEL_MAP)

_FMT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def parse_level(name: Optional[str], default: int = logging.WARNING) -> int:
    """Level name (case-insensitive) -> logging level; unknown names give `default`."""
    if not name:
        return default
    return _LEVEL_MAP.get(name.strip().upper(), default)


def _env_level() -> int:
    """FLOWCHECK_LOG_LEVEL, then LOG_LEVEL; WARNING keeps CLI output clean."""
    return parse_level(os.getenv("FLOWCHECK_LOG_LEVEL") or os.getenv("LOG_LEVEL"))


def _colorize(level: int, msg: str) -> str:
    """ANSI colorization by level, only when stderr is a terminal."""
    if not sys.stderr.isatty():
        return msg
    if level >= logging.ERROR:
        return f"\033[91m{msg}\033[0m"   # red
    if level >= logging.WARNING:
        return f"\033[93m{msg}\033[0m"   # yellow
    if level < logging.INFO:
        return f"\033[90m{msg}\033[0m"   # grey
    return msg


class _ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return _colorize(record.levelno, super().format(record))


def init_logger(
    name: str = "flowcheck",
    level: int | None = None,
    log_dir: str | Path | None = None,
    file_name: str = "flowcheck.log",
    file_max_mb: int = 5,
    file_backup: int = 3,
) -> logging.Logger:
    """
    (Re)configure the project logger.

    Handlers: stderr (stdout carries validation results) and, when `log_dir`
    or FLOWCHECK_LOG_DIR is set, a rotating file. Child loggers from
    get_logger() inherit both. Safe to call repeatedly.
    """
    logger = logging.getLogger(name)
    for h in logger.handlers:
        h.close()
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(level if level is not None else _env_level())

    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(_ColorFormatter(fmt=_FMT, datefmt=_DATEFMT))
    logger.addHandler(sh)

    log_dir = log_dir or os.getenv("FLOWCHECK_LOG_DIR")
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            filename=str(log_dir / file_name),
            maxBytes=file_max_mb * 1024 * 1024,
            backupCount=file_backup,
            encoding="utf-8",
        )
        fh.setFormatter(logging.Formatter(fmt=_FMT, datefmt=_DATEFMT))
        logger.addHandler(fh)

    return logger


# Default configuration at import; the CLI reconfigures from --log-level
log = init_logger()


def get_logger(child: str) -> logging.Logger:
    """Child logger under the project logger, e.g. get_logger("structural.nodes")."""
    return logging.getLogger("flowcheck").getChild(child)
