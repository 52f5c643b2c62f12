# src/shop_backend/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_NAME = "shop.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 3


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - shop_backend logs pass (worker start/exit chatter only at INFO+)
    - uvicorn lifecycle lines pass, access logs only at WARNING+
    - everything else, captured warnings included, only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("shop_backend.workerpool"):
            return record.levelno >= logging.INFO
        if name.startswith("shop_backend."):
            return True

        if name == "uvicorn.access":
            return record.levelno >= logging.WARNING
        if name.startswith("uvicorn"):
            return record.levelno >= logging.INFO

        return record.levelno >= logging.ERROR


def _level(name: str | int) -> int:
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(*, log_dir: str | Path, level: str | int = "INFO") -> Path:
    """
    Configure the root logger once, before the worker pool is created.

    `<log_dir>/shop.log` gets everything (DEBUG, rotated at 10 MB, 3 backups).
    stderr gets `level` and above, minus library noise. Unknown level names
    fall back to INFO. Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(_level(level))
    console_handler.setFormatter(formatter)
    console_handler.addFilter(_ConsoleNoiseFilter())

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.addHandler(file_handler)
    root.addHandler(console_handler)
    root.setLevel(logging.DEBUG)  # handlers filter

    # Access lines would otherwise flood the file at DEBUG.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    # warnings.warn(...) -> 'py.warnings' logger
    logging.captureWarnings(True)
    return log_file
