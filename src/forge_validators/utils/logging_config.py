"""Logging configuration for the validator entrypoints.

Library modules never configure logging; they only do
`logger = logging.getLogger(__name__)`. Console scripts call
`setup_logging(...)` once before running a validator.

Console output goes to stderr so that stdout carries nothing but the JSON
response consumed by the forge harness.

The console handler injects `record.shortname` (last dotted component of the
logger name) so `%(shortname)s` can be used in console format strings.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Mapping


class _AddShortNameFilter(logging.Filter):
    """Inject `record.shortname` = last component of `record.name`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.split(".")[-1]
        return True


class _ColorFormatter(logging.Formatter):
    """Colour only the level name; file handlers stay uncoloured."""

    _RESET = "\033[0m"
    _LEVEL_COLOR: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self._LEVEL_COLOR.get(record.levelno)
        if not color:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self._RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


_LEVEL_NAMES: dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def coerce_level(level: int | str) -> int:
    """Turn `logging.INFO`, `"info"` or `"20"` into an int level."""
    if isinstance(level, int):
        return level

    s = str(level).strip().upper()
    if not s:
        raise ValueError("Empty logging level")
    if s.isdigit():
        return int(s)

    try:
        return _LEVEL_NAMES[s]
    except KeyError as e:
        raise ValueError(f"Unknown logging level: {level!r}") from e


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt_console: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    fmt_file: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    log_file: str | Path | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    colored: bool = False,
) -> None:
    """Configure root logging (call once from an entrypoint).

    Parameters
    - level: Root log level (int or string).
    - fmt_console: Console format; `%(shortname)s` is available.
    - fmt_file: File format, used only when `log_file` is set.
    - datefmt: Timestamp format.
    - log_file: Optional extra file destination.
    - module_levels: Optional per-logger level overrides.
    - colored: Colourize console level names (ANSI).

    Uses `force=True` so repeated calls (tests, notebooks) replace handlers.
    """
    root_level = coerce_level(level)
    handlers: list[logging.Handler] = []

    console = logging.StreamHandler(sys.stderr)
    console.addFilter(_AddShortNameFilter())
    if colored:
        console.setFormatter(_ColorFormatter(fmt=fmt_console, datefmt=datefmt))
    else:
        console.setFormatter(logging.Formatter(fmt=fmt_console, datefmt=datefmt))
    handlers.append(console)

    if log_file is not None:
        p = Path(log_file)
        p.parent.mkdir(parents=True, exist_ok=True)

        fh = logging.FileHandler(p, encoding="utf-8")
        fh.setFormatter(logging.Formatter(fmt=fmt_file, datefmt=datefmt))
        handlers.append(fh)

    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    if module_levels:
        for name, lvl in module_levels.items():
            logging.getLogger(name).setLevel(coerce_level(lvl))
