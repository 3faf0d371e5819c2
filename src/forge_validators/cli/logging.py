"""Logging flags and the `logging:` config section for validator entrypoints.

Validators write their JSON response to stdout, so the console handler set up
here always logs to stderr. The default level is WARNING to keep a harness
run quiet unless something falls back or fails.
"""

from __future__ import annotations

import argparse
from typing import Any, Mapping

from forge_validators.utils.logging_config import setup_logging

DEFAULT_LOGGING: dict[str, Any] = {
    "level": "WARNING",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": False,
}

# argparse dest -> key in the `logging:` config section
_ARG_TO_KEY: dict[str, str] = {
    "log_level": "level",
    "log_file": "file",
    "log_format": "format",
    "log_color": "color",
}


def add_logging_args(parser: argparse.ArgumentParser) -> None:
    """Add `--log-level/--log-file/--log-format` and `--color/--no-color`."""
    group = parser.add_argument_group("logging")
    group.add_argument(
        "--log-level",
        default=None,
        help="Logging level, e.g. INFO or DEBUG (default: WARNING).",
    )
    group.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file.",
    )
    group.add_argument(
        "--log-format",
        default=None,
        help="Console log format; %%(shortname)s is available.",
    )
    group.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Colour level names on the console.",
    )
    group.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Plain console output.",
    )
    parser.set_defaults(log_color=None)


def logging_overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Logging keys explicitly set on the command line."""
    overrides: dict[str, Any] = {}
    for dest, key in _ARG_TO_KEY.items():
        value = getattr(args, dest, None)
        if value is not None and value != "":
            overrides[key] = value
    return overrides


def _normalize_logging_config(config: Mapping[str, Any] | None) -> dict[str, Any]:
    merged = dict(DEFAULT_LOGGING)
    for key, value in (config or {}).items():
        if key in DEFAULT_LOGGING and value is not None:
            merged[key] = value
    return merged


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=log_cfg["file"],
        colored=bool(log_cfg["color"]),
    )
