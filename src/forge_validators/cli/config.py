"""Layered configuration for validator entrypoints.

Precedence is CLI overrides > YAML file > in-code defaults.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

import yaml


def add_config_arg(parser, *, default: str | None = None) -> None:
    parser.add_argument(
        "--config",
        type=str,
        default=default,
        help="Path to a YAML config file.",
    )


def add_params_args(parser) -> None:
    """Add the mutually exclusive `--json` / `--params-file` request inputs."""
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--json",
        dest="params_json",
        type=str,
        default=None,
        help="Validator request as an inline JSON object.",
    )
    group.add_argument(
        "--params-file",
        type=str,
        default=None,
        help="Path to a JSON file holding the validator request.",
    )


def load_yaml_config(path: str | Path | None) -> dict[str, Any]:
    if path is None:
        return {}

    p = resolve_path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a YAML mapping at the top level.")

    return data


def load_request_params(
    params_json: str | None,
    params_file: str | Path | None,
) -> Any:
    """Decode the validator request from an inline string or a file.

    The decoded value is returned as-is; shape checks belong to the validator.
    """
    if params_json is not None:
        return json.loads(params_json)
    if params_file is not None:
        p = resolve_path(params_file)
        return json.loads(p.read_text(encoding="utf-8"))
    raise ValueError("One of --json or --params-file is required.")


def deep_merge(
    base: Mapping[str, Any],
    updates: Mapping[str, Any],
) -> dict[str, Any]:
    merged: dict[str, Any] = {}

    for key, value in base.items():
        if isinstance(value, Mapping):
            merged[key] = deep_merge(value, {})
        else:
            merged[key] = value

    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value

    return merged


def build_config(
    defaults: Mapping[str, Any],
    yaml_path: str | Path | None,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    config = deep_merge(defaults, load_yaml_config(yaml_path))
    if overrides:
        config = deep_merge(config, overrides)
    return config


def resolve_path(value: str | Path | None) -> Path | None:
    if value is None:
        return None
    if isinstance(value, Path):
        return value
    expanded = os.path.expandvars(os.path.expanduser(str(value)))
    return Path(expanded)
