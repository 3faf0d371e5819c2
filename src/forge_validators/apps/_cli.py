"""Plumbing shared by the validator console scripts.

Each entrypoint builds its own parser, `DEFAULT_CONFIG` and CLI overrides,
then hands them with a validator callable to `run_entrypoint`, which owns the
stdout contract: exactly one JSON document, exit status 0 on success and 1
otherwise.
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from forge_validators.cli import (
    add_config_arg,
    add_logging_args,
    add_params_args,
    build_config,
    load_request_params,
    logging_overrides_from_args,
    setup_logging_from_config,
)
from forge_validators.validators import ValidatorResponse

Evaluate = Callable[[Any, Mapping[str, Any]], ValidatorResponse]


def build_parser(description: str) -> argparse.ArgumentParser:
    """Parser with request, config, logging and `--print-config` flags."""
    parser = argparse.ArgumentParser(description=description)
    add_params_args(parser)
    add_config_arg(parser)
    add_logging_args(parser)
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the merged config as JSON and exit.",
    )
    return parser


def with_logging_overrides(
    args: argparse.Namespace, overrides: dict[str, Any]
) -> dict[str, Any]:
    logging_cfg = logging_overrides_from_args(args)
    if logging_cfg:
        overrides["logging"] = logging_cfg
    return overrides


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Mapping):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_jsonable(v) for v in obj]
    return obj


def print_config(config: Mapping[str, Any]) -> None:
    print(json.dumps(_jsonable(config), indent=2, sort_keys=True))


def emit_response(response: ValidatorResponse) -> int:
    """Write the response JSON to stdout and return the process exit code."""
    print(json.dumps(response.to_dict()))
    return 0 if response.success else 1


def _failure(validator: str, message: str) -> int:
    return emit_response(
        ValidatorResponse(validator=validator, success=False, error=message)
    )


def run_entrypoint(
    args: argparse.Namespace,
    defaults: Mapping[str, Any],
    overrides: Mapping[str, Any],
    *,
    validator: str,
    evaluate: Evaluate,
    logger: logging.Logger,
) -> int:
    """Merge the config, then print it or run `evaluate` on the request.

    An unreadable config (missing file, bad YAML, bad logging or validator
    settings) or request (missing file, invalid JSON, neither `--json` nor
    `--params-file`) still produces a failure envelope on stdout.
    """
    try:
        config = build_config(defaults, args.config, overrides)
        if args.print_config:
            print_config(config)
            return 0
        setup_logging_from_config(config.get("logging"))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Could not load config: %s", exc)
        return _failure(validator, f"Invalid config: {exc}")

    try:
        params = load_request_params(args.params_json, args.params_file)
    except (OSError, ValueError) as exc:
        logger.error("Could not read request: %s", exc)
        return _failure(validator, f"Invalid request: {exc}")

    try:
        response = evaluate(params, config)
    except (TypeError, ValueError) as exc:
        # Validators wrap request errors themselves; what escapes is config.
        logger.error("Invalid validator settings: %s", exc)
        return _failure(validator, f"Invalid config: {exc}")
    return emit_response(response)
