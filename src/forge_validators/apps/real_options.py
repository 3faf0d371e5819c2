#!/usr/bin/env python
"""Price a real-options request and print the JSON response.

Typical usage:
    python -m forge_validators.apps.real_options --json '{"S": 100, "K": 100}'
    forge-real-options --config config/real_options.yml --params-file request.json

Request fields missing from the JSON fall back to `real_options.defaults`
in the config (CLI > YAML > built-in defaults).
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Mapping
from typing import Any

from forge_validators.apps._cli import (
    build_parser,
    run_entrypoint,
    with_logging_overrides,
)
from forge_validators.cli import DEFAULT_LOGGING
from forge_validators.validators import (
    DEFAULT_OPTION_PARAMS,
    ValidatorResponse,
    run_real_options,
)
from forge_validators.validators.real_options import VALIDATOR_NAME

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "real_options": {
        "defaults": dict(DEFAULT_OPTION_PARAMS),
    },
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = build_parser(
        "Price an option with Black-Scholes or a CRR binomial lattice."
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Default lattice steps when the request omits 'n'.",
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.steps is not None:
        overrides["real_options"] = {"defaults": {"n": args.steps}}
    return with_logging_overrides(args, overrides)


def _evaluate(params: Any, config: Mapping[str, Any]) -> ValidatorResponse:
    defaults = config.get("real_options", {}).get("defaults", {})
    logger.info("Request defaults: %s", defaults)
    return run_real_options(params, defaults=defaults)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    return run_entrypoint(
        args,
        DEFAULT_CONFIG,
        _build_overrides(args),
        validator=VALIDATOR_NAME,
        evaluate=_evaluate,
        logger=logger,
    )


if __name__ == "__main__":
    sys.exit(main())
