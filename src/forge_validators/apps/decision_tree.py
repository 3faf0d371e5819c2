#!/usr/bin/env python
"""Evaluate a decision tree request and print the JSON response.

Typical usage:
    python -m forge_validators.apps.decision_tree --json '{"tree": {...}}'
    forge-decision-tree --params-file request.json --missing-probability raise

Config precedence: CLI > YAML > defaults.
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
from forge_validators.decision_tree import (
    DEFAULT_PROBABILITY_TOLERANCE,
    MissingProbabilityPolicy,
)
from forge_validators.validators import ValidatorResponse, run_decision_tree
from forge_validators.validators.decision_tree import VALIDATOR_NAME

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "decision_tree": {
        "missing_probability": MissingProbabilityPolicy.UNIFORM.value,
        "tolerance": DEFAULT_PROBABILITY_TOLERANCE,
    },
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = build_parser(
        "Roll back a decision tree and report EMVs and risk profiles."
    )
    tree_args = parser.add_argument_group("decision tree")
    tree_args.add_argument(
        "--missing-probability",
        choices=[p.value for p in MissingProbabilityPolicy],
        default=None,
        help="Policy for chance branches without a probability.",
    )
    tree_args.add_argument(
        "--tolerance",
        type=float,
        default=None,
        help="Allowed deviation of chance probabilities from summing to 1.",
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    tree_cfg: dict[str, Any] = {}
    if args.missing_probability is not None:
        tree_cfg["missing_probability"] = args.missing_probability
    if args.tolerance is not None:
        tree_cfg["tolerance"] = args.tolerance

    overrides: dict[str, Any] = {"decision_tree": tree_cfg} if tree_cfg else {}
    return with_logging_overrides(args, overrides)


def _evaluate(params: Any, config: Mapping[str, Any]) -> ValidatorResponse:
    tree_cfg = config.get("decision_tree", {})
    policy = tree_cfg.get("missing_probability", MissingProbabilityPolicy.UNIFORM.value)
    tolerance = float(tree_cfg.get("tolerance", DEFAULT_PROBABILITY_TOLERANCE))
    logger.info("Missing probability policy: %s, tolerance: %g", policy, tolerance)
    return run_decision_tree(params, missing_probability=policy, tolerance=tolerance)


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
