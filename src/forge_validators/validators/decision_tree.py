"""Decision-tree validator: JSON tree request in, rolled-back tree out.

Request shape::

    {"tree": {"name": ..., "type": "decision|chance|terminal",
              "cost": ..., "probability": ..., "payoff": ...,
              "children": [...]}}

A node without `type` is a decision node when it has children and a terminal
node otherwise; the root defaults to `decision`. Unknown `type` strings are
treated as decision nodes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from forge_validators.decision_tree import (
    DEFAULT_PROBABILITY_TOLERANCE,
    MissingProbabilityPolicy,
    NodeKind,
    TreeNode,
    evaluate_decision_tree,
)
from forge_validators.validators._envelope import (
    RequestValidationError,
    ValidatorResponse,
    coerce_float,
    require_mapping,
    run_validator,
)

logger = logging.getLogger(__name__)

VALIDATOR_NAME = "decision_tree"


def _node_kind(spec: Mapping[str, Any], *, is_root: bool) -> NodeKind:
    raw = spec.get("type")
    if raw is None:
        if is_root or spec.get("children"):
            return NodeKind.DECISION
        return NodeKind.TERMINAL
    try:
        return NodeKind(str(raw).strip().lower())
    except ValueError:
        logger.warning(
            "Node %r has unknown type %r; treating it as a decision node",
            spec.get("name"),
            raw,
        )
        return NodeKind.DECISION


def _optional_float(spec: Mapping[str, Any], key: str, name: str) -> float | None:
    value = spec.get(key)
    if value is None:
        return None
    return coerce_float(value, f"{name}.{key}")


def _child_specs(spec: Mapping[str, Any], name: str) -> list[Mapping[str, Any]]:
    children = spec.get("children") or []
    if not isinstance(children, list):
        raise RequestValidationError(f"{name!r}: 'children' must be a list")
    return [require_mapping(c, f"child of {name!r}") for c in children]


def parse_tree(spec: Any) -> TreeNode:
    """Build a validated `TreeNode` from a nested request mapping."""
    root = require_mapping(spec, "'tree'")
    built: dict[int, TreeNode] = {}
    stack: list[tuple[Mapping[str, Any], bool, bool]] = [(root, True, False)]

    while stack:
        node_spec, is_root, expanded = stack.pop()
        if "name" not in node_spec:
            raise RequestValidationError("Every tree node requires a 'name'")
        name = str(node_spec["name"])
        children = _child_specs(node_spec, name)

        if children and not expanded:
            stack.append((node_spec, is_root, True))
            stack.extend((c, False, False) for c in reversed(children))
            continue

        built[id(node_spec)] = TreeNode(
            name=name,
            kind=_node_kind(node_spec, is_root=is_root),
            children=tuple(built[id(c)] for c in children),
            cost=_optional_float(node_spec, "cost", name) or 0.0,
            probability=_optional_float(node_spec, "probability", name),
            payoff=_optional_float(node_spec, "payoff", name),
        )

    return built[id(root)]


def run_decision_tree(
    params: Any,
    *,
    missing_probability: MissingProbabilityPolicy | str = MissingProbabilityPolicy.UNIFORM,
    tolerance: float = DEFAULT_PROBABILITY_TOLERANCE,
) -> ValidatorResponse:
    """Evaluate the request's tree and wrap the result in a response envelope."""

    def _compute() -> dict[str, Any]:
        request = require_mapping(params)
        if request.get("tree") is None:
            raise RequestValidationError("Decision tree requires 'tree' specification")
        tree = parse_tree(request["tree"])
        result = evaluate_decision_tree(
            tree, missing_probability=missing_probability, tolerance=tolerance
        )
        logger.info(
            "Root %r: EMV=%.10g, optimal decision=%s",
            tree.name,
            result.root_emv,
            result.optimal_decision,
        )
        return result.to_dict()

    return run_validator(VALIDATOR_NAME, _compute)
