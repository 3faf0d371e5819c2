"""Backward induction (rollback) over decision trees.

Evaluation is post-order: every child is valued before its parent.

- terminal: `emv = payoff` (terminal costs are not charged)
- chance:   `emv = sum(p_i * emv_i) - cost`
- decision: `emv = max(emv_i) - cost`, choosing the first child in input
  order when several tie

Traversals use an explicit stack so tree depth is not bounded by the
interpreter recursion limit.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace

from forge_validators.decision_tree.risk import risk_profile
from forge_validators.decision_tree.types import (
    DecisionTreeError,
    DecisionTreeResult,
    MissingProbabilityPolicy,
    NodeKind,
    RolledNode,
    TreeNode,
)

logger = logging.getLogger(__name__)

DEFAULT_PROBABILITY_TOLERANCE = 1e-6


def resolve_probabilities(
    node: TreeNode,
    policy: MissingProbabilityPolicy | str = MissingProbabilityPolicy.UNIFORM,
    tolerance: float = DEFAULT_PROBABILITY_TOLERANCE,
) -> tuple[float, ...]:
    """Effective branch probabilities for the children of a chance node.

    Raises:
        DecisionTreeError: If a probability is missing under the `raise`
            policy, or if the probabilities sum outside `1 +/- tolerance`.
    """
    policy = MissingProbabilityPolicy(policy)
    n = len(node.children)
    missing = [c.name for c in node.children if c.probability is None]

    if missing:
        if policy == MissingProbabilityPolicy.RAISE:
            raise DecisionTreeError(
                f"Chance node {node.name!r}: missing probability on {missing}"
            )
        logger.warning(
            "Chance node %r: assigning uniform probability 1/%d to %s",
            node.name,
            n,
            missing,
        )

    probs = tuple(
        1.0 / n if c.probability is None else float(c.probability)
        for c in node.children
    )
    total = math.fsum(probs)
    if abs(total - 1.0) > tolerance:
        raise DecisionTreeError(
            f"Chance node {node.name!r}: probabilities sum to {total:.10g}, "
            f"expected 1 within {tolerance:g}"
        )
    return probs


def _roll_leaf(node: TreeNode) -> RolledNode:
    return RolledNode(
        name=node.name,
        kind=node.kind,
        emv=float(node.payoff),
        probability=node.probability,
        cost=node.cost,
        payoff=node.payoff,
    )


def _roll_internal(
    node: TreeNode,
    children: list[RolledNode],
    policy: MissingProbabilityPolicy,
    tolerance: float,
) -> RolledNode:
    decision = None
    if node.kind == NodeKind.CHANCE:
        probs = resolve_probabilities(node, policy, tolerance)
        children = [replace(c, probability=p) for c, p in zip(children, probs)]
        emv = math.fsum(c.emv * p for c, p in zip(children, probs)) - node.cost
    else:
        best = max(children, key=lambda c: c.emv)
        emv = best.emv - node.cost
        decision = best.name

    return RolledNode(
        name=node.name,
        kind=node.kind,
        emv=emv,
        children=tuple(children),
        decision=decision,
        probability=node.probability,
        cost=node.cost,
        payoff=node.payoff,
    )


def rollback(
    tree: TreeNode,
    *,
    missing_probability: MissingProbabilityPolicy | str = MissingProbabilityPolicy.UNIFORM,
    tolerance: float = DEFAULT_PROBABILITY_TOLERANCE,
) -> RolledNode:
    """Value every node of `tree` by backward induction.

    The input tree is not modified; an annotated copy is returned.
    """
    policy = MissingProbabilityPolicy(missing_probability)
    if tolerance < 0:
        raise ValueError("tolerance must be >= 0")

    rolled: dict[int, RolledNode] = {}
    stack: list[tuple[TreeNode, bool]] = [(tree, False)]
    n_nodes = 0

    while stack:
        node, expanded = stack.pop()
        if node.is_terminal:
            rolled[id(node)] = _roll_leaf(node)
            n_nodes += 1
            continue
        if not expanded:
            stack.append((node, True))
            stack.extend((c, False) for c in reversed(node.children))
            continue

        children = [rolled[id(c)] for c in node.children]
        rolled[id(node)] = _roll_internal(node, children, policy, tolerance)
        n_nodes += 1

    result = rolled[id(tree)]
    logger.debug("Rolled back %d nodes; root %r emv=%.10g", n_nodes, tree.name, result.emv)
    return result


def optimal_path(tree: RolledNode) -> list[str]:
    """Names chosen at successive decision nodes along the displayed path.

    Chance nodes are passed through by following their highest-EMV child
    (first in input order on ties). That branch is only representative for
    display; the node's value is still the probability-weighted EMV.
    """
    path: list[str] = []
    node = tree
    while node.children:
        if node.decision is not None:
            path.append(node.decision)
            node = node.child(node.decision)
        else:
            node = max(node.children, key=lambda c: c.emv)
    return path


def evaluate_decision_tree(
    tree: TreeNode,
    *,
    missing_probability: MissingProbabilityPolicy | str = MissingProbabilityPolicy.UNIFORM,
    tolerance: float = DEFAULT_PROBABILITY_TOLERANCE,
) -> DecisionTreeResult:
    """Rollback plus optimal path and per-alternative risk profiles.

    Risk profiles are produced for each child of a decision root; any other
    root yields an empty mapping.
    """
    rolled = rollback(tree, missing_probability=missing_probability, tolerance=tolerance)
    path = optimal_path(rolled)

    profiles = {}
    if rolled.kind == NodeKind.DECISION:
        profiles = {child.name: risk_profile(child) for child in rolled.children}

    return DecisionTreeResult(
        root_emv=rolled.emv,
        optimal_decision=path[0] if path else None,
        decision_path=tuple(path),
        tree=rolled,
        risk_profiles=profiles,
    )
