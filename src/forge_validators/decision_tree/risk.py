"""Risk profiles: the distribution of terminal payoffs under one alternative."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from forge_validators.decision_tree.types import (
    DecisionTreeError,
    NodeKind,
    RiskOutcome,
    RolledNode,
)


def risk_profile(node: RolledNode) -> tuple[RiskOutcome, ...]:
    """Enumerate reachable terminals below a rolled-back node.

    Chance nodes branch into every child, multiplying the running path
    probability; decision nodes follow only their chosen child. Outcomes are
    listed depth-first in input order and their probabilities sum to one.
    """
    outcomes: list[RiskOutcome] = []
    stack: list[tuple[RolledNode, float]] = [(node, 1.0)]

    while stack:
        current, prob = stack.pop()
        if not current.children:
            outcomes.append(
                RiskOutcome(
                    name=current.name,
                    probability=prob,
                    payoff=float(current.payoff if current.payoff is not None else current.emv),
                )
            )
        elif current.kind == NodeKind.CHANCE:
            for child in reversed(current.children):
                if child.probability is None:
                    raise DecisionTreeError(
                        f"Chance node {current.name!r} has not been rolled back"
                    )
                stack.append((child, prob * child.probability))
        else:
            chosen = current.chosen
            if chosen is None:
                raise DecisionTreeError(
                    f"Decision node {current.name!r} has not been rolled back"
                )
            stack.append((chosen, prob))

    return tuple(outcomes)


def risk_profile_table(outcomes: Sequence[RiskOutcome]) -> pd.DataFrame:
    """Payoff distribution with its cumulative probability.

    Outcomes sharing a payoff are merged. Rows are sorted by ascending payoff
    so `cumulative_probability` reads as P(payoff <= x).
    """
    columns = ["payoff", "probability", "cumulative_probability"]
    if not outcomes:
        return pd.DataFrame(columns=columns)

    frame = pd.DataFrame(
        {
            "payoff": [o.payoff for o in outcomes],
            "probability": [o.probability for o in outcomes],
        }
    )
    out = (
        frame.groupby("payoff", as_index=False)["probability"]
        .sum()
        .sort_values("payoff")
        .reset_index(drop=True)
    )
    out["cumulative_probability"] = out["probability"].cumsum()
    return out[columns]


@dataclass(frozen=True)
class RiskProfileSummary:
    expected_value: float
    std_dev: float
    min_payoff: float
    max_payoff: float
    probability_of_loss: float


def summarize_risk_profile(outcomes: Sequence[RiskOutcome]) -> RiskProfileSummary:
    """Moments and extremes of a risk profile.

    `probability_of_loss` is the total probability of strictly negative
    payoffs.
    """
    if not outcomes:
        raise ValueError("outcomes must not be empty")

    probs = np.array([o.probability for o in outcomes], dtype=float)
    payoffs = np.array([o.payoff for o in outcomes], dtype=float)
    mean = float(np.dot(probs, payoffs))
    var = float(np.dot(probs, (payoffs - mean) ** 2))

    return RiskProfileSummary(
        expected_value=mean,
        std_dev=float(np.sqrt(max(var, 0.0))),
        min_payoff=float(payoffs.min()),
        max_payoff=float(payoffs.max()),
        probability_of_loss=float(probs[payoffs < 0].sum()),
    )
