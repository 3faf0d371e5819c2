"""Worked examples for both validators.

1) Decision tree: invest $100,000 for a 70% chance of $300,000 and a 30%
   chance of $50,000, or do nothing.
2) Option to delay the same kind of project, priced in closed form and on
   lattices of increasing size.
"""

from __future__ import annotations

import argparse

from forge_validators.decision_tree import (
    TreeNode,
    evaluate_decision_tree,
    risk_profile_table,
    summarize_risk_profile,
)
from forge_validators.options import (
    BlackScholesPricer,
    MarketState,
    OptionSpec,
    OptionType,
    binomial_convergence_table,
    option_to_delay,
)
from forge_validators.utils.logging_config import setup_logging


def _investment_tree() -> TreeNode:
    return TreeNode.decision(
        "Investment Decision",
        [
            TreeNode.chance(
                "Invest",
                [
                    TreeNode.terminal("Success", 300_000, probability=0.7),
                    TreeNode.terminal("Failure", 50_000, probability=0.3),
                ],
                cost=100_000,
            ),
            TreeNode.terminal("Don't Invest", 0),
        ],
    )


def run_decision_tree_example() -> None:
    result = evaluate_decision_tree(_investment_tree())
    print(f"Root EMV:         {result.root_emv:,.2f}")
    print(f"Optimal decision: {result.optimal_decision}")
    for alternative in result.tree.children:
        print(f"  {alternative.name:<14} EMV = {alternative.emv:,.2f}")

    outcomes = result.risk_profiles["Invest"]
    print("\nRisk profile (Invest):")
    print(risk_profile_table(outcomes).to_string(index=False))
    summary = summarize_risk_profile(outcomes)
    print(f"  std dev of payoff: {summary.std_dev:,.2f}")


def run_real_options_example(steps: list[int]) -> None:
    spec = OptionSpec(strike=100.0, time_to_expiry=1.0, option_type=OptionType.CALL)
    state = MarketState(spot=100.0, volatility=0.30, rate=0.05)

    priced = BlackScholesPricer().price_and_greeks(spec, state)
    print(f"\nBlack-Scholes call: {priced.price:.4f}")
    if priced.greeks is not None:
        for name, value in priced.greeks.to_dict().items():
            print(f"  {name:<5} {value: .6f}")

    print("\nBinomial convergence:")
    print(binomial_convergence_table(spec, state, steps=steps).round(6).to_string())

    delay = option_to_delay(V=100.0, I=100.0, r=0.05, sigma=0.30, T=1.0)
    verdict = "WAIT" if delay.should_wait else "INVEST NOW"
    print(f"\nValue of waiting: {delay.value_of_waiting:.4f} -> {verdict}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--steps", type=int, nargs="+", default=[10, 50, 100, 500])
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    setup_logging(args.log_level)
    run_decision_tree_example()
    run_real_options_example(args.steps)


if __name__ == "__main__":
    main()
