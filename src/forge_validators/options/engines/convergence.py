"""Lattice-vs-closed-form convergence summaries."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from forge_validators.options.engines.binomial_tree_pricer import BinomialTreePricer
from forge_validators.options.engines.bs_pricer import BlackScholesPricer
from forge_validators.options.types import ExerciseStyle, MarketState, OptionSpec

DEFAULT_CONVERGENCE_STEPS: tuple[int, ...] = (10, 50, 100, 500)


def binomial_convergence_table(
    spec: OptionSpec,
    state: MarketState,
    steps: Iterable[int] = DEFAULT_CONVERGENCE_STEPS,
) -> pd.DataFrame:
    """Return one row per step count with lattice, closed-form and abs diff.

    The lattice is always priced with European exercise; the closed form
    has no American counterpart.
    """
    european = OptionSpec(
        strike=spec.strike,
        time_to_expiry=spec.time_to_expiry,
        option_type=spec.option_type,
        exercise_style=ExerciseStyle.EUROPEAN,
    )
    reference = BlackScholesPricer().price(european, state)

    rows = []
    for n in steps:
        lattice = BinomialTreePricer(steps=int(n)).price(european, state)
        rows.append(
            {
                "steps": int(n),
                "binomial_price": lattice,
                "black_scholes_price": reference,
                "abs_diff": abs(lattice - reference),
            }
        )

    return pd.DataFrame(
        rows, columns=["steps", "binomial_price", "black_scholes_price", "abs_diff"]
    ).set_index("steps")
