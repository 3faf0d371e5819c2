"""Binomial-tree pricing engine for vanilla options."""

from __future__ import annotations

from dataclasses import dataclass

from forge_validators.options.models.binomial_tree import binomial_tree
from forge_validators.options.types import LatticeResult, MarketState, OptionSpec


@dataclass(frozen=True)
class BinomialTreePricer:
    """CRR tree pricer; exercise style comes from `spec.exercise_style`.

    Only `price(...)` is offered for the `PriceModel` protocol; the lattice
    does not provide analytic Greeks.
    """

    steps: int = 100

    def __post_init__(self) -> None:
        if self.steps < 1:
            raise ValueError("steps must be >= 1")

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        return self.price_with_diagnostics(spec, state).price

    def price_with_diagnostics(
        self, spec: OptionSpec, state: MarketState
    ) -> LatticeResult:
        """Price plus the `u`, `d`, `p` used to build the lattice."""
        return binomial_tree(
            S=state.spot,
            K=spec.strike,
            T=spec.time_to_expiry,
            sigma=state.volatility,
            r=state.rate,
            q=state.dividend_yield,
            option_type=spec.option_type,
            steps=self.steps,
            american=spec.american,
        )
