"""Black-Scholes pricing engine."""

from __future__ import annotations

from forge_validators.options.models.black_scholes import (
    bs_price,
    bs_price_and_greeks,
)
from forge_validators.options.types import MarketState, OptionSpec, PricingResult


class BlackScholesPricer:
    """Closed-form European pricer.

    The exercise style on `spec` is ignored: the formulas price European
    exercise only, which is also exact for American calls without dividends.
    """

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        return bs_price(
            S=state.spot,
            K=spec.strike,
            T=spec.time_to_expiry,
            sigma=state.volatility,
            r=state.rate,
            q=state.dividend_yield,
            option_type=spec.option_type,
        )

    def price_and_greeks(self, spec: OptionSpec, state: MarketState) -> PricingResult:
        return bs_price_and_greeks(
            S=state.spot,
            K=spec.strike,
            T=spec.time_to_expiry,
            sigma=state.volatility,
            r=state.rate,
            q=state.dividend_yield,
            option_type=spec.option_type,
        )
