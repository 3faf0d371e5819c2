"""Structural types the pricers satisfy.

The real-options validator shapes its `results` payload by which of these
protocols the selected engine satisfies, not by its concrete class.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from forge_validators.options.types import (
    LatticeResult,
    MarketState,
    OptionSpec,
    PricingResult,
)


@runtime_checkable
class PriceModel(Protocol):
    def price(self, spec: OptionSpec, state: MarketState) -> float:
        """Present value of one option."""


@runtime_checkable
class GreeksModel(Protocol):
    """Engines with analytic sensitivities."""

    def price_and_greeks(self, spec: OptionSpec, state: MarketState) -> PricingResult:
        """Value plus Greeks; `greeks` is None when they are not defined."""


@runtime_checkable
class LatticeModel(Protocol):
    """Engines that can report the tree parameters behind a price."""

    def price_with_diagnostics(
        self, spec: OptionSpec, state: MarketState
    ) -> LatticeResult:
        """Value plus `u`, `d`, `p`; `params` is None for expired options."""
