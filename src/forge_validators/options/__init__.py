"""Option pricing models, engines, and shared types."""

from .engines import (
    BinomialTreePricer,
    BlackScholesPricer,
    GreeksModel,
    LatticeModel,
    PriceModel,
    binomial_convergence_table,
)
from .models import (
    binomial_tree,
    binomial_tree_price,
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_price_and_greeks,
    bs_rho,
    bs_theta,
    bs_vega,
    crr_parameters,
    intrinsic_value,
    option_to_abandon,
    option_to_delay,
    option_to_expand,
)
from .types import (
    ExerciseStyle,
    Greeks,
    LatticeError,
    LatticeParameters,
    LatticeResult,
    MarketState,
    OptionSpec,
    OptionType,
    OptionTypeInput,
    PricingResult,
)

__all__ = [
    "OptionType",
    "OptionTypeInput",
    "ExerciseStyle",
    "OptionSpec",
    "MarketState",
    "Greeks",
    "PricingResult",
    "LatticeError",
    "LatticeParameters",
    "LatticeResult",
    "PriceModel",
    "GreeksModel",
    "LatticeModel",
    "BinomialTreePricer",
    "BlackScholesPricer",
    "binomial_convergence_table",
    "binomial_tree",
    "binomial_tree_price",
    "crr_parameters",
    "intrinsic_value",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "bs_gamma",
    "bs_vega",
    "bs_theta",
    "bs_rho",
    "bs_greeks",
    "bs_price_and_greeks",
    "option_to_delay",
    "option_to_expand",
    "option_to_abandon",
]
