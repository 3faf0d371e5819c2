"""Closed-form and lattice option-pricing models."""

from .binomial_tree import binomial_tree, binomial_tree_price, crr_parameters
from .black_scholes import (
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_price_and_greeks,
    bs_rho,
    bs_theta,
    bs_vega,
)
from .payoffs import discount_factor, intrinsic_value, normalize_option_type
from .real_options import (
    AbandonmentOption,
    DelayOption,
    ExpansionOption,
    option_to_abandon,
    option_to_delay,
    option_to_expand,
)

__all__ = [
    "binomial_tree",
    "binomial_tree_price",
    "crr_parameters",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "bs_gamma",
    "bs_vega",
    "bs_theta",
    "bs_rho",
    "bs_greeks",
    "bs_price_and_greeks",
    "discount_factor",
    "intrinsic_value",
    "normalize_option_type",
    "DelayOption",
    "ExpansionOption",
    "AbandonmentOption",
    "option_to_delay",
    "option_to_expand",
    "option_to_abandon",
]
