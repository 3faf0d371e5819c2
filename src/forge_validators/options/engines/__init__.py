"""Pricing engines used by the real-options validator."""

from .base import GreeksModel, LatticeModel, PriceModel
from .binomial_tree_pricer import BinomialTreePricer
from .bs_pricer import BlackScholesPricer
from .convergence import DEFAULT_CONVERGENCE_STEPS, binomial_convergence_table

__all__ = [
    "PriceModel",
    "GreeksModel",
    "LatticeModel",
    "BinomialTreePricer",
    "BlackScholesPricer",
    "DEFAULT_CONVERGENCE_STEPS",
    "binomial_convergence_table",
]
