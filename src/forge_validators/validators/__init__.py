"""Request parsing and response envelopes for the forge harness."""

from ._envelope import RequestValidationError, ValidatorResponse
from .decision_tree import parse_tree, run_decision_tree
from .real_options import (
    DEFAULT_OPTION_PARAMS,
    OptionRequest,
    PricingModel,
    parse_option_request,
    price_option_request,
    run_real_options,
    select_pricer,
)

__all__ = [
    "RequestValidationError",
    "ValidatorResponse",
    "parse_tree",
    "run_decision_tree",
    "DEFAULT_OPTION_PARAMS",
    "OptionRequest",
    "PricingModel",
    "parse_option_request",
    "price_option_request",
    "run_real_options",
    "select_pricer",
]
