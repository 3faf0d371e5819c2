"""Real-options validator: price one option by closed form or CRR lattice."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from forge_validators.options import (
    BinomialTreePricer,
    BlackScholesPricer,
    ExerciseStyle,
    GreeksModel,
    LatticeModel,
    MarketState,
    OptionSpec,
    OptionType,
    PriceModel,
    intrinsic_value,
)
from forge_validators.validators._envelope import (
    RequestValidationError,
    ValidatorResponse,
    coerce_float,
    require_mapping,
    run_validator,
)

logger = logging.getLogger(__name__)

VALIDATOR_NAME = "real_options"

DEFAULT_OPTION_PARAMS: dict[str, Any] = {
    "r": 0.05,
    "sigma": 0.3,
    "T": 1.0,
    "n": 100,
    "q": 0.0,
    "american": False,
    "option_type": "call",
    "model": "black_scholes",
}


class PricingModel(StrEnum):
    BLACK_SCHOLES = "black_scholes"
    BINOMIAL = "binomial"


@dataclass(frozen=True)
class OptionRequest:
    """Validated request; `steps` and `american` only matter for the lattice."""

    model: PricingModel
    spec: OptionSpec
    state: MarketState
    steps: int

    @property
    def inputs(self) -> dict[str, float]:
        return {
            "S": self.state.spot,
            "K": self.spec.strike,
            "r": self.state.rate,
            "sigma": self.state.volatility,
            "T": self.spec.time_to_expiry,
            "q": self.state.dividend_yield,
        }


def _coerce_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise RequestValidationError(f"{field!r} must be a boolean, got {value!r}")


def _coerce_steps(value: Any) -> int:
    steps = coerce_float(value, "n")
    if steps != int(steps) or steps < 1:
        raise RequestValidationError(f"'n' must be a positive integer, got {value!r}")
    return int(steps)


def parse_option_request(
    params: Any,
    defaults: Mapping[str, Any] | None = None,
) -> OptionRequest:
    """Merge request fields over `defaults` and validate them."""
    request = require_mapping(params)
    if request.get("S") is None or request.get("K") is None:
        raise RequestValidationError(
            "Real options require 'S' (asset value) and 'K' (strike/investment cost)"
        )

    merged = {**DEFAULT_OPTION_PARAMS, **(defaults or {})}
    merged.update({k: v for k, v in request.items() if v is not None})

    try:
        option_type = OptionType(str(merged["option_type"]).strip().lower())
    except ValueError as exc:
        raise RequestValidationError(
            f"'option_type' must be 'call' or 'put', got {merged['option_type']!r}"
        ) from exc
    try:
        model = PricingModel(str(merged["model"]).strip().lower())
    except ValueError as exc:
        raise RequestValidationError(
            f"'model' must be 'black_scholes' or 'binomial', got {merged['model']!r}"
        ) from exc

    american = _coerce_bool(merged["american"], "american")
    spec = OptionSpec(
        strike=coerce_float(merged["K"], "K"),
        time_to_expiry=coerce_float(merged["T"], "T"),
        option_type=option_type,
        exercise_style=ExerciseStyle.AMERICAN if american else ExerciseStyle.EUROPEAN,
    )
    state = MarketState(
        spot=coerce_float(merged["S"], "S"),
        volatility=coerce_float(merged["sigma"], "sigma"),
        rate=coerce_float(merged["r"], "r"),
        dividend_yield=coerce_float(merged["q"], "q"),
    )
    return OptionRequest(model=model, spec=spec, state=state, steps=_coerce_steps(merged["n"]))


def select_pricer(req: OptionRequest) -> PriceModel:
    """Engine for the requested model."""
    if req.model == PricingModel.BINOMIAL:
        return BinomialTreePricer(steps=req.steps)
    return BlackScholesPricer()


def price_option_request(
    req: OptionRequest,
    pricer: PriceModel | None = None,
) -> dict[str, Any]:
    """Price a parsed request and assemble the `results` payload.

    The payload follows the engine's capabilities: lattice engines report
    `steps`, `american`, `u`, `d`, `p`; engines with analytic sensitivities
    report `greeks`.
    """
    pricer = pricer if pricer is not None else select_pricer(req)
    results: dict[str, Any] = {"model": req.model.value}

    if isinstance(pricer, LatticeModel):
        lattice = pricer.price_with_diagnostics(req.spec, req.state)
        params = lattice.params
        results["price"] = lattice.price
        results["steps"] = params.steps if params else req.steps
        results["american"] = req.spec.american
        results["u"] = params.u if params else None
        results["d"] = params.d if params else None
        results["p"] = params.p if params else None
    elif isinstance(pricer, GreeksModel):
        priced = pricer.price_and_greeks(req.spec, req.state)
        results["price"] = priced.price
        if priced.greeks is None:
            results["greeks"] = dict.fromkeys(("delta", "gamma", "theta", "vega", "rho"))
        else:
            results["greeks"] = priced.greeks.to_dict()
    else:
        results["price"] = pricer.price(req.spec, req.state)

    results["option_type"] = OptionType(req.spec.option_type).value
    results["inputs"] = req.inputs
    results["intrinsic"] = float(
        intrinsic_value(req.state.spot, req.spec.strike, req.spec.option_type)
    )
    results["time_value"] = results["price"] - results["intrinsic"]
    return results


def run_real_options(
    params: Any,
    *,
    defaults: Mapping[str, Any] | None = None,
) -> ValidatorResponse:
    """Price the requested option and wrap the result in a response envelope."""

    def _compute() -> dict[str, Any]:
        req = parse_option_request(params, defaults)
        results = price_option_request(req)
        logger.info(
            "%s %s price=%.10g (intrinsic=%.10g)",
            results["model"],
            results["option_type"],
            results["price"],
            results["intrinsic"],
        )
        return results

    return run_validator(VALIDATOR_NAME, _compute)
