"""Payoff and discounting helpers shared by the closed-form and lattice models."""

from __future__ import annotations

import numpy as np

from forge_validators.options.types import OptionType, OptionTypeInput


def normalize_option_type(option_type: OptionTypeInput) -> OptionType:
    """Normalize option type labels to `OptionType`."""
    if isinstance(option_type, OptionType):
        return option_type
    label = str(option_type).strip()
    if label.lower() in ("call", "c"):
        return OptionType.CALL
    if label.lower() in ("put", "p"):
        return OptionType.PUT
    raise ValueError("option_type must be one of {'call', 'put', 'C', 'P'}")


def intrinsic_value(
    spot: np.ndarray | float, strike: float, option_type: OptionTypeInput
) -> np.ndarray:
    """Exercise value `max(S-K, 0)` for calls, `max(K-S, 0)` for puts."""
    opt_type = normalize_option_type(option_type)
    spot_arr = np.asarray(spot, dtype=float)
    if opt_type == OptionType.CALL:
        return np.maximum(spot_arr - strike, 0.0)
    return np.maximum(strike - spot_arr, 0.0)


def discount_factor(rate: float, t: float) -> float:
    """Continuously-compounded discount factor `exp(-rate * t)`."""
    return float(np.exp(-rate * t))
