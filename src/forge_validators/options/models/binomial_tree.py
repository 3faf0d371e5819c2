"""CRR binomial-tree pricing for vanilla options."""

from __future__ import annotations

import logging

import numpy as np

from forge_validators.options.models.payoffs import (
    intrinsic_value,
    normalize_option_type,
)
from forge_validators.options.types import (
    LatticeError,
    LatticeParameters,
    LatticeResult,
    OptionType,
    OptionTypeInput,
)

logger = logging.getLogger(__name__)


def crr_parameters(
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    steps: int = 100,
) -> LatticeParameters:
    """Per-step Cox-Ross-Rubinstein parameters.

    `d` is defined as `1 / u`, so the lattice recombines and `u * d` is one
    (to the last bit of floating-point precision).

    Raises:
        ValueError: If `steps < 1`, `T <= 0` or `sigma <= 0`.
        LatticeError: If the risk-neutral probability falls outside [0, 1].
    """
    if steps < 1:
        raise ValueError("steps must be >= 1")
    if T <= 0:
        raise ValueError("T must be positive to build a lattice")
    if sigma <= 0:
        raise ValueError("sigma must be positive to build a lattice")

    dt = T / steps
    u = float(np.exp(sigma * np.sqrt(dt)))
    d = 1.0 / u
    growth = float(np.exp((r - q) * dt))
    p = (growth - d) / (u - d)

    if not 0.0 <= p <= 1.0:
        raise LatticeError(
            f"Invalid CRR risk-neutral probability p={p:.6g}; "
            "increase steps or check r, q and sigma."
        )

    return LatticeParameters(
        steps=steps,
        dt=dt,
        u=u,
        d=d,
        p=p,
        discount=float(np.exp(-r * dt)),
    )


def _layer_spots(S: float, params: LatticeParameters, step: int) -> np.ndarray:
    # d == 1/u: node j sits at S * u**(2j - step)
    j = np.arange(step + 1)
    return S * params.u ** (2 * j - step)


def binomial_tree(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
    steps: int = 100,
    american: bool = False,
) -> LatticeResult:
    """Price a vanilla option on a CRR lattice and keep its parameters.

    Args:
        S: Spot price.
        K: Strike price.
        T: Time to expiry in years. `T <= 0` returns intrinsic value, as the
            closed form does.
        sigma: Annualized volatility in decimals.
        r: Continuously-compounded risk-free rate.
        q: Continuously-compounded dividend yield.
        option_type: One of `{'call', 'put', 'C', 'P'}`.
        steps: Number of binomial time steps.
        american: If True, allow early exercise at each node.

    Returns:
        `LatticeResult` with the present value and the per-step parameters
        (`params` is None for an expired option).

    Raises:
        ValueError: On invalid steps or non-positive `sigma`.
        LatticeError: If CRR probabilities become invalid or the lattice
            overflows to a non-finite price.
    """
    if steps < 1:
        raise ValueError("steps must be >= 1")

    opt_type = normalize_option_type(option_type)
    if T <= 0:
        return LatticeResult(price=float(intrinsic_value(S, K, opt_type)), params=None)

    params = crr_parameters(T, sigma, r, q, steps)
    logger.debug(
        "CRR lattice steps=%d u=%.8f d=%.8f p=%.8f", steps, params.u, params.d, params.p
    )

    with np.errstate(over="ignore", invalid="ignore"):
        option_vals = intrinsic_value(_layer_spots(S, params, steps), K, opt_type)

        for step in range(steps - 1, -1, -1):
            option_vals = params.discount * (
                params.p * option_vals[1:] + (1.0 - params.p) * option_vals[:-1]
            )
            if not american:
                continue

            intrinsic = intrinsic_value(_layer_spots(S, params, step), K, opt_type)
            option_vals = np.maximum(option_vals, intrinsic)

    price = float(option_vals[0])
    if not np.isfinite(price):
        raise LatticeError(
            f"Binomial price is not finite (u={params.u:.6g}, steps={steps}); "
            "sigma * sqrt(T * steps) is too large for the lattice."
        )
    return LatticeResult(price=price, params=params)


def binomial_tree_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
    steps: int = 100,
    american: bool = False,
) -> float:
    """Price only; see `binomial_tree` for the diagnostics variant."""
    return binomial_tree(
        S, K, T, sigma, r, q, option_type, steps=steps, american=american
    ).price
