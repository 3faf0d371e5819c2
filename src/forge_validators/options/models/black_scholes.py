"""Black-Scholes pricing and Greeks for European options."""

from __future__ import annotations

import logging

import numpy as np
from scipy.stats import norm

from forge_validators.options.models.payoffs import (
    discount_factor,
    intrinsic_value,
    normalize_option_type,
)
from forge_validators.options.types import (
    Greeks,
    OptionType,
    OptionTypeInput,
    PricingResult,
)

logger = logging.getLogger(__name__)


def _check_positive_prices(S: float, K: float) -> None:
    if not (np.isfinite(S) and S > 0):
        raise ValueError("S must be a positive finite number")
    if not (np.isfinite(K) and K > 0):
        raise ValueError("K must be a positive finite number")


def bs_d1_d2(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
) -> tuple[float, float]:
    """Compute d1 and d2 for Black-Scholes with continuous dividend yield."""
    if T <= 0 or sigma <= 0:
        raise ValueError("T and sigma must be positive")
    _check_positive_prices(S, K)
    vol_sqrt_t = sigma * np.sqrt(T)
    d1 = (np.log(S / K) + (r - q + 0.5 * sigma**2) * T) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    return float(d1), float(d2)


def bs_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> float:
    """Black-Scholes price with continuous dividend yield.

    An expired option (`T <= 0`) is worth its intrinsic value.

    Raises:
        ValueError: If `sigma <= 0` with `T > 0`, if `S`/`K` are not
            positive, or if the result is not finite.
    """
    opt_type = normalize_option_type(option_type)
    if T <= 0:
        return float(intrinsic_value(S, K, opt_type))

    d1, d2 = bs_d1_d2(S, K, T, sigma, r, q)
    df_q = discount_factor(q, T)
    df_r = discount_factor(r, T)

    if opt_type == OptionType.CALL:
        price = S * df_q * norm.cdf(d1) - K * df_r * norm.cdf(d2)
    else:
        price = K * df_r * norm.cdf(-d2) - S * df_q * norm.cdf(-d1)

    if not np.isfinite(price):
        raise ValueError("Black-Scholes price is not finite for the given inputs")
    return float(price)


def bs_delta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> float:
    """Black-Scholes delta."""
    opt_type = normalize_option_type(option_type)
    d1, _ = bs_d1_d2(S, K, T, sigma, r, q)
    if opt_type == OptionType.CALL:
        return float(discount_factor(q, T) * norm.cdf(d1))
    return float(discount_factor(q, T) * (norm.cdf(d1) - 1.0))


def bs_gamma(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
) -> float:
    """Black-Scholes gamma."""
    d1, _ = bs_d1_d2(S, K, T, sigma, r, q)
    return float(discount_factor(q, T) * norm.pdf(d1) / (S * sigma * np.sqrt(T)))


def bs_vega(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
) -> float:
    """Black-Scholes vega per +1.0 volatility."""
    d1, _ = bs_d1_d2(S, K, T, sigma, r, q)
    return float(S * discount_factor(q, T) * norm.pdf(d1) * np.sqrt(T))


def bs_theta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> float:
    """Black-Scholes theta per +1.0 calendar year."""
    opt_type = normalize_option_type(option_type)
    d1, d2 = bs_d1_d2(S, K, T, sigma, r, q)
    df_q = discount_factor(q, T)
    df_r = discount_factor(r, T)
    term1 = -(S * df_q * norm.pdf(d1) * sigma) / (2 * np.sqrt(T))

    if opt_type == OptionType.CALL:
        term2 = q * S * df_q * norm.cdf(d1)
        term3 = -r * K * df_r * norm.cdf(d2)
    else:
        term2 = -q * S * df_q * norm.cdf(-d1)
        term3 = r * K * df_r * norm.cdf(-d2)

    return float(term1 + term2 + term3)


def bs_rho(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> float:
    """Black-Scholes rho per +1.0 rate."""
    opt_type = normalize_option_type(option_type)
    _, d2 = bs_d1_d2(S, K, T, sigma, r, q)
    if opt_type == OptionType.CALL:
        return float(K * T * discount_factor(r, T) * norm.cdf(d2))
    return float(-K * T * discount_factor(r, T) * norm.cdf(-d2))


def bs_greeks(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> Greeks | None:
    """Return quoted Greeks, or None when the option has expired."""
    if T <= 0:
        return None
    return Greeks.from_annual(
        delta=bs_delta(S, K, T, sigma, r, q, option_type),
        gamma=bs_gamma(S, K, T, sigma, r, q),
        theta=bs_theta(S, K, T, sigma, r, q, option_type),
        vega=bs_vega(S, K, T, sigma, r, q),
        rho=bs_rho(S, K, T, sigma, r, q, option_type),
    )


def bs_price_and_greeks(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> PricingResult:
    """Return Black-Scholes price and quoted Greeks for one option."""
    price = bs_price(S, K, T, sigma, r, q, option_type)
    greeks = bs_greeks(S, K, T, sigma, r, q, option_type)
    if greeks is None:
        logger.debug("T=%s <= 0: returning intrinsic value without Greeks", T)
    return PricingResult(price=price, greeks=greeks)
