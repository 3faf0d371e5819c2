import numpy as np
import pytest

from forge_validators.options import (
    Greeks,
    OptionType,
    bs_d1_d2,
    bs_delta,
    bs_greeks,
    bs_price,
    bs_price_and_greeks,
    bs_rho,
    bs_vega,
)

S, K, R, SIGMA, T = 100.0, 100.0, 0.05, 0.3, 1.0


def test_reference_call_and_put_values():
    call = bs_price(S, K, T, SIGMA, R, 0.0, OptionType.CALL)
    put = bs_price(S, K, T, SIGMA, R, 0.0, OptionType.PUT)

    assert call == pytest.approx(14.2313, abs=1e-3)
    assert put == pytest.approx(9.3542, abs=1e-3)


@pytest.mark.parametrize("q", [0.0, 0.02])
def test_put_call_parity(q: float):
    call = bs_price(S, 95.0, T, SIGMA, R, q, "call")
    put = bs_price(S, 95.0, T, SIGMA, R, q, "put")

    assert call - put == pytest.approx(S * np.exp(-q * T) - 95.0 * np.exp(-R * T))


def test_expired_option_returns_intrinsic_and_no_greeks():
    assert bs_price(110.0, 100.0, 0.0, SIGMA, R, option_type="call") == 10.0
    assert bs_price(90.0, 100.0, 0.0, SIGMA, R, option_type="put") == 10.0
    assert bs_price(90.0, 100.0, -0.5, SIGMA, R, option_type="call") == 0.0

    out = bs_price_and_greeks(110.0, 100.0, 0.0, SIGMA, R, option_type="call")
    assert out.price == 10.0
    assert out.greeks is None
    assert bs_greeks(110.0, 100.0, 0.0, SIGMA, R) is None


@pytest.mark.parametrize("sigma", [0.0, -0.1])
def test_non_positive_volatility_raises(sigma: float):
    with pytest.raises(ValueError, match="sigma must be positive"):
        bs_price(S, K, T, sigma, R)


@pytest.mark.parametrize(("spot", "strike"), [(0.0, 100.0), (100.0, 0.0), (-1.0, 100.0)])
def test_non_positive_prices_raise(spot: float, strike: float):
    with pytest.raises(ValueError, match="positive finite"):
        bs_price(spot, strike, T, SIGMA, R)


def test_d2_is_d1_minus_vol_sqrt_t():
    d1, d2 = bs_d1_d2(S, K, T, SIGMA, R)
    assert d1 == pytest.approx((R + 0.5 * SIGMA**2) / SIGMA)
    assert d1 - d2 == pytest.approx(SIGMA)


def test_greeks_are_quoted_per_day_and_per_point():
    greeks = bs_greeks(S, K, T, SIGMA, R, 0.01, "call")

    assert isinstance(greeks, Greeks)
    assert greeks.delta == pytest.approx(bs_delta(S, K, T, SIGMA, R, 0.01, "call"))
    assert greeks.vega == pytest.approx(bs_vega(S, K, T, SIGMA, R, 0.01) / 100)
    assert greeks.rho == pytest.approx(bs_rho(S, K, T, SIGMA, R, 0.01, "call") / 100)


@pytest.mark.parametrize("option_type", [OptionType.CALL, OptionType.PUT])
def test_greeks_match_finite_differences(option_type: OptionType):
    q = 0.01
    greeks = bs_greeks(S, K, T, SIGMA, R, q, option_type)

    def px(s=S, t=T, sigma=SIGMA, r=R):
        return bs_price(s, K, t, sigma, r, q, option_type)

    h = 1e-3
    delta_fd = (px(s=S + h) - px(s=S - h)) / (2 * h)
    gamma_fd = (px(s=S + h) - 2 * px() + px(s=S - h)) / h**2
    vega_fd = (px(sigma=SIGMA + 1e-4) - px(sigma=SIGMA - 1e-4)) / (2e-4) / 100
    rho_fd = (px(r=R + 1e-5) - px(r=R - 1e-5)) / (2e-5) / 100
    theta_fd = (px(t=T - 1 / 365) - px())

    assert greeks.delta == pytest.approx(delta_fd, rel=1e-5)
    assert greeks.gamma == pytest.approx(gamma_fd, rel=1e-3)
    assert greeks.vega == pytest.approx(vega_fd, rel=1e-5)
    assert greeks.rho == pytest.approx(rho_fd, rel=1e-5)
    assert greeks.theta == pytest.approx(theta_fd, rel=1e-2)


def test_put_delta_is_call_delta_minus_dividend_discount():
    q = 0.03
    call = bs_delta(S, K, T, SIGMA, R, q, "call")
    put = bs_delta(S, K, T, SIGMA, R, q, "put")

    assert call - put == pytest.approx(np.exp(-q * T))
    assert -1.0 < put < 0.0 < call < 1.0


@pytest.mark.parametrize("label", ["C", "P", "call", "put", "Call"])
def test_option_type_labels_are_normalized(label: str):
    assert bs_price(S, K, T, SIGMA, R, option_type=label) > 0


def test_unknown_option_type_raises():
    with pytest.raises(ValueError, match="option_type"):
        bs_price(S, K, T, SIGMA, R, option_type="straddle")
