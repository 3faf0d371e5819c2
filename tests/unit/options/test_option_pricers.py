import pytest

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
    binomial_convergence_table,
    bs_greeks,
    bs_price,
)


def test_black_scholes_pricer_matches_functional_api():
    spec = OptionSpec(
        strike=100.0,
        time_to_expiry=30 / 365.0,
        option_type=OptionType.CALL,
    )
    state = MarketState(spot=101.0, volatility=0.22, rate=0.03, dividend_yield=0.015)

    out = BlackScholesPricer().price_and_greeks(spec, state)
    ref = bs_greeks(
        S=state.spot,
        K=spec.strike,
        T=spec.time_to_expiry,
        sigma=state.volatility,
        r=state.rate,
        q=state.dividend_yield,
        option_type=spec.option_type,
    )

    assert out.price == pytest.approx(
        bs_price(101.0, 100.0, 30 / 365.0, 0.22, 0.03, 0.015, "call")
    )
    assert out.greeks == ref


def test_protocol_split_price_model_vs_greeks_model():
    class PriceOnlyPricer:
        def price(self, spec: OptionSpec, state: MarketState) -> float:
            return 0.0

    bs = BlackScholesPricer()
    price_only = PriceOnlyPricer()

    assert isinstance(bs, PriceModel)
    assert isinstance(bs, GreeksModel)
    assert isinstance(price_only, PriceModel)
    assert not isinstance(price_only, GreeksModel)
    assert not isinstance(bs, LatticeModel)


def test_binomial_pricer_reads_exercise_style_from_spec():
    state = MarketState(spot=90.0, volatility=0.3, rate=0.06)
    european = OptionSpec(100.0, 1.0, OptionType.PUT)
    american = OptionSpec(100.0, 1.0, OptionType.PUT, ExerciseStyle.AMERICAN)
    pricer = BinomialTreePricer(steps=200)

    assert american.american and not european.american
    assert pricer.price(american, state) > pricer.price(european, state)

    diag = pricer.price_with_diagnostics(american, state)
    assert diag.price == pytest.approx(pricer.price(american, state))
    assert diag.params is not None and diag.params.steps == 200


def test_convergence_table_reports_shrinking_error():
    spec = OptionSpec(strike=100.0, time_to_expiry=1.0, option_type=OptionType.CALL)
    state = MarketState(spot=100.0, volatility=0.3, rate=0.05)

    table = binomial_convergence_table(spec, state, steps=(10, 50, 100, 500))

    assert list(table.index) == [10, 50, 100, 500]
    assert list(table.columns) == ["binomial_price", "black_scholes_price", "abs_diff"]
    assert table["black_scholes_price"].nunique() == 1
    assert table.loc[500, "abs_diff"] < 1e-2
    assert table.loc[500, "abs_diff"] < table.loc[10, "abs_diff"]
