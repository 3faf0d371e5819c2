"""Real-options valuations expressed as Black-Scholes calls and puts.

Project value `V` plays the role of the underlying and the investment (or
salvage) amount plays the role of the strike.
"""

from __future__ import annotations

from dataclasses import dataclass

from forge_validators.options.models.black_scholes import bs_price
from forge_validators.options.types import OptionType


@dataclass(frozen=True)
class DelayOption:
    option_value: float
    npv_if_invest_now: float
    value_of_waiting: float

    @property
    def should_wait(self) -> bool:
        return self.option_value > max(self.npv_if_invest_now, 0.0)


@dataclass(frozen=True)
class ExpansionOption:
    option_value: float
    additional_capacity_value: float
    expansion_cost: float


@dataclass(frozen=True)
class AbandonmentOption:
    option_value: float
    salvage_value: float
    current_project_value: float


def option_to_delay(
    V: float,
    I: float,
    r: float,
    sigma: float,
    T: float,
    q: float = 0.0,
) -> DelayOption:
    """Value the right to postpone an investment `I` in a project worth `V`."""
    value = bs_price(V, I, T, sigma, r, q, OptionType.CALL)
    npv_now = V - I
    return DelayOption(
        option_value=value,
        npv_if_invest_now=npv_now,
        value_of_waiting=value - max(npv_now, 0.0),
    )


def option_to_expand(
    V: float,
    expansion_cost: float,
    expansion_factor: float,
    r: float,
    sigma: float,
    T: float,
    q: float = 0.0,
) -> ExpansionOption:
    """Call on the extra value `V * (expansion_factor - 1)` struck at the cost."""
    if expansion_factor <= 1.0:
        raise ValueError("expansion_factor must be > 1")
    additional_value = V * (expansion_factor - 1.0)
    value = bs_price(additional_value, expansion_cost, T, sigma, r, q, OptionType.CALL)
    return ExpansionOption(
        option_value=value,
        additional_capacity_value=additional_value,
        expansion_cost=expansion_cost,
    )


def option_to_abandon(
    V: float,
    salvage_value: float,
    r: float,
    sigma: float,
    T: float,
    q: float = 0.0,
) -> AbandonmentOption:
    """Put on the project struck at its salvage value."""
    value = bs_price(V, salvage_value, T, sigma, r, q, OptionType.PUT)
    return AbandonmentOption(
        option_value=value,
        salvage_value=salvage_value,
        current_project_value=V,
    )
