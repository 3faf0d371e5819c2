"""Shared option-pricing dataclasses and aliases."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeAlias

# Calendar-day and percentage-point conventions used when quoting Greeks.
DAYS_PER_YEAR = 365.0
PERCENT_POINT = 100.0


class OptionType(StrEnum):
    """Canonical option side labels used across pricing code."""

    CALL = "call"
    PUT = "put"


class ExerciseStyle(StrEnum):
    EUROPEAN = "european"
    AMERICAN = "american"


# Tolerant input type accepted at system boundaries (requests/tests).
OptionTypeInput: TypeAlias = OptionType | Literal["call", "put", "C", "P"]


class LatticeError(ValueError):
    """Raised when CRR parameters do not define a valid risk-neutral measure."""


@dataclass(frozen=True)
class OptionSpec:
    """Contract terms required for pricing one vanilla option."""

    strike: float
    time_to_expiry: float
    option_type: OptionTypeInput = OptionType.CALL
    exercise_style: ExerciseStyle = ExerciseStyle.EUROPEAN

    @property
    def american(self) -> bool:
        return self.exercise_style == ExerciseStyle.AMERICAN


@dataclass(frozen=True)
class MarketState:
    """Market inputs used by pricing engines."""

    spot: float
    volatility: float
    rate: float = 0.0
    dividend_yield: float = 0.0


@dataclass(frozen=True, slots=True)
class Greeks:
    """Analytic sensitivities in quoting units.

    Units:
    - `delta`, `gamma`: per 1.0 move in spot
    - `theta`: per calendar day (annual theta / 365)
    - `vega`: per 1 volatility point (0.01)
    - `rho`: per 1 rate point (0.01)
    """

    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float

    @classmethod
    def from_annual(
        cls,
        *,
        delta: float,
        gamma: float,
        theta: float,
        vega: float,
        rho: float,
    ) -> Greeks:
        """Convert per-unit (per year, per 1.0 vol/rate) sensitivities."""
        return cls(
            delta=delta,
            gamma=gamma,
            theta=theta / DAYS_PER_YEAR,
            vega=vega / PERCENT_POINT,
            rho=rho / PERCENT_POINT,
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "delta": self.delta,
            "gamma": self.gamma,
            "theta": self.theta,
            "vega": self.vega,
            "rho": self.rho,
        }


@dataclass(frozen=True, slots=True)
class PricingResult:
    """Option value plus Greeks; `greeks is None` means not applicable."""

    price: float
    greeks: Greeks | None = None


@dataclass(frozen=True, slots=True)
class LatticeParameters:
    """Per-step CRR quantities, reported for diagnostics."""

    steps: int
    dt: float
    u: float
    d: float
    p: float
    discount: float


@dataclass(frozen=True, slots=True)
class LatticeResult:
    """Lattice price; `params` is None when the option was already expired."""

    price: float
    params: LatticeParameters | None
