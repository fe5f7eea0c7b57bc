"""Pydantic models for the optrisk web API."""

from __future__ import annotations

import math
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..models import DEFAULT_RISK_FREE_RATE, OptionLeg, OptionType, Side, Strategy


class _CamelModel(BaseModel):
    """Base model exchanging camelCase JSON with snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _finite_number(value: Any) -> float | None:
    """Return ``value`` as a float when it is a real, finite JSON number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


class LegRequest(_CamelModel):
    """Single leg as sent by the strategy builder.

    Fields are accepted loosely and checked in :meth:`to_leg`, so a missing or
    non-numeric value produces the same message as an out of range one.
    Greeks from the option chain are accepted but not used; the engine
    computes its own from ``iv``.
    """

    strike: Any = None
    type: Any = None
    action: Any = None
    quantity: Any = None
    premium: Any = None
    iv: float | None = None
    delta: float | None = None
    gamma: float | None = None
    theta: float | None = None
    vega: float | None = None

    def to_leg(self) -> OptionLeg:
        strike = _finite_number(self.strike)
        if strike is None or strike <= 0:
            raise ValueError("Each leg must have a valid strike price")
        if self.type not in {"call", "put"}:
            raise ValueError("Each leg type must be 'call' or 'put'")
        if self.action not in {"buy", "sell"}:
            raise ValueError("Each leg action must be 'buy' or 'sell'")
        quantity = _finite_number(self.quantity)
        if quantity is None or quantity <= 0 or not quantity.is_integer():
            raise ValueError("Each leg must have a positive quantity")
        premium = _finite_number(self.premium)
        if premium is None or premium < 0:
            raise ValueError("Each leg must have a valid premium")
        return OptionLeg(
            strike=strike,
            option_type=OptionType(self.type),
            side=Side.parse(self.action),
            quantity=int(quantity),
            entry_premium=premium,
            implied_vol=_finite_number(self.iv),
        )


class StrategyAnalysisRequest(_CamelModel):
    """Analysis request payload."""

    legs: Any = None
    underlying_price: Any = None
    btc_price: float | None = None
    risk_free_rate: float | None = None
    days_to_expiry: Any = None
    target_prices: list[float] = []

    @property
    def usable_btc_price(self) -> float | None:
        """Return ``btc_price`` when it is positive, ``None`` otherwise."""
        btc_price = _finite_number(self.btc_price)
        return btc_price if btc_price and btc_price > 0 else None

    def to_strategy(self, default_rate: float = DEFAULT_RISK_FREE_RATE) -> Strategy:
        """Validate the payload and return the matching :class:`Strategy`.

        Raises ``ValueError`` describing the first invalid field.
        """
        if not isinstance(self.legs, list) or not self.legs:
            raise ValueError("At least one leg is required")
        spot = _finite_number(self.underlying_price)
        if spot is None or spot <= 0:
            raise ValueError("Valid underlyingPrice is required")
        days = _finite_number(self.days_to_expiry)
        if days is None or days < 0 or not days.is_integer():
            raise ValueError("Valid daysToExpiry is required")

        legs = []
        for item in self.legs:
            if isinstance(item, LegRequest):
                leg = item
            elif isinstance(item, dict):
                leg = LegRequest.model_validate(item)
            else:
                raise ValueError("Each leg must have a valid strike price")
            legs.append(leg.to_leg())
        rate = default_rate if self.risk_free_rate is None else self.risk_free_rate
        return Strategy(
            legs=tuple(legs),
            spot=spot,
            days_to_expiry=int(days),
            risk_free_rate=rate,
        )


class PnLCurveRequest(StrategyAnalysisRequest):
    num_points: int | None = None


class BreakevenResponse(_CamelModel):
    price: float
    btc_price: float | None = None


class TargetPnLResponse(_CamelModel):
    price: float
    btc_price: float | None = None
    pnl: float
    pnl_percent: float
    pnl_btc: float | None = None


class StrategyAnalysisResponse(_CamelModel):
    """Risk metrics for an analyzed strategy."""

    total_cost: float
    total_cost_btc: float | None = None
    max_profit: Union[float, Literal["unbounded"]]
    max_profit_price: float | None = None
    max_loss: Union[float, Literal["unbounded"]]
    max_loss_price: float | None = None
    breakevens: list[BreakevenResponse] = []
    current_pnl: float
    current_pnl_percent: float
    current_pnl_btc: float | None = None
    target_pnls: list[TargetPnLResponse] = []
    days_to_expiry: int
    total_delta: float
    total_gamma: float
    total_theta: float
    total_vega: float


class PnLCurvePointResponse(_CamelModel):
    price: float
    expiry_pnl: float
    current_pnl: float


class PnLCurveResponse(_CamelModel):
    points: list[PnLCurvePointResponse] = []


class HealthResponse(BaseModel):
    status: str
    version: str
