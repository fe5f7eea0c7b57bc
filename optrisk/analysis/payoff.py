"""Per-leg and strategy level P&L helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from ..bs_calculator import days_to_years, intrinsic_value, price_option
from ..logutils import logger
from ..models import CONTRACT_MULTIPLIER, DEFAULT_RISK_FREE_RATE, OptionLeg


class ValuationMethod(str, Enum):
    """How a leg was valued for the current P&L."""

    THEORETICAL = "theoretical"
    INTRINSIC = "intrinsic"


@dataclass(frozen=True)
class LegValuation:
    leg: OptionLeg
    value: float  # per share
    pnl: float
    method: ValuationMethod


def _leg_pnl(leg: OptionLeg, value: float) -> float:
    """Return dollar P&L for ``leg`` when the option is worth ``value`` per share."""
    per_share = value - leg.entry_premium if leg.side.sign > 0 else leg.entry_premium - value
    return per_share * leg.quantity * CONTRACT_MULTIPLIER


def leg_pnl_at_expiry(leg: OptionLeg, price: float) -> float:
    """Return P&L of ``leg`` at expiration with the underlying at ``price``."""
    return _leg_pnl(leg, intrinsic_value(price, leg.strike, leg.option_type))


def value_leg(
    leg: OptionLeg,
    spot: float,
    days_to_expiry: float,
    rate: float = DEFAULT_RISK_FREE_RATE,
) -> LegValuation:
    """Value ``leg`` with remaining time value when possible.

    Legs without a usable implied volatility, or whose inputs the pricer
    rejects, fall back to the expiration payoff at ``spot``.
    """
    if leg.has_usable_vol:
        theoretical = price_option(
            spot,
            leg.strike,
            days_to_years(days_to_expiry),
            rate,
            float(leg.implied_vol),
            leg.option_type,
        )
        if theoretical is not None:
            return LegValuation(
                leg, theoretical, _leg_pnl(leg, theoretical), ValuationMethod.THEORETICAL
            )
        logger.debug(
            f"pricing failed for {leg.side.value} {leg.option_type.value} {leg.strike}; "
            "using intrinsic value"
        )
    else:
        logger.debug(
            f"no usable IV for {leg.side.value} {leg.option_type.value} {leg.strike}; "
            "using intrinsic value"
        )
    intrinsic = intrinsic_value(spot, leg.strike, leg.option_type)
    return LegValuation(leg, intrinsic, _leg_pnl(leg, intrinsic), ValuationMethod.INTRINSIC)


def leg_pnl_with_time_value(
    leg: OptionLeg,
    spot: float,
    days_to_expiry: float,
    rate: float = DEFAULT_RISK_FREE_RATE,
) -> float:
    return value_leg(leg, spot, days_to_expiry, rate).pnl


def strategy_pnl_at_expiry(legs: Iterable[OptionLeg], price: float) -> float:
    """Return the total expiration P&L of ``legs`` at ``price``."""
    return sum((leg_pnl_at_expiry(leg, price) for leg in legs), 0.0)


def strategy_pnl_with_time_value(
    legs: Iterable[OptionLeg],
    spot: float,
    days_to_expiry: float,
    rate: float = DEFAULT_RISK_FREE_RATE,
) -> float:
    """Return the total P&L of ``legs`` valued with remaining time value."""
    return sum(
        (leg_pnl_with_time_value(leg, spot, days_to_expiry, rate) for leg in legs), 0.0
    )


def total_cost(legs: Iterable[OptionLeg]) -> float:
    """Return net premium in dollars: positive for a debit, negative for a credit."""
    return sum(
        (leg.side.sign * leg.entry_premium * leg.quantity * CONTRACT_MULTIPLIER for leg in legs),
        0.0,
    )


def pnl_percent(pnl: float, cost: float) -> float:
    """Return ``pnl`` as a percentage of ``|cost|`` or ``0.0`` for a zero cost."""
    if cost == 0:
        return 0.0
    return pnl / abs(cost) * 100.0


__all__ = [
    "ValuationMethod",
    "LegValuation",
    "leg_pnl_at_expiry",
    "value_leg",
    "leg_pnl_with_time_value",
    "strategy_pnl_at_expiry",
    "strategy_pnl_with_time_value",
    "total_cost",
    "pnl_percent",
]
