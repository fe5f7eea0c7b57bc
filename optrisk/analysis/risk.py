"""Max profit and max loss classification for multi-leg strategies."""

from __future__ import annotations

from typing import Sequence

from ..models import UNBOUNDED, MaxProfitLoss, OptionLeg
from .payoff import strategy_pnl_at_expiry

NEAR_ZERO_PRICE = 0.01
STRIKE_OFFSET = 0.01
FAR_PRICE_MULTIPLE = 100.0


def net_call_quantity(legs: Sequence[OptionLeg]) -> int:
    """Return long call contracts minus short call contracts."""
    return sum(leg.signed_quantity for leg in legs if leg.is_call)


def sample_prices(legs: Sequence[OptionLeg]) -> list[float]:
    """Return the sorted underlying prices sampled for the payoff extremes."""
    strikes = sorted({leg.strike for leg in legs})
    prices = {NEAR_ZERO_PRICE, strikes[-1] * FAR_PRICE_MULTIPLE}
    for strike in strikes:
        prices.update(
            (strike * (1 - STRIKE_OFFSET), strike, strike * (1 + STRIKE_OFFSET))
        )
    return sorted(prices)


def find_max_profit_loss(legs: Sequence[OptionLeg]) -> MaxProfitLoss:
    """Return max profit and max loss of ``legs`` at expiration.

    The payoff of a call position keeps growing with the underlying, so a net
    long call quantity makes the profit unbounded and a net short call
    quantity makes the loss unbounded. Puts are bounded by a zero underlying.
    """
    legs = list(legs)
    if not legs:
        return MaxProfitLoss(0.0, None, 0.0, None)

    best_pnl = float("-inf")
    best_price: float | None = None
    worst_pnl = float("inf")
    worst_price: float | None = None
    for price in sample_prices(legs):
        pnl = strategy_pnl_at_expiry(legs, price)
        if pnl > best_pnl:
            best_pnl, best_price = pnl, price
        if pnl < worst_pnl:
            worst_pnl, worst_price = pnl, price

    net_calls = net_call_quantity(legs)
    if net_calls > 0:
        return MaxProfitLoss(UNBOUNDED, None, worst_pnl, worst_price)
    if net_calls < 0:
        return MaxProfitLoss(best_pnl, best_price, UNBOUNDED, None)
    return MaxProfitLoss(best_pnl, best_price, worst_pnl, worst_price)


__all__ = ["find_max_profit_loss", "net_call_quantity", "sample_prices"]
