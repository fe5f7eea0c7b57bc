"""Utility functions for option Greeks aggregation."""

from __future__ import annotations

from typing import Iterable

from ..bs_calculator import calculate_greeks, days_to_years
from ..models import CONTRACT_MULTIPLIER, DEFAULT_RISK_FREE_RATE, OptionLeg, PortfolioGreeks


def leg_greeks(
    leg: OptionLeg,
    spot: float,
    days_to_expiry: float,
    rate: float = DEFAULT_RISK_FREE_RATE,
) -> PortfolioGreeks:
    """Return Greeks for ``leg`` scaled by side, quantity and multiplier.

    Legs without a usable implied volatility are treated as expired: they
    carry the 0/+1/-1 expiry delta and no gamma, theta or vega.
    """
    time = days_to_years(days_to_expiry)
    if not leg.has_usable_vol:
        time = 0.0
    greeks = calculate_greeks(
        spot, leg.strike, time, rate, float(leg.implied_vol or 0.0), leg.option_type
    )
    if greeks is None:
        return PortfolioGreeks()
    scale = leg.signed_quantity * CONTRACT_MULTIPLIER
    return PortfolioGreeks(
        delta=greeks.delta * scale,
        gamma=greeks.gamma * scale,
        theta=greeks.theta * scale,
        vega=greeks.vega * scale,
    )


def compute_portfolio_greeks(
    legs: Iterable[OptionLeg],
    spot: float,
    days_to_expiry: float,
    rate: float = DEFAULT_RISK_FREE_RATE,
    *,
    second_order: bool = True,
) -> PortfolioGreeks:
    """Return strategy-level Greeks by summing legs.

    All Greeks are scaled by quantity and contract multiplier, so delta is in
    share equivalents and theta/vega in dollars. With ``second_order`` disabled
    gamma, theta and vega are reported as zero, matching consumers that only
    expect an aggregated delta.
    """
    delta = gamma = theta = vega = 0.0
    for leg in legs:
        g = leg_greeks(leg, spot, days_to_expiry, rate)
        delta += g.delta
        gamma += g.gamma
        theta += g.theta
        vega += g.vega
    if not second_order:
        return PortfolioGreeks(delta=delta)
    return PortfolioGreeks(delta=delta, gamma=gamma, theta=theta, vega=vega)


__all__ = ["leg_greeks", "compute_portfolio_greeks"]
