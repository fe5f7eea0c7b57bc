"""Full risk analysis of a multi-leg option strategy."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..helpers.btc_conversion import strike_to_equivalent_btc_price, usd_to_btc
from ..helpers.numeric import round_money, round_to
from ..logutils import log_result, logger
from ..models import (
    BreakevenPoint,
    OptionLeg,
    PnLCurvePoint,
    PnLPoint,
    PortfolioGreeks,
    Strategy,
    StrategyAnalysis,
)
from .breakevens import find_breakevens
from .greeks import compute_portfolio_greeks
from .payoff import (
    ValuationMethod,
    pnl_percent,
    strategy_pnl_at_expiry,
    strategy_pnl_with_time_value,
    total_cost,
    value_leg,
)
from .risk import find_max_profit_loss

DEFAULT_PRICE_POINTS = 50
MIN_PRICE = 0.01
BTC_DIGITS = 8


def generate_price_range(
    spot: float, legs: Sequence[OptionLeg], num_points: int = DEFAULT_PRICE_POINTS
) -> list[float]:
    """Return ``num_points`` evenly spaced prices around strikes and spot.

    The range runs from half the lowest of strikes and spot up to one and a
    half times the highest.
    """
    if num_points < 1:
        return []
    levels = [leg.strike for leg in legs] + [spot]
    low = max(MIN_PRICE, min(levels) * 0.5)
    high = max(levels) * 1.5
    if num_points == 1:
        return [low]
    step = (high - low) / (num_points - 1)
    return [low + step * i for i in range(num_points)]


def pnl_curve(
    strategy: Strategy, num_points: int = DEFAULT_PRICE_POINTS
) -> list[PnLCurvePoint]:
    """Return expiry and current P&L for each price of the chart range."""
    points: list[PnLCurvePoint] = []
    for price in generate_price_range(strategy.spot, strategy.legs, num_points):
        current = strategy_pnl_with_time_value(
            strategy.legs, price, strategy.days_to_expiry, strategy.risk_free_rate
        )
        points.append(
            PnLCurvePoint(
                price=round_money(price),
                expiry_pnl=round_money(strategy_pnl_at_expiry(strategy.legs, price)),
                current_pnl=round_money(current),
            )
        )
    return points


def _btc(value: float, btc_price: float | None) -> float | None:
    if not btc_price:
        return None
    return round_to(usd_to_btc(value, btc_price), BTC_DIGITS)


def _btc_level(price: float, spot: float, btc_price: float | None) -> float | None:
    if not btc_price:
        return None
    return round_money(strike_to_equivalent_btc_price(price, spot, btc_price))


@log_result
def analyze_strategy(
    strategy: Strategy,
    *,
    btc_price: float | None = None,
    target_prices: Iterable[float] = (),
    second_order_greeks: bool = True,
) -> StrategyAnalysis:
    """Return cost, payoff extremes, breakevens, P&L and Greeks for ``strategy``.

    Money amounts are rounded to cents. A positive ``btc_price`` only adds
    bitcoin denominated copies of the figures; otherwise they are ``None``.
    """
    if btc_price is not None and not btc_price > 0:
        btc_price = None
    legs = list(strategy.legs)
    spot = strategy.spot
    cost = total_cost(legs)

    breakevens = [
        BreakevenPoint(price=round_money(b), btc_price=_btc_level(b, spot, btc_price))
        for b in find_breakevens(legs)
    ]
    extremes = find_max_profit_loss(legs)

    valuations = [
        value_leg(leg, spot, strategy.days_to_expiry, strategy.risk_free_rate)
        for leg in legs
    ]
    fallbacks = sum(1 for v in valuations if v.method is ValuationMethod.INTRINSIC)
    if fallbacks and strategy.days_to_expiry > 0:
        logger.info(f"{fallbacks}/{len(legs)} legs valued at intrinsic value")
    current = sum((v.pnl for v in valuations), 0.0)

    targets = []
    for price in target_prices:
        pnl = strategy_pnl_at_expiry(legs, price)
        targets.append(
            PnLPoint(
                price=price,
                pnl=round_money(pnl),
                pnl_percent=round_money(pnl_percent(pnl, cost)),
                btc_price=_btc_level(price, spot, btc_price),
                pnl_btc=_btc(pnl, btc_price),
            )
        )

    greeks = compute_portfolio_greeks(
        legs,
        spot,
        strategy.days_to_expiry,
        strategy.risk_free_rate,
        second_order=second_order_greeks,
    )

    return StrategyAnalysis(
        total_cost=round_money(cost),
        total_cost_btc=_btc(cost, btc_price),
        max_profit=round_money(extremes.max_profit),
        max_profit_price=round_money(extremes.max_profit_price),
        max_loss=round_money(extremes.max_loss),
        max_loss_price=round_money(extremes.max_loss_price),
        breakevens=breakevens,
        current_pnl=round_money(current),
        current_pnl_percent=round_money(pnl_percent(current, cost)),
        current_pnl_btc=_btc(current, btc_price),
        target_pnls=targets,
        days_to_expiry=strategy.days_to_expiry,
        greeks=PortfolioGreeks(
            delta=round_to(greeks.delta, 3),
            gamma=round_to(greeks.gamma, 4),
            theta=round_money(greeks.theta),
            vega=round_money(greeks.vega),
        ),
        leg_valuations=valuations,
    )


__all__ = ["analyze_strategy", "generate_price_range", "pnl_curve"]
