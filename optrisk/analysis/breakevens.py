"""Locate underlying prices where the expiration P&L crosses zero."""

from __future__ import annotations

from typing import Callable, Sequence

from ..models import OptionLeg
from .payoff import strategy_pnl_at_expiry

SCAN_STEPS = 1000
BISECTION_TOLERANCE = 0.01
BISECTION_MAX_ITERATIONS = 100
MIN_PRICE = 0.01


def scan_window(legs: Sequence[OptionLeg]) -> tuple[float, float]:
    """Return the ``(low, high)`` price window scanned for breakevens."""
    strikes = [leg.strike for leg in legs]
    return max(MIN_PRICE, min(strikes) * 0.5), max(strikes) * 2.0


def bisect_root(
    pnl: Callable[[float], float],
    low: float,
    high: float,
    tolerance: float = BISECTION_TOLERANCE,
    max_iterations: int = BISECTION_MAX_ITERATIONS,
) -> float:
    """Return a price in ``[low, high]`` where ``|pnl|`` is below ``tolerance``.

    ``pnl(low)`` and ``pnl(high)`` must have opposite signs. After
    ``max_iterations`` the midpoint of the remaining bracket is returned.
    """
    low_pnl = pnl(low)
    for _ in range(max_iterations):
        mid = 0.5 * (low + high)
        mid_pnl = pnl(mid)
        if abs(mid_pnl) < tolerance:
            return mid
        if (low_pnl < 0) == (mid_pnl < 0):
            low, low_pnl = mid, mid_pnl
        else:
            high = mid
    return 0.5 * (low + high)


def find_breakevens(
    legs: Sequence[OptionLeg],
    *,
    steps: int = SCAN_STEPS,
    tolerance: float = BISECTION_TOLERANCE,
) -> list[float]:
    """Return the sorted, distinct breakeven prices of ``legs`` at expiration."""
    legs = list(legs)
    if not legs:
        return []

    def pnl(price: float) -> float:
        return strategy_pnl_at_expiry(legs, price)

    low, high = scan_window(legs)
    step = (high - low) / steps
    roots: list[float] = []

    prev_price = low
    prev_pnl = pnl(low)
    for i in range(1, steps + 1):
        price = low + i * step
        cur_pnl = pnl(price)
        # a flat zero stretch only yields its edges
        if cur_pnl == 0 and prev_pnl != 0:
            roots.append(price)
        elif prev_pnl == 0 and cur_pnl != 0:
            roots.append(prev_price)
        elif (prev_pnl < 0) != (cur_pnl < 0):
            roots.append(bisect_root(pnl, prev_price, price, tolerance))
        prev_price, prev_pnl = price, cur_pnl

    distinct: list[float] = []
    for root in sorted(roots):
        if not distinct or root - distinct[-1] > 1e-9:
            distinct.append(root)
    return distinct


__all__ = ["find_breakevens", "bisect_root", "scan_window", "SCAN_STEPS"]
