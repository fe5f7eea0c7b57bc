"""Strategy payoff, breakeven, risk and Greek aggregation."""

from .breakevens import find_breakevens
from .greeks import compute_portfolio_greeks
from .payoff import (
    ValuationMethod,
    strategy_pnl_at_expiry,
    strategy_pnl_with_time_value,
    total_cost,
)
from .risk import find_max_profit_loss
from .strategy import analyze_strategy, generate_price_range, pnl_curve

__all__ = [
    "ValuationMethod",
    "analyze_strategy",
    "compute_portfolio_greeks",
    "find_breakevens",
    "find_max_profit_loss",
    "generate_price_range",
    "pnl_curve",
    "strategy_pnl_at_expiry",
    "strategy_pnl_with_time_value",
    "total_cost",
]
