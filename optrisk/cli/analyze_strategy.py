"""Analyze a strategy described in a JSON file.

The file uses the same camelCase payload as ``POST /api/options/analyze``.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List

from pydantic import ValidationError
from tabulate import tabulate

from ..analysis.strategy import analyze_strategy
from ..config import get as cfg_get
from ..helpers.btc_conversion import format_btc
from ..logutils import logger
from ..models import StrategyAnalysis
from ..web.models import StrategyAnalysisRequest


def _fmt(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, str):
        return value
    return f"{value:,.2f}"


def _btc(value: float | None) -> str:
    return "-" if value is None else format_btc(value)


def print_analysis(analysis: StrategyAnalysis) -> None:
    """Print leg valuations, the risk summary and target P&Ls as tables."""
    leg_rows = [
        [
            v.leg.side.action,
            v.leg.quantity,
            v.leg.option_type.value,
            v.leg.strike,
            v.leg.entry_premium,
            _fmt(v.value),
            _fmt(v.pnl),
            v.method.value,
        ]
        for v in analysis.leg_valuations
    ]
    print(
        tabulate(
            leg_rows,
            headers=["Action", "Qty", "Type", "Strike", "Premium", "Value", "P&L", "Method"],
            tablefmt="github",
        )
    )
    print()
    summary = [
        ["Total cost", _fmt(analysis.total_cost)],
        ["Max profit", _fmt(analysis.max_profit)],
        ["Max profit at", _fmt(analysis.max_profit_price)],
        ["Max loss", _fmt(analysis.max_loss)],
        ["Max loss at", _fmt(analysis.max_loss_price)],
        ["Breakevens", ", ".join(_fmt(b.price) for b in analysis.breakevens) or "-"],
        ["Current P&L", _fmt(analysis.current_pnl)],
        ["Current P&L %", _fmt(analysis.current_pnl_percent)],
        ["Days to expiry", analysis.days_to_expiry],
        ["Delta", analysis.greeks.delta],
        ["Gamma", analysis.greeks.gamma],
        ["Theta", analysis.greeks.theta],
        ["Vega", analysis.greeks.vega],
    ]
    if analysis.total_cost_btc is not None:
        summary += [
            ["Total cost (BTC)", _btc(analysis.total_cost_btc)],
            ["Current P&L (BTC)", _btc(analysis.current_pnl_btc)],
            [
                "Breakevens (BTC price)",
                ", ".join(_fmt(b.btc_price) for b in analysis.breakevens) or "-",
            ],
        ]
    print(tabulate(summary, tablefmt="github", disable_numparse=True))
    if analysis.target_pnls:
        print()
        rows = [[_fmt(p.price), _fmt(p.pnl), _fmt(p.pnl_percent)] for p in analysis.target_pnls]
        print(
            tabulate(
                rows,
                headers=["Target", "P&L", "P&L %"],
                tablefmt="github",
                disable_numparse=True,
            )
        )


def main(argv: List[str] | None = None) -> int:
    """Print the analysis of the strategy in ``argv[0]``.

    ``--json`` prints the API response payload instead of tables.
    """
    argv = list(argv or [])
    as_json = "--json" in argv
    args = [a for a in argv if a != "--json"]
    if not args:
        print("Usage: analyze PATH [--json]")
        return 1

    path = Path(args[0])
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        print(f"❌ File not found: {path}")
        return 1
    except json.JSONDecodeError as exc:
        print(f"❌ Invalid JSON: {exc}")
        return 1

    try:
        request = StrategyAnalysisRequest.model_validate(payload)
        strategy = request.to_strategy(float(cfg_get("RISK_FREE_RATE", 0.05)))
    except (ValidationError, ValueError) as exc:
        print(f"❌ {exc}")
        return 1

    logger.debug(f"Analyzing {len(strategy.legs)} legs from {path}")
    analysis = analyze_strategy(
        strategy,
        btc_price=request.usable_btc_price,
        target_prices=request.target_prices,
        second_order_greeks=bool(cfg_get("AGGREGATE_SECOND_ORDER_GREEKS", True)),
    )
    if as_json:
        print(json.dumps(analysis.as_dict(), indent=2))
    else:
        print_analysis(analysis)
    return 0


if __name__ == "__main__":
    import sys

    sys.exit(main(sys.argv[1:]))
