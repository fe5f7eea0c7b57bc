"""Compute theoretical option values and Greeks with the Black-Scholes model."""
from __future__ import annotations

from typing import List

from ..bs_calculator import (
    calculate_greeks,
    days_to_years,
    implied_volatility,
    intrinsic_value,
    price_option,
)
from ..config import get as cfg_get
from ..models import OptionType
from .common import prompt, prompt_float


def _print_result(
    option_type: str,
    spot: float,
    strike: float,
    dte: int,
    iv: float,
    r: float,
    midprice: float | None = None,
) -> bool:
    try:
        opt = OptionType.parse(option_type)
    except ValueError:
        print("❌ Invalid type")
        return False
    time = days_to_years(dte)
    value = price_option(spot, strike, time, r, iv, opt)
    if value is None:
        print("❌ Invalid pricing inputs")
        return False
    intrinsic = intrinsic_value(spot, strike, opt)
    time_val = value - intrinsic
    print("\n⚙️  Theoretical Value Calculator")
    print(f"Option type: {'Call' if opt is OptionType.CALL else 'Put'}")
    print(f"Theoretical value: ${value:.2f}")
    print(f"Intrinsic value: ${intrinsic:.2f}")
    print(f"Time value: ${time_val:+.2f}")

    greeks = calculate_greeks(spot, strike, time, r, iv, opt)
    if greeks is not None:
        print(
            f"Delta: {greeks.delta:.4f}  Gamma: {greeks.gamma:.4f}  "
            f"Theta: {greeks.theta:.4f}  Vega: {greeks.vega:.4f}  Rho: {greeks.rho:.4f}"
        )
    if midprice is not None:
        edge = value - midprice
        print(f"Edge vs mid {midprice}: ${edge:.2f}")
        implied = implied_volatility(midprice, spot, strike, time, r, opt)
        if implied is None:
            print("Implied volatility: n/a")
        else:
            print(f"Implied volatility: {implied:.2%}")
    return True


def run() -> None:
    """Interactively ask for parameters and print the option value."""
    opt_type = prompt("Option type (C/P): ").upper()
    if opt_type not in {"C", "P"}:
        print("❌ Invalid type")
        return
    default_rate = float(cfg_get("RISK_FREE_RATE", 0.05))
    spot = prompt_float("Spot price: ")
    strike = prompt_float("Strike price: ")
    dte = prompt_float("Days to expiry: ")
    iv = prompt_float("Implied volatility (0-1): ")
    r = prompt_float(f"Risk free rate [{default_rate}]: ", default_rate)
    mid = prompt_float("Midprice (optional): ")
    if None in (spot, strike, dte, iv):
        print("❌ Missing required value")
        return
    _print_result(opt_type, spot, strike, int(dte), iv, r or 0.0, mid)


def main(argv: List[str] | None = None) -> int:
    """CLI entry point for the calculator."""
    if not argv:
        run()
        return 0
    if len(argv) < 5:
        print("Usage: bs-calculator TYPE SPOT STRIKE DTE IV [R] [MID]")
        return 1
    try:
        spot = float(argv[1])
        strike = float(argv[2])
        dte = int(argv[3])
        iv = float(argv[4])
        r = float(argv[5]) if len(argv) >= 6 else float(cfg_get("RISK_FREE_RATE", 0.05))
        mid = float(argv[6]) if len(argv) >= 7 else None
    except ValueError:
        print("❌ Invalid numeric value")
        return 1
    return 0 if _print_result(argv[0], spot, strike, dte, iv, r, mid) else 1


if __name__ == "__main__":
    import sys

    sys.exit(main(sys.argv[1:]))
