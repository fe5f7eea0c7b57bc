"""Build a template strategy from an option chain file and analyze it.

The chain file is JSON::

    {"underlyingPrice": 100, "daysToExpiry": 30, "btcPrice": 60000,
     "options": [{"strike": 95, "type": "put", "mid": 1.2, "iv": 0.3}, ...]}
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List

from ..analysis.strategy import analyze_strategy
from ..config import get as cfg_get
from ..logutils import logger
from ..models import Strategy
from ..strategies import StrategyTemplate
from ..strategies.templates import TEMPLATES, ChainQuote, build_template
from .analyze_strategy import print_analysis

USAGE = "Usage: template NAME CHAIN_PATH [--quantity N] [--json]"


def _load_chain(payload: dict) -> tuple[list[ChainQuote], float, int]:
    spot = float(payload["underlyingPrice"])
    days = int(payload.get("daysToExpiry", 0))
    if spot <= 0 or days < 0:
        raise ValueError("underlyingPrice must be positive and daysToExpiry non-negative")
    chain = [
        ChainQuote(
            strike=float(o["strike"]),
            option_type=o["type"],
            mid=float(o["mid"]),
            iv=float(o["iv"]) if o.get("iv") is not None else None,
        )
        for o in payload.get("options", [])
    ]
    return chain, spot, days


def main(argv: List[str] | None = None) -> int:
    """Print the analysis of template ``argv[0]`` built from chain ``argv[1]``."""
    argv = list(argv or [])
    as_json = "--json" in argv
    argv = [a for a in argv if a != "--json"]
    quantity = 1
    if "--quantity" in argv:
        idx = argv.index("--quantity")
        try:
            quantity = int(argv[idx + 1])
        except (IndexError, ValueError):
            print(USAGE)
            return 1
        del argv[idx : idx + 2]
    if len(argv) < 2 or quantity <= 0:
        print(USAGE)
        return 1

    name, path = argv[0], Path(argv[1])
    try:
        template = StrategyTemplate(name)
    except ValueError:
        print(f"❌ Unknown template: {name}")
        print("Available: " + ", ".join(t.value for t in TEMPLATES))
        return 1

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        print(f"❌ File not found: {path}")
        return 1
    except json.JSONDecodeError as exc:
        print(f"❌ Invalid JSON: {exc}")
        return 1

    try:
        chain, spot, days = _load_chain(payload)
    except (KeyError, TypeError, ValueError) as exc:
        print(f"❌ Invalid chain: {exc}")
        return 1

    legs = build_template(template, chain, spot, quantity=quantity)
    if not legs:
        print(f"❌ Chain has no strikes to build {template}")
        return 1

    strategy = Strategy(
        legs=tuple(legs),
        spot=spot,
        days_to_expiry=days,
        risk_free_rate=float(
            payload.get("riskFreeRate", cfg_get("RISK_FREE_RATE", 0.05))
        ),
    )
    btc_price = payload.get("btcPrice")
    logger.info(f"{template}: {TEMPLATES[template].description}")
    analysis = analyze_strategy(
        strategy,
        btc_price=float(btc_price) if btc_price else None,
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
