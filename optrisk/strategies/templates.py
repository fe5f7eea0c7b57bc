"""Build template strategies from an option chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence

from . import StrategyTemplate
from ..logutils import logger
from ..models import OptionLeg, OptionType, Side


@dataclass(frozen=True)
class ChainQuote:
    """One option of a chain as delivered by the market-data provider."""

    strike: float
    option_type: OptionType
    mid: float
    iv: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "option_type", OptionType.parse(self.option_type))


class LegSpec(NamedTuple):
    """Strike selection rule for one template leg.

    ``otm_pct`` of ``None`` selects the at-the-money strike.
    """

    option_type: OptionType
    side: Side
    otm_pct: float | None = None


@dataclass(frozen=True)
class TemplateInfo:
    category: str
    description: str
    legs: tuple[LegSpec, ...]


_C, _P = OptionType.CALL, OptionType.PUT
_L, _S = Side.LONG, Side.SHORT

TEMPLATES: dict[StrategyTemplate, TemplateInfo] = {
    StrategyTemplate.LONG_CALL: TemplateInfo(
        "bullish", "Buy a call: unbounded upside, limited downside", (LegSpec(_C, _L, 0.02),)
    ),
    StrategyTemplate.BULL_CALL_SPREAD: TemplateInfo(
        "bullish",
        "Buy lower strike call, sell higher strike call",
        (LegSpec(_C, _L, 0.02), LegSpec(_C, _S, 0.07)),
    ),
    StrategyTemplate.CASH_SECURED_PUT: TemplateInfo(
        "bullish", "Sell a put and collect premium", (LegSpec(_P, _S, 0.05),)
    ),
    StrategyTemplate.LONG_PUT: TemplateInfo(
        "bearish", "Buy a put to profit from downside", (LegSpec(_P, _L, 0.02),)
    ),
    StrategyTemplate.BEAR_PUT_SPREAD: TemplateInfo(
        "bearish",
        "Buy higher strike put, sell lower strike put",
        (LegSpec(_P, _L, 0.02), LegSpec(_P, _S, 0.07)),
    ),
    StrategyTemplate.LONG_STRADDLE: TemplateInfo(
        "neutral", "Buy ATM call and put", (LegSpec(_C, _L), LegSpec(_P, _L))
    ),
    StrategyTemplate.SHORT_STRADDLE: TemplateInfo(
        "neutral", "Sell ATM call and put", (LegSpec(_C, _S), LegSpec(_P, _S))
    ),
    StrategyTemplate.LONG_STRANGLE: TemplateInfo(
        "neutral",
        "Buy OTM call and put",
        (LegSpec(_C, _L, 0.05), LegSpec(_P, _L, 0.05)),
    ),
    StrategyTemplate.SHORT_STRANGLE: TemplateInfo(
        "neutral",
        "Sell OTM call and put",
        (LegSpec(_C, _S, 0.05), LegSpec(_P, _S, 0.05)),
    ),
    StrategyTemplate.IRON_CONDOR: TemplateInfo(
        "neutral",
        "Sell a strangle and buy the wings",
        (
            LegSpec(_C, _S, 0.05),
            LegSpec(_C, _L, 0.10),
            LegSpec(_P, _S, 0.05),
            LegSpec(_P, _L, 0.10),
        ),
    ),
    StrategyTemplate.PROTECTIVE_PUT: TemplateInfo(
        "hedge", "Buy a put against long stock", (LegSpec(_P, _L, 0.05),)
    ),
    StrategyTemplate.COLLAR: TemplateInfo(
        "hedge",
        "Buy a put and sell a call against long stock",
        (LegSpec(_P, _L, 0.05), LegSpec(_C, _S, 0.05)),
    ),
    StrategyTemplate.COVERED_CALL: TemplateInfo(
        "hedge", "Sell a call against long stock", (LegSpec(_C, _S, 0.05),)
    ),
    StrategyTemplate.RISK_REVERSAL: TemplateInfo(
        "hedge",
        "Sell a put and buy a call",
        (LegSpec(_P, _S, 0.05), LegSpec(_C, _L, 0.05)),
    ),
}


def find_atm_strike(chain: Sequence[ChainQuote], spot: float) -> float | None:
    """Return the chain strike closest to ``spot``."""
    strikes = sorted({q.strike for q in chain})
    if not strikes:
        return None
    return min(strikes, key=lambda s: abs(s - spot))


def find_otm_quote(
    chain: Iterable[ChainQuote], spot: float, option_type: OptionType, otm_pct: float
) -> ChainQuote | None:
    """Return the out-of-the-money quote closest to ``spot * (1 +- otm_pct)``."""
    if option_type is OptionType.CALL:
        target = spot * (1 + otm_pct)
        candidates = [q for q in chain if q.option_type is _C and q.strike > spot]
    else:
        target = spot * (1 - otm_pct)
        candidates = [q for q in chain if q.option_type is _P and q.strike < spot]
    if not candidates:
        return None
    return min(candidates, key=lambda q: abs(q.strike - target))


def _select(
    chain: Sequence[ChainQuote], spot: float, spec: LegSpec
) -> ChainQuote | None:
    if spec.otm_pct is not None:
        return find_otm_quote(chain, spot, spec.option_type, spec.otm_pct)
    atm = find_atm_strike(chain, spot)
    return next(
        (q for q in chain if q.strike == atm and q.option_type is spec.option_type),
        None,
    )


def build_template(
    template: StrategyTemplate | str,
    chain: Sequence[ChainQuote],
    spot: float,
    *,
    quantity: int = 1,
) -> list[OptionLeg]:
    """Return legs for ``template`` picked from ``chain``.

    Quote mids become entry premiums. An empty list is returned when the
    chain has no strike for one of the legs.
    """
    template = StrategyTemplate(template)
    legs: list[OptionLeg] = []
    for spec in TEMPLATES[template].legs:
        quote = _select(chain, spot, spec)
        if quote is None:
            logger.debug(f"[{template}] no {spec.option_type.value} strike for leg {spec}")
            return []
        legs.append(
            OptionLeg(
                strike=quote.strike,
                option_type=quote.option_type,
                side=spec.side,
                quantity=quantity,
                entry_premium=quote.mid,
                implied_vol=quote.iv,
            )
        )
    return legs


__all__ = [
    "ChainQuote",
    "LegSpec",
    "TemplateInfo",
    "TEMPLATES",
    "find_atm_strike",
    "find_otm_quote",
    "build_template",
]
