"""Core data structures shared by the pricing and strategy modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union

CONTRACT_MULTIPLIER = 100
DEFAULT_RISK_FREE_RATE = 0.05

UNBOUNDED: Literal["unbounded"] = "unbounded"

Bound = Union[float, Literal["unbounded"]]


class OptionType(str, Enum):
    """Option right."""

    CALL = "call"
    PUT = "put"

    @classmethod
    def parse(cls, value: Any) -> "OptionType":
        """Return the option type for ``value`` (``C``/``call``/``P``/``put``)."""
        if isinstance(value, cls):
            return value
        val = str(value or "").strip().lower()
        if val in {"c", "call"}:
            return cls.CALL
        if val in {"p", "put"}:
            return cls.PUT
        raise ValueError(f"Unknown option type: {value!r}")

    def __str__(self) -> str:  # pragma: no cover - trivial
        return str(self.value)


class Side(str, Enum):
    """Direction of a leg; quantities are always positive."""

    LONG = "long"
    SHORT = "short"

    @classmethod
    def parse(cls, value: Any) -> "Side":
        if isinstance(value, cls):
            return value
        val = str(value or "").strip().lower()
        if val in {"buy", "long"}:
            return cls.LONG
        if val in {"sell", "short"}:
            return cls.SHORT
        raise ValueError(f"Unknown side: {value!r}")

    @property
    def sign(self) -> int:
        return 1 if self is Side.LONG else -1

    @property
    def action(self) -> str:
        """Return the order action (``buy``/``sell``) for this side."""
        return "buy" if self is Side.LONG else "sell"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return str(self.value)


@dataclass(frozen=True)
class OptionLeg:
    """A single option position within a strategy.

    ``entry_premium`` is the per-share premium paid (long) or received
    (short); it is not multiplied by the quantity or contract size.
    """

    strike: float
    option_type: OptionType
    side: Side
    quantity: int = 1
    entry_premium: float = 0.0
    implied_vol: float | None = None

    def __post_init__(self) -> None:
        if self.strike <= 0:
            raise ValueError(f"strike must be positive, got {self.strike}")
        if self.quantity <= 0:
            raise ValueError(f"quantity must be positive, got {self.quantity}")
        object.__setattr__(self, "option_type", OptionType.parse(self.option_type))
        object.__setattr__(self, "side", Side.parse(self.side))

    @property
    def is_call(self) -> bool:
        return self.option_type is OptionType.CALL

    @property
    def has_usable_vol(self) -> bool:
        return self.implied_vol is not None and self.implied_vol > 0

    @property
    def signed_quantity(self) -> int:
        return self.side.sign * self.quantity

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OptionLeg":
        """Build a leg from a request style mapping.

        Accepts ``type``/``right`` for the option type, ``action``/``side``
        for the direction and ``premium``/``entry_premium``/``mid`` for the
        entry price. Greeks supplied alongside are ignored.
        """
        premium = data.get("premium")
        if premium is None:
            premium = data.get("entry_premium", data.get("mid", 0.0))
        iv = data.get("iv", data.get("implied_vol"))
        return cls(
            strike=float(data["strike"]),
            option_type=OptionType.parse(data.get("type") or data.get("right")),
            side=Side.parse(data.get("action") or data.get("side")),
            quantity=int(data.get("quantity", 1)),
            entry_premium=float(premium or 0.0),
            implied_vol=float(iv) if iv is not None else None,
        )


@dataclass(frozen=True)
class Strategy:
    """Option legs sharing one expiry plus the market context to value them."""

    legs: tuple[OptionLeg, ...]
    spot: float
    days_to_expiry: int = 0
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE

    def __post_init__(self) -> None:
        object.__setattr__(self, "legs", tuple(self.legs))

    @property
    def strikes(self) -> list[float]:
        return sorted({leg.strike for leg in self.legs})


@dataclass(frozen=True)
class BreakevenPoint:
    price: float
    btc_price: float | None = None


@dataclass(frozen=True)
class PnLPoint:
    """P&L at expiration for a hypothetical underlying price."""

    price: float
    pnl: float
    pnl_percent: float
    btc_price: float | None = None
    pnl_btc: float | None = None


@dataclass(frozen=True)
class PnLCurvePoint:
    price: float
    expiry_pnl: float
    current_pnl: float


@dataclass(frozen=True)
class MaxProfitLoss:
    """Extremes of the expiration payoff."""

    max_profit: Bound
    max_profit_price: float | None
    max_loss: Bound
    max_loss_price: float | None

    @property
    def unbounded_profit(self) -> bool:
        return self.max_profit == UNBOUNDED

    @property
    def unbounded_loss(self) -> bool:
        return self.max_loss == UNBOUNDED


@dataclass(frozen=True)
class PortfolioGreeks:
    """Strategy level Greeks, scaled by quantity and contract multiplier."""

    delta: float = 0.0
    gamma: float = 0.0
    theta: float = 0.0
    vega: float = 0.0


@dataclass(frozen=True)
class StrategyAnalysis:
    """Result of :func:`optrisk.analysis.strategy.analyze_strategy`."""

    total_cost: float
    max_profit: Bound
    max_profit_price: float | None
    max_loss: Bound
    max_loss_price: float | None
    breakevens: list[BreakevenPoint]
    current_pnl: float
    current_pnl_percent: float
    target_pnls: list[PnLPoint]
    days_to_expiry: int
    greeks: PortfolioGreeks
    total_cost_btc: float | None = None
    current_pnl_btc: float | None = None
    leg_valuations: list[Any] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        """Return the camelCase response payload."""
        return {
            "totalCost": self.total_cost,
            "totalCostBtc": self.total_cost_btc,
            "maxProfit": self.max_profit,
            "maxProfitPrice": self.max_profit_price,
            "maxLoss": self.max_loss,
            "maxLossPrice": self.max_loss_price,
            "breakevens": [
                {"price": b.price, "btcPrice": b.btc_price} for b in self.breakevens
            ],
            "currentPnl": self.current_pnl,
            "currentPnlPercent": self.current_pnl_percent,
            "currentPnlBtc": self.current_pnl_btc,
            "targetPnls": [
                {
                    "price": p.price,
                    "btcPrice": p.btc_price,
                    "pnl": p.pnl,
                    "pnlPercent": p.pnl_percent,
                    "pnlBtc": p.pnl_btc,
                }
                for p in self.target_pnls
            ],
            "daysToExpiry": self.days_to_expiry,
            "totalDelta": self.greeks.delta,
            "totalGamma": self.greeks.gamma,
            "totalTheta": self.greeks.theta,
            "totalVega": self.greeks.vega,
        }


__all__ = [
    "CONTRACT_MULTIPLIER",
    "DEFAULT_RISK_FREE_RATE",
    "UNBOUNDED",
    "Bound",
    "OptionType",
    "Side",
    "OptionLeg",
    "Strategy",
    "BreakevenPoint",
    "PnLPoint",
    "PnLCurvePoint",
    "MaxProfitLoss",
    "PortfolioGreeks",
    "StrategyAnalysis",
]
