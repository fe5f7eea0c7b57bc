from enum import Enum


class StrategyTemplate(str, Enum):
    """Predefined strategy layouts that can be built from an option chain.

    The value of each member is the canonical string representation. The enum
    derives from ``str`` so members can be used interchangeably where a string
    is expected.
    """

    LONG_CALL = "long_call"
    BULL_CALL_SPREAD = "bull_call_spread"
    CASH_SECURED_PUT = "cash_secured_put"
    LONG_PUT = "long_put"
    BEAR_PUT_SPREAD = "bear_put_spread"
    LONG_STRADDLE = "long_straddle"
    SHORT_STRADDLE = "short_straddle"
    LONG_STRANGLE = "long_strangle"
    SHORT_STRANGLE = "short_strangle"
    IRON_CONDOR = "iron_condor"
    PROTECTIVE_PUT = "protective_put"
    COLLAR = "collar"
    COVERED_CALL = "covered_call"
    RISK_REVERSAL = "risk_reversal"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return str(self.value)

    def __format__(self, format_spec: str) -> str:  # pragma: no cover - trivial
        return format(str(self.value), format_spec)


__all__ = ["StrategyTemplate"]
