"""Black-Scholes pricing utilities.

All functions are pure: invalid inputs produce ``None`` instead of raising so
callers can fall back to intrinsic valuation per leg.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from .logutils import logger
from .models import OptionType

# Abramowitz & Stegun 26.1.26, |error| < 7.5e-8
_AS_P = 0.3275911
_AS_A1 = 0.254829592
_AS_A2 = -0.284496736
_AS_A3 = 1.421413741
_AS_A4 = -1.453152027
_AS_A5 = 1.061405429

DAYS_PER_YEAR = 365.0

IV_MIN = 0.001
IV_MAX = 10.0
IV_GUESS_MIN = 0.01
IV_GUESS_MAX = 5.0


def normal_pdf(x: float) -> float:
    """Return the standard normal probability density function."""
    return math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi)


def normal_cdf(x: float) -> float:
    """Return the standard normal cumulative distribution function."""
    sign = -1.0 if x < 0 else 1.0
    x = abs(x)
    t = 1.0 / (1.0 + _AS_P * x)
    poly = ((((_AS_A5 * t + _AS_A4) * t + _AS_A3) * t + _AS_A2) * t + _AS_A1) * t
    y = 1.0 - poly * math.exp(-x * x / 2.0)
    return 0.5 * (1.0 + sign * y)


def days_to_years(days: float) -> float:
    return days / DAYS_PER_YEAR


def intrinsic_value(spot: float, strike: float, option_type: OptionType | str) -> float:
    """Return the in-the-money amount of an option at ``spot``."""
    if OptionType.parse(option_type) is OptionType.CALL:
        return max(0.0, spot - strike)
    return max(0.0, strike - spot)


def d1_d2(
    spot: float, strike: float, time: float, rate: float, vol: float
) -> tuple[float, float] | None:
    """Return the Black-Scholes ``d1`` and ``d2`` terms.

    ``None`` when any of ``spot``, ``strike``, ``time`` or ``vol`` is not
    strictly positive.
    """
    if spot <= 0 or strike <= 0 or time <= 0 or vol <= 0:
        return None
    sqrt_t = math.sqrt(time)
    d1 = (math.log(spot / strike) + (rate + 0.5 * vol * vol) * time) / (vol * sqrt_t)
    return d1, d1 - vol * sqrt_t


@dataclass(frozen=True)
class OptionGreeks:
    """Greeks for a single option, per share."""

    delta: float      # Change in price per $1 spot move
    gamma: float      # Change in delta per $1 spot move
    theta: float      # Change in price per calendar day
    vega: float       # Change in price per 1 point IV move
    rho: float        # Change in price per 1 point rate move


def price_option(
    spot: float,
    strike: float,
    time: float,
    rate: float,
    vol: float,
    option_type: OptionType | str,
) -> float | None:
    """Return the Black-Scholes price of a European option.

    Args:
        spot: Current underlying price
        strike: Strike price
        time: Time to expiry in years
        rate: Risk-free rate (e.g. 0.05 for 5%)
        vol: Volatility as decimal (e.g. 0.30 for 30%)
        option_type: ``call``/``put`` (or ``C``/``P``)

    Returns:
        Theoretical value, exact intrinsic value when ``time`` is zero, or
        ``None`` for invalid input.
    """
    opt = OptionType.parse(option_type)
    if spot <= 0 or strike <= 0 or time < 0:
        return None
    if time == 0:
        return intrinsic_value(spot, strike, opt)
    params = d1_d2(spot, strike, time, rate, vol)
    if params is None:
        return None
    d1, d2 = params
    discount = math.exp(-rate * time)
    if opt is OptionType.CALL:
        return spot * normal_cdf(d1) - strike * discount * normal_cdf(d2)
    return strike * discount * normal_cdf(-d2) - spot * normal_cdf(-d1)


def calculate_greeks(
    spot: float,
    strike: float,
    time: float,
    rate: float,
    vol: float,
    option_type: OptionType | str,
) -> OptionGreeks | None:
    """Calculate Black-Scholes Greeks for an option.

    At or past expiry delta collapses to +1/-1 for in-the-money options and 0
    otherwise; all other Greeks are zero.
    """
    opt = OptionType.parse(option_type)
    if spot <= 0 or strike <= 0:
        return None

    if time <= 0:
        if opt is OptionType.CALL:
            delta = 1.0 if spot > strike else 0.0
        else:
            delta = -1.0 if spot < strike else 0.0
        return OptionGreeks(delta=delta, gamma=0.0, theta=0.0, vega=0.0, rho=0.0)

    params = d1_d2(spot, strike, time, rate, vol)
    if params is None:
        return None
    d1, d2 = params
    sqrt_t = math.sqrt(time)
    discount = math.exp(-rate * time)
    pdf_d1 = normal_pdf(d1)

    # Gamma (same for calls and puts)
    gamma = pdf_d1 / (spot * vol * sqrt_t)

    # Vega (per 1% IV change, not per 0.01 IV change)
    vega = spot * sqrt_t * pdf_d1 / 100.0

    decay = -spot * pdf_d1 * vol / (2.0 * sqrt_t)
    if opt is OptionType.CALL:
        delta = normal_cdf(d1)
        theta = decay - rate * strike * discount * normal_cdf(d2)
        rho = strike * time * discount * normal_cdf(d2) / 100.0
    else:
        delta = normal_cdf(d1) - 1.0
        theta = decay + rate * strike * discount * normal_cdf(-d2)
        rho = -strike * time * discount * normal_cdf(-d2) / 100.0

    return OptionGreeks(
        delta=delta,
        gamma=gamma,
        theta=theta / DAYS_PER_YEAR,
        vega=vega,
        rho=rho,
    )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def implied_volatility(
    market_price: float,
    spot: float,
    strike: float,
    time: float,
    rate: float,
    option_type: OptionType | str,
    max_iterations: int = 100,
    tolerance: float = 0.0001,
) -> float | None:
    """Return the volatility that reproduces ``market_price``.

    Newton-Raphson starting from the Brenner-Subrahmanyam approximation. Each
    model evaluation also narrows a ``[IV_MIN, IV_MAX]`` bracket; when vega is
    zero the next guess is the midpoint of that bracket. Returns ``None`` when
    the inputs are invalid or no solution is found within ``max_iterations``.
    """
    opt = OptionType.parse(option_type)
    if market_price <= 0 or spot <= 0 or strike <= 0 or time <= 0:
        return None

    vol = math.sqrt(2.0 * math.pi / time) * (market_price / spot)
    vol = _clamp(vol, IV_GUESS_MIN, IV_GUESS_MAX)
    low, high = IV_MIN, IV_MAX

    for _ in range(max_iterations):
        price = price_option(spot, strike, time, rate, vol, opt)
        if price is None:
            return None
        diff = price - market_price
        if abs(diff) < tolerance:
            return vol

        # price is increasing in vol
        if diff > 0:
            high = min(high, vol)
        else:
            low = max(low, vol)

        greeks = calculate_greeks(spot, strike, time, rate, vol, opt)
        if greeks is None or greeks.vega == 0:
            vol = 0.5 * (low + high)
        else:
            # vega is quoted per 1 vol point
            vol = vol - diff / (greeks.vega * 100.0)
        vol = _clamp(vol, IV_MIN, IV_MAX)

    logger.debug(
        f"implied_volatility did not converge: price={market_price} spot={spot} "
        f"strike={strike} T={time:.4f} type={opt.value}"
    )
    return None


__all__ = [
    "DAYS_PER_YEAR",
    "OptionGreeks",
    "normal_pdf",
    "normal_cdf",
    "days_to_years",
    "intrinsic_value",
    "d1_d2",
    "price_option",
    "calculate_greeks",
    "implied_volatility",
]
