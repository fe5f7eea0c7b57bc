"""Convert dollar figures into bitcoin terms.

Strategies on bitcoin proxies are easier to read when P&L and price levels
are also expressed in BTC. None of these helpers feed back into pricing.
"""

from __future__ import annotations


def usd_to_btc(usd: float, btc_price: float) -> float:
    if btc_price <= 0:
        return 0.0
    return usd / btc_price


def strike_to_equivalent_btc_price(
    strike: float, share_price: float, btc_price: float
) -> float:
    """Return the BTC price at which the underlying would trade at ``strike``.

    Assumes the underlying moves proportionally with BTC, i.e. the current
    ``share_price / btc_price`` ratio holds.
    """
    if share_price <= 0 or btc_price <= 0:
        return 0.0
    return strike / (share_price / btc_price)


def format_btc(amount: float, precision: int = 8) -> str:
    """Format a BTC amount with precision depending on its size."""
    if abs(amount) >= 1:
        return f"{amount:.4f}"
    if abs(amount) >= 0.001:
        return f"{amount:.6f}"
    return f"{amount:.{precision}f}"


__all__ = [
    "usd_to_btc",
    "strike_to_equivalent_btc_price",
    "format_btc",
]
