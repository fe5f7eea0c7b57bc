"""Numeric rounding helpers for response payloads."""

from __future__ import annotations

from typing import Any


def round_to(value: Any, digits: int = 2) -> Any:
    """Return ``value`` rounded to ``digits`` when it is a real number.

    ``None`` and non-numeric markers such as ``"unbounded"`` pass through
    unchanged. ``-0.0`` is normalized to ``0.0``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    rounded = round(float(value), digits)
    return rounded + 0.0


def round_money(value: Any) -> Any:
    """Round a dollar amount to cents."""
    return round_to(value, 2)


__all__ = ["round_to", "round_money"]
