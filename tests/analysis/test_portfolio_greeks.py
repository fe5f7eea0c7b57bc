import pytest

from optrisk.analysis.greeks import compute_portfolio_greeks, leg_greeks
from optrisk.bs_calculator import calculate_greeks
from tests.conftest import make_leg

T30 = 30 / 365


def test_leg_greeks_scaled_by_quantity_and_side():
    per_share = calculate_greeks(100, 105, T30, 0.05, 0.3, "call")
    leg = make_leg(105, "call", "short", quantity=2, iv=0.3)
    scaled = leg_greeks(leg, 100, 30, 0.05)
    assert scaled.delta == pytest.approx(per_share.delta * -200)
    assert scaled.gamma == pytest.approx(per_share.gamma * -200)
    assert scaled.theta == pytest.approx(per_share.theta * -200)
    assert scaled.vega == pytest.approx(per_share.vega * -200)


def test_compute_portfolio_greeks_sums_legs(long_straddle):
    call = calculate_greeks(100, 100, T30, 0.05, 0.3, "call")
    put = calculate_greeks(100, 100, T30, 0.05, 0.3, "put")
    result = compute_portfolio_greeks(long_straddle, 100, 30, 0.05)
    assert result.delta == pytest.approx((call.delta + put.delta) * 100)
    assert result.gamma == pytest.approx(2 * call.gamma * 100)
    assert result.theta == pytest.approx((call.theta + put.theta) * 100)
    assert result.vega == pytest.approx(2 * call.vega * 100)
    assert result.gamma > 0 and result.vega > 0 and result.theta < 0


def test_second_order_disabled_reports_zero(long_straddle):
    full = compute_portfolio_greeks(long_straddle, 100, 30, 0.05)
    legacy = compute_portfolio_greeks(long_straddle, 100, 30, 0.05, second_order=False)
    assert legacy.delta == pytest.approx(full.delta)
    assert (legacy.gamma, legacy.theta, legacy.vega) == (0.0, 0.0, 0.0)


def test_legs_without_iv_use_expiry_delta():
    legs = [
        make_leg(100, "call", "long"),
        make_leg(120, "put", "short", quantity=2),
        make_leg(130, "call", "long"),
    ]
    result = compute_portfolio_greeks(legs, 110, 30, 0.05)
    assert result.delta == pytest.approx(100 + 200)
    assert (result.gamma, result.theta, result.vega) == (0.0, 0.0, 0.0)


def test_no_legs():
    result = compute_portfolio_greeks([], 100, 30)
    assert (result.delta, result.gamma, result.theta, result.vega) == (0, 0, 0, 0)
