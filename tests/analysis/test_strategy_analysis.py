import pytest

from optrisk.analysis.payoff import ValuationMethod
from optrisk.analysis.strategy import analyze_strategy, generate_price_range, pnl_curve
from optrisk.models import UNBOUNDED
from tests.conftest import make_leg


def test_analyze_single_long_call(long_call, strategy_factory):
    analysis = analyze_strategy(strategy_factory(long_call), target_prices=[120.0, 90.0])
    assert analysis.total_cost == 360.0
    assert analysis.max_profit == UNBOUNDED
    assert analysis.max_profit_price is None
    assert analysis.max_loss == -360.0
    assert analysis.max_loss_price == 0.01
    assert [b.price for b in analysis.breakevens] == [103.6]
    assert analysis.breakevens[0].btc_price is None
    # no IV on the leg: valued at intrinsic
    assert analysis.current_pnl == -360.0
    assert analysis.current_pnl_percent == -100.0
    assert analysis.leg_valuations[0].method is ValuationMethod.INTRINSIC
    assert [(p.price, p.pnl, p.pnl_percent) for p in analysis.target_pnls] == [
        (120.0, 1640.0, 455.56),
        (90.0, -360.0, -100.0),
    ]
    assert analysis.days_to_expiry == 30


def test_analyze_uses_time_value_with_iv(strategy_factory):
    legs = [make_leg(100, "call", "long", premium=3.0, iv=0.3)]
    analysis = analyze_strategy(strategy_factory(legs))
    assert analysis.leg_valuations[0].method is ValuationMethod.THEORETICAL
    # theoretical value is about 3.63 per share
    assert analysis.current_pnl == pytest.approx(63.0, abs=10.0)
    assert analysis.greeks.delta == pytest.approx(53.6, abs=0.5)
    assert analysis.greeks.gamma > 0
    assert analysis.greeks.theta < 0


def test_analyze_rounds_greeks(long_straddle, strategy_factory):
    greeks = analyze_strategy(strategy_factory(long_straddle)).greeks
    assert greeks.delta == round(greeks.delta, 3)
    assert greeks.gamma == round(greeks.gamma, 4)
    assert greeks.theta == round(greeks.theta, 2)
    assert greeks.vega == round(greeks.vega, 2)


def test_analyze_legacy_greeks(long_straddle, strategy_factory):
    greeks = analyze_strategy(strategy_factory(long_straddle), second_order_greeks=False).greeks
    assert (greeks.gamma, greeks.theta, greeks.vega) == (0.0, 0.0, 0.0)


def test_zero_cost_strategy_has_zero_percentages(strategy_factory):
    legs = [make_leg(100, "call", "long"), make_leg(100, "put", "short")]
    analysis = analyze_strategy(strategy_factory(legs, spot=110), target_prices=[130.0])
    assert analysis.total_cost == 0.0
    assert analysis.current_pnl == 1000.0
    assert analysis.current_pnl_percent == 0.0
    assert analysis.target_pnls[0].pnl_percent == 0.0


def test_btc_fields(long_call, strategy_factory):
    analysis = analyze_strategy(
        strategy_factory(long_call), btc_price=50000.0, target_prices=[110.0]
    )
    assert analysis.total_cost_btc == pytest.approx(0.0072)
    assert analysis.current_pnl_btc == pytest.approx(-0.0072)
    assert analysis.breakevens[0].btc_price == pytest.approx(51800.0, abs=0.05)
    assert analysis.target_pnls[0].btc_price == pytest.approx(55000.0)
    assert analysis.target_pnls[0].pnl_btc == pytest.approx(640.0 / 50000.0)


def test_as_dict_payload(long_call, strategy_factory):
    payload = analyze_strategy(strategy_factory(long_call)).as_dict()
    assert payload["maxProfit"] == "unbounded"
    assert payload["totalCost"] == 360.0
    assert payload["breakevens"] == [{"price": 103.6, "btcPrice": None}]
    for key in ("totalDelta", "totalGamma", "totalTheta", "totalVega", "daysToExpiry"):
        assert key in payload


def test_generate_price_range():
    legs = [make_leg(100)]
    assert generate_price_range(100, legs, 5) == [50.0, 75.0, 100.0, 125.0, 150.0]
    assert generate_price_range(100, legs, 1) == [50.0]
    assert generate_price_range(100, legs, 0) == []
    prices = generate_price_range(200, [make_leg(80), make_leg(120)])
    assert len(prices) == 50
    assert prices[0] == pytest.approx(40.0)
    assert prices[-1] == pytest.approx(300.0)


def test_pnl_curve(strategy_factory):
    legs = [make_leg(100, "call", "long", premium=3.6, iv=0.3)]
    points = pnl_curve(strategy_factory(legs), 20)
    assert len(points) == 20
    assert points[0].price == 50.0
    assert points[0].expiry_pnl == -360.0
    for point in points:
        assert point.current_pnl >= point.expiry_pnl - 0.01


@pytest.mark.parametrize("btc_price", [-1.0, 0.0, None])
def test_btc_fields_need_positive_btc_price(long_call, strategy_factory, btc_price):
    analysis = analyze_strategy(
        strategy_factory(long_call), btc_price=btc_price, target_prices=[110.0]
    )
    assert analysis.total_cost_btc is None
    assert analysis.current_pnl_btc is None
    assert analysis.breakevens[0].btc_price is None
    assert analysis.target_pnls[0].btc_price is None
    assert analysis.target_pnls[0].pnl_btc is None
