import pytest
from fastapi.testclient import TestClient

from optrisk import __version__
from optrisk.web.main import app

client = TestClient(app)


def _payload(**overrides):
    payload = {
        "legs": [
            {
                "strike": 100,
                "type": "call",
                "action": "buy",
                "quantity": 1,
                "premium": 3.6,
                "iv": 0.3,
                "delta": 0.54,
            }
        ],
        "underlyingPrice": 100,
        "daysToExpiry": 30,
    }
    payload.update(overrides)
    return payload


def test_health():
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "version": __version__}


def test_analyze_long_call():
    resp = client.post("/api/options/analyze", json=_payload(targetPrices=[120]))
    assert resp.status_code == 200
    data = resp.json()
    assert data["totalCost"] == 360.0
    assert data["maxProfit"] == "unbounded"
    assert data["maxProfitPrice"] is None
    assert data["maxLoss"] == -360.0
    assert data["breakevens"][0]["price"] == 103.6
    assert data["targetPnls"][0]["pnl"] == 1640.0
    assert data["daysToExpiry"] == 30
    assert data["totalDelta"] == pytest.approx(53.6, abs=0.5)
    assert data["totalCostBtc"] is None


def test_analyze_naked_short_call_with_btc():
    leg = {"strike": 100, "type": "call", "action": "sell", "quantity": 1, "premium": 3.6}
    resp = client.post("/api/options/analyze", json=_payload(legs=[leg], btcPrice=50000))
    assert resp.status_code == 200
    data = resp.json()
    assert data["maxLoss"] == "unbounded"
    assert data["maxProfit"] == 360.0
    assert data["totalCostBtc"] == pytest.approx(-0.0072)


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"legs": []}, "At least one leg is required"),
        ({"underlyingPrice": 0}, "Valid underlyingPrice is required"),
        ({"underlyingPrice": None}, "Valid underlyingPrice is required"),
        ({"daysToExpiry": -1}, "Valid daysToExpiry is required"),
        ({"daysToExpiry": 2.5}, "Valid daysToExpiry is required"),
        ({"daysToExpiry": "30"}, "Valid daysToExpiry is required"),
        ({"underlyingPrice": "x"}, "Valid underlyingPrice is required"),
        ({"legs": [42]}, "Each leg must have a valid strike price"),
        ({"legs": "100C"}, "At least one leg is required"),
    ],
)
def test_analyze_rejects_invalid_request(overrides, message):
    resp = client.post("/api/options/analyze", json=_payload(**overrides))
    assert resp.status_code == 400
    assert resp.json() == {"detail": message}


@pytest.mark.parametrize(
    "leg_overrides,message",
    [
        ({"strike": 0}, "Each leg must have a valid strike price"),
        ({"type": "future"}, "Each leg type must be 'call' or 'put'"),
        ({"action": "hold"}, "Each leg action must be 'buy' or 'sell'"),
        ({"quantity": 0}, "Each leg must have a positive quantity"),
        ({"quantity": 1.5}, "Each leg must have a positive quantity"),
        ({"premium": -1}, "Each leg must have a valid premium"),
        ({"strike": "abc"}, "Each leg must have a valid strike price"),
        ({"strike": None}, "Each leg must have a valid strike price"),
        ({"type": None}, "Each leg type must be 'call' or 'put'"),
        ({"action": None}, "Each leg action must be 'buy' or 'sell'"),
        ({"quantity": None}, "Each leg must have a positive quantity"),
        ({"quantity": "2"}, "Each leg must have a positive quantity"),
        ({"premium": "3.6"}, "Each leg must have a valid premium"),
    ],
)
def test_analyze_rejects_invalid_leg(leg_overrides, message):
    leg = {**_payload()["legs"][0], **leg_overrides}
    resp = client.post("/api/options/analyze", json=_payload(legs=[leg]))
    assert resp.status_code == 400
    assert resp.json()["detail"] == message


@pytest.mark.parametrize(
    "field,message",
    [
        ("strike", "Each leg must have a valid strike price"),
        ("type", "Each leg type must be 'call' or 'put'"),
        ("action", "Each leg action must be 'buy' or 'sell'"),
        ("quantity", "Each leg must have a positive quantity"),
        ("premium", "Each leg must have a valid premium"),
    ],
)
def test_analyze_rejects_leg_missing_field(field, message):
    leg = {k: v for k, v in _payload()["legs"][0].items() if k != field}
    resp = client.post("/api/options/analyze", json=_payload(legs=[leg]))
    assert resp.status_code == 400
    assert resp.json()["detail"] == message


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_analyze_rejects_non_finite_strike(literal):
    body = (
        '{"legs": [{"strike": '
        + literal
        + ', "type": "call", "action": "buy", "quantity": 1, "premium": 3.6}],'
        ' "underlyingPrice": 100, "daysToExpiry": 30}'
    )
    resp = client.post(
        "/api/options/analyze",
        content=body,
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Each leg must have a valid strike price"}


@pytest.mark.parametrize("btc_price", [-5, 0])
def test_analyze_ignores_non_positive_btc_price(btc_price):
    resp = client.post("/api/options/analyze", json=_payload(btcPrice=btc_price))
    assert resp.status_code == 200
    data = resp.json()
    assert data["totalCost"] == 360.0
    assert data["totalCostBtc"] is None
    assert data["currentPnlBtc"] is None
    assert all(b["btcPrice"] is None for b in data["breakevens"])


def test_analyze_internal_error_returns_500(monkeypatch):
    import optrisk.web.main as web_main

    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(web_main, "analyze_strategy", boom)
    resp = client.post("/api/options/analyze", json=_payload())
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to analyze strategy"}


def test_pnl_curve_endpoint():
    resp = client.post("/api/options/pnl-curve", json=_payload(numPoints=10))
    assert resp.status_code == 200
    points = resp.json()["points"]
    assert len(points) == 10
    assert set(points[0]) == {"price", "expiryPnl", "currentPnl"}
    assert points[0]["expiryPnl"] == -360.0


def test_pnl_curve_validates_request():
    resp = client.post("/api/options/pnl-curve", json=_payload(legs=[]))
    assert resp.status_code == 400
