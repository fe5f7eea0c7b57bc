import pytest

from optrisk.models import OptionLeg, Strategy


def make_leg(strike, option_type="call", side="long", quantity=1, premium=0.0, iv=None):
    return OptionLeg(
        strike=strike,
        option_type=option_type,
        side=side,
        quantity=quantity,
        entry_premium=premium,
        implied_vol=iv,
    )


@pytest.fixture
def long_call():
    return [make_leg(100, "call", "long", premium=3.6)]


@pytest.fixture
def long_straddle():
    return [
        make_leg(100, "call", "long", premium=5.0, iv=0.3),
        make_leg(100, "put", "long", premium=5.0, iv=0.3),
    ]


@pytest.fixture
def iron_condor():
    return [
        make_leg(90, "put", "long", premium=1.0),
        make_leg(95, "put", "short", premium=2.5),
        make_leg(105, "call", "short", premium=2.5),
        make_leg(110, "call", "long", premium=1.0),
    ]


@pytest.fixture
def strategy_factory():
    def _make(legs, spot=100.0, days=30, rate=0.05):
        return Strategy(legs=tuple(legs), spot=spot, days_to_expiry=days, risk_free_rate=rate)

    return _make
