import pytest

from optrisk.models import OptionLeg, OptionType, Side, Strategy, StrategyAnalysis


def test_option_type_parse():
    assert OptionType.parse("C") is OptionType.CALL
    assert OptionType.parse("put") is OptionType.PUT
    assert OptionType.parse(OptionType.CALL) is OptionType.CALL
    with pytest.raises(ValueError):
        OptionType.parse("straddle")


def test_side_parse():
    assert Side.parse("buy") is Side.LONG
    assert Side.parse("SELL") is Side.SHORT
    assert Side.SHORT.sign == -1
    assert Side.LONG.action == "buy"
    with pytest.raises(ValueError):
        Side.parse("hold")


@pytest.mark.parametrize("kwargs", [{"strike": 0}, {"strike": -10}, {"quantity": 0}])
def test_option_leg_validation(kwargs):
    params = {"strike": 100, "option_type": "call", "side": "long", **kwargs}
    with pytest.raises(ValueError):
        OptionLeg(**params)


def test_option_leg_from_dict():
    leg = OptionLeg.from_dict(
        {"strike": "95", "type": "P", "action": "sell", "quantity": 2, "premium": 1.5, "iv": 0.25}
    )
    assert leg.option_type is OptionType.PUT
    assert leg.side is Side.SHORT
    assert leg.signed_quantity == -2
    assert leg.entry_premium == 1.5
    assert leg.has_usable_vol


def test_strategy_is_hashable():
    legs = [OptionLeg(100, "call", "long"), OptionLeg(90, "put", "short")]
    strategy = Strategy(legs=legs, spot=100.0, days_to_expiry=10)
    assert isinstance(strategy.legs, tuple)
    assert strategy.strikes == [90, 100]
    assert hash(strategy) == hash(Strategy(legs=tuple(legs), spot=100.0, days_to_expiry=10))


def test_strategy_analysis_field_names():
    assert "leg_valuations" in StrategyAnalysis.__dataclass_fields__
