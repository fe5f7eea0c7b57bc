import importlib

import pytest


@pytest.fixture
def cfg(monkeypatch):
    mod = importlib.import_module("optrisk.config")
    yield mod
    monkeypatch.delenv("OPTRISK_CONFIG", raising=False)
    mod.reload()


def test_defaults():
    from optrisk.config import AppConfig

    config = AppConfig()
    assert config.RISK_FREE_RATE == 0.05
    assert config.PRICE_RANGE_POINTS == 50
    assert config.AGGREGATE_SECOND_ORDER_GREEKS is True


def test_load_yaml_via_env(cfg, tmp_path, monkeypatch):
    path = tmp_path / "optrisk.yaml"
    path.write_text("RISK_FREE_RATE: 0.03\nAGGREGATE_SECOND_ORDER_GREEKS: false\n")
    monkeypatch.setenv("OPTRISK_CONFIG", str(path))
    cfg.reload()
    assert cfg.get("RISK_FREE_RATE") == 0.03
    assert cfg.get("AGGREGATE_SECOND_ORDER_GREEKS") is False
    assert cfg.get("PRICE_RANGE_POINTS") == 50
    assert cfg.get("UNKNOWN", "fallback") == "fallback"


def test_load_env_file(cfg, tmp_path, monkeypatch):
    path = tmp_path / "settings.env"
    path.write_text("# comment\nAPI_PORT=9001\nCORS_ORIGINS=http://a, http://b\n")
    monkeypatch.setenv("OPTRISK_CONFIG", str(path))
    cfg.reload()
    assert cfg.get("API_PORT") == 9001
    assert cfg.get("CORS_ORIGINS") == ["http://a", "http://b"]


def test_update_and_save(cfg, tmp_path, monkeypatch):
    path = tmp_path / "saved.yaml"
    monkeypatch.setenv("OPTRISK_CONFIG", str(path))
    cfg.reload()
    cfg.update({"LOG_LEVEL": "DEBUG", "NOT_A_KEY": 1})
    assert cfg.get("LOG_LEVEL") == "DEBUG"
    assert "LOG_LEVEL: DEBUG" in path.read_text()
    assert "NOT_A_KEY" not in path.read_text()


def test_rate_from_config_reaches_api(cfg, tmp_path, monkeypatch):
    from optrisk.web.main import build_strategy
    from optrisk.web.models import StrategyAnalysisRequest

    path = tmp_path / "rate.yaml"
    path.write_text("RISK_FREE_RATE: 0.02\n")
    monkeypatch.setenv("OPTRISK_CONFIG", str(path))
    cfg.reload()
    request = StrategyAnalysisRequest.model_validate(
        {
            "legs": [{"strike": 100, "type": "put", "action": "sell", "quantity": 1, "premium": 2}],
            "underlyingPrice": 100,
            "daysToExpiry": 7,
        }
    )
    assert build_strategy(request).risk_free_rate == 0.02
