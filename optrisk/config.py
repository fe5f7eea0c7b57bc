"""Application settings.

Settings are read once at import from the file named by ``OPTRISK_CONFIG``
or, failing that, the first of ``config.yaml``, ``config.yml`` and ``.env``
found at the project root. Only the CLI and web layers consult them; the
pricing engine receives every parameter explicitly.
"""
from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Dict, List

import yaml
from loguru import logger
from pydantic import BaseModel, field_validator


class AppConfig(BaseModel):
    """Typed configuration loaded from YAML or ``KEY=VALUE`` files."""

    LOG_LEVEL: str = "INFO"
    RISK_FREE_RATE: float = 0.05
    # Number of points on P&L charts
    PRICE_RANGE_POINTS: int = 50
    # False reports portfolio gamma/theta/vega as zero
    AGGREGATE_SECOND_ORDER_GREEKS: bool = True

    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [o.strip() for o in value.split(",") if o.strip()]
        return value


_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_DEFAULT_FILES = ("config.yaml", "config.yml", ".env")
_ENV_VAR = "OPTRISK_CONFIG"


def _parse_env_file(text: str) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, val = line.split("=", 1)
        data[key.strip()] = val.strip()
    return data


def _read_settings(path: Path) -> Dict[str, Any]:
    """Return the raw key/value pairs stored in ``path``."""
    text = path.read_text(encoding="utf-8")
    if path.suffix not in {".yaml", ".yml"}:
        return _parse_env_file(text)
    try:
        content = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        logger.warning(f"Ignoring malformed config {path}: {exc}")
        return {}
    return content if isinstance(content, dict) else {}


def config_path() -> Path | None:
    """Return the settings file in effect, if any."""
    override = os.environ.get(_ENV_VAR)
    if override:
        return Path(override)
    for name in _DEFAULT_FILES:
        candidate = _PROJECT_ROOT / name
        if candidate.exists():
            return candidate
    return None


def load_config() -> AppConfig:
    """Build an :class:`AppConfig` from defaults overlaid with the settings file."""
    path = config_path()
    values: Dict[str, Any] = {}
    if path is not None and path.exists():
        values = _read_settings(path)
    known = {k: v for k, v in values.items() if k in AppConfig.model_fields}
    return AppConfig(**known)


def save_config(config: AppConfig, path: Path | None = None) -> None:
    """Write ``config`` as YAML to ``path`` or the active settings location."""
    if path is None:
        override = os.environ.get(_ENV_VAR)
        path = Path(override) if override else _PROJECT_ROOT / "config.yaml"
    path.write_text(yaml.safe_dump(config.model_dump()), encoding="utf-8")


CONFIG = load_config()
LOCK = threading.Lock()


def get(name: str, default: Any | None = None) -> Any:
    """Return the setting ``name`` or ``default`` when it does not exist."""
    with LOCK:
        return getattr(CONFIG, name, default)


def reload() -> None:
    """Re-read the settings file into :data:`CONFIG`."""
    global CONFIG
    with LOCK:
        CONFIG = load_config()


def update(values: Dict[str, Any], *, persist: bool = True) -> None:
    """Apply known ``values`` to :data:`CONFIG`, validating them first.

    Unknown keys are ignored. With ``persist`` the result is saved to disk.
    """
    global CONFIG
    with LOCK:
        known = {k: v for k, v in values.items() if k in AppConfig.model_fields}
        CONFIG = AppConfig(**{**CONFIG.model_dump(), **known})
        if persist:
            save_config(CONFIG)
