from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict

import yaml
from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str
    cache_ttl_seconds: int

    search_tolerance: float
    max_search_iterations: int
    max_bound_doublings: int
    engine_cache_enabled: bool

    currency_symbol: str

    default_inflation_rate: float
    default_expected_return: float
    default_stepup_rate: float

    export_dir: str


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _as_bool(v: Any) -> bool:
    return str(v).strip().lower() in ("1", "true", "yes", "on")


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.
    """
    load_dotenv()

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    # Empty env vars count as "not set" so a stray SIP_LOG_LEVEL="" can't
    # override config.yaml.
    def _env_or_cfg(key: str, cfg_path: str, default):
        v = os.getenv(key)
        if v is None:
            return _deep_get(cfg, cfg_path, default)
        v = v.strip()
        return _deep_get(cfg, cfg_path, default) if v == "" else v

    env = _env_or_cfg("APP_ENV", "app.env", "dev")
    log_level = _env_or_cfg("LOG_LEVEL", "app.log_level", "INFO")
    cache_ttl_seconds = int(_env_or_cfg("CACHE_TTL_SECONDS", "app.cache_ttl_seconds", 1800))

    search_tolerance = float(_env_or_cfg("SIP_SEARCH_TOLERANCE", "engine.search_tolerance", 1.0))
    max_search_iterations = int(_env_or_cfg("SIP_MAX_SEARCH_ITERATIONS", "engine.max_search_iterations", 200))
    max_bound_doublings = int(_env_or_cfg("SIP_MAX_BOUND_DOUBLINGS", "engine.max_bound_doublings", 64))
    engine_cache_enabled = _as_bool(_env_or_cfg("SIP_CACHE_ENABLED", "engine.cache_enabled", False))

    currency_symbol = _env_or_cfg("SIP_CURRENCY_SYMBOL", "display.currency_symbol", "₹")

    default_inflation_rate = float(_env_or_cfg("SIP_DEFAULT_INFLATION", "defaults.inflation_rate", 6.0))
    default_expected_return = float(_env_or_cfg("SIP_DEFAULT_RETURN", "defaults.expected_return", 12.0))
    default_stepup_rate = float(_env_or_cfg("SIP_DEFAULT_STEPUP", "defaults.stepup_rate", 0.0))

    export_dir = _env_or_cfg("SIP_EXPORT_DIR", "paths.export_dir", "exports")

    if search_tolerance <= 0:
        search_tolerance = 1.0

    return Settings(
        env=env,
        log_level=str(log_level).upper(),
        cache_ttl_seconds=cache_ttl_seconds,
        search_tolerance=search_tolerance,
        max_search_iterations=max_search_iterations,
        max_bound_doublings=max_bound_doublings,
        engine_cache_enabled=engine_cache_enabled,
        currency_symbol=currency_symbol,
        default_inflation_rate=default_inflation_rate,
        default_expected_return=default_expected_return,
        default_stepup_rate=default_stepup_rate,
        export_dir=export_dir,
    )


# Optional convenience singleton
SETTINGS = load_settings()
