from __future__ import annotations

from typing import Any, Dict, List

from sipplanner.core.config import SETTINGS
from sipplanner.utils.cache import MemoCache, memoize
from sipplanner.utils.sip_engine import aggregate_summary, compute_goal_plan, project_growth_series
from sipplanner.utils.sip_models import Goal

_PLAN_CACHE = MemoCache(ttl_seconds=SETTINGS.cache_ttl_seconds)
_cached_compute_goal_plan = memoize(_PLAN_CACHE)(compute_goal_plan)

# alias -> canonical Goal field
_ALIASES = {
    "goal_name": "name",
    "title": "name",
    "price": "current_price",
    "cost": "current_price",
    "inflation": "inflation_rate",
    "inflation_pct": "inflation_rate",
    "horizon_years": "years",
    "time_horizon_years": "years",
    "expected_return_pct": "expected_return",
    "annual_return": "expected_return",
    "stepup_annual_pct": "stepup_rate",
    "step_up_rate": "stepup_rate",
}


def _normalize(payload: Dict[str, Any]) -> Dict[str, Any]:
    p = dict(payload or {})
    for alias, field in _ALIASES.items():
        if alias in p and field not in p:
            p[field] = p.pop(alias)

    # assumptions the caller left out come from config
    if "inflation_rate" not in p and "inflationRate" not in p:
        p["inflation_rate"] = SETTINGS.default_inflation_rate
    if "expected_return" not in p and "expectedReturn" not in p:
        p["expected_return"] = SETTINGS.default_expected_return
    if "stepup_rate" not in p and "stepUpRate" not in p:
        p["stepup_rate"] = SETTINGS.default_stepup_rate
    return p


def _goal(payload: Dict[str, Any]) -> Goal:
    return Goal.model_validate(_normalize(payload))


def tool_compute_goal_plan(payload: Dict[str, Any]) -> Dict[str, Any]:
    g = _goal(payload)
    plan = _cached_compute_goal_plan(g) if SETTINGS.engine_cache_enabled else compute_goal_plan(g)
    return plan.model_dump()


def tool_compute_portfolio_summary(goals: List[Dict[str, Any]]) -> Dict[str, Any]:
    out = aggregate_summary([_goal(g) for g in goals or []])
    return out.model_dump()


def tool_compute_growth_series(payload: Dict[str, Any]) -> Dict[str, Any]:
    return project_growth_series(_goal(payload)).model_dump()
