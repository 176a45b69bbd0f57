from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Union

from sipplanner.core.schemas import GoalValidation, InvalidGoal, ValidGoal, ValidationReport
from sipplanner.utils.sip_models import Goal

# (field, camelCase alias)
_NUMERIC_FIELDS = [
    ("current_price", "currentPrice"),
    ("inflation_rate", "inflationRate"),
    ("years", "years"),
    ("expected_return", "expectedReturn"),
    ("stepup_rate", "stepUpRate"),
]

MAX_SENSIBLE_YEARS = 50
MAX_SENSIBLE_STEPUP = 50
MAX_SENSIBLE_RETURN = 30


def parse_number(value: Any) -> float:
    """Lenient numeric parse: anything unparseable becomes nan."""
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip().replace(",", ""))
    except ValueError:
        return math.nan


def coerce_goal(payload: Union[Goal, Dict[str, Any]]) -> Goal:
    """Builds a Goal from a loose record; unparseable numbers become nan."""
    if isinstance(payload, Goal):
        return payload

    p = dict(payload or {})
    data: Dict[str, Any] = {
        "id": p.get("id", p.get("goal_id")),
        "name": str(p.get("name") or "").strip(),
    }
    for field, alias in _NUMERIC_FIELDS:
        raw = p.get(alias, p.get(field))
        if field == "stepup_rate" and (raw is None or raw == ""):
            data[alias] = 0.0
            continue
        data[alias] = parse_number(raw)
    return Goal.model_validate(data)


def _bad(x: float, *, allow_zero: bool) -> bool:
    if not math.isfinite(x):
        return True
    return x < 0 if allow_zero else x <= 0


def validate_goal(payload: Union[Goal, Dict[str, Any]]) -> GoalValidation:
    goal = coerce_goal(payload)
    reasons: List[str] = []

    if not goal.name or not goal.name.strip():
        reasons.append("Goal name is required")
    if _bad(goal.current_price, allow_zero=False):
        reasons.append("Invalid current price")
    if _bad(goal.inflation_rate, allow_zero=True):
        reasons.append("Invalid inflation rate")
    if _bad(goal.years, allow_zero=False):
        reasons.append("Invalid years")
    if _bad(goal.expected_return, allow_zero=False):
        reasons.append("Invalid expected return")
    if _bad(goal.stepup_rate, allow_zero=True):
        reasons.append("Invalid step-up rate")

    if reasons:
        return InvalidGoal(reasons=reasons)
    return ValidGoal(goal=goal)


def goal_warnings(goal: Goal) -> List[str]:
    out: List[str] = []
    if goal.years > MAX_SENSIBLE_YEARS:
        out.append(f"Horizon of {goal.years:g} years is unusually long")
    if goal.stepup_rate > MAX_SENSIBLE_STEPUP:
        out.append(f"Step-up of {goal.stepup_rate:g}% per year is unusually high")
    if goal.expected_return > MAX_SENSIBLE_RETURN:
        out.append(f"Expected return of {goal.expected_return:g}% is unusually high")
    return out


def validate_goals(payloads: Iterable[Union[Goal, Dict[str, Any]]]) -> ValidationReport:
    report = ValidationReport(ok=True)

    for idx, payload in enumerate(payloads, start=1):
        report.goal_count += 1
        result = validate_goal(payload)
        if isinstance(result, InvalidGoal):
            for reason in result.reasons:
                report.add_error(reason, location=f"goal {idx}")
            continue
        for w in goal_warnings(result.goal):
            report.add_warning(w, location=f"goal {idx} ({result.goal.name})")

    if report.goal_count == 0:
        report.add_warning("No goals to validate.")

    return report.finalize()
