from __future__ import annotations

import math
from typing import Iterable, Optional

from sipplanner.core.config import SETTINGS
from sipplanner.utils.logging import get_logger, reset_goal, set_goal
from sipplanner.utils.sip_models import Goal, GoalPlan, GrowthSeries, PortfolioSummary

logger = get_logger("sip_engine")

# Nothing in this module raises: out-of-domain inputs come back as
# negative, zero, nan or inf instead. Per-goal work tags log lines with
# the goal name and restores the previous tag afterwards.


def _round(x: float) -> float:
    """Half-up rounding to a whole monetary unit; non-finite values pass through."""
    if not math.isfinite(x):
        return x
    return float(math.floor(x + 0.5))


def _pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return math.inf
    except ValueError:
        # negative base with a fractional exponent
        return math.nan


def _monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 12 / 100


def _month_count(years: float) -> int:
    """Whole contribution months in a finite horizon; 0 for non-positive years."""
    return max(int(_round(years * 12)), 0)


def project_inflated_value(current_price: float, inflation_rate: float, years: float) -> float:
    """Cost of ``current_price`` after ``years`` of compounding inflation."""
    if current_price == 0 or years == 0:
        return current_price

    r = inflation_rate / 100
    return _round(current_price * _pow(1 + r, years))


def solve_level_sip(target_amount: float, years: float, annual_rate: float) -> float:
    """
    Monthly SIP (paid at the start of each month) that grows to ``target_amount``.

        P = FV / [((1 + i)^n - 1) / i * (1 + i)]

    Returns 0 when the target, the month count or the monthly rate is zero.
    """
    n = years * 12
    i = _monthly_rate(annual_rate)

    if target_amount == 0 or n == 0 or i == 0:
        return 0.0

    factor = ((_pow(1 + i, n) - 1) / i) * (1 + i)
    if factor == 0:
        return math.nan
    return _round(target_amount / factor)


def evaluate_stepup_future_value(
    initial_monthly: float,
    years: float,
    annual_rate: float,
    stepup_rate: float,
) -> float:
    """
    Forward simulation of a SIP whose monthly amount grows by ``stepup_rate``%
    once a year.

    The horizon is ``n = years * 12`` months (rounded to a whole month count
    for the loop). Contribution ``k`` is paid at the start of month ``k``,
    belongs to year ``k // 12`` and compounds for ``n - k`` months, so a
    fractional final year only contributes the months it actually has.
    """
    if not math.isfinite(years):
        return math.nan

    mr = _monthly_rate(annual_rate)
    growth = 1 + stepup_rate / 100
    n = years * 12

    fv = 0.0
    contribution = initial_monthly
    for k in range(_month_count(years)):
        if k and k % 12 == 0:
            contribution *= growth
        fv += contribution * _pow(1 + mr, n - k)
    return fv


def solve_stepup_sip(
    target_amount: float,
    years: float,
    annual_rate: float,
    stepup_rate: float,
    *,
    tolerance: Optional[float] = None,
    max_iterations: Optional[int] = None,
    max_bound_doublings: Optional[int] = None,
) -> float:
    """
    Initial monthly amount of a step-up SIP that reaches ``target_amount``.

    There is no closed-form inverse, so this bisects over the initial amount
    using ``evaluate_stepup_future_value`` as a monotonic oracle. The upper
    bound starts at ``target_amount / 12`` and is doubled while the oracle
    still falls short (horizons under a year, negative rates).
    """
    tol = SETTINGS.search_tolerance if tolerance is None else tolerance
    max_iter = SETTINGS.max_search_iterations if max_iterations is None else max_iterations
    max_doublings = SETTINGS.max_bound_doublings if max_bound_doublings is None else max_bound_doublings

    def oracle(monthly: float) -> float:
        return evaluate_stepup_future_value(monthly, years, annual_rate, stepup_rate)

    low = 0.0
    high = target_amount / 12

    # Widen only while the oracle responds to the amount; with no contribution
    # months (years == 0) it stays at 0 however high we go.
    doublings = 0
    while high > 0 and doublings < max_doublings:
        fv = oracle(high)
        if not 0 < fv < target_amount:
            break
        high *= 2
        doublings += 1
    if doublings:
        logger.debug(f"stepup_bound_widened doublings={doublings} high={high}")

    mid = (low + high) / 2
    iterations = 0
    while high - low > tol and iterations < max_iter:
        mid = (low + high) / 2
        if oracle(mid) < target_amount:
            low = mid
        else:
            high = mid
        iterations += 1

    logger.debug(f"stepup_search_done iterations={iterations} low={low} high={high}")
    return _round(mid)


def solve_required_sip(target_amount: float, years: float, annual_rate: float, stepup_rate: float = 0.0) -> float:
    if not stepup_rate:
        return solve_level_sip(target_amount, years, annual_rate)
    return solve_stepup_sip(target_amount, years, annual_rate, stepup_rate)


def accumulate_total_investment(monthly_or_initial: float, years: float, stepup_rate: float = 0.0) -> float:
    """Nominal sum of all contributions over the horizon (no compounding)."""
    if not stepup_rate:
        return monthly_or_initial * years * 12
    if not math.isfinite(years):
        return math.nan

    # same month schedule as evaluate_stepup_future_value
    growth = 1 + stepup_rate / 100
    total = 0.0
    contribution = monthly_or_initial
    for k in range(_month_count(years)):
        if k and k % 12 == 0:
            contribution *= growth
        total += contribution
    return total


def calculate_wealth_gain(future_value: float, total_invested: float) -> float:
    return future_value - total_invested


def compute_goal_plan(goal: Goal) -> GoalPlan:
    stepup = goal.stepup_rate or 0.0

    token = set_goal(goal.name)
    try:
        future_value = project_inflated_value(goal.current_price, goal.inflation_rate, goal.years)
        monthly = solve_required_sip(future_value, goal.years, goal.expected_return, stepup)
        invested = accumulate_total_investment(monthly, goal.years, stepup)
        logger.debug(f"goal_plan future_value={future_value} monthly_sip={monthly} total_invested={invested}")
    finally:
        reset_goal(token)

    return GoalPlan(
        name=goal.name,
        future_value=future_value,
        monthly_sip=monthly,
        total_invested=invested,
        wealth_gain=calculate_wealth_gain(future_value, invested),
        stepup_rate=stepup,
        is_stepup=stepup > 0,
    )


def aggregate_summary(goals: Iterable[Goal]) -> PortfolioSummary:
    """
    Per-goal plans summed into portfolio totals.

    Invalid goals are not skipped; whatever numbers they produce (nan/inf
    included) flow into the totals.
    """
    total_sip = 0.0
    total_fv = 0.0
    total_invested = 0.0
    plans = []

    for goal in goals:
        plan = compute_goal_plan(goal)
        plans.append(plan)
        total_sip += plan.monthly_sip
        total_fv += plan.future_value
        total_invested += plan.total_invested

    total_gain = calculate_wealth_gain(total_fv, total_invested)

    return PortfolioSummary(
        total_monthly_sip=total_sip,
        total_future_value=total_fv,
        total_invested=max(total_invested, 0.0),
        total_wealth_gain=max(total_gain, 0.0),
        goal_count=len(plans),
        plans=plans,
    )


def project_growth_series(goal: Goal) -> GrowthSeries:
    """Year-by-year invested amount and value of contributions so far (year 0 is empty)."""
    stepup = goal.stepup_rate or 0.0
    token = set_goal(goal.name)
    try:
        future_value = project_inflated_value(goal.current_price, goal.inflation_rate, goal.years)
        monthly = solve_required_sip(future_value, goal.years, goal.expected_return, stepup)
    finally:
        reset_goal(token)

    series = GrowthSeries(goal_name=goal.name, years=[0], invested=[0.0], future_values=[0.0])
    if not math.isfinite(goal.years):
        return series

    year = 1
    while year <= goal.years:
        series.years.append(year)
        series.invested.append(_round(accumulate_total_investment(monthly, year, stepup)))
        series.future_values.append(_round(evaluate_stepup_future_value(monthly, year, goal.expected_return, stepup)))
        year += 1
    return series
