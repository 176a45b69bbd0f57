from __future__ import annotations

import csv
import io
import json
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

from sipplanner.utils.formatters import format_number
from sipplanner.utils.logging import get_logger
from sipplanner.utils.sip_engine import compute_goal_plan
from sipplanner.utils.sip_models import Goal

logger = get_logger("goal_export")

CSV_HEADERS = [
    "Goal Name",
    "Current Price (₹)",
    "Inflation Rate (%)",
    "Years",
    "Expected Return (%)",
    "Step-up Rate (%)",
    "Future Target (₹)",
    "Monthly SIP Required (₹)",
    "Total Investment (₹)",
    "Wealth Gain (₹)",
]


def export_goals_csv(goals: Iterable[Goal]) -> str:
    goals = list(goals or [])
    if not goals:
        return ""

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)

    for g in goals:
        plan = compute_goal_plan(g)
        writer.writerow([
            g.name,
            format_number(g.current_price),
            format_number(g.inflation_rate),
            format_number(g.years),
            format_number(g.expected_return),
            format_number(plan.stepup_rate),
            format_number(plan.future_value),
            format_number(plan.monthly_sip),
            format_number(plan.total_invested),
            format_number(plan.wealth_gain),
        ])

    logger.info(f"csv_export goals={len(goals)}")
    return buf.getvalue().rstrip("\n")


def _json_number(x: float):
    return int(x) if isinstance(x, float) and x.is_integer() else x


def export_goals_json(goals: Iterable[Goal]) -> str:
    rows: List[dict] = []
    for g in goals or []:
        row = g.model_dump(by_alias=True, exclude_none=True)
        for k in ("currentPrice", "inflationRate", "years", "expectedReturn", "stepUpRate"):
            row[k] = _json_number(row[k])
        rows.append(row)
    return json.dumps(rows, indent=2, ensure_ascii=False)


def export_filename(kind: str, today: Optional[date] = None) -> str:
    d = today or date.today()
    return f"sip-goals-{d.isoformat()}.{kind}"


def write_export(path: str, content: str) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")
    return p
