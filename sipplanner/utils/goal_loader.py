from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from sipplanner.core.schemas import InvalidGoal
from sipplanner.utils.logging import get_logger
from sipplanner.utils.sip_models import Goal
from sipplanner.utils.validators import validate_goal

logger = get_logger("goal_loader")

# Positional CSV columns; anything after step-up (the computed columns of an
# export) is ignored.
CSV_COLUMNS = ["name", "currentPrice", "inflationRate", "years", "expectedReturn", "stepUpRate"]
MIN_CSV_COLUMNS = 5

Record = Tuple[int, Dict[str, Any]]  # (line number, raw fields)


class GoalImportError(ValueError):
    pass


def csv_records(text: str) -> List[Record]:
    content = (text or "").strip()
    if len(content.splitlines()) < 2:
        raise GoalImportError("CSV file is empty or invalid")

    reader = csv.reader(io.StringIO(content), skipinitialspace=True)
    next(reader)  # header

    out: List[Record] = []
    for row in reader:
        values = [v.strip() for v in row]
        if not any(values):
            continue
        if len(values) < MIN_CSV_COLUMNS:
            raise GoalImportError(f"Invalid CSV format on line {reader.line_num}")
        out.append((reader.line_num, dict(zip(CSV_COLUMNS, values))))
    return out


def json_records(text: str) -> List[Record]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GoalImportError(f"Invalid JSON format: {e}") from e

    if not isinstance(data, list):
        raise GoalImportError("JSON must contain an array of goals")

    out: List[Record] = []
    for idx, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            raise GoalImportError(f"Line {idx}: Goal must be an object")
        out.append((idx, item))
    return out


def _to_goals(records: List[Record]) -> List[Goal]:
    goals: List[Goal] = []
    for line_no, record in records:
        result = validate_goal(record)
        if isinstance(result, InvalidGoal):
            raise GoalImportError(f"Line {line_no}: {result.reasons[0]}")
        goals.append(result.goal)
    return goals


def parse_goals_csv(text: str) -> List[Goal]:
    goals = _to_goals(csv_records(text))
    logger.info(f"csv_import goals={len(goals)}")
    return goals


def parse_goals_json(text: str) -> List[Goal]:
    goals = _to_goals(json_records(text))
    logger.info(f"json_import goals={len(goals)}")
    return goals


def _read(path: str) -> Tuple[str, str]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Goals file not found: {p}")
    suffix = p.suffix.lower()
    if suffix not in (".csv", ".json"):
        raise GoalImportError(f"Unsupported goals file type: {p.suffix or '(none)'}. Use .csv or .json")
    return suffix, p.read_text(encoding="utf-8-sig")


def read_goal_records(path: str) -> List[Dict[str, Any]]:
    """Raw records of a goals file, unvalidated."""
    suffix, text = _read(path)
    records = csv_records(text) if suffix == ".csv" else json_records(text)
    return [r for _, r in records]


def load_goals(path: str) -> List[Goal]:
    suffix, text = _read(path)
    if suffix == ".csv":
        return parse_goals_csv(text)
    return parse_goals_json(text)
