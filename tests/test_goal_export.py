import json
from datetime import date

from sipplanner.utils.goal_export import (
    CSV_HEADERS,
    export_filename,
    export_goals_csv,
    export_goals_json,
    write_export,
)
from sipplanner.utils.goal_loader import parse_goals_csv, parse_goals_json
from sipplanner.utils.sip_engine import compute_goal_plan
from sipplanner.utils.sip_models import Goal


def _goals():
    return [
        Goal(goal_id=1, name="House", current_price=5000000, inflation_rate=7, years=10, expected_return=12),
        Goal(goal_id=2, name="Education", current_price=2000000, inflation_rate=6.5, years=15, expected_return=12, stepup_rate=10),
    ]


def test_csv_empty_input():
    assert export_goals_csv([]) == ""
    assert export_goals_csv(None) == ""


def test_csv_header_and_rows():
    out = export_goals_csv(_goals())
    lines = out.split("\n")
    assert lines[0] == ",".join(CSV_HEADERS)
    assert len(lines) == 3

    plan = compute_goal_plan(_goals()[0])
    expected = [
        "House", "5000000", "7", "10", "12", "0",
        str(int(plan.future_value)), str(int(plan.monthly_sip)),
        str(int(plan.total_invested)), str(int(plan.wealth_gain)),
    ]
    assert lines[1].split(",") == expected
    assert lines[2].startswith("Education,2000000,6.5,15,12,10,")


def test_csv_escapes_names():
    g = Goal(name='The "Big", House', current_price=100, inflation_rate=1, years=1, expected_return=1)
    out = export_goals_csv([g])
    assert out.split("\n")[1].startswith('"The ""Big"", House",100,')


def test_csv_export_imports_back():
    back = parse_goals_csv(export_goals_csv(_goals()))
    for src, got in zip(_goals(), back):
        assert got.name == src.name
        assert got.current_price == src.current_price
        assert got.inflation_rate == src.inflation_rate
        assert got.years == src.years
        assert got.expected_return == src.expected_return
        assert got.stepup_rate == src.stepup_rate


def test_json_export_uses_record_keys():
    rows = json.loads(export_goals_json(_goals()))
    assert rows[0] == {
        "id": 1,
        "name": "House",
        "currentPrice": 5000000,
        "inflationRate": 7,
        "years": 10,
        "expectedReturn": 12,
        "stepUpRate": 0,
    }
    assert rows[1]["inflationRate"] == 6.5


def test_json_export_round_trips_exactly():
    goals = _goals()
    back = parse_goals_json(export_goals_json(goals))
    assert [g.model_dump() for g in back] == [g.model_dump() for g in goals]


def test_export_filename():
    assert export_filename("csv", date(2024, 1, 2)) == "sip-goals-2024-01-02.csv"
    assert export_filename("json", date(2025, 12, 31)) == "sip-goals-2025-12-31.json"


def test_write_export_creates_parent_dirs(tmp_path):
    p = write_export(str(tmp_path / "out" / "goals.csv"), "a,b")
    assert p.read_text(encoding="utf-8") == "a,b"
