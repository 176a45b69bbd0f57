import json

import pytest

from sipplanner.utils.sip_cli import main

HEADER = "Goal Name,Current Price,Inflation Rate,Years,Expected Return,Step-up Rate"


def _run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def _csv(tmp_path, body):
    p = tmp_path / "goals.csv"
    p.write_text(f"{HEADER}\n{body}\n", encoding="utf-8")
    return str(p)


def test_summary_text(tmp_path, capsys):
    path = _csv(tmp_path, "House,5000000,7,10,12,0\nRetirement,10000000,7,20,12,10")
    assert _run(["summary", path]) == 0

    out = capsys.readouterr().out
    assert "House:" in out
    assert "Initial monthly SIP" in out
    assert "Step-up: 10% annually" in out
    assert "Total future value: ₹" in out


def test_summary_json(tmp_path, capsys):
    path = _csv(tmp_path, "Car,100000,6,10,12,0")
    assert _run(["summary", path, "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["total_future_value"] == 179085
    assert data["goal_count"] == 1


def test_summary_import_failure(tmp_path, capsys):
    path = _csv(tmp_path, "Car,abc,6,10,12")
    assert _run(["summary", path]) == 2
    assert "Invalid current price" in capsys.readouterr().err

    assert _run(["summary", str(tmp_path / "missing.csv"), "--json"]) == 2
    env = json.loads(capsys.readouterr().out)
    assert env["code"] == "IMPORT_FAILED"


def test_validate_lists_every_problem(tmp_path, capsys):
    path = _csv(tmp_path, "House,5000000,7,10,12\n,0,7,10,12")
    assert _run(["validate", path, "--json"]) == 2

    rep = json.loads(capsys.readouterr().out)
    assert rep["ok"] is False
    assert [e["message"] for e in rep["errors"]] == ["Goal name is required", "Invalid current price"]


def test_validate_ok(tmp_path, capsys):
    path = _csv(tmp_path, "House,5000000,7,10,12")
    assert _run(["validate", path]) == 0
    assert "Goal validation OK (1 goals)" in capsys.readouterr().out


def test_export_json(tmp_path, capsys):
    path = _csv(tmp_path, "House,5000000,7,10,12,5")
    out_path = tmp_path / "exports" / "goals.json"
    assert _run(["export", path, "--format", "json", "--output", str(out_path)]) == 0

    rows = json.loads(out_path.read_text(encoding="utf-8"))
    assert rows[0]["name"] == "House"
    assert rows[0]["stepUpRate"] == 5


def test_export_csv(tmp_path):
    path = _csv(tmp_path, "House,5000000,7,10,12")
    out_path = tmp_path / "goals_out.csv"
    assert _run(["export", path, "--output", str(out_path)]) == 0
    assert out_path.read_text(encoding="utf-8").startswith("Goal Name,Current Price (₹)")


def test_templates(capsys):
    assert _run(["templates", "--json"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert len(rows) == 8
    assert rows[0]["id"] == "child-education"
