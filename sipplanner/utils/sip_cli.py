from __future__ import annotations

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import List, Optional

from sipplanner.core.config import SETTINGS
from sipplanner.core.schemas import ErrorEnvelope
from sipplanner.utils.formatters import format_currency, format_percentage, format_years
from sipplanner.utils.goal_export import export_filename, export_goals_csv, export_goals_json, write_export
from sipplanner.utils.goal_loader import GoalImportError, load_goals, read_goal_records
from sipplanner.utils.logging import get_logger, set_log_context, setup_logging
from sipplanner.utils.sip_engine import aggregate_summary
from sipplanner.utils.sip_models import Goal
from sipplanner.utils.templates import TemplateCatalog
from sipplanner.utils.validators import validate_goals

logger = get_logger("sip_cli")


def _load_or_fail(path: str, as_json: bool) -> Optional[List[Goal]]:
    try:
        return load_goals(path)
    except (GoalImportError, OSError) as e:
        if as_json:
            env = ErrorEnvelope(code="IMPORT_FAILED", message=str(e), details={"path": path})
            print(env.model_dump_json(indent=2))
        else:
            print(f"Failed to load goals: {e}", file=sys.stderr)
        return None


def cmd_summary(args: argparse.Namespace) -> int:
    goals = _load_or_fail(args.file, args.json)
    if goals is None:
        return 2

    summary = aggregate_summary(goals)
    if args.json:
        print(summary.model_dump_json(indent=2))
        return 0

    for goal, plan in zip(goals, summary.plans):
        label = "Initial monthly SIP" if plan.is_stepup else "Monthly SIP"
        print(f"{goal.name}: {format_currency(goal.current_price)} today, {format_years(goal.years)} "
              f"@ {format_percentage(goal.expected_return)}")
        if plan.is_stepup:
            print(f"  Step-up: {format_percentage(plan.stepup_rate)} annually")
        print(f"  Future target: {format_currency(plan.future_value)}")
        print(f"  {label}: {format_currency(plan.monthly_sip)}")
        print(f"  Total invested: {format_currency(plan.total_invested)}")
        print(f"  Wealth gain: {format_currency(plan.wealth_gain)}")

    print(f"Total monthly SIP: {format_currency(summary.total_monthly_sip)}")
    print(f"Total future value: {format_currency(summary.total_future_value)}")
    print(f"Total invested: {format_currency(summary.total_invested)}")
    print(f"Total wealth gain: {format_currency(summary.total_wealth_gain)}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    # unvalidated records, so the report lists every problem instead of the first
    try:
        records = read_goal_records(args.file)
    except (GoalImportError, OSError) as e:
        print(f"Failed to read goals: {e}", file=sys.stderr)
        return 2

    rep = validate_goals(records)

    if args.json:
        print(rep.model_dump_json(indent=2))
    else:
        if rep.errors:
            print("Goal validation FAILED")
            for e in rep.errors:
                print(f"ERROR: {e.message} ({e.location or ''})")
        else:
            print(f"Goal validation OK ({rep.goal_count} goals)")

        for w in rep.warnings:
            print(f"WARN: {w.message} ({w.location or ''})")

    return 0 if rep.ok else 2


def cmd_export(args: argparse.Namespace) -> int:
    goals = _load_or_fail(args.file, False)
    if goals is None:
        return 2

    content = export_goals_csv(goals) if args.format == "csv" else export_goals_json(goals)
    output = args.output or str(Path(SETTINGS.export_dir) / export_filename(args.format))
    p = write_export(output, content)
    print(f"Wrote {len(goals)} goals to {p}")
    return 0


def cmd_templates(args: argparse.Namespace) -> int:
    templates = TemplateCatalog().all()
    if args.json:
        print(json.dumps([t.model_dump(by_alias=True) for t in templates], indent=2, ensure_ascii=False))
        return 0

    for t in templates:
        print(f"{t.icon} {t.template_id}: {t.name} - {format_currency(t.current_price)}, "
              f"{format_years(t.years)}, inflation {format_percentage(t.inflation_rate)}, "
              f"return {format_percentage(t.expected_return)}")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser(prog="sip_cli", description="Goal-based SIP planner")
    p.add_argument("--log-level", default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("summary", help="Required SIP per goal and portfolio totals")
    s.add_argument("file", help="Goals file (.csv or .json)")
    s.add_argument("--json", action="store_true")
    s.set_defaults(func=cmd_summary)

    v = sub.add_parser("validate", help="Validate a goals file")
    v.add_argument("file")
    v.add_argument("--json", action="store_true")
    v.set_defaults(func=cmd_validate)

    e = sub.add_parser("export", help="Export goals with computed plans")
    e.add_argument("file")
    e.add_argument("--format", choices=["csv", "json"], default="csv")
    e.add_argument("--output", default=None)
    e.set_defaults(func=cmd_export)

    t = sub.add_parser("templates", help="List built-in goal templates")
    t.add_argument("--json", action="store_true")
    t.set_defaults(func=cmd_templates)

    args = p.parse_args(argv)
    setup_logging(args.log_level or SETTINGS.log_level)
    set_log_context(request_id=str(uuid.uuid4()))
    logger.debug(f"command={args.cmd}")

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
