from __future__ import annotations

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from fire_planner.core.config import FORM_DEFAULTS, SETTINGS, SUPPORTED_CURRENCIES
from fire_planner.tools.planner_tools import tool_project, tool_reachable_pot, tool_solve_contribution
from fire_planner.utils.exporters import export_projection_csv
from fire_planner.utils.formatting import fmt_currency, fmt_pct
from fire_planner.utils.logging import get_logger, log_context, setup_logging
from fire_planner.utils.preferences import load_preferences
from fire_planner.utils.projection_engine import project
from fire_planner.utils.validators import InvalidInputError, sanitize_simulation_payload

logger = get_logger("cli")


def _payload(args: argparse.Namespace) -> Dict[str, Any]:
    # rates come in percent, as on the planner form
    return {
        "current_funds": args.current_funds,
        "target_goal": getattr(args, "target", None),
        "years": args.years,
        "monthly_contribution": getattr(args, "monthly", None),
        "contribution_increase_pct": args.step_up,
        "annual_return_pct": args.annual_return,
        "annual_inflation_pct": getattr(args, "inflation", None),
    }


def _with_defaults(d: Dict[str, Any]) -> Dict[str, Any]:
    # unset flags fall back to the planner form defaults
    return {k: (FORM_DEFAULTS[k] if v is None else v) for k, v in d.items() if k in FORM_DEFAULTS}


def _currency(args: argparse.Namespace) -> str:
    return args.currency or load_preferences().currency


def _print_warnings(warnings: List[str]) -> None:
    for w in warnings:
        print(f"WARN: {w}")


def cmd_project(args: argparse.Namespace) -> int:
    out = tool_project(_with_defaults(_payload(args)), percent=True, strict=args.strict)
    if args.json:
        if not args.points:
            out.pop("result")
        print(json.dumps(out, indent=2, default=str))
        return 0

    cur = _currency(args)
    s = out["summary"]
    print(f"Horizon: {s['horizon_years']:.1f} years")
    print(f"Final (nominal): {fmt_currency(s['final_nominal'], cur)}")
    print(f"Final (real): {fmt_currency(s['final_real'], cur)}")
    if s["hit_month"]:
        print(f"Target reached: month {s['hit_month']} ({s['years_to_target']:.1f} years)")
    else:
        print("Target reached: not within horizon")
    print(f"Monthly return: {fmt_pct(s['monthly_return_rate'])} · monthly inflation: {fmt_pct(s['monthly_inflation_rate'])}")
    print(f"Passive income ({out['basis']}):")
    for row in out["passive_income"]:
        print(f"  {fmt_pct(row['rate'])}: {fmt_currency(row['yearly'], cur)}/yr · {fmt_currency(row['monthly'], cur)}/mo")
    _print_warnings(out["warnings"])
    return 0


def cmd_solve_contribution(args: argparse.Namespace) -> int:
    out = tool_solve_contribution(_with_defaults(_payload(args)), percent=True, strict=args.strict)
    if args.json:
        print(json.dumps(out, indent=2))
        return 0

    cur = _currency(args)
    if out["status"] == "bracket_exceeded":
        print(f"Required monthly contribution: more than {fmt_currency(out['monthly_contribution'], cur)} (search bracket exceeded)")
    else:
        print(f"Required monthly contribution: {fmt_currency(out['monthly_contribution'], cur)}")
        if out["status"] == "already_reached":
            print("Target is reached without further contributions.")
    _print_warnings(out["warnings"])
    return 0


def cmd_reachable_pot(args: argparse.Namespace) -> int:
    out = tool_reachable_pot(_with_defaults(_payload(args)), percent=True, strict=args.strict)
    if args.json:
        print(json.dumps(out, indent=2))
        return 0

    print(f"Reachable pot (nominal): {fmt_currency(out['final_nominal'], _currency(args))}")
    _print_warnings(out["warnings"])
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    sim, report = sanitize_simulation_payload(_with_defaults(_payload(args)), percent=True, strict=args.strict)
    filename, blob = export_projection_csv(project(sim), currency=_currency(args), filename=SETTINGS.export_filename)
    dest = Path(args.out or filename)
    dest.write_bytes(blob)
    print(f"Wrote {dest}")
    _print_warnings([w.message for w in report.warnings])
    return 0


def _add_common(sp: argparse.ArgumentParser, *, target: bool, monthly: bool, inflation: bool) -> None:
    sp.add_argument("--current-funds", dest="current_funds", default=None)
    if target:
        sp.add_argument("--target", default=None)
    sp.add_argument("--years", default=None)
    if monthly:
        sp.add_argument("--monthly", default=None)
    sp.add_argument("--step-up", dest="step_up", default=None, help="Annual contribution increase, percent")
    sp.add_argument("--return", dest="annual_return", default=None, help="Expected annual return, percent")
    if inflation:
        sp.add_argument("--inflation", default=None, help="Annual inflation, percent")
    sp.add_argument("--currency", choices=SUPPORTED_CURRENCIES, default=None)
    sp.add_argument("--strict", action="store_true", help="Reject invalid values instead of coercing them")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fire-planner", description="FIRE projection calculator")
    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser("project", help="Project portfolio growth")
    _add_common(pr, target=True, monthly=True, inflation=True)
    pr.add_argument("--json", action="store_true")
    pr.add_argument("--points", action="store_true", help="Include the monthly trajectory in --json output")
    pr.set_defaults(func=cmd_project)

    sc = sub.add_parser("solve-contribution", help="Monthly contribution needed to reach the target")
    _add_common(sc, target=True, monthly=False, inflation=False)
    sc.add_argument("--json", action="store_true")
    sc.set_defaults(func=cmd_solve_contribution)

    rp = sub.add_parser("reachable-pot", help="Nominal pot reachable with a fixed contribution")
    _add_common(rp, target=False, monthly=True, inflation=False)
    rp.add_argument("--json", action="store_true")
    rp.set_defaults(func=cmd_reachable_pot)

    ex = sub.add_parser("export", help="Write the monthly projection to CSV")
    _add_common(ex, target=True, monthly=True, inflation=True)
    ex.add_argument("--out", default=None)
    ex.set_defaults(func=cmd_export)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    setup_logging(SETTINGS.log_level, stream=sys.stderr)
    args = build_parser().parse_args(argv)
    with log_context(run_id=uuid.uuid4().hex[:8]):
        logger.debug("command=%s", args.cmd)
        try:
            rc = args.func(args)
        except InvalidInputError as e:
            for issue in e.report.errors:
                print(f"ERROR: {issue.message}")
            rc = 2
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
