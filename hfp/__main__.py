"""CLI entry point for HFP."""

from __future__ import annotations

import argparse
from datetime import date
import logging
from pathlib import Path
import sys

from .months import parse_month
from .report import render_comparison_table, render_summary, write_results
from .scenarios import MAX_COMPARED_SCENARIOS, compare_scenarios
from .schema import Plan, SchemaError, SimulationSettings, load_plan
from .validate import validate_plan


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Household Finance Projector")
    parser.add_argument("plan", help="Path to plan JSON file")
    parser.add_argument("--scenario", action="append", dest="scenarios", metavar="ID", help="Scenario id to run (repeatable; default: all)")
    parser.add_argument("--start", help="Projection start month as YYYY-MM (default: current month)")
    parser.add_argument("-o", "--output", help="Write projection results as JSON to this path")
    parser.add_argument("--validate", action="store_true", help="Validate JSON only")
    parser.add_argument("--summary", action="store_true", help="Print text summary to stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_validation(errors: list[str], warnings: list[str]) -> None:
    for warning in warnings:
        print(f"WARNING: {warning}")
    for error in errors:
        print(f"ERROR: {error}", file=sys.stderr)


def _select_scenarios(plan: Plan, scenario_ids: list[str] | None) -> list[SimulationSettings]:
    if not scenario_ids:
        return plan.scenarios[:MAX_COMPARED_SCENARIOS]
    return [plan.scenario(scenario_id) for scenario_id in scenario_ids]


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    start: date | None = None
    if args.start is not None:
        start = parse_month(args.start)
        if start is None:
            print(f"--start: '{args.start}' is not valid; expected YYYY-MM", file=sys.stderr)
            return 2

    try:
        plan = load_plan(args.plan)
    except (SchemaError, OSError, ValueError) as exc:
        print(f"Failed to load plan: {exc}", file=sys.stderr)
        return 2

    validation = validate_plan(plan)
    _print_validation(validation.errors, validation.warnings)
    if not validation.is_valid:
        return 1

    if args.validate:
        print("Plan is valid.")
        return 0

    try:
        selected = _select_scenarios(plan, args.scenarios)
    except KeyError as exc:
        print(f"Unknown scenario id: {exc.args[0]}", file=sys.stderr)
        return 2

    try:
        comparisons = compare_scenarios(plan, selected, start=start)
    except ValueError as exc:
        print(f"Projection failed: {exc}", file=sys.stderr)
        return 2

    if args.summary:
        for comparison in comparisons:
            print(render_summary(comparison))
            print()
        if len(comparisons) > 1:
            print(render_comparison_table(comparisons))

    if args.output:
        write_results(args.output, [c.result for c in comparisons])
        print(f"Wrote results to {Path(args.output)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
