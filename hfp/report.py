"""Text summaries and JSON serialisation of projection results."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
import json
from pathlib import Path
from typing import Any, Sequence

from .engine import ProjectionResult
from .months import format_month
from .scenarios import ScenarioComparison


def _money(value: float) -> str:
    return f"{value:,.0f}"


def _json_default(value: Any) -> Any:
    if isinstance(value, date):
        return format_month(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def result_to_dict(result: ProjectionResult) -> dict[str, Any]:
    return asdict(result)


def render_summary(comparison: ScenarioComparison) -> str:
    result = comparison.result
    summary = comparison.summary
    lines = [
        f"Scenario: {comparison.name or comparison.settings_id} ({comparison.settings_id})",
        f"Months: {format_month(result.start_date)} to {format_month(result.monthly[-1].date)}",
        f"Starting balance: {_money(sum(result.initial_balances.values()))}",
        f"Final balance: {_money(summary.final_balance)}",
        f"Max balance: {_money(summary.max_balance)}",
        f"Min balance: {_money(summary.min_balance)}",
        f"Total income: {_money(summary.total_income)}",
        f"Total expense: {_money(summary.total_expense)}",
        f"Total life event cost: {_money(summary.total_life_event_cost)}",
    ]
    if summary.total_withdrawal:
        lines.append(f"Total withdrawals: {_money(summary.total_withdrawal)}")
    if summary.insolvent_months:
        first = format_month(summary.insolvent_months[0])
        lines.append(f"Insolvent months: {len(summary.insolvent_months)} (first {first})")
    else:
        lines.append("Insolvent months: 0")
    return "\n".join(lines)


def render_comparison_table(comparisons: Sequence[ScenarioComparison]) -> str:
    """Year-end total balance per scenario, one row per projection year."""
    if not comparisons:
        return ""
    headers = ["Year"] + [c.name or c.settings_id for c in comparisons]
    rows: list[list[str]] = []
    years = max(len(c.year_end_balances) for c in comparisons)
    for idx in range(years):
        row = [str(idx + 1)]
        for comparison in comparisons:
            balances = comparison.year_end_balances
            row.append(_money(balances[idx]) if idx < len(balances) else "")
        rows.append(row)

    widths = [max(len(line[col]) for line in [headers] + rows) for col in range(len(headers))]
    out = ["  ".join(cell.rjust(width) for cell, width in zip(line, widths)) for line in [headers] + rows]
    return "\n".join(out)


def write_results(path: str | Path, results: Sequence[ProjectionResult]) -> None:
    payload = {"results": [result_to_dict(result) for result in results]}
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, indent=2, default=_json_default), encoding="utf-8")
