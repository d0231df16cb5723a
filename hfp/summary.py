"""Reduce a monthly projection series to summary indicators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .engine import MonthlyProjectionRow


@dataclass(slots=True)
class ProjectionSummary:
    final_balance: float
    max_balance: float
    min_balance: float
    total_income: float = 0.0
    total_expense: float = 0.0
    total_life_event_cost: float = 0.0
    total_withdrawal: float = 0.0
    insolvent_months: list[date] = field(default_factory=list)


def summarize(rows: Sequence["MonthlyProjectionRow"], initial_total: float) -> ProjectionSummary:
    """Single pass over the series.

    Max and min are seeded with the pre-projection total so the starting
    snapshot is bracketed as well.
    """
    summary = ProjectionSummary(
        final_balance=rows[-1].total_balance if rows else 0.0,
        max_balance=initial_total,
        min_balance=initial_total,
    )
    for row in rows:
        summary.max_balance = max(summary.max_balance, row.total_balance)
        summary.min_balance = min(summary.min_balance, row.total_balance)
        summary.total_income += row.income
        summary.total_expense += row.expense
        summary.total_life_event_cost += row.life_event_cost
        summary.total_withdrawal += row.withdrawal_amount
        if row.total_balance < 0:
            summary.insolvent_months.append(row.date)
    return summary


def year_end_balances(rows: Sequence["MonthlyProjectionRow"]) -> list[float]:
    """Total balance at the end of each complete projection year."""
    return [rows[idx].total_balance for idx in range(11, len(rows), 12)]
