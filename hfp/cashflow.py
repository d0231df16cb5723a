"""Per-month calculators for returns, income, expense and life events."""

from __future__ import annotations

from datetime import date
import logging
from typing import Iterable

from .months import month_index
from .schema import ASSET_CATEGORIES, AssetCategory, ExpectedReturns, FutureCashItem, LifeEvent, OneTimeEvent

logger = logging.getLogger(__name__)


def apply_returns(balances: dict[AssetCategory, float], expected_returns: ExpectedReturns) -> dict[AssetCategory, float]:
    """Compound one month of each category's annual rate (rate / 12)."""
    return {
        category: balances[category] * (1.0 + expected_returns.rate_for(category) / 12.0)
        for category in ASSET_CATEGORIES
    }


def _is_active(start_date: date, end_date: date | None, current_index: int) -> bool:
    if current_index < month_index(start_date):
        return False
    return end_date is None or current_index <= month_index(end_date)


def _occurs_this_month(item: FutureCashItem, current: date) -> bool:
    if not _is_active(item.start_date, item.end_date, month_index(current)):
        return False
    if item.frequency == "monthly":
        return True
    if item.frequency == "annually":
        return current.month == item.start_date.month
    return False


def future_items_total(items: Iterable[FutureCashItem], current: date) -> float:
    return sum(item.amount for item in items if _occurs_this_month(item, current))


def inflation_factor(inflation_rate: float, months_elapsed: int) -> float:
    return (1.0 + inflation_rate / 12.0) ** months_elapsed


def monthly_income(current: date, baseline_income: float, future_income: Iterable[FutureCashItem]) -> float:
    """Baseline income (held flat) plus scheduled future income for the month."""
    return baseline_income + future_items_total(future_income, current)


def monthly_expense(
    current: date,
    baseline_expense: float,
    future_expense: Iterable[FutureCashItem],
    inflation_rate: float,
    months_elapsed: int,
) -> float:
    """Baseline and scheduled expense, both grown by cumulative monthly inflation."""
    factor = inflation_factor(inflation_rate, months_elapsed)
    total = baseline_expense * factor
    for item in future_expense:
        if _occurs_this_month(item, current):
            total += item.amount * factor
    return total


def _event_amount(event: LifeEvent, current_index: int) -> float:
    if event.date is None:
        logger.debug("skipping undated life event %s", event.id)
        return 0.0
    if isinstance(event, OneTimeEvent):
        return event.cost if month_index(event.date) == current_index else 0.0
    if _is_active(event.date, event.end_date, current_index):
        return event.monthly_amount
    return 0.0


def life_event_amounts(current: date, life_events: Iterable[LifeEvent]) -> tuple[float, float]:
    """Return (signed net, cost side) of life events for the month.

    Positive amounts are costs, negative amounts (e.g. a pension) are inflows.
    """
    current_index = month_index(current)
    net = 0.0
    cost = 0.0
    for event in life_events:
        amount = _event_amount(event, current_index)
        net += amount
        if amount > 0:
            cost += amount
    return net, cost
