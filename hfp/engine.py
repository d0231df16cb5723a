"""Core month-by-month deterministic projection engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
from typing import Iterable

from .aggregation import average_amount, current_asset_values
from .cashflow import apply_returns, life_event_amounts, monthly_expense, monthly_income
from .months import add_months, format_month, month_start
from .schema import (
    ASSET_CATEGORIES,
    Asset,
    AssetCategory,
    AssetHistoryRecord,
    LifeEvent,
    Plan,
    SimulationSettings,
    Transaction,
)
from .summary import ProjectionSummary, summarize
from .withdrawals import withdrawal_transfer

logger = logging.getLogger(__name__)

PROJECTION_MONTHS = 360


@dataclass(slots=True)
class MonthlyProjectionRow:
    date: date
    total_balance: float
    balance_by_category: dict[AssetCategory, float]
    income: float
    expense: float
    life_event_net: float
    life_event_cost: float
    net_cash_flow: float
    withdrawal_amount: float


@dataclass(slots=True)
class ProjectionResult:
    settings_id: str
    start_date: date
    end_date: date
    initial_balances: dict[AssetCategory, float]
    monthly: list[MonthlyProjectionRow]
    summary: ProjectionSummary


@dataclass(frozen=True, slots=True)
class ProjectionState:
    """Balances carried from one simulated month into the next."""

    month_offset: int
    date: date
    balances: dict[AssetCategory, float]


def _total(balances: dict[AssetCategory, float]) -> float:
    return sum(balances[category] for category in ASSET_CATEGORIES)


def _step(
    state: ProjectionState,
    *,
    settings: SimulationSettings,
    baseline_income: float,
    baseline_expense: float,
    life_events: list[LifeEvent],
) -> tuple[ProjectionState, MonthlyProjectionRow]:
    current = state.date

    # Returns compound the opening balance only; this month's flows come after.
    balances = apply_returns(state.balances, settings.expected_returns)

    income = monthly_income(current, baseline_income, settings.future_income)
    expense = monthly_expense(
        current,
        baseline_expense,
        settings.future_expense,
        settings.inflation_rate,
        state.month_offset,
    )
    life_event_net, life_event_cost = life_event_amounts(current, life_events)
    net_cash_flow = income - expense - life_event_net

    balances, withdrawal = withdrawal_transfer(balances=balances, policy=settings.withdrawal, current=current)
    withdrawal_amount = withdrawal.amount if withdrawal else 0.0
    balances = dict(balances)
    balances["cash"] += net_cash_flow

    row = MonthlyProjectionRow(
        date=current,
        total_balance=_total(balances),
        balance_by_category=dict(balances),
        # Reported income counts the drawdown; net_cash_flow does not, since the
        # transfer already moved that cash.
        income=income + withdrawal_amount,
        expense=expense,
        life_event_net=life_event_net,
        life_event_cost=life_event_cost,
        net_cash_flow=net_cash_flow,
        withdrawal_amount=withdrawal_amount,
    )
    next_state = ProjectionState(
        month_offset=state.month_offset + 1,
        date=add_months(current, 1),
        balances=balances,
    )
    return next_state, row


def run_projection(
    settings: SimulationSettings,
    *,
    assets: Iterable[Asset] = (),
    asset_history: Iterable[AssetHistoryRecord] = (),
    life_events: Iterable[LifeEvent] = (),
    incomes: Iterable[Transaction] = (),
    expenses: Iterable[Transaction] = (),
    start: date | None = None,
) -> ProjectionResult:
    """Project household balances for 360 months from the start month.

    ``start`` defaults to the current month and is truncated to the first of its
    month. Inputs are read, never modified.
    """
    if settings is None:
        raise TypeError("settings is required")

    start_date = month_start(start if start is not None else date.today())
    end_date = add_months(start_date, PROJECTION_MONTHS)
    logger.debug("projecting scenario %s from %s", settings.id, format_month(start_date))

    initial_balances = current_asset_values(assets, asset_history)
    baseline_income = average_amount(incomes)
    baseline_expense = average_amount(expenses)
    events = list(life_events)

    state = ProjectionState(month_offset=0, date=start_date, balances=dict(initial_balances))
    monthly: list[MonthlyProjectionRow] = []
    for _ in range(PROJECTION_MONTHS):
        state, row = _step(
            state,
            settings=settings,
            baseline_income=baseline_income,
            baseline_expense=baseline_expense,
            life_events=events,
        )
        monthly.append(row)

    return ProjectionResult(
        settings_id=settings.id,
        start_date=start_date,
        end_date=end_date,
        initial_balances=initial_balances,
        monthly=monthly,
        summary=summarize(monthly, _total(initial_balances)),
    )


def run_plan_scenario(plan: Plan, settings: SimulationSettings, start: date | None = None) -> ProjectionResult:
    household = plan.household
    return run_projection(
        settings,
        assets=household.assets,
        asset_history=household.asset_history,
        life_events=household.life_events,
        incomes=household.incomes,
        expenses=household.expenses,
        start=start,
    )
