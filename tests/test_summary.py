from datetime import date

from hfp.engine import MonthlyProjectionRow
from hfp.summary import summarize, year_end_balances


def _row(month: int, total: float, income: float = 0.0, expense: float = 0.0, cost: float = 0.0) -> MonthlyProjectionRow:
    return MonthlyProjectionRow(
        date=date(2026, month, 1),
        total_balance=total,
        balance_by_category={"cash": total, "investment": 0.0, "property": 0.0, "insurance": 0.0, "other": 0.0},
        income=income,
        expense=expense,
        life_event_net=cost,
        life_event_cost=cost,
        net_cash_flow=income - expense - cost,
        withdrawal_amount=0.0,
    )


def test_initial_total_participates_in_max_and_min():
    rows = [_row(1, 50.0), _row(2, 60.0)]

    summary = summarize(rows, initial_total=100.0)

    assert summary.max_balance == 100.0
    assert summary.min_balance == 50.0
    assert summary.final_balance == 60.0


def test_totals_and_insolvent_months():
    rows = [
        _row(1, 10.0, income=5.0, expense=2.0),
        _row(2, -1.0, income=5.0, expense=3.0, cost=7.0),
        _row(3, 0.0, income=5.0, expense=4.0),
        _row(4, -0.5),
    ]

    summary = summarize(rows, initial_total=0.0)

    assert summary.total_income == 15.0
    assert summary.total_expense == 9.0
    assert summary.total_life_event_cost == 7.0
    assert summary.insolvent_months == [date(2026, 2, 1), date(2026, 4, 1)]
    assert summary.min_balance == -1.0


def test_empty_series_summarises_to_initial_total():
    summary = summarize([], initial_total=42.0)

    assert summary.final_balance == 0.0
    assert summary.max_balance == 42.0
    assert summary.min_balance == 42.0


def test_year_end_balances_take_every_twelfth_month():
    rows = [_row(1, float(i)) for i in range(36)]

    assert year_end_balances(rows) == [11.0, 23.0, 35.0]
    assert year_end_balances(rows[:11]) == []
