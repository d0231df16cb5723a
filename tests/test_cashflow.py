from datetime import date

import pytest

from hfp.cashflow import apply_returns, inflation_factor, life_event_amounts, monthly_expense, monthly_income
from hfp.schema import ExpectedReturns, FutureCashItem, OneTimeEvent, RecurringEvent


def test_apply_returns_compounds_each_category_independently():
    balances = {"cash": 1000.0, "investment": 1200.0, "property": 0.0, "insurance": 50.0, "other": -100.0}
    returns = ExpectedReturns(cash=0.012, investment=0.12, property=0.5, insurance=0.0, other=0.12)

    updated = apply_returns(balances, returns)

    assert updated["cash"] == pytest.approx(1001.0)
    assert updated["investment"] == pytest.approx(1212.0)
    assert updated["property"] == 0.0
    assert updated["insurance"] == 50.0
    assert updated["other"] == pytest.approx(-101.0)
    assert balances["investment"] == 1200.0


def test_monthly_future_income_is_active_within_window():
    items = [FutureCashItem(id="side", start_date=date(2026, 3, 1), end_date=date(2026, 5, 1), amount=50.0, frequency="monthly")]

    assert monthly_income(date(2026, 2, 1), 10.0, items) == 10.0
    assert monthly_income(date(2026, 3, 1), 10.0, items) == 60.0
    assert monthly_income(date(2026, 5, 1), 10.0, items) == 60.0
    assert monthly_income(date(2026, 6, 1), 10.0, items) == 10.0


def test_open_ended_future_income_never_expires():
    items = [FutureCashItem(id="rent", start_date=date(2026, 1, 1), amount=5.0, frequency="monthly")]

    assert monthly_income(date(2055, 12, 1), 0.0, items) == 5.0


def test_annual_future_income_only_in_anniversary_month():
    items = [FutureCashItem(id="bonus", start_date=date(2026, 6, 1), amount=1000.0, frequency="annually")]

    assert monthly_income(date(2026, 6, 1), 0.0, items) == 1000.0
    assert monthly_income(date(2027, 6, 1), 0.0, items) == 1000.0
    assert monthly_income(date(2027, 7, 1), 0.0, items) == 0.0
    assert monthly_income(date(2026, 5, 1), 0.0, items) == 0.0


def test_unknown_frequency_contributes_nothing():
    items = [FutureCashItem(id="odd", start_date=date(2026, 1, 1), amount=1000.0, frequency="weekly")]

    assert monthly_income(date(2026, 1, 1), 0.0, items) == 0.0


def test_inflation_factor_is_one_at_month_zero():
    assert inflation_factor(0.05, 0) == 1.0
    assert inflation_factor(0.12, 2) == pytest.approx(1.01 ** 2)


def test_future_expense_is_inflated_with_baseline():
    items = [FutureCashItem(id="school", start_date=date(2026, 1, 1), amount=100.0, frequency="monthly")]

    expense = monthly_expense(date(2026, 3, 1), 200.0, items, 0.12, 2)

    assert expense == pytest.approx(300.0 * 1.01 ** 2)


def test_one_time_event_only_in_matching_month():
    events = [OneTimeEvent(id="e", name="Car", category="vehicle", date=date(2027, 4, 1), cost=900.0)]

    assert life_event_amounts(date(2027, 4, 1), events) == (900.0, 900.0)
    assert life_event_amounts(date(2027, 5, 1), events) == (0.0, 0.0)
    assert life_event_amounts(date(2028, 4, 1), events) == (0.0, 0.0)


def test_recurring_income_event_is_negative_net_and_no_cost():
    events = [
        RecurringEvent(id="p", name="Pension", category="retirement", date=date(2040, 1, 1), monthly_amount=-100.0),
        OneTimeEvent(id="r", name="Roof", category="housing", date=date(2041, 1, 1), cost=250.0),
    ]

    assert life_event_amounts(date(2039, 12, 1), events) == (0.0, 0.0)
    assert life_event_amounts(date(2040, 6, 1), events) == (-100.0, 0.0)
    assert life_event_amounts(date(2041, 1, 1), events) == (150.0, 250.0)


def test_recurring_event_stops_after_end_date():
    events = [
        RecurringEvent(
            id="loan",
            name="Car loan",
            category="vehicle",
            date=date(2026, 1, 1),
            monthly_amount=30.0,
            end_date=date(2026, 12, 1),
        )
    ]

    assert life_event_amounts(date(2026, 12, 1), events) == (30.0, 30.0)
    assert life_event_amounts(date(2027, 1, 1), events) == (0.0, 0.0)


def test_undated_event_is_ignored():
    events = [OneTimeEvent(id="x", name="Unknown", category="other", date=None, cost=10.0)]

    assert life_event_amounts(date(2026, 1, 1), events) == (0.0, 0.0)
