"""Semantic and cross-reference validation for plans."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from .months import month_index
from .scenarios import MAX_COMPARED_SCENARIOS
from .schema import ASSET_CATEGORIES, FREQUENCIES, LIFE_EVENT_CATEGORIES, FutureCashItem, Plan, RecurringEvent


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _check_enum(result: ValidationResult, path: str, value: str, allowed: Iterable[str]) -> None:
    allowed_set = set(allowed)
    if value not in allowed_set:
        expected = ", ".join(sorted(allowed_set))
        result.errors.append(f"{path}: '{value}' is not valid; expected one of [{expected}]")


def _check_date_range(result: ValidationResult, base: str, start: date | None, end: date | None, start_key: str) -> None:
    if start is None or end is None:
        return
    if month_index(start) > month_index(end):
        result.errors.append(f"{base}.{start_key}/{base}.end_date: {start_key} must be <= end_date")


def _check_future_items(result: ValidationResult, base: str, items: list[FutureCashItem]) -> None:
    ids: set[str] = set()
    for idx, item in enumerate(items):
        path = f"{base}[{idx}]"
        if item.id in ids:
            result.errors.append(f"{path}.id: duplicate id '{item.id}'")
        ids.add(item.id)
        _check_enum(result, f"{path}.frequency", item.frequency, FREQUENCIES)
        _check_date_range(result, path, item.start_date, item.end_date, "start_date")
        if item.amount < 0:
            result.warnings.append(f"{path}.amount: negative amount {item.amount:g} reverses the cash flow direction")


def validate_plan(plan: Plan) -> ValidationResult:
    result = ValidationResult()
    household = plan.household

    asset_ids: set[str] = set()
    for idx, asset in enumerate(household.assets):
        base = f"assets[{idx}]"
        if asset.id in asset_ids:
            result.errors.append(f"{base}.id: duplicate asset id '{asset.id}'")
        asset_ids.add(asset.id)
        if asset.coverage_amount is not None and asset.category != "insurance":
            result.warnings.append(f"{base}.coverage_amount: ignored for '{asset.category}' assets")

    for idx, record in enumerate(household.asset_history):
        base = f"asset_history[{idx}]"
        if record.asset_id not in asset_ids:
            result.warnings.append(f"{base}.asset_id: '{record.asset_id}' does not match any asset; record ignored")
        if record.date is None:
            result.warnings.append(f"{base}.date: missing or invalid; record ignored")

    event_ids: set[str] = set()
    for idx, event in enumerate(household.life_events):
        base = f"life_events[{idx}]"
        if event.id in event_ids:
            result.errors.append(f"{base}.id: duplicate life event id '{event.id}'")
        event_ids.add(event.id)
        _check_enum(result, f"{base}.category", event.category, LIFE_EVENT_CATEGORIES)
        if event.date is None:
            result.warnings.append(f"{base}.date: missing or invalid; event ignored")
        elif isinstance(event, RecurringEvent):
            _check_date_range(result, base, event.date, event.end_date, "date")

    if not plan.scenarios:
        result.errors.append("scenarios: at least one scenario is required")
    if len(plan.scenarios) > MAX_COMPARED_SCENARIOS:
        result.warnings.append(
            f"scenarios: {len(plan.scenarios)} scenarios defined; only {MAX_COMPARED_SCENARIOS} can be compared at once"
        )

    scenario_ids: set[str] = set()
    for idx, settings in enumerate(plan.scenarios):
        base = f"scenarios[{idx}]"
        if settings.id in scenario_ids:
            result.errors.append(f"{base}.id: duplicate scenario id '{settings.id}'")
        scenario_ids.add(settings.id)

        for category in ASSET_CATEGORIES:
            rate = settings.expected_returns.rate_for(category)
            if rate < 0:
                result.warnings.append(f"{base}.expected_returns.{category}: negative rate {rate:g}")
        if settings.inflation_rate < 0:
            result.warnings.append(f"{base}.inflation_rate: negative rate {settings.inflation_rate:g}")

        _check_future_items(result, f"{base}.future_income", settings.future_income)
        _check_future_items(result, f"{base}.future_expense", settings.future_expense)

        withdrawal = settings.withdrawal
        if withdrawal is not None and withdrawal.enabled and withdrawal.monthly_amount < 0:
            result.errors.append(f"{base}.withdrawal.monthly_amount: must be >= 0")

    return result
