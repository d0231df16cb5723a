"""Plan schema dataclasses and JSON loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
import json
from pathlib import Path
from typing import Any, Final, Literal

from .months import parse_month

AssetCategory = Literal["cash", "investment", "property", "insurance", "other"]
ASSET_CATEGORIES: Final[tuple[AssetCategory, ...]] = ("cash", "investment", "property", "insurance", "other")

LifeEventCategory = Literal["education", "housing", "vehicle", "retirement", "other"]
LIFE_EVENT_CATEGORIES: Final[tuple[LifeEventCategory, ...]] = ("education", "housing", "vehicle", "retirement", "other")

Frequency = Literal["monthly", "annually"]
FREQUENCIES: Final[tuple[Frequency, ...]] = ("monthly", "annually")

# Version 1 predates the insurance category and typed life events.
CURRENT_SCHEMA_VERSION: Final = 2
SUPPORTED_SCHEMA_VERSIONS: Final = (1, 2)


class SchemaError(ValueError):
    """Raised when raw JSON cannot be parsed into schema objects."""


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{path}: expected object")
    return value


def _expect_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise SchemaError(f"{path}: expected array")
    return value


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaError(f"{path}.{key}: missing required field")
    return data[key]


def _optional(data: dict[str, Any], key: str, default: Any = None) -> Any:
    return data.get(key, default)


def _float(value: Any, path: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise SchemaError(f"{path}: expected number") from None


def _optional_float(data: dict[str, Any], key: str, path: str) -> float | None:
    value = _optional(data, key)
    return _float(value, f"{path}.{key}") if value is not None else None


def _require_month(data: dict[str, Any], key: str, path: str) -> date:
    raw = _require(data, key, path)
    parsed = parse_month(raw)
    if parsed is None:
        raise SchemaError(f"{path}.{key}: '{raw}' is not valid; expected YYYY-MM or YYYY-MM-DD")
    return parsed


def _optional_month(data: dict[str, Any], key: str, path: str) -> date | None:
    raw = _optional(data, key)
    if raw is None:
        return None
    return _require_month(data, key, path)


def _check_category(value: Any, path: str, schema_version: int) -> AssetCategory:
    if value not in ASSET_CATEGORIES:
        expected = ", ".join(ASSET_CATEGORIES)
        raise SchemaError(f"{path}: '{value}' is not valid; expected one of [{expected}]")
    if value == "insurance" and schema_version < 2:
        raise SchemaError(f"{path}: 'insurance' requires schema_version 2")
    return value


@dataclass(slots=True)
class Asset:
    id: str
    name: str
    category: AssetCategory
    coverage_amount: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, schema_version: int = CURRENT_SCHEMA_VERSION) -> "Asset":
        return cls(
            id=str(_require(data, "id", path)),
            name=str(_optional(data, "name", "")),
            category=_check_category(_require(data, "category", path), f"{path}.category", schema_version),
            coverage_amount=_optional_float(data, "coverage_amount", path),
        )


@dataclass(slots=True)
class AssetHistoryRecord:
    asset_id: str
    date: date | None
    value: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "AssetHistoryRecord":
        return cls(
            asset_id=str(_require(data, "asset_id", path)),
            date=parse_month(_optional(data, "date")),
            value=_float(_require(data, "value", path), f"{path}.value"),
        )


@dataclass(slots=True)
class Transaction:
    amount: float
    date: date | None = None
    label: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "Transaction":
        return cls(
            amount=_float(_require(data, "amount", path), f"{path}.amount"),
            date=parse_month(_optional(data, "date")),
            label=_optional(data, "label"),
        )


@dataclass(slots=True)
class FutureCashItem:
    id: str
    start_date: date
    amount: float
    frequency: Frequency
    end_date: date | None = None
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "FutureCashItem":
        return cls(
            id=str(_require(data, "id", path)),
            start_date=_require_month(data, "start_date", path),
            amount=_float(_require(data, "amount", path), f"{path}.amount"),
            frequency=_require(data, "frequency", path),
            end_date=_optional_month(data, "end_date", path),
            description=_optional(data, "description"),
        )


@dataclass(slots=True)
class OneTimeEvent:
    """Cash impact in the single month of ``date``.

    ``cost`` is signed: positive reduces cash, negative adds to it.
    """

    id: str
    name: str
    category: LifeEventCategory
    date: date | None
    cost: float


@dataclass(slots=True)
class RecurringEvent:
    """Monthly cash impact from ``date`` through ``end_date`` (open-ended if unset).

    ``monthly_amount`` follows the same sign convention as ``OneTimeEvent.cost``;
    a pension is a negative amount.
    """

    id: str
    name: str
    category: LifeEventCategory
    date: date | None
    monthly_amount: float
    end_date: date | None = None


LifeEvent = OneTimeEvent | RecurringEvent


def life_event_from_dict(data: dict[str, Any], path: str, schema_version: int = CURRENT_SCHEMA_VERSION) -> LifeEvent:
    event_id = str(_require(data, "id", path))
    name = str(_optional(data, "name", ""))
    category = str(_optional(data, "category", "other"))
    event_date = parse_month(_optional(data, "date"))

    if schema_version < 2 and "type" not in data:
        return OneTimeEvent(
            id=event_id,
            name=name,
            category=category,
            date=event_date,
            cost=_float(_require(data, "estimated_cost", path), f"{path}.estimated_cost"),
        )

    kind = _require(data, "type", path)
    if kind == "one_time":
        return OneTimeEvent(
            id=event_id,
            name=name,
            category=category,
            date=event_date,
            cost=_float(_require(data, "cost", path), f"{path}.cost"),
        )
    if kind == "recurring":
        return RecurringEvent(
            id=event_id,
            name=name,
            category=category,
            date=event_date,
            monthly_amount=_float(_require(data, "monthly_amount", path), f"{path}.monthly_amount"),
            end_date=_optional_month(data, "end_date", path),
        )
    raise SchemaError(f"{path}.type: '{kind}' is not valid; expected one of [one_time, recurring]")


@dataclass(slots=True)
class ExpectedReturns:
    cash: float = 0.0
    investment: float = 0.0
    property: float = 0.0
    insurance: float = 0.0
    other: float = 0.0

    def rate_for(self, category: AssetCategory) -> float:
        return getattr(self, category)

    def as_dict(self) -> dict[AssetCategory, float]:
        return {category: self.rate_for(category) for category in ASSET_CATEGORIES}

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, schema_version: int = CURRENT_SCHEMA_VERSION) -> "ExpectedReturns":
        if schema_version < 2:
            if "insurance" in data:
                raise SchemaError(f"{path}.insurance: requires schema_version 2")
            insurance = 0.0
        else:
            insurance = _float(_require(data, "insurance", path), f"{path}.insurance")
        return cls(
            cash=_float(_require(data, "cash", path), f"{path}.cash"),
            investment=_float(_require(data, "investment", path), f"{path}.investment"),
            property=_float(_require(data, "property", path), f"{path}.property"),
            insurance=insurance,
            other=_float(_require(data, "other", path), f"{path}.other"),
        )


@dataclass(slots=True)
class WithdrawalPolicy:
    enabled: bool
    start_date: date
    monthly_amount: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "WithdrawalPolicy":
        return cls(
            enabled=bool(_require(data, "enabled", path)),
            start_date=_require_month(data, "start_date", path),
            monthly_amount=_float(_require(data, "monthly_amount", path), f"{path}.monthly_amount"),
        )


@dataclass(slots=True)
class SimulationSettings:
    id: str
    name: str
    expected_returns: ExpectedReturns
    inflation_rate: float
    future_income: list[FutureCashItem] = field(default_factory=list)
    future_expense: list[FutureCashItem] = field(default_factory=list)
    withdrawal: WithdrawalPolicy | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, schema_version: int = CURRENT_SCHEMA_VERSION) -> "SimulationSettings":
        withdrawal_raw = _optional(data, "withdrawal")
        withdrawal = None
        if withdrawal_raw is not None:
            withdrawal = WithdrawalPolicy.from_dict(_expect_dict(withdrawal_raw, f"{path}.withdrawal"), f"{path}.withdrawal")
        return cls(
            id=str(_require(data, "id", path)),
            name=str(_optional(data, "name", "")),
            expected_returns=ExpectedReturns.from_dict(
                _expect_dict(_require(data, "expected_returns", path), f"{path}.expected_returns"),
                f"{path}.expected_returns",
                schema_version,
            ),
            inflation_rate=_float(_require(data, "inflation_rate", path), f"{path}.inflation_rate"),
            future_income=[
                FutureCashItem.from_dict(_expect_dict(item, f"{path}.future_income[{idx}]"), f"{path}.future_income[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "future_income", []), f"{path}.future_income"))
            ],
            future_expense=[
                FutureCashItem.from_dict(_expect_dict(item, f"{path}.future_expense[{idx}]"), f"{path}.future_expense[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "future_expense", []), f"{path}.future_expense"))
            ],
            withdrawal=withdrawal,
        )


@dataclass(slots=True)
class Household:
    assets: list[Asset] = field(default_factory=list)
    asset_history: list[AssetHistoryRecord] = field(default_factory=list)
    incomes: list[Transaction] = field(default_factory=list)
    expenses: list[Transaction] = field(default_factory=list)
    life_events: list[LifeEvent] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], schema_version: int = CURRENT_SCHEMA_VERSION) -> "Household":
        return cls(
            assets=[
                Asset.from_dict(_expect_dict(item, f"assets[{idx}]"), f"assets[{idx}]", schema_version)
                for idx, item in enumerate(_expect_list(_optional(data, "assets", []), "assets"))
            ],
            asset_history=[
                AssetHistoryRecord.from_dict(_expect_dict(item, f"asset_history[{idx}]"), f"asset_history[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "asset_history", []), "asset_history"))
            ],
            incomes=[
                Transaction.from_dict(_expect_dict(item, f"incomes[{idx}]"), f"incomes[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "incomes", []), "incomes"))
            ],
            expenses=[
                Transaction.from_dict(_expect_dict(item, f"expenses[{idx}]"), f"expenses[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "expenses", []), "expenses"))
            ],
            life_events=[
                life_event_from_dict(_expect_dict(item, f"life_events[{idx}]"), f"life_events[{idx}]", schema_version)
                for idx, item in enumerate(_expect_list(_optional(data, "life_events", []), "life_events"))
            ],
        )


@dataclass(slots=True)
class Plan:
    schema_version: int
    household: Household
    scenarios: list[SimulationSettings]

    def scenario(self, scenario_id: str) -> SimulationSettings:
        for settings in self.scenarios:
            if settings.id == scenario_id:
                return settings
        raise KeyError(scenario_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Plan":
        schema_version = _optional(data, "schema_version", CURRENT_SCHEMA_VERSION)
        if schema_version not in SUPPORTED_SCHEMA_VERSIONS:
            supported = ", ".join(str(v) for v in SUPPORTED_SCHEMA_VERSIONS)
            raise SchemaError(f"plan.schema_version: '{schema_version}' is not supported; expected one of [{supported}]")
        return cls(
            schema_version=CURRENT_SCHEMA_VERSION,
            household=Household.from_dict(data, schema_version),
            scenarios=[
                SimulationSettings.from_dict(_expect_dict(item, f"scenarios[{idx}]"), f"scenarios[{idx}]", schema_version)
                for idx, item in enumerate(_expect_list(_require(data, "scenarios", "plan"), "scenarios"))
            ],
        )


def load_plan(path: str | Path) -> Plan:
    """Load plan JSON into strongly-typed dataclasses.

    Version 1 documents are migrated to the current schema on load.
    """
    source = Path(path)
    raw = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SchemaError("plan: root must be a JSON object")
    return Plan.from_dict(raw)
