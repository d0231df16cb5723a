"""Side-by-side evaluation of several scenarios against one household."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
from typing import Sequence

from .engine import ProjectionResult, run_plan_scenario
from .months import format_month, month_start
from .schema import Plan, SimulationSettings
from .summary import ProjectionSummary, year_end_balances

logger = logging.getLogger(__name__)

MAX_COMPARED_SCENARIOS = 5


@dataclass(slots=True)
class ScenarioComparison:
    settings_id: str
    name: str
    summary: ProjectionSummary
    year_end_balances: list[float]
    result: ProjectionResult


def compare_scenarios(
    plan: Plan,
    scenarios: Sequence[SimulationSettings],
    start: date | None = None,
) -> list[ScenarioComparison]:
    """Run each scenario against the plan's household from a shared start month.

    Every run gets its own balances; results keep the order of ``scenarios``.
    """
    if len(scenarios) > MAX_COMPARED_SCENARIOS:
        raise ValueError(f"at most {MAX_COMPARED_SCENARIOS} scenarios can be compared, got {len(scenarios)}")
    seen: set[str] = set()
    for settings in scenarios:
        if settings.id in seen:
            raise ValueError(f"duplicate scenario id '{settings.id}'")
        seen.add(settings.id)

    anchor = month_start(start if start is not None else date.today())
    logger.info("comparing %d scenario(s) from %s", len(scenarios), format_month(anchor))

    comparisons: list[ScenarioComparison] = []
    for settings in scenarios:
        result = run_plan_scenario(plan, settings, start=anchor)
        comparisons.append(
            ScenarioComparison(
                settings_id=settings.id,
                name=settings.name,
                summary=result.summary,
                year_end_balances=year_end_balances(result.monthly),
                result=result,
            )
        )
    return comparisons
