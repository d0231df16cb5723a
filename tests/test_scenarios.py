from datetime import date

import pytest

from tests.helpers import clone_plan, scenario_dict, write_plan
from hfp.schema import load_plan
from hfp.scenarios import MAX_COMPARED_SCENARIOS, compare_scenarios

START = date(2026, 1, 1)


def test_compare_sample_scenarios(sample_plan_dict, tmp_path):
    plan = load_plan(write_plan(tmp_path, sample_plan_dict))

    comparisons = compare_scenarios(plan, plan.scenarios, start=START)

    assert [c.settings_id for c in comparisons] == ["base", "drawdown"]
    for comparison in comparisons:
        assert len(comparison.year_end_balances) == 30
        assert comparison.year_end_balances[-1] == comparison.summary.final_balance
        assert comparison.result.start_date == START


def test_scenarios_differ_only_by_their_settings(sample_plan_dict, tmp_path):
    data = clone_plan(sample_plan_dict)
    data["scenarios"] = [
        scenario_dict("low", expected_returns={"cash": 0.0, "investment": 0.01, "property": 0.0, "insurance": 0.0, "other": 0.0}),
        scenario_dict("high", expected_returns={"cash": 0.0, "investment": 0.07, "property": 0.0, "insurance": 0.0, "other": 0.0}),
    ]
    plan = load_plan(write_plan(tmp_path, data))

    low, high = compare_scenarios(plan, plan.scenarios, start=START)

    assert high.summary.final_balance > low.summary.final_balance
    assert low.result.initial_balances == high.result.initial_balances
    assert low.result.initial_balances is not high.result.initial_balances


def test_more_than_five_scenarios_is_rejected(sample_plan_dict, tmp_path):
    data = clone_plan(sample_plan_dict)
    data["scenarios"] = [scenario_dict(f"s{i}") for i in range(MAX_COMPARED_SCENARIOS + 1)]
    plan = load_plan(write_plan(tmp_path, data))

    with pytest.raises(ValueError, match="at most 5 scenarios"):
        compare_scenarios(plan, plan.scenarios, start=START)


def test_duplicate_scenario_ids_are_rejected(sample_plan_dict, tmp_path):
    plan = load_plan(write_plan(tmp_path, sample_plan_dict))

    with pytest.raises(ValueError, match="duplicate scenario id 'base'"):
        compare_scenarios(plan, [plan.scenarios[0], plan.scenarios[0]], start=START)
