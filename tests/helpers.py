import copy
import json
from pathlib import Path

SAMPLE_PLAN = Path(__file__).resolve().parent.parent / "sample_plan.json"


def write_plan(tmp_path: Path, data: dict, filename: str = "plan.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone_plan(data: dict) -> dict:
    return copy.deepcopy(data)


def scenario_dict(scenario_id: str = "s1", **overrides) -> dict:
    data = {
        "id": scenario_id,
        "name": f"Scenario {scenario_id}",
        "expected_returns": {"cash": 0.0, "investment": 0.0, "property": 0.0, "insurance": 0.0, "other": 0.0},
        "inflation_rate": 0.0,
        "future_income": [],
        "future_expense": [],
    }
    data.update(overrides)
    return data
