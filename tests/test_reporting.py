import json

import pandas as pd

from ordmap.pipelines import OperationResult
from ordmap.reporting import (
    results_frame,
    save_mapping_json,
    save_results_csv,
    write_plan_report,
)


def _sample_results() -> list[OperationResult]:
    return [
        OperationResult(step=1, op="insert_at_key", success=True, length=3),
        OperationResult(step=2, op="rename_key", success=False, error="Key 'x' does not exist", length=3),
    ]


def test_results_frame_has_one_row_per_step():
    frame = results_frame(_sample_results())

    assert list(frame.columns) == ["step", "op", "success", "error", "length"]
    assert frame["step"].tolist() == [1, 2]
    assert frame["success"].tolist() == [True, False]
    assert frame["error"].tolist() == ["", "Key 'x' does not exist"]


def test_results_frame_handles_empty_runs():
    frame = results_frame([])

    assert frame.empty
    assert list(frame.columns) == ["step", "op", "success", "error", "length"]


def test_save_results_csv(tmp_path):
    path = save_results_csv(_sample_results(), output_path=tmp_path / "nested" / "plan.csv")

    loaded = pd.read_csv(path)
    assert loaded["op"].tolist() == ["insert_at_key", "rename_key"]
    assert loaded["success"].tolist() == [True, False]


def test_save_mapping_json_keeps_order(tmp_path):
    path = save_mapping_json({"b": 1, 0: "zero", "a": [1, 2]}, output_path=tmp_path / "map.json")

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert list(payload.items()) == [("b", 1), ("0", "zero"), ("a", [1, 2])]


def test_write_plan_report_lists_steps_and_final_order(tmp_path):
    path = write_plan_report(
        tmp_path / "plan.md",
        results=_sample_results(),
        mapping={"home": "Home", "blog": "Blog"},
        target="menu.items",
        runtime_seconds=0.002,
    )

    text = path.read_text(encoding="utf-8")
    assert text.startswith("# Edit Plan Report")
    assert "`menu.items`" in text
    assert "- **Succeeded**: 1" in text
    assert "- **Failed**: 1" in text
    assert "2 | rename_key | failed | 3 | Key 'x' does not exist" in text
    assert "0 | 'home' | 'Home'" in text
    assert "1 | 'blog' | 'Blog'" in text
