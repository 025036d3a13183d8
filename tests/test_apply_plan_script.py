import importlib.util
import sys
from pathlib import Path

import pytest

from ordmap.utils import dump_config, load_config

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "apply_plan.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("apply_plan_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write_plan(path: Path, operations: list) -> Path:
    dump_config(
        {
            "target": "items",
            "document": {"items": {"home": "Home", "about": "About"}},
            "operations": operations,
        },
        path,
    )
    return path


@pytest.fixture
def script(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    return _load_script()


def test_main_writes_edited_document(script, monkeypatch, tmp_path):
    plan = _write_plan(
        tmp_path / "plan.yaml",
        [{"op": "insert_at_key", "anchor": "home", "insertions": {"blog": "Blog"}}],
    )
    output = tmp_path / "out" / "document.yaml"
    monkeypatch.setattr(
        sys, "argv", ["apply_plan.py", "--config", str(plan), "--output", str(output)]
    )

    assert script.main() == 0

    edited = load_config(output)
    assert list(edited["items"]) == ["home", "blog", "about"]


def test_main_dry_run_leaves_plan_file_untouched(script, monkeypatch, tmp_path):
    plan = _write_plan(
        tmp_path / "plan.yaml",
        [{"op": "rename_key", "key": "about", "new_key": "team"}],
    )
    output = tmp_path / "document.yaml"
    monkeypatch.setattr(
        sys,
        "argv",
        ["apply_plan.py", "--config", str(plan), "--output", str(output), "--dry-run"],
    )

    assert script.main() == 0

    # The edited copy is written out; the plan file keeps its document.
    assert list(load_config(output)["items"]) == ["home", "team"]
    assert list(load_config(plan)["document"]["items"]) == ["home", "about"]


def test_main_returns_one_when_a_step_fails(script, monkeypatch, tmp_path):
    plan = _write_plan(
        tmp_path / "plan.yaml",
        [{"op": "rename_key", "key": "missing", "new_key": "x"}],
    )
    monkeypatch.setattr(sys, "argv", ["apply_plan.py", "--config", str(plan)])

    assert script.main() == 1
