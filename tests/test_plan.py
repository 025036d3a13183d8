from pathlib import Path

import pytest

from ordmap.pipelines import apply_edit_plan, apply_operation
from ordmap.mapping import OrderedMapEditor
from ordmap.utils import clone_config, load_config

EXAMPLE_PLAN = Path(__file__).resolve().parent.parent / "configs" / "example_plan.yaml"


def _menu_plan() -> dict:
    return {
        "target": "menu.items",
        "document": {
            "menu": {"items": {"home": "Home", "about": "About", "contact": "Contact"}},
        },
        "operations": [
            {"op": "insert_at_key", "anchor": ["blog", "home"], "insertions": {"blog": "Blog"}},
            {"op": "rename_key", "key": "about", "new_key": "team"},
            {"op": "insert_at_offset", "offset": 0, "value": "Top", "preserve_keys": True},
        ],
    }


def test_apply_edit_plan_edits_target_in_place():
    config = _menu_plan()

    plan = apply_edit_plan(config)

    items = config["document"]["menu"]["items"]
    assert plan.mapping is items
    assert plan.succeeded
    assert list(items.items()) == [
        (0, "Top"),
        ("home", "Home"),
        ("blog", "Blog"),
        ("team", "About"),
        ("contact", "Contact"),
    ]
    assert [result.length for result in plan.results] == [4, 4, 5]


def test_apply_edit_plan_dry_run_leaves_document_untouched():
    config = _menu_plan()

    plan = apply_edit_plan(config, dry_run=True)

    assert list(config["document"]["menu"]["items"]) == ["home", "about", "contact"]
    assert list(plan.mapping) == [0, "home", "blog", "team", "contact"]


def test_failed_steps_are_recorded_and_skipped():
    config = _menu_plan()
    config["operations"] = [
        {"op": "insert_at_key", "anchor": "missing", "insertions": {"x": 1}},
        {"op": "explode"},
        {"op": "rename_key", "key": "home"},
        "not-a-mapping",
        {"op": "insert_at_offset", "offset": 99, "insertions": "x"},
        {"op": "remove_values", "values": ["About"]},
    ]

    plan = apply_edit_plan(config)

    assert [result.success for result in plan.results] == [False, False, False, False, False, True]
    assert "missing" in plan.results[0].error
    assert "Unknown operation" in plan.results[1].error
    assert "new_key" in plan.results[2].error
    assert not plan.succeeded
    assert list(plan.mapping) == ["home", "contact"]


def test_stop_on_error_halts_the_plan():
    config = _menu_plan()
    config["stop_on_error"] = True
    config["operations"].insert(0, {"op": "rename_key", "key": "nope", "new_key": "x"})

    plan = apply_edit_plan(config)

    assert len(plan.results) == 1
    assert list(plan.mapping) == ["home", "about", "contact"]


def test_target_must_be_a_mapping():
    with pytest.raises(ValueError):
        apply_edit_plan({"target": "menu.title", "document": {"menu": {"title": "Main"}}})


def test_sort_operation_orders_and_validates():
    editor = OrderedMapEditor({"a": 2, "b": 1, "c": 3})

    result = apply_operation(editor, {"op": "sort", "order": "descending", "preserve_keys": False})
    assert result.success
    assert list(editor.mapping.items()) == [(0, 3), (1, 2), (2, 1)]

    result = apply_operation(editor, {"op": "sort", "order": "sideways"}, step=2)
    assert not result.success
    assert result.step == 2


def test_example_plan_runs_end_to_end(tmp_path: Path):
    config = clone_config(load_config(EXAMPLE_PLAN))
    config["report"] = {
        "csv": str(tmp_path / "plan.csv"),
        "markdown": str(tmp_path / "plan.md"),
        "json": str(tmp_path / "plan.json"),
    }

    plan = apply_edit_plan(config)

    assert plan.succeeded
    assert list(plan.mapping.items()) == [
        ("team", "About"),
        ("blog", "Blog"),
        ("contact", "Contact"),
        ("home", "Home"),
        ("shop", "Shop"),
    ]
    assert set(plan.report_paths) == {"csv", "markdown", "json"}
    assert all(path.exists() for path in plan.report_paths.values())


def test_sort_over_incomparable_values_is_a_failed_step():
    config = {
        "document": {"a": 1, "b": "x"},
        "operations": [{"op": "sort"}, {"op": "rename_key", "key": "a", "new_key": "z"}],
    }

    plan = apply_edit_plan(config)

    assert [result.success for result in plan.results] == [False, True]
    assert "cannot be compared" in plan.results[0].error
    assert list(plan.mapping.items()) == [("z", 1), ("b", "x")]
