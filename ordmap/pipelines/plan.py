"""
Edit plan orchestration.

A plan is a configuration mapping holding a ``document``, an optional dotted
``target`` path to the mapping inside it, and a list of named ``operations``.
Each operation is dispatched to the editor and its outcome recorded, so one
failing step is reported rather than aborting the whole run.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Hashable, Mapping, MutableMapping, Optional

from loguru import logger

from ordmap.mapping import (
    InvalidOperationError,
    OrderedMapEditor,
    OrderedMapError,
    Single,
    natural_order,
    reverse_order,
)
from ordmap.reporting import save_mapping_json, save_results_csv, write_plan_report
from ordmap.utils import clone_config, get_by_dotted_path


@dataclass
class OperationResult:
    step: int
    op: str
    success: bool
    error: Optional[str] = None
    length: int = 0


@dataclass
class PlanResult:
    document: Any
    mapping: MutableMapping[Hashable, Any]
    target: Optional[str] = None
    results: list[OperationResult] = field(default_factory=list)
    runtime_seconds: float = 0.0
    report_paths: dict[str, Path] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return all(result.success for result in self.results)


def _require(spec: Mapping[str, Any], name: str) -> Any:
    if name not in spec:
        raise InvalidOperationError(
            f"Operation '{spec.get('op')}' requires the '{name}' parameter"
        )
    return spec[name]


def _payload(spec: Mapping[str, Any]) -> Any:
    # "value" always inserts one value, even a mapping; "insertions" follows
    # the usual rule where a mapping is a block of pairs.
    if "value" in spec:
        return Single(spec["value"])
    return _require(spec, "insertions")


def _comparator(order: str) -> Callable[[Any, Any], int]:
    if order == "ascending":
        return natural_order
    if order == "descending":
        return reverse_order
    raise InvalidOperationError(f"Unknown sort order '{order}'")


def _insert_at_offset(editor: OrderedMapEditor, spec: Mapping[str, Any]) -> bool:
    return editor.insert_at_offset(
        _require(spec, "offset"),
        _payload(spec),
        preserve_keys=bool(spec.get("preserve_keys", False)),
    )


def _insert_at_key(editor: OrderedMapEditor, spec: Mapping[str, Any]) -> bool:
    return editor.insert_at_key(
        _require(spec, "anchor"),
        _payload(spec),
        insert_before=bool(spec.get("insert_before", False)),
        preserve_keys=bool(spec.get("preserve_keys", True)),
    )


def _insert_at_value(editor: OrderedMapEditor, spec: Mapping[str, Any]) -> bool:
    return editor.insert_at_value(
        _require(spec, "anchor"),
        _payload(spec),
        insert_before=bool(spec.get("insert_before", False)),
        preserve_keys=bool(spec.get("preserve_keys", False)),
    )


def _rename_key(editor: OrderedMapEditor, spec: Mapping[str, Any]) -> bool:
    return editor.rename_key(_require(spec, "key"), _require(spec, "new_key"))


def _remove_values(editor: OrderedMapEditor, spec: Mapping[str, Any]) -> bool:
    editor.remove_values(_require(spec, "values"))
    return True


def _sort(editor: OrderedMapEditor, spec: Mapping[str, Any]) -> bool:
    comparator = _comparator(str(spec.get("order", "ascending")))
    try:
        return editor.sort(comparator, preserve_keys=bool(spec.get("preserve_keys", True)))
    except TypeError as exc:
        # The mapping is only rewritten after sorting completes.
        raise InvalidOperationError(f"Values cannot be compared: {exc}") from exc


OPERATIONS: dict[str, Callable[[OrderedMapEditor, Mapping[str, Any]], bool]] = {
    "insert_at_offset": _insert_at_offset,
    "insert_at_key": _insert_at_key,
    "insert_at_value": _insert_at_value,
    "rename_key": _rename_key,
    "remove_values": _remove_values,
    "sort": _sort,
}


def apply_operation(
    editor: OrderedMapEditor, spec: Mapping[str, Any], *, step: int = 1
) -> OperationResult:
    """Run one plan entry and capture editing failures as a failed result."""
    op = str(spec.get("op", "")) if isinstance(spec, Mapping) else ""
    try:
        if not isinstance(spec, Mapping):
            raise InvalidOperationError(f"Plan entries must be mappings, got {spec!r}")
        handler = OPERATIONS.get(op)
        if handler is None:
            raise InvalidOperationError(f"Unknown operation '{op}'")
        success = bool(handler(editor, spec))
    except OrderedMapError as exc:
        logger.warning("Step {} ({}) failed: {}", step, op or "?", exc)
        return OperationResult(step=step, op=op, success=False, error=str(exc), length=len(editor))

    logger.debug("Step {} ({}) applied | length={}", step, op, len(editor))
    return OperationResult(step=step, op=op, success=success, length=len(editor))


def _write_reports(report_cfg: Mapping[str, Any], plan: PlanResult) -> dict[str, Path]:
    paths: dict[str, Path] = {}
    if report_cfg.get("csv"):
        paths["csv"] = save_results_csv(plan.results, output_path=report_cfg["csv"])
    if report_cfg.get("markdown"):
        paths["markdown"] = write_plan_report(
            report_cfg["markdown"],
            results=plan.results,
            mapping=plan.mapping,
            target=plan.target,
            runtime_seconds=plan.runtime_seconds,
        )
    if report_cfg.get("json"):
        paths["json"] = save_mapping_json(plan.mapping, output_path=report_cfg["json"])
    for kind, path in paths.items():
        logger.info("Wrote {} report to {}", kind, path)
    return paths


def apply_edit_plan(config: Mapping[str, Any], *, dry_run: bool = False) -> PlanResult:
    """
    Apply every operation of an edit plan to its target mapping.

    Parameters
    ----------
    config:
        Plan mapping, typically loaded with ``load_config``.
    dry_run:
        Edit a deep copy of the document instead of the one held by
        ``config``.
    """
    document = config.get("document")
    if document is None:
        document = {}
    if dry_run:
        document = clone_config(document)

    target = config.get("target")
    mapping = get_by_dotted_path(document, target) if target else document
    if not isinstance(mapping, MutableMapping):
        raise ValueError(f"Plan target '{target or '<document>'}' is not a mapping.")

    operations = config.get("operations") or []
    stop_on_error = bool(config.get("stop_on_error", False))
    editor = OrderedMapEditor(mapping)
    plan = PlanResult(document=document, mapping=mapping, target=target)

    logger.info(
        "Applying {} operation(s) to '{}'{}",
        len(operations),
        target or "<document>",
        " (dry run)" if dry_run else "",
    )
    start = time.perf_counter()
    for step, spec in enumerate(operations, start=1):
        result = apply_operation(editor, spec, step=step)
        plan.results.append(result)
        if not result.success and stop_on_error:
            logger.warning("Stopping after failed step {} (stop_on_error=true)", step)
            break
    plan.runtime_seconds = time.perf_counter() - start

    plan.report_paths = _write_reports(config.get("report") or {}, plan)
    return plan
