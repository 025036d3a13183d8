"""
Summaries of edit plan runs.

Results are tabulated with pandas so they can be filtered or exported, and
rendered as a short Markdown report alongside a JSON snapshot of the edited
mapping.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Hashable, Mapping, Sequence

import pandas as pd

RESULT_COLUMNS = ["step", "op", "success", "error", "length"]


def results_frame(results: Sequence[Any]) -> pd.DataFrame:
    """Return one row per operation result in execution order."""
    rows = [
        {
            "step": result.step,
            "op": result.op,
            "success": result.success,
            "error": result.error or "",
            "length": result.length,
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def save_results_csv(results: Sequence[Any], *, output_path: Path | str) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    results_frame(results).to_csv(output_path, index=False)
    return output_path


def save_mapping_json(mapping: Mapping[Hashable, Any], *, output_path: Path | str) -> Path:
    """
    Write ``mapping`` as JSON preserving its order.

    JSON object keys are strings, so integer keys are written as their string
    form.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(mapping, indent=2, ensure_ascii=False, default=str),
        encoding="utf-8",
    )
    return output_path


def write_plan_report(
    report_path: Path | str,
    *,
    results: Sequence[Any],
    mapping: Mapping[Hashable, Any],
    target: str | None = None,
    runtime_seconds: float | None = None,
) -> Path:
    report_path = Path(report_path)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    frame = results_frame(results)
    succeeded = int(frame["success"].astype(bool).sum())

    lines: list[str] = []
    lines.append("# Edit Plan Report\n")
    lines.append(f"- **Target**: `{target or '<document>'}`")
    lines.append(f"- **Operations**: {len(frame)}")
    lines.append(f"- **Succeeded**: {succeeded}")
    lines.append(f"- **Failed**: {len(frame) - succeeded}")
    if runtime_seconds is not None:
        lines.append(f"- **Runtime**: {runtime_seconds * 1000:.2f} ms")
    lines.append("")

    lines.append("## Operations\n")
    lines.append("# | Operation | Result | Length | Error")
    lines.append("--- | --- | --- | --- | ---")
    for row in frame.itertuples(index=False):
        outcome = "ok" if row.success else "failed"
        lines.append(f"{row.step} | {row.op} | {outcome} | {row.length} | {row.error or '-'}")
    lines.append("")

    lines.append("## Final Order\n")
    lines.append("Offset | Key | Value")
    lines.append("--- | --- | ---")
    for offset, (key, value) in enumerate(mapping.items()):
        lines.append(f"{offset} | {key!r} | {value!r}")
    lines.append("")

    report_path.write_text("\n".join(lines), encoding="utf-8")
    return report_path
