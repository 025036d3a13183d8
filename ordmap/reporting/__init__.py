"""Reporting helpers for edit plan runs."""

from .summary import (  # noqa: F401
    results_frame,
    save_mapping_json,
    save_results_csv,
    write_plan_report,
)
