"""High-level edit plan pipelines."""

from .plan import OperationResult, PlanResult, apply_edit_plan, apply_operation  # noqa: F401
