"""Apply a YAML edit plan to an ordered mapping and write its reports."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from loguru import logger

from ordmap.pipelines import apply_edit_plan
from ordmap.utils import dump_config, load_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("configs/example_plan.yaml"),
        help="Path to the YAML edit plan.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional path for the edited document (YAML).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Edit a copy of the document and only report the outcome.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    config = load_config(args.config)
    logger.info("Applying edit plan from {}", args.config)
    plan = apply_edit_plan(config, dry_run=args.dry_run)

    for result in plan.results:
        if result.success:
            logger.info("Step {} | {} | ok | length={}", result.step, result.op, result.length)
        else:
            logger.error("Step {} | {} | failed: {}", result.step, result.op, result.error)
    logger.info("Final keys: {}", list(plan.mapping.keys()))

    if args.output is not None:
        dump_config(plan.document, args.output)
        logger.info("Edited document written to {}", args.output)

    return 0 if plan.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
