"""Utility helpers shared across modules."""

from .config import (  # noqa: F401
    clone_config,
    dump_config,
    get_by_dotted_path,
    load_config,
    set_by_dotted_path,
)
