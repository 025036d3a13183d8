"""Configuration and document helpers for YAML edit plans."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Hashable, Mapping, MutableMapping, Sequence

import yaml


def load_config(config_path: Path) -> Mapping[str, Any]:
    """
    Parse a YAML file into a nested mapping.

    ``yaml.safe_load`` builds plain dicts, so the order of keys in the file is
    the iteration order of the result, which the editing operations rely on.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def dump_config(config: Mapping[str, Any], output_path: Path | str) -> Path:
    """Write ``config`` as YAML keeping its key order."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(dict(config), handle, sort_keys=False, allow_unicode=True)
    return output_path


def clone_config(config: Mapping[str, Any]) -> dict[str, Any]:
    """Return a deep copy of the configuration mapping."""
    return copy.deepcopy(config)


def _resolve_segment(container: Mapping[Hashable, Any], segment: str) -> Hashable:
    # YAML mappings may carry integer keys; "items.0" addresses key 0 when
    # no string key "0" exists.
    if segment not in container and segment.lstrip("-").isdigit():
        numeric = int(segment)
        if numeric in container:
            return numeric
    return segment


def set_by_dotted_path(
    config: MutableMapping[str, Any],
    dotted_key: str,
    value: Any,
) -> None:
    """
    Assign a value inside a nested mapping using dotted-path syntax.

    Examples
    --------
    >>> cfg = {"menu": {"items": {"home": "Home"}}}
    >>> set_by_dotted_path(cfg, "menu.title", "Main")
    >>> cfg["menu"]["title"]
    'Main'
    """
    keys: Sequence[str] = dotted_key.split(".")
    current: MutableMapping[Hashable, Any] = config
    for key in keys[:-1]:
        resolved = _resolve_segment(current, key)
        if resolved not in current or not isinstance(current[resolved], MutableMapping):
            current[resolved] = {}
        current = current[resolved]  # type: ignore[assignment]
    current[_resolve_segment(current, keys[-1])] = value


def get_by_dotted_path(config: Mapping[str, Any], dotted_key: str, default: Any = None) -> Any:
    """Fetch a value from a nested mapping using dotted-path syntax."""
    current: Any = config
    for key in dotted_key.split("."):
        if not isinstance(current, Mapping):
            return default
        resolved = _resolve_segment(current, key)
        if resolved not in current:
            return default
        current = current[resolved]
    return current
