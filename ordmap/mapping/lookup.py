"""Offset resolution by key or by value."""

from __future__ import annotations

from typing import Any, Hashable, Mapping, Optional, Sequence, Union

KeyCandidates = Union[Hashable, Sequence[Hashable]]


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without coercion: ``0``, ``0.0``, ``"0"`` and ``False`` differ."""
    return type(left) is type(right) and bool(left == right)


def loose_equals(left: Any, right: Any) -> bool:
    """Plain ``==`` equality, so ``0 == 0.0 == False``."""
    return bool(left == right)


def _as_candidates(candidate_keys: KeyCandidates) -> list[Hashable]:
    if isinstance(candidate_keys, (list, tuple)):
        return list(candidate_keys)
    return [candidate_keys]


def find_offset_by_key(
    mapping: Mapping[Hashable, Any], candidate_keys: KeyCandidates
) -> Optional[int]:
    """
    Return the offset of the first candidate key present in ``mapping``.

    Parameters
    ----------
    mapping:
        Ordered mapping to search.
    candidate_keys:
        A single key, or a list/tuple of fallback keys tried in order. The
        first candidate found wins even if a later one sits earlier in the
        mapping.
    """
    keys = list(mapping.keys())
    for candidate in _as_candidates(candidate_keys):
        for offset, key in enumerate(keys):
            if strict_equals(key, candidate):
                return offset
    return None


def find_offset_by_value(mapping: Mapping[Hashable, Any], value: Any) -> Optional[int]:
    """Return the offset of the first value strictly equal to ``value``."""
    for offset, candidate in enumerate(mapping.values()):
        if strict_equals(candidate, value):
            return offset
    return None
