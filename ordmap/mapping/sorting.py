"""
Stable comparator-based sorting for ordered mappings.

Every element is decorated with its original position and comparator ties
fall back to that position, so equal elements keep their input order no
matter which sort primitive runs underneath.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Hashable, MutableMapping, Sequence, TypeVar, Union

T = TypeVar("T")

Comparator = Callable[[Any, Any], Union[int, float]]


def natural_order(left: Any, right: Any) -> int:
    """Three-way comparison using ``<`` and ``>``."""
    return (left > right) - (left < right)


def reverse_order(left: Any, right: Any) -> int:
    return natural_order(right, left)


def _stable_sorted(
    entries: Sequence[T],
    comparator: Comparator,
    value_of: Callable[[T], Any],
) -> list[T]:
    decorated = list(enumerate(entries))

    def _compare(left: tuple[int, T], right: tuple[int, T]) -> Union[int, float]:
        result = comparator(value_of(left[1]), value_of(right[1]))
        return result if result != 0 else left[0] - right[0]

    decorated.sort(key=cmp_to_key(_compare))
    return [entry for _, entry in decorated]


def stable_sort_by_value(
    container: Union[MutableMapping[Hashable, Any], list],
    comparator: Comparator,
) -> bool:
    """
    Sort values stably and discard the original keys.

    Mappings are renumbered ``0..n-1`` in sorted order; lists are sorted in
    place.
    """
    if isinstance(container, list):
        container[:] = _stable_sorted(container, comparator, lambda value: value)
        return True

    ordered = _stable_sorted(list(container.values()), comparator, lambda value: value)
    container.clear()
    container.update(enumerate(ordered))
    return True


def stable_sort_preserving_keys(
    mapping: MutableMapping[Hashable, Any], comparator: Comparator
) -> bool:
    """Sort by value stably, keeping each key attached to its value."""
    ordered = _stable_sorted(list(mapping.items()), comparator, lambda pair: pair[1])
    mapping.clear()
    mapping.update(ordered)
    return True
