"""
Positional editing of ordered mappings.

The functions below edit a ``dict`` in place: they insert pairs next to an
anchor located by key, value, or raw offset, rename keys without moving them,
and drop entries by value. Preconditions are checked before the mapping is
touched, so a call either applies completely or raises and leaves the mapping
as it was.
"""

from __future__ import annotations

from typing import Any, Hashable, Iterable, MutableMapping, Optional

from loguru import logger

from .errors import AnchorNotFoundError, InvalidOffsetError, KeyNotFoundError
from .insertions import Single, as_insertion, next_integer_key, validate_key
from .lookup import (
    KeyCandidates,
    find_offset_by_key,
    find_offset_by_value,
    loose_equals,
    strict_equals,
)
from .sorting import Comparator, stable_sort_by_value, stable_sort_preserving_keys


def _replace_contents(
    mapping: MutableMapping[Hashable, Any], pairs: Iterable[tuple[Hashable, Any]]
) -> None:
    mapping.clear()
    mapping.update(pairs)


def _validate_offset(mapping: MutableMapping[Hashable, Any], offset: Any) -> None:
    if not isinstance(offset, int) or isinstance(offset, bool):
        raise InvalidOffsetError(f"Offset must be an integer, got {offset!r}")
    if not 0 <= offset <= len(mapping):
        raise InvalidOffsetError(
            f"Offset {offset} out of range for mapping of length {len(mapping)}"
        )


def insert_at_offset(
    mapping: MutableMapping[Hashable, Any],
    offset: int,
    insertions: Any,
    preserve_keys: bool = False,
) -> bool:
    """
    Splice ``insertions`` into ``mapping`` so the first inserted pair lands at
    ``offset``.

    Parameters
    ----------
    mapping:
        Ordered mapping, edited in place.
    offset:
        Zero-based position in ``[0, len(mapping)]``; ``len(mapping)`` appends.
    insertions:
        ``Single``/``Block`` payload, a bare mapping (block) or a bare value
        (single, keyed by the next free integer key).
    preserve_keys:
        When false both the mapping and the block are renumbered ``0..n-1``.
        When true existing pairs whose keys appear in the block are removed
        first and the offset shifts left for each one removed before it.
    """
    _validate_offset(mapping, offset)
    insertion = as_insertion(insertions)

    if preserve_keys:
        current = list(mapping.items())
    else:
        current = list(enumerate(mapping.values()))

    if isinstance(insertion, Single):
        block = {next_integer_key(key for key, _ in current): insertion.value}
    else:
        block = insertion.pairs

    if not preserve_keys:
        values = [value for _, value in current]
        values[offset:offset] = list(block.values())
        _replace_contents(mapping, enumerate(values))
        return True

    for key in block:
        validate_key(key)

    # Removed positions are compared against the requested offset, not one
    # already shifted by earlier removals.
    removed_before = 0
    kept: list[tuple[Hashable, Any]] = []
    for position, (key, value) in enumerate(current):
        if key in block:
            if position < offset:
                removed_before += 1
            logger.debug("Dropping existing key {!r} replaced by inserted block", key)
            continue
        kept.append((key, value))

    splice_at = offset - removed_before
    kept[splice_at:splice_at] = list(block.items())
    _replace_contents(mapping, kept)
    return True


def _anchored_offset(anchor_offset: int, insert_before: bool) -> int:
    # An anchor at offset 0 with insert_before resolves to the very start.
    return anchor_offset if insert_before else anchor_offset + 1


def insert_at_key(
    mapping: MutableMapping[Hashable, Any],
    anchor: KeyCandidates,
    insertions: Any,
    insert_before: bool = False,
    preserve_keys: bool = True,
) -> bool:
    """
    Insert right after (or before) the first anchor key found.

    ``anchor`` may be a list of fallback keys; they are tried in order and
    compared strictly, so ``1`` never matches ``"1"``.
    """
    anchor_offset = find_offset_by_key(mapping, anchor)
    if anchor_offset is None:
        logger.debug("Anchor key(s) {!r} not found", anchor)
        raise AnchorNotFoundError(f"No anchor key among {anchor!r} exists in the mapping")

    return insert_at_offset(
        mapping,
        _anchored_offset(anchor_offset, insert_before),
        insertions,
        preserve_keys=preserve_keys,
    )


def insert_at_value(
    mapping: MutableMapping[Hashable, Any],
    anchor_value: Any,
    insertions: Any,
    insert_before: bool = False,
    preserve_keys: bool = False,
) -> bool:
    """Insert next to the first value strictly equal to ``anchor_value``."""
    anchor_offset = find_offset_by_value(mapping, anchor_value)
    if anchor_offset is None:
        logger.debug("Anchor value {!r} not found", anchor_value)
        raise AnchorNotFoundError(f"Value {anchor_value!r} does not exist in the mapping")

    return insert_at_offset(
        mapping,
        _anchored_offset(anchor_offset, insert_before),
        insertions,
        preserve_keys=preserve_keys,
    )


def rename_key(
    mapping: MutableMapping[Hashable, Any], old_key: Hashable, new_key: Hashable
) -> bool:
    """
    Rename ``old_key`` to ``new_key`` keeping its position and value.

    If ``new_key`` already labels another pair, that pair is dropped.
    """
    validate_key(new_key)
    offset = find_offset_by_key(mapping, [old_key])
    if offset is None:
        raise KeyNotFoundError(f"Key {old_key!r} does not exist in the mapping")
    if strict_equals(old_key, new_key):
        return True

    pairs: list[tuple[Hashable, Any]] = []
    for position, (key, value) in enumerate(mapping.items()):
        if position == offset:
            pairs.append((new_key, value))
        elif key == new_key:
            logger.debug("Renaming {!r} overwrites existing key {!r}", old_key, key)
        else:
            pairs.append((key, value))

    _replace_contents(mapping, pairs)
    return True


_MISSING = object()


def remove_values(mapping: MutableMapping[Hashable, Any], values: Any) -> None:
    """
    Remove the first pair loosely equal to each of ``values``.

    Unlike the anchor lookups this uses plain ``==``, so removing ``0`` also
    matches ``False`` or ``0.0``. Values that are not present are ignored.
    """
    targets = list(values) if isinstance(values, (list, tuple, set, frozenset)) else [values]

    for target in targets:
        match = next(
            (key for key, value in mapping.items() if loose_equals(value, target)),
            _MISSING,
        )
        if match is not _MISSING:
            del mapping[match]


class OrderedMapEditor:
    """Editing operations bound to one ordered mapping."""

    def __init__(self, mapping: Optional[MutableMapping[Hashable, Any]] = None) -> None:
        self.mapping: MutableMapping[Hashable, Any] = {} if mapping is None else mapping

    def __len__(self) -> int:
        return len(self.mapping)

    def keys(self) -> list[Hashable]:
        return list(self.mapping.keys())

    def values(self) -> list[Any]:
        return list(self.mapping.values())

    def find_offset_by_key(self, candidate_keys: KeyCandidates) -> Optional[int]:
        return find_offset_by_key(self.mapping, candidate_keys)

    def find_offset_by_value(self, value: Any) -> Optional[int]:
        return find_offset_by_value(self.mapping, value)

    def insert_at_offset(self, offset: int, insertions: Any, preserve_keys: bool = False) -> bool:
        return insert_at_offset(self.mapping, offset, insertions, preserve_keys=preserve_keys)

    def insert_at_key(
        self,
        anchor: KeyCandidates,
        insertions: Any,
        insert_before: bool = False,
        preserve_keys: bool = True,
    ) -> bool:
        return insert_at_key(
            self.mapping,
            anchor,
            insertions,
            insert_before=insert_before,
            preserve_keys=preserve_keys,
        )

    def insert_at_value(
        self,
        anchor_value: Any,
        insertions: Any,
        insert_before: bool = False,
        preserve_keys: bool = False,
    ) -> bool:
        return insert_at_value(
            self.mapping,
            anchor_value,
            insertions,
            insert_before=insert_before,
            preserve_keys=preserve_keys,
        )

    def rename_key(self, old_key: Hashable, new_key: Hashable) -> bool:
        return rename_key(self.mapping, old_key, new_key)

    def remove_values(self, values: Any) -> None:
        remove_values(self.mapping, values)

    def sort(self, comparator: Comparator, preserve_keys: bool = True) -> bool:
        if preserve_keys:
            return stable_sort_preserving_keys(self.mapping, comparator)
        return stable_sort_by_value(self.mapping, comparator)
