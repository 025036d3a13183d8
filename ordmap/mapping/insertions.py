"""
Insertion payloads and key helpers.

An insertion is either a single value that receives the next free integer key
or a block of key/value pairs spliced in as one contiguous run. Keeping the
two cases explicit avoids guessing whether a mapping passed by the caller is a
block of pairs or a value that happens to be a mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Mapping, Union

from .errors import InvalidKeyError


@dataclass(frozen=True)
class Single:
    """One value to insert under the next available integer key."""

    value: Any


@dataclass(frozen=True)
class Block:
    """Ordered key/value pairs inserted as a contiguous block."""

    pairs: dict[Hashable, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.pairs)


Insertion = Union[Single, Block]


def is_integer_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def validate_key(key: Any) -> None:
    """Raise ``InvalidKeyError`` unless ``key`` is an ``int`` or ``str``."""
    if not (is_integer_key(key) or isinstance(key, str)):
        raise InvalidKeyError(
            f"Keys must be int or str, got {type(key).__name__}: {key!r}"
        )


def next_integer_key(keys: Iterable[Any]) -> int:
    """
    Return ``max(integer keys) + 1``, or ``0`` when no integer key exists.

    Numeric strings such as ``"7"`` are string keys and are ignored.
    """
    integer_keys = [key for key in keys if is_integer_key(key)]
    return max(integer_keys) + 1 if integer_keys else 0


def as_insertion(insertions: Any) -> Insertion:
    """
    Normalise a caller payload into ``Single`` or ``Block``.

    Bare mappings become blocks and every other bare value becomes a single
    insertion.
    """
    if isinstance(insertions, Single):
        return insertions
    if isinstance(insertions, Block):
        return insertions
    if isinstance(insertions, Mapping):
        return Block(dict(insertions))
    return Single(insertions)
