"""Typed failures raised by the ordered-mapping editor."""

from __future__ import annotations


class OrderedMapError(Exception):
    """Base class for recoverable editing failures."""


class InvalidOffsetError(OrderedMapError, ValueError):
    """Offset is not an integer or falls outside ``[0, len(mapping)]``."""


class AnchorNotFoundError(OrderedMapError, LookupError):
    """No key or value matched the requested insertion anchor."""


class KeyNotFoundError(OrderedMapError, KeyError):
    """The key to act upon is not present in the mapping."""

    def __str__(self) -> str:
        # KeyError wraps its message in quotes by default.
        return str(self.args[0]) if self.args else ""


class InvalidKeyError(OrderedMapError, TypeError):
    """Keys must be ``int`` or ``str`` (``bool`` is rejected)."""


class InvalidOperationError(OrderedMapError, ValueError):
    """An edit plan entry names an unknown operation or lacks a parameter."""
