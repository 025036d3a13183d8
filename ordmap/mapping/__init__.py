"""Ordered-mapping editing engine: lookup, insertion, rename, removal, sorting."""

from .editor import (  # noqa: F401
    OrderedMapEditor,
    insert_at_key,
    insert_at_offset,
    insert_at_value,
    remove_values,
    rename_key,
)
from .errors import (  # noqa: F401
    AnchorNotFoundError,
    InvalidKeyError,
    InvalidOffsetError,
    InvalidOperationError,
    KeyNotFoundError,
    OrderedMapError,
)
from .insertions import Block, Single, as_insertion, next_integer_key  # noqa: F401
from .lookup import find_offset_by_key, find_offset_by_value, loose_equals, strict_equals  # noqa: F401
from .sorting import (  # noqa: F401
    natural_order,
    reverse_order,
    stable_sort_by_value,
    stable_sort_preserving_keys,
)
