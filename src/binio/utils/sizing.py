"""Encoded size calculation utilities.

This module provides functions to calculate how many bytes a combinator
produces, either statically from the layout or by encoding a value.
"""

from __future__ import annotations

import io
from typing import Any

from ..codec.core import Combinator
from ..codec.sequencer import Sequencer


def static_size(combinator: Combinator[Any]) -> int | None:
    """Return the number of bytes every value of a combinator occupies.

    Fixed-width primitives, fixed-length strings, and pairs, sequences,
    counts and structs built only from fixed-width parts have a static size.
    Anything whose size depends on the value (null-terminated strings,
    length-prefixed lists, dependent struct fields) has none.

    Returns:
        Size in bytes, or None if it varies

    Example:
        >>> static_size(pair(be_u8(), be_u16()))
        3
        >>> static_size(null_utf8()) is None
        True
    """
    return combinator.size


def encoded_size(value: Any, combinator: Combinator[Any]) -> int:
    """Calculate the encoded size of a value in bytes.

    The value is always encoded into a scratch buffer, so a value the layout
    cannot represent fails here even when the layout has a static size.

    Raises:
        DataError: If the value cannot be encoded
    """
    buffer = io.BytesIO()
    combinator.encode(buffer, value)
    return len(buffer.getvalue())


def field_sizes(value: Any, sequencer: Sequencer[Any]) -> dict[str, int]:
    """Get the encoded size in bytes of each field of a struct value.

    Anonymous fields are reported as ``[index]``.

    Example:
        >>> field_sizes(Thing(a=0x10, b=0x20), Thing.combinator())
        {'a': 1, 'b': 2}
    """
    sizes: dict[str, int] = {}
    previous = 0
    for index, descriptor in enumerate(sequencer.fields):
        # Encode each prefix of the layout so dependent fields see earlier values
        prefix = Sequencer(sequencer.fields[: index + 1], sequencer.construct, name=sequencer.name)
        total = encoded_size(value, prefix)
        label = descriptor.name if descriptor.name is not None else f"[{index}]"
        sizes[label] = total - previous
        previous = total
    return sizes
