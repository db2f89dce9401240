"""Combinator core for binio.

This package provides the Combinator type and its algebra, the struct
sequencer, helper combinators and the read/write entry points.
"""

from __future__ import annotations

from .combinators import (
    bind,
    cast,
    count,
    int_enum,
    length_prefixed,
    optional,
    skip,
    try_cast,
)
from .core import Combinator, pair, sequence
from .driver import decode_bytes, encode_bytes, read, write
from .sequencer import FieldDescriptor, Sequencer

__all__ = [
    "Combinator",
    "pair",
    "sequence",
    "FieldDescriptor",
    "Sequencer",
    "read",
    "write",
    "encode_bytes",
    "decode_bytes",
    "bind",
    "skip",
    "count",
    "optional",
    "cast",
    "try_cast",
    "int_enum",
    "length_prefixed",
]
