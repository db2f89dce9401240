"""binio: Bidirectional Binary Combinators

A Python library for describing binary layouts once and getting both the
reader and the writer from that description. Inspired by parser combinator
libraries, but every combinator also knows how to write what it reads.

Key Features:
- Combinator algebra (map, pair, sequence) preserving the round-trip law
- Struct assembly with one shared field order for both directions
- Pydantic-based struct models and a builder API
- Fixed-width numbers and strings in both byte orders

Quick Start:
    >>> from typing import Annotated
    >>> from binio import StructModel, be_u8, be_u16
    >>>
    >>> class Thing(StructModel):
    ...     a: Annotated[int, be_u8()]
    ...     b: Annotated[int, be_u16()]
    >>>
    >>> data = Thing(a=0x10, b=0x20).to_bytes()
    >>> data
    b'\\x10\\x00 '
    >>> Thing.from_bytes(data)
    Thing(a=16, b=32)

The same with plain functions and a stream:
    >>> import io
    >>> from binio import pair, read, write
    >>> stream = io.BytesIO()
    >>> write(stream, (0x10, 0x20), pair(be_u8(), be_u16()))
    >>> _ = stream.seek(0)
    >>> read(stream, pair(be_u8(), be_u16()))
    (16, 32)
"""

from __future__ import annotations

from .codec import (
    Combinator,
    FieldDescriptor,
    Sequencer,
    bind,
    cast,
    count,
    decode_bytes,
    encode_bytes,
    int_enum,
    length_prefixed,
    optional,
    pair,
    read,
    sequence,
    skip,
    try_cast,
    write,
)
from .config import CodecConfig, configure, get_config, set_config
from .exceptions import (
    BinioError,
    CastError,
    CheckError,
    DataError,
    LayoutError,
    RoundTripError,
    SchemaError,
    ShortReadError,
    StreamError,
    TextError,
)
from .models import Depends, StructBuilder, StructModel, struct
from .primitives import (
    be_f32,
    be_f64,
    be_i8,
    be_i16,
    be_i32,
    be_i64,
    be_u8,
    be_u16,
    be_u32,
    be_u64,
    le_f32,
    le_f64,
    le_i8,
    le_i16,
    le_i32,
    le_i64,
    le_u8,
    le_u16,
    le_u32,
    le_u64,
    len_ascii,
    len_utf8,
    len_utf16,
    null_ascii,
    null_utf8,
    null_utf16,
)
from .utils import encoded_size, field_sizes, static_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Combinator",
    "pair",
    "sequence",
    "read",
    "write",
    "encode_bytes",
    "decode_bytes",
    # Structs
    "FieldDescriptor",
    "Sequencer",
    "StructBuilder",
    "struct",
    "StructModel",
    "Depends",
    # Helpers
    "bind",
    "skip",
    "count",
    "optional",
    "cast",
    "try_cast",
    "int_enum",
    "length_prefixed",
    # Numbers
    "be_u8",
    "be_i8",
    "le_u8",
    "le_i8",
    "be_u16",
    "be_i16",
    "le_u16",
    "le_i16",
    "be_u32",
    "be_i32",
    "le_u32",
    "le_i32",
    "be_u64",
    "be_i64",
    "le_u64",
    "le_i64",
    "be_f32",
    "le_f32",
    "be_f64",
    "le_f64",
    # Strings
    "null_utf8",
    "null_ascii",
    "len_utf8",
    "len_ascii",
    "null_utf16",
    "len_utf16",
    # Sizing
    "static_size",
    "encoded_size",
    "field_sizes",
    # Configuration
    "CodecConfig",
    "get_config",
    "set_config",
    "configure",
    # Exceptions
    "BinioError",
    "SchemaError",
    "StreamError",
    "ShortReadError",
    "DataError",
    "CheckError",
    "CastError",
    "TextError",
    "LayoutError",
    "RoundTripError",
    # Version
    "__version__",
]
