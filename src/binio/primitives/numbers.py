"""Fixed-width number combinators.

One no-argument constructor per (type, width, byte order). The ``be_``/``le_``
prefix gives the byte order; single-byte types exist in both spellings so
layouts can be written consistently.

Example:
    >>> encode_bytes(0x0102, be_u16())
    b'\\x01\\x02'
    >>> encode_bytes(1.5, le_f32())
    b'\\x00\\x00\\xc0?'
"""

from __future__ import annotations

import struct
from typing import BinaryIO, Callable

from ..codec.core import Combinator
from ..codec.stream import read_exact, write_all
from ..exceptions import LayoutError


def _number(name: str, fmt: str) -> Callable[[], Combinator]:
    packer = struct.Struct(fmt)

    def decoder(stream: BinaryIO):
        return packer.unpack(read_exact(stream, packer.size))[0]

    def encoder(stream: BinaryIO, value) -> None:
        try:
            data = packer.pack(value)
        except struct.error as e:
            raise LayoutError(f"{name}: cannot encode {value!r}: {e}") from e
        write_all(stream, data)

    def factory() -> Combinator:
        return Combinator(decoder, encoder, name=name, size=packer.size)

    factory.__name__ = factory.__qualname__ = name
    factory.__doc__ = f"Combinator for {name} ({packer.size} bytes, struct format {fmt!r})."
    return factory


be_u8 = _number("be_u8", ">B")
be_i8 = _number("be_i8", ">b")
le_u8 = _number("le_u8", "<B")
le_i8 = _number("le_i8", "<b")

be_u16 = _number("be_u16", ">H")
be_i16 = _number("be_i16", ">h")
le_u16 = _number("le_u16", "<H")
le_i16 = _number("le_i16", "<h")

be_u32 = _number("be_u32", ">I")
be_i32 = _number("be_i32", ">i")
le_u32 = _number("le_u32", "<I")
le_i32 = _number("le_i32", "<i")

be_u64 = _number("be_u64", ">Q")
be_i64 = _number("be_i64", ">q")
le_u64 = _number("le_u64", "<Q")
le_i64 = _number("le_i64", "<q")

be_f32 = _number("be_f32", ">f")
le_f32 = _number("le_f32", "<f")
be_f64 = _number("be_f64", ">d")
le_f64 = _number("le_f64", "<d")
