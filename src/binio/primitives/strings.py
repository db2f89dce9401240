"""String combinators.

Two framings are supported for each encoding:

- ``null_*``: terminated by a zero byte (UTF-8/ASCII) or zero code unit (UTF-16)
- ``len_*``: a fixed number of bytes known in advance

UTF-16 is always big-endian. ``*_ascii`` variants behave like their UTF-8
counterparts but additionally require ASCII text.
"""

from __future__ import annotations

from typing import BinaryIO, Callable

from ..codec.core import Combinator
from ..codec.stream import read_exact, write_all
from ..exceptions import CheckError, LayoutError, SchemaError, TextError


def _decode_text(data: bytes, encoding: str, name: str) -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise TextError(f"{name}: invalid {encoding}: {e}") from e


def _encode_text(value: str, encoding: str, name: str) -> bytes:
    if not isinstance(value, str):
        raise LayoutError(f"{name}: expected str, got {type(value).__name__}")
    try:
        return value.encode(encoding)
    except UnicodeEncodeError as e:
        raise LayoutError(f"{name}: cannot encode as {encoding}: {e}") from e


def _read_until_zero(stream: BinaryIO, unit: int) -> bytes:
    terminator = b"\x00" * unit
    data = bytearray()
    while True:
        chunk = read_exact(stream, unit)
        if chunk == terminator:
            return bytes(data)
        data.extend(chunk)


def _ascii_checked(inner: Callable[[], Combinator[str]], name: str) -> Combinator[str]:
    base = inner()

    def decoder(stream: BinaryIO) -> str:
        text = base.decode(stream)
        if not text.isascii():
            raise CheckError(f"{name}: decoded text is not ASCII: {text!r}")
        return text

    def encoder(stream: BinaryIO, value: str) -> None:
        if isinstance(value, str) and not value.isascii():
            raise LayoutError(f"{name}: text is not ASCII: {value!r}")
        base.encode(stream, value)

    return Combinator(decoder, encoder, name=name, size=base.size)


def null_utf8() -> Combinator[str]:
    """Zero-terminated UTF-8 string.

    The terminator is consumed on decode and written on encode. Text that
    itself contains a NUL character cannot be written.

    Example:
        >>> encode_bytes("Foo", null_utf8())
        b'Foo\\x00'
    """
    name = "null_utf8"

    def decoder(stream: BinaryIO) -> str:
        return _decode_text(_read_until_zero(stream, 1), "utf-8", name)

    def encoder(stream: BinaryIO, value: str) -> None:
        data = _encode_text(value, "utf-8", name)
        if b"\x00" in data:
            raise LayoutError(f"{name}: text contains a NUL character")
        write_all(stream, data + b"\x00")

    return Combinator(decoder, encoder, name=name)


def null_ascii() -> Combinator[str]:
    """Zero-terminated ASCII string (``null_utf8`` with an ASCII check)."""
    return _ascii_checked(null_utf8, "null_ascii")


def len_utf8(length: int) -> Combinator[str]:
    """UTF-8 string occupying exactly ``length`` bytes.

    Raises:
        SchemaError: If ``length`` is negative
        LayoutError: On encode, if the UTF-8 form is not ``length`` bytes long
    """
    if length < 0:
        raise SchemaError(f"len_utf8: length must be >= 0, got {length}")

    name = f"len_utf8({length})"

    def decoder(stream: BinaryIO) -> str:
        return _decode_text(read_exact(stream, length), "utf-8", name)

    def encoder(stream: BinaryIO, value: str) -> None:
        data = _encode_text(value, "utf-8", name)
        if len(data) != length:
            raise LayoutError(f"{name}: encoded text is {len(data)} bytes")
        write_all(stream, data)

    return Combinator(decoder, encoder, name=name, size=length)


def len_ascii(length: int) -> Combinator[str]:
    """ASCII string occupying exactly ``length`` bytes."""
    return _ascii_checked(lambda: len_utf8(length), f"len_ascii({length})")


def null_utf16() -> Combinator[str]:
    """Zero-terminated big-endian UTF-16 string.

    Example:
        >>> decode_bytes(b"\\xd8\\x3d\\xdc\\x96\\x00\\x00", null_utf16())
        '💖'
    """
    name = "null_utf16"

    def decoder(stream: BinaryIO) -> str:
        return _decode_text(_read_until_zero(stream, 2), "utf-16-be", name)

    def encoder(stream: BinaryIO, value: str) -> None:
        data = _encode_text(value, "utf-16-be", name)
        units = (data[i : i + 2] for i in range(0, len(data), 2))
        if b"\x00\x00" in units:
            raise LayoutError(f"{name}: text contains a NUL character")
        write_all(stream, data + b"\x00\x00")

    return Combinator(decoder, encoder, name=name)


def len_utf16(length: int) -> Combinator[str]:
    """Big-endian UTF-16 string occupying exactly ``length`` bytes.

    Raises:
        SchemaError: If ``length`` is negative or odd
        LayoutError: On encode, if the UTF-16 form is not ``length`` bytes long
    """
    if length < 0 or length % 2:
        raise SchemaError(f"len_utf16: length must be an even number >= 0, got {length}")

    name = f"len_utf16({length})"

    def decoder(stream: BinaryIO) -> str:
        return _decode_text(read_exact(stream, length), "utf-16-be", name)

    def encoder(stream: BinaryIO, value: str) -> None:
        data = _encode_text(value, "utf-16-be", name)
        if len(data) != length:
            raise LayoutError(f"{name}: encoded text is {len(data)} bytes")
        write_all(stream, data)

    return Combinator(decoder, encoder, name=name, size=length)
