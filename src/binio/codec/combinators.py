"""Helper combinators built on the core algebra.

These cover the recurring pieces of binary layouts: magic numbers and
reserved fields, fixed-count arrays, conditional fields, and conversions
between a wire representation and a richer Python type.
"""

from __future__ import annotations

import enum
from typing import Any, BinaryIO, Callable, TypeVar

from ..exceptions import CastError, CheckError, LayoutError, SchemaError
from .core import Combinator

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=enum.Enum)


def bind(combinator: Combinator[T], value: T) -> Combinator[None]:
    """Tie a combinator to a constant value (magic numbers, tags, versions).

    Decoding reads a value and fails unless it equals ``value``; the decoded
    result is ``None``. Encoding ignores its input and writes ``value``.

    Raises:
        CheckError: On decode, if the stream holds a different value

    Example:
        >>> magic = bind(be_u16(), 0xCAFE)
        >>> encode_bytes(None, magic)
        b'\\xca\\xfe'
    """
    name = f"bind({combinator.name}, {value!r})"

    def decoder(stream: BinaryIO) -> None:
        actual = combinator.decode(stream)
        if actual != value:
            raise CheckError(f"{name}: expected {value!r}, got {actual!r}")
        return None

    def encoder(stream: BinaryIO, _ignored: Any) -> None:
        combinator.encode(stream, value)

    return Combinator(decoder, encoder, name=name, size=combinator.size)


def skip(combinator: Combinator[T], value: T) -> Combinator[None]:
    """Like ``bind`` but without checking the decoded value (padding, reserved).

    Decoding consumes and discards a value; encoding writes ``value``.
    """

    def decoder(stream: BinaryIO) -> None:
        combinator.decode(stream)
        return None

    def encoder(stream: BinaryIO, _ignored: Any) -> None:
        combinator.encode(stream, value)

    return Combinator(
        decoder, encoder, name=f"skip({combinator.name}, {value!r})", size=combinator.size
    )


def count(combinator: Combinator[T], n: int) -> Combinator[list[T]]:
    """Read/write exactly ``n`` consecutive values as a list.

    Args:
        combinator: Combinator for one element
        n: Number of elements

    Raises:
        SchemaError: If ``n`` is negative
        LayoutError: On encode, if the list does not have ``n`` elements
    """
    if n < 0:
        raise SchemaError(f"count: element count must be >= 0, got {n}")

    name = f"count({combinator.name}, {n})"

    def decoder(stream: BinaryIO) -> list[T]:
        return [combinator.decode(stream) for _ in range(n)]

    def encoder(stream: BinaryIO, value: list[T]) -> None:
        items = _as_list(value, name)
        if len(items) != n:
            raise LayoutError(f"{name}: expected {n} elements, got {len(items)}")
        for item in items:
            combinator.encode(stream, item)

    size = None if combinator.size is None else combinator.size * n
    return Combinator(decoder, encoder, name=name, size=size)


def optional(combinator: Combinator[T], present: bool) -> Combinator[T | None]:
    """Read/write a value only when ``present`` is true.

    When absent, decoding yields ``None`` without touching the stream and
    encoding expects ``None``. The flag usually comes from an earlier field of
    a struct (see ``Sequencer`` dependent fields).

    Raises:
        LayoutError: On encode, if the value's presence disagrees with ``present``
    """
    name = f"optional({combinator.name}, {present})"

    def decoder(stream: BinaryIO) -> T | None:
        if present:
            return combinator.decode(stream)
        return None

    def encoder(stream: BinaryIO, value: T | None) -> None:
        if present and value is not None:
            combinator.encode(stream, value)
        elif present or value is not None:
            raise LayoutError(
                f"{name}: value is {'missing' if present else 'present'} "
                f"but layout says {'present' if present else 'absent'}"
            )

    return Combinator(decoder, encoder, name=name, size=combinator.size if present else 0)


def cast(
    combinator: Combinator[Any], to_type: Callable[[Any], U], from_type: Callable[[U], Any] = int
) -> Combinator[U]:
    """Convert between the wire type and another type using two constructors.

    Example:
        >>> flag = cast(be_u8(), bool)
        >>> decode_bytes(b"\\x01", flag)
        True
    """
    name = f"cast({combinator.name}, {getattr(to_type, '__name__', to_type)})"
    return combinator.map(to_type, from_type, name=name)


def try_cast(
    combinator: Combinator[Any], to_type: Callable[[Any], U], from_type: Callable[[U], Any] = int
) -> Combinator[U]:
    """Like ``cast`` but fails instead of losing information.

    After converting in either direction the result is converted back and
    compared with the input. A mismatch (for example a float with a
    fractional part cast to int) raises CastError.
    """
    name = f"try_cast({combinator.name}, {getattr(to_type, '__name__', to_type)})"

    def lossless(convert: Callable[[Any], Any], restore: Callable[[Any], Any]) -> Callable:
        def checked(value: Any) -> Any:
            converted = convert(value)
            if restore(converted) != value:
                raise CastError(f"{name}: {value!r} does not survive conversion")
            return converted

        return checked

    return combinator.map(lossless(to_type, from_type), lossless(from_type, to_type), name=name)


def int_enum(combinator: Combinator[int], enum_type: type[E]) -> Combinator[E]:
    """Map an integer combinator onto the members of an enum by value.

    Unknown values raise CastError on decode.
    """

    def backward(member: E) -> int:
        if not isinstance(member, enum_type):
            member = enum_type(member)
        return member.value

    return combinator.map(enum_type, backward, name=f"{enum_type.__name__}({combinator.name})")


def length_prefixed(length: Combinator[int], item: Combinator[T]) -> Combinator[list[T]]:
    """List preceded by its element count.

    Decoding reads the count with ``length`` and then that many items;
    encoding writes ``len(value)`` and then the items.

    Example:
        >>> encode_bytes([0x50, 0x60], length_prefixed(be_u8(), be_i16()))
        b'\\x02\\x00P\\x00`'
    """
    name = f"length_prefixed({length.name}, {item.name})"

    def decoder(stream: BinaryIO) -> list[T]:
        n = length.decode(stream)
        return [item.decode(stream) for _ in range(n)]

    def encoder(stream: BinaryIO, value: list[T]) -> None:
        items = _as_list(value, name)
        length.encode(stream, len(items))
        for element in items:
            item.encode(stream, element)

    return Combinator(decoder, encoder, name=name)


def _as_list(value: Any, name: str) -> list[Any]:
    try:
        return list(value)
    except TypeError as e:
        raise LayoutError(f"{name}: expected a list, got {type(value).__name__}") from e
