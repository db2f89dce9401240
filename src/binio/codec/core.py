"""The Combinator type and its algebra.

A Combinator pairs a decode function and an encode function for one value
type. Every higher-level shape (pairs, sequences, structs) is built from
combinators by composition, so a shape is described once and both directions
follow from that description.

Example:
    >>> point = pair(be_u16(), be_u16())
    >>> data = encode_bytes((3, 4), point)
    >>> data
    b'\\x00\\x03\\x00\\x04'
    >>> decode_bytes(data, point)
    (3, 4)
"""

from __future__ import annotations

import io
from typing import Any, BinaryIO, Callable, Generic, TypeVar

from ..config import get_config
from ..exceptions import BinioError, CastError, LayoutError, RoundTripError

T = TypeVar("T")
U = TypeVar("U")


class Combinator(Generic[T]):
    """A bidirectional codec for values of type T.

    Combinators are immutable and hold no stream state, so one instance can be
    reused for any number of reads and writes, from several threads as long as
    each call targets its own stream.

    Args:
        decoder: ``decoder(stream) -> value``
        encoder: ``encoder(stream, value) -> None``
        name: Label used in ``repr`` and error messages
        size: Number of bytes every value occupies, or None when it varies

    Example:
        >>> flag = be_u8().map(bool, int, name="flag")
        >>> decode_bytes(b"\\x01", flag)
        True
    """

    __slots__ = ("_decoder", "_encoder", "name", "size")

    def __init__(
        self,
        decoder: Callable[[BinaryIO], T],
        encoder: Callable[[BinaryIO, T], None],
        *,
        name: str = "combinator",
        size: int | None = None,
    ) -> None:
        object.__setattr__(self, "_decoder", decoder)
        object.__setattr__(self, "_encoder", encoder)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "size", size)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    # Immutable: copies are the same object
    def __copy__(self) -> Combinator[T]:
        return self

    def __deepcopy__(self, memo: dict) -> Combinator[T]:
        return self

    def decode(self, stream: BinaryIO) -> T:
        """Read one value from the stream.

        Raises:
            StreamError: If the stream cannot supply the bytes
            DataError: If the bytes do not form a valid value
        """
        return self._decoder(stream)

    def encode(self, stream: BinaryIO, value: T) -> None:
        """Write one value to the stream.

        Raises:
            StreamError: If the stream rejects the bytes
            DataError: If the value cannot be represented
        """
        self._encoder(stream, value)

    def map(
        self,
        forward: Callable[[T], U],
        backward: Callable[[U], T],
        *,
        name: str | None = None,
    ) -> Combinator[U]:
        """Derive a combinator for another type through two conversions.

        ``forward`` is applied after decoding and ``backward`` before encoding.
        The two must be exact inverses over every value this combinator can
        decode, otherwise the round-trip law breaks. Enable
        ``CodecConfig.check_roundtrip`` to verify this while decoding.

        Conversion failures (ValueError, TypeError) are raised as CastError.

        Args:
            forward: Converts a decoded value to the new type
            backward: Converts a value of the new type back for encoding
            name: Optional label for the new combinator

        Returns:
            Combinator for the converted type
        """
        label = name or f"map({self.name})"
        inner = self

        def decoder(stream: BinaryIO) -> U:
            raw = inner.decode(stream)
            value = _convert(forward, raw, label)
            if get_config().check_roundtrip:
                restored = _convert(backward, value, label)
                if restored != raw and not _same_encoding(inner, restored, raw):
                    raise RoundTripError(
                        f"{label}: conversions are not inverse, "
                        f"{raw!r} -> {value!r} -> {restored!r}"
                    )
            return value

        def encoder(stream: BinaryIO, value: U) -> None:
            inner.encode(stream, _convert(backward, value, label))

        return Combinator(decoder, encoder, name=label, size=self.size)

    def then(self, other: Combinator[U]) -> Combinator[tuple[T, U]]:
        """Sequence this combinator with another; same as ``pair(self, other)``."""
        return pair(self, other)


def _same_encoding(combinator: Combinator[Any], first: Any, second: Any) -> bool:
    """Compare two values by their bytes (NaN is not equal to itself)."""
    encoded = []
    for value in (first, second):
        buffer = io.BytesIO()
        try:
            combinator.encode(buffer, value)
        except BinioError:
            return False
        encoded.append(buffer.getvalue())
    return encoded[0] == encoded[1]


def _convert(func: Callable[[Any], Any], value: Any, label: str) -> Any:
    try:
        return func(value)
    except BinioError:
        raise
    except (ValueError, TypeError) as e:
        raise CastError(f"{label}: cannot convert {value!r}: {e}") from e


def pair(first: Combinator[T], second: Combinator[U]) -> Combinator[tuple[T, U]]:
    """Combine two combinators into one for the ordered pair ``(first, second)``.

    Decoding runs ``first`` then ``second``; encoding writes component 0 with
    ``first`` then component 1 with ``second``. Both directions use the same
    order.

    Example:
        >>> encode_bytes((0x10, 0x20), pair(be_u8(), be_u16()))
        b'\\x10\\x00 '
    """
    return _tuple_combinator((first, second), name=f"pair({first.name}, {second.name})")


def sequence(*combinators: Combinator[Any]) -> Combinator[tuple[Any, ...]]:
    """Combine any number of combinators into one for a tuple of their values.

    Element ``i`` of the tuple is handled by ``combinators[i]``, in order.
    """
    names = ", ".join(c.name for c in combinators)
    return _tuple_combinator(combinators, name=f"sequence({names})")


def _tuple_combinator(
    parts: tuple[Combinator[Any], ...], *, name: str
) -> Combinator[tuple[Any, ...]]:
    parts = tuple(parts)
    sizes = [part.size for part in parts]
    size = None if any(s is None for s in sizes) else sum(sizes)  # type: ignore[arg-type]

    def decoder(stream: BinaryIO) -> tuple[Any, ...]:
        return tuple(part.decode(stream) for part in parts)

    def encoder(stream: BinaryIO, value: tuple[Any, ...]) -> None:
        try:
            items = tuple(value)
        except TypeError as e:
            raise LayoutError(f"{name}: expected a tuple, got {type(value).__name__}") from e
        if len(items) != len(parts):
            raise LayoutError(f"{name}: expected {len(parts)} items, got {len(items)}")

        for part, item in zip(parts, items):
            part.encode(stream, item)

    return Combinator(decoder, encoder, name=name, size=size)
