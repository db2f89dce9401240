"""Top-level entry points for applying a combinator to a stream.

``read`` and ``write`` take the stream first, then the value (for ``write``),
then the combinator. ``encode_bytes`` and ``decode_bytes`` do the same for
in-memory buffers.
"""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, TypeVar

from ..exceptions import LayoutError
from .core import Combinator

logger = logging.getLogger(__name__)

T = TypeVar("T")


def read(stream: BinaryIO, combinator: Combinator[T]) -> T:
    """Read one value from a stream.

    Args:
        stream: Binary stream positioned at the start of the value
        combinator: Combinator describing the value

    Returns:
        Decoded value; the stream is left just past its bytes

    Raises:
        StreamError: If the stream cannot supply the bytes (e.g. ShortReadError)
        DataError: If the bytes do not form a valid value

    Example:
        >>> read(io.BytesIO(b"\\x80"), be_u8())
        128
    """
    logger.debug("read %s", combinator.name)
    return combinator.decode(stream)


def write(stream: BinaryIO, value: T, combinator: Combinator[T]) -> None:
    """Write one value to a stream.

    Args:
        stream: Binary stream to append to
        value: Value to encode
        combinator: Combinator describing the value

    Raises:
        StreamError: If the stream rejects the bytes
        DataError: If the value cannot be represented

    Example:
        >>> buffer = io.BytesIO()
        >>> write(buffer, 0x80, be_u8())
        >>> buffer.getvalue()
        b'\\x80'
    """
    logger.debug("write %s", combinator.name)
    combinator.encode(stream, value)


def encode_bytes(value: T, combinator: Combinator[T]) -> bytes:
    """Encode a value to a new bytes object."""
    buffer = io.BytesIO()
    write(buffer, value, combinator)
    return buffer.getvalue()


def decode_bytes(data: bytes, combinator: Combinator[T], *, exact: bool = True) -> T:
    """Decode a value from a bytes object.

    Args:
        data: Encoded bytes
        combinator: Combinator describing the value
        exact: If True, trailing bytes after the value are an error

    Raises:
        ShortReadError: If ``data`` is too short
        LayoutError: If ``exact`` and bytes remain after the value
    """
    buffer = io.BytesIO(data)
    value = read(buffer, combinator)
    if exact:
        remaining = len(data) - buffer.tell()
        if remaining:
            raise LayoutError(
                f"{combinator.name}: {remaining} trailing bytes after decoded value"
            )
    return value
