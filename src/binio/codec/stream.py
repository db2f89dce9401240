"""Byte-level stream access used by every combinator.

Streams are binary file-like objects (``io.BytesIO``, open files, socket
files). Only ``read(n)`` and ``write(data)`` are used; streams are never
seeked, so the position is whatever the stream says it is.
"""

from __future__ import annotations

from typing import BinaryIO

from ..exceptions import ShortReadError, StreamError


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes from a stream.

    Args:
        stream: Binary stream to read from
        size: Number of bytes required

    Returns:
        Bytes read (always ``size`` long)

    Raises:
        ShortReadError: If the stream ends first
        StreamError: If the stream raises OSError
    """
    if size == 0:
        return b""

    chunks = bytearray()
    while len(chunks) < size:
        try:
            chunk = stream.read(size - len(chunks))
        except OSError as e:
            raise StreamError(f"Stream read failed: {e}") from e
        if not chunk:
            raise ShortReadError(size, len(chunks))
        chunks.extend(chunk)

    return bytes(chunks)


def write_all(stream: BinaryIO, data: bytes) -> None:
    """Write all of ``data`` to a stream.

    Raises:
        StreamError: If the stream raises OSError or accepts fewer bytes
    """
    if not data:
        return

    try:
        written = stream.write(data)
    except OSError as e:
        raise StreamError(f"Stream write failed: {e}") from e

    # Raw (unbuffered) streams may report a partial write
    if written is not None and written != len(data):
        raise StreamError(f"Short write: wrote {written} of {len(data)} bytes")
