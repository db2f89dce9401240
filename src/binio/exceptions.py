"""Exception hierarchy for binio.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BinioError for easy catching of any binio-specific error.

Failures come in two kinds that callers can tell apart:

- StreamError: the underlying stream could not supply or accept bytes
- DataError: the bytes (or the value being written) violate a constraint

SchemaError is raised while a combinator or struct is being described, never
while reading or writing.
"""

from __future__ import annotations


class BinioError(Exception):
    """Base exception for all binio errors.

    Attributes:
        path: Field names leading to the failure, outermost first. Filled in
            by the sequencer as the error propagates through nested structs.
    """

    def __init__(self, *args: object) -> None:
        super().__init__(*args)
        self.path: list[str] = []

    def __str__(self) -> str:
        message = super().__str__()
        if self.path:
            return f"{'.'.join(self.path)}: {message}"
        return message


class SchemaError(BinioError):
    """Raised when a combinator or struct description is invalid.

    Examples:
        - Duplicate field names in a struct
        - Negative element count
        - Model field without a combinator
    """

    pass


class StreamError(BinioError):
    """Raised when the underlying stream fails.

    Examples:
        - End of input before the required bytes were read
        - The sink raised OSError or accepted fewer bytes than given
    """

    pass


class ShortReadError(StreamError):
    """Raised when a stream ends before the requested number of bytes."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Short read: expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class DataError(BinioError):
    """Raised when a value does not satisfy a semantic constraint.

    Examples:
        - Decoded constant does not match the expected value
        - Conversion between representations failed
        - Value does not fit the declared layout
    """

    pass


class CheckError(DataError):
    """Raised when a decoded value fails a check (constant mismatch, ASCII check)."""

    pass


class CastError(DataError):
    """Raised when converting between two representations fails."""

    pass


class TextError(DataError):
    """Raised when decoded bytes are not valid text in the declared encoding."""

    pass


class LayoutError(DataError):
    """Raised when a value cannot be written with the declared layout.

    Examples:
        - Integer out of range for its width
        - List length differs from the declared count
        - Optional value present when the layout says absent
    """

    pass


class RoundTripError(DataError):
    """Raised when a map conversion pair is found not to be mutually inverse."""

    pass
