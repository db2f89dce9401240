"""Unit tests for size calculation utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import pytest

from binio import (
    LayoutError,
    StructBuilder,
    be_i16,
    be_u8,
    be_u16,
    count,
    encoded_size,
    field_sizes,
    length_prefixed,
    null_utf8,
    pair,
    static_size,
    struct,
)


@dataclass
class Thing:
    """Two-field aggregate."""

    a: int
    b: int


@dataclass
class Packet:
    """Aggregate with a wire-only length."""

    values: List[int]


class TestStaticSize:
    """Test static_size."""

    def test_fixed_layouts(self) -> None:
        """Test layouts with a static size."""
        assert static_size(be_u8()) == 1
        assert static_size(pair(be_u8(), be_u16())) == 3
        assert static_size(count(be_u16(), 3)) == 6
        assert static_size(struct(Thing, a=be_u8(), b=be_u16())) == 3

    def test_variable_layouts(self) -> None:
        """Test layouts whose size depends on the value."""
        assert static_size(null_utf8()) is None
        assert static_size(length_prefixed(be_u8(), be_u8())) is None
        assert static_size(pair(be_u8(), null_utf8())) is None


class TestEncodedSize:
    """Test encoded_size."""

    def test_static(self) -> None:
        """Test that the static size is used when known."""
        assert encoded_size(Thing(a=1, b=2), struct(Thing, a=be_u8(), b=be_u16())) == 3

    def test_variable(self) -> None:
        """Test sizes found by encoding."""
        assert encoded_size("abc", null_utf8()) == 4
        assert encoded_size([1, 2, 3], length_prefixed(be_u8(), be_i16())) == 7

    def test_invalid_value(self) -> None:
        """Test that a value that cannot be encoded raises."""
        with pytest.raises(LayoutError):
            encoded_size(1, null_utf8())

    def test_out_of_range_with_static_size(self) -> None:
        """Test that a fixed layout still rejects a value it cannot hold."""
        with pytest.raises(LayoutError):
            encoded_size(300, be_u8())

    def test_invalid_field_with_static_size(self) -> None:
        """Test an unrepresentable field in a fixed-size struct."""
        with pytest.raises(LayoutError) as exc_info:
            encoded_size(Thing(a=1, b=0x10000), struct(Thing, a=be_u8(), b=be_u16()))

        assert exc_info.value.path == ["b"]


class TestFieldSizes:
    """Test field_sizes."""

    def test_fixed_fields(self) -> None:
        """Test per-field sizes of a fixed layout."""
        thing = struct(Thing, a=be_u8(), b=be_u16())

        assert field_sizes(Thing(a=1, b=2), thing) == {"a": 1, "b": 2}

    def test_dependent_and_anonymous_fields(self) -> None:
        """Test sizes with constants, transient and dependent fields."""
        packet = (
            StructBuilder(Packet)
            .constant(be_u16(), 0xCAFE)
            .transient("length", be_u8(), lambda p: len(p.values))
            .field("values", lambda ctx: count(be_i16(), ctx["length"]))
            .build()
        )

        sizes = field_sizes(Packet(values=[1, 2, 3]), packet)

        assert sizes == {"[0]": 2, "length": 1, "values": 6}
        assert sum(sizes.values()) == encoded_size(Packet(values=[1, 2, 3]), packet)
