"""Unit tests for the builder API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import pytest

from binio import (
    CheckError,
    SchemaError,
    StructBuilder,
    be_i16,
    be_u8,
    be_u16,
    count,
    decode_bytes,
    encode_bytes,
    null_utf8,
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

    kind: int
    values: List[int]


class TestStruct:
    """Test the struct() shortcut."""

    def test_keyword_order(self) -> None:
        """Test that keyword order is byte order."""
        thing = struct(Thing, a=be_u8(), b=be_u16())

        assert encode_bytes(Thing(a=0x10, b=0x20), thing) == b"\x10\x00\x20"
        assert decode_bytes(b"\x10\x00\x20", thing) == Thing(a=0x10, b=0x20)

    def test_reversed_order(self) -> None:
        """Test a layout whose byte order differs from the class order."""
        thing = struct(Thing, b=be_u16(), a=be_u8())

        assert encode_bytes(Thing(a=0x10, b=0x20), thing) == b"\x00\x20\x10"
        assert decode_bytes(b"\x00\x20\x10", thing) == Thing(a=0x10, b=0x20)

    def test_dict_aggregate(self) -> None:
        """Test dict aggregates when no target is given."""
        record = struct(id=be_u16(), name=null_utf8())

        assert encode_bytes({"id": 7, "name": "ok"}, record) == b"\x00\x07ok\x00"
        assert decode_bytes(b"\x00\x07ok\x00", record) == {"id": 7, "name": "ok"}

    def test_no_fields(self) -> None:
        """Test that an empty struct() is rejected."""
        with pytest.raises(SchemaError):
            struct(Thing)

    def test_name(self) -> None:
        """Test the combinator label."""
        assert struct(Thing, a=be_u8(), b=be_u8()).name == "Thing"
        assert struct(a=be_u8()).name == "struct"


class TestStructBuilder:
    """Test StructBuilder."""

    def test_constant_and_transient(self) -> None:
        """Test a magic byte and a length prefix that live only on the wire."""
        packet = (
            StructBuilder(Packet)
            .constant(be_u8(), 0x50)
            .field("kind", be_u8())
            .transient("length", be_u8(), lambda p: len(p.values))
            .field("values", lambda ctx: count(be_i16(), ctx["length"]))
            .build()
        )
        data = b"\x50\x01\x02\x00\x50\x00\x60"

        assert encode_bytes(Packet(kind=1, values=[0x50, 0x60]), packet) == data
        assert decode_bytes(data, packet) == Packet(kind=1, values=[0x50, 0x60])

    def test_constant_mismatch(self) -> None:
        """Test a wrong magic byte."""
        thing = (
            StructBuilder(Thing)
            .constant(be_u8(), 0x50)
            .field("a", be_u8())
            .field("b", be_u8())
            .build()
        )

        with pytest.raises(CheckError) as exc_info:
            decode_bytes(b"\x51\x01\x02", thing)

        assert exc_info.value.path == ["[0]"]

    def test_padding(self) -> None:
        """Test padding written as zero and ignored on decode."""
        thing = (
            StructBuilder(Thing)
            .field("a", be_u8())
            .padding(be_u16())
            .field("b", be_u8())
            .build()
        )

        assert encode_bytes(Thing(a=1, b=2), thing) == b"\x01\x00\x00\x02"
        assert decode_bytes(b"\x01\xff\xff\x02", thing) == Thing(a=1, b=2)
        assert thing.size == 4

    def test_custom_accessor(self) -> None:
        """Test an accessor for an aggregate without attributes."""
        point = (
            StructBuilder(name="point")
            .field("x", be_u8(), accessor=lambda p: p[0])
            .field("y", be_u8(), accessor=lambda p: p[1])
            .build(construct=lambda x, y: (x, y))
        )

        assert encode_bytes((3, 4), point) == b"\x03\x04"
        assert decode_bytes(b"\x03\x04", point) == (3, 4)
        assert point.name == "point"

    def test_dict_transient(self) -> None:
        """Test that transient fields stay out of dict aggregates."""
        record = (
            StructBuilder()
            .transient("n", be_u8(), lambda r: len(r["items"]))
            .field("items", lambda ctx: count(be_u8(), ctx["n"]))
            .build()
        )

        assert decode_bytes(b"\x02\x05\x06", record) == {"items": [5, 6]}
        assert encode_bytes({"items": [5, 6]}, record) == b"\x02\x05\x06"

    def test_duplicate_field(self) -> None:
        """Test that duplicate names are rejected at build time."""
        builder = StructBuilder(Thing).field("a", be_u8()).field("a", be_u8())

        with pytest.raises(SchemaError):
            builder.build()
