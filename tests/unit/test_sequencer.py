"""Unit tests for the struct sequencer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import pytest

from binio import (
    CheckError,
    DataError,
    FieldDescriptor,
    LayoutError,
    SchemaError,
    Sequencer,
    ShortReadError,
    be_i16,
    be_u8,
    be_u16,
    bind,
    count,
    decode_bytes,
    encode_bytes,
    optional,
)


@dataclass
class Thing:
    """Two-field aggregate."""

    a: int
    b: int


@dataclass
class Outer:
    """Aggregate with a nested struct."""

    tag: int
    inner: Thing


@dataclass
class Foo:
    """Aggregate whose length lives only on the wire."""

    a: List[int]


@dataclass
class Unicorn:
    """Aggregate with a conditional field."""

    a: int
    b: Optional[int]


THING = Sequencer([FieldDescriptor("a", be_u8()), FieldDescriptor("b", be_u16())], Thing)


class TestFieldDescriptor:
    """Test FieldDescriptor validation."""

    def test_default_accessor(self) -> None:
        """Test that named fields read the attribute of the same name."""
        descriptor = FieldDescriptor("a", be_u8())

        assert descriptor.accessor is not None
        assert descriptor.accessor(Thing(a=1, b=2)) == 1

    def test_anonymous_has_no_accessor(self) -> None:
        """Test that anonymous fields cannot take an accessor."""
        with pytest.raises(SchemaError):
            FieldDescriptor(None, be_u8(), accessor=lambda v: v)

    def test_anonymous_transient(self) -> None:
        """Test that transient fields need a name."""
        with pytest.raises(SchemaError):
            FieldDescriptor(None, be_u8(), transient=True)

    def test_rejects_non_combinator(self) -> None:
        """Test an invalid combinator slot."""
        with pytest.raises(SchemaError):
            FieldDescriptor("a", 42)  # type: ignore[arg-type]

    def test_factory_must_return_combinator(self) -> None:
        """Test a factory returning something else."""
        descriptor = FieldDescriptor("a", lambda ctx: "nope")

        with pytest.raises(SchemaError):
            descriptor.resolve({})


class TestSequencer:
    """Test struct encoding and decoding."""

    def test_end_to_end(self) -> None:
        """Test the two-field aggregate layout."""
        data = encode_bytes(Thing(a=0x10, b=0x20), THING)

        assert data == b"\x10\x00\x20"
        assert decode_bytes(data, THING) == Thing(a=0x10, b=0x20)

    def test_order_preservation(self) -> None:
        """Test that struct bytes are the concatenation of field bytes."""
        value = Thing(a=0xAB, b=0x1234)
        expected = encode_bytes(value.a, be_u8()) + encode_bytes(value.b, be_u16())

        assert encode_bytes(value, THING) == expected

    def test_size(self) -> None:
        """Test static size of a struct of fixed fields."""
        assert THING.size == 3

    def test_custom_accessor(self) -> None:
        """Test a tuple aggregate with index accessors."""
        point = Sequencer(
            [
                FieldDescriptor("x", be_u8(), accessor=lambda p: p[0]),
                FieldDescriptor("y", be_u8(), accessor=lambda p: p[1]),
            ],
            lambda x, y: (x, y),
        )

        assert encode_bytes((1, 2), point) == b"\x01\x02"
        assert decode_bytes(b"\x01\x02", point) == (1, 2)

    def test_unit_struct(self) -> None:
        """Test a struct with only a constant."""
        unit = Sequencer([FieldDescriptor(None, bind(be_u8(), 0xEC))], lambda: None)

        assert encode_bytes(None, unit) == b"\xec"
        assert decode_bytes(b"\xec", unit) is None

    def test_anonymous_fields_not_constructed(self) -> None:
        """Test that anonymous fields are not passed to the constructor."""
        framed = Sequencer(
            [
                FieldDescriptor(None, bind(be_u8(), 0x50)),
                FieldDescriptor("a", be_u8()),
                FieldDescriptor("b", be_u16()),
            ],
            Thing,
        )

        assert encode_bytes(Thing(a=1, b=2), framed) == b"\x50\x01\x00\x02"
        assert decode_bytes(b"\x50\x01\x00\x02", framed) == Thing(a=1, b=2)

    def test_transient_and_dependent(self) -> None:
        """Test a length that exists only on the wire."""
        foo = Sequencer(
            [
                FieldDescriptor("length", be_u8(), lambda f: len(f.a), transient=True),
                FieldDescriptor("a", lambda ctx: count(be_i16(), ctx["length"])),
            ],
            Foo,
        )
        data = b"\x02\x00\x50\x00\x60"

        assert decode_bytes(data, foo) == Foo(a=[0x50, 0x60])
        assert encode_bytes(Foo(a=[0x50, 0x60]), foo) == data
        assert foo.size is None

    def test_conditional_field(self) -> None:
        """Test a field present only when an earlier field says so."""
        unicorn = Sequencer(
            [
                FieldDescriptor("a", be_u8()),
                FieldDescriptor("b", lambda ctx: optional(be_u8(), ctx["a"] != 0)),
            ],
            Unicorn,
        )

        assert decode_bytes(b"\x00", unicorn) == Unicorn(a=0, b=None)
        assert decode_bytes(b"\x01\x09", unicorn) == Unicorn(a=1, b=9)
        assert encode_bytes(Unicorn(a=1, b=9), unicorn) == b"\x01\x09"

    def test_duplicate_names(self) -> None:
        """Test that a field name can appear once."""
        with pytest.raises(SchemaError, match="duplicate"):
            Sequencer([FieldDescriptor("a", be_u8()), FieldDescriptor("a", be_u8())], Thing)


class TestSequencerErrors:
    """Test struct error propagation."""

    def test_short_read_aborts(self) -> None:
        """Test that a truncated field fails the whole struct."""
        with pytest.raises(ShortReadError) as exc_info:
            decode_bytes(b"\x10\x00", THING)

        assert exc_info.value.path == ["b"]
        assert str(exc_info.value).startswith("b: ")

    def test_nested_path(self) -> None:
        """Test that nested failures report the full field path."""
        outer = Sequencer(
            [FieldDescriptor("tag", be_u8()), FieldDescriptor("inner", THING)], Outer
        )

        with pytest.raises(ShortReadError) as exc_info:
            decode_bytes(b"\x01\x02\x00", outer)

        assert exc_info.value.path == ["inner", "b"]

    def test_anonymous_path(self) -> None:
        """Test that anonymous fields are reported by index."""
        framed = Sequencer(
            [FieldDescriptor(None, bind(be_u8(), 0x50)), FieldDescriptor("a", be_u8())],
            lambda a: a,
        )

        with pytest.raises(CheckError) as exc_info:
            decode_bytes(b"\x51\x01", framed)

        assert exc_info.value.path == ["[0]"]

    def test_missing_attribute(self) -> None:
        """Test encoding an aggregate without the expected attribute."""
        with pytest.raises(LayoutError) as exc_info:
            encode_bytes(object(), THING)

        assert exc_info.value.path == ["a"]

    def test_field_error_on_encode(self) -> None:
        """Test that an out-of-range field value fails the struct."""
        with pytest.raises(LayoutError) as exc_info:
            encode_bytes(Thing(a=1, b=0x10000), THING)

        assert exc_info.value.path == ["b"]

    def test_array_field_not_a_list(self) -> None:
        """Test that a non-sequence array field reports the field path."""
        pairs = Sequencer([FieldDescriptor("a", count(be_u8(), 2))], Foo)

        with pytest.raises(LayoutError) as exc_info:
            encode_bytes(Foo(a=5), pairs)  # type: ignore[arg-type]

        assert exc_info.value.path == ["a"]

    def test_constructor_failure(self) -> None:
        """Test that a failing constructor is a data error."""

        def construct(a: int, b: int) -> Thing:
            raise ValueError("rejected")

        strict = Sequencer([FieldDescriptor("a", be_u8()), FieldDescriptor("b", be_u16())], construct)

        with pytest.raises(DataError, match="rejected"):
            decode_bytes(b"\x10\x00\x20", strict)
