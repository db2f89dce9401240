#!/usr/bin/env python3
"""Basic usage example for binio.

This example demonstrates:
1. Declaring a binary layout on a Pydantic model
2. Encoding to bytes and decoding back
3. Per-field size breakdown
4. Error reporting on damaged input
"""

from __future__ import annotations

import enum
from typing import Annotated, ClassVar, List, Optional

from binio import (
    BinioError,
    Combinator,
    Depends,
    StructModel,
    be_i16,
    be_u8,
    be_u16,
    bind,
    count,
    field_sizes,
    int_enum,
    null_utf8,
)


class SensorKind(enum.Enum):
    """Kind of sensor producing a reading."""

    PRESSURE = 1
    TEMPERATURE = 2


class SensorBlock(StructModel):
    """Block of samples from one sensor.

    The sample count lives only on the wire as ``n``; the magic number
    guards against reading the wrong kind of record.
    """

    kind: Annotated[SensorKind, int_enum(be_u8(), SensorKind)]
    label: Annotated[str, null_utf8()]
    n: Annotated[int, be_u8()]
    samples: Annotated[List[int], Depends(lambda ctx: count(be_i16(), ctx["n"]))]

    binio_magic: ClassVar[Optional[Combinator]] = bind(be_u16(), 0x5342)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("binio Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Creating a sensor block...")
    block = SensorBlock(kind=SensorKind.PRESSURE, label="p0", n=3, samples=[1013, 1012, -4])
    print(f"   {block!r}")
    print()

    print("2. Encoding...")
    data = block.to_bytes()
    print(f"   Encoded size: {len(data)} bytes")
    print(f"   Hex: {data.hex()}")
    print()

    print("3. Field sizes...")
    for field_name, size in field_sizes(block, SensorBlock.combinator()).items():
        print(f"   {field_name}: {size} bytes")
    print()

    print("4. Decoding...")
    decoded = SensorBlock.from_bytes(data)
    if decoded == block:
        print("   ✓ Round-trip successful! Blocks match.")
    else:
        print("   ✗ Round-trip failed! Blocks don't match.")
    print()

    print("5. Decoding damaged input...")
    for damaged in (data[:-1], b"\x00" + data[1:]):
        try:
            SensorBlock.from_bytes(damaged)
        except BinioError as e:
            print(f"   {type(e).__name__} at {'.'.join(e.path)}: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
