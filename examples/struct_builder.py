#!/usr/bin/env python3
"""Builder API example for binio.

This example demonstrates:
1. Describing a layout for a plain dataclass with StructBuilder
2. Writing several records to one stream and reading them back
3. Checking conversion pairs with configure(check_roundtrip=True)
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import List

from binio import (
    StructBuilder,
    be_u8,
    be_u32,
    configure,
    count,
    le_f32,
    read,
    write,
)


@dataclass
class Track:
    """Position fixes of one vehicle."""

    vehicle_id: int
    started_at: int
    fixes: List[float]


TRACK = (
    StructBuilder(Track)
    .constant(be_u8(), 0x54)
    .field("vehicle_id", be_u8())
    .padding(be_u8())
    .field("started_at", be_u32())
    .transient("fix_count", be_u8(), lambda t: len(t.fixes))
    .field("fixes", lambda ctx: count(le_f32(), ctx["fix_count"]))
    .build()
)


def main() -> None:
    """Run the builder example."""
    print("=" * 60)
    print("binio Builder Example")
    print("=" * 60)
    print()

    tracks = [
        Track(vehicle_id=1, started_at=1700000000, fixes=[0.5, 1.25]),
        Track(vehicle_id=2, started_at=1700000060, fixes=[]),
    ]

    print("1. Writing tracks to one stream...")
    stream = io.BytesIO()
    for track in tracks:
        write(stream, track, TRACK)
    print(f"   Stream size: {len(stream.getvalue())} bytes")
    print()

    print("2. Reading them back...")
    stream.seek(0)
    with configure(check_roundtrip=True):
        decoded = [read(stream, TRACK) for _ in tracks]
    for track in decoded:
        print(f"   {track}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
