"""Primitive combinators: fixed-width numbers and strings."""

from __future__ import annotations

from .numbers import (
    be_f32,
    be_f64,
    be_i8,
    be_i16,
    be_i32,
    be_i64,
    be_u8,
    be_u16,
    be_u32,
    be_u64,
    le_f32,
    le_f64,
    le_i8,
    le_i16,
    le_i32,
    le_i64,
    le_u8,
    le_u16,
    le_u32,
    le_u64,
)
from .strings import len_ascii, len_utf8, len_utf16, null_ascii, null_utf8, null_utf16

__all__ = [
    # Numbers
    "be_u8",
    "be_i8",
    "le_u8",
    "le_i8",
    "be_u16",
    "be_i16",
    "le_u16",
    "le_i16",
    "be_u32",
    "be_i32",
    "le_u32",
    "le_i32",
    "be_u64",
    "be_i64",
    "le_u64",
    "le_i64",
    "be_f32",
    "le_f32",
    "be_f64",
    "le_f64",
    # Strings
    "null_utf8",
    "null_ascii",
    "len_utf8",
    "len_ascii",
    "null_utf16",
    "len_utf16",
]
