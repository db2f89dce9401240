"""Utility functions for binio.

This module provides size calculation for combinators and struct values.
"""

from __future__ import annotations

from .sizing import encoded_size, field_sizes, static_size

__all__ = [
    "encoded_size",
    "field_sizes",
    "static_size",
]
