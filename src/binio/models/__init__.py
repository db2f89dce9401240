"""Declarative struct descriptions for binio.

This package provides two ways to describe a struct layout once and get both
the reader and the writer from it: the StructBuilder API and pydantic-based
StructModel classes.
"""

from __future__ import annotations

from .base import StructModel
from .builder import StructBuilder, struct
from .fields import Depends

__all__ = [
    "StructModel",
    "StructBuilder",
    "struct",
    "Depends",
]
