"""Pydantic-based struct models.

A StructModel declares its byte layout next to its fields: each field's
combinator is given in ``typing.Annotated`` metadata, and the field order of
the class is the byte order on the wire. Both the reader and the writer are
derived from that one declaration.
"""

from __future__ import annotations

import functools
import io
from typing import Any, BinaryIO, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.fields import FieldInfo

from ..codec import driver
from ..codec.core import Combinator
from ..codec.sequencer import FieldDescriptor, Sequencer
from ..exceptions import LayoutError, SchemaError
from .fields import Depends

M = TypeVar("M", bound="StructModel")


class StructModel(BaseModel):
    """Base class for binary struct models.

    Subclasses annotate every field with its combinator:

    Example:
        >>> from typing import Annotated, ClassVar
        >>> class Thing(StructModel):
        ...     a: Annotated[int, be_u8()]
        ...     b: Annotated[int, be_u16()]
        ...
        ...     binio_magic: ClassVar = bind(be_u8(), 0x7F)
        >>> Thing(a=0x10, b=0x20).to_bytes()
        b'\\x7f\\x10\\x00 '
        >>> Thing.from_bytes(b'\\x7f\\x10\\x00 ')
        Thing(a=16, b=32)

    A field whose type is itself a StructModel uses that model's layout when
    no combinator is given.

    Attributes:
        binio_magic: Anonymous combinator written before the first field,
            typically ``bind(...)`` for a magic number (optional)
        binio_max_bytes: Maximum encoded size in bytes, checked by ``to_bytes``
            (optional)
    """

    model_config = ConfigDict(
        # Allow arbitrary types (enums, nested non-pydantic values)
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in the layout
        extra="forbid",
        # Decoding builds the model by field name, also for aliased fields
        populate_by_name=True,
    )

    binio_magic: ClassVar[Combinator[Any] | None] = None
    binio_max_bytes: ClassVar[int | None] = None

    @classmethod
    def combinator(cls: type[M]) -> Sequencer[M]:
        """Return the combinator for this model (built once per class).

        Raises:
            SchemaError: If a field has no layout
        """
        return _model_combinator(cls)

    @classmethod
    def read(cls: type[M], stream: BinaryIO) -> M:
        """Read one instance from a stream."""
        return driver.read(stream, cls.combinator())

    @classmethod
    def from_bytes(cls: type[M], data: bytes, *, exact: bool = True) -> M:
        """Decode one instance from bytes (see ``decode_bytes``)."""
        return driver.decode_bytes(data, cls.combinator(), exact=exact)

    def write(self, stream: BinaryIO) -> None:
        """Write this instance to a stream."""
        driver.write(stream, self, type(self).combinator())

    def to_bytes(self) -> bytes:
        """Encode this instance to bytes.

        Raises:
            LayoutError: If the result exceeds ``binio_max_bytes``
        """
        buffer = io.BytesIO()
        self.write(buffer)
        encoded = buffer.getvalue()

        max_bytes = type(self).binio_max_bytes
        if max_bytes is not None and len(encoded) > max_bytes:
            raise LayoutError(
                f"Encoded size ({len(encoded)} bytes) exceeds binio_max_bytes={max_bytes}"
            )

        return encoded


@functools.lru_cache(maxsize=None)
def _model_combinator(model_class: type[StructModel]) -> Sequencer[Any]:
    fields: list[FieldDescriptor] = []

    if model_class.binio_magic is not None:
        fields.append(FieldDescriptor(None, model_class.binio_magic))

    names = []
    for field_name, field_info in model_class.model_fields.items():
        fields.append(FieldDescriptor(field_name, _field_layout(field_name, field_info)))
        names.append(field_name)

    def construct(*values: Any) -> StructModel:
        return model_class(**dict(zip(names, values)))

    return Sequencer(fields, construct, name=model_class.__name__)


def _field_layout(name: str, field_info: FieldInfo) -> Any:
    """Find the combinator (or factory) for a model field."""
    for item in field_info.metadata:
        if isinstance(item, Combinator):
            return item
        if isinstance(item, Depends):
            return item

    annotation = field_info.annotation
    if isinstance(annotation, type) and issubclass(annotation, StructModel):
        return annotation.combinator()

    raise SchemaError(
        f"Field {name}: no combinator given. "
        f"Use Annotated[T, <combinator>] or Annotated[T, Depends(...)]."
    )
