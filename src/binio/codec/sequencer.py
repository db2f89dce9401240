"""Struct assembly from an ordered list of field descriptors.

The field list is the single source of truth for both directions: decoding
walks it to read values and build the aggregate, encoding walks the same list
to pull values out of the aggregate and write them. Field order therefore
cannot differ between the two.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from operator import attrgetter
from types import MappingProxyType
from typing import Any, BinaryIO, Callable, Mapping, Sequence, TypeVar

from ..exceptions import BinioError, DataError, LayoutError, SchemaError
from .core import Combinator

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A field's combinator may depend on fields that come before it
CombinatorFactory = Callable[[Mapping[str, Any]], Combinator[Any]]


@dataclass(frozen=True)
class FieldDescriptor:
    """One field of a struct layout.

    Attributes:
        name: Field name, or None for anonymous fields (constants, padding)
            whose decoded value is discarded and which encode ``None``
        combinator: Combinator for the field, or a factory receiving the values
            of the earlier fields (by name) and returning one
        accessor: Extracts the field value from the aggregate when encoding.
            Defaults to ``attrgetter(name)`` for named fields.
        transient: The value is part of the byte layout but not of the
            aggregate (e.g. a length prefix). It is decoded into the context
            for later fields but not passed to the constructor; when encoding
            the accessor computes it from the aggregate.
    """

    name: str | None
    combinator: Combinator[Any] | CombinatorFactory
    accessor: Callable[[Any], Any] | None = None
    transient: bool = False

    def __post_init__(self) -> None:
        if self.name is None:
            if self.transient:
                raise SchemaError("Transient fields must be named")
            if self.accessor is not None:
                raise SchemaError("Anonymous fields cannot have an accessor")
        elif self.accessor is None:
            object.__setattr__(self, "accessor", attrgetter(self.name))

        if not isinstance(self.combinator, Combinator) and not callable(self.combinator):
            raise SchemaError(
                f"Field {self.name}: expected a Combinator or a factory, "
                f"got {type(self.combinator).__name__}"
            )

    @property
    def dependent(self) -> bool:
        """Whether the combinator is resolved from earlier field values."""
        return not isinstance(self.combinator, Combinator)

    @property
    def constructor_arg(self) -> bool:
        """Whether the decoded value is passed to the construction function."""
        return self.name is not None and not self.transient

    def resolve(self, context: Mapping[str, Any]) -> Combinator[Any]:
        """Return the combinator for this field given the earlier values."""
        if isinstance(self.combinator, Combinator):
            return self.combinator

        combinator = self.combinator(context)
        if not isinstance(combinator, Combinator):
            raise SchemaError(
                f"Field {self.name}: factory returned {type(combinator).__name__}, "
                f"expected a Combinator"
            )
        return combinator


class Sequencer(Combinator[T]):
    """Aggregate combinator for a product type built from field descriptors.

    Decoding reads every field in order and then calls
    ``construct(*values)`` with the values of the named, non-transient fields
    in declaration order. Encoding extracts each field from the aggregate with
    its accessor and writes it, in the same order.

    The first failing field aborts the operation. Its exception propagates
    unchanged, with the field name prepended to ``BinioError.path``.

    Args:
        fields: Ordered field descriptors
        construct: Builds the aggregate from the decoded field values
        name: Label used in ``repr`` and error messages

    Example:
        >>> thing = Sequencer(
        ...     [FieldDescriptor("a", be_u8()), FieldDescriptor("b", be_u16())],
        ...     construct=Thing,
        ... )
        >>> encode_bytes(Thing(a=0x10, b=0x20), thing)
        b'\\x10\\x00 '
    """

    __slots__ = ("fields", "construct")

    def __init__(
        self,
        fields: Sequence[FieldDescriptor],
        construct: Callable[..., T],
        *,
        name: str = "struct",
    ) -> None:
        fields = tuple(fields)
        seen: set[str] = set()
        for descriptor in fields:
            if descriptor.name is None:
                continue
            if descriptor.name in seen:
                raise SchemaError(f"{name}: duplicate field name {descriptor.name!r}")
            seen.add(descriptor.name)

        object.__setattr__(self, "fields", fields)
        object.__setattr__(self, "construct", construct)
        super().__init__(
            self._decode_fields, self._encode_fields, name=name, size=_static_size(fields)
        )

    def _decode_fields(self, stream: BinaryIO) -> T:
        context: dict[str, Any] = {}
        view = MappingProxyType(context)
        args = []

        for index, descriptor in enumerate(self.fields):
            try:
                value = descriptor.resolve(view).decode(stream)
            except BinioError as e:
                self._annotate(e, index, descriptor, "decoding")
                raise

            if descriptor.name is not None:
                context[descriptor.name] = value
            if descriptor.constructor_arg:
                args.append(value)

        try:
            return self.construct(*args)
        except BinioError:
            raise
        except (ValueError, TypeError) as e:
            raise DataError(f"{self.name}: cannot construct aggregate: {e}") from e

    def _encode_fields(self, stream: BinaryIO, value: T) -> None:
        context: dict[str, Any] = {}
        view = MappingProxyType(context)

        for index, descriptor in enumerate(self.fields):
            try:
                field_value = self._extract(descriptor, value)
                if descriptor.name is not None:
                    context[descriptor.name] = field_value
                descriptor.resolve(view).encode(stream, field_value)
            except BinioError as e:
                self._annotate(e, index, descriptor, "encoding")
                raise

    def _extract(self, descriptor: FieldDescriptor, value: T) -> Any:
        if descriptor.accessor is None:
            return None
        try:
            return descriptor.accessor(value)
        except (AttributeError, KeyError, IndexError, TypeError) as e:
            raise LayoutError(
                f"cannot read field from {type(value).__name__}: {e}"
            ) from e

    def _annotate(
        self, error: BinioError, index: int, descriptor: FieldDescriptor, action: str
    ) -> None:
        label = descriptor.name if descriptor.name is not None else f"[{index}]"
        error.path.insert(0, label)
        logger.debug("%s: failed %s field %s: %s", self.name, action, label, error)


def _static_size(fields: Sequence[FieldDescriptor]) -> int | None:
    total = 0
    for descriptor in fields:
        if descriptor.dependent:
            return None
        size = descriptor.combinator.size  # type: ignore[union-attr]
        if size is None:
            return None
        total += size
    return total
