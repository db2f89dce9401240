"""Builder API for struct layouts.

A layout is described once, as an ordered list of fields, and the builder
turns it into a ``Sequencer`` that handles both directions.

Example:
    >>> @dataclass
    ... class Thing:
    ...     a: int
    ...     b: int
    >>> thing = struct(Thing, a=be_u8(), b=be_u16())
    >>> encode_bytes(Thing(a=0x10, b=0x20), thing)
    b'\\x10\\x00 '

Layouts with constants, padding and length prefixes use ``StructBuilder``:

    >>> packet = (
    ...     StructBuilder(Packet)
    ...     .constant(be_u8(), 0x50)
    ...     .transient("length", be_u8(), lambda p: len(p.values))
    ...     .field("values", lambda ctx: count(be_i16(), ctx["length"]))
    ...     .build()
    ... )
"""

from __future__ import annotations

from operator import itemgetter
from typing import Any, Callable

from ..codec.combinators import bind, skip
from ..codec.core import Combinator
from ..codec.sequencer import CombinatorFactory, FieldDescriptor, Sequencer
from ..exceptions import SchemaError


class StructBuilder:
    """Collects field descriptors in order and builds a Sequencer.

    Args:
        target: Type of the aggregate. Called with keyword arguments (one per
            named, non-transient field) when decoding. When None, the
            aggregate is a ``dict`` and fields are read with ``itemgetter``.
        name: Label for the resulting combinator (defaults to the target name)
    """

    def __init__(self, target: Callable[..., Any] | None = None, *, name: str | None = None):
        self.target = target
        self.name = name or getattr(target, "__name__", "struct")
        self._fields: list[FieldDescriptor] = []

    def field(
        self,
        name: str,
        combinator: Combinator[Any] | CombinatorFactory,
        accessor: Callable[[Any], Any] | None = None,
    ) -> StructBuilder:
        """Add a named field.

        Args:
            name: Field name; also the constructor keyword and the context key
                seen by later dependent fields
            combinator: Combinator, or factory ``ctx -> Combinator``
            accessor: Extracts the value from the aggregate; defaults to
                attribute access (or item access for dict aggregates)
        """
        self._fields.append(
            FieldDescriptor(name, combinator, accessor or self._default_accessor(name))
        )
        return self

    def constant(self, combinator: Combinator[Any], value: Any) -> StructBuilder:
        """Add an anonymous constant that must match on decode (see ``bind``)."""
        self._fields.append(FieldDescriptor(None, bind(combinator, value)))
        return self

    def padding(self, combinator: Combinator[Any], value: Any = 0) -> StructBuilder:
        """Add an anonymous field that is written as ``value`` and ignored on decode."""
        self._fields.append(FieldDescriptor(None, skip(combinator, value)))
        return self

    def transient(
        self,
        name: str,
        combinator: Combinator[Any] | CombinatorFactory,
        compute: Callable[[Any], Any],
    ) -> StructBuilder:
        """Add a field that exists on the wire but not in the aggregate.

        Its decoded value is visible to later dependent fields; when encoding
        it is computed from the aggregate with ``compute``.
        """
        self._fields.append(FieldDescriptor(name, combinator, compute, transient=True))
        return self

    def build(self, construct: Callable[..., Any] | None = None) -> Sequencer[Any]:
        """Build the Sequencer.

        Args:
            construct: Receives the decoded values positionally, in field
                order. Defaults to calling the target with keyword arguments.

        Raises:
            SchemaError: If the layout is invalid
        """
        if construct is None:
            construct = self._keyword_constructor()
        return Sequencer(self._fields, construct, name=self.name)

    def _default_accessor(self, name: str) -> Callable[[Any], Any] | None:
        if self.target is None:
            return itemgetter(name)
        return None

    def _keyword_constructor(self) -> Callable[..., Any]:
        names = [f.name for f in self._fields if f.constructor_arg]
        target = self.target if self.target is not None else dict

        def construct(*values: Any) -> Any:
            return target(**dict(zip(names, values)))

        return construct


def struct(target: Callable[..., Any] | None = None, /, **fields: Any) -> Sequencer[Any]:
    """Build a struct combinator from keyword arguments, in keyword order.

    Each value is a Combinator or a factory ``ctx -> Combinator``.

    Raises:
        SchemaError: If no fields are given
    """
    if not fields:
        raise SchemaError("struct() needs at least one field; use StructBuilder for unit layouts")

    builder = StructBuilder(target)
    for name, combinator in fields.items():
        builder.field(name, combinator)
    return builder.build()
