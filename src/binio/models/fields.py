"""Field markers for StructModel annotations.

A StructModel field carries its layout in ``typing.Annotated`` metadata:
either a Combinator directly, or a ``Depends`` wrapper when the layout needs
the values of earlier fields.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from ..codec.core import Combinator


class Depends:
    """Layout that depends on the fields declared before it.

    Args:
        factory: Receives the earlier field values by name, returns a Combinator

    Example:
        >>> class Samples(StructModel):
        ...     n: Annotated[int, be_u8()]
        ...     values: Annotated[list[int], Depends(lambda ctx: count(be_i16(), ctx["n"]))]
    """

    __slots__ = ("factory",)

    def __init__(self, factory: Callable[[Mapping[str, Any]], Combinator[Any]]) -> None:
        self.factory = factory

    def __call__(self, context: Mapping[str, Any]) -> Combinator[Any]:
        return self.factory(context)

    def __repr__(self) -> str:
        return f"Depends({self.factory!r})"
