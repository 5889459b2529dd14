"""
Type descriptor model.

A JSONDocType describes a documented type as an ordered list of type-name
tokens, e.g. ``["list", "Order"]`` for a list of orders.
"""

import types
import typing
from typing import Any, Optional

from pydantic import BaseModel, Field

TYPE_SEPARATOR = " of "


class JSONDocType(BaseModel):
    """A (possibly nested or generic) documented type."""

    tokens: list[str] = Field(
        default_factory=list,
        description="Type-name tokens, outermost first",
    )
    map_key: Optional["JSONDocType"] = Field(
        default=None,
        description="Key type for associative types",
    )
    map_value: Optional["JSONDocType"] = Field(
        default=None,
        description="Value type for associative types",
    )

    def add_item(self, token: str) -> None:
        """Append a token to the type."""
        self.tokens.append(token)

    def render(self) -> str:
        """Render the tokens as e.g. ``"list of Order"``."""
        return TYPE_SEPARATOR.join(token for token in self.tokens if token)

    def without_outermost(self) -> "JSONDocType":
        """
        Return a copy of this type with the outermost token removed.

        An empty token list is left as it is.
        """
        copy = self.model_copy(deep=True)
        if copy.tokens:
            del copy.tokens[0]
        return copy

    def __str__(self) -> str:
        return self.render()

    @classmethod
    def from_annotation(cls, annotation: Any) -> "JSONDocType":
        """
        Build a type descriptor from a Python type annotation.

        ``list[Order]`` becomes ``["list", "Order"]``, ``dict[str, int]``
        becomes ``["map"]`` with key and value descriptors, and a generic
        wrapper such as ``ResponseEnvelope[Order]`` keeps its own name as
        the outermost token. Generics with several type arguments, such as
        ``tuple[int, str]``, document their items as ``object`` and a
        ``Literal`` is documented as ``object``.

        Args:
            annotation: A class, a parametrized generic or ``None``.

        Returns:
            The matching JSONDocType.
        """
        if annotation is None or annotation is type(None):
            return cls(tokens=["void"])
        if annotation is Any:
            return cls(tokens=["object"])

        origin = typing.get_origin(annotation)
        args = typing.get_args(annotation)

        if origin is typing.Annotated:
            return cls.from_annotation(args[0])

        if origin is typing.Union or origin is types.UnionType:
            members = [arg for arg in args if arg is not type(None)]
            if len(members) == 1:
                return cls.from_annotation(members[0])
            return cls(tokens=["object"])

        if isinstance(origin, type) and issubclass(origin, dict):
            doc_type = cls(tokens=["map"])
            if len(args) == 2:
                doc_type.map_key = cls.from_annotation(args[0])
                doc_type.map_value = cls.from_annotation(args[1])
            return doc_type

        if origin is typing.Literal:
            return cls(tokens=["object"])

        if origin is not None:
            doc_type = cls(tokens=[_type_name(origin)])
            if len(args) == 2 and args[1] is Ellipsis:
                # tuple[X, ...]
                args = args[:1]
            if len(args) == 1:
                inner = cls.from_annotation(args[0])
                doc_type.tokens.extend(inner.tokens)
                doc_type.map_key = inner.map_key
                doc_type.map_value = inner.map_value
            elif args:
                # Several heterogeneous arguments, e.g. tuple[int, str]
                doc_type.tokens.append("object")
            return doc_type

        if isinstance(annotation, type):
            return cls(tokens=[_type_name(annotation)])

        return cls(tokens=["object"])


JSONDocType.model_rebuild()


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)
