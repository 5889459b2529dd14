"""
Routing metadata models.

Read-only metadata declared on controllers, handler methods and handler
parameters, as supplied by a metadata provider.
"""

from typing import Annotated, Iterable, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class RouteMapping(BaseModel):
    """Route-mapping declaration on a controller or a handler method."""

    value: tuple[str, ...] = Field(default=(), description="Route path(s)")
    method: tuple[str, ...] = Field(default=(), description="HTTP verb token(s)")
    produces: tuple[str, ...] = Field(default=())
    consumes: tuple[str, ...] = Field(default=())
    headers: tuple[str, ...] = Field(
        default=(),
        description='Header constraints, "name=value" or bare "name"',
    )

    class Config:
        frozen = True

    @field_validator("value", "method", "produces", "consumes", "headers", mode="before")
    @classmethod
    def _wrap_single_value(cls, value: object) -> object:
        if isinstance(value, str):
            return (value,)
        return value


class PathBinding(BaseModel):
    """Parameter bound to a path variable."""

    kind: Literal["path"] = "path"
    name: str = Field(default="", description="Explicit name, empty to infer")

    class Config:
        frozen = True


class QueryBinding(BaseModel):
    """Parameter bound to a query-string parameter."""

    kind: Literal["query"] = "query"
    name: str = Field(default="", description="Explicit name, empty to infer")
    required: bool = Field(default=True)
    default_value: Optional[str] = Field(
        default=None,
        description="Declared default value, None when there is none",
    )

    class Config:
        frozen = True


class NoBinding(BaseModel):
    """Parameter without a path or query binding."""

    kind: Literal["none"] = "none"

    class Config:
        frozen = True


ParameterBinding = Annotated[
    Union[PathBinding, QueryBinding, NoBinding],
    Field(discriminator="kind"),
]


ParameterBindings = tuple[ParameterBinding, ...]


def find_binding(
    bindings: Iterable[Union[PathBinding, QueryBinding, NoBinding]],
    kind: str,
) -> Union[PathBinding, QueryBinding, NoBinding]:
    """
    Find the binding of one kind among those declared on a parameter.

    A parameter may carry several unrelated markers; each merger looks only
    at the kind it handles.

    Args:
        bindings: Bindings declared on one parameter, in declaration order.
        kind: ``"path"`` or ``"query"``.

    Returns:
        The first binding of that kind, or NoBinding if there is none.
    """
    for binding in bindings:
        if binding.kind == kind:
            return binding
    return NoBinding()
