"""
Declarative routing metadata for Python controllers.

Controllers and handlers declare their routes with ``request_mapping``;
handler parameters declare their bindings with ``PathVariable`` and
``RequestParam`` markers inside ``typing.Annotated``::

    @request_mapping("/users", produces="application/json")
    class UserController:

        @request_mapping("/{id}", method="GET")
        def get_user(self, user_id: Annotated[int, PathVariable("id")]) -> User:
            ...
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar, Union

from endpoint_doc_merger.models.metadata import PathBinding, QueryBinding, RouteMapping

ROUTE_MAPPING_ATTR = "__route_mapping__"

T = TypeVar("T")
StrOrSeq = Union[str, Sequence[str]]


def _as_tuple(value: StrOrSeq) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def request_mapping(
    value: StrOrSeq = (),
    method: StrOrSeq = (),
    produces: StrOrSeq = (),
    consumes: StrOrSeq = (),
    headers: StrOrSeq = (),
) -> Callable[[T], T]:
    """
    Decorator declaring a route mapping on a controller class or a handler.

    Args:
        value: Route path(s).
        method: HTTP verb(s).
        produces: Produced media type(s).
        consumes: Consumed media type(s).
        headers: Header constraint(s), ``"name=value"`` or ``"name"``.

    Returns:
        Decorator that attaches the mapping and returns the target unchanged.
    """
    mapping = RouteMapping(
        value=_as_tuple(value),
        method=_as_tuple(method),
        produces=_as_tuple(produces),
        consumes=_as_tuple(consumes),
        headers=_as_tuple(headers),
    )

    def decorator(target: T) -> T:
        setattr(target, ROUTE_MAPPING_ATTR, mapping)
        return target
    return decorator


@dataclass(frozen=True)
class PathVariable:
    """Marks a handler parameter as bound to a path variable."""

    name: str = ""

    def to_binding(self) -> PathBinding:
        return PathBinding(name=self.name)


@dataclass(frozen=True)
class RequestParam:
    """Marks a handler parameter as bound to a query-string parameter."""

    name: str = ""
    required: bool = True
    default_value: Optional[str] = None

    def to_binding(self) -> QueryBinding:
        return QueryBinding(
            name=self.name,
            required=self.required,
            default_value=self.default_value,
        )


@dataclass
class ResponseEnvelope(Generic[T]):
    """Transport envelope carrying a status code and headers alongside a body."""

    body: Optional[T] = None
    status: int = 200
    headers: dict[str, Any] = field(default_factory=dict)
