"""
Metadata provider reading live Python objects.

Route mappings come from the ``request_mapping`` decorator, parameter
bindings from ``PathVariable``/``RequestParam`` markers in
``typing.Annotated`` hints, and the return type from the return annotation.
"""

import inspect
import logging
import types
import typing
from typing import Any, Callable, Optional

from endpoint_doc_merger.metadata.provider import MetadataError, MetadataProvider
from endpoint_doc_merger.models.metadata import (
    ParameterBindings,
    RouteMapping,
)
from endpoint_doc_merger.routing import (
    ROUTE_MAPPING_ATTR,
    PathVariable,
    RequestParam,
    ResponseEnvelope,
)

log = logging.getLogger(__name__)

_IMPLICIT_PARAMETERS = ("self", "cls")


class ReflectionMetadataProvider(MetadataProvider):
    """
    Read routing metadata from decorated classes and functions.
    """

    def __init__(self, wrapper_types: Optional[list[str]] = None) -> None:
        """
        Initialize the provider.

        Args:
            wrapper_types: Extra return type names treated as envelopes,
                in addition to ResponseEnvelope and its subclasses.
        """
        self.wrapper_types = set(wrapper_types or [])
        self._hints: dict[Callable[..., Any], dict[str, Any]] = {}
        self._bindings: dict[Callable[..., Any], list[ParameterBindings]] = {}

    def controller_mapping(self, controller: type) -> Optional[RouteMapping]:
        # Only the class's own declaration counts, not an inherited one
        return vars(controller).get(ROUTE_MAPPING_ATTR)

    def method_mapping(self, method: Callable[..., Any]) -> Optional[RouteMapping]:
        return getattr(inspect.unwrap(method), ROUTE_MAPPING_ATTR, None)

    def declared_parameters(self, method: Callable[..., Any]) -> list[inspect.Parameter]:
        """
        Get the declared parameters of a handler, without ``self``/``cls``.

        Raises:
            MetadataError: If the signature cannot be inspected.
        """
        try:
            signature = inspect.signature(inspect.unwrap(method))
        except (TypeError, ValueError) as e:
            raise MetadataError(f"Cannot inspect signature of {method!r}: {e}") from e

        parameters = list(signature.parameters.values())
        if parameters and parameters[0].name in _IMPLICIT_PARAMETERS:
            parameters = parameters[1:]
        return parameters

    def type_hints(self, method: Callable[..., Any]) -> dict[str, Any]:
        """
        Get the resolved type hints of a handler, keeping Annotated extras.

        Hints are resolved once per handler and cached.

        Raises:
            MetadataError: If a hint cannot be resolved.
        """
        function = inspect.unwrap(method)
        if function not in self._hints:
            try:
                self._hints[function] = typing.get_type_hints(function, include_extras=True)
            except Exception as e:
                raise MetadataError(f"Cannot resolve type hints of {method!r}: {e}") from e
        return self._hints[function]

    def parameter_bindings(self, method: Callable[..., Any]) -> list[ParameterBindings]:
        function = inspect.unwrap(method)
        if function in self._bindings:
            return self._bindings[function]

        hints = self.type_hints(method)
        bindings: list[ParameterBindings] = []

        for parameter in self.declared_parameters(method):
            hint = hints.get(parameter.name)
            markers = ()
            if typing.get_origin(hint) is typing.Annotated:
                markers = typing.get_args(hint)[1:]
            bindings.append(
                tuple(
                    marker.to_binding()
                    for marker in markers
                    if isinstance(marker, (PathVariable, RequestParam))
                )
            )

        log.debug(
            "Bindings of %s: %s",
            getattr(method, "__qualname__", method),
            [[binding.kind for binding in parameter] for parameter in bindings],
        )
        self._bindings[function] = bindings
        return bindings

    def returns_envelope(self, method: Callable[..., Any]) -> bool:
        return_type = self.type_hints(method).get("return")
        if return_type is None:
            return False

        if typing.get_origin(return_type) is typing.Annotated:
            return_type = typing.get_args(return_type)[0]
        if typing.get_origin(return_type) in (typing.Union, types.UnionType):
            # Optional[X] documents X; any wider union is not an envelope
            members = [
                arg for arg in typing.get_args(return_type)
                if arg is not type(None)
            ]
            if len(members) != 1:
                return False
            return_type = members[0]
            if typing.get_origin(return_type) is typing.Annotated:
                return_type = typing.get_args(return_type)[0]

        return_class = typing.get_origin(return_type) or return_type
        if not isinstance(return_class, type):
            return False

        if issubclass(return_class, ResponseEnvelope):
            return True
        return return_class.__name__ in self.wrapper_types
