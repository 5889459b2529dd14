"""
Metadata provider interface.

The merge core reads routing metadata only through a MetadataProvider, so
it does not depend on how that metadata was discovered.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from endpoint_doc_merger.models.metadata import ParameterBindings, RouteMapping


class MetadataError(Exception):
    """Routing metadata could not be read."""
    pass


class MetadataProvider(ABC):
    """
    Abstract source of routing metadata.

    Controllers and methods are opaque handles; each provider decides what
    they are (live classes and functions, table entries, ...).
    """

    @abstractmethod
    def controller_mapping(self, controller: Any) -> Optional[RouteMapping]:
        """
        Get the route mapping declared on a controller.

        Args:
            controller: The controller handle.

        Returns:
            The mapping, or None if the controller declares none.
        """
        pass

    @abstractmethod
    def method_mapping(self, method: Any) -> Optional[RouteMapping]:
        """
        Get the route mapping declared on a handler method.

        Args:
            method: The method handle.

        Returns:
            The mapping, or None if the method declares none.
        """
        pass

    @abstractmethod
    def parameter_bindings(self, method: Any) -> list[ParameterBindings]:
        """
        Get the bindings declared on each parameter of a method.

        Args:
            method: The method handle.

        Returns:
            One tuple of bindings per declared parameter, in declaration
            order. A parameter without a path or query binding has an
            empty tuple.
        """
        pass

    @abstractmethod
    def returns_envelope(self, method: Any) -> bool:
        """
        Check whether a method returns a response envelope wrapper type.

        Args:
            method: The method handle.

        Returns:
            True if the declared return type is a wrapper type.
        """
        pass
