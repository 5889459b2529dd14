"""
Base formatter and formatter registry.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from endpoint_doc_merger.models.doc import ApiDoc, ApiMethodDoc, ApiParamDoc
    from endpoint_doc_merger.models.type_descriptor import JSONDocType


class BaseFormatter(ABC):
    """
    Abstract base class for output formatters.

    Subclasses must implement format_docs().
    """

    @abstractmethod
    def format_docs(self, docs: list["ApiDoc"]) -> str:
        """
        Format merged controller documentation.

        Args:
            docs: Documentation of each controller.

        Returns:
            Formatted string representation.
        """
        pass


def type_to_dict(doc_type: Optional["JSONDocType"]) -> Optional[dict[str, Any]]:
    """Convert a type descriptor to a dictionary."""
    if doc_type is None:
        return None
    data: dict[str, Any] = {"type": doc_type.render()}
    if doc_type.map_key is not None or doc_type.map_value is not None:
        data["map_key"] = type_to_dict(doc_type.map_key)
        data["map_value"] = type_to_dict(doc_type.map_value)
    return data


def _param_to_dict(param: "ApiParamDoc") -> dict[str, Any]:
    return {
        "name": param.name,
        "description": param.description,
        "type": type_to_dict(param.jsondoc_type),
        "required": param.required,
        "default_value": param.default_value,
    }


def method_to_dict(method: "ApiMethodDoc") -> dict[str, Any]:
    """Convert an endpoint's documentation to a dictionary."""
    return {
        "path": method.path,
        "verb": method.verb.value,
        "description": method.description,
        "produces": list(method.produces),
        "consumes": list(method.consumes),
        "headers": [header.name for header in method.headers],
        "path_parameters": [_param_to_dict(p) for p in method.path_parameters],
        "query_parameters": [_param_to_dict(p) for p in method.query_parameters],
        "response": (
            type_to_dict(method.response.jsondoc_type)
            if method.response is not None
            else None
        ),
    }


def doc_to_dict(doc: "ApiDoc") -> dict[str, Any]:
    """Convert a controller's documentation to a dictionary."""
    return {
        "name": doc.name,
        "description": doc.description,
        "methods": [method_to_dict(m) for m in doc.methods],
    }


# Formatter registry
_FORMATTERS: dict[str, type[BaseFormatter]] = {}


def register_formatter(name: str) -> Callable[[type[BaseFormatter]], type[BaseFormatter]]:
    """
    Decorator to register a formatter.

    Args:
        name: The name to register the formatter under.

    Returns:
        Decorator function.
    """
    def decorator(cls: type[BaseFormatter]) -> type[BaseFormatter]:
        _FORMATTERS[name] = cls
        return cls
    return decorator


def get_formatter(name: str, **options: Any) -> BaseFormatter:
    """
    Get a formatter instance by name.

    Args:
        name: The formatter name (e.g., "text", "json", "yaml").
        **options: Keyword arguments passed to the formatter.

    Returns:
        An instance of the requested formatter.

    Raises:
        ValueError: If the formatter name is not recognized.
    """
    # Import formatters to ensure they're registered
    from endpoint_doc_merger.output import (  # noqa: F401
        json_output,
        text_output,
        yaml_output,
    )

    if name not in _FORMATTERS:
        available = ", ".join(_FORMATTERS.keys())
        raise ValueError(f"Unknown formatter: {name}. Available: {available}")

    return _FORMATTERS[name](**options)
