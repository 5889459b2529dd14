"""
Metadata provider reading a precomputed metadata table.

A table lists controllers, their handler methods and the parameters of each
method, together with their routing metadata and, optionally, the baseline
documentation records to merge into. Tables are plain YAML or JSON files::

    controllers:
      - name: UserController
        mapping: {value: /users, produces: application/json}
        methods:
          - name: get_user
            mapping: {value: "/{id}", method: GET}
            return_type: ResponseEnvelope
            parameters:
              - bindings: [{kind: path, name: id}]
                doc: {name: user_id}
"""

import json
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from endpoint_doc_merger.metadata.provider import MetadataError, MetadataProvider
from endpoint_doc_merger.models.doc import ApiMethodDoc, ApiParamDoc
from endpoint_doc_merger.models.metadata import ParameterBinding, ParameterBindings, RouteMapping


class TableParameter(BaseModel):
    """A declared handler parameter."""

    bindings: list[ParameterBinding] = Field(
        default_factory=list,
        description="Path and query bindings declared on the parameter",
    )
    doc: Optional[ApiParamDoc] = Field(
        default=None,
        description="Baseline documentation of the parameter",
    )


class TableMethod(BaseModel):
    """A handler method of a controller."""

    name: str
    mapping: Optional[RouteMapping] = None
    return_type: Optional[str] = Field(
        default=None,
        description="Name of the declared return type",
    )
    parameters: list[TableParameter] = Field(default_factory=list)
    doc: ApiMethodDoc = Field(
        default_factory=ApiMethodDoc,
        description="Baseline documentation of the endpoint",
    )


class TableController(BaseModel):
    """A controller and its handler methods."""

    name: str
    description: Optional[str] = None
    mapping: Optional[RouteMapping] = None
    methods: list[TableMethod] = Field(default_factory=list)


class MetadataTable(BaseModel):
    """Root of a metadata table."""

    controllers: list[TableController] = Field(default_factory=list)

    class Config:
        extra = "forbid"


def load_table(table_path: Path) -> MetadataTable:
    """
    Load a metadata table from a YAML or JSON file.

    Args:
        table_path: Path to the table file.

    Returns:
        The validated MetadataTable.

    Raises:
        MetadataError: If the file is missing, unparsable or invalid.
    """
    if not table_path.exists():
        raise MetadataError(f"Metadata table not found: {table_path}")

    try:
        with open(table_path, encoding="utf-8") as f:
            if table_path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise MetadataError(f"Cannot parse metadata table {table_path}: {e}") from e

    try:
        return MetadataTable(**(data or {}))
    except (ValidationError, TypeError) as e:
        raise MetadataError(f"Invalid metadata table {table_path}: {e}") from e


class TableMetadataProvider(MetadataProvider):
    """
    Read routing metadata from table entries.

    Controller handles are TableController instances and method handles are
    TableMethod instances.
    """

    def __init__(self, wrapper_types: Optional[list[str]] = None) -> None:
        """
        Initialize the provider.

        Args:
            wrapper_types: Return type names treated as envelopes.
        """
        if wrapper_types is None:
            wrapper_types = ["ResponseEnvelope"]
        self.wrapper_types = set(wrapper_types)

    def controller_mapping(self, controller: TableController) -> Optional[RouteMapping]:
        return controller.mapping

    def method_mapping(self, method: TableMethod) -> Optional[RouteMapping]:
        return method.mapping

    def parameter_bindings(self, method: TableMethod) -> list[ParameterBindings]:
        return [
            tuple(binding for binding in parameter.bindings if binding.kind != "none")
            for parameter in method.parameters
        ]

    def returns_envelope(self, method: TableMethod) -> bool:
        return method.return_type in self.wrapper_types
