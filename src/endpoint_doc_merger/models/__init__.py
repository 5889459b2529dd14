"""
Data models for Endpoint Documentation Merger.

This package contains Pydantic models for documentation records, type
descriptors and the routing metadata they are merged from.
"""

from endpoint_doc_merger.models.doc import (
    ApiDoc,
    ApiHeaderDoc,
    ApiMethodDoc,
    ApiParamDoc,
    ApiResponseObjectDoc,
    ApiVerb,
    UnsupportedVerbError,
)
from endpoint_doc_merger.models.metadata import (
    NoBinding,
    ParameterBinding,
    ParameterBindings,
    PathBinding,
    QueryBinding,
    RouteMapping,
    find_binding,
)
from endpoint_doc_merger.models.type_descriptor import JSONDocType

__all__ = [
    # Documentation records
    "ApiDoc",
    "ApiHeaderDoc",
    "ApiMethodDoc",
    "ApiParamDoc",
    "ApiResponseObjectDoc",
    "ApiVerb",
    "UnsupportedVerbError",
    # Routing metadata
    "NoBinding",
    "ParameterBinding",
    "ParameterBindings",
    "PathBinding",
    "QueryBinding",
    "RouteMapping",
    "find_binding",
    # Type descriptors
    "JSONDocType",
]
