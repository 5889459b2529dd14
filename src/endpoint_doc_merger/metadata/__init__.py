"""
Routing metadata providers.
"""

from endpoint_doc_merger.metadata.provider import MetadataError, MetadataProvider
from endpoint_doc_merger.metadata.reflection import ReflectionMetadataProvider
from endpoint_doc_merger.metadata.table import (
    MetadataTable,
    TableController,
    TableMethod,
    TableMetadataProvider,
    TableParameter,
    load_table,
)

__all__ = [
    "MetadataError",
    "MetadataProvider",
    "MetadataTable",
    "ReflectionMetadataProvider",
    "TableController",
    "TableMethod",
    "TableMetadataProvider",
    "TableParameter",
    "load_table",
]
