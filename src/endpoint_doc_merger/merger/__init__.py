"""
Merge core: field mergers, response adjustment and the orchestrator.
"""

from endpoint_doc_merger.merger.fields import (
    merge_consumes,
    merge_headers,
    merge_path,
    merge_path_param_name,
    merge_produces,
    merge_query_param,
    merge_verb,
)
from endpoint_doc_merger.merger.orchestrator import DocMerger, ParameterIndexError
from endpoint_doc_merger.merger.response import adjust_response

__all__ = [
    "DocMerger",
    "ParameterIndexError",
    "adjust_response",
    "merge_consumes",
    "merge_headers",
    "merge_path",
    "merge_path_param_name",
    "merge_produces",
    "merge_query_param",
    "merge_verb",
]
