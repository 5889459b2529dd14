"""
Merge orchestrator.

Enriches the baseline documentation records built by a generic scanner with
the routing metadata read from a MetadataProvider.
"""

import logging
from typing import Any

from endpoint_doc_merger.merger.fields import (
    merge_consumes,
    merge_headers,
    merge_path,
    merge_path_param_name,
    merge_produces,
    merge_query_param,
    merge_verb,
)
from endpoint_doc_merger.merger.response import adjust_response
from endpoint_doc_merger.metadata.provider import MetadataProvider
from endpoint_doc_merger.models.doc import ApiDoc, ApiMethodDoc, ApiParamDoc
from endpoint_doc_merger.models.metadata import ParameterBindings

log = logging.getLogger(__name__)


class ParameterIndexError(IndexError):
    """A parameter index is outside a method's declared parameters."""
    pass


class DocMerger:
    """
    Merge controller-level and method-level routing metadata into
    documentation records.

    Every merge returns an updated copy of the record it is given; the
    caller's record is left untouched.
    """

    def __init__(self, provider: MetadataProvider) -> None:
        """
        Initialize the merger.

        Args:
            provider: Source of routing metadata.
        """
        self.provider = provider

    def merge_api_doc(self, controller: Any, api_doc: ApiDoc) -> ApiDoc:
        """Controller-level documentation is passed through as it is."""
        return api_doc

    def merge_api_method_doc(
        self,
        method: Any,
        controller: Any,
        api_method_doc: ApiMethodDoc,
    ) -> ApiMethodDoc:
        """
        Merge routing metadata into an endpoint's documentation.

        Path and verb are replaced. Produces, consumes and headers are added
        to whatever the baseline record already lists. The response type
        loses its envelope layer when the handler returns a wrapper type.

        Args:
            method: The handler method handle.
            controller: The controller handle.
            api_method_doc: The baseline documentation record.

        Returns:
            The enriched documentation record.

        Raises:
            UnsupportedVerbError: If the effective verb is not supported.
        """
        controller_mapping = self.provider.controller_mapping(controller)
        method_mapping = self.provider.method_mapping(method)

        merged = api_method_doc.model_copy(deep=True)
        merged.path = merge_path(controller_mapping, method_mapping)
        merged.verb = merge_verb(controller_mapping, method_mapping)
        merged.add_produces(merge_produces(controller_mapping, method_mapping))
        merged.add_consumes(merge_consumes(controller_mapping, method_mapping))
        merged.add_headers(merge_headers(controller_mapping, method_mapping))
        merged.response = adjust_response(
            self.provider.returns_envelope(method),
            merged.response,
        )

        log.debug(
            "Merged %s: produces=%s consumes=%s headers=%s",
            merged.identifier,
            merged.produces,
            merged.consumes,
            [header.name for header in merged.headers],
        )
        return merged

    def merge_api_path_param_doc(
        self,
        method: Any,
        param_index: int,
        api_param_doc: ApiParamDoc,
    ) -> ApiParamDoc:
        """
        Merge a path-variable binding into a parameter's documentation.

        Raises:
            ParameterIndexError: If ``param_index`` is out of range.
        """
        bindings = self._bindings_at(method, param_index)
        return merge_path_param_name(bindings, api_param_doc)

    def merge_api_query_param_doc(
        self,
        method: Any,
        param_index: int,
        api_param_doc: ApiParamDoc,
    ) -> ApiParamDoc:
        """
        Merge a query-parameter binding into a parameter's documentation.

        Raises:
            ParameterIndexError: If ``param_index`` is out of range.
        """
        bindings = self._bindings_at(method, param_index)
        return merge_query_param(bindings, api_param_doc)

    def _bindings_at(self, method: Any, param_index: int) -> ParameterBindings:
        bindings = self.provider.parameter_bindings(method)
        if not 0 <= param_index < len(bindings):
            raise ParameterIndexError(
                f"Parameter index {param_index} out of range for "
                f"{len(bindings)} declared parameter(s)"
            )
        return bindings[param_index]
