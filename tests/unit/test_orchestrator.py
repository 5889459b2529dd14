"""
Unit tests for the merge orchestrator.
"""

import pytest

from endpoint_doc_merger.merger.orchestrator import DocMerger, ParameterIndexError
from endpoint_doc_merger.metadata.table import (
    TableController,
    TableMethod,
    TableMetadataProvider,
    TableParameter,
)
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
    PathBinding,
    QueryBinding,
    RouteMapping,
)
from endpoint_doc_merger.models.type_descriptor import JSONDocType


@pytest.fixture
def merger() -> DocMerger:
    """Create a merger over table entries."""
    return DocMerger(TableMetadataProvider(["ResponseEnvelope"]))


@pytest.fixture
def controller(users_mapping: RouteMapping) -> TableController:
    """Create a controller with a class-level mapping."""
    return TableController(name="UserController", mapping=users_mapping)


@pytest.fixture
def get_user() -> TableMethod:
    """Create a handler returning an envelope."""
    return TableMethod(
        name="get_user",
        mapping=RouteMapping(
            value=("/{id}",),
            method=("DELETE",),
            produces=("application/json",),
            headers=("X-Auth=token",),
        ),
        return_type="ResponseEnvelope",
        parameters=[
            TableParameter(bindings=[PathBinding(name="id")]),
            TableParameter(bindings=[QueryBinding(name="fields", required=False)]),
            TableParameter(bindings=[NoBinding()]),
        ],
    )


class TestMergeApiDoc:
    """Tests for controller-level merging."""

    def test_identity(self, merger: DocMerger, controller: TableController) -> None:
        api_doc = ApiDoc(name="UserController")

        assert merger.merge_api_doc(controller, api_doc) is api_doc


class TestMergeApiMethodDoc:
    """Tests for endpoint-level merging."""

    def test_merges_all_fields(
        self,
        merger: DocMerger,
        controller: TableController,
        get_user: TableMethod,
    ) -> None:
        baseline = ApiMethodDoc(
            response=ApiResponseObjectDoc(
                jsondoc_type=JSONDocType(tokens=["ResponseEnvelope", "User"])
            ),
        )

        merged = merger.merge_api_method_doc(get_user, controller, baseline)

        assert merged.path == "/users/{id}"
        assert merged.verb is ApiVerb.DELETE
        assert merged.produces == ["application/json"]
        assert merged.consumes == ["application/xml"]
        assert [h.name for h in merged.headers] == ["X-Auth"]
        assert merged.response is not None
        assert merged.response.jsondoc_type.tokens == ["User"]

    def test_baseline_not_mutated(
        self,
        merger: DocMerger,
        controller: TableController,
        get_user: TableMethod,
    ) -> None:
        baseline = ApiMethodDoc(
            response=ApiResponseObjectDoc(
                jsondoc_type=JSONDocType(tokens=["ResponseEnvelope", "User"])
            ),
        )

        merger.merge_api_method_doc(get_user, controller, baseline)

        assert baseline.path == ""
        assert baseline.produces == []
        assert baseline.response is not None
        assert baseline.response.jsondoc_type.tokens == ["ResponseEnvelope", "User"]

    def test_collections_unioned_with_baseline(
        self,
        merger: DocMerger,
        controller: TableController,
        get_user: TableMethod,
    ) -> None:
        baseline = ApiMethodDoc(
            produces=["text/plain", "application/json"],
            headers=[ApiHeaderDoc(name="X-Request-Id")],
        )

        merged = merger.merge_api_method_doc(get_user, controller, baseline)

        assert merged.produces == ["text/plain", "application/json"]
        assert [h.name for h in merged.headers] == ["X-Request-Id", "X-Auth"]

    def test_baseline_header_with_description_not_duplicated(
        self,
        merger: DocMerger,
        controller: TableController,
        get_user: TableMethod,
    ) -> None:
        baseline = ApiMethodDoc(
            headers=[ApiHeaderDoc(name="X-Auth", description="Session token")],
        )

        merged = merger.merge_api_method_doc(get_user, controller, baseline)

        assert merged.headers == [ApiHeaderDoc(name="X-Auth", description="Session token")]

    def test_no_mappings(self, merger: DocMerger) -> None:
        merged = merger.merge_api_method_doc(
            TableMethod(name="ping"),
            TableController(name="PingController"),
            ApiMethodDoc(path="/stale", verb=ApiVerb.POST),
        )

        assert merged.path == ""
        assert merged.verb is ApiVerb.GET
        assert merged.produces == []
        assert merged.headers == []
        assert merged.response is None

    def test_non_envelope_response_unchanged(self, merger: DocMerger) -> None:
        response = ApiResponseObjectDoc(jsondoc_type=JSONDocType(tokens=["list", "User"]))

        merged = merger.merge_api_method_doc(
            TableMethod(name="list_users", return_type="list"),
            TableController(name="UserController"),
            ApiMethodDoc(response=response),
        )

        assert merged.response == response

    def test_unsupported_verb_propagates(self, merger: DocMerger) -> None:
        method = TableMethod(name="fetch", mapping=RouteMapping(method=("FETCH",)))

        with pytest.raises(UnsupportedVerbError):
            merger.merge_api_method_doc(method, TableController(name="C"), ApiMethodDoc())


class TestMergeParamDocs:
    """Tests for per-parameter merging."""

    def test_path_param(self, merger: DocMerger, get_user: TableMethod) -> None:
        merged = merger.merge_api_path_param_doc(get_user, 0, ApiParamDoc(name="user_id"))
        assert merged.name == "id"

    def test_path_merge_ignores_query_parameter(self, merger: DocMerger, get_user: TableMethod) -> None:
        merged = merger.merge_api_path_param_doc(get_user, 1, ApiParamDoc(name="fields"))
        assert merged == ApiParamDoc(name="fields")

    def test_query_param(self, merger: DocMerger, get_user: TableMethod) -> None:
        merged = merger.merge_api_query_param_doc(get_user, 1, ApiParamDoc(name="f"))

        assert merged.name == "fields"
        assert merged.required == "false"
        assert merged.default_value is None

    def test_unbound_parameter_passes_through(self, merger: DocMerger, get_user: TableMethod) -> None:
        doc = ApiParamDoc(name="body", required="true")

        assert merger.merge_api_query_param_doc(get_user, 2, doc) == doc
        assert merger.merge_api_path_param_doc(get_user, 2, doc) == doc

    def test_parameter_with_path_and_query_bindings(self, merger: DocMerger) -> None:
        method = TableMethod(
            name="find_order",
            parameters=[
                TableParameter(
                    bindings=[QueryBinding(name="q", required=False), PathBinding(name="id")]
                ),
            ],
        )

        path_doc = merger.merge_api_path_param_doc(method, 0, ApiParamDoc(name="order_id"))
        query_doc = merger.merge_api_query_param_doc(method, 0, ApiParamDoc(name="order_id"))

        assert path_doc.name == "id"
        assert (query_doc.name, query_doc.required) == ("q", "false")

    @pytest.mark.parametrize("index", [3, -1, 100])
    def test_index_out_of_range(self, merger: DocMerger, get_user: TableMethod, index: int) -> None:
        with pytest.raises(ParameterIndexError):
            merger.merge_api_path_param_doc(get_user, index, ApiParamDoc(name="x"))
        with pytest.raises(IndexError):
            merger.merge_api_query_param_doc(get_user, index, ApiParamDoc(name="x"))
