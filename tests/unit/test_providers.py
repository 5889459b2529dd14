"""
Unit tests for the metadata providers.
"""

import functools
import typing
from pathlib import Path
from typing import Annotated, Optional

import pytest

from endpoint_doc_merger.metadata.provider import MetadataError
from endpoint_doc_merger.metadata.reflection import ReflectionMetadataProvider
from endpoint_doc_merger.metadata.table import (
    TableMethod,
    TableMetadataProvider,
    load_table,
)
from endpoint_doc_merger.models.metadata import (
    PathBinding,
    QueryBinding,
    RouteMapping,
)
from endpoint_doc_merger.routing import (
    PathVariable,
    RequestParam,
    ResponseEnvelope,
    request_mapping,
)


class Item:
    pass


class ItemEnvelope(ResponseEnvelope[Item]):
    pass


class ResponseEntity:
    pass


def logged(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)
    return wrapper


@request_mapping("/items", method="PUT", produces=["application/json"])
class ItemController:

    @request_mapping("/{id}", headers="X-Auth=token")
    def get_item(
        self,
        item_id: Annotated[int, PathVariable("id")],
        fields: Annotated[Optional[str], "doc", RequestParam("f", required=False)] = None,
        verbose: bool = False,
    ) -> ResponseEnvelope[Item]:
        ...

    @logged
    @request_mapping(method="POST")
    def create_item(self, item: Item) -> ItemEnvelope:
        ...

    @request_mapping()
    def legacy(self) -> ResponseEntity:
        ...

    def helper(self, value) -> list[Item]:
        ...


class SubController(ItemController):
    pass


class TestReflectionMetadataProvider:
    """Tests for ReflectionMetadataProvider."""

    @pytest.fixture
    def provider(self) -> ReflectionMetadataProvider:
        return ReflectionMetadataProvider()

    def test_controller_mapping(self, provider: ReflectionMetadataProvider) -> None:
        mapping = provider.controller_mapping(ItemController)

        assert mapping == RouteMapping(
            value=("/items",),
            method=("PUT",),
            produces=("application/json",),
        )

    def test_controller_mapping_not_inherited(self, provider: ReflectionMetadataProvider) -> None:
        assert provider.controller_mapping(SubController) is None

    def test_method_mapping(self, provider: ReflectionMetadataProvider) -> None:
        mapping = provider.method_mapping(ItemController.get_item)

        assert mapping is not None
        assert mapping.value == ("/{id}",)
        assert mapping.headers == ("X-Auth=token",)

    def test_method_mapping_through_decorator(self, provider: ReflectionMetadataProvider) -> None:
        mapping = provider.method_mapping(ItemController.create_item)

        assert mapping is not None
        assert mapping.method == ("POST",)

    def test_unmapped_method(self, provider: ReflectionMetadataProvider) -> None:
        assert provider.method_mapping(ItemController.helper) is None

    def test_parameter_bindings(self, provider: ReflectionMetadataProvider) -> None:
        bindings = provider.parameter_bindings(ItemController.get_item)

        assert bindings == [
            (PathBinding(name="id"),),
            (QueryBinding(name="f", required=False),),
            (),
        ]

    def test_parameter_with_path_and_query_markers(self, provider: ReflectionMetadataProvider) -> None:
        def query_first(order_id: Annotated[int, RequestParam("q"), PathVariable("id")]) -> None:
            ...

        def path_first(order_id: Annotated[int, PathVariable("id"), RequestParam("q")]) -> None:
            ...

        assert provider.parameter_bindings(query_first) == [
            (QueryBinding(name="q"), PathBinding(name="id")),
        ]
        assert provider.parameter_bindings(path_first) == [
            (PathBinding(name="id"), QueryBinding(name="q")),
        ]

    def test_self_not_a_declared_parameter(self, provider: ReflectionMetadataProvider) -> None:
        assert provider.parameter_bindings(ItemController.legacy) == []
        assert provider.parameter_bindings(ItemController.helper) == [()]

    def test_returns_envelope(self, provider: ReflectionMetadataProvider) -> None:
        assert provider.returns_envelope(ItemController.get_item) is True
        assert provider.returns_envelope(ItemController.create_item) is True
        assert provider.returns_envelope(ItemController.helper) is False
        assert provider.returns_envelope(ItemController.legacy) is False

    def test_optional_envelope(self, provider: ReflectionMetadataProvider) -> None:
        def find_item(item_id: int) -> Optional[ResponseEnvelope[Item]]:
            ...

        def find_entity(item_id: int) -> ResponseEntity | None:
            ...

        def find_either(item_id: int) -> ResponseEnvelope[Item] | Item:
            ...

        assert provider.returns_envelope(find_item) is True
        assert ReflectionMetadataProvider(["ResponseEntity"]).returns_envelope(find_entity) is True
        assert provider.returns_envelope(find_either) is False

    def test_configured_wrapper_type_names(self) -> None:
        provider = ReflectionMetadataProvider(["ResponseEntity"])

        assert provider.returns_envelope(ItemController.legacy) is True

    def test_unresolvable_hints(self, provider: ReflectionMetadataProvider) -> None:
        def handler(value: "DoesNotExist") -> None:  # noqa: F821
            ...

        with pytest.raises(MetadataError):
            provider.parameter_bindings(handler)

    def test_type_hints_resolved_once_per_handler(
        self,
        provider: ReflectionMetadataProvider,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        calls = []
        get_type_hints = typing.get_type_hints

        def counting_get_type_hints(*args, **kwargs):
            calls.append(args[0])
            return get_type_hints(*args, **kwargs)

        monkeypatch.setattr(typing, "get_type_hints", counting_get_type_hints)

        for _ in range(3):
            provider.parameter_bindings(ItemController.get_item)
            provider.returns_envelope(ItemController.get_item)

        assert len(calls) == 1


class TestTableMetadataProvider:
    """Tests for TableMetadataProvider and table loading."""

    def test_load_sample_table(self, shop_table_path: Path) -> None:
        table = load_table(shop_table_path)

        orders = table.controllers[0]
        assert orders.name == "OrderController"
        assert orders.mapping is not None
        assert orders.mapping.value == ("/orders",)
        assert [m.name for m in orders.methods] == ["get_order", "create_order", "list_orders"]

    def test_bindings_from_table(self, shop_table_path: Path) -> None:
        table = load_table(shop_table_path)
        provider = TableMetadataProvider()
        list_orders = table.controllers[0].methods[2]

        assert provider.parameter_bindings(list_orders) == [
            (QueryBinding(required=False, default_value="1"),),
            (QueryBinding(name="state", required=False),),
        ]

    def test_none_bindings_dropped(self) -> None:
        method = TableMethod.model_validate(
            {
                "name": "m",
                "parameters": [
                    {"bindings": [{"kind": "none"}]},
                    {"bindings": [{"kind": "query", "name": "q"}, {"kind": "path", "name": "id"}]},
                ],
            }
        )

        assert TableMetadataProvider().parameter_bindings(method) == [
            (),
            (QueryBinding(name="q"), PathBinding(name="id")),
        ]

    def test_returns_envelope_by_name(self) -> None:
        provider = TableMetadataProvider(["ResponseEntity"])

        assert provider.returns_envelope(TableMethod(name="a", return_type="ResponseEntity"))
        assert not provider.returns_envelope(TableMethod(name="b", return_type="Order"))
        assert not provider.returns_envelope(TableMethod(name="c"))

    def test_load_json_table(self, tmp_path: Path) -> None:
        table_file = tmp_path / "table.json"
        table_file.write_text('{"controllers": [{"name": "A", "methods": [{"name": "m"}]}]}')

        table = load_table(table_file)

        assert table.controllers[0].methods[0].parameters == []

    def test_missing_table(self, tmp_path: Path) -> None:
        with pytest.raises(MetadataError, match="not found"):
            load_table(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        table_file = tmp_path / "table.yaml"
        table_file.write_text("controllers: [unclosed\n")

        with pytest.raises(MetadataError, match="Cannot parse"):
            load_table(table_file)

    def test_invalid_binding_kind(self, tmp_path: Path) -> None:
        table_file = tmp_path / "table.yaml"
        table_file.write_text(
            "controllers:\n"
            "  - name: A\n"
            "    methods:\n"
            "      - name: m\n"
            "        parameters:\n"
            "          - bindings: [{kind: header}]\n"
        )

        with pytest.raises(MetadataError, match="Invalid"):
            load_table(table_file)
