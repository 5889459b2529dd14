"""
Sample controllers declaring routing metadata.

Document them with:

    endpoint-doc-merger reflect --module examples/controllers/shop.py
"""

from dataclasses import dataclass
from typing import Annotated, Optional

from endpoint_doc_merger.routing import (
    PathVariable,
    RequestParam,
    ResponseEnvelope,
    request_mapping,
)


@dataclass
class Order:
    id: int
    item: str
    quantity: int


@request_mapping(
    "/orders",
    produces=["application/json", "application/xml"],
    headers=["X-Api-Version=2"],
)
class OrderController:
    """Manage customer orders."""

    @request_mapping("/{id}")
    def get_order(self, order_id: Annotated[int, PathVariable("id")]) -> ResponseEnvelope[Order]:
        """Get an order by id."""
        ...

    @request_mapping(
        method="POST",
        consumes="application/json",
        produces="application/json",
    )
    def create_order(self, order: Order) -> Order:
        """Create an order."""
        ...

    @request_mapping(headers=["X-Auth-Token"])
    def list_orders(
        self,
        page: Annotated[int, RequestParam(required=False, default_value="1")] = 1,
        status: Annotated[Optional[str], RequestParam("state", required=False)] = None,
    ) -> list[Order]:
        """List orders, one page at a time."""
        ...

    @request_mapping("/{id}", method=["DELETE", "POST"])
    def delete_order(self, order_id: Annotated[int, PathVariable()]) -> None:
        """Delete an order."""
        ...

    def _audit(self, order: Order) -> None:
        ...


class HealthController:
    """Service health."""

    @request_mapping("/health", produces="text/plain")
    def health(self) -> str:
        ...
