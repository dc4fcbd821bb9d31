"""Read models: denormalized records computed per request, never persisted.

Enriched records join a stored entity with the human-readable attributes
of the reference collections it points to.  Pick entries are the output
of the picking-list aggregation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from backoffice.domain.model.order import OrderStatus
from backoffice.domain.model.reference import Address
from backoffice.domain.model.value_objects import Money


@dataclass(frozen=True)
class EnrichedLineItem:
    product_id: str
    name: str
    quantity: int
    unit_price: Money
    line_total: Money


@dataclass(frozen=True)
class EnrichedOrder:
    id: str
    date: datetime
    status: OrderStatus
    customer_id: str
    customer_name: str
    warehouse_id: str
    warehouse_name: str
    billing_address: Address | None
    delivery_address: Address | None
    line_items: list[EnrichedLineItem]
    subtotal: Money
    taxes: Money
    total: Money
    last_updated: datetime | None = None

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.line_items)


@dataclass(frozen=True)
class EnrichedStock:
    id: str
    product_id: str
    warehouse_id: str
    name: str
    price: Money
    total_quantity: int
    reserved_quantity: int
    available_quantity: int
    min_threshold: int
    warehouse_name: str
    last_updated: datetime | None = None

    @property
    def total_value(self) -> Money:
        return self.price * self.total_quantity

    @property
    def is_below_threshold(self) -> bool:
        return self.available_quantity < self.min_threshold


@dataclass(frozen=True)
class PickTrace:
    """Links part of a picked quantity back to the order that needs it.

    ``original_product`` is the name of the product the customer ordered,
    which differs from the picked product when a bundle was decomposed.
    """

    order_id: str
    customer_name: str
    quantity: int
    original_product: str


@dataclass
class PickEntry:
    """Total quantity of one leaf product to pick in one warehouse."""

    product_id: str
    name: str
    warehouse_id: str
    warehouse_name: str
    quantity: int = 0
    orders: list[PickTrace] = field(default_factory=list)

    def add(self, trace: PickTrace) -> None:
        self.quantity += trace.quantity
        self.orders.append(trace)
