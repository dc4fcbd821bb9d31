"""Order aggregate.

Orders are created upstream (the storefront writes them into the JSON
store); the back office only reads them and moves them through the
fulfillment statuses.  Monetary totals are stored on the order as they
were computed at creation time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw.strip().lower())
        except (AttributeError, ValueError):
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Invalid order status {raw!r} (expected one of: {allowed})"
            ) from None


@dataclass(frozen=True)
class OrderLineItem:
    """A requested product and how many units of it."""

    product_id: str
    quantity: Quantity


@dataclass
class Order:
    """Aggregate root for customer orders."""

    id: str
    customer_id: str
    warehouse_id: str
    date: datetime
    status: OrderStatus
    line_items: list[OrderLineItem]
    billing_address_id: str | None = None
    delivery_address_id: str | None = None
    subtotal: Money = field(default_factory=Money.zero)
    taxes: Money = field(default_factory=Money.zero)
    total: Money = field(default_factory=Money.zero)
    last_updated: datetime | None = None

    def change_status(self, new_status: OrderStatus) -> None:
        """Move the order to ``new_status`` and stamp ``last_updated``.

        Any status may follow any other; the back office is used to
        correct mistakes as much as to advance orders.
        """
        self.status = new_status
        self.last_updated = datetime.now(timezone.utc)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity.value for item in self.line_items)
