"""Domain service: Enrichment.

Joins raw orders and inventory records with the reference collections
of a snapshot.  A foreign key with no matching record is not an error:
the view gets a sentinel label (or no address) instead.
"""

from __future__ import annotations

from typing import Iterable

from backoffice.domain.model.inventory import InventoryItem
from backoffice.domain.model.order import Order
from backoffice.domain.model.product import UNKNOWN_PRODUCT_NAME
from backoffice.domain.model.reference import (
    UNKNOWN_CUSTOMER_NAME,
    UNKNOWN_WAREHOUSE_NAME,
)
from backoffice.domain.model.value_objects import Money
from backoffice.domain.model.views import (
    EnrichedLineItem,
    EnrichedOrder,
    EnrichedStock,
)
from backoffice.domain.repository.entity_source import EntitySnapshot


class EnrichmentService:

    def __init__(self, snapshot: EntitySnapshot) -> None:
        self._products = snapshot.products_by_id()
        self._customers = snapshot.customers_by_id()
        self._warehouses = snapshot.warehouses_by_id()
        self._addresses = snapshot.addresses_by_id()

    def orders(self, orders: Iterable[Order]) -> list[EnrichedOrder]:
        return [self.order(order) for order in orders]

    def order(self, order: Order) -> EnrichedOrder:
        customer = self._customers.get(order.customer_id)
        return EnrichedOrder(
            id=order.id,
            date=order.date,
            status=order.status,
            customer_id=order.customer_id,
            customer_name=customer.name if customer else UNKNOWN_CUSTOMER_NAME,
            warehouse_id=order.warehouse_id,
            warehouse_name=self._warehouse_name(order.warehouse_id),
            billing_address=self._addresses.get(order.billing_address_id or ""),
            delivery_address=self._addresses.get(order.delivery_address_id or ""),
            line_items=[
                self._line_item(item.product_id, item.quantity.value)
                for item in order.line_items
            ],
            subtotal=order.subtotal,
            taxes=order.taxes,
            total=order.total,
            last_updated=order.last_updated,
        )

    def stocks(self, items: Iterable[InventoryItem]) -> list[EnrichedStock]:
        return [self.stock(item) for item in items]

    def stock(self, item: InventoryItem) -> EnrichedStock:
        product = self._products.get(item.product_id)
        return EnrichedStock(
            id=item.id,
            product_id=item.product_id,
            warehouse_id=item.warehouse_id,
            name=product.name if product else UNKNOWN_PRODUCT_NAME,
            price=product.price if product else Money.zero(),
            total_quantity=item.total_quantity,
            reserved_quantity=item.reserved_quantity,
            available_quantity=item.available_quantity,
            min_threshold=item.min_threshold,
            warehouse_name=self._warehouse_name(item.warehouse_id),
            last_updated=item.last_updated,
        )

    # --- Internal helpers -----------------------------------------------------

    def _warehouse_name(self, warehouse_id: str) -> str:
        warehouse = self._warehouses.get(warehouse_id)
        return warehouse.name if warehouse else UNKNOWN_WAREHOUSE_NAME

    def _line_item(self, product_id: str, quantity: int) -> EnrichedLineItem:
        product = self._products.get(product_id)
        price = product.price if product else Money.zero()
        return EnrichedLineItem(
            product_id=product_id,
            name=product.name if product else UNKNOWN_PRODUCT_NAME,
            quantity=quantity,
            unit_price=price,
            line_total=price * quantity,
        )
