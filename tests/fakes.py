"""In-memory fakes for testing.

The fake repositories implement the same abstract interfaces as the JSON
repositories but keep everything in a dict. No file I/O, no side effects.
``FakeEntitySource`` builds a fresh snapshot from them on every call and
counts invalidations.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from backoffice.domain.model.inventory import InventoryItem
from backoffice.domain.model.order import Order, OrderLineItem, OrderStatus
from backoffice.domain.model.product import Product, ProductComponent
from backoffice.domain.model.reference import Address, Customer, Warehouse
from backoffice.domain.model.value_objects import Money, Quantity
from backoffice.domain.repository.entity_source import EntitySnapshot, EntitySource
from backoffice.domain.repository.inventory_repository import InventoryRepository
from backoffice.domain.repository.order_repository import OrderRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[str, Order] = {}
        for order in orders or []:
            self._store[order.id] = order
        self.saved: list[str] = []

    def list_all(self) -> list[Order]:
        return list(self._store.values())

    def get_by_id(self, order_id: str) -> Order | None:
        return self._store.get(order_id)

    def save(self, order: Order) -> None:
        self._store[order.id] = order
        self.saved.append(order.id)


class FakeInventoryRepository(InventoryRepository):

    def __init__(self, items: list[InventoryItem] | None = None) -> None:
        self._store: dict[tuple[str, str], InventoryItem] = {}
        for item in items or []:
            self._store[(item.id, item.warehouse_id)] = item

    def list_all(self) -> list[InventoryItem]:
        return list(self._store.values())

    def find(self, item_id: str, warehouse_id: str | None = None) -> InventoryItem | None:
        for (stored_id, stored_warehouse), item in self._store.items():
            if stored_id == item_id and warehouse_id in (None, stored_warehouse):
                return item
        return None

    def save(self, item: InventoryItem) -> None:
        self._store[(item.id, item.warehouse_id)] = item


class FakeEntitySource(EntitySource):

    def __init__(
        self,
        orders: FakeOrderRepository | None = None,
        inventory: FakeInventoryRepository | None = None,
        products: list[Product] | None = None,
        customers: list[Customer] | None = None,
        warehouses: list[Warehouse] | None = None,
        addresses: list[Address] | None = None,
    ) -> None:
        self.orders = orders or FakeOrderRepository()
        self.inventory = inventory or FakeInventoryRepository()
        self.products = products or []
        self.customers = customers or []
        self.warehouses = warehouses or []
        self.addresses = addresses or []
        self.invalidations = 0

    def snapshot(self) -> EntitySnapshot:
        return EntitySnapshot(
            orders=self.orders.list_all(),
            customers=list(self.customers),
            products=list(self.products),
            warehouses=list(self.warehouses),
            addresses=list(self.addresses),
            inventory=self.inventory.list_all(),
        )

    def invalidate(self) -> None:
        self.invalidations += 1


# --- Builders -----------------------------------------------------------------


def leaf(product_id: str, name: str, price: str = "10.00") -> Product:
    return Product(id=product_id, name=name, price=Money.of(price))


def bundle(product_id: str, name: str, children: list[tuple[str, int]], price: str = "50.00") -> Product:
    return Product(
        id=product_id,
        name=name,
        price=Money.of(price),
        is_composite=True,
        children=[ProductComponent(child_id, Quantity(qty)) for child_id, qty in children],
    )


def order(
    order_id: str,
    items: list[tuple[str, int]],
    customer_id: str = "c1",
    warehouse_id: str = "w1",
    status: OrderStatus = OrderStatus.PENDING,
    date: datetime | None = None,
    total: str = "0",
) -> Order:
    return Order(
        id=order_id,
        customer_id=customer_id,
        warehouse_id=warehouse_id,
        date=date or datetime(2024, 3, 1, 10, 0),
        status=status,
        line_items=[OrderLineItem(pid, Quantity(qty)) for pid, qty in items],
        total=Money(Decimal(total)),
    )


def catalog() -> list[Product]:
    """Two leaves, a kit made of them, and a gift box containing the kit."""
    return [
        leaf("p1", "Coffee beans", "24.50"),
        leaf("p2", "Mug", "12.00"),
        leaf("p3", "Filters", "4.25"),
        bundle("k1", "Starter kit", [("p1", 1), ("p2", 2)]),
        bundle("k2", "Gift box", [("k1", 1), ("p3", 3)]),
    ]


CUSTOMERS = [
    Customer(id="c1", name="Alice Martin"),
    Customer(id="c2", name="Bob Durand"),
]

WAREHOUSES = [
    Warehouse(id="w1", name="North", location="Lille"),
    Warehouse(id="w2", name="South", location="Marseille"),
]

ADDRESSES = [
    Address(id="a1", street="1 rue de la Paix", city="Paris", postal_code="75002", province="IDF"),
]
