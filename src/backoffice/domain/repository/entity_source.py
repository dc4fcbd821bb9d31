"""Read access to every collection at once, as a consistent snapshot.

Queries work on a snapshot instead of calling the repositories one by one
so that a cached implementation can serve them all from one load.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from backoffice.domain.model.inventory import InventoryItem
from backoffice.domain.model.order import Order
from backoffice.domain.model.product import Product
from backoffice.domain.model.reference import Address, Customer, Warehouse


@dataclass(frozen=True)
class EntitySnapshot:
    orders: list[Order] = field(default_factory=list)
    customers: list[Customer] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)
    warehouses: list[Warehouse] = field(default_factory=list)
    addresses: list[Address] = field(default_factory=list)
    inventory: list[InventoryItem] = field(default_factory=list)

    def products_by_id(self) -> dict[str, Product]:
        return {p.id: p for p in self.products}

    def customers_by_id(self) -> dict[str, Customer]:
        return {c.id: c for c in self.customers}

    def warehouses_by_id(self) -> dict[str, Warehouse]:
        return {w.id: w for w in self.warehouses}

    def addresses_by_id(self) -> dict[str, Address]:
        return {a.id: a for a in self.addresses}


class EntitySource(ABC):

    @abstractmethod
    def snapshot(self) -> EntitySnapshot:
        """Return the current contents of every collection."""

    @abstractmethod
    def invalidate(self) -> None:
        """Forget any cached state; the next snapshot reflects storage."""
