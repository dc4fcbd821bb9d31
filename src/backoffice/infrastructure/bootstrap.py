"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from backoffice.application.order_query import OrderQuery
from backoffice.infrastructure.config import Settings
from backoffice.infrastructure.persistence.entity_store import EntityStore
from backoffice.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from backoffice.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from backoffice.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from backoffice.infrastructure.persistence.json_reference_repository import (
    JsonAddressRepository,
    JsonCustomerRepository,
    JsonWarehouseRepository,
)


def settings() -> Settings:
    return Settings.from_env()


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def inventory_repository() -> JsonInventoryRepository:
    return JsonInventoryRepository(settings().data_dir / "inventory.json")


@lru_cache(maxsize=None)
def _entity_store(data_dir: Path, ttl_seconds: float) -> EntityStore:
    # One store per data directory for the life of the process
    return EntityStore(
        orders=JsonOrderRepository(data_dir / "orders.json"),
        customers=JsonCustomerRepository(data_dir / "customers.json"),
        products=JsonProductRepository(data_dir / "products.json"),
        warehouses=JsonWarehouseRepository(data_dir / "warehouses.json"),
        addresses=JsonAddressRepository(data_dir / "addresses.json"),
        inventory=JsonInventoryRepository(data_dir / "inventory.json"),
        ttl_seconds=ttl_seconds,
    )


def entity_store() -> EntityStore:
    current = settings()
    return _entity_store(current.data_dir.resolve(), current.cache_ttl_seconds)


def order_query() -> OrderQuery:
    return OrderQuery(entity_store())
