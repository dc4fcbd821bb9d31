"""Entity Store: a cached EntitySource over the repositories.

The first snapshot after the TTL expires (or after ``invalidate``)
reloads every collection.  Reloads run under a lock and re-check the
cache once the lock is held, so concurrent callers wait for a single
reload instead of each performing their own.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from backoffice.domain.exceptions import DataUnavailableError
from backoffice.domain.repository.entity_source import EntitySnapshot, EntitySource
from backoffice.domain.repository.inventory_repository import InventoryRepository
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.repository.reference_repository import (
    AddressRepository,
    CustomerRepository,
    WarehouseRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0


class EntityStore(EntitySource):

    def __init__(
        self,
        orders: OrderRepository,
        customers: CustomerRepository,
        products: ProductRepository,
        warehouses: WarehouseRepository,
        addresses: AddressRepository,
        inventory: InventoryRepository,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._orders = orders
        self._customers = customers
        self._products = products
        self._warehouses = warehouses
        self._addresses = addresses
        self._inventory = inventory
        self._ttl = ttl_seconds
        self._clock = clock

        self._lock = threading.Lock()
        self._snapshot: EntitySnapshot | None = None
        self._loaded_at: float | None = None
        self.reload_count = 0

    # --- EntitySource interface -----------------------------------------------

    def snapshot(self) -> EntitySnapshot:
        cached = self._fresh()
        if cached is not None:
            return cached

        with self._lock:
            # Another caller may have reloaded while we waited
            cached = self._fresh()
            if cached is not None:
                return cached
            return self._reload()

    def invalidate(self) -> None:
        with self._lock:
            self._loaded_at = None
        logger.debug("Entity cache invalidated")

    # --- Internal helpers -----------------------------------------------------

    def _fresh(self) -> EntitySnapshot | None:
        snapshot, loaded_at = self._snapshot, self._loaded_at
        if snapshot is None or loaded_at is None:
            return None
        if self._clock() - loaded_at > self._ttl:
            return None
        return snapshot

    def _reload(self) -> EntitySnapshot:
        try:
            snapshot = EntitySnapshot(
                orders=self._orders.list_all(),
                customers=self._customers.list_all(),
                products=self._products.list_all(),
                warehouses=self._warehouses.list_all(),
                addresses=self._addresses.list_all(),
                inventory=self._inventory.list_all(),
            )
        except DataUnavailableError:
            logger.exception("Entity reload failed")
            raise

        self._snapshot = snapshot
        self._loaded_at = self._clock()
        self.reload_count += 1
        logger.info(
            "Loaded %d orders, %d products, %d inventory records",
            len(snapshot.orders), len(snapshot.products), len(snapshot.inventory),
        )
        return snapshot
