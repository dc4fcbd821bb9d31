"""Tests for the cached EntityStore."""

import threading

import pytest

from backoffice.domain.exceptions import DataUnavailableError
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.repository.reference_repository import (
    AddressRepository,
    CustomerRepository,
    WarehouseRepository,
)
from backoffice.infrastructure.persistence.entity_store import EntityStore
from tests.fakes import FakeInventoryRepository, FakeOrderRepository, catalog, order


class CountingProductRepository(ProductRepository):

    def __init__(self, fail: bool = False) -> None:
        self.calls = 0
        self.fail = fail

    def list_all(self):
        self.calls += 1
        if self.fail:
            raise DataUnavailableError("Cannot load data from products.json")
        return catalog()


class EmptyCustomers(CustomerRepository):
    def list_all(self):
        return []


class EmptyWarehouses(WarehouseRepository):
    def list_all(self):
        return []


class EmptyAddresses(AddressRepository):
    def list_all(self):
        return []


class FakeClock:

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _store(products=None, orders=None, ttl=300.0):
    clock = FakeClock()
    store = EntityStore(
        orders=orders or FakeOrderRepository(),
        customers=EmptyCustomers(),
        products=products or CountingProductRepository(),
        warehouses=EmptyWarehouses(),
        addresses=EmptyAddresses(),
        inventory=FakeInventoryRepository(),
        ttl_seconds=ttl,
        clock=clock,
    )
    return store, clock


class TestEntityStore:

    def test_snapshot_cached_within_ttl(self):
        products = CountingProductRepository()
        store, clock = _store(products)

        first = store.snapshot()
        clock.now += 299
        assert store.snapshot() is first
        assert products.calls == 1
        assert store.reload_count == 1

    def test_reload_after_ttl(self):
        products = CountingProductRepository()
        store, clock = _store(products)

        first = store.snapshot()
        clock.now += 301
        assert store.snapshot() is not first
        assert products.calls == 2

    def test_invalidate_forces_reload(self):
        orders = FakeOrderRepository()
        store, _ = _store(orders=orders)
        assert store.snapshot().orders == []

        orders.save(order("1", [("p1", 1)]))
        assert store.snapshot().orders == []
        store.invalidate()
        assert [o.id for o in store.snapshot().orders] == ["1"]

    def test_load_failure_propagates_and_is_not_cached(self):
        products = CountingProductRepository(fail=True)
        store, _ = _store(products)

        with pytest.raises(DataUnavailableError):
            store.snapshot()
        products.fail = False
        assert len(store.snapshot().products) == 5
        assert store.reload_count == 1

    def test_concurrent_callers_share_one_reload(self):
        products = CountingProductRepository()
        store, _ = _store(products)
        barrier = threading.Barrier(8)
        results = []

        def read():
            barrier.wait()
            results.append(store.snapshot())

        threads = [threading.Thread(target=read) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert products.calls == 1
        assert all(r is results[0] for r in results)
