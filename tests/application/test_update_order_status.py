"""Integration tests for the UpdateOrderStatus use case."""

import pytest

from backoffice.application.show_order import ShowOrderHandler
from backoffice.application.update_order_status import UpdateOrderStatusHandler
from backoffice.domain.exceptions import EntityNotFoundError, ValidationError
from backoffice.domain.model.order import OrderStatus
from tests.fakes import CUSTOMERS, WAREHOUSES, FakeEntitySource, FakeOrderRepository, catalog, order


def _setup():
    order_repo = FakeOrderRepository([order("1", [("k1", 1)])])
    source = FakeEntitySource(
        orders=order_repo, products=catalog(), customers=CUSTOMERS, warehouses=WAREHOUSES
    )
    return order_repo, source, UpdateOrderStatusHandler(order_repo, source)


class TestUpdateOrderStatus:

    def test_status_changed_saved_and_cache_invalidated(self):
        order_repo, source, handler = _setup()

        enriched = handler.handle("1", "shipped")

        assert enriched.status is OrderStatus.SHIPPED
        assert enriched.customer_name == "Alice Martin"
        assert order_repo.saved == ["1"]
        assert order_repo.get_by_id("1").last_updated is not None
        assert source.invalidations == 1

    def test_change_visible_to_next_read(self):
        _, source, handler = _setup()
        handler.handle("1", OrderStatus.READY)
        assert ShowOrderHandler(source).handle("1").status is OrderStatus.READY

    def test_unknown_order_rejected(self):
        order_repo, source, handler = _setup()
        with pytest.raises(EntityNotFoundError, match="Order '99' not found"):
            handler.handle("99", "shipped")
        assert order_repo.saved == []
        assert source.invalidations == 0

    def test_invalid_status_rejected_before_lookup(self):
        order_repo, _, handler = _setup()
        with pytest.raises(ValidationError, match="Invalid order status"):
            handler.handle("1", "teleported")
        assert order_repo.get_by_id("1").status is OrderStatus.PENDING


class TestShowOrder:

    def test_unknown_order(self):
        _, source, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            ShowOrderHandler(source).handle("nope")
