"""Application service: Update Order Status use case.

Writes go straight to the order repository (never to the cached
snapshot); the entity source is invalidated afterwards so the next read
sees the new status.
"""

from __future__ import annotations

import logging

from backoffice.application.show_order import ShowOrderHandler
from backoffice.domain.exceptions import EntityNotFoundError
from backoffice.domain.model.order import OrderStatus
from backoffice.domain.model.views import EnrichedOrder
from backoffice.domain.repository.entity_source import EntitySource
from backoffice.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository, source: EntitySource) -> None:
        self._order_repo = order_repo
        self._source = source

    def handle(self, order_id: str, status: str | OrderStatus) -> EnrichedOrder:
        new_status = status if isinstance(status, OrderStatus) else OrderStatus.parse(status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")

        previous = order.status
        order.change_status(new_status)
        self._order_repo.save(order)
        self._source.invalidate()
        logger.info(
            "Order %s status changed from %s to %s",
            order_id, previous.value, new_status.value,
        )

        return ShowOrderHandler(self._source).handle(order_id)
