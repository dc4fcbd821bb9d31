"""Application service: Show Order use case (query)."""

from __future__ import annotations

from backoffice.domain.exceptions import EntityNotFoundError
from backoffice.domain.model.views import EnrichedOrder
from backoffice.domain.repository.entity_source import EntitySource
from backoffice.domain.service.enrichment_service import EnrichmentService


class ShowOrderHandler:

    def __init__(self, source: EntitySource) -> None:
        self._source = source

    def handle(self, order_id: str) -> EnrichedOrder:
        snapshot = self._source.snapshot()
        for order in snapshot.orders:
            if order.id == order_id:
                return EnrichmentService(snapshot).order(order)
        raise EntityNotFoundError(f"Order '{order_id}' not found")
