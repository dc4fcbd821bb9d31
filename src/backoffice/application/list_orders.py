"""Application service: List Orders use case (query)."""

from __future__ import annotations

from backoffice.application.dto import OrderFilters, Page
from backoffice.application.order_query import OrderQuery
from backoffice.domain.model.views import EnrichedOrder


class ListOrdersHandler:

    def __init__(self, query: OrderQuery) -> None:
        self._query = query

    def handle(self, filters: OrderFilters) -> Page[EnrichedOrder]:
        return self._query.find_page(filters)
