"""Application service: List Stocks and Show Stock use cases (queries)."""

from __future__ import annotations

from backoffice.application.dto import ALL, Page, StockFilters
from backoffice.domain.exceptions import EntityNotFoundError
from backoffice.domain.model.views import EnrichedStock
from backoffice.domain.repository.entity_source import EntitySource
from backoffice.domain.service.enrichment_service import EnrichmentService


class ListStocksHandler:

    def __init__(self, source: EntitySource) -> None:
        self._source = source

    def handle(self, filters: StockFilters) -> Page[EnrichedStock]:
        return Page.slice(
            self.find_all(filters), filters.page, filters.items_per_page
        )

    def find_all(self, filters: StockFilters) -> list[EnrichedStock]:
        """Every stock row matching ``filters``, sorted, ignoring paging."""
        snapshot = self._source.snapshot()
        rows = EnrichmentService(snapshot).stocks(snapshot.inventory)

        if filters.warehouse_id != ALL:
            rows = [r for r in rows if r.warehouse_id == filters.warehouse_id]
        if filters.search:
            needle = filters.search.lower()
            rows = [r for r in rows if needle in r.name.lower()]

        rows.sort(key=filters.sort_by.key, reverse=filters.sort_order.reverse)
        return rows


class ShowStockHandler:

    def __init__(self, source: EntitySource) -> None:
        self._source = source

    def handle(self, item_id: str, warehouse_id: str | None = None) -> EnrichedStock:
        snapshot = self._source.snapshot()
        scoped = warehouse_id not in (None, "", ALL)
        for item in snapshot.inventory:
            if item.id == item_id and (not scoped or item.warehouse_id == warehouse_id):
                return EnrichmentService(snapshot).stock(item)
        raise EntityNotFoundError(f"Inventory item '{item_id}' not found")
