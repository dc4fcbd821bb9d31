"""Application service: List Warehouses use case (query)."""

from __future__ import annotations

from backoffice.application.dto import Page, WarehouseFilters
from backoffice.domain.model.reference import Warehouse
from backoffice.domain.repository.entity_source import EntitySource


class ListWarehousesHandler:

    def __init__(self, source: EntitySource) -> None:
        self._source = source

    def handle(self, filters: WarehouseFilters) -> Page[Warehouse]:
        warehouses = list(self._source.snapshot().warehouses)

        if filters.search:
            needle = filters.search.strip().lower()
            warehouses = [w for w in warehouses if needle in w.name.lower()]

        warehouses.sort(key=filters.sort_by.key, reverse=filters.sort_order.reverse)

        if filters.page is None and filters.items_per_page is None:
            # Unpaginated: everything on a single page
            return Page(
                items=warehouses,
                total_items=len(warehouses),
                current_page=1,
                items_per_page=max(len(warehouses), 1),
            )
        return Page.slice(warehouses, filters.page or 1, filters.items_per_page or 25)
