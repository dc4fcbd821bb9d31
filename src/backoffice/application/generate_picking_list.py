"""Application service: Generate Picking List use case.

Selects every *pending* order matching the filters (unpaginated) and
hands them, with the product catalog, to the picking-list domain
service.
"""

from __future__ import annotations

import logging

from backoffice.application.dto import PickingListFilters, PickingListResult
from backoffice.application.order_query import OrderQuery
from backoffice.domain.repository.entity_source import EntitySource
from backoffice.domain.service.picking_list_service import PickingListService

logger = logging.getLogger(__name__)


class GeneratePickingListHandler:

    def __init__(self, source: EntitySource, query: OrderQuery) -> None:
        self._source = source
        self._query = query

    def handle(self, filters: PickingListFilters) -> PickingListResult:
        orders = self._query.find_all(filters.to_order_filters())
        products = self._source.snapshot().products

        entries = PickingListService(products).aggregate(orders)
        result = PickingListResult(entries)
        logger.debug(
            "Picking list: %d orders -> %d products, %d units",
            len(orders), result.total_products, result.total_quantity,
        )
        return result
