"""Application service: Update Stock use case."""

from __future__ import annotations

import logging

from backoffice.application.dto import ALL
from backoffice.application.list_stocks import ShowStockHandler
from backoffice.domain.exceptions import EntityNotFoundError, ValidationError
from backoffice.domain.model.views import EnrichedStock
from backoffice.domain.repository.entity_source import EntitySource
from backoffice.domain.repository.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)


class UpdateStockHandler:

    def __init__(self, inventory_repo: InventoryRepository, source: EntitySource) -> None:
        self._inventory_repo = inventory_repo
        self._source = source

    def handle(
        self,
        item_id: str,
        warehouse_id: str | None = None,
        total_quantity: int | None = None,
        reserved_quantity: int | None = None,
        min_threshold: int | None = None,
    ) -> EnrichedStock:
        """Overwrite the given quantities of one inventory record.

        ``warehouse_id`` narrows the lookup when the same record id
        exists in several warehouses; ``"all"`` means no narrowing.
        """
        if total_quantity is None and reserved_quantity is None and min_threshold is None:
            raise ValidationError("Nothing to update")

        scope = None if warehouse_id in (None, "", ALL) else warehouse_id
        item = self._inventory_repo.find(item_id, scope)
        if item is None:
            raise EntityNotFoundError(f"Inventory item '{item_id}' not found")

        item.adjust(
            total_quantity=total_quantity,
            reserved_quantity=reserved_quantity,
            min_threshold=min_threshold,
        )
        self._inventory_repo.save(item)
        self._source.invalidate()
        logger.info(
            "Inventory item %s (%s) updated: total=%d reserved=%d min=%d",
            item.id, item.warehouse_id,
            item.total_quantity, item.reserved_quantity, item.min_threshold,
        )

        return ShowStockHandler(self._source).handle(item.id, item.warehouse_id)
