"""Abstract repository for InventoryItem aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.inventory import InventoryItem


class InventoryRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[InventoryItem]:
        """Return every inventory record."""

    @abstractmethod
    def find(self, item_id: str, warehouse_id: str | None = None) -> InventoryItem | None:
        """Return the record with ``item_id`` (in ``warehouse_id`` if given), or None."""

    @abstractmethod
    def save(self, item: InventoryItem) -> None:
        """Persist an updated inventory record."""
