"""JSON-file-backed implementation of InventoryRepository."""

from __future__ import annotations

from pathlib import Path

from backoffice.application.dates import format_timestamp, parse_timestamp
from backoffice.domain.exceptions import DataUnavailableError
from backoffice.domain.model.inventory import InventoryItem
from backoffice.domain.repository.inventory_repository import InventoryRepository
from backoffice.infrastructure.persistence.json_file import JsonCollectionFile, record_id


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonCollectionFile(file_path)

    # --- InventoryRepository interface ----------------------------------------

    def list_all(self) -> list[InventoryItem]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def find(self, item_id: str, warehouse_id: str | None = None) -> InventoryItem | None:
        for raw in self._file.load():
            if self._matches(raw, item_id, warehouse_id):
                return self._to_domain(raw)
        return None

    def save(self, item: InventoryItem) -> None:
        with self._file.updating() as records:
            for raw in records:
                if self._matches(raw, item.id, item.warehouse_id):
                    raw.update(self._to_raw(item))
                    return
            records.append({"id": item.id, **self._to_raw(item)})

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _matches(raw: dict, item_id: str, warehouse_id: str | None) -> bool:
        if record_id(raw) != item_id:
            return False
        return warehouse_id is None or str(raw.get("warehouseId")) == warehouse_id

    @staticmethod
    def _to_raw(item: InventoryItem) -> dict:
        raw = {
            "productId": item.product_id,
            "warehouseId": item.warehouse_id,
            "quantity": item.total_quantity,
            "reservedQuantity": item.reserved_quantity,
            "minThreshold": item.min_threshold,
        }
        if item.last_updated is not None:
            raw["lastUpdated"] = format_timestamp(item.last_updated)
        return raw

    def _to_domain(self, raw: dict) -> InventoryItem:
        try:
            return InventoryItem(
                id=record_id(raw),
                product_id=str(raw["productId"]),
                warehouse_id=str(raw["warehouseId"]),
                total_quantity=int(raw["quantity"]),
                reserved_quantity=int(raw.get("reservedQuantity", 0)),
                min_threshold=int(raw.get("minThreshold", 0)),
                last_updated=(
                    parse_timestamp(raw["lastUpdated"]) if raw.get("lastUpdated") else None
                ),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DataUnavailableError(
                f"Malformed inventory record {raw.get('id')!r} in {self._file.path.name}: {exc}"
            ) from exc
