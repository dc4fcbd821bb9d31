"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from backoffice.domain.exceptions import DataUnavailableError, DomainException
from backoffice.domain.model.product import Product, ProductComponent
from backoffice.domain.model.value_objects import Money, Quantity
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.infrastructure.persistence.json_file import JsonCollectionFile, record_id


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonCollectionFile(file_path)

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def _to_domain(self, raw: dict) -> Product:
        try:
            children = raw.get("children")
            return Product(
                id=record_id(raw),
                name=raw["name"],
                price=Money.of(raw.get("price")),
                is_composite=bool(raw.get("isComposite", False)),
                children=None if children is None else [
                    ProductComponent(
                        product_id=str(child["id"]),
                        quantity=Quantity(child["quantity"]),
                    )
                    for child in children
                ],
            )
        except (KeyError, TypeError, DomainException) as exc:
            raise DataUnavailableError(
                f"Malformed product record {raw.get('id')!r} in {self._file.path.name}: {exc}"
            ) from exc
