"""JSON-file-backed implementations of the reference repositories."""

from __future__ import annotations

from pathlib import Path

from backoffice.domain.exceptions import DataUnavailableError
from backoffice.domain.model.reference import Address, Customer, Warehouse
from backoffice.domain.repository.reference_repository import (
    AddressRepository,
    CustomerRepository,
    WarehouseRepository,
)
from backoffice.infrastructure.persistence.json_file import JsonCollectionFile, record_id


def _load(file: JsonCollectionFile, build) -> list:
    records = file.load()
    try:
        return [build(raw) for raw in records]
    except (KeyError, TypeError) as exc:
        raise DataUnavailableError(
            f"Malformed record in {file.path.name}: {exc}"
        ) from exc


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonCollectionFile(file_path)

    def list_all(self) -> list[Customer]:
        return _load(
            self._file,
            lambda raw: Customer(id=record_id(raw), name=raw["name"], email=raw.get("email")),
        )


class JsonWarehouseRepository(WarehouseRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonCollectionFile(file_path)

    def list_all(self) -> list[Warehouse]:
        return _load(
            self._file,
            lambda raw: Warehouse(
                id=record_id(raw), name=raw["name"], location=raw.get("location")
            ),
        )


class JsonAddressRepository(AddressRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonCollectionFile(file_path)

    def list_all(self) -> list[Address]:
        return _load(
            self._file,
            lambda raw: Address(
                id=record_id(raw),
                street=raw.get("street", ""),
                city=raw.get("city", ""),
                postal_code=str(raw.get("postalCode", "")),
                province=raw.get("province", ""),
            ),
        )
