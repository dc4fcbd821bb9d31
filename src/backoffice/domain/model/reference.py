"""Reference entities joined into orders and stock rows for display."""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_CUSTOMER_NAME = "Unknown customer"
UNKNOWN_WAREHOUSE_NAME = "Unknown warehouse"


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    email: str | None = None


@dataclass(frozen=True)
class Warehouse:
    id: str
    name: str
    location: str | None = None


@dataclass(frozen=True)
class Address:
    id: str
    street: str
    city: str
    postal_code: str
    province: str

    def one_line(self) -> str:
        return f"{self.street}, {self.city} {self.postal_code}, {self.province}"
