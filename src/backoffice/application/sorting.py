"""Sortable fields of each listing, mapped to typed sort keys.

Only the members of these enums can be sorted on; a field name coming
from the command line is resolved to a member once, when the filter
object is built.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable, TypeVar

from backoffice.application.dates import as_local
from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.reference import Warehouse
from backoffice.domain.model.views import EnrichedOrder, EnrichedStock

E = TypeVar("E", bound=Enum)


def parse_choice(
    enum_cls: type[E],
    raw: str | E,
    label: str,
    aliases: dict[str, E] | None = None,
) -> E:
    """Resolve ``raw`` to a member of ``enum_cls`` by value (or alias)."""
    if isinstance(raw, enum_cls):
        return raw
    text = str(raw).strip()
    if aliases and text in aliases:
        return aliases[text]
    for member in enum_cls:
        if member.value == text:
            return member
    allowed = ", ".join(str(m.value) for m in enum_cls)
    raise ValidationError(f"Invalid {label} {raw!r} (expected one of: {allowed})")


def _timestamp_key(value: datetime | None) -> datetime:
    return as_local(value) if value is not None else datetime.min


class SortOrder(Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def reverse(self) -> bool:
        return self is SortOrder.DESC


class OrderSortField(Enum):
    DATE = "date"
    CUSTOMER = "customer"
    STATUS = "status"
    TOTAL = "total"
    ID = "id"

    @staticmethod
    def parse(raw: str | OrderSortField) -> OrderSortField:
        # "customerId" is what the dashboard sends for the customer column
        return parse_choice(
            OrderSortField, raw, "sort field",
            aliases={"customerId": OrderSortField.CUSTOMER},
        )

    def key(self, order: EnrichedOrder) -> Any:
        return _ORDER_KEYS[self](order)


_ORDER_KEYS: dict[OrderSortField, Callable[[EnrichedOrder], Any]] = {
    OrderSortField.DATE: lambda o: _timestamp_key(o.date),
    OrderSortField.CUSTOMER: lambda o: o.customer_name.lower(),
    OrderSortField.STATUS: lambda o: o.status.value,
    OrderSortField.TOTAL: lambda o: o.total.amount,
    OrderSortField.ID: lambda o: o.id.lower(),
}


class StockSortField(Enum):
    NAME = "name"
    TOTAL_QUANTITY = "totalQuantity"
    AVAILABLE_QUANTITY = "availableQuantity"
    RESERVED_QUANTITY = "reservedQuantity"
    MIN_THRESHOLD = "minThreshold"
    LAST_UPDATED = "lastUpdated"

    @staticmethod
    def parse(raw: str | StockSortField) -> StockSortField:
        return parse_choice(StockSortField, raw, "sort field")

    def key(self, stock: EnrichedStock) -> Any:
        return _STOCK_KEYS[self](stock)


_STOCK_KEYS: dict[StockSortField, Callable[[EnrichedStock], Any]] = {
    StockSortField.NAME: lambda s: s.name.lower(),
    StockSortField.TOTAL_QUANTITY: lambda s: s.total_quantity,
    StockSortField.AVAILABLE_QUANTITY: lambda s: s.available_quantity,
    StockSortField.RESERVED_QUANTITY: lambda s: s.reserved_quantity,
    StockSortField.MIN_THRESHOLD: lambda s: s.min_threshold,
    StockSortField.LAST_UPDATED: lambda s: _timestamp_key(s.last_updated),
}


class WarehouseSortField(Enum):
    NAME = "name"
    ID = "id"

    @staticmethod
    def parse(raw: str | WarehouseSortField) -> WarehouseSortField:
        return parse_choice(WarehouseSortField, raw, "sort field")

    def key(self, warehouse: Warehouse) -> Any:
        if self is WarehouseSortField.ID:
            return warehouse.id.lower()
        return warehouse.name.lower()
