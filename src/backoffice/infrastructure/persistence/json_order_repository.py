"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from pathlib import Path

from backoffice.application.dates import format_timestamp, parse_timestamp
from backoffice.domain.exceptions import DataUnavailableError, DomainException
from backoffice.domain.model.order import Order, OrderLineItem, OrderStatus
from backoffice.domain.model.value_objects import Money, Quantity
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.infrastructure.persistence.json_file import (
    JsonCollectionFile,
    json_number,
    record_id,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonCollectionFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if record_id(raw) == order_id:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        with self._file.updating() as records:
            for raw in records:
                if record_id(raw) == order.id:
                    # Status is the only field that changes after creation
                    raw["status"] = order.status.value
                    if order.last_updated is not None:
                        raw["lastUpdated"] = format_timestamp(order.last_updated)
                    return
            records.append({"id": order.id, **self._to_raw(order)})

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        raw = {
            "customerId": order.customer_id,
            "warehouseId": order.warehouse_id,
            "billingAddressId": order.billing_address_id,
            "deliveryAddressId": order.delivery_address_id,
            "date": format_timestamp(order.date),
            "status": order.status.value,
            "lineItems": [
                {"productId": item.product_id, "quantity": item.quantity.value}
                for item in order.line_items
            ],
            "subtotal": json_number(order.subtotal.amount),
            "taxes": json_number(order.taxes.amount),
            "total": json_number(order.total.amount),
        }
        if order.last_updated is not None:
            raw["lastUpdated"] = format_timestamp(order.last_updated)
        return raw

    def _to_domain(self, raw: dict) -> Order:
        try:
            return Order(
                id=record_id(raw),
                customer_id=str(raw["customerId"]),
                warehouse_id=str(raw["warehouseId"]),
                billing_address_id=_optional_id(raw.get("billingAddressId")),
                delivery_address_id=_optional_id(raw.get("deliveryAddressId")),
                date=parse_timestamp(raw["date"]),
                status=OrderStatus.parse(raw["status"]),
                line_items=[
                    OrderLineItem(
                        product_id=str(item["productId"]),
                        quantity=Quantity(item["quantity"]),
                    )
                    for item in raw.get("lineItems", [])
                ],
                subtotal=Money.of(raw.get("subtotal")),
                taxes=Money.of(raw.get("taxes")),
                total=Money.of(raw.get("total")),
                last_updated=(
                    parse_timestamp(raw["lastUpdated"]) if raw.get("lastUpdated") else None
                ),
            )
        except (KeyError, TypeError, ValueError, DomainException) as exc:
            raise DataUnavailableError(
                f"Malformed order record {raw.get('id')!r} in {self._file.path.name}: {exc}"
            ) from exc


def _optional_id(value) -> str | None:
    return None if value is None else str(value)
