"""JSON payloads printed by ``--json``.

Keys are camelCase and envelopes match what the dashboard expects from
the HTTP endpoints (``{data, pagination}``, ``{data, totalProducts,
totalQuantity}``), so the output can be fed to it unchanged.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import click

from backoffice.application.dates import format_timestamp
from backoffice.application.dto import Page, PickingListResult
from backoffice.domain.exceptions import DomainException
from backoffice.domain.model.reference import Address, Warehouse
from backoffice.domain.model.value_objects import Money
from backoffice.domain.model.views import EnrichedOrder, EnrichedStock, PickEntry


def _money(value: Money) -> float:
    return float(value.rounded())


def _address(address: Address | None) -> dict | None:
    if address is None:
        return None
    return {
        "id": address.id,
        "street": address.street,
        "city": address.city,
        "postalCode": address.postal_code,
        "province": address.province,
    }


def order_payload(order: EnrichedOrder) -> dict:
    return {
        "id": order.id,
        "date": format_timestamp(order.date),
        "status": order.status.value,
        "customerId": order.customer_id,
        "customerName": order.customer_name,
        "warehouseId": order.warehouse_id,
        "warehouseName": order.warehouse_name,
        "billingAddress": _address(order.billing_address),
        "deliveryAddress": _address(order.delivery_address),
        "lineItems": [
            {
                "productId": item.product_id,
                "name": item.name,
                "quantity": item.quantity,
                "price": _money(item.unit_price),
                "totalPrice": _money(item.line_total),
            }
            for item in order.line_items
        ],
        "subtotal": _money(order.subtotal),
        "taxes": _money(order.taxes),
        "total": _money(order.total),
        "lastUpdated": format_timestamp(order.last_updated) or None,
    }


def stock_payload(stock: EnrichedStock) -> dict:
    return {
        "id": stock.id,
        "productId": stock.product_id,
        "warehouseId": stock.warehouse_id,
        "name": stock.name,
        "price": _money(stock.price),
        "totalQuantity": stock.total_quantity,
        "reservedQuantity": stock.reserved_quantity,
        "availableQuantity": stock.available_quantity,
        "minThreshold": stock.min_threshold,
        "lastUpdated": format_timestamp(stock.last_updated) or None,
        "warehouseName": stock.warehouse_name,
    }


def warehouse_payload(warehouse: Warehouse) -> dict:
    return {"id": warehouse.id, "name": warehouse.name, "location": warehouse.location}


def pick_entry_payload(entry: PickEntry) -> dict:
    return {
        "productId": entry.product_id,
        "name": entry.name,
        "warehouseId": entry.warehouse_id,
        "warehouseName": entry.warehouse_name,
        "quantity": entry.quantity,
        "orders": [
            {
                "orderId": t.order_id,
                "customerName": t.customer_name,
                "quantity": t.quantity,
                "originalProduct": t.original_product,
            }
            for t in entry.orders
        ],
    }


def page_payload(page: Page, item_payload) -> dict:
    return {
        "success": True,
        "data": [item_payload(item) for item in page.items],
        "pagination": {
            "currentPage": page.current_page,
            "itemsPerPage": page.items_per_page,
            "totalItems": page.total_items,
            "totalPages": page.total_pages,
            "hasNextPage": page.has_next_page,
            "hasPrevPage": page.has_prev_page,
        },
    }


def picking_list_payload(result: PickingListResult) -> dict:
    return {
        "success": True,
        "data": [pick_entry_payload(entry) for entry in result.entries],
        "totalProducts": result.total_products,
        "totalQuantity": result.total_quantity,
    }


def echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def fail(exc: DomainException, as_json: bool) -> NoReturn:
    """Report a domain error and exit with status 1."""
    if not as_json:
        raise click.ClickException(str(exc))
    echo_json({"success": False, "kind": exc.kind, "message": str(exc)})
    click.get_current_context().exit(1)
