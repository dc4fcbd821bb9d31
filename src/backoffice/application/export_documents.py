"""Application services: export orders, the picking list and stock levels.

Each handler runs the same query as its listing (without paging), shapes
the rows into a Document and renders it in the requested format.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Callable, Mapping

from backoffice.application.documents import (
    Column,
    ColumnType,
    Document,
    DocumentRenderer,
    ExportedDocument,
    ExportFormat,
    Table,
    render_document,
)
from backoffice.application.dto import (
    OrderFilters,
    PickingListFilters,
    PickingListResult,
    StockFilters,
)
from backoffice.application.generate_picking_list import GeneratePickingListHandler
from backoffice.application.list_stocks import ListStocksHandler
from backoffice.application.order_query import OrderQuery
from backoffice.domain.model.reference import Address
from backoffice.domain.model.value_objects import Money
from backoffice.domain.model.views import EnrichedOrder, EnrichedStock

logger = logging.getLogger(__name__)

NO_ADDRESS = "Not specified"

Renderers = Mapping[ExportFormat, DocumentRenderer]

I, C, TS = ColumnType.INTEGER, ColumnType.CURRENCY, ColumnType.TIMESTAMP


def _address(address: Address | None) -> str:
    return address.one_line() if address else NO_ADDRESS


def _money_total(values: list[Money]) -> Decimal:
    total = Money.zero()
    for value in values:
        total = total + value
    return total.rounded()


# --- Document shaping ---------------------------------------------------------


def orders_document(orders: list[EnrichedOrder], generated_at: datetime) -> Document:
    main = Table(
        title="Orders",
        columns=[
            Column("Order ID"), Column("Date", TS), Column("Customer"),
            Column("Status"), Column("Warehouse"), Column("Billing address"),
            Column("Delivery address"), Column("Products"),
            Column("Total quantity", I), Column("Subtotal", C),
            Column("Taxes", C), Column("Total", C),
        ],
        rows=[
            [
                o.id, o.date, o.customer_name, o.status.value, o.warehouse_name,
                _address(o.billing_address), _address(o.delivery_address),
                "; ".join(f"{i.name} (x{i.quantity})" for i in o.line_items),
                o.total_quantity, o.subtotal.rounded(), o.taxes.rounded(),
                o.total.rounded(),
            ]
            for o in orders
        ],
    )
    details = Table(
        title="Product details",
        columns=[
            Column("Order ID"), Column("Date", TS), Column("Customer"),
            Column("Product"), Column("Quantity", I), Column("Unit price", C),
            Column("Line total", C),
        ],
        rows=[
            [
                o.id, o.date, o.customer_name, i.name, i.quantity,
                i.unit_price.rounded(), i.line_total.rounded(),
            ]
            for o in orders
            for i in o.line_items
        ],
    )

    summary = [
        f"Orders: {len(orders)}",
        f"Subtotal: {_money_total([o.subtotal for o in orders])}",
        f"Taxes: {_money_total([o.taxes for o in orders])}",
        f"Total: {_money_total([o.total for o in orders])}",
    ]
    summary.append("By status:")
    for status, count in Counter(o.status.value for o in orders).items():
        summary.append(f"  - {status}: {count} orders")
    summary.append("By warehouse:")
    for warehouse, count in Counter(o.warehouse_name for o in orders).items():
        summary.append(f"  - {warehouse}: {count} orders")

    return Document(
        kind="orders",
        title="Orders report",
        tables=[main, details],
        generated_at=generated_at,
        summary=summary,
    )


def picking_list_document(result: PickingListResult, generated_at: datetime) -> Document:
    main = Table(
        title="Picking list",
        columns=[
            Column("Product"), Column("Warehouse"), Column("Total quantity", I),
            Column("Order count", I), Column("Order details"),
        ],
        rows=[
            [
                e.name, e.warehouse_name, e.quantity, len(e.orders),
                "; ".join(
                    f"{t.order_id} ({t.customer_name}: {t.quantity})" for t in e.orders
                ),
            ]
            for e in result.entries
        ],
    )
    details = Table(
        title="Details by order",
        columns=[
            Column("Product"), Column("Warehouse"), Column("Order ID"),
            Column("Customer"), Column("Quantity", I), Column("Original product"),
        ],
        rows=[
            [
                e.name, e.warehouse_name, t.order_id, t.customer_name,
                t.quantity, t.original_product or e.name,
            ]
            for e in result.entries
            for t in e.orders
        ],
    )

    per_warehouse: dict[str, int] = defaultdict(int)
    for entry in result.entries:
        per_warehouse[entry.warehouse_name] += entry.quantity

    summary = [
        f"Distinct products: {result.total_products}",
        f"Total quantity to pick: {result.total_quantity}",
        f"Orders concerned: {len(result.order_ids)}",
        "By warehouse:",
    ]
    summary.extend(f"  - {name}: {qty} units" for name, qty in per_warehouse.items())

    return Document(
        kind="picking_list",
        title="Picking list",
        tables=[main, details],
        generated_at=generated_at,
        summary=summary,
    )


def stocks_document(rows: list[EnrichedStock], generated_at: datetime) -> Document:
    table = Table(
        title="Inventory",
        columns=[
            Column("ID"), Column("Product"), Column("Warehouse"),
            Column("Total stock", I), Column("Reserved", I), Column("Available", I),
            Column("Min threshold", I), Column("Unit price", C),
            Column("Total value", C), Column("Last updated", TS),
        ],
        rows=[
            [
                r.id, r.name, r.warehouse_name, r.total_quantity,
                r.reserved_quantity, r.available_quantity, r.min_threshold,
                r.price.rounded(), r.total_value.rounded(), r.last_updated,
            ]
            for r in rows
        ],
    )
    summary = [
        f"Items: {len(rows)}",
        f"Total value: {_money_total([r.total_value for r in rows])}",
        f"Below threshold: {sum(1 for r in rows if r.is_below_threshold)}",
    ]
    return Document(
        kind="inventory",
        title="Inventory report",
        tables=[table],
        generated_at=generated_at,
        summary=summary,
    )


# --- Handlers -----------------------------------------------------------------


class ExportOrdersHandler:

    def __init__(
        self,
        query: OrderQuery,
        renderers: Renderers,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._query = query
        self._renderers = renderers
        self._clock = clock

    def handle(self, filters: OrderFilters, export_format: ExportFormat) -> ExportedDocument:
        orders = self._query.find_all(filters)
        document = orders_document(orders, self._clock())
        logger.info("Exporting %d orders as %s", len(orders), export_format.value)
        return render_document(document, export_format, self._renderers)


class ExportPickingListHandler:

    def __init__(
        self,
        picking: GeneratePickingListHandler,
        renderers: Renderers,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._picking = picking
        self._renderers = renderers
        self._clock = clock

    def handle(
        self, filters: PickingListFilters, export_format: ExportFormat
    ) -> ExportedDocument:
        result = self._picking.handle(filters)
        document = picking_list_document(result, self._clock())
        logger.info(
            "Exporting picking list (%d products) as %s",
            result.total_products, export_format.value,
        )
        return render_document(document, export_format, self._renderers)


class ExportStocksHandler:

    def __init__(
        self,
        stocks: ListStocksHandler,
        renderers: Renderers,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._stocks = stocks
        self._renderers = renderers
        self._clock = clock

    def handle(self, filters: StockFilters, export_format: ExportFormat) -> ExportedDocument:
        rows = self._stocks.find_all(filters)
        document = stocks_document(rows, self._clock())
        logger.info("Exporting %d stock rows as %s", len(rows), export_format.value)
        return render_document(document, export_format, self._renderers)
