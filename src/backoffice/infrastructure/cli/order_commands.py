"""CLI commands for orders."""

from __future__ import annotations

from pathlib import Path

import click

from backoffice.application.dates import format_timestamp
from backoffice.application.documents import ExportFormat
from backoffice.application.dto import OrderFilters
from backoffice.application.export_documents import ExportOrdersHandler
from backoffice.application.list_orders import ListOrdersHandler
from backoffice.application.show_order import ShowOrderHandler
from backoffice.application.update_order_status import UpdateOrderStatusHandler
from backoffice.domain.exceptions import DomainException
from backoffice.domain.model.views import EnrichedOrder
from backoffice.infrastructure.bootstrap import entity_store, order_query, order_repository
from backoffice.infrastructure.cli.options import (
    STATUSES,
    export_options,
    json_option,
    window_options,
    write_export,
)
from backoffice.infrastructure.cli.payloads import echo_json, fail, order_payload, page_payload
from backoffice.infrastructure.export.renderers import default_renderers

ORDER_SORT_FIELDS = ["date", "customer", "customerId", "status", "total", "id"]


def _order_filter_options(func):
    func = click.option("--sort-order", type=click.Choice(["asc", "desc"]), default="desc", show_default=True)(func)
    func = click.option("--sort-by", type=click.Choice(ORDER_SORT_FIELDS), default="date", show_default=True)(func)
    func = click.option("--status", type=click.Choice(STATUSES), default="all", show_default=True)(func)
    return window_options(func)


def _print_order(order: EnrichedOrder) -> None:
    click.echo(f"Order {order.id}  (status={order.status.value})")
    click.echo(f"Date:      {format_timestamp(order.date)}")
    click.echo(f"Customer:  {order.customer_name}")
    click.echo(f"Warehouse: {order.warehouse_name}")
    if order.billing_address is not None:
        click.echo(f"Billing:   {order.billing_address.one_line()}")
    if order.delivery_address is not None:
        click.echo(f"Delivery:  {order.delivery_address.one_line()}")
    click.echo()
    click.echo(f"  {'Product':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-' * 30} {'-' * 5} {'-' * 10} {'-' * 10}")
    for item in order.line_items:
        click.echo(
            f"  {item.name:<30} {item.quantity:>5} "
            f"{item.unit_price.rounded():>10} {item.line_total.rounded():>10}"
        )
    click.echo()
    click.echo(f"  Subtotal: {order.subtotal.rounded()}")
    click.echo(f"  Taxes:    {order.taxes.rounded()}")
    click.echo(f"  Total:    {order.total.rounded()}")


@click.command("list")
@_order_filter_options
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--per-page", "items_per_page", default=25, show_default=True, type=int)
@json_option
def order_list(
    warehouse_id: str,
    search: str,
    period: str,
    start_date: str | None,
    end_date: str | None,
    status: str,
    sort_by: str,
    sort_order: str,
    page: int,
    items_per_page: int,
    as_json: bool,
) -> None:
    """List orders, filtered, sorted and paginated."""
    try:
        filters = OrderFilters.parse(
            warehouse_id=warehouse_id,
            status=status,
            period=period,
            start_date=start_date,
            end_date=end_date,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            items_per_page=items_per_page,
        )
        result = ListOrdersHandler(order_query()).handle(filters)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json(page_payload(result, order_payload))
        return

    if not result.items:
        click.echo("No orders found.")
        return

    click.echo(
        f"{'ID':<12} {'Date':<17} {'Customer':<24} {'Warehouse':<20} "
        f"{'Status':<10} {'Total':>10}"
    )
    click.echo("-" * 98)
    for order in result.items:
        click.echo(
            f"{order.id:<12} {order.date.strftime('%Y-%m-%d %H:%M'):<17} "
            f"{order.customer_name[:24]:<24} {order.warehouse_name[:20]:<20} "
            f"{order.status.value:<10} {order.total.rounded():>10}"
        )
    click.echo()
    click.echo(
        f"Page {result.current_page}/{max(result.total_pages, 1)} "
        f"({result.total_items} orders)"
    )


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID.")
@json_option
def order_show(order_id: str, as_json: bool) -> None:
    """Show one order with its line items."""
    try:
        order = ShowOrderHandler(entity_store()).handle(order_id)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json({"success": True, "data": order_payload(order)})
    else:
        _print_order(order)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--status", required=True, type=click.Choice(STATUSES[1:]), help="New status.")
@json_option
def order_status(order_id: str, status: str, as_json: bool) -> None:
    """Change the status of an order."""
    handler = UpdateOrderStatusHandler(order_repository(), entity_store())
    try:
        order = handler.handle(order_id, status)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json({"success": True, "data": order_payload(order)})
    else:
        click.echo(f"Order {order.id} is now {order.status.value}")


@click.command("export")
@_order_filter_options
@export_options
def order_export(
    warehouse_id: str,
    search: str,
    period: str,
    start_date: str | None,
    end_date: str | None,
    status: str,
    sort_by: str,
    sort_order: str,
    export_format: str,
    output: Path | None,
) -> None:
    """Export every matching order (no pagination) to CSV, Excel or PDF."""
    handler = ExportOrdersHandler(order_query(), default_renderers())
    try:
        filters = OrderFilters.parse(
            warehouse_id=warehouse_id,
            status=status,
            period=period,
            start_date=start_date,
            end_date=end_date,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        document = handler.handle(filters, ExportFormat.parse(export_format))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    write_export(document, output)
