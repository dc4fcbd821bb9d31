"""CLI commands for inventory (stock levels)."""

from __future__ import annotations

from pathlib import Path

import click

from backoffice.application.documents import ExportFormat
from backoffice.application.dto import StockFilters
from backoffice.application.export_documents import ExportStocksHandler
from backoffice.application.list_stocks import ListStocksHandler, ShowStockHandler
from backoffice.application.update_stock import UpdateStockHandler
from backoffice.domain.exceptions import DomainException
from backoffice.domain.model.views import EnrichedStock
from backoffice.infrastructure.bootstrap import entity_store, inventory_repository
from backoffice.infrastructure.cli.options import export_options, json_option, write_export
from backoffice.infrastructure.cli.payloads import echo_json, fail, page_payload, stock_payload
from backoffice.infrastructure.export.renderers import default_renderers

STOCK_SORT_FIELDS = [
    "name",
    "totalQuantity",
    "availableQuantity",
    "reservedQuantity",
    "minThreshold",
    "lastUpdated",
]


def _stock_filter_options(func):
    func = click.option("--sort-order", type=click.Choice(["asc", "desc"]), default="asc", show_default=True)(func)
    func = click.option("--sort-by", type=click.Choice(STOCK_SORT_FIELDS), default="name", show_default=True)(func)
    func = click.option("--search", default="", help="Product name contains.")(func)
    func = click.option("--warehouse", "warehouse_id", default="all", show_default=True, help="Warehouse ID.")(func)
    return func


def _print_stock(stock: EnrichedStock) -> None:
    click.echo(f"Inventory item {stock.id}")
    click.echo(f"Product:   {stock.name} ({stock.product_id})")
    click.echo(f"Warehouse: {stock.warehouse_name} ({stock.warehouse_id})")
    click.echo(f"Price:     {stock.price.rounded()}")
    click.echo(f"Total:     {stock.total_quantity}")
    click.echo(f"Reserved:  {stock.reserved_quantity}")
    click.echo(f"Available: {stock.available_quantity}")
    click.echo(f"Minimum:   {stock.min_threshold}")
    if stock.is_below_threshold:
        click.echo("Stock is below its minimum threshold.")


@click.command("list")
@_stock_filter_options
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--per-page", "items_per_page", default=25, show_default=True, type=int)
@json_option
def inventory_list(
    warehouse_id: str,
    search: str,
    sort_by: str,
    sort_order: str,
    page: int,
    items_per_page: int,
    as_json: bool,
) -> None:
    """List stock rows per product and warehouse."""
    try:
        filters = StockFilters.parse(
            warehouse_id=warehouse_id,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            items_per_page=items_per_page,
        )
        result = ListStocksHandler(entity_store()).handle(filters)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json(page_payload(result, stock_payload))
        return

    if not result.items:
        click.echo("No inventory records found.")
        return

    click.echo(
        f"{'ID':<10} {'Product':<28} {'Warehouse':<20} "
        f"{'Total':>8} {'Reserved':>10} {'Available':>10} {'Min':>6}"
    )
    click.echo("-" * 98)
    for row in result.items:
        flag = " !" if row.is_below_threshold else ""
        click.echo(
            f"{row.id:<10} {row.name[:28]:<28} {row.warehouse_name[:20]:<20} "
            f"{row.total_quantity:>8} {row.reserved_quantity:>10} "
            f"{row.available_quantity:>10} {row.min_threshold:>6}{flag}"
        )
    click.echo()
    click.echo(
        f"Page {result.current_page}/{max(result.total_pages, 1)} "
        f"({result.total_items} items)"
    )


@click.command("show")
@click.option("--id", "item_id", required=True, help="Inventory record ID.")
@click.option("--warehouse", "warehouse_id", default=None, help="Warehouse ID.")
@json_option
def inventory_show(item_id: str, warehouse_id: str | None, as_json: bool) -> None:
    """Show one inventory record."""
    try:
        stock = ShowStockHandler(entity_store()).handle(item_id, warehouse_id)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json({"success": True, "data": stock_payload(stock)})
    else:
        _print_stock(stock)


@click.command("update")
@click.option("--id", "item_id", required=True, help="Inventory record ID.")
@click.option("--warehouse", "warehouse_id", default=None, help="Warehouse ID.")
@click.option("--total", "total_quantity", type=int, default=None, help="Total quantity in stock.")
@click.option("--reserved", "reserved_quantity", type=int, default=None, help="Reserved quantity.")
@click.option("--min-threshold", "min_threshold", type=int, default=None, help="Minimum threshold.")
@json_option
def inventory_update(
    item_id: str,
    warehouse_id: str | None,
    total_quantity: int | None,
    reserved_quantity: int | None,
    min_threshold: int | None,
    as_json: bool,
) -> None:
    """Set the quantities of an inventory record."""
    handler = UpdateStockHandler(inventory_repository(), entity_store())
    try:
        stock = handler.handle(
            item_id,
            warehouse_id=warehouse_id,
            total_quantity=total_quantity,
            reserved_quantity=reserved_quantity,
            min_threshold=min_threshold,
        )
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json({"success": True, "data": stock_payload(stock)})
    else:
        click.echo(
            f"Inventory item {stock.id} updated: total={stock.total_quantity} "
            f"reserved={stock.reserved_quantity} min={stock.min_threshold}"
        )


@click.command("export")
@_stock_filter_options
@export_options
def inventory_export(
    warehouse_id: str,
    search: str,
    sort_by: str,
    sort_order: str,
    export_format: str,
    output: Path | None,
) -> None:
    """Export every matching stock row to CSV, Excel or PDF."""
    handler = ExportStocksHandler(ListStocksHandler(entity_store()), default_renderers())
    try:
        filters = StockFilters.parse(
            warehouse_id=warehouse_id,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        document = handler.handle(filters, ExportFormat.parse(export_format))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    write_export(document, output)
