"""CLI commands for the picking list."""

from __future__ import annotations

from pathlib import Path

import click

from backoffice.application.documents import ExportFormat
from backoffice.application.dto import PickingListFilters
from backoffice.application.export_documents import ExportPickingListHandler
from backoffice.application.generate_picking_list import GeneratePickingListHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import entity_store, order_query
from backoffice.infrastructure.cli.options import (
    export_options,
    json_option,
    window_options,
    write_export,
)
from backoffice.infrastructure.cli.payloads import echo_json, fail, picking_list_payload
from backoffice.infrastructure.export.renderers import default_renderers


def _handler() -> GeneratePickingListHandler:
    return GeneratePickingListHandler(entity_store(), order_query())


@click.command("show")
@window_options
@click.option("--details", is_flag=True, default=False, help="List the orders behind each line.")
@json_option
def picking_show(
    warehouse_id: str,
    search: str,
    period: str,
    start_date: str | None,
    end_date: str | None,
    details: bool,
    as_json: bool,
) -> None:
    """Aggregate pending orders into the quantities to pick per product."""
    try:
        filters = PickingListFilters.parse(
            warehouse_id=warehouse_id,
            period=period,
            start_date=start_date,
            end_date=end_date,
            search=search,
        )
        result = _handler().handle(filters)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json(picking_list_payload(result))
        return

    if not result.entries:
        click.echo("Nothing to pick.")
        return

    click.echo(f"{'Product':<12} {'Name':<32} {'Warehouse':<20} {'Qty':>6}")
    click.echo("-" * 73)
    for entry in result.entries:
        click.echo(
            f"{entry.product_id:<12} {entry.name[:32]:<32} "
            f"{entry.warehouse_name[:20]:<20} {entry.quantity:>6}"
        )
        if details:
            for trace in entry.orders:
                click.echo(
                    f"    {trace.order_id:<12} {trace.customer_name[:24]:<24} "
                    f"{trace.quantity:>6}  from {trace.original_product}"
                )
    click.echo()
    click.echo(
        f"{result.total_products} products, {result.total_quantity} units "
        f"from {len(result.order_ids)} orders"
    )


@click.command("export")
@window_options
@export_options
def picking_export(
    warehouse_id: str,
    search: str,
    period: str,
    start_date: str | None,
    end_date: str | None,
    export_format: str,
    output: Path | None,
) -> None:
    """Export the picking list to CSV, Excel or PDF."""
    handler = ExportPickingListHandler(_handler(), default_renderers())
    try:
        filters = PickingListFilters.parse(
            warehouse_id=warehouse_id,
            period=period,
            start_date=start_date,
            end_date=end_date,
            search=search,
        )
        document = handler.handle(filters, ExportFormat.parse(export_format))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    write_export(document, output)
