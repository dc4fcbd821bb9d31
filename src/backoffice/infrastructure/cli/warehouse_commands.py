"""CLI commands for warehouses."""

from __future__ import annotations

import click

from backoffice.application.dto import WarehouseFilters
from backoffice.application.list_warehouses import ListWarehousesHandler
from backoffice.application.sorting import SortOrder, WarehouseSortField, parse_choice
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import entity_store
from backoffice.infrastructure.cli.options import json_option
from backoffice.infrastructure.cli.payloads import echo_json, fail, page_payload, warehouse_payload


@click.command("list")
@click.option("--search", default="", help="Warehouse name contains.")
@click.option("--sort-by", type=click.Choice(["name", "id"]), default="name", show_default=True)
@click.option("--sort-order", type=click.Choice(["asc", "desc"]), default="asc", show_default=True)
@click.option("--page", type=int, default=None, help="Paginate from this page.")
@click.option("--per-page", "items_per_page", type=int, default=None)
@json_option
def warehouse_list(
    search: str,
    sort_by: str,
    sort_order: str,
    page: int | None,
    items_per_page: int | None,
    as_json: bool,
) -> None:
    """List warehouses (every warehouse unless --page/--per-page is given)."""
    try:
        filters = WarehouseFilters(
            search=search,
            sort_by=WarehouseSortField.parse(sort_by),
            sort_order=parse_choice(SortOrder, sort_order, "sort order"),
            page=page,
            items_per_page=items_per_page,
        )
        result = ListWarehousesHandler(entity_store()).handle(filters)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json(page_payload(result, warehouse_payload))
        return

    if not result.items:
        click.echo("No warehouses found.")
        return

    click.echo(f"{'ID':<10} {'Name':<30} {'Location':<30}")
    click.echo("-" * 72)
    for warehouse in result.items:
        click.echo(f"{warehouse.id:<10} {warehouse.name:<30} {warehouse.location or '':<30}")
