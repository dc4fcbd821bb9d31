import click

from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import settings
from backoffice.infrastructure.cli.inventory_commands import (
    inventory_export,
    inventory_list,
    inventory_show,
    inventory_update,
)
from backoffice.infrastructure.cli.order_commands import (
    order_export,
    order_list,
    order_show,
    order_status,
)
from backoffice.infrastructure.cli.picking_commands import picking_export, picking_show
from backoffice.infrastructure.cli.warehouse_commands import warehouse_list
from backoffice.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """Warehouse back-office: orders, inventory and picking lists."""
    try:
        level = "DEBUG" if verbose else settings().log_level
    except DomainException as exc:
        raise click.ClickException(str(exc))
    configure_logging(level)


@cli.group()
def order() -> None:
    """Browse orders and change their status."""


@cli.group()
def inventory() -> None:
    """Browse and adjust stock levels."""


@cli.group()
def warehouse() -> None:
    """Browse warehouses."""


@cli.group("picking-list")
def picking_list() -> None:
    """Build the picking list from pending orders."""


# Register subcommands
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_export)
inventory.add_command(inventory_list)
inventory.add_command(inventory_show)
inventory.add_command(inventory_update)
inventory.add_command(inventory_export)
warehouse.add_command(warehouse_list)
picking_list.add_command(picking_show)
picking_list.add_command(picking_export)
