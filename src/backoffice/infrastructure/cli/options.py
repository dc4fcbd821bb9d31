"""Options shared by several commands."""

from __future__ import annotations

from pathlib import Path

import click

from backoffice.application.documents import ExportedDocument

PERIODS = ["all", "today", "yesterday", "week", "custom"]
STATUSES = ["all", "pending", "preparing", "ready", "shipped", "delivered", "cancelled"]
FORMATS = ["csv", "excel", "pdf"]


def window_options(func):
    """--warehouse / --search / --period / --start / --end."""
    func = click.option("--end", "end_date", default=None, help="End date (YYYY-MM-DD) for --period custom.")(func)
    func = click.option("--start", "start_date", default=None, help="Start date (YYYY-MM-DD) for --period custom.")(func)
    func = click.option("--period", type=click.Choice(PERIODS), default="all", show_default=True, help="Time window.")(func)
    func = click.option("--search", default="", help="Order ID or customer name contains.")(func)
    func = click.option("--warehouse", "warehouse_id", default="all", show_default=True, help="Warehouse ID.")(func)
    return func


def json_option(func):
    return click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")(func)


def export_options(func):
    func = click.option(
        "--output", "output", type=click.Path(path_type=Path), default=None,
        help="File or directory to write (default: current directory).",
    )(func)
    func = click.option("--format", "export_format", type=click.Choice(FORMATS), default="csv", show_default=True)(func)
    return func


def write_export(document: ExportedDocument, output: Path | None) -> Path:
    target = output or Path.cwd()
    if target.is_dir():
        target = target / document.filename
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(document.content)
    click.echo(f"Wrote {target} ({len(document.content)} bytes, {document.content_type})")
    return target
