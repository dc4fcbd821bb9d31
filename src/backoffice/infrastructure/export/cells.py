"""Text formatting of typed cells, shared by the CSV and PDF renderers."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from backoffice.application.dates import as_local
from backoffice.application.documents import ColumnType

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def cell_text(value: Any, column_type: ColumnType) -> str:
    if value is None:
        return ""
    if column_type is ColumnType.CURRENCY:
        return f"{Decimal(value):.2f}"
    if column_type is ColumnType.TIMESTAMP and isinstance(value, datetime):
        return as_local(value).strftime(TIMESTAMP_FORMAT)
    return str(value)
