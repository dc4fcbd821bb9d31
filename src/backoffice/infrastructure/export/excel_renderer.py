"""Excel renderer: one worksheet per table, built with openpyxl."""

from __future__ import annotations

import io
from datetime import datetime
from typing import Any

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from backoffice.application.dates import as_local
from backoffice.application.documents import ColumnType, Document, DocumentRenderer, Table

HEADER_FILL = PatternFill(start_color="FFE6E6FA", end_color="FFE6E6FA", fill_type="solid")
MAX_COLUMN_WIDTH = 50

_NUMBER_FORMATS = {
    ColumnType.CURRENCY: "#,##0.00",
    ColumnType.TIMESTAMP: "yyyy-mm-dd hh:mm",
}


def _cell_value(value: Any, column_type: ColumnType) -> Any:
    if value is None:
        return None
    if column_type is ColumnType.CURRENCY:
        return float(value)
    if column_type is ColumnType.TIMESTAMP and isinstance(value, datetime):
        # Excel has no time zones
        return as_local(value)
    return value


class ExcelRenderer(DocumentRenderer):

    def render(self, document: Document) -> bytes:
        wb = openpyxl.Workbook()
        ws = wb.active
        for index, table in enumerate(document.tables):
            if index > 0:
                ws = wb.create_sheet()
            self._fill_sheet(ws, table)

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()

    @staticmethod
    def _fill_sheet(ws, table: Table) -> None:
        # Sheet titles are limited to 31 characters
        ws.title = table.title[:31]

        ws.append([column.header for column in table.columns])
        for cell in ws[1]:
            cell.font = Font(bold=True)
            cell.fill = HEADER_FILL

        widths = [len(column.header) for column in table.columns]
        for row in table.rows:
            ws.append(
                [_cell_value(value, column.type) for value, column in zip(row, table.columns)]
            )
            for i, value in enumerate(row):
                widths[i] = max(widths[i], len(str(value)) if value is not None else 10)

        for row_cells in ws.iter_rows(min_row=2):
            for cell, column in zip(row_cells, table.columns):
                cell.alignment = Alignment(vertical="top", horizontal="left", wrap_text=True)
                number_format = _NUMBER_FORMATS.get(column.type)
                if number_format:
                    cell.number_format = number_format

        for i, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(i)].width = min(width + 2, MAX_COLUMN_WIDTH)
