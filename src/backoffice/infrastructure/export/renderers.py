"""The renderer for each export format."""

from __future__ import annotations

from backoffice.application.documents import DocumentRenderer, ExportFormat
from backoffice.infrastructure.export.csv_renderer import CsvRenderer
from backoffice.infrastructure.export.excel_renderer import ExcelRenderer
from backoffice.infrastructure.export.pdf_renderer import PdfRenderer


def default_renderers() -> dict[ExportFormat, DocumentRenderer]:
    return {
        ExportFormat.CSV: CsvRenderer(),
        ExportFormat.EXCEL: ExcelRenderer(),
        ExportFormat.PDF: PdfRenderer(),
    }
