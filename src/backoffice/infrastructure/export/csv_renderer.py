"""CSV renderer: the document's main table, header row first."""

from __future__ import annotations

import csv
import io

from backoffice.application.documents import Document, DocumentRenderer
from backoffice.infrastructure.export.cells import cell_text


class CsvRenderer(DocumentRenderer):

    def render(self, document: Document) -> bytes:
        table = document.main_table
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow([column.header for column in table.columns])
        for row in table.rows:
            writer.writerow(
                [cell_text(value, column.type) for value, column in zip(row, table.columns)]
            )
        return buffer.getvalue().encode("utf-8")
