"""Document model handed to the export renderers.

The application decides *what* a document contains: tables of rows whose
columns carry a semantic type, plus a few summary lines.  Renderers
decide how each format shows them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from backoffice.domain.exceptions import ValidationError


class ColumnType(Enum):
    STRING = "string"
    INTEGER = "integer"
    CURRENCY = "currency"  # Decimal, two places
    TIMESTAMP = "timestamp"  # datetime or None


@dataclass(frozen=True)
class Column:
    header: str
    type: ColumnType = ColumnType.STRING


@dataclass(frozen=True)
class Table:
    title: str
    columns: list[Column]
    rows: list[list[Any]] = field(default_factory=list)


@dataclass(frozen=True)
class Document:
    """A renderable document.

    ``kind`` names the file (``picking_list_20240301_101500.pdf``); the
    first table is the main one and the only one a CSV export carries.
    """

    kind: str
    title: str
    tables: list[Table]
    generated_at: datetime
    summary: list[str] = field(default_factory=list)

    @property
    def main_table(self) -> Table:
        return self.tables[0]


class ExportFormat(Enum):
    CSV = "csv"
    EXCEL = "excel"
    PDF = "pdf"

    @property
    def extension(self) -> str:
        return {"csv": "csv", "excel": "xlsx", "pdf": "pdf"}[self.value]

    @property
    def content_type(self) -> str:
        return {
            "csv": "text/csv",
            "excel": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            "pdf": "application/pdf",
        }[self.value]

    @staticmethod
    def parse(raw: str | ExportFormat) -> ExportFormat:
        if isinstance(raw, ExportFormat):
            return raw
        try:
            return ExportFormat(raw.strip().lower())
        except (AttributeError, ValueError):
            raise ValidationError(
                f"Unsupported export format {raw!r} (csv, excel, pdf)"
            ) from None


@dataclass(frozen=True)
class ExportedDocument:
    content: bytes
    content_type: str
    filename: str


class DocumentRenderer(ABC):

    @abstractmethod
    def render(self, document: Document) -> bytes:
        """Return the bytes of ``document`` in this renderer's format."""


def render_document(
    document: Document,
    export_format: ExportFormat,
    renderers: Mapping[ExportFormat, DocumentRenderer],
) -> ExportedDocument:
    renderer = renderers.get(export_format)
    if renderer is None:
        raise ValidationError(f"No renderer configured for {export_format.value}")
    stamp = document.generated_at.strftime("%Y%m%d_%H%M%S")
    return ExportedDocument(
        content=renderer.render(document),
        content_type=export_format.content_type,
        filename=f"{document.kind}_{stamp}.{export_format.extension}",
    )
