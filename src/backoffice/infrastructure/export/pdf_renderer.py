"""PDF renderer: plain text pages in Helvetica.

Writes the PDF objects by hand: catalog, page tree, one font, and a page
plus content stream per page.  Text is encoded as cp1252, matching the
font's WinAnsiEncoding; anything else becomes ``?``.
"""

from __future__ import annotations

import textwrap

from backoffice.application.documents import Document, DocumentRenderer
from backoffice.infrastructure.export.cells import TIMESTAMP_FORMAT, cell_text

PAGE_WIDTH, PAGE_HEIGHT = 595, 842  # A4 in points
MARGIN = 50
BODY_SIZE, TITLE_SIZE, HEADING_SIZE = 9, 16, 12
LEADING = 12
WRAP_WIDTH = 105


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


class PdfRenderer(DocumentRenderer):

    def render(self, document: Document) -> bytes:
        return self._assemble(self._paginate(self._lines(document)))

    # --- Layout ---------------------------------------------------------------

    @staticmethod
    def _lines(document: Document) -> list[tuple[str, int]]:
        """(text, font size) for every line of the document, in order."""
        lines: list[tuple[str, int]] = [
            (document.title, TITLE_SIZE),
            (f"Generated on {document.generated_at.strftime(TIMESTAMP_FORMAT)}", BODY_SIZE),
            ("", BODY_SIZE),
        ]
        if document.summary:
            lines.append(("Summary", HEADING_SIZE))
            lines.extend((line, BODY_SIZE) for line in document.summary)
            lines.append(("", BODY_SIZE))

        for table in document.tables:
            lines.append((f"{table.title} ({len(table.rows)})", HEADING_SIZE))
            lines.append((" | ".join(c.header for c in table.columns), BODY_SIZE))
            for row in table.rows:
                text = " | ".join(
                    cell_text(value, column.type)
                    for value, column in zip(row, table.columns)
                )
                for part in textwrap.wrap(text, WRAP_WIDTH, subsequent_indent="    ") or [""]:
                    lines.append((part, BODY_SIZE))
            lines.append(("", BODY_SIZE))
        return lines

    @staticmethod
    def _paginate(lines: list[tuple[str, int]]) -> list[bytes]:
        """Split lines into page content streams.

        Each line advances by its own leading, so a page holds fewer lines
        when it carries titles and headings.
        """
        usable = PAGE_HEIGHT - 2 * MARGIN
        pages: list[list[tuple[str, int]]] = [[]]
        height = 0
        for text, size in lines:
            leading = max(size, LEADING)
            if pages[-1] and height + leading > usable:
                pages.append([])
                height = 0
            pages[-1].append((text, size))
            height += leading

        streams: list[bytes] = []
        for page in pages:
            ops = ["BT", f"{MARGIN} {PAGE_HEIGHT - MARGIN} Td"]
            for text, size in page:
                ops.append(f"{max(size, LEADING)} TL /F1 {size} Tf ({_escape(text)}) Tj T*")
            ops.append("ET")
            streams.append("\n".join(ops).encode("cp1252", errors="replace"))
        return streams

    # --- File structure -------------------------------------------------------

    @staticmethod
    def _assemble(streams: list[bytes]) -> bytes:
        # 1 catalog, 2 page tree, 3 font, then (page, contents) pairs
        page_ids = [4 + 2 * i for i in range(len(streams))]
        kids = " ".join(f"{pid} 0 R" for pid in page_ids)

        objects: list[bytes] = [
            b"<< /Type /Catalog /Pages 2 0 R >>",
            f"<< /Type /Pages /Kids [{kids}] /Count {len(streams)} >>".encode("ascii"),
            b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica "
            b"/Encoding /WinAnsiEncoding >>",
        ]
        for page_id, stream in zip(page_ids, streams):
            objects.append(
                (
                    f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
                    f"/Contents {page_id + 1} 0 R /Resources << /Font << /F1 3 0 R >> >> >>"
                ).encode("ascii")
            )
            objects.append(
                f"<< /Length {len(stream)} >>\nstream\n".encode("ascii")
                + stream
                + b"\nendstream"
            )

        out = bytearray(b"%PDF-1.4\n")
        offsets = []
        for number, obj in enumerate(objects, start=1):
            offsets.append(len(out))
            out.extend(f"{number} 0 obj\n".encode("ascii"))
            out.extend(obj)
            out.extend(b"\nendobj\n")

        xref_start = len(out)
        out.extend(f"xref\n0 {len(objects) + 1}\n".encode("ascii"))
        out.extend(b"0000000000 65535 f \n")
        for offset in offsets:
            out.extend(f"{offset:010d} 00000 n \n".encode("ascii"))
        out.extend(
            (
                f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
                f"startxref\n{xref_start}\n%%EOF\n"
            ).encode("ascii")
        )
        return bytes(out)
