from __future__ import annotations

import logging
import re
from types import TracebackType
from typing import cast

import fitz  # type: ignore[import-untyped]

from pdf_binder.domain.errors import MalformedSourceError, UnsupportedTextError
from pdf_binder.domain.models import Color, LinkTarget, Rect
from pdf_binder.domain.ports import FontMetrics

logger = logging.getLogger(__name__)

# Base-14 fonts, addressed by PyMuPDF's short names.
STANDARD_FONTS = {
    "serif": "tiro",
    "serif-bold": "tibo",
}

_DEST_NAME_PATTERN = re.compile(r"/([A-Za-z]+)")


def _page_runs(page_indices: list[int]) -> list[tuple[int, int]]:
    runs: list[tuple[int, int]] = []
    if not page_indices:
        return runs
    run_start = page_indices[0]
    run_end = page_indices[0]
    for index in page_indices[1:]:
        if index == run_end + 1:
            run_end = index
            continue
        runs.append((run_start, run_end))
        run_start = index
        run_end = index
    runs.append((run_start, run_end))
    return runs


def _optimized_bytes(document: fitz.Document) -> bytes:
    return cast(
        bytes,
        document.tobytes(
            garbage=4,
            clean=True,
            deflate=True,
            deflate_images=True,
            deflate_fonts=True,
        ),
    )


class PyMuPdfFont:
    def __init__(self, fontname: str) -> None:
        self.fontname = fontname
        self.font = fitz.Font(fontname)

    def width_of(self, text: str, size: float) -> float:
        return float(self.font.text_length(text, fontsize=size))

    def missing_glyphs(self, text: str) -> list[str]:
        missing: list[str] = []
        for char in text:
            if char.isspace() or char in missing:
                continue
            if not self.font.has_glyph(ord(char)):
                missing.append(char)
        return missing


class PyMuPdfSource:
    def __init__(self, document: fitz.Document) -> None:
        self.document = document

    @property
    def page_count(self) -> int:
        return int(self.document.page_count)

    def close(self) -> None:
        self.document.close()

    def __enter__(self) -> PyMuPdfSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


class PyMuPdfPage:
    """Coordinates have their origin at the bottom-left and are flipped here.

    ``insert_pdf`` invalidates loaded pages, so the page is looked up by number
    for every call.
    """

    def __init__(self, document: fitz.Document, page_number: int) -> None:
        self.document = document
        self.page_number = page_number

    def _page(self) -> fitz.Page:
        return self.document[self.page_number]

    @property
    def width(self) -> float:
        return float(self._page().rect.width)

    @property
    def height(self) -> float:
        return float(self._page().rect.height)

    def draw_text(
        self, text: str, *, x: float, y: float, size: float, font: FontMetrics, color: Color
    ) -> None:
        if not isinstance(font, PyMuPdfFont):
            raise TypeError("Fonts must be embedded by the same PyMuPDF document")
        missing = font.missing_glyphs(text)
        if missing:
            raise UnsupportedTextError(
                f"Characters {''.join(missing)!r} in {text!r} cannot be drawn with the cover font"
            )
        page = self._page()
        writer = fitz.TextWriter(page.rect, color=color)
        writer.append(fitz.Point(x, page.rect.height - y), text, font=font.font, fontsize=size)
        writer.write_text(page)

    def add_link(self, rect: Rect, destination_page_index: int, fit: str = "Fit") -> None:
        page = self._page()
        height = page.rect.height
        x0, y0, x1, y1 = rect
        existing = {item[0] for item in page.annot_xrefs()}
        page.insert_link(
            {
                "kind": fitz.LINK_GOTO,
                "from": fitz.Rect(x0, height - y1, x1, height - y0),
                "page": destination_page_index,
                "to": fitz.Point(0, 0),
                "zoom": 0,
            }
        )
        # insert_link only writes /XYZ destinations; rewrite the action in place.
        target_xref = self.document.page_xref(destination_page_index)
        for xref, _, _ in page.annot_xrefs():
            if xref in existing:
                continue
            self.document.xref_set_key(xref, "A", f"<</S/GoTo/D[{target_xref} 0 R/{fit}]>>")
            self.document.xref_set_key(xref, "Border", "[0 0 0]")


class PyMuPdfDocument:
    def __init__(self) -> None:
        self.document = fitz.open()

    @property
    def page_count(self) -> int:
        return int(self.document.page_count)

    def add_page(self, width: float, height: float) -> PyMuPdfPage:
        self.document.new_page(width=width, height=height)
        return PyMuPdfPage(self.document, self.document.page_count - 1)

    def copy_pages_from(self, source: PyMuPdfSource, page_indices: list[int]) -> int:
        try:
            for from_page, to_page in _page_runs(page_indices):
                self.document.insert_pdf(source.document, from_page=from_page, to_page=to_page)
        except Exception as exc:
            raise MalformedSourceError("Unable to copy pages from PDF") from exc
        return len(page_indices)

    def embed_standard_font(self, font_id: str) -> PyMuPdfFont:
        if font_id not in STANDARD_FONTS:
            raise ValueError(f"Unknown standard font: {font_id}")
        return PyMuPdfFont(STANDARD_FONTS[font_id])

    def serialize(self) -> bytes:
        return _optimized_bytes(self.document)

    def close(self) -> None:
        self.document.close()


class PyMuPdfAdapter:
    @staticmethod
    def _fit_mode(document: fitz.Document, xref: int) -> str:
        if xref <= 0:
            return ""
        kind, value = document.xref_get_key(xref, "A/D")
        if kind != "array":
            kind, value = document.xref_get_key(xref, "Dest")
        if kind != "array":
            return ""
        names = _DEST_NAME_PATTERN.findall(value)
        return names[0] if names else ""

    def create_document(self) -> PyMuPdfDocument:
        return PyMuPdfDocument()

    def open_document(self, pdf_bytes: bytes) -> PyMuPdfSource:
        try:
            document = fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as exc:
            raise MalformedSourceError("Unable to read PDF") from exc
        if document.needs_pass:
            document.close()
            raise MalformedSourceError("Encrypted PDFs are not supported")
        if document.page_count == 0:
            document.close()
            raise MalformedSourceError("PDF contains no pages")
        logger.debug("Opened source PDF with %d page(s)", document.page_count)
        return PyMuPdfSource(document)

    def get_page_count(self, pdf_bytes: bytes) -> int:
        with self.open_document(pdf_bytes) as source:
            return source.page_count

    def extract_text_by_page(self, pdf_bytes: bytes) -> list[str]:
        try:
            with fitz.open(stream=pdf_bytes, filetype="pdf") as document:
                return [document[index].get_text("text") for index in range(document.page_count)]
        except Exception as exc:
            raise MalformedSourceError("Unable to extract PDF text") from exc

    def render_page_thumbnail(self, pdf_bytes: bytes, page_index: int, zoom: float = 0.45) -> bytes:
        try:
            with fitz.open(stream=pdf_bytes, filetype="pdf") as document:
                page = document[page_index]
                matrix = fitz.Matrix(zoom, zoom)
                pixmap = page.get_pixmap(matrix=matrix, alpha=False)
                return cast(bytes, pixmap.tobytes("png"))
        except Exception as exc:
            raise MalformedSourceError("Unable to render page thumbnail") from exc

    def read_cover_links(self, pdf_bytes: bytes, page_index: int = 0) -> list[LinkTarget]:
        try:
            with fitz.open(stream=pdf_bytes, filetype="pdf") as document:
                page = document[page_index]
                height = page.rect.height
                targets: list[LinkTarget] = []
                for link in page.get_links():
                    if link["kind"] != fitz.LINK_GOTO:
                        continue
                    area = link["from"]
                    targets.append(
                        LinkTarget(
                            page_index=int(link["page"]),
                            rect=(area.x0, height - area.y1, area.x1, height - area.y0),
                            fit_mode=self._fit_mode(document, int(link.get("xref", 0))),
                        )
                    )
                return targets
        except Exception as exc:
            raise MalformedSourceError("Unable to read page links") from exc

    def create_sample_pdf(self, text: str, width: float = 600, height: float = 400) -> bytes:
        document = fitz.open()
        try:
            page = document.new_page(width=width, height=height)
            font_size = 24
            page.insert_text((50, 4 * font_size), text, fontsize=font_size, fontname="tiro")
            return _optimized_bytes(document)
        finally:
            document.close()
