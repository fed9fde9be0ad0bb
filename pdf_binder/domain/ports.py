from __future__ import annotations

from types import TracebackType
from typing import Protocol

from pdf_binder.domain.models import Color, Rect


class FontMetrics(Protocol):
    def width_of(self, text: str, size: float) -> float: ...


class SourcePdf(Protocol):
    @property
    def page_count(self) -> int: ...

    def close(self) -> None: ...

    def __enter__(self) -> SourcePdf: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None: ...


class CoverPage(Protocol):
    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...

    def draw_text(
        self, text: str, *, x: float, y: float, size: float, font: FontMetrics, color: Color
    ) -> None: ...

    def add_link(self, rect: Rect, destination_page_index: int, fit: str = "Fit") -> None: ...


class OutputPdf(Protocol):
    @property
    def page_count(self) -> int: ...

    def add_page(self, width: float, height: float) -> CoverPage: ...

    def copy_pages_from(self, source: SourcePdf, page_indices: list[int]) -> int: ...

    def embed_standard_font(self, font_id: str) -> FontMetrics: ...

    def serialize(self) -> bytes: ...

    def close(self) -> None: ...


class PdfBackend(Protocol):
    def create_document(self) -> OutputPdf: ...

    def open_document(self, pdf_bytes: bytes) -> SourcePdf: ...
