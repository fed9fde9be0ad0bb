from __future__ import annotations

from pdf_binder.domain.errors import InvalidInputError
from pdf_binder.domain.models import (
    Color,
    CoverLayout,
    CoverLink,
    MergeRequest,
    OutputDocument,
)
from pdf_binder.domain.ports import CoverPage, FontMetrics, PdfBackend
from pdf_binder.services.text_layout import wrap_text

BODY_FONT = "serif"
DISPLAY_FONT = "serif-bold"


class CoverAssembler:
    def __init__(self, backend: PdfBackend, layout: CoverLayout | None = None) -> None:
        self.backend = backend
        self.layout = layout or CoverLayout()

    @staticmethod
    def _draw_centered(
        page: CoverPage,
        text: str,
        *,
        center_x: float,
        y: float,
        size: float,
        font: FontMetrics,
        color: Color,
    ) -> float:
        width = font.width_of(text, size)
        page.draw_text(text, x=center_x - width / 2, y=y, size=size, font=font, color=color)
        return width

    def assemble(self, request: MergeRequest) -> OutputDocument:
        if not request.documents:
            raise InvalidInputError("Cannot merge without at least one PDF.")

        layout = self.layout
        output = self.backend.create_document()
        try:
            body_font = output.embed_standard_font(BODY_FONT)
            display_font = output.embed_standard_font(DISPLAY_FONT)
            cover = output.add_page(layout.page_width, layout.page_height)
            center_x = cover.width / 2
            current_y = cover.height - layout.top_margin

            title = request.cover_title.strip()
            if title:
                self._draw_centered(
                    cover,
                    title,
                    center_x=center_x,
                    y=current_y,
                    size=layout.title_size,
                    font=display_font,
                    color=layout.text_color,
                )
                current_y -= layout.title_advance

            description = request.cover_description.strip()
            if description:
                max_width = cover.width - layout.description_side_margin
                for paragraph in description.splitlines():
                    lines = wrap_text(paragraph, body_font, layout.description_size, max_width)
                    if not lines:
                        current_y -= layout.description_line_advance
                        continue
                    for line in lines:
                        self._draw_centered(
                            cover,
                            line,
                            center_x=center_x,
                            y=current_y,
                            size=layout.description_size,
                            font=body_font,
                            color=layout.text_color,
                        )
                        current_y -= layout.description_line_advance
                current_y -= layout.description_gap

            self._draw_centered(
                cover,
                layout.heading_text,
                center_x=center_x,
                y=current_y,
                size=layout.heading_size,
                font=display_font,
                color=layout.text_color,
            )
            current_y -= layout.heading_advance

            links: list[CoverLink] = []
            page_index_offset = 1
            for document in request.documents:
                with self.backend.open_document(document.content) as source:
                    start_page_index = page_index_offset
                    page_index_offset += output.copy_pages_from(
                        source, list(range(source.page_count))
                    )

                label = document.label
                width = self._draw_centered(
                    cover,
                    label,
                    center_x=center_x,
                    y=current_y,
                    size=layout.link_size,
                    font=body_font,
                    color=layout.link_color,
                )
                # Hit box spans the font size, not the glyph ascent and descent.
                rect = (
                    center_x - width / 2,
                    current_y,
                    center_x + width / 2,
                    current_y + layout.link_size,
                )
                cover.add_link(rect, start_page_index, fit="Fit")
                links.append(CoverLink(label=label, page_index=start_page_index, rect=rect))
                current_y -= layout.link_advance

            return OutputDocument(
                pdf_bytes=output.serialize(),
                page_count=output.page_count,
                links=links,
            )
        finally:
            output.close()
