from __future__ import annotations

from dataclasses import dataclass, field

Color = tuple[float, float, float]
Rect = tuple[float, float, float, float]


@dataclass(frozen=True)
class InputDocument:
    display_name: str
    original_file_name: str
    content: bytes = field(repr=False)

    @property
    def label(self) -> str:
        trimmed = self.display_name.strip()
        return trimmed if trimmed else self.original_file_name


@dataclass(frozen=True)
class MergeRequest:
    documents: list[InputDocument]
    cover_title: str = ""
    cover_description: str = ""


@dataclass(frozen=True)
class CoverLayout:
    # Vertical positions are baselines measured up from the bottom edge.
    page_width: float = 612
    page_height: float = 792
    top_margin: float = 100
    title_size: float = 30
    title_advance: float = 50
    description_size: float = 16
    description_line_advance: float = 20
    description_gap: float = 30
    description_side_margin: float = 100
    heading_text: str = "Category"
    heading_size: float = 24
    heading_advance: float = 40
    link_size: float = 18
    link_advance: float = 30
    text_color: Color = (0.0, 0.0, 0.0)
    link_color: Color = (0.0, 0.0, 1.0)


@dataclass(frozen=True)
class CoverLink:
    label: str
    page_index: int
    rect: Rect


@dataclass(frozen=True)
class OutputDocument:
    pdf_bytes: bytes = field(repr=False)
    page_count: int
    links: list[CoverLink] = field(default_factory=list)


@dataclass(frozen=True)
class LinkTarget:
    page_index: int
    rect: Rect
    fit_mode: str


@dataclass(frozen=True)
class MergeResult:
    output_name: str
    output_pdf: bytes = field(repr=False)
    merged_pages: int
    links: list[CoverLink] = field(default_factory=list)
