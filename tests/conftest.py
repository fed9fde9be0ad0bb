from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import fitz
import pytest

from pdf_binder.domain.errors import MalformedSourceError


def _build_pdf(pages: list[str], width: float = 595, height: float = 842) -> bytes:
    document = fitz.open()
    try:
        for text in pages:
            page = document.new_page(width=width, height=height)
            page.insert_text((72, 72), text)
        return document.tobytes(deflate=True, garbage=3)
    finally:
        document.close()


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    return _build_pdf


@pytest.fixture
def single_page_pdf() -> bytes:
    return _build_pdf(["Single page"])


@pytest.fixture
def three_page_pdf() -> bytes:
    return _build_pdf(["Alpha page 1", "Alpha page 2", "Alpha page 3"])


@pytest.fixture
def real_world_fixture_paths() -> list[Path]:
    base = Path(__file__).parent / "fixtures" / "real_world"
    base.mkdir(parents=True, exist_ok=True)

    paths = [
        base / "application_letter.pdf",
        base / "transcript_2024.pdf",
        base / "publications.pdf",
    ]

    if all(path.exists() for path in paths):
        return paths

    docs_content = {
        paths[0]: ["Dear committee,\nPlease find my application enclosed."],
        paths[1]: ["Transcript of records 2024", "Grades continued"],
        paths[2]: ["Publication list", "Conference papers", "Journal articles"],
    }

    for path, pages in docs_content.items():
        path.write_bytes(_build_pdf(pages))

    return paths


class FixedWidthFont:
    """Every character is ``size * ratio`` points wide."""

    def __init__(self, name: str, ratio: float = 0.5) -> None:
        self.name = name
        self.ratio = ratio

    def width_of(self, text: str, size: float) -> float:
        return len(text) * size * self.ratio


@dataclass
class FakeSource:
    page_count: int
    ordinal: int = 0
    closed: bool = False

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeSource:
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        self.close()


@dataclass
class FakePage:
    width: float
    height: float
    texts: list[dict] = field(default_factory=list)
    links: list[dict] = field(default_factory=list)

    def draw_text(self, text, *, x, y, size, font, color) -> None:
        self.texts.append(
            {"text": text, "x": x, "y": y, "size": size, "font": font.name, "color": color}
        )

    def add_link(self, rect, destination_page_index, fit="Fit") -> None:
        self.links.append({"rect": rect, "page": destination_page_index, "fit": fit})


@dataclass
class FakeOutput:
    pages: list[object] = field(default_factory=list)
    closed: bool = False
    serialize_error: Exception | None = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_page(self, width, height) -> FakePage:
        page = FakePage(width=width, height=height)
        self.pages.append(page)
        return page

    def copy_pages_from(self, source: FakeSource, page_indices: list[int]) -> int:
        self.pages.extend(("copied", source.ordinal, index) for index in page_indices)
        return len(page_indices)

    def embed_standard_font(self, font_id: str) -> FixedWidthFont:
        return FixedWidthFont(font_id)

    def serialize(self) -> bytes:
        if self.serialize_error is not None:
            raise self.serialize_error
        return f"%FAKE {len(self.pages)} pages".encode("ascii")

    def close(self) -> None:
        self.closed = True


class FakeBackend:
    """In-memory backend where a source PDF is ``b"pages=N"``."""

    def __init__(self) -> None:
        self.outputs: list[FakeOutput] = []
        self.sources: list[FakeSource] = []
        self.serialize_error: Exception | None = None

    def create_document(self) -> FakeOutput:
        output = FakeOutput(serialize_error=self.serialize_error)
        self.outputs.append(output)
        return output

    def open_document(self, pdf_bytes: bytes) -> FakeSource:
        if not pdf_bytes.startswith(b"pages="):
            raise MalformedSourceError("Unable to read PDF")
        source = FakeSource(
            page_count=int(pdf_bytes.split(b"=", 1)[1]), ordinal=len(self.sources)
        )
        self.sources.append(source)
        return source

    @property
    def cover(self) -> FakePage:
        page = self.outputs[-1].pages[0]
        assert isinstance(page, FakePage)
        return page


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def fixed_font() -> FixedWidthFont:
    return FixedWidthFont("fixed")
