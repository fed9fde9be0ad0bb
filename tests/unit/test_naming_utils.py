import pytest

from pdf_binder.services.naming_utils import (
    default_display_name,
    has_pdf_suffix,
    normalize_output_name,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("", "merged.pdf"),
        ("   ", "merged.pdf"),
        ("bundle", "bundle.pdf"),
        ("bundle.pdf", "bundle.pdf"),
        ("Bundle.PDF", "Bundle.PDF"),
        ("  application  ", "application.pdf"),
        ("report.pdf.txt", "report.pdf.txt.pdf"),
    ],
)
def test_normalize_output_name(name: str, expected: str) -> None:
    assert normalize_output_name(name) == expected


@pytest.mark.unit
def test_default_display_name_strips_extension_case_insensitively() -> None:
    assert default_display_name("Transcript.PDF") == "Transcript"
    assert default_display_name("cv.pdf") == "cv"
    assert default_display_name("notes.pdf.bak") == "notes.pdf.bak"


@pytest.mark.unit
def test_has_pdf_suffix() -> None:
    assert has_pdf_suffix("a.pdf")
    assert has_pdf_suffix("A.Pdf")
    assert not has_pdf_suffix("a.docx")
    assert not has_pdf_suffix("pdf")
