import pytest

from pdf_binder.adapters.pymupdf_adapter import PyMuPdfAdapter
from pdf_binder.infrastructure.config import AppConfig
from pdf_binder.services.cover_assembler import CoverAssembler
from pdf_binder.services.merge_service import MergeService
from pdf_binder.services.workspace_service import WorkspaceService


@pytest.mark.e2e
def test_service_level_e2e_smoke(real_world_fixture_paths) -> None:
    adapter = PyMuPdfAdapter()
    config = AppConfig(max_pdf_size_mb=50, max_batch_size_mb=100)

    workspace = WorkspaceService(adapter, config)
    merge = MergeService(CoverAssembler(adapter, config.cover_layout()))

    uploads = [(path.name, path.read_bytes()) for path in real_world_fixture_paths]
    documents = workspace.stage_files(uploads[:2])
    documents = documents + workspace.stage_files(uploads[2:], documents)
    documents = documents + workspace.sample_documents(documents)
    documents = workspace.rename(documents, 0, "Cover Letter")
    documents = workspace.remove(documents, 3)

    assert workspace.preview_labels(documents) == [
        "Cover Letter",
        "transcript_2024",
        "publications",
        "the second pdf",
    ]

    request = workspace.build_request(
        documents,
        cover_title=" Application Bundle ",
        cover_description="All documents requested by the admissions office.",
    )
    result = merge.merge(request, "Application Bundle.PDF")

    assert result.output_name == "Application Bundle.PDF"
    assert result.merged_pages == 1 + 1 + 2 + 3 + 1
    assert adapter.get_page_count(result.output_pdf) == result.merged_pages
    assert [link.label for link in result.links] == workspace.preview_labels(documents)
    assert [target.page_index for target in adapter.read_cover_links(result.output_pdf)] == [
        1,
        2,
        4,
        7,
    ]
    assert "This is the second dummy PDF." in adapter.extract_text_by_page(result.output_pdf)[7]
