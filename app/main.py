from __future__ import annotations

import base64
import logging

import streamlit as st

from pdf_binder.adapters.pymupdf_adapter import PyMuPdfAdapter
from pdf_binder.domain.errors import PdfBinderError
from pdf_binder.domain.models import InputDocument
from pdf_binder.infrastructure.config import AppConfig
from pdf_binder.infrastructure.log_setup import configure_logging
from pdf_binder.services.cover_assembler import CoverAssembler
from pdf_binder.services.merge_service import MergeService
from pdf_binder.services.naming_utils import DEFAULT_OUTPUT_NAME
from pdf_binder.services.workspace_service import WorkspaceService

logger = logging.getLogger("pdf_binder.app")

TITLE_PLACEHOLDER = "This is an example title"
DESCRIPTION_PLACEHOLDER = (
    "This is an example description. This is the application for PHD position at ... lab ....."
)


def _init_services() -> tuple[AppConfig, PyMuPdfAdapter, WorkspaceService, MergeService]:
    config = AppConfig()
    configure_logging(config.log_level)
    adapter = PyMuPdfAdapter()
    workspace_service = WorkspaceService(adapter, config)
    merge_service = MergeService(CoverAssembler(adapter, config.cover_layout()))
    return config, adapter, workspace_service, merge_service


def _init_state() -> None:
    st.session_state.setdefault("documents", [])
    st.session_state.setdefault("merged_pdf_bytes", b"")
    st.session_state.setdefault("merged_pdf_name", DEFAULT_OUTPUT_NAME)
    st.session_state.setdefault("cover_thumbnail", b"")
    st.session_state.setdefault("upload_token", 0)


def _clear_output() -> None:
    st.session_state.merged_pdf_bytes = b""
    st.session_state.cover_thumbnail = b""


def _thumbnail_html(image_bytes: bytes) -> str:
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return (
        "<div style='border:1px solid rgba(120,120,120,0.35);"
        " border-radius:10px;padding:8px;background:rgba(250,250,250,0.75);'>"
        "<div style='text-align:center;font-size:0.85rem;"
        "font-weight:600;margin-bottom:6px;'>Cover page</div>"
        "<div style='display:flex;justify-content:center;'>"
        f"<img src='data:image/png;base64,{encoded}' "
        "style='width:100%;height:auto;border-radius:6px;'/>"
        "</div>"
        "</div>"
    )


def _upload_section(config: AppConfig, workspace_service: WorkspaceService) -> None:
    st.subheader("Add PDFs", anchor=False)
    uploaded = st.file_uploader(
        (
            "Select one or more PDFs "
            f"(max {config.max_pdf_size_mb} MB each, "
            f"{config.max_batch_size_mb} MB total)"
        ),
        type=["pdf"],
        accept_multiple_files=True,
        key=f"upload_{st.session_state.upload_token}",
    )

    col_add, col_samples, col_reset = st.columns(3)
    with col_add:
        if st.button("Add Files", type="primary", use_container_width=True):
            if not uploaded:
                st.warning("No files selected to add.")
            else:
                try:
                    files = [(item.name, item.getvalue()) for item in uploaded]
                    staged = workspace_service.stage_files(files, st.session_state.documents)
                    st.session_state.documents = st.session_state.documents + staged
                    st.session_state.upload_token += 1
                    _clear_output()
                    st.rerun()
                except PdfBinderError as exc:
                    logger.warning("Rejected upload: %s", exc)
                    st.error(str(exc))
    with col_samples:
        if st.button("Load Sample PDFs", use_container_width=True):
            samples = workspace_service.sample_documents(st.session_state.documents)
            st.session_state.documents = st.session_state.documents + samples
            _clear_output()
            st.rerun()
    with col_reset:
        if st.button("Reset", use_container_width=True):
            st.session_state.documents = []
            _clear_output()
            st.rerun()


def _document_list(workspace_service: WorkspaceService) -> None:
    documents: list[InputDocument] = st.session_state.documents
    st.subheader("Added Files", anchor=False)
    if not documents:
        st.info("No PDFs added yet.")
        return

    for index, document in enumerate(documents):
        name_col, input_col, remove_col = st.columns([2, 3, 1])
        with name_col:
            st.markdown(f"**{document.original_file_name}**")
        with input_col:
            display_name = st.text_input(
                "Name for this document",
                value=document.display_name,
                placeholder="Enter name for this document",
                key=f"display_name_{document.original_file_name}",
                label_visibility="collapsed",
            )
            if display_name != document.display_name:
                st.session_state.documents = workspace_service.rename(
                    st.session_state.documents, index, display_name
                )
                _clear_output()
        with remove_col:
            if st.button("Remove", key=f"remove_{document.original_file_name}"):
                st.session_state.documents = workspace_service.remove(
                    st.session_state.documents, index
                )
                _clear_output()
                st.rerun()


def _cover_preview(title: str, description: str, labels: list[str]) -> None:
    st.subheader("Cover Preview", anchor=False)
    st.markdown(f"### {title or TITLE_PLACEHOLDER}")
    st.write(description or DESCRIPTION_PLACEHOLDER)
    st.markdown("**Category**")
    if labels:
        st.markdown("\n".join(f"- {label}" for label in labels))


def _generate_section(
    adapter: PyMuPdfAdapter,
    workspace_service: WorkspaceService,
    merge_service: MergeService,
    cover_title: str,
    cover_description: str,
) -> None:
    output_name = st.text_input("Output file name", placeholder=DEFAULT_OUTPUT_NAME)
    if st.button("Generate PDF", type="primary", use_container_width=True):
        documents: list[InputDocument] = st.session_state.documents
        if not documents:
            st.warning("Please add at least one PDF file.")
            return
        try:
            request = workspace_service.build_request(documents, cover_title, cover_description)
            with st.spinner("Merging PDFs..."):
                result = merge_service.merge(request, output_name)
            st.session_state.merged_pdf_bytes = result.output_pdf
            st.session_state.merged_pdf_name = result.output_name
            st.session_state.cover_thumbnail = adapter.render_page_thumbnail(
                result.output_pdf, 0, zoom=0.5
            )
            logger.info(
                "Generated %s with %d page(s) and %d link(s)",
                result.output_name,
                result.merged_pages,
                len(result.links),
            )
        except PdfBinderError as exc:
            logger.exception("PDF generation failed")
            st.error(f"An error occurred while generating the PDF: {exc}")
            _clear_output()

    if st.session_state.merged_pdf_bytes:
        st.download_button(
            f"Download {st.session_state.merged_pdf_name}",
            data=st.session_state.merged_pdf_bytes,
            file_name=st.session_state.merged_pdf_name,
            mime="application/pdf",
            type="primary",
            use_container_width=True,
        )
        if st.session_state.cover_thumbnail:
            st.markdown(
                _thumbnail_html(st.session_state.cover_thumbnail), unsafe_allow_html=True
            )


def main() -> None:
    st.set_page_config(page_title="PDF Binder", layout="wide")
    st.title("PDF Binder", anchor=False)
    st.caption("Merge PDFs behind a cover page with a clickable index.")

    config, adapter, workspace_service, merge_service = _init_services()
    _init_state()

    left, right = st.columns([3, 2])
    with left:
        _upload_section(config, workspace_service)
        _document_list(workspace_service)
        st.subheader("Cover Page", anchor=False)
        cover_title = st.text_input("Cover title", placeholder=TITLE_PLACEHOLDER)
        cover_description = st.text_area("Cover description", placeholder=DESCRIPTION_PLACEHOLDER)
        _generate_section(adapter, workspace_service, merge_service, cover_title, cover_description)
    with right:
        _cover_preview(
            cover_title.strip(),
            cover_description.strip(),
            workspace_service.preview_labels(st.session_state.documents),
        )


if __name__ == "__main__":
    main()
