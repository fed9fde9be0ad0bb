from __future__ import annotations

import logging
from dataclasses import replace

from pdf_binder.adapters.pymupdf_adapter import PyMuPdfAdapter
from pdf_binder.domain.errors import DuplicateFileError, InvalidInputError
from pdf_binder.domain.models import InputDocument, MergeRequest
from pdf_binder.infrastructure.config import AppConfig
from pdf_binder.services.naming_utils import default_display_name, has_pdf_suffix

logger = logging.getLogger(__name__)

SAMPLE_DOCUMENTS = [
    ("the first pdf", "This is the first dummy PDF."),
    ("the second pdf", "This is the second dummy PDF."),
]


class WorkspaceService:
    def __init__(self, adapter: PyMuPdfAdapter, config: AppConfig) -> None:
        self.adapter = adapter
        self.config = config

    def stage_files(
        self,
        uploaded_files: list[tuple[str, bytes]],
        existing: list[InputDocument] | None = None,
    ) -> list[InputDocument]:
        if not uploaded_files:
            return []

        total_size = sum(len(content) for _, content in uploaded_files)
        if total_size > self.config.max_batch_size_bytes:
            raise InvalidInputError(
                f"Batch size exceeds limit of {self.config.max_batch_size_mb} MB"
            )

        seen = {item.original_file_name for item in existing or []}
        staged: list[InputDocument] = []
        for name, content in uploaded_files:
            if not has_pdf_suffix(name):
                raise InvalidInputError(
                    f"Invalid file type for {name}. Only PDF files are allowed."
                )
            if len(content) > self.config.max_pdf_size_bytes:
                raise InvalidInputError(
                    f"{name} exceeds per-file limit of {self.config.max_pdf_size_mb} MB"
                )
            if name in seen:
                raise DuplicateFileError(f'File "{name}" is already selected or added.')
            page_count = self.adapter.get_page_count(content)
            logger.info("Staged %s (%d page(s))", name, page_count)
            seen.add(name)
            staged.append(
                InputDocument(
                    display_name=default_display_name(name),
                    original_file_name=name,
                    content=content,
                )
            )
        return staged

    def sample_documents(self, existing: list[InputDocument] | None = None) -> list[InputDocument]:
        taken = {item.original_file_name for item in existing or []}
        samples: list[InputDocument] = []
        for display_name, text in SAMPLE_DOCUMENTS:
            file_name = f"{display_name}.pdf"
            if file_name in taken:
                continue
            samples.append(
                InputDocument(
                    display_name=display_name,
                    original_file_name=file_name,
                    content=self.adapter.create_sample_pdf(text),
                )
            )
        return samples

    @staticmethod
    def _check_index(documents: list[InputDocument], index: int) -> None:
        if index < 0 or index >= len(documents):
            raise InvalidInputError(f"No document at position {index + 1}.")

    def rename(
        self, documents: list[InputDocument], index: int, display_name: str
    ) -> list[InputDocument]:
        self._check_index(documents, index)
        renamed = list(documents)
        renamed[index] = replace(documents[index], display_name=display_name)
        return renamed

    def remove(self, documents: list[InputDocument], index: int) -> list[InputDocument]:
        self._check_index(documents, index)
        return [item for position, item in enumerate(documents) if position != index]

    def preview_labels(self, documents: list[InputDocument]) -> list[str]:
        return [item.label for item in documents]

    def build_request(
        self,
        documents: list[InputDocument],
        cover_title: str = "",
        cover_description: str = "",
    ) -> MergeRequest:
        return MergeRequest(
            documents=list(documents),
            cover_title=cover_title.strip(),
            cover_description=cover_description.strip(),
        )
