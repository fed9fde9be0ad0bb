from __future__ import annotations

from pdf_binder.domain.models import MergeRequest, MergeResult
from pdf_binder.services.cover_assembler import CoverAssembler
from pdf_binder.services.naming_utils import normalize_output_name


class MergeService:
    def __init__(self, assembler: CoverAssembler) -> None:
        self.assembler = assembler

    def merge(self, request: MergeRequest, output_name: str = "") -> MergeResult:
        output = self.assembler.assemble(request)
        return MergeResult(
            output_name=normalize_output_name(output_name),
            output_pdf=output.pdf_bytes,
            merged_pages=output.page_count,
            links=output.links,
        )
