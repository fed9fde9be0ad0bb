from __future__ import annotations

import os
from dataclasses import dataclass

from pdf_binder.domain.models import CoverLayout


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _get_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class AppConfig:
    max_pdf_size_mb: int = _get_int_env("PDF_BINDER_MAX_PDF_MB", 50)
    max_batch_size_mb: int = _get_int_env("PDF_BINDER_MAX_BATCH_MB", 100)
    page_width: int = _get_int_env("PDF_BINDER_PAGE_WIDTH", 612)
    page_height: int = _get_int_env("PDF_BINDER_PAGE_HEIGHT", 792)
    log_level: str = _get_str_env("PDF_BINDER_LOG_LEVEL", "WARNING")

    @property
    def max_pdf_size_bytes(self) -> int:
        return self.max_pdf_size_mb * 1024 * 1024

    @property
    def max_batch_size_bytes(self) -> int:
        return self.max_batch_size_mb * 1024 * 1024

    def cover_layout(self) -> CoverLayout:
        return CoverLayout(page_width=self.page_width, page_height=self.page_height)
