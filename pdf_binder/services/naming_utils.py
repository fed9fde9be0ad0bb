from __future__ import annotations

import re

DEFAULT_OUTPUT_NAME = "merged.pdf"

PDF_SUFFIX_PATTERN = re.compile(r"\.pdf$", flags=re.IGNORECASE)


def has_pdf_suffix(file_name: str) -> bool:
    return PDF_SUFFIX_PATTERN.search(file_name) is not None


def default_display_name(file_name: str) -> str:
    return PDF_SUFFIX_PATTERN.sub("", file_name)


def normalize_output_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        return DEFAULT_OUTPUT_NAME
    if has_pdf_suffix(cleaned):
        return cleaned
    return f"{cleaned}.pdf"
