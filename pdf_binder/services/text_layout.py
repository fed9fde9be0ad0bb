from __future__ import annotations

from pdf_binder.domain.ports import FontMetrics


def wrap_text(text: str, font: FontMetrics, size: float, max_width: float) -> list[str]:
    lines: list[str] = []
    current_line = ""
    for word in text.split():
        candidate = f"{current_line} {word}" if current_line else word
        if font.width_of(candidate, size) <= max_width:
            current_line = candidate
            continue
        if current_line:
            lines.append(current_line)
        current_line = word
    if current_line:
        lines.append(current_line)
    return lines
