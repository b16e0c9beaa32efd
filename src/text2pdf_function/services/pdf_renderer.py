"""
Plain text -> PDF renderer (fpdf2 core fonts, A4 portrait, flowing text).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from fpdf import FPDF
from fpdf.errors import FPDFException

from ..core.exceptions import RenderError

logger = logging.getLogger(__name__)

FONT_FAMILY = "Times"
FONT_SIZE_PT = 12
LINE_HEIGHT_MM = 5
# Core fonts only cover latin-1
CORE_FONT_ENCODING = "latin-1"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class RenderedDocument:
    path: str
    size: int
    page_count: int


class PdfRenderer:
    """Lays out text in a single multi-line cell and lets fpdf2 wrap and paginate it."""

    def __init__(self, font_family: str = FONT_FAMILY, font_size: int = FONT_SIZE_PT, line_height: float = LINE_HEIGHT_MM):
        self._font_family = font_family
        self._font_size = font_size
        self._line_height = line_height

    def render(self, text: str, path: str, creation_date: Optional[datetime] = None) -> RenderedDocument:
        """
        Write text to path as a PDF. A fixed creation date keeps output byte-identical
        for identical input. Raises RenderError.
        """
        printable = _printable(text)
        pdf = FPDF(orientation="P", unit="mm", format="A4")
        pdf.creation_date = _as_utc(creation_date)
        pdf.set_auto_page_break(auto=True, margin=20)
        try:
            pdf.add_page()
            pdf.set_font(self._font_family, size=self._font_size)
            if printable:
                pdf.multi_cell(0, self._line_height, printable)
            pdf.output(path)
            size = os.path.getsize(path)
        except (OSError, FPDFException) as e:
            raise RenderError("Failed to write PDF", e) from e

        doc = RenderedDocument(path=path, size=size, page_count=pdf.page_no())
        logger.info(
            "PDF written",
            extra={"stage": "render", "path": path, "size": doc.size, "pages": doc.page_count, "status": "OK"},
        )
        return doc


def _printable(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.encode(CORE_FONT_ENCODING, "replace").decode(CORE_FONT_ENCODING)


def _as_utc(value: Optional[datetime]) -> datetime:
    if value is None:
        return EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
