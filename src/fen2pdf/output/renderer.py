"""
Module: output.renderer

Purpose:
    Render a LayoutResult to PDF using ReportLab.
    Each PageDescription becomes one PDF page with board images and
    text placed at their specified positions.

Key Functions:
    - render_to_pdf(): Main rendering function
    - output_filename(): PDF file name for a study name

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - layout.models: LayoutResult, PageDescription

Used By:
    - fen2pdf.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import Optional

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from fen2pdf.layout.config import LayoutConfig
from fen2pdf.layout.models import BoardPlacement, LayoutResult, PageDescription, TextPlacement

logger = logging.getLogger(__name__)

FONT_NAME = "Times-Roman"
PDF_EXTENSION = ".pdf"


def output_filename(study_name: str) -> str:
    """
    Derive the PDF file name for a study.

    Whitespace runs become underscores; dots and path separators are
    removed.

    Example:
        >>> output_filename("WM25 Endgames v1.2")
        'WM25_Endgames_v12.pdf'
    """
    stem = re.sub(r"\s+", "_", study_name.strip())
    stem = re.sub(r"[./\\]", "", stem) or "study"
    return f"{stem}{PDF_EXTENSION}"


def render_to_pdf(
    layout: LayoutResult,
    output_path: Path,
    config: Optional[LayoutConfig] = None,
) -> None:
    """
    Render layout result to PDF file.

    The document is written to a temporary sibling file and moved into
    place once complete, so a failed render leaves no file behind.

    Args:
        layout: Layout result from the compositor
        output_path: Path to write PDF
        config: Layout configuration (page size)

    Raises:
        OSError: If the PDF cannot be written

    Example:
        >>> render_to_pdf(layout, Path("output/WM25.pdf"))
    """
    config = config or LayoutConfig()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    partial_path = output_path.with_name(output_path.name + ".part")

    page_width_pt = config.page_width * mm
    page_height_pt = config.page_height * mm

    try:
        c = canvas.Canvas(str(partial_path), pagesize=(page_width_pt, page_height_pt))
        c.setTitle(layout.title)
        c.setCreator(_get_creator())

        for page in layout.pages:
            _render_page(c, page, page_height_pt)
            c.showPage()

        c.save()
        partial_path.replace(output_path)
    except BaseException:
        partial_path.unlink(missing_ok=True)
        raise

    logger.info(f"Rendered {layout.page_count} pages to {output_path}")


def _get_creator() -> str:
    from fen2pdf import __version__
    return f"fen2pdf {__version__}"


def _render_page(
    c: canvas.Canvas,
    page: PageDescription,
    page_height_pt: float,
) -> None:
    """
    Render a single page to the canvas.

    Args:
        c: ReportLab canvas
        page: Page description with boards and labels
        page_height_pt: Page height in points
    """
    for board in page.boards:
        _draw_board(c, board, page_height_pt)

    for label in page.labels:
        _draw_text(c, label, page_height_pt)


def _draw_board(
    c: canvas.Canvas,
    board: BoardPlacement,
    page_height_pt: float,
) -> None:
    """Draw one board image at its top-down mm position."""
    size_pt = board.size * mm
    y_pt = _transform_y(page_height_pt, board.y, board.size)
    c.drawImage(
        _pil_to_reader(board.image),
        board.x * mm,
        y_pt,
        width=size_pt,
        height=size_pt,
    )


def _draw_text(
    c: canvas.Canvas,
    label: TextPlacement,
    page_height_pt: float,
) -> None:
    """Draw one text line; label.y is its baseline from the page top."""
    x_pt = label.x * mm
    y_pt = page_height_pt - label.y * mm

    c.setFont(FONT_NAME, label.font_size)
    if label.align == "center":
        c.drawCentredString(x_pt, y_pt, label.text)
    elif label.align == "right":
        c.drawRightString(x_pt, y_pt, label.text)
    else:
        c.drawString(x_pt, y_pt, label.text)


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    buf.seek(0)
    return ImageReader(buf)


def _transform_y(page_height_pt: float, y_mm_top: float, height_mm: float) -> float:
    """
    Convert a top-down mm Y coordinate to bottom-up PDF points.

    Args:
        page_height_pt: Page height in points
        y_mm_top: Y position of the element's top edge in mm
        height_mm: Height of element in mm

    Returns:
        Y position of the element's bottom edge, from the page bottom, in points
    """
    return page_height_pt - (y_mm_top + height_mm) * mm
