"""
Module: layout

Purpose:
    Board rendering and page composition.
    Converts a Study into positioned page descriptions.

Key Functions:
    - compose_study(): Main entry point for layout
    - render_board(): Render one position to an RGB image
    - layout_board(): Draw list for one position
    - to_display() / to_board(): Orientation transform

Key Classes:
    - LayoutConfig: Configuration for page layout
    - PageDescription: Single page layout
    - LayoutResult: All pages plus warnings

Dependencies:
    - PIL: Image manipulation
    - fen2pdf.core.models: ChessPosition, Study
    - fen2pdf.images: GlyphProvider

Used By:
    - fen2pdf.controller: Main build controller
"""

from .config import LayoutConfig
from .models import (
    BoardSquare,
    PieceDraw,
    CoordinateLabel,
    BoardLayout,
    BoardPlacement,
    TextPlacement,
    PageDescription,
    LayoutResult,
)
from .board import layout_board, rasterize, render_board, to_board, to_display, is_light
from .composer import compose_study, page_count_for
from .text import wrap_description

__all__ = [
    # Config
    "LayoutConfig",
    # Models
    "BoardSquare",
    "PieceDraw",
    "CoordinateLabel",
    "BoardLayout",
    "BoardPlacement",
    "TextPlacement",
    "PageDescription",
    "LayoutResult",
    # Functions
    "layout_board",
    "rasterize",
    "render_board",
    "to_board",
    "to_display",
    "is_light",
    "compose_study",
    "page_count_for",
    "wrap_description",
]
