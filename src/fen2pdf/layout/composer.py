"""
Module: layout.composer

Purpose:
    Compose a Study into page descriptions. Splits the positions into
    pages of one grid each, renders every board once, and places the
    header, footer, captions and coordinate labels.

Key Functions:
    - compose_study(): Main entry point for layout
    - page_count_for(): Pages needed for N positions
    - cell_origin(): Top-left corner of a grid cell
    - caption_width(): Wrap width for a board caption

Algorithm:
    1. Page i holds positions [i * capacity, (i + 1) * capacity)
    2. Positions fill the grid row-major; unused cells stay empty
    3. Boards are centred horizontally in their cell; the board plus
       the reserved caption block is centred vertically
    4. Captions go below the board unless they would cross the bottom
       content edge, then above. Every wrapped line is kept; captions
       longer than the reserved block only raise a warning

Dependencies:
    - PIL: Board images
    - layout.board: Board layout engine
    - layout.text: Caption wrapping

Used By:
    - fen2pdf.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from fen2pdf.core.models import ChessPosition, Study
from fen2pdf.images import GlyphProvider

from .board import layout_board, rasterize
from .config import LayoutConfig
from .models import BoardLayout, BoardPlacement, LayoutResult, PageDescription, TextPlacement
from .text import wrap_description

logger = logging.getLogger(__name__)

PT_TO_MM = 25.4 / 72.0
FILE_LABEL_OFFSET = 3.0   # board bottom to file label baseline
RANK_LABEL_OFFSET = 1.5   # rank label right edge to board left edge
ABOVE_CAPTION_GAP = 2.0   # last caption baseline to board top


def page_count_for(position_count: int, boards_per_page: int) -> int:
    """
    Number of pages needed (ceiling division).

    Example:
        >>> page_count_for(10, 9)
        2
    """
    return -(-position_count // boards_per_page)


def cell_origin(cell: int, config: LayoutConfig) -> Tuple[float, float]:
    """Top-left corner (x, y) of a grid cell, cells numbered row-major."""
    row, column = divmod(cell, config.columns)
    return (
        config.margin_left + column * config.cell_width,
        config.margin_top + row * config.cell_height,
    )


def caption_width(placement: BoardPlacement, config: LayoutConfig) -> float:
    """Width from the board's left edge to its cell's right edge."""
    cell_x, _ = cell_origin(placement.cell, config)
    return cell_x + config.cell_width - placement.x


def compose_study(
    study: Study,
    glyphs: GlyphProvider,
    config: Optional[LayoutConfig] = None,
) -> LayoutResult:
    """
    Lay out a study onto pages.

    Each position is rendered exactly once, in document order.

    Args:
        study: Parsed study
        glyphs: Piece glyph provider for the renderer
        config: Layout configuration (default A4, 3x3)

    Returns:
        LayoutResult with ceil(N / capacity) pages

    Raises:
        GlyphNotFoundError: If a board contains a symbol without a glyph

    Example:
        >>> result = compose_study(study, FontGlyphProvider())
        >>> result.pages[-1].labels_of("footer")[0].text
        'page 2 of 2'
    """
    config = config or LayoutConfig()
    capacity = config.boards_per_page
    positions = study.positions
    total_pages = page_count_for(len(positions), capacity)
    warnings: List[str] = []

    pages: List[PageDescription] = []
    for page_index in range(total_pages):
        chunk = positions[page_index * capacity:(page_index + 1) * capacity]
        pages.append(_compose_page(study.name, page_index, total_pages, chunk, glyphs, config, warnings))

    logger.info(f"Composed {len(positions)} boards onto {total_pages} pages")
    return LayoutResult(title=study.name, pages=tuple(pages), warnings=warnings)


def _compose_page(
    title: str,
    page_index: int,
    total_pages: int,
    chunk: Sequence[ChessPosition],
    glyphs: GlyphProvider,
    config: LayoutConfig,
    warnings: List[str],
) -> PageDescription:
    """Lay out one page of up to one grid of positions."""
    labels: List[TextPlacement] = [
        TextPlacement(
            text=title,
            x=config.page_width / 2,
            y=config.header_y,
            font_size=config.header_font_size,
            kind="header",
            align="center",
        )
    ]
    boards: List[BoardPlacement] = []

    for cell, position in enumerate(chunk):
        layout = layout_board(position, config.board_pixels)
        placement = _place_board(cell, position, layout, glyphs, config)
        boards.append(placement)
        labels.extend(_coordinate_labels(placement, layout, config))
        labels.extend(_caption_labels(placement, config, warnings))
        logger.debug(
            f"Page {page_index + 1}, cell {cell}: position {position.number} "
            f"at ({placement.x:.1f}, {placement.y:.1f})mm"
        )

    labels.append(
        TextPlacement(
            text=f"page {page_index + 1} of {total_pages}",
            x=config.page_width / 2,
            y=config.footer_y,
            font_size=config.footer_font_size,
            kind="footer",
            align="center",
        )
    )
    return PageDescription(index=page_index, boards=tuple(boards), labels=tuple(labels))


def _place_board(
    cell: int,
    position: ChessPosition,
    layout: BoardLayout,
    glyphs: GlyphProvider,
    config: LayoutConfig,
) -> BoardPlacement:
    """Render a board and centre it in its grid cell."""
    cell_x, cell_y = cell_origin(cell, config)
    block_height = (
        config.board_size_mm
        + config.description_gap
        + config.max_description_lines * config.description_line_height
    )
    x = cell_x + (config.cell_width - config.board_size_mm) / 2
    y = cell_y + max(0.0, (config.cell_height - block_height) / 2)
    return BoardPlacement(
        position=position,
        image=rasterize(layout, glyphs),
        x=x,
        y=y,
        size=config.board_size_mm,
        cell=cell,
    )


def _coordinate_labels(
    placement: BoardPlacement,
    layout: BoardLayout,
    config: LayoutConfig,
) -> List[TextPlacement]:
    """File letters under the board, rank digits left of it."""
    square_mm = placement.size / 8
    # Baseline sits about a third of the font height below the square centre
    baseline_shift = config.coordinate_font_size * PT_TO_MM * 0.35

    labels: List[TextPlacement] = []
    for label in layout.labels:
        if label.edge == "bottom":
            labels.append(TextPlacement(
                text=label.text,
                x=placement.x + (label.index + 0.5) * square_mm,
                y=placement.bottom + FILE_LABEL_OFFSET,
                font_size=config.coordinate_font_size,
                kind="file",
                align="center",
            ))
        else:
            labels.append(TextPlacement(
                text=label.text,
                x=placement.x - RANK_LABEL_OFFSET,
                y=placement.y + (label.index + 0.5) * square_mm + baseline_shift,
                font_size=config.coordinate_font_size,
                kind="rank",
                align="right",
            ))
    return labels


def _caption_labels(
    placement: BoardPlacement,
    config: LayoutConfig,
    warnings: List[str],
) -> List[TextPlacement]:
    """Numbered description lines for a board."""
    position = placement.position
    text = f"{position.number}. {position.description}".strip()
    lines = wrap_description(text, caption_width(placement, config), config.description_font_size)

    if len(lines) > config.max_description_lines:
        message = (
            f"Description of position {position.number} needs {len(lines)} lines, "
            f"{config.max_description_lines} reserved; it may overlap the next row"
        )
        logger.warning(message)
        warnings.append(message)

    step = config.description_line_height
    first = placement.bottom + config.description_gap
    last = first + (len(lines) - 1) * step
    if last > config.content_bottom:
        last = placement.y - ABOVE_CAPTION_GAP
        first = last - (len(lines) - 1) * step

    return [
        TextPlacement(
            text=line,
            x=placement.x,
            y=first + i * step,
            font_size=config.description_font_size,
            kind="description",
        )
        for i, line in enumerate(lines)
    ]
