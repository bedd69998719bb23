"""
Module: layout.board

Purpose:
    Board layout engine. Maps absolute squares to display positions for
    the side to move, builds the ordered draw list for a position and
    rasterises it to an RGB image.

Key Functions:
    - to_display() / to_board(): Orientation transform (pure)
    - is_light(): Checkerboard colouring in absolute terms
    - layout_board(): Draw list for one position
    - rasterize(): RGB image for a computed draw list
    - render_board(): layout_board() + rasterize() for one position

Coordinate System:
    Absolute squares use file 0..7 (a..h) and rank 0..7 (1..8).
    Display positions use column 0..7 from the left and row 0..7 from
    the top. White to move shows a1 bottom-left; black to move turns
    the board 180 degrees so h8 is bottom-left.

Dependencies:
    - PIL: Rasterisation
    - fen2pdf.images: Glyph lookup

Used By:
    - layout.composer: One render per position
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from PIL import Image, ImageDraw

from fen2pdf.core.models import ChessPosition
from fen2pdf.core.models.fen import FILE_LETTERS, expand_rank, split_ranks
from fen2pdf.images import GlyphProvider

from .config import DEFAULT_BOARD_PIXELS
from .models import Box, BoardLayout, BoardSquare, CoordinateLabel, PieceDraw

logger = logging.getLogger(__name__)

PIECE_SCALE = 0.9

LIGHT_SQUARE_RGB = (255, 255, 255)
DARK_SQUARE_RGB = (221, 221, 221)


def to_display(file: int, rank: int, black_to_move: bool) -> Tuple[int, int]:
    """
    Map an absolute square to its display (column, row).

    Example:
        >>> to_display(0, 0, False)   # a1, white to move
        (0, 7)
        >>> to_display(0, 0, True)    # a1, black to move
        (7, 0)
    """
    if black_to_move:
        return 7 - file, rank
    return file, 7 - rank


def to_board(column: int, row: int, black_to_move: bool) -> Tuple[int, int]:
    """Map a display (column, row) back to the absolute (file, rank)."""
    if black_to_move:
        return 7 - column, row
    return column, 7 - row


def is_light(file: int, rank: int) -> bool:
    """Whether an absolute square is light (a1 is dark, h1 is light)."""
    return (file + rank) % 2 == 1


def square_edges(size: int) -> List[int]:
    """
    Pixel edges of the 8 columns (or rows) of a board image.

    Edges are integer so the squares exactly fill the image even when
    size is not a multiple of 8.
    """
    return [i * size // 8 for i in range(9)]


def piece_box(box: Box, scale: float = PIECE_SCALE) -> Box:
    """Centre a box of scale * square size inside a square."""
    left, top, right, bottom = box
    width = max(1, int((right - left) * scale))
    height = max(1, int((bottom - top) * scale))
    dx = (right - left - width) // 2
    dy = (bottom - top - height) // 2
    return left + dx, top + dy, left + dx + width, top + dy + height


def read_placement(placement: str) -> Dict[Tuple[int, int], str]:
    """
    Read a placement field into {(file, rank): symbol}.

    FEN lists rank 8 first. Assumes the placement was validated.
    """
    pieces: Dict[Tuple[int, int], str] = {}
    for fen_row, rank_text in enumerate(split_ranks(placement)):
        rank = 7 - fen_row
        for file, symbol in enumerate(expand_rank(rank_text)):
            if symbol is not None:
                pieces[(file, rank)] = symbol
    return pieces


def layout_board(position: ChessPosition, size_px: int = DEFAULT_BOARD_PIXELS) -> BoardLayout:
    """
    Compute the draw list for a position.

    Args:
        position: Position to lay out
        size_px: Board image edge length in pixels

    Returns:
        BoardLayout with 64 squares, the pieces and 16 coordinate labels,
        all in display order for the side to move
    """
    if size_px < 8:
        raise ValueError(f"size_px must be at least 8: {size_px}")

    black = position.black_to_move
    occupied = read_placement(position.placement)
    edges = square_edges(size_px)

    squares: List[BoardSquare] = []
    pieces: List[PieceDraw] = []
    for row in range(8):
        for column in range(8):
            file, rank = to_board(column, row, black)
            square = BoardSquare(
                file=file,
                rank=rank,
                column=column,
                row=row,
                box=(edges[column], edges[row], edges[column + 1], edges[row + 1]),
                light=is_light(file, rank),
                piece=occupied.get((file, rank)),
            )
            squares.append(square)
            if square.piece is not None:
                pieces.append(PieceDraw(square.piece, square, piece_box(square.box)))

    labels: List[CoordinateLabel] = []
    for column in range(8):
        file, _ = to_board(column, 7, black)
        labels.append(CoordinateLabel(FILE_LETTERS[file], "bottom", column))
    for row in range(8):
        _, rank = to_board(0, row, black)
        labels.append(CoordinateLabel(str(rank + 1), "left", row))

    return BoardLayout(
        size=size_px,
        black_to_move=black,
        squares=tuple(squares),
        pieces=tuple(pieces),
        labels=tuple(labels),
    )


def render_board(
    position: ChessPosition,
    glyphs: GlyphProvider,
    size_px: int = DEFAULT_BOARD_PIXELS,
) -> Image.Image:
    """
    Render a position to an RGB board image.

    Args:
        position: Position to render
        glyphs: Piece glyph provider
        size_px: Image edge length in pixels

    Returns:
        size_px x size_px PIL Image in mode "RGB"

    Raises:
        GlyphNotFoundError: If a piece symbol has no glyph
    """
    img = rasterize(layout_board(position, size_px), glyphs)
    logger.debug(f"Rendered board {position.number}")
    return img


def rasterize(layout: BoardLayout, glyphs: GlyphProvider) -> Image.Image:
    """
    Draw a computed board layout.

    Squares are filled first, then pieces are alpha-composited into
    their boxes. The result never carries an alpha channel.

    Raises:
        GlyphNotFoundError: If a piece symbol has no glyph
    """
    size_px = layout.size
    img = Image.new("RGB", (size_px, size_px), LIGHT_SQUARE_RGB)
    draw = ImageDraw.Draw(img)
    for square in layout.squares:
        if not square.light:
            left, top, right, bottom = square.box
            draw.rectangle((left, top, right - 1, bottom - 1), fill=DARK_SQUARE_RGB)

    for piece in layout.pieces:
        left, top, right, bottom = piece.box
        glyph = glyphs.glyph_for(piece.symbol).convert("RGBA")
        glyph = glyph.resize((right - left, bottom - top), Image.Resampling.LANCZOS)
        img.paste(glyph, (left, top), glyph)

    logger.debug(
        f"Rasterized {len(layout.pieces)} pieces, "
        f"{'black' if layout.black_to_move else 'white'} perspective"
    )
    return img
