"""
Module: layout.models

Purpose:
    Data models for board layout and page composition.
    Immutable dataclasses for the board draw list and for pages.

Key Classes:
    - BoardSquare: One square in board and display coordinates
    - PieceDraw: A piece glyph and its target box
    - CoordinateLabel: A file or rank label on a board edge
    - BoardLayout: Ordered draw list for one board
    - BoardPlacement: Rendered board positioned on a page
    - TextPlacement: Text positioned on a page
    - PageDescription: Complete page
    - LayoutResult: All pages plus diagnostics

Dependencies:
    - PIL: Image type
    - dataclasses (std)

Used By:
    - layout.board: Creates BoardLayouts
    - layout.composer: Creates PageDescriptions
    - output.renderer: Consumes LayoutResult
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

from PIL import Image

from fen2pdf.core.models import ChessPosition

Box = Tuple[int, int, int, int]
TextAlign = Literal["left", "center", "right"]
TextKind = Literal["header", "footer", "description", "file", "rank"]


@dataclass(frozen=True)
class BoardSquare:
    """
    One board square after the orientation transform.

    Attributes:
        file: Absolute file, 0 (a) to 7 (h)
        rank: Absolute rank, 0 (rank 1) to 7 (rank 8)
        column: Display column, 0 at the left
        row: Display row, 0 at the top
        box: Pixel rectangle (left, top, right, bottom), right/bottom exclusive
        light: Whether the square is a light square
        piece: FEN piece symbol on the square, or None
    """

    file: int
    rank: int
    column: int
    row: int
    box: Box
    light: bool
    piece: Optional[str] = None

    @property
    def name(self) -> str:
        """Algebraic square name like "e4"."""
        return f"{'abcdefgh'[self.file]}{self.rank + 1}"


@dataclass(frozen=True)
class PieceDraw:
    """
    A piece to composite onto the board.

    Attributes:
        symbol: FEN piece symbol
        square: Square the piece stands on
        box: Pixel rectangle the glyph is scaled into
    """

    symbol: str
    square: BoardSquare
    box: Box


@dataclass(frozen=True)
class CoordinateLabel:
    """
    A coordinate label along one board edge.

    Attributes:
        text: "a".."h" or "1".."8"
        edge: "bottom" for files, "left" for ranks
        index: Display column (bottom edge) or display row (left edge)
    """

    text: str
    edge: Literal["bottom", "left"]
    index: int


@dataclass(frozen=True)
class BoardLayout:
    """
    Ordered draw list for one board.

    Attributes:
        size: Image edge length in pixels
        black_to_move: Orientation the layout was computed for
        squares: 64 squares in display row-major order
        pieces: Pieces in display row-major order
        labels: 8 file labels then 8 rank labels, in display order
    """

    size: int
    black_to_move: bool
    squares: Tuple[BoardSquare, ...]
    pieces: Tuple[PieceDraw, ...]
    labels: Tuple[CoordinateLabel, ...]

    def square_at(self, column: int, row: int) -> BoardSquare:
        """Square at a display position."""
        return self.squares[row * 8 + column]


@dataclass(frozen=True)
class BoardPlacement:
    """
    A rendered board positioned on a page.

    Attributes:
        position: Position the board shows
        image: Rendered RGB board image
        x: Left edge in mm
        y: Top edge in mm (measured from page top)
        size: Printed edge length in mm
        cell: Grid cell index on the page (row-major)
    """

    position: ChessPosition
    image: Image.Image
    x: float
    y: float
    size: float
    cell: int

    @property
    def bottom(self) -> float:
        """Bottom edge in mm."""
        return self.y + self.size


@dataclass(frozen=True)
class TextPlacement:
    """
    Text positioned on a page.

    Attributes:
        text: Single line of text
        x: Anchor x in mm (left edge, centre or right edge per align)
        y: Baseline in mm (measured from page top)
        font_size: Font size in points
        kind: What the text is for
        align: Horizontal anchoring of x
    """

    text: str
    x: float
    y: float
    font_size: float
    kind: TextKind
    align: TextAlign = "left"


@dataclass(frozen=True)
class PageDescription:
    """
    Complete description of a single page.

    Attributes:
        index: Page number (0-indexed)
        boards: Boards in grid order
        labels: Text placements (header, footer, descriptions, coordinates)

    Example:
        >>> page = PageDescription(index=0, boards=(b1, b2), labels=())
        >>> page.board_count
        2
    """

    index: int
    boards: Tuple[BoardPlacement, ...]
    labels: Tuple[TextPlacement, ...]

    @property
    def board_count(self) -> int:
        """Number of boards on this page."""
        return len(self.boards)

    def labels_of(self, kind: TextKind) -> Tuple[TextPlacement, ...]:
        """Labels of one kind, in placement order."""
        return tuple(label for label in self.labels if label.kind == kind)


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        title: Document title (study name)
        pages: Pages in order
        warnings: Warning messages raised during composition
    """

    title: str
    pages: Tuple[PageDescription, ...]
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def board_count(self) -> int:
        """Total number of boards across all pages."""
        return sum(p.board_count for p in self.pages)
