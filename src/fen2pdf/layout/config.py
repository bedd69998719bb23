"""
Module: layout.config

Purpose:
    Configuration for the page layout engine.
    Defines page dimensions, margins, grid shape and text settings.
    All lengths are millimetres measured from the page's top-left corner.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - layout.composer: Board placement
    - output.renderer: Page size
"""

from __future__ import annotations

from dataclasses import dataclass


# A4 portrait in millimetres
DEFAULT_PAGE_WIDTH_MM = 210.0
DEFAULT_PAGE_HEIGHT_MM = 297.0

# 600 px board at 300 DPI
DEFAULT_BOARD_PIXELS = 600
DEFAULT_BOARD_SIZE_MM = 50.8


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    Attributes:
        page_width: Page width in mm
        page_height: Page height in mm
        margin_top: Top edge of the board grid in mm
        margin_bottom: Bottom margin below the board grid in mm
        margin_left: Left margin in mm (leaves room for rank labels)
        margin_right: Right margin in mm
        columns: Boards per row
        rows: Boards per column
        board_size_mm: Printed board edge length
        board_pixels: Rendered board edge length in pixels
        description_gap: Board bottom to first description baseline
        description_font_size: Description font size in points
        description_line_height: Baseline-to-baseline distance
        max_description_lines: Description lines reserved below each board
        coordinate_font_size: File/rank label font size in points
        header_y: Baseline of the study name header
        header_font_size: Header font size in points
        footer_y: Baseline of the page number footer
        footer_font_size: Footer font size in points

    Example:
        >>> config = LayoutConfig()
        >>> config.boards_per_page
        9
        >>> config.cell_width
        56.0
    """

    # Page dimensions
    page_width: float = DEFAULT_PAGE_WIDTH_MM
    page_height: float = DEFAULT_PAGE_HEIGHT_MM

    # Margins
    margin_top: float = 40.0
    margin_bottom: float = 20.0
    margin_left: float = 30.0
    margin_right: float = 12.0

    # Grid
    columns: int = 3
    rows: int = 3
    board_size_mm: float = DEFAULT_BOARD_SIZE_MM
    board_pixels: int = DEFAULT_BOARD_PIXELS

    # Descriptions
    description_gap: float = 8.0
    description_font_size: float = 11.0
    description_line_height: float = 5.0
    max_description_lines: int = 3

    # Coordinates
    coordinate_font_size: float = 6.0

    # Header / footer
    header_y: float = 25.0
    header_font_size: float = 18.0
    footer_y: float = 287.0
    footer_font_size: float = 14.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.columns < 1 or self.rows < 1:
            raise ValueError(f"grid must be at least 1x1: {self.columns}x{self.rows}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")
        if self.board_pixels < 8:
            raise ValueError(f"board_pixels must be at least 8: {self.board_pixels}")
        if self.board_size_mm <= 0:
            raise ValueError(f"board_size_mm must be positive: {self.board_size_mm}")
        if self.board_size_mm > self.cell_width or self.board_size_mm > self.cell_height:
            raise ValueError(
                f"Board of {self.board_size_mm}mm does not fit a "
                f"{self.cell_width:.1f}x{self.cell_height:.1f}mm cell"
            )
        if self.max_description_lines < 1:
            raise ValueError(f"max_description_lines must be >= 1: {self.max_description_lines}")

    @property
    def boards_per_page(self) -> int:
        """Grid capacity of one page."""
        return self.columns * self.rows

    @property
    def available_width(self) -> float:
        """Width available for the grid (excluding margins)."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def available_height(self) -> float:
        """Height available for the grid (excluding margins)."""
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def cell_width(self) -> float:
        """Horizontal cell pitch."""
        return self.available_width / self.columns

    @property
    def cell_height(self) -> float:
        """Vertical cell pitch."""
        return self.available_height / self.rows

    @property
    def content_bottom(self) -> float:
        """Lowest y coordinate board content may reach."""
        return self.page_height - self.margin_bottom
