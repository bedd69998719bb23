"""
Module: images.provider

Purpose:
    Piece glyph lookup for the board renderer. Maps the twelve FEN
    piece symbols to RGBA images; any other symbol is a lookup failure.

Key Classes:
    - GlyphProvider: Abstract base class for glyph access
    - DirectoryGlyphProvider: Loads wK.png ... bP.png from a directory
    - FontGlyphProvider: Rasterises Unicode chess figurines
    - GlyphNotFoundError: Exception for missing glyphs

Dependencies:
    - PIL: Image loading and text rasterisation

Used By:
    - layout.board: Piece compositing
    - fen2pdf.controller: Provider selection
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from PIL import Image, ImageDraw, ImageFont

from fen2pdf.core.models.fen import PIECE_SYMBOLS

logger = logging.getLogger(__name__)

DEFAULT_GLYPH_SIZE = 150

# Solid (black) figurines, used for black pieces and as the white fill
_SOLID_FIGURINES = {
    "k": "♚", "q": "♛", "r": "♜",
    "b": "♝", "n": "♞", "p": "♟",
}
# Outline (white) figurines
_OUTLINE_FIGURINES = {
    "k": "♔", "q": "♕", "r": "♖",
    "b": "♗", "n": "♘", "p": "♙",
}


class GlyphNotFoundError(Exception):
    """No glyph exists for a piece symbol."""
    pass


def glyph_filename(symbol: str) -> str:
    """
    Return the conventional file name for a piece symbol.

    Example:
        >>> glyph_filename("K"), glyph_filename("n")
        ('wK.png', 'bN.png')
    """
    _check_symbol(symbol)
    colour = "w" if symbol.isupper() else "b"
    return f"{colour}{symbol.upper()}.png"


def _check_symbol(symbol: str) -> None:
    if len(symbol) != 1 or symbol not in PIECE_SYMBOLS:
        raise GlyphNotFoundError(f"No glyph for piece symbol: {symbol!r}")


class GlyphProvider(ABC):
    """
    Abstract interface for piece glyph access.

    Implementations return RGBA images; the renderer scales them to
    the square size, so the glyph's own size is only a quality hint.
    """

    @abstractmethod
    def glyph_for(self, symbol: str) -> Image.Image:
        """
        Get the glyph image for a piece symbol.

        Args:
            symbol: One of KQRBNPkqrbnp

        Returns:
            RGBA PIL Image

        Raises:
            GlyphNotFoundError: If the symbol has no glyph
        """


class DirectoryGlyphProvider(GlyphProvider):
    """
    Provider that loads piece PNGs from a directory.

    Expects the files wK.png, wQ.png, ... bP.png. Images are loaded
    lazily and cached.

    Example:
        >>> provider = DirectoryGlyphProvider(Path("assets/png"))
        >>> provider.glyph_for("K").mode
        'RGBA'
    """

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)
        self._cache: Dict[str, Image.Image] = {}

    def glyph_for(self, symbol: str) -> Image.Image:
        """Get glyph for a symbol, loading it on first use."""
        glyph = self._cache.get(symbol)
        if glyph is not None:
            return glyph

        path = self._directory / glyph_filename(symbol)
        if not path.exists():
            raise GlyphNotFoundError(f"Glyph file not found: {path}")

        with Image.open(path) as img:
            glyph = img.convert("RGBA")
        self._cache[symbol] = glyph
        logger.debug(f"Loaded glyph {symbol!r} from {path}")
        return glyph


class FontGlyphProvider(GlyphProvider):
    """
    Provider that draws pieces from the Unicode chess figurines.

    Black pieces use the solid figurine in black. White pieces are the
    solid figurine filled white with the outline figurine drawn over it.

    Attributes:
        size: Edge length of the generated glyph images in pixels
    """

    def __init__(self, size: int = DEFAULT_GLYPH_SIZE, font_path: Optional[str] = None) -> None:
        if size <= 0:
            raise ValueError(f"size must be positive: {size}")
        self.size = size
        self._font = _load_font(int(size * 0.9), font_path)
        self._cache: Dict[str, Image.Image] = {}

    def glyph_for(self, symbol: str) -> Image.Image:
        """Get glyph for a symbol, rasterising it on first use."""
        _check_symbol(symbol)
        glyph = self._cache.get(symbol)
        if glyph is None:
            glyph = self._draw(symbol)
            self._cache[symbol] = glyph
        return glyph

    def _draw(self, symbol: str) -> Image.Image:
        img = Image.new("RGBA", (self.size, self.size), (0, 0, 0, 0))
        draw = ImageDraw.Draw(img)
        centre = (self.size / 2, self.size / 2)
        key = symbol.lower()

        if symbol.isupper():
            draw.text(centre, _SOLID_FIGURINES[key], font=self._font, fill="white", anchor="mm")
            draw.text(centre, _OUTLINE_FIGURINES[key], font=self._font, fill="black", anchor="mm")
        else:
            draw.text(centre, _SOLID_FIGURINES[key], font=self._font, fill="black", anchor="mm")
        return img


def _load_font(size: int, font_path: Optional[str] = None) -> ImageFont.FreeTypeFont:
    """
    Load a font that covers the chess figurines.

    Falls back to the default font if none is available.
    """
    font_options = [
        "DejaVuSans.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "seguisym.ttf",             # Segoe UI Symbol (Windows)
        "Arial Unicode.ttf",        # macOS
        "FreeSerif.ttf",
    ]
    if font_path:
        font_options.insert(0, font_path)

    for font_name in font_options:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning("Could not load a TrueType font with chess figurines, using default")
    return ImageFont.load_default(size)
