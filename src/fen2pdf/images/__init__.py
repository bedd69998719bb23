"""
Module: images

Purpose:
    Piece glyph access for the board renderer.

Key Classes:
    - GlyphProvider: Abstract interface for glyph access
    - DirectoryGlyphProvider: PNG files on disk
    - FontGlyphProvider: Unicode figurines rasterised with PIL
    - GlyphNotFoundError: Missing glyph

Dependencies:
    - PIL: Image handling

Used By:
    - fen2pdf.layout: Board rendering
    - fen2pdf.controller: Provider selection
"""

from .provider import (
    GlyphProvider,
    DirectoryGlyphProvider,
    FontGlyphProvider,
    GlyphNotFoundError,
    glyph_filename,
)

__all__ = [
    "GlyphProvider",
    "DirectoryGlyphProvider",
    "FontGlyphProvider",
    "GlyphNotFoundError",
    "glyph_filename",
]
