"""
Module: layout.text

Purpose:
    Description text wrapping for board captions. Line breaks come from
    a fixed per-character width estimate, not from measured glyph
    widths, so pagination does not depend on the font backend.

Key Functions:
    - chars_per_line(): Estimated line capacity for a width
    - wrap_description(): Split a caption into display lines

Dependencies:
    - textwrap (std)

Used By:
    - layout.composer: Caption placement
"""

from __future__ import annotations

import textwrap
from typing import List

# Average Times-Roman advance, in mm per point of font size
CHAR_WIDTH_MM_PER_PT = 0.16


def chars_per_line(width_mm: float, font_size: float) -> int:
    """
    Estimate how many characters fit in a width.

    Example:
        >>> chars_per_line(56.0, 11.0)
        31
    """
    char_width = font_size * CHAR_WIDTH_MM_PER_PT
    return max(1, int(width_mm / char_width))


def wrap_description(text: str, width_mm: float, font_size: float) -> List[str]:
    """
    Split caption text into lines.

    Every "\\n" is a hard break; each segment between breaks is then
    wrapped to the estimated line capacity. Empty segments are dropped.

    Args:
        text: Caption text with "\\n" hard breaks
        width_mm: Available width
        font_size: Font size in points

    Returns:
        Display lines in order
    """
    width = chars_per_line(width_mm, font_size)
    lines: List[str] = []
    for segment in text.split("\n"):
        segment = segment.strip()
        if not segment:
            continue
        lines.extend(textwrap.wrap(segment, width=width, break_long_words=True))
    return lines
