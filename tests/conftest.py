import pytest
import sys
from pathlib import Path
from typing import Dict, List, Optional

from PIL import Image

# Add src to sys.path so we can import fen2pdf
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from fen2pdf.images import GlyphProvider, GlyphNotFoundError
from fen2pdf.core.models.fen import PIECE_SYMBOLS


START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
AFTER_E4_FEN = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
ENDGAME_FEN = "8/8/4k3/8/2K5/8/3P4/8 w - - 0 1"

WHITE_GLYPH_RGB = (200, 30, 30)
BLACK_GLYPH_RGB = (30, 30, 200)


class SolidGlyphProvider(GlyphProvider):
    """Glyphs as solid squares: red for white pieces, blue for black."""

    def __init__(self, size: int = 40) -> None:
        self.size = size
        self.calls: List[str] = []

    def glyph_for(self, symbol: str) -> Image.Image:
        self.calls.append(symbol)
        if symbol not in PIECE_SYMBOLS:
            raise GlyphNotFoundError(f"No glyph for piece symbol: {symbol!r}")
        rgb = WHITE_GLYPH_RGB if symbol.isupper() else BLACK_GLYPH_RGB
        return Image.new("RGBA", (self.size, self.size), rgb + (255,))


def lichess_chapter(
    fen: Optional[str],
    chapter_name: Optional[str] = None,
    study_name: Optional[str] = "WM25",
    movetext: str = "*",
) -> str:
    """Build one chapter in Lichess study export format."""
    event_suffix = f": {chapter_name}" if chapter_name else ""
    tags: Dict[str, str] = {
        "Event": f"{study_name or '?'}{event_suffix}",
        "Site": "https://lichess.org/study/abcd1234/efgh5678",
        "Result": "*",
        "Variant": "Standard",
    }
    if fen is not None:
        tags["FEN"] = fen
        tags["SetUp"] = "1"
    if study_name is not None:
        tags["StudyName"] = study_name
    if chapter_name is not None:
        tags["ChapterName"] = chapter_name
    header = "\n".join(f'[{name} "{value}"]' for name, value in tags.items())
    return f"{header}\n\n{movetext}\n"


@pytest.fixture
def glyphs():
    """Solid-colour glyph provider."""
    return SolidGlyphProvider()


@pytest.fixture
def study_text_factory():
    """Factory building a study export with N positions."""
    def _create(count: int, study_name: str = "WM25", fen: str = START_FEN) -> str:
        return "\n".join(
            lichess_chapter(fen, f"Position {i}", study_name)
            for i in range(1, count + 1)
        )
    return _create
