"""
Tests for layout.board

Test Coverage:
- to_display() / to_board(): Orientation transform
- is_light(): Checkerboard colouring
- layout_board(): Squares, pieces, coordinate labels
- render_board(): RGB output, glyph failures, 180-degree symmetry
"""

import pytest
from PIL import Image, ImageChops

from fen2pdf.core.models import ChessPosition
from fen2pdf.images import GlyphNotFoundError
from fen2pdf.layout.board import (
    DARK_SQUARE_RGB,
    LIGHT_SQUARE_RGB,
    is_light,
    layout_board,
    piece_box,
    rasterize,
    render_board,
    square_edges,
    to_board,
    to_display,
)

from conftest import START_FEN, ENDGAME_FEN, WHITE_GLYPH_RGB, BLACK_GLYPH_RGB


def _with_side(fen: str, side: str) -> str:
    fields = fen.split()
    fields[1] = side
    return " ".join(fields)


class TestOrientation:
    """Tests for the pure coordinate mapping."""

    def test_to_display_when_white_to_move_then_a1_bottom_left(self):
        assert to_display(0, 0, False) == (0, 7)
        assert to_display(7, 7, False) == (7, 0)

    def test_to_display_when_black_to_move_then_h8_bottom_left(self):
        assert to_display(7, 7, True) == (0, 7)
        assert to_display(0, 0, True) == (7, 0)

    @pytest.mark.parametrize("black", [False, True])
    def test_to_board_when_applied_after_to_display_then_identity(self, black):
        for file in range(8):
            for rank in range(8):
                assert to_board(*to_display(file, rank, black), black) == (file, rank)

    def test_to_display_when_flipped_then_rotated_180(self):
        for file in range(8):
            for rank in range(8):
                column, row = to_display(file, rank, False)
                assert to_display(file, rank, True) == (7 - column, 7 - row)


class TestColouring:
    def test_is_light_when_a1_then_dark(self):
        assert is_light(0, 0) is False

    def test_is_light_when_h1_then_light(self):
        assert is_light(7, 0) is True

    def test_layout_when_flipped_then_colours_follow_squares(self):
        """Colour is a property of the absolute square, not the display cell."""
        white = layout_board(ChessPosition.from_fen(1, START_FEN))
        black = layout_board(ChessPosition.from_fen(1, _with_side(START_FEN, "b")))
        for square in white.squares:
            flipped = black.square_at(7 - square.column, 7 - square.row)
            assert (flipped.file, flipped.rank) == (square.file, square.rank)
            assert flipped.light == square.light


class TestLayoutBoard:
    def test_layout_when_start_position_then_32_pieces(self):
        layout = layout_board(ChessPosition.from_fen(1, START_FEN))
        assert len(layout.squares) == 64
        assert len(layout.pieces) == 32

    def test_layout_when_white_to_move_then_white_king_on_bottom_row(self):
        layout = layout_board(ChessPosition.from_fen(1, START_FEN))
        king = next(p for p in layout.pieces if p.symbol == "K")
        assert king.square.name == "e1"
        assert (king.square.column, king.square.row) == (4, 7)

    def test_layout_when_black_to_move_then_black_king_on_bottom_row(self):
        layout = layout_board(ChessPosition.from_fen(1, _with_side(START_FEN, "b")))
        king = next(p for p in layout.pieces if p.symbol == "k")
        assert king.square.name == "e8"
        assert (king.square.column, king.square.row) == (3, 7)

    def test_layout_when_white_to_move_then_labels_a_to_h_and_8_to_1(self):
        layout = layout_board(ChessPosition.from_fen(1, ENDGAME_FEN))
        files = [l.text for l in layout.labels if l.edge == "bottom"]
        ranks = [l.text for l in layout.labels if l.edge == "left"]
        assert files == list("abcdefgh")
        assert ranks == list("87654321")

    def test_layout_when_black_to_move_then_labels_h_to_a_and_1_to_8(self):
        """Labels are re-derived for the flipped perspective, not mirrored."""
        layout = layout_board(ChessPosition.from_fen(1, _with_side(ENDGAME_FEN, "b")))
        files = [l.text for l in layout.labels if l.edge == "bottom"]
        ranks = [l.text for l in layout.labels if l.edge == "left"]
        assert files == list("hgfedcba")
        assert ranks == list("12345678")

    def test_layout_when_size_not_multiple_of_8_then_grid_fills_image(self):
        layout = layout_board(ChessPosition.from_fen(1, ENDGAME_FEN), size_px=100)
        assert layout.square_at(0, 0).box[:2] == (0, 0)
        assert layout.square_at(7, 7).box[2:] == (100, 100)

    def test_layout_when_size_too_small_then_raises(self):
        with pytest.raises(ValueError, match="at least 8"):
            layout_board(ChessPosition.from_fen(1, ENDGAME_FEN), size_px=4)

    def test_square_edges_when_600_then_75px_squares(self):
        assert square_edges(600) == [i * 75 for i in range(9)]

    def test_piece_box_when_75px_square_then_centred(self):
        left, top, right, bottom = piece_box((0, 0, 75, 75), 0.9)
        assert right - left == 67
        assert left == 75 - right


class TestRenderBoard:
    def test_render_when_default_size_then_600px_rgb(self, glyphs):
        img = render_board(ChessPosition.from_fen(1, START_FEN), glyphs)
        assert img.mode == "RGB"
        assert img.size == (600, 600)

    def test_render_when_white_to_move_then_square_colours(self, glyphs):
        img = render_board(ChessPosition.from_fen(1, ENDGAME_FEN), glyphs, size_px=80)
        # a1 (bottom-left) is dark, h1 (bottom-right) is light; both empty
        assert img.getpixel((1, 79)) == DARK_SQUARE_RGB
        assert img.getpixel((79, 79)) == LIGHT_SQUARE_RGB

    def test_render_when_piece_then_glyph_in_square_centre(self, glyphs):
        img = render_board(ChessPosition.from_fen(1, START_FEN), glyphs, size_px=80)
        # e1 white king at column 4, row 7; e8 black king at column 4, row 0
        assert img.getpixel((45, 75)) == WHITE_GLYPH_RGB
        assert img.getpixel((45, 5)) == BLACK_GLYPH_RGB

    def test_render_when_black_to_move_then_180_rotation_of_white(self, glyphs):
        """Flipping the side to move rotates square contents by 180 degrees."""
        white = render_board(ChessPosition.from_fen(1, ENDGAME_FEN), glyphs)
        black = render_board(ChessPosition.from_fen(1, _with_side(ENDGAME_FEN, "b")), glyphs)

        rotated = white.transpose(Image.Transpose.ROTATE_180)
        assert ImageChops.difference(rotated, black).getbbox() is None
        assert ImageChops.difference(white, black).getbbox() is not None

    def test_render_when_glyph_lookup_fails_then_raises(self, glyphs):
        layout = layout_board(ChessPosition.from_fen(1, ENDGAME_FEN))

        class Failing:
            def glyph_for(self, symbol):
                raise GlyphNotFoundError(symbol)

        with pytest.raises(GlyphNotFoundError):
            rasterize(layout, Failing())

    def test_render_when_called_then_one_lookup_per_piece(self, glyphs):
        render_board(ChessPosition.from_fen(1, ENDGAME_FEN), glyphs)
        assert sorted(glyphs.calls) == ["K", "P", "k"]

    def test_render_when_default_size_then_matches_layout_config(self):
        from fen2pdf.layout.config import LayoutConfig
        layout = layout_board(ChessPosition.from_fen(1, START_FEN))
        assert layout.size == LayoutConfig().board_pixels
