"""
Module: fen

Purpose:
    Syntax helpers for FEN (Forsyth–Edwards Notation) strings. Only the
    parts needed for drawing a diagram are checked: the piece placement
    field and the side-to-move field. Castling, en passant and move
    counters are carried through untouched.

Key Functions:
    - validate_placement(placement): Check the 8x8 piece placement field
    - expand_rank(rank): Expand one rank into 8 cells
    - side_to_move(fen): Return "w" or "b"

Dependencies:
    - None (std only)

Used By:
    - core.models.position.ChessPosition
    - loading.parser: Study parsing
    - layout.board: Board layout engine
"""

from __future__ import annotations

from typing import List, Optional

PIECE_SYMBOLS = "KQRBNPkqrbnp"
BOARD_FILES = 8
BOARD_RANKS = 8
FILE_LETTERS = "abcdefgh"


class FenError(ValueError):
    """FEN string is syntactically invalid."""
    pass


def placement_field(fen: str) -> str:
    """Return the piece placement field (first space-delimited field)."""
    fields = fen.split()
    if not fields:
        raise FenError("FEN is empty")
    return fields[0]


def split_ranks(placement: str) -> List[str]:
    """
    Split a placement field into its rank strings.

    FEN lists ranks from rank 8 down to rank 1.

    Raises:
        FenError: If there are not exactly 8 ranks
    """
    ranks = placement.split("/")
    if len(ranks) != BOARD_RANKS:
        raise FenError(f"expected {BOARD_RANKS} ranks, found {len(ranks)}: {placement!r}")
    return ranks


def rank_width(rank: str) -> int:
    """
    Count the files covered by one rank string.

    Digits count as that many empty files, piece symbols as one file.

    Raises:
        FenError: On a character that is neither a digit 1-8 nor a piece
    """
    width = 0
    for ch in rank:
        if ch in "12345678":
            width += int(ch)
        elif ch in PIECE_SYMBOLS:
            width += 1
        else:
            raise FenError(f"invalid character {ch!r} in rank {rank!r}")
    return width


def expand_rank(rank: str) -> List[Optional[str]]:
    """
    Expand a rank string into 8 cells, file a first.

    Empty squares are None. Assumes the rank was validated; extra
    cells beyond file h are dropped.

    Example:
        >>> expand_rank("3k4")
        [None, None, None, 'k', None, None, None, None]
    """
    cells: List[Optional[str]] = []
    for ch in rank:
        if ch.isdigit():
            cells.extend([None] * int(ch))
        else:
            cells.append(ch)
    return cells[:BOARD_FILES]


def validate_placement(placement: str) -> None:
    """
    Validate a piece placement field.

    Raises:
        FenError: If the rank count, a rank width or a character is wrong
    """
    for rank in split_ranks(placement):
        width = rank_width(rank)
        if width != BOARD_FILES:
            raise FenError(
                f"rank {rank!r} covers {width} files, expected {BOARD_FILES}"
            )


def side_to_move(fen: str) -> str:
    """
    Return the side-to-move field of a FEN string.

    Returns:
        "w" or "b"

    Raises:
        FenError: If the field is missing or has any other value
    """
    fields = fen.split()
    if len(fields) < 2:
        raise FenError(f"FEN has no side-to-move field: {fen!r}")
    side = fields[1]
    if side not in ("w", "b"):
        raise FenError(f"side-to-move must be 'w' or 'b', got {side!r}")
    return side


def validate_fen(fen: str) -> None:
    """Validate placement and side-to-move fields of a FEN string."""
    validate_placement(placement_field(fen))
    side_to_move(fen)
