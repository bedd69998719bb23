"""
Module: position

Purpose:
    Provides the ChessPosition and Study dataclasses - the data passed
    from the study parser to the page compositor. Both are frozen and
    validated on construction.

Key Classes:
    - ChessPosition: One annotated board position
    - Study: Named, ordered, non-empty collection of positions

Dependencies:
    - dataclasses (std)
    - .fen: FEN syntax helpers

Used By:
    - loading.parser: Creates positions and studies
    - layout.board: Renders positions
    - layout.composer: Paginates studies
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .fen import placement_field, side_to_move, validate_fen

DEFAULT_STUDY_NAME = "Chess Positions"


@dataclass(frozen=True)
class ChessPosition:
    """
    One annotated board position (immutable).

    The FEN is the only source of truth for board contents and
    orientation; black_to_move is a cached derivation of its
    side-to-move field.

    Attributes:
        number: 1-based order of appearance in the study
        fen: Validated FEN string
        black_to_move: True when the FEN side-to-move field is "b"
        description: Commentary text, line breaks as "\\n" (may be empty)

    Invariants:
        - number >= 1
        - fen has a valid placement and side-to-move field
        - black_to_move == (side_to_move(fen) == "b")

    Example:
        >>> pos = ChessPosition.from_fen(1, "8/8/8/8/8/8/8/K6k b - - 0 1")
        >>> pos.black_to_move
        True
    """

    number: int
    fen: str
    black_to_move: bool
    description: str = ""

    def __post_init__(self) -> None:
        """Validate position on construction."""
        if self.number < 1:
            raise ValueError(f"number must be >= 1: {self.number}")
        validate_fen(self.fen)
        if self.black_to_move != (side_to_move(self.fen) == "b"):
            raise ValueError(
                f"black_to_move={self.black_to_move} disagrees with FEN {self.fen!r}"
            )

    @classmethod
    def from_fen(cls, number: int, fen: str, description: str = "") -> ChessPosition:
        """Create a position, deriving black_to_move from the FEN."""
        fen = fen.strip()
        return cls(
            number=number,
            fen=fen,
            black_to_move=side_to_move(fen) == "b",
            description=description,
        )

    @property
    def placement(self) -> str:
        """Piece placement field of the FEN."""
        return placement_field(self.fen)


@dataclass(frozen=True)
class Study:
    """
    A named study of positions in document order (immutable).

    Attributes:
        name: Study title (never empty)
        positions: Positions numbered 1..N

    Invariants:
        - positions is non-empty
        - positions[i].number == i + 1
    """

    name: str
    positions: Tuple[ChessPosition, ...]

    def __post_init__(self) -> None:
        """Validate study on construction."""
        if not self.name:
            raise ValueError("Study name must not be empty")
        if not self.positions:
            raise ValueError("Study must contain at least one position")
        for expected, pos in enumerate(self.positions, start=1):
            if pos.number != expected:
                raise ValueError(
                    f"Position numbering broken: expected {expected}, got {pos.number}"
                )

    @property
    def position_count(self) -> int:
        """Number of positions in the study."""
        return len(self.positions)
