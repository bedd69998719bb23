"""
Core Models Package

Immutable, validated data models shared by the parser, the layout
engine and the compositor. All models are frozen dataclasses; a study
is built once by the parser and only read afterwards.
"""

from .fen import FenError, PIECE_SYMBOLS
from .position import ChessPosition, Study, DEFAULT_STUDY_NAME

__all__ = [
    "FenError",
    "PIECE_SYMBOLS",
    "ChessPosition",
    "Study",
    "DEFAULT_STUDY_NAME",
]
