"""
fen2pdf Core Package

Shared data models for the study pipeline: positions, studies and the
FEN syntax helpers they validate against.
"""

from .models import ChessPosition, Study, FenError

__all__ = [
    "ChessPosition",
    "Study",
    "FenError",
]
