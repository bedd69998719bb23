"""
Module: config

Purpose:
    Configuration dataclass for the study pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - BuilderConfig: Main configuration for building a study PDF

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - fen2pdf.controller: Main build controller
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from fen2pdf.layout.config import LayoutConfig
from fen2pdf.loading.fetch import DEFAULT_TIMEOUT_S


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for building a study PDF (immutable).

    Attributes:
        study_id: Lichess study identifier
        output_dir: Directory the PDF is written to
        glyph_dir: Directory with wK.png ... bP.png; None draws the
            Unicode figurines instead
        layout: Page layout configuration
        timeout_s: Download timeout in seconds

    Example:
        >>> config = BuilderConfig(study_id="abcd1234", output_dir=Path("out"))
    """

    study_id: str = ""
    output_dir: Path = Path(".")
    glyph_dir: Optional[Path] = None
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    timeout_s: float = DEFAULT_TIMEOUT_S

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive: {self.timeout_s}")
        if self.glyph_dir is not None and not Path(self.glyph_dir).is_dir():
            raise ValueError(f"glyph_dir is not a directory: {self.glyph_dir}")
