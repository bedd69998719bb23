"""
Module: controller

Purpose:
    Orchestrate the complete study pipeline.
    Fetch → Parse → Compose → Render

Key Functions:
    - build_study(): Main entry point, starting from a study id
    - build_study_from_text(): Same pipeline from already-fetched text

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - fen2pdf.loading: Download and parsing
    - fen2pdf.layout: Composition
    - fen2pdf.output: PDF rendering

Used By:
    - Library callers
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from fen2pdf.core.models import Study

from .config import BuilderConfig
from .images import DirectoryGlyphProvider, FontGlyphProvider, GlyphNotFoundError, GlyphProvider
from .layout import compose_study
from .loading import FetchError, ParseError, fetch_study, parse_study
from .output import output_filename, render_to_pdf

logger = logging.getLogger(__name__)

Fetcher = Callable[..., str]


class BuildError(Exception):
    """
    Error during build pipeline.

    Attributes:
        kind: Failure kind: "FetchError", "MissingFen", "MalformedFen",
            "EmptyStudy", "GlyphLookupFailure" or "IOError"
    """

    def __init__(self, message: str, kind: str) -> None:
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind}: {super().__str__()}"


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        pdf_path: Path to generated PDF
        study: Parsed study
        page_count: Number of pages generated
        board_count: Number of boards drawn
        warnings: Any warnings during layout
        elapsed_s: Wall time of the build in seconds

    Example:
        >>> result = build_study(config)
        >>> print(f"Generated {result.page_count} pages at {result.pdf_path}")
    """
    pdf_path: Path
    study: Study
    page_count: int
    board_count: int
    warnings: tuple[str, ...]
    elapsed_s: float


def build_study(
    config: BuilderConfig,
    *,
    fetcher: Fetcher = fetch_study,
    glyphs: Optional[GlyphProvider] = None,
) -> BuildResult:
    """
    Build a study PDF from start to finish.

    Pipeline:
    1. Download the study export
    2. Parse it into a Study
    3. Compose pages (one render per position)
    4. Render to PDF

    Args:
        config: Build configuration
        fetcher: Callable (study_id, timeout=...) -> raw text
        glyphs: Piece glyph provider (default chosen from config)

    Returns:
        BuildResult with the PDF path and counts

    Raises:
        BuildError: If any step fails; no PDF is left behind

    Example:
        >>> result = build_study(BuilderConfig(study_id="abcd1234"))
    """
    logger.info(f"Starting build for study {config.study_id!r}")
    try:
        raw_text = fetcher(config.study_id, timeout=config.timeout_s)
    except FetchError as e:
        raise BuildError(f"Failed to download study: {e}", "FetchError") from e

    return build_study_from_text(raw_text, config, glyphs=glyphs)


def build_study_from_text(
    raw_text: str,
    config: BuilderConfig,
    *,
    glyphs: Optional[GlyphProvider] = None,
) -> BuildResult:
    """
    Build a study PDF from study export text.

    Args:
        raw_text: Study PGN export
        config: Build configuration (study_id unused)
        glyphs: Piece glyph provider (default chosen from config)

    Returns:
        BuildResult with the PDF path and counts

    Raises:
        BuildError: If any step fails; no PDF is left behind
    """
    start_time = time.perf_counter()

    # 1. Parse
    try:
        study = parse_study(raw_text)
    except ParseError as e:
        raise BuildError(f"Failed to parse study: {e}", e.kind.value) from e

    logger.info(f"Found {study.position_count} positions in study: {study.name}")

    # 2. Compose
    glyphs = glyphs or _default_glyphs(config)
    try:
        layout = compose_study(study, glyphs, config.layout)
    except (GlyphNotFoundError, OSError) as e:
        raise BuildError(f"Failed to render board: {e}", "GlyphLookupFailure") from e

    # 3. Render
    pdf_path = Path(config.output_dir) / output_filename(study.name)
    try:
        render_to_pdf(layout, pdf_path, config.layout)
    except OSError as e:
        raise BuildError(f"Failed to write {pdf_path}: {e}", "IOError") from e
    except Exception as e:
        # reportlab and Pillow encoding errors; the partial file is already gone
        raise BuildError(f"Failed to render {pdf_path}: {e}", "IOError") from e

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Generated PDF: {pdf_path} with {layout.board_count} chess positions "
        f"in {elapsed:.2f}s"
    )

    return BuildResult(
        pdf_path=pdf_path,
        study=study,
        page_count=layout.page_count,
        board_count=layout.board_count,
        warnings=tuple(layout.warnings),
        elapsed_s=elapsed,
    )


def _default_glyphs(config: BuilderConfig) -> GlyphProvider:
    """Glyph provider for a configuration."""
    if config.glyph_dir is not None:
        return DirectoryGlyphProvider(config.glyph_dir)
    return FontGlyphProvider()
