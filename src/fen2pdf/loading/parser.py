"""
Module: loading.parser

Purpose:
    Parse a Lichess study PGN export into a Study. Each chapter
    (a header tag section followed by movetext) that carries a
    ChapterName or FEN tag is one annotated position marker.

Key Functions:
    - parse_study(): Parse raw study text into a Study
    - parse_tag_line(): Parse a single [Tag "value"] line
    - normalize_description(): Commentary cleanup and colon line breaks

Key Classes:
    - ErrorKind: Parse failure kinds
    - ParseError: Exception for parse failures

Algorithm:
    One linear pass over the lines:
    1. Tag lines accumulate into the current chapter's header
    2. Other non-blank lines accumulate as movetext
    3. A tag line after movetext, or repeating a tag already in the
       header, closes the chapter
    4. Each closed chapter that is a marker yields one position,
       numbered in extraction order

Dependencies:
    - re (std)
    - fen2pdf.core.models: ChessPosition, Study, FEN helpers

Used By:
    - fen2pdf.controller: Pipeline orchestration
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fen2pdf.core.models import ChessPosition, Study, DEFAULT_STUDY_NAME
from fen2pdf.core.models.fen import FenError, validate_fen

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r'^\[\s*(\w+)\s+"((?:[^"\\]|\\.)*)"\s*\]$')
_COMMENT_RE = re.compile(r"\{([^}]*)\}")
_COMMAND_RE = re.compile(r"\[%[^\]]*\]")


class ErrorKind(enum.Enum):
    """Why a study could not be parsed."""

    MISSING_FEN = "MissingFen"
    MALFORMED_FEN = "MalformedFen"
    EMPTY_STUDY = "EmptyStudy"


class ParseError(Exception):
    """
    Error parsing study text.

    Attributes:
        kind: ErrorKind naming the failure
        chapter: 1-based chapter index the failure occurred in (if any)
    """

    def __init__(self, message: str, kind: ErrorKind, chapter: Optional[int] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.chapter = chapter


@dataclass
class _Chapter:
    """Tags and movetext gathered for one chapter during the scan."""

    index: int
    tags: Dict[str, str] = field(default_factory=dict)
    movetext: List[str] = field(default_factory=list)

    @property
    def is_marker(self) -> bool:
        return "ChapterName" in self.tags or "FEN" in self.tags


def parse_tag_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Parse a PGN header tag line.

    Args:
        line: Stripped line like '[FEN "8/8/8/8/8/8/8/K6k w - - 0 1"]'

    Returns:
        (name, value) with escapes resolved, or None if not a tag line
    """
    match = _TAG_RE.match(line)
    if match is None:
        return None
    name, raw = match.groups()
    value = re.sub(r"\\(.)", r"\1", raw)
    return name, value


def normalize_description(text: str) -> str:
    """
    Clean commentary text for display.

    Collapses whitespace, then turns every colon into a hard line
    break ("\\n"). Whitespace around a break is dropped.

    Example:
        >>> normalize_description("  Attack:  White   wins ")
        'Attack\\nWhite wins'
    """
    collapsed = " ".join(text.split())
    if ":" not in collapsed:
        return collapsed
    return "\n".join(part.strip() for part in collapsed.split(":"))


def parse_study(raw_text: str) -> Study:
    """
    Parse a study PGN export into a Study.

    Args:
        raw_text: Complete text of the study export

    Returns:
        Study with positions numbered 1..N in document order

    Raises:
        ParseError: MISSING_FEN if a marker has no FEN, MALFORMED_FEN if
            a FEN is syntactically invalid, EMPTY_STUDY if no positions
            were found

    Example:
        >>> study = parse_study(text)
        >>> study.positions[0].number
        1
    """
    positions: List[ChessPosition] = []
    study_name = ""
    event_name = ""

    chapter: Optional[_Chapter] = None
    chapter_count = 0

    def close(ch: Optional[_Chapter]) -> None:
        nonlocal study_name, event_name
        if ch is None:
            return
        if not study_name:
            study_name = ch.tags.get("StudyName", "").strip()
        if not event_name:
            event_name = _event_study_name(ch.tags)
        if ch.is_marker:
            positions.append(_position_from_chapter(ch, len(positions) + 1))

    for raw_line in raw_text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        tag = parse_tag_line(line) if line.startswith("[") else None
        if tag is not None:
            name, value = tag
            if chapter is None or chapter.movetext or name in chapter.tags:
                close(chapter)
                chapter_count += 1
                chapter = _Chapter(index=chapter_count)
            chapter.tags[name] = value
            continue

        if chapter is None:
            logger.debug(f"Ignoring text before first chapter: {line[:40]!r}")
            continue
        chapter.movetext.append(line)

    close(chapter)

    if not positions:
        raise ParseError("No chess positions found in the study", ErrorKind.EMPTY_STUDY)

    name = study_name or event_name or DEFAULT_STUDY_NAME
    logger.info(f"Parsed study {name!r}: {len(positions)} positions from {chapter_count} chapters")
    return Study(name=name, positions=tuple(positions))


def _event_study_name(tags: Dict[str, str]) -> str:
    """
    Derive a study name from an Event tag.

    Lichess writes Event as "<study>: <chapter>"; the chapter suffix
    is dropped when it matches the chapter's own name.
    """
    event = tags.get("Event", "").strip()
    chapter_name = tags.get("ChapterName", "").strip()
    suffix = f": {chapter_name}"
    if chapter_name and event.endswith(suffix):
        event = event[: -len(suffix)].strip()
    return event


def _position_from_chapter(chapter: _Chapter, number: int) -> ChessPosition:
    """Build the position for a marker chapter."""
    fen = chapter.tags.get("FEN", "").strip()
    if not fen:
        raise ParseError(
            f"Chapter {chapter.index} has no FEN tag",
            ErrorKind.MISSING_FEN,
            chapter=chapter.index,
        )

    try:
        validate_fen(fen)
    except FenError as e:
        raise ParseError(
            f"Chapter {chapter.index} has a malformed FEN: {e}",
            ErrorKind.MALFORMED_FEN,
            chapter=chapter.index,
        ) from e

    description = chapter.tags.get("ChapterName", "").strip()
    if not description:
        description = _first_comment(chapter.movetext)

    position = ChessPosition.from_fen(number, fen, normalize_description(description))
    logger.debug(f"Position {number}: {fen} (black_to_move={position.black_to_move})")
    return position


def _first_comment(movetext: List[str]) -> str:
    """Return the first {comment} of the movetext, minus [%...] commands."""
    match = _COMMENT_RE.search(" ".join(movetext))
    if match is None:
        return ""
    return _COMMAND_RE.sub("", match.group(1)).strip()
