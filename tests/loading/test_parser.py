"""
Tests for loading.parser

Test Coverage:
- parse_study(): Positions, numbering, title fallback
- Failure kinds: MissingFen, MalformedFen, EmptyStudy
- normalize_description(): Colon line breaks
- parse_tag_line(): Tag syntax tolerance
"""

import pytest

from fen2pdf.core.models import DEFAULT_STUDY_NAME
from fen2pdf.loading.parser import (
    ErrorKind,
    ParseError,
    normalize_description,
    parse_study,
    parse_tag_line,
)

from conftest import START_FEN, AFTER_E4_FEN, ENDGAME_FEN, lichess_chapter


class TestParseStudy:
    """Tests for parse_study() on well-formed exports."""

    @pytest.mark.parametrize("count", [1, 2, 9, 10, 23])
    def test_parse_when_k_chapters_then_k_positions_numbered_in_order(self, study_text_factory, count):
        """K annotated positions yield K positions numbered 1..K."""
        study = parse_study(study_text_factory(count))

        assert study.position_count == count
        assert [p.number for p in study.positions] == list(range(1, count + 1))
        assert [p.description for p in study.positions] == [
            f"Position {i}" for i in range(1, count + 1)
        ]

    def test_parse_when_study_name_tag_then_used_as_title(self, study_text_factory):
        study = parse_study(study_text_factory(2, study_name="Rook Endings"))
        assert study.name == "Rook Endings"

    def test_parse_when_black_to_move_then_flag_derived(self):
        text = lichess_chapter(START_FEN, "White") + "\n" + lichess_chapter(AFTER_E4_FEN, "Black")
        study = parse_study(text)
        assert [p.black_to_move for p in study.positions] == [False, True]

    def test_parse_when_move_numbers_out_of_order_then_document_order_kept(self):
        """Embedded move numbers never drive numbering."""
        text = "\n".join([
            lichess_chapter(ENDGAME_FEN, "Late", movetext="45. Kd5 Kd7 *"),
            lichess_chapter(START_FEN, "Early", movetext="1. e4 *"),
        ])
        study = parse_study(text)
        assert [(p.number, p.description) for p in study.positions] == [(1, "Late"), (2, "Early")]

    def test_parse_when_fen_tag_after_chapter_name_then_still_paired(self):
        """Tag order inside a chapter does not matter."""
        text = (
            '[Event "WM25: Twist"]\n'
            '[ChapterName "Twist"]\n'
            '[StudyName "WM25"]\n'
            f'[FEN "{ENDGAME_FEN}"]\n'
            "\n*\n"
        )
        study = parse_study(text)
        assert study.positions[0].fen == ENDGAME_FEN
        assert study.positions[0].description == "Twist"

    def test_parse_when_colon_in_chapter_name_then_line_break(self):
        text = lichess_chapter(START_FEN, "Attack: White wins")
        study = parse_study(text)
        assert study.positions[0].description == "Attack\nWhite wins"
        assert ":" not in study.positions[0].description

    def test_parse_when_colon_then_fen_untouched(self):
        """Colon replacement applies to descriptions only."""
        text = lichess_chapter(START_FEN, "A: B")
        assert parse_study(text).positions[0].fen == START_FEN

    def test_parse_when_no_chapter_name_then_first_comment_used(self):
        text = lichess_chapter(
            ENDGAME_FEN,
            chapter_name=None,
            movetext="{ [%clk 0:10:00] Opposition decides } 1. Kc5 $1 { later } *",
        )
        study = parse_study(text)
        assert study.positions[0].description == "Opposition decides"

    def test_parse_when_no_description_at_all_then_empty(self):
        text = lichess_chapter(ENDGAME_FEN, chapter_name=None)
        assert parse_study(text).positions[0].description == ""

    def test_parse_when_game_without_markers_then_skipped(self):
        """A plain game block with neither FEN nor ChapterName is not a marker."""
        plain = '[Event "Casual"]\n[Result "*"]\n\n1. e4 e5 *\n'
        text = plain + "\n" + lichess_chapter(START_FEN, "Only")
        study = parse_study(text)
        assert study.position_count == 1
        assert study.positions[0].description == "Only"

    def test_parse_when_chapters_have_no_movetext_then_each_kept(self):
        """A repeated tag starts the next chapter even without movetext."""
        text = (
            '[Event "WM25: One"]\n'
            '[ChapterName "One"]\n'
            f'[FEN "{START_FEN}"]\n'
            "\n"
            '[Event "WM25: Two"]\n'
            '[ChapterName "Two"]\n'
            f'[FEN "{ENDGAME_FEN}"]\n'
        )
        study = parse_study(text)

        assert study.position_count == 2
        assert [(p.description, p.fen) for p in study.positions] == [
            ("One", START_FEN),
            ("Two", ENDGAME_FEN),
        ]

    def test_parse_when_header_only_chapters_without_event_then_split_on_repeat(self):
        text = (
            f'[ChapterName "One"]\n[FEN "{START_FEN}"]\n'
            f'[FEN "{ENDGAME_FEN}"]\n[ChapterName "Two"]\n'
        )
        study = parse_study(text)
        assert [p.description for p in study.positions] == ["One", "Two"]
        assert study.positions[1].fen == ENDGAME_FEN

    def test_parse_when_blank_lines_missing_between_chapters_then_split_on_tags(self):
        text = lichess_chapter(START_FEN, "One").strip() + "\n" + lichess_chapter(START_FEN, "Two")
        assert parse_study(text).position_count == 2


class TestStudyName:
    """Tests for title extraction and fallback."""

    def test_name_when_only_event_then_chapter_suffix_dropped(self):
        text = lichess_chapter(START_FEN, "Position 1", study_name=None).replace(
            '[Event "?: Position 1"]', '[Event "WM25: Position 1"]'
        )
        assert parse_study(text).name == "WM25"

    def test_name_when_title_tags_empty_then_default(self):
        text = (
            '[Event ""]\n'
            '[StudyName ""]\n'
            f'[FEN "{START_FEN}"]\n'
            '[ChapterName "One"]\n'
            "\n*\n"
        )
        assert parse_study(text).name == DEFAULT_STUDY_NAME

    def test_name_when_no_title_tags_then_default(self):
        text = f'[FEN "{START_FEN}"]\n[ChapterName "One"]\n\n*\n'
        assert parse_study(text).name == DEFAULT_STUDY_NAME


class TestParseFailures:
    """Tests for parse failure kinds."""

    def test_parse_when_marker_without_fen_then_missing_fen(self):
        text = lichess_chapter(START_FEN, "Fine") + "\n" + lichess_chapter(None, "Broken")

        with pytest.raises(ParseError) as exc_info:
            parse_study(text)

        assert exc_info.value.kind is ErrorKind.MISSING_FEN
        assert exc_info.value.chapter == 2

    def test_parse_when_fen_empty_then_missing_fen(self):
        text = lichess_chapter("", "Empty")
        with pytest.raises(ParseError) as exc_info:
            parse_study(text)
        assert exc_info.value.kind is ErrorKind.MISSING_FEN

    @pytest.mark.parametrize("side", ["x", "-", "W"])
    def test_parse_when_side_to_move_unrecognised_then_malformed_fen(self, side):
        fen = f"8/8/8/8/8/8/8/K6k {side} - - 0 1"
        with pytest.raises(ParseError) as exc_info:
            parse_study(lichess_chapter(fen, "Odd"))
        assert exc_info.value.kind is ErrorKind.MALFORMED_FEN

    @pytest.mark.parametrize("placement", [
        "8/8/8/8/8/8/8/K5k",    # 7 files
        "8/8/8/8/8/8/8/K7k",    # 9 files
        "8/8/8/8/8/8/K6k",      # 7 ranks
    ])
    def test_parse_when_rank_width_wrong_then_malformed_fen(self, placement):
        with pytest.raises(ParseError) as exc_info:
            parse_study(lichess_chapter(f"{placement} w - - 0 1", "Bad"))
        assert exc_info.value.kind is ErrorKind.MALFORMED_FEN

    def test_parse_when_no_markers_then_empty_study(self):
        text = '[Event "Casual"]\n[Result "*"]\n\n1. e4 e5 *\n'
        with pytest.raises(ParseError) as exc_info:
            parse_study(text)
        assert exc_info.value.kind is ErrorKind.EMPTY_STUDY

    @pytest.mark.parametrize("text", ["", "   \n\n", "just some text\n"])
    def test_parse_when_no_tags_then_empty_study(self, text):
        with pytest.raises(ParseError) as exc_info:
            parse_study(text)
        assert exc_info.value.kind is ErrorKind.EMPTY_STUDY


class TestHelpers:
    """Tests for tag and description helpers."""

    def test_parse_tag_line_when_escaped_quote_then_unescaped(self):
        assert parse_tag_line(r'[ChapterName "The \"Lucena\" bridge"]') == (
            "ChapterName", 'The "Lucena" bridge'
        )

    def test_parse_tag_line_when_extra_spaces_then_parsed(self):
        assert parse_tag_line('[ FEN   "8/8/8/8/8/8/8/K6k w - - 0 1" ]') == (
            "FEN", "8/8/8/8/8/8/8/K6k w - - 0 1"
        )

    def test_parse_tag_line_when_clock_command_then_none(self):
        assert parse_tag_line("[%clk 0:10:00]") is None

    def test_normalize_description_when_multiple_colons_then_each_breaks(self):
        assert normalize_description("a: b : c") == "a\nb\nc"

    def test_normalize_description_when_no_colon_then_whitespace_collapsed(self):
        assert normalize_description("  Rook   lift \n ") == "Rook lift"
