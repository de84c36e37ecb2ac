"""Tests for multi-game PGN documents."""

from __future__ import annotations

from chessnote.notation import (
    parse_multiple_games,
    split_pgn_games,
    validate_pgn_content,
)

TWO_GAMES = (
    '[Event "Round 1"]\r\n[Result "1-0"]\r\n\r\n1. e4 e5 2. Qh5 Nc6 1-0\r\n\r\n'
    '[Event "Round 2"]\n[Result "0-1"]\n\n1. d4 d5 0-1\n'
)


class TestSplit:
    def test_splits_on_event_tags(self) -> None:
        games = split_pgn_games(TWO_GAMES)

        assert len(games) == 2
        assert games[0].startswith('[Event "Round 1"]')
        assert "\r" not in games[0]

    def test_leading_junk_is_dropped(self) -> None:
        games = split_pgn_games("garbage\n" + TWO_GAMES)

        assert len(games) == 2


class TestParseMultiple:
    def test_parses_every_game(self) -> None:
        games, failures = parse_multiple_games(TWO_GAMES)

        assert failures == []
        assert [g.index for g in games] == [0, 1]
        assert games[0].document.headers.event == "Round 1"
        assert games[1].document.root.children[0].san == "d4"

    def test_failures_do_not_stop_the_batch(self) -> None:
        broken = '[Event "Broken"]\n[FEN "not a position"]\n\n1. e4 *\n'

        games, failures = parse_multiple_games(TWO_GAMES + "\n" + broken)

        assert len(games) == 2
        assert len(failures) == 1
        assert failures[0].index == 2
        assert failures[0].preview.startswith('[Event "Broken"]')


class TestValidate:
    def test_valid(self) -> None:
        result = validate_pgn_content(TWO_GAMES)

        assert result.is_valid
        assert result.game_count == 2
        assert result.error is None

    def test_no_games(self) -> None:
        result = validate_pgn_content("1. e4 e5")

        assert not result.is_valid
        assert result.game_count == 0

    def test_missing_result(self) -> None:
        result = validate_pgn_content('[Event "Casual"]\n\n1. e4 *')

        assert not result.is_valid
        assert result.game_count == 1
        assert "Result" in (result.error or "")
