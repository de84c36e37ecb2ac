"""Tests for applying analysis to a main line and summarising it."""

from __future__ import annotations

import logging

import pytest

from chessnote.analysis import (
    CandidateMove,
    PositionAnalysis,
    Score,
    annotate_main_line,
    game_stats,
)
from chessnote.annotations import Annotation
from chessnote.notation import parse_pgn
from chessnote.tree import TreeNode, iter_main_line


def _analysis(cp: int, san: str, **kwargs: bool) -> PositionAnalysis:
    return PositionAnalysis(
        best=(CandidateMove(Score.cp(cp), san_moves=(san,)),), **kwargs
    )


@pytest.fixture
def short_game() -> TreeNode:
    return parse_pgn("1. e4 e5 2. Nf3").root


@pytest.fixture
def analyses() -> list[PositionAnalysis]:
    return [
        _analysis(20, "e4"),
        _analysis(20, "e5"),
        _analysis(30, "Bc4"),
        _analysis(-500, "Nc6"),
    ]


class TestAnnotateMainLine:
    def test_marks_each_move(
        self, short_game: TreeNode, analyses: list[PositionAnalysis]
    ) -> None:
        marked = annotate_main_line(short_game, analyses)

        e4, e5, nf3 = iter_main_line(short_game)
        assert marked == 3
        assert e4.annotations == [Annotation.BEST]
        assert e5.annotations == [Annotation.BEST]
        assert nf3.annotations == [Annotation.BLUNDER]

    def test_stores_scores(
        self, short_game: TreeNode, analyses: list[PositionAnalysis]
    ) -> None:
        annotate_main_line(short_game, analyses)

        assert short_game.score == Score.cp(20)
        assert [n.score for n in iter_main_line(short_game)] == [
            Score.cp(20),
            Score.cp(30),
            Score.cp(-500),
        ]

    def test_novelty_is_added(self, short_game: TreeNode) -> None:
        annotate_main_line(
            short_game,
            [_analysis(20, "e4"), _analysis(20, "e5", novelty=True)],
        )

        e4 = short_game.children[0]
        assert e4.annotations == [Annotation.BEST, Annotation.NOVELTY]

    def test_extra_analyses_are_ignored(
        self,
        short_game: TreeNode,
        analyses: list[PositionAnalysis],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING):
            annotate_main_line(short_game, [*analyses, _analysis(0, "a6")])

        assert "ignoring extras" in caplog.text


class TestGameStats:
    def test_per_side_summary(
        self, short_game: TreeNode, analyses: list[PositionAnalysis]
    ) -> None:
        annotate_main_line(short_game, analyses)

        stats = game_stats(short_game)

        assert stats.white.moves == 2
        assert stats.black.moves == 1
        assert stats.white.avg_cp_loss == pytest.approx(265.0)
        assert stats.black.avg_cp_loss == pytest.approx(10.0)
        assert stats.white.count(Annotation.BLUNDER) == 1
        assert stats.white.count(Annotation.BEST) == 1
        assert stats.black.count(Annotation.BEST) == 1
        assert 0 < stats.white.accuracy < stats.black.accuracy <= 100

    def test_unevaluated_game(self, short_game: TreeNode) -> None:
        stats = game_stats(short_game)

        assert stats.white.moves == 2
        assert stats.white.avg_cp_loss == 0.0
        assert stats.white.accuracy == 0.0
