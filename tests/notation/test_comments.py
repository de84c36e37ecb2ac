"""Tests for structured comment tags."""

from __future__ import annotations

import pytest

from chessnote.analysis import Score
from chessnote.notation import format_clock, parse_comment
from chessnote.notation.comments import (
    format_clock_tag,
    format_eval_tag,
    format_shape_tags,
)
from chessnote.tree import Shape


class TestParseComment:
    def test_plain_text(self) -> None:
        parsed = parse_comment("  A   quiet move ")

        assert parsed.text == "A quiet move"
        assert parsed.evaluation is None
        assert parsed.clock is None
        assert parsed.shapes == []

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("[%eval 0.35]", Score.cp(35)),
            ("[%eval -1.5]", Score.cp(-150)),
            ("[%eval #-3]", Score.mate(-3)),
            ("[%eval #4,22]", Score.mate(4)),
        ],
    )
    def test_evaluation(self, raw: str, expected: Score) -> None:
        assert parse_comment(raw).evaluation == expected

    def test_clock(self) -> None:
        parsed = parse_comment("[%clk 1:02:03.5] time trouble")

        assert parsed.clock == pytest.approx(3723.5)
        assert parsed.text == "time trouble"

    def test_shapes(self) -> None:
        parsed = parse_comment("[%csl Ge4,Rd5] [%cal Bg1f3,Xa1a2]")

        assert parsed.shapes == [
            Shape("e4", brush="green"),
            Shape("d5", brush="red"),
            Shape("g1", "f3", "blue"),
        ]
        assert parsed.text == ""

    def test_unknown_tags_are_dropped_from_text(self) -> None:
        assert parse_comment("[%emt 0:00:04] ok").text == "ok"


class TestFormatting:
    def test_eval_tag(self) -> None:
        assert format_eval_tag(Score.cp(-120)) == "[%eval -1.20]"
        assert format_eval_tag(Score.mate(-2)) == "[%eval #-2]"

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0:00:00"),
            (185.5, "0:03:05.5"),
            (3723.25, "1:02:03.25"),
        ],
    )
    def test_clock(self, seconds: float, expected: str) -> None:
        assert format_clock(seconds) == expected

    def test_clock_tag(self) -> None:
        assert format_clock_tag(300) == "[%clk 0:05:00]"

    def test_shape_tags(self) -> None:
        shapes = [Shape("g1", "f3", "red"), Shape("e4"), Shape("d5", brush="yellow")]

        assert format_shape_tags(shapes) == ["[%csl Ge4,Yd5]", "[%cal Rg1f3]"]
