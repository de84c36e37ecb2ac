"""Tests for the path-addressed tree cursor."""

from __future__ import annotations

import chess
import pytest

from chessnote.analysis import Score
from chessnote.annotations import Annotation
from chessnote.notation import GameDocument
from chessnote.position import ChessPositions, UnresolvedMove
from chessnote.tree import InvalidPath, Shape, TreeCursor, iter_main_line

MAIN_END = (0, 0, 0, 0, 0, 0)


@pytest.fixture
def cursor(annotated_game: GameDocument, positions: ChessPositions) -> TreeCursor:
    return TreeCursor(annotated_game.root, positions)


class TestNavigation:
    def test_starts_at_root(self, cursor: TreeCursor) -> None:
        assert cursor.path == ()
        assert cursor.node is cursor.root
        assert cursor.parent is None

    def test_go_to_end_and_start(self, cursor: TreeCursor) -> None:
        cursor.go_to_end()
        assert cursor.path == MAIN_END
        assert cursor.node.san == "a6"

        cursor.go_to_start()
        assert cursor.path == ()

    def test_go_to_end_follows_current_variation(self, cursor: TreeCursor) -> None:
        cursor.go_to((0, 1))

        cursor.go_to_end()

        assert cursor.path == (0, 1, 0, 0)
        assert cursor.node.san == "d6"

    def test_forward_and_back_stop_at_boundaries(self, cursor: TreeCursor) -> None:
        assert not cursor.back()
        assert cursor.forward()
        assert cursor.forward(1)
        assert cursor.path == (0, 1)
        assert not cursor.forward(5)
        assert cursor.back()
        assert cursor.path == (0,)

        cursor.go_to_end()
        assert not cursor.forward()

    def test_invalid_go_to_keeps_position(self, cursor: TreeCursor) -> None:
        cursor.go_to((0, 1))

        with pytest.raises(InvalidPath):
            cursor.go_to((0, 4))

        assert cursor.path == (0, 1)

    def test_branch_switching(self, cursor: TreeCursor) -> None:
        cursor.go_to((0, 0, 0))

        assert cursor.next_branch()
        assert cursor.path == (0, 1)
        assert not cursor.next_branch()
        assert cursor.previous_branch()
        assert cursor.path == (0, 0)

    def test_no_branch_on_plain_line(self, cursor: TreeCursor) -> None:
        cursor.go_to((0,))

        assert not cursor.previous_branch()
        assert cursor.path == (0,)

    def test_go_to_branch_start(self, cursor: TreeCursor) -> None:
        cursor.go_to((0, 1, 1, 0))

        assert cursor.go_to_branch_start()
        assert cursor.node.san == "c3"

    def test_go_to_branch_end_stops_at_fork(self, cursor: TreeCursor) -> None:
        assert cursor.go_to_branch_end()
        assert cursor.path == (0,)

        assert cursor.go_to_branch_end()
        assert cursor.path == MAIN_END
        assert not cursor.go_to_branch_end()


class TestEditing:
    def test_play_reuses_existing_child(self, cursor: TreeCursor) -> None:
        before = len(cursor.root.children)

        assert cursor.play("e4") == (0,)
        assert len(cursor.root.children) == before

    def test_play_adds_variation(self, cursor: TreeCursor) -> None:
        assert cursor.play("d4") == (1,)
        assert cursor.node.san == "d4"
        assert cursor.node.ply == 1

    def test_play_at_leaf_extends_main_line(self, cursor: TreeCursor) -> None:
        cursor.go_to_end()

        cursor.play("Ba4")

        assert [n.san for n in iter_main_line(cursor.root)][-1] == "Ba4"

    def test_play_accepts_uci(self, cursor: TreeCursor) -> None:
        cursor.go_to((0, 0))

        assert cursor.play("g1f3") == (0, 0, 0)

    def test_play_move(self, cursor: TreeCursor) -> None:
        cursor.go_to((0,))

        path = cursor.play_move(chess.Move.from_uci("d7d5"))

        assert path == (0, 2)
        assert cursor.node.san == "d5"

    def test_illegal_move_is_rejected(self, cursor: TreeCursor) -> None:
        with pytest.raises(UnresolvedMove):
            cursor.play("Ke2")
        assert cursor.path == ()

    def test_delete_current(self, cursor: TreeCursor) -> None:
        cursor.go_to((0, 0))

        removed = cursor.delete_current()

        assert removed.san == "e5"
        assert cursor.path == (0,)
        assert [c.san for c in cursor.node.children] == ["c5"]

    def test_cannot_delete_root(self, cursor: TreeCursor) -> None:
        with pytest.raises(InvalidPath):
            cursor.delete_current()

    def test_promote_variation(self, cursor: TreeCursor) -> None:
        cursor.go_to((0, 1))

        assert cursor.promote_variation()
        assert cursor.path == (0, 0)
        assert cursor.node.san == "c5"
        assert not cursor.promote_variation()

    def test_promote_to_main_line(self, cursor: TreeCursor) -> None:
        cursor.go_to((0, 1, 1, 0))

        assert cursor.promote_to_main_line()
        assert cursor.path == (0, 0, 0, 0)
        assert cursor.node.san == "d5"
        assert not cursor.promote_to_main_line()


class TestNodeData:
    def test_setters(self, cursor: TreeCursor) -> None:
        cursor.go_to((0,))

        cursor.set_comment("Best by test")
        cursor.set_annotation(Annotation.GOOD)
        cursor.set_annotation(Annotation.BRILLIANT)
        cursor.set_evaluation(Score.mate(4))
        cursor.set_clock(61.5)
        cursor.set_shapes([Shape("e4"), Shape("g1", "f3", "red")])

        node = cursor.node
        assert node.comment == "Best by test"
        assert node.annotations == [Annotation.BRILLIANT]
        assert node.score == Score.mate(4)
        assert node.clock == 61.5
        assert node.shapes[1].is_arrow

    def test_clear_annotations(self, cursor: TreeCursor) -> None:
        cursor.go_to((0, 0, 0))

        cursor.clear_annotations()

        assert cursor.node.annotations == []
