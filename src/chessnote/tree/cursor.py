"""Path-addressed read/write cursor over a game tree."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from chessnote.annotations import Annotation
from chessnote.position import ChessPositions, IPositions, PlayedMove
from chessnote.tree.errors import InvalidPath
from chessnote.tree.node import (
    Path,
    Shape,
    TreeNode,
    append_child,
    create_node,
    find_node,
    promote_to_main_line,
    promote_variation,
    remove_node,
    set_annotation,
)

if TYPE_CHECKING:
    import chess

    from chessnote.analysis.score import Score


class TreeCursor:
    """Navigates and edits one tree through a current :data:`Path`.

    Navigation past a boundary is a no-op that returns ``False``. After a
    structural edit the cursor re-derives its own path; other holders of
    paths into the same tree must do the same.
    """

    __slots__ = ("_root", "_path", "_positions")

    def __init__(
        self,
        root: TreeNode,
        positions: IPositions | None = None,
        path: Sequence[int] = (),
    ) -> None:
        self._root = root
        self._positions = positions or ChessPositions()
        self._path: Path = ()
        self.go_to(path)

    @property
    def root(self) -> TreeNode:
        return self._root

    @property
    def path(self) -> Path:
        return self._path

    @property
    def node(self) -> TreeNode:
        return find_node(self._root, self._path)

    @property
    def parent(self) -> TreeNode | None:
        if not self._path:
            return None
        return find_node(self._root, self._path[:-1])

    # ── Navigation ──────────────────────────────────────────────────────────

    def go_to(self, path: Sequence[int]) -> None:
        """Jump to *path*; raises :class:`InvalidPath` and keeps the old one."""
        target = tuple(path)
        find_node(self._root, target)
        self._path = target

    def go_to_start(self) -> None:
        self._path = ()

    def go_to_end(self) -> None:
        """Follow the current line's main continuation to its last move."""
        node = self.node
        path = list(self._path)
        while node.children:
            node = node.children[0]
            path.append(0)
        self._path = tuple(path)

    def forward(self, index: int = 0) -> bool:
        if not 0 <= index < len(self.node.children):
            return False
        self._path = (*self._path, index)
        return True

    def back(self) -> bool:
        if not self._path:
            return False
        self._path = self._path[:-1]
        return True

    def next_branch(self) -> bool:
        """Switch to the next sibling line at the nearest branching point."""
        return self._switch_branch(1)

    def previous_branch(self) -> bool:
        return self._switch_branch(-1)

    def _switch_branch(self, step: int) -> bool:
        for depth in range(len(self._path) - 1, -1, -1):
            parent = find_node(self._root, self._path[:depth])
            index = self._path[depth] + step
            if 0 <= index < len(parent.children):
                self._path = (*self._path[:depth], index)
                return True
        return False

    def go_to_branch_start(self) -> bool:
        """Move back to the first move of the current variation."""
        if not self._path:
            return False
        depth = len(self._path) - 1
        while depth > 0 and self._path[depth] == 0:
            parent = find_node(self._root, self._path[:depth])
            if len(parent.children) > 1:
                break
            depth -= 1
        self._path = self._path[: depth + 1]
        return True

    def go_to_branch_end(self) -> bool:
        """Move forward until the next fork or the end of the line."""
        node = self.node
        if not node.children:
            return False
        path = list(self._path)
        while node.children:
            node = node.children[0]
            path.append(0)
            if len(node.children) > 1:
                break
        self._path = tuple(path)
        return True

    # ── Structural edits ────────────────────────────────────────────────────

    def play(self, text: str) -> Path:
        """Play SAN/UCI *text* from the current node and move onto it.

        An existing child with the same move is reused; otherwise the move
        is appended (as the main line if the node had no continuation).
        Raises :class:`~chessnote.position.UnresolvedMove` for illegal text.
        """
        return self._enter(self._positions.play(self.node.fen, text))

    def play_move(self, move: chess.Move) -> Path:
        return self._enter(self._positions.play_move(self.node.fen, move))

    def _enter(self, played: PlayedMove) -> Path:
        node = self.node
        for index, child in enumerate(node.children):
            if child.move == played.move:
                self._path = (*self._path, index)
                return self._path
        child = create_node(played.fen, played.move, played.san, node.ply + 1)
        index = append_child(node, child)
        self._path = (*self._path, index)
        return self._path

    def delete_current(self) -> TreeNode:
        """Remove the current subtree and step back to its parent."""
        if not self._path:
            raise InvalidPath((), 0)
        parent = find_node(self._root, self._path[:-1])
        removed = remove_node(parent, self._path[-1])
        self._path = self._path[:-1]
        return removed

    def promote_variation(self) -> bool:
        """Make the current move the main line at its own branching point."""
        if not self._path or self._path[-1] == 0:
            return False
        parent = find_node(self._root, self._path[:-1])
        promote_variation(parent, self._path[-1])
        self._path = (*self._path[:-1], 0)
        return True

    def promote_to_main_line(self) -> bool:
        """Promote every branch on the way to the current move."""
        if not any(self._path):
            return False
        self._path = promote_to_main_line(self._root, self._path)
        return True

    # ── Node data ───────────────────────────────────────────────────────────

    def set_comment(self, comment: str) -> None:
        self.node.comment = comment

    def set_annotation(self, annotation: Annotation) -> None:
        set_annotation(self.node, annotation)

    def clear_annotations(self) -> None:
        self.node.annotations = []

    def set_evaluation(self, score: Score | None) -> None:
        self.node.score = score

    def set_clock(self, seconds: float | None) -> None:
        self.node.clock = seconds

    def set_shapes(self, shapes: Sequence[Shape]) -> None:
        self.node.shapes = list(shapes)
