"""Qt coordinating layer that owns one game tree and its cursor."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessnote.analysis import (
    ClassifierThresholds,
    PositionAnalysis,
    classify,
)
from chessnote.analysis.classifier import DEFAULT_THRESHOLDS
from chessnote.annotations import Annotation
from chessnote.notation import (
    GameDocument,
    GameHeaders,
    ParseMode,
    PgnOptions,
    parse_pgn,
    serialize,
)
from chessnote.position import STARTING_FEN, ChessPositions, IPositions, UnresolvedMove
from chessnote.tree import (
    InvalidPath,
    TreeCursor,
    TreeNode,
    create_node,
    find_node,
    set_annotation,
)

_LOGGER = logging.getLogger(__name__)


class TreeSession(QObject):
    """Serialises every edit of a tree and announces it through signals.

    Views never hold node references: they receive the current path via
    ``position_changed`` and re-read the tree after ``tree_changed``.
    """

    tree_changed = pyqtSignal()
    position_changed = pyqtSignal(object)  # path tuple
    node_changed = pyqtSignal(object)  # path tuple
    move_rejected = pyqtSignal(str)  # offending move text

    __slots__ = (
        "_analyses",
        "_cursor",
        "_document",
        "_positions",
        "_thresholds",
    )

    def __init__(
        self,
        document: GameDocument | None = None,
        *,
        positions: IPositions | None = None,
        thresholds: ClassifierThresholds = DEFAULT_THRESHOLDS,
    ) -> None:
        super().__init__()
        self._positions = positions or ChessPositions()
        self._thresholds = thresholds
        self._document = document or _empty_document(self._positions)
        self._cursor = TreeCursor(self._document.root, self._positions)
        self._analyses: dict[tuple[int, ...], PositionAnalysis] = {}

    @property
    def document(self) -> GameDocument:
        return self._document

    @property
    def cursor(self) -> TreeCursor:
        return self._cursor

    @property
    def path(self) -> tuple[int, ...]:
        return self._cursor.path

    # ── Document lifecycle ──────────────────────────────────────────────────

    @pyqtSlot(str)
    def load_pgn(self, text: str, mode: ParseMode = ParseMode.LINEAR) -> None:
        """Replace the current game with the one parsed from *text*."""
        self._document = parse_pgn(text, mode=mode, positions=self._positions)
        self._cursor = TreeCursor(self._document.root, self._positions)
        self._analyses.clear()
        try:
            self._cursor.go_to(self._document.start)
        except InvalidPath:
            _LOGGER.warning("Ignoring invalid start path %s", self._document.start)
        self.tree_changed.emit()
        self.position_changed.emit(self._cursor.path)

    def to_pgn(self, options: PgnOptions | None = None) -> str:
        return serialize(
            self._document.root,
            headers=self._document.headers,
            options=options or PgnOptions(),
        )

    # ── Navigation ──────────────────────────────────────────────────────────

    @pyqtSlot(object)
    def go_to(self, path: object) -> None:
        try:
            self._cursor.go_to(tuple(path))  # type: ignore[arg-type]
        except (InvalidPath, TypeError) as exc:
            _LOGGER.warning("Ignoring navigation to %r: %s", path, exc)
            return
        self.position_changed.emit(self._cursor.path)

    @pyqtSlot()
    def go_forward(self) -> None:
        if self._cursor.forward():
            self.position_changed.emit(self._cursor.path)

    @pyqtSlot()
    def go_back(self) -> None:
        if self._cursor.back():
            self.position_changed.emit(self._cursor.path)

    @pyqtSlot()
    def go_to_start(self) -> None:
        self._cursor.go_to_start()
        self.position_changed.emit(self._cursor.path)

    @pyqtSlot()
    def go_to_end(self) -> None:
        self._cursor.go_to_end()
        self.position_changed.emit(self._cursor.path)

    # ── Commands ────────────────────────────────────────────────────────────

    @pyqtSlot(str)
    def play(self, text: str) -> None:
        """Play *text* at the cursor; emits ``move_rejected`` when illegal."""
        before = len(self._cursor.node.children)
        try:
            self._cursor.play(text)
        except UnresolvedMove:
            self.move_rejected.emit(text)
            return
        if len(self._cursor.parent.children) != before:  # type: ignore[union-attr]
            self.tree_changed.emit()
        self.position_changed.emit(self._cursor.path)

    @pyqtSlot()
    def delete_current(self) -> None:
        if not self._cursor.path:
            return
        self._cursor.delete_current()
        self._analyses.clear()
        self.tree_changed.emit()
        self.position_changed.emit(self._cursor.path)

    @pyqtSlot()
    def promote_current(self) -> None:
        if self._cursor.promote_to_main_line():
            self._analyses.clear()
            self.tree_changed.emit()
            self.position_changed.emit(self._cursor.path)

    @pyqtSlot(str)
    def set_comment(self, comment: str) -> None:
        self._cursor.set_comment(comment)
        self.node_changed.emit(self._cursor.path)

    @pyqtSlot(str)
    def set_annotation(self, glyph: str) -> None:
        try:
            annotation = Annotation(glyph)
        except ValueError:
            _LOGGER.warning("Ignoring unknown annotation glyph %r", glyph)
            return
        self._cursor.set_annotation(annotation)
        self.node_changed.emit(self._cursor.path)

    # ── Evaluation feed ─────────────────────────────────────────────────────

    @pyqtSlot(object, object)
    def apply_evaluation(self, path: object, analysis: object) -> None:
        """Store a resolved engine result for the node at *path*.

        Results may arrive in any order. A move is classified against its
        parent's candidate moves as soon as both positions are evaluated.
        """
        if not isinstance(analysis, PositionAnalysis) or analysis.score is None:
            _LOGGER.warning("Ignoring invalid evaluation payload %r", analysis)
            return
        try:
            target = tuple(path)  # type: ignore[arg-type]
            node = find_node(self._document.root, target)
        except (InvalidPath, TypeError):
            _LOGGER.debug("Evaluation arrived for a stale path %r", path)
            return

        node.score = analysis.score
        if analysis.novelty:
            set_annotation(node, Annotation.NOVELTY)
        self._analyses[target] = analysis
        if target:
            self._classify(target, node)
        self.node_changed.emit(target)

        for index, child in enumerate(node.children):
            child_path = (*target, index)
            if child_path in self._analyses and self._classify(child_path, child):
                self.node_changed.emit(child_path)

    def _classify(self, path: tuple[int, ...], node: TreeNode) -> bool:
        parent = self._analyses.get(path[:-1])
        own = self._analyses[path]
        if parent is None or parent.score is None or own.score is None:
            return False
        annotation = classify(
            parent.score,
            own.score,
            node.mover,
            parent.best,
            played_san=node.san,
            is_sacrifice=own.is_sacrifice,
            thresholds=self._thresholds,
        )
        if annotation is None:
            return False
        set_annotation(node, annotation)
        return True


def _empty_document(positions: IPositions) -> GameDocument:
    root = create_node(STARTING_FEN, ply=positions.starting_ply(STARTING_FEN))
    return GameDocument(root=root, headers=GameHeaders())
