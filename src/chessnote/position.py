"""Position capability: move validation and application on FEN positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import chess

STARTING_FEN = chess.STARTING_FEN


class UnresolvedMove(ValueError):
    """Move text that is illegal or unparseable in the given position."""

    def __init__(self, text: str, fen: str) -> None:
        super().__init__(f"Cannot play {text!r} in position {fen}")
        self.text = text
        self.fen = fen


@dataclass(slots=True, frozen=True)
class PlayedMove:
    """Outcome of applying a move to a position."""

    move: chess.Move
    san: str
    fen: str


class IPositions(Protocol):
    """Protocol for the rules backend used by the parser and the cursor."""

    def play(self, fen: str, text: str) -> PlayedMove: ...

    def play_move(self, fen: str, move: chess.Move) -> PlayedMove: ...

    def starting_ply(self, fen: str) -> int: ...


class ChessPositions:
    """:class:`IPositions` backed by python-chess.

    Accepts SAN as well as UCI move text; SAN output is canonical.
    """

    __slots__ = ("_chess960",)

    def __init__(self, *, chess960: bool = False) -> None:
        self._chess960 = chess960

    def board(self, fen: str) -> chess.Board:
        return chess.Board(fen, chess960=self._chess960)

    def play(self, fen: str, text: str) -> PlayedMove:
        board = self.board(fen)
        move = _parse_san_or_uci(board, text.strip())
        if move is None:
            move = _parse_san_or_uci(board, _clean_san(text.strip()))
        if move is None:
            raise UnresolvedMove(text, fen)
        return self._apply(board, move)

    def play_move(self, fen: str, move: chess.Move) -> PlayedMove:
        board = self.board(fen)
        if not board.is_legal(move):
            raise UnresolvedMove(move.uci(), fen)
        return self._apply(board, move)

    def starting_ply(self, fen: str) -> int:
        """0 when White is to move in *fen*, 1 when Black is."""
        return 0 if self.board(fen).turn == chess.WHITE else 1

    @staticmethod
    def _apply(board: chess.Board, move: chess.Move) -> PlayedMove:
        san = board.san(move)
        board.push(move)
        return PlayedMove(move=move, san=san, fen=board.fen())


def _parse_san_or_uci(board: chess.Board, text: str) -> chess.Move | None:
    if not text or text in ("--", "Z0", "0000"):
        return None
    try:
        return board.parse_san(text)
    except ValueError:
        pass
    try:
        move = chess.Move.from_uci(text)
    except ValueError:
        return None
    return move if board.is_legal(move) else None


def _clean_san(text: str) -> str:
    """Fix common keyboard input such as ``nf3`` or ``o-o``."""
    if len(text) <= 2:
        return text
    cleaned = text[0].upper() + text[1:] if text[0] in "kqbnr" else text
    return cleaned.replace("o-o-o", "O-O-O").replace("o-o", "O-O")


def is_standard_start(fen: str) -> bool:
    return fen == STARTING_FEN
