"""Evaluation scores and the metrics derived from them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

import chess

CP_CEILING = 1000


class ScoreKind(StrEnum):
    """Unit of an engine evaluation."""

    CP = "cp"
    MATE = "mate"


@dataclass(slots=True, frozen=True)
class Score:
    """Signed engine evaluation, positive values favour White.

    ``CP`` scores are centipawns; ``MATE`` scores count moves to a forced
    mate (negative when White is being mated).
    """

    kind: ScoreKind
    value: int

    @classmethod
    def cp(cls, value: int) -> Score:
        return cls(ScoreKind.CP, int(value))

    @classmethod
    def mate(cls, value: int) -> Score:
        return cls(ScoreKind.MATE, int(value))

    @property
    def is_mate(self) -> bool:
        return self.kind == ScoreKind.MATE

    def __str__(self) -> str:
        return format_score(self)


INITIAL_SCORE = Score.cp(15)


def format_score(score: Score, precision: int = 2) -> str:
    """Format *score* as ``+0.50`` / ``-1.20`` / ``+M5`` / ``-M3``."""
    if score.kind == ScoreKind.MATE:
        text = f"M{abs(score.value)}"
    else:
        text = f"{abs(score.value) / 100:.{precision}f}"
    if score.value > 0:
        return f"+{text}"
    if score.value < 0:
        return f"-{text}"
    return text


def win_chance(centipawns: float) -> float:
    """Map a centipawn value onto a 0–100 winning-chance scale."""
    return 50 + 50 * (2 / (1 + math.exp(-0.00368208 * centipawns)) - 1)


def normalize_score(score: Score, color: chess.Color) -> int:
    """Centipawns from *color*'s point of view, saturated to ±CP_CEILING."""
    cp = score.value if color == chess.WHITE else -score.value
    if score.kind == ScoreKind.MATE:
        cp = int(math.copysign(CP_CEILING, cp)) if cp != 0 else 0
    return max(-CP_CEILING, min(CP_CEILING, cp))


def score_win_chance(score: Score, color: chess.Color = chess.WHITE) -> float:
    """Winning chance of *color* in a position evaluated at *score*."""
    return win_chance(normalize_score(score, color))


def cp_loss(previous: Score, current: Score, color: chess.Color) -> int:
    """Centipawns given away by *color*'s move (never negative)."""
    return max(0, normalize_score(previous, color) - normalize_score(current, color))


def accuracy(previous: Score, current: Score, color: chess.Color) -> float:
    """Move accuracy percentage derived from the lost winning chance."""
    lost = score_win_chance(previous, color) - score_win_chance(current, color)
    raw = 103.1668 * math.exp(-0.04354 * lost) - 3.1669 + 1
    return max(0.0, min(100.0, raw))


def is_mate_for(score: Score | None, color: chess.Color) -> bool:
    """True when *score* is a forced mate in favour of *color*."""
    if score is None or score.kind != ScoreKind.MATE:
        return False
    return normalize_score(score, color) > 0


def is_mate_against(score: Score | None, color: chess.Color) -> bool:
    """True when *score* is a forced mate against *color*."""
    if score is None or score.kind != ScoreKind.MATE:
        return False
    return normalize_score(score, color) < 0
