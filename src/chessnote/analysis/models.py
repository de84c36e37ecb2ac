"""Data models exchanged with the engine evaluation feed."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessnote.annotations import Annotation
from chessnote.analysis.score import Score


@dataclass(slots=True, frozen=True)
class CandidateMove:
    """One engine principal variation for a position."""

    score: Score
    san_moves: tuple[str, ...] = ()
    uci_moves: tuple[str, ...] = ()
    depth: int = 0
    multipv: int = 1
    nodes: int = 0
    nps: int = 0

    @property
    def first_san(self) -> str | None:
        return self.san_moves[0] if self.san_moves else None


@dataclass(slots=True, frozen=True)
class PositionAnalysis:
    """Resolved engine output for one position of a line.

    ``best`` is ordered best-first (multipv 1, 2, ...).
    """

    best: tuple[CandidateMove, ...] = ()
    depth: int = 0
    novelty: bool = False
    is_sacrifice: bool = False

    @property
    def score(self) -> Score | None:
        return self.best[0].score if self.best else None


@dataclass(slots=True, frozen=True)
class SideStats:
    """Aggregate quality metrics for one side of the main line."""

    moves: int = 0
    avg_cp_loss: float = 0.0
    accuracy: float = 0.0
    annotations: dict[Annotation, int] = field(default_factory=dict)

    def count(self, annotation: Annotation) -> int:
        return self.annotations.get(annotation, 0)


@dataclass(slots=True, frozen=True)
class GameStats:
    """Main-line statistics for both sides."""

    white: SideStats
    black: SideStats
