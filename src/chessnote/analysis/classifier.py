"""Rule-based move quality classification from engine evaluations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import chess

from chessnote.annotations import Annotation
from chessnote.analysis.models import CandidateMove
from chessnote.analysis.score import (
    Score,
    ScoreKind,
    is_mate_against,
    is_mate_for,
    normalize_score,
    win_chance,
)


@dataclass(slots=True, frozen=True)
class ClassifierThresholds:
    """Tunable limits used by :func:`classify`.

    Win-chance values are percentage points on the 0–100 scale, the rest
    are centipawns from the mover's point of view.
    """

    hopeless_cp: int = -900
    hopeless_margin_cp: int = 50
    decisive_cp: int = 500
    clearly_losing_cp: int = -300
    better_alternative_cp: int = 100

    blunder_win_chance: float = 20.0
    blunder_cp: int = 400
    blunder_min_previous_cp: int = 0
    mistake_win_chance: float = 10.0
    mistake_cp: int = 200
    mistake_min_previous_cp: int = 100
    dubious_win_chance: float = 5.0
    dubious_cp: int = 100
    dubious_min_previous_cp: int = 0

    brilliant_gap_win_chance: float = 10.0
    brilliant_gap_cp: int = 300
    brilliant_improvement_win_chance: float = 15.0
    great_gap_win_chance: float = 10.0
    great_gap_cp: int = 150
    great_improvement_win_chance: float = 5.0
    great_comeback_cp: int = -100
    great_winning_cp: int = 300
    great_extension_cp: int = 100

    interesting_sacrifice_cp: int = -250
    interesting_close_win_chance: float = 5.0
    interesting_min_win_chance: float = 45.0
    interesting_min_cp: int = -100


DEFAULT_THRESHOLDS = ClassifierThresholds()

_ZERO = Score.cp(0)


def classify(
    previous: Score | None,
    played: Score,
    color: chess.Color,
    alternatives: Sequence[CandidateMove],
    *,
    is_best_move: bool | None = None,
    played_san: str | None = None,
    is_sacrifice: bool = False,
    thresholds: ClassifierThresholds = DEFAULT_THRESHOLDS,
) -> Annotation | None:
    """Judge a played move.

    Args:
        previous: Evaluation of the position before the move (``None``
            when unknown, treated as 0cp).
        played: Evaluation after the move.
        color: Side that made the move.
        alternatives: Engine candidates for the position before the move,
            best first.
        is_best_move: Whether the played move is the engine's first choice.
            Derived from *played_san* when omitted.
        played_san: SAN of the played move.
        is_sacrifice: Whether the move gives up material.
    """
    t = thresholds
    prev_cp = normalize_score(previous or _ZERO, color)
    next_cp = normalize_score(played, color)
    win_chance_drop = win_chance(prev_cp) - win_chance(next_cp)
    cp_drop = prev_cp - next_cp

    if is_best_move is None:
        best_san = alternatives[0].first_san if alternatives else None
        is_best_move = played_san is not None and played_san == best_san

    if _is_hopeless(previous, color, t) and (
        not alternatives or _all_hopeless(alternatives, color, t)
    ):
        return None

    # ── Negative markers ─────────────────────────────────────────────────
    if not is_best_move and _has_clearly_better_alternative(
        alternatives, played, color, t
    ):
        previous_decisive = is_mate_for(previous, color) or (
            previous is not None
            and previous.kind == ScoreKind.CP
            and prev_cp >= t.decisive_cp
        )
        clearly_losing = next_cp < t.clearly_losing_cp or is_mate_against(
            played, color
        )
        if previous_decisive and clearly_losing:
            return Annotation.BLUNDER
        if win_chance_drop > t.blunder_win_chance or (
            cp_drop > t.blunder_cp and prev_cp > t.blunder_min_previous_cp
        ):
            return Annotation.BLUNDER
        if win_chance_drop > t.mistake_win_chance or (
            cp_drop > t.mistake_cp and prev_cp > t.mistake_min_previous_cp
        ):
            return Annotation.MISTAKE
        if win_chance_drop > t.dubious_win_chance or (
            cp_drop > t.dubious_cp and prev_cp >= t.dubious_min_previous_cp
        ):
            return Annotation.DUBIOUS

    if not alternatives:
        return Annotation.BEST if is_best_move else None

    # ── Positive markers ─────────────────────────────────────────────────
    best = alternatives[0].score
    best_cp = normalize_score(best, color)
    best_is_mate = is_mate_for(best, color)
    best_is_decisive = best.kind == ScoreKind.CP and best_cp >= t.decisive_cp
    improvement = (
        win_chance(best_cp) - win_chance(prev_cp) if previous is not None else None
    )

    if is_best_move and is_sacrifice:
        if is_mate_for(played, color) or next_cp >= t.decisive_cp:
            return Annotation.BRILLIANT
        if len(alternatives) > 1 and _outclasses_second(
            best, alternatives[1].score, color, t
        ):
            return Annotation.BRILLIANT
        if improvement is not None and (
            improvement > t.brilliant_improvement_win_chance
            or (prev_cp <= 0 and best_cp >= t.decisive_cp)
        ):
            return Annotation.BRILLIANT

    if is_best_move:
        if len(alternatives) > 1:
            second_cp = normalize_score(alternatives[1].score, color)
            gap = win_chance(best_cp) - win_chance(second_cp)
            if gap > t.great_gap_win_chance or best_cp - second_cp > t.great_gap_cp:
                return Annotation.GOOD
        if improvement is not None and (
            improvement > t.great_improvement_win_chance
            or (prev_cp < t.great_comeback_cp and best_cp >= 0)
        ):
            return Annotation.GOOD
        if best_is_mate or best_is_decisive:
            return Annotation.GOOD
        if (
            previous is not None
            and prev_cp >= t.great_winning_cp
            and best_cp >= prev_cp + t.great_extension_cp
        ):
            return Annotation.GOOD
        return Annotation.BEST

    if is_sacrifice and next_cp > t.interesting_sacrifice_cp:
        return Annotation.INTERESTING

    played_gap = win_chance(best_cp) - win_chance(next_cp)
    if (
        played_gap <= t.interesting_close_win_chance
        and win_chance(next_cp) > t.interesting_min_win_chance
        and next_cp > t.interesting_min_cp
    ):
        return Annotation.INTERESTING
    return None


def _is_hopeless(
    score: Score | None, color: chess.Color, t: ClassifierThresholds
) -> bool:
    if score is None:
        return False
    if is_mate_against(score, color):
        return True
    return normalize_score(score, color) <= t.hopeless_cp


def _all_hopeless(
    alternatives: Sequence[CandidateMove],
    color: chess.Color,
    t: ClassifierThresholds,
) -> bool:
    limit = t.hopeless_cp + t.hopeless_margin_cp
    return all(normalize_score(alt.score, color) <= limit for alt in alternatives)


def _has_clearly_better_alternative(
    alternatives: Sequence[CandidateMove],
    played: Score,
    color: chess.Color,
    t: ClassifierThresholds,
) -> bool:
    played_cp = normalize_score(played, color)
    played_mates = is_mate_for(played, color)
    played_is_mated = is_mate_against(played, color)

    for alt in alternatives:
        alt_cp = normalize_score(alt.score, color)
        if played_is_mated and not is_mate_against(alt.score, color):
            return True
        if is_mate_for(alt.score, color) and not played_mates:
            return True
        # Small differences between equally lost moves do not count.
        if (
            played_cp <= t.hopeless_cp
            and alt_cp <= t.hopeless_cp + t.hopeless_margin_cp
        ):
            continue
        if alt_cp > played_cp + t.better_alternative_cp:
            return True
    return False


def _outclasses_second(
    best: Score,
    second: Score,
    color: chess.Color,
    t: ClassifierThresholds,
) -> bool:
    best_cp = normalize_score(best, color)
    second_cp = normalize_score(second, color)
    if win_chance(best_cp) - win_chance(second_cp) > t.brilliant_gap_win_chance:
        return True
    best_mates = is_mate_for(best, color)
    second_mates = is_mate_for(second, color)
    if best_mates and not second_mates:
        return True
    if best_mates and second_mates and abs(best.value) < abs(second.value):
        return True
    if best.kind == ScoreKind.CP and best_cp >= t.decisive_cp and second_cp < t.decisive_cp:
        return True
    return best_cp - second_cp > t.brilliant_gap_cp
