"""Evaluation scores, move classification and game statistics."""

from chessnote.analysis.classifier import (
    DEFAULT_THRESHOLDS,
    ClassifierThresholds,
    classify,
)
from chessnote.analysis.models import (
    CandidateMove,
    GameStats,
    PositionAnalysis,
    SideStats,
)
from chessnote.analysis.score import (
    INITIAL_SCORE,
    Score,
    ScoreKind,
    accuracy,
    cp_loss,
    format_score,
    normalize_score,
    score_win_chance,
    win_chance,
)
from chessnote.analysis.service import annotate_main_line, game_stats

__all__ = [
    "DEFAULT_THRESHOLDS",
    "INITIAL_SCORE",
    "CandidateMove",
    "ClassifierThresholds",
    "GameStats",
    "PositionAnalysis",
    "Score",
    "ScoreKind",
    "SideStats",
    "accuracy",
    "annotate_main_line",
    "classify",
    "cp_loss",
    "format_score",
    "game_stats",
    "normalize_score",
    "score_win_chance",
    "win_chance",
]
