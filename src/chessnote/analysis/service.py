"""Apply resolved engine analysis to a tree and summarise the result."""

from __future__ import annotations

import logging
import statistics
from collections.abc import Sequence

import chess

from chessnote.annotations import BASIC_ANNOTATIONS, Annotation
from chessnote.analysis.classifier import (
    DEFAULT_THRESHOLDS,
    ClassifierThresholds,
    classify,
)
from chessnote.analysis.models import GameStats, PositionAnalysis, SideStats
from chessnote.analysis.score import INITIAL_SCORE, Score, accuracy, cp_loss
from chessnote.tree.node import TreeNode, iter_main_line, set_annotation

_LOGGER = logging.getLogger(__name__)


def annotate_main_line(
    root: TreeNode,
    analyses: Sequence[PositionAnalysis],
    thresholds: ClassifierThresholds = DEFAULT_THRESHOLDS,
) -> int:
    """Store evaluations and quality markers along the main line.

    ``analyses[0]`` describes the root position, ``analyses[i]`` the
    position after the i-th main-line move. Returns the number of moves
    that received a basic marker.
    """
    nodes = [root, *iter_main_line(root)]
    if len(analyses) > len(nodes):
        _LOGGER.warning(
            "Got %d analyses for a main line of %d positions; ignoring extras",
            len(analyses),
            len(nodes),
        )

    marked = 0
    for i, (node, analysis) in enumerate(zip(nodes, analyses)):
        if analysis.score is not None:
            node.score = analysis.score
        if analysis.novelty:
            set_annotation(node, Annotation.NOVELTY)
        if i == 0 or analysis.score is None:
            continue

        previous = analyses[i - 1]
        annotation = classify(
            previous.score,
            analysis.score,
            node.mover,
            previous.best,
            played_san=node.san,
            is_sacrifice=analysis.is_sacrifice,
            thresholds=thresholds,
        )
        if annotation is not None:
            set_annotation(node, annotation)
            marked += 1
    return marked


def game_stats(root: TreeNode) -> GameStats:
    """Centipawn loss, accuracy and marker counts per side over the main line."""
    losses: dict[chess.Color, list[int]] = {chess.WHITE: [], chess.BLACK: []}
    accuracies: dict[chess.Color, list[float]] = {chess.WHITE: [], chess.BLACK: []}
    counts: dict[chess.Color, dict[Annotation, int]] = {
        chess.WHITE: dict.fromkeys(BASIC_ANNOTATIONS, 0),
        chess.BLACK: dict.fromkeys(BASIC_ANNOTATIONS, 0),
    }
    moves = {chess.WHITE: 0, chess.BLACK: 0}

    previous: Score = root.score or INITIAL_SCORE
    for node in iter_main_line(root):
        color = node.mover
        moves[color] += 1
        for annotation in node.annotations:
            if annotation.is_basic:
                counts[color][annotation] += 1
        if node.score is not None:
            losses[color].append(cp_loss(previous, node.score, color))
            accuracies[color].append(accuracy(previous, node.score, color))
            previous = node.score

    sides = {
        color: SideStats(
            moves=moves[color],
            avg_cp_loss=statistics.fmean(losses[color]) if losses[color] else 0.0,
            accuracy=(
                statistics.harmonic_mean(accuracies[color])
                if accuracies[color]
                else 0.0
            ),
            annotations=counts[color],
        )
        for color in (chess.WHITE, chess.BLACK)
    }
    return GameStats(white=sides[chess.WHITE], black=sides[chess.BLACK])
