"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

from chessnote.notation import GameDocument, parse_pgn
from chessnote.position import ChessPositions

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

ANNOTATED_PGN = """\
[Event "Club Championship"]
[Site "Riga"]
[Date "2026.03.14"]
[Round "4"]
[White "Alice"]
[Black "Bob"]
[Result "1-0"]
[WhiteElo "2100"]

{Opening survey} 1. e4 {[%eval +0.30] [%clk 0:05:00] King's pawn} e5
(1... c5 2. Nf3 (2. c3 d5) 2... d6) 2. Nf3! Nc6 3. Bb5 $1 a6?! 1-0
"""


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def positions() -> ChessPositions:
    return ChessPositions()


@pytest.fixture
def annotated_game() -> GameDocument:
    return parse_pgn(ANNOTATED_PGN)
