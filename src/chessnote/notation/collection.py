"""Documents holding several PGN games."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from chessnote.notation.parser import GameDocument, parse_pgn

_LOGGER = logging.getLogger(__name__)

_GAME_START_RE = re.compile(r"(?=\[Event\s)")
_PREVIEW_LENGTH = 200


@dataclass(slots=True, frozen=True)
class ParsedGame:
    document: GameDocument
    index: int


@dataclass(slots=True, frozen=True)
class GameParseFailure:
    """A game that could not be parsed, with a preview of its text."""

    index: int
    error: str
    preview: str


@dataclass(slots=True, frozen=True)
class PgnValidation:
    is_valid: bool
    game_count: int
    error: str | None = None


def split_pgn_games(content: str) -> list[str]:
    """Split *content* on ``[Event`` tags, dropping fragments without one."""
    normalized = content.replace("\r\n", "\n").replace("\r", "\n")
    games = (part.strip() for part in _GAME_START_RE.split(normalized))
    return [game for game in games if game and "[Event" in game]


def parse_multiple_games(content: str) -> tuple[list[ParsedGame], list[GameParseFailure]]:
    """Parse every game, collecting failures instead of stopping at the first."""
    games: list[ParsedGame] = []
    failures: list[GameParseFailure] = []
    for index, game_text in enumerate(split_pgn_games(content)):
        try:
            document = parse_pgn(game_text)
        except ValueError as exc:
            _LOGGER.warning("Failed to parse game #%d: %s", index, exc)
            preview = game_text[:_PREVIEW_LENGTH]
            if len(game_text) > _PREVIEW_LENGTH:
                preview += "..."
            failures.append(GameParseFailure(index=index, error=str(exc), preview=preview))
            continue
        games.append(ParsedGame(document=document, index=index))
    return games, failures


def validate_pgn_content(content: str) -> PgnValidation:
    """Cheap structural check that every game carries Event and Result tags."""
    games = split_pgn_games(content)
    if not games:
        return PgnValidation(False, 0, "No valid PGN games found")
    for game in games:
        if "[Event" not in game or "[Result" not in game:
            return PgnValidation(
                False,
                len(games),
                "PGN games must contain at least Event and Result headers",
            )
    return PgnValidation(True, len(games))
