"""Game metadata (PGN tag pairs)."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from chessnote.notation.tokens import Header, Outcome, Token
from chessnote.position import STARTING_FEN

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class GameHeaders:
    """Document-level game metadata, written once at parse time."""

    event: str = "?"
    site: str = "?"
    date: str = "????.??.??"
    round: str = "?"
    white: str = "?"
    black: str = "?"
    result: str = "*"
    white_elo: int = 0
    black_elo: int = 0
    fen: str = STARTING_FEN
    start: list[int] = field(default_factory=list)
    orientation: str = "white"
    time_control: str | None = None
    white_time_control: str | None = None
    black_time_control: str | None = None
    eco: str | None = None
    variant: str | None = None


def headers_from_tokens(tokens: Iterable[Token]) -> GameHeaders:
    """Collect tag pairs; the movetext result token overrides ``Result``."""
    tags: dict[str, str] = {}
    for token in tokens:
        if isinstance(token, Header):
            tags[token.tag] = token.value
        elif isinstance(token, Outcome):
            tags["Result"] = token.result

    fen = tags.get("FEN", STARTING_FEN)
    fen_fields = fen.split()
    side = fen_fields[1] if len(fen_fields) > 1 else "w"

    return GameHeaders(
        event=tags.get("Event", "?"),
        site=tags.get("Site", "?"),
        date=tags.get("Date", "????.??.??"),
        round=tags.get("Round", "?"),
        white=tags.get("White", "?"),
        black=tags.get("Black", "?"),
        result=tags.get("Result", "*"),
        white_elo=_parse_elo(tags.get("WhiteElo")),
        black_elo=_parse_elo(tags.get("BlackElo")),
        fen=fen,
        start=_parse_start(tags.get("Start")),
        orientation=tags.get("Orientation", "black" if side == "b" else "white"),
        time_control=tags.get("TimeControl"),
        white_time_control=tags.get("WhiteTimeControl"),
        black_time_control=tags.get("BlackTimeControl"),
        eco=tags.get("ECO"),
        variant=tags.get("Variant"),
    )


def _parse_elo(value: str | None) -> int:
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        _LOGGER.debug("Ignoring non-numeric rating %r", value)
        return 0


def _parse_start(value: str | None) -> list[int]:
    if not value:
        return []
    try:
        data = json.loads(value)
    except json.JSONDecodeError:
        _LOGGER.warning("Ignoring malformed Start tag %r", value)
        return []
    if not isinstance(data, list) or not all(isinstance(i, int) for i in data):
        _LOGGER.warning("Ignoring malformed Start tag %r", value)
        return []
    return data


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def headers_to_pgn(headers: GameHeaders) -> str:
    """Render tag pairs in the fixed export order, one per line."""
    pairs: list[tuple[str, str]] = [
        ("Event", headers.event or "?"),
        ("Site", headers.site or "?"),
        ("Date", headers.date or "????.??.??"),
        ("Round", headers.round or "?"),
        ("White", headers.white or "?"),
        ("Black", headers.black or "?"),
        ("Result", headers.result),
    ]
    if headers.white_elo:
        pairs.append(("WhiteElo", str(headers.white_elo)))
    if headers.black_elo:
        pairs.append(("BlackElo", str(headers.black_elo)))
    if headers.start:
        pairs.append(("Start", json.dumps(headers.start, separators=(",", ":"))))
    if headers.orientation:
        pairs.append(("Orientation", headers.orientation))
    optional = (
        ("TimeControl", headers.time_control),
        ("WhiteTimeControl", headers.white_time_control),
        ("BlackTimeControl", headers.black_time_control),
        ("ECO", headers.eco),
        ("Variant", headers.variant),
    )
    pairs.extend((tag, value) for tag, value in optional if value)
    return "".join(f'[{tag} "{_escape(value)}"]\n' for tag, value in pairs)


def default_pgn() -> str:
    """An empty game document."""
    return headers_to_pgn(GameHeaders(orientation="")) + "\n*"
