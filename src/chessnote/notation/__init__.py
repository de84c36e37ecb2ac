"""Notation package: PGN tokenizing, parsing and serialization."""

from chessnote.notation.collection import (
    GameParseFailure,
    ParsedGame,
    PgnValidation,
    parse_multiple_games,
    split_pgn_games,
    validate_pgn_content,
)
from chessnote.notation.comments import ParsedComment, format_clock, parse_comment
from chessnote.notation.headers import (
    GameHeaders,
    default_pgn,
    headers_from_tokens,
    headers_to_pgn,
)
from chessnote.notation.lexer import tokenize
from chessnote.notation.parser import GameDocument, ParseMode, parse_pgn, parse_tokens
from chessnote.notation.serializer import (
    DEFAULT_OPTIONS,
    PgnOptions,
    document_to_pgn,
    serialize,
)

__all__ = [
    "DEFAULT_OPTIONS",
    "GameDocument",
    "GameHeaders",
    "GameParseFailure",
    "ParseMode",
    "ParsedComment",
    "ParsedGame",
    "PgnOptions",
    "PgnValidation",
    "default_pgn",
    "document_to_pgn",
    "format_clock",
    "headers_from_tokens",
    "headers_to_pgn",
    "parse_comment",
    "parse_multiple_games",
    "parse_pgn",
    "parse_tokens",
    "serialize",
    "split_pgn_games",
    "tokenize",
    "validate_pgn_content",
]
