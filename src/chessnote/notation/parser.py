"""Build a game tree from a PGN token stream.

Two modes are supported:

* ``LINEAR``: a game with a main line and parenthesised variations. A
  variation written after a move branches from the position *before* that
  move, so it is attached to the parent of the most recent move.
* ``FLAT``: a collection of independent lines (e.g. a repertoire). Every
  top-level run of moves and every parenthesised group becomes its own
  child of the root; no line is privileged.

Moves that cannot be played are skipped and an unterminated variation
swallows the rest of the stream, so damaged documents still yield a
best-effort tree.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from chessnote.annotations import annotation_from_nag
from chessnote.notation.comments import parse_comment
from chessnote.notation.headers import GameHeaders, headers_from_tokens
from chessnote.notation.lexer import tokenize
from chessnote.notation.tokens import (
    Comment,
    Nag,
    Outcome,
    ParenClose,
    ParenOpen,
    San,
    Token,
)
from chessnote.position import (
    STARTING_FEN,
    ChessPositions,
    IPositions,
    UnresolvedMove,
)
from chessnote.tree.node import TreeNode, append_child, create_node, set_annotation

_LOGGER = logging.getLogger(__name__)

Tokenizer = Callable[[str], Sequence[Token]]


class ParseMode(StrEnum):
    """How top-level move sequences relate to each other."""

    LINEAR = "linear"
    FLAT = "flat"


@dataclass(slots=True)
class GameDocument:
    """A parsed game: tree, metadata and the initial cursor path."""

    root: TreeNode
    headers: GameHeaders = field(default_factory=GameHeaders)
    start: list[int] = field(default_factory=list)


def parse_pgn(
    text: str,
    *,
    initial_fen: str | None = None,
    mode: ParseMode = ParseMode.LINEAR,
    positions: IPositions | None = None,
    tokenizer: Tokenizer = tokenize,
) -> GameDocument:
    """Parse one PGN game.

    *initial_fen* takes precedence over a ``FEN`` tag. Tokenizer errors
    propagate to the caller.
    """
    tokens = tokenizer(text)
    headers = headers_from_tokens(tokens)
    fen = (initial_fen or "").strip() or headers.fen.strip()
    root = parse_tokens(tokens, fen=fen, mode=mode, positions=positions)
    return GameDocument(root=root, headers=headers, start=list(headers.start))


def parse_tokens(
    tokens: Sequence[Token],
    *,
    fen: str = STARTING_FEN,
    ply: int | None = None,
    mode: ParseMode = ParseMode.LINEAR,
    positions: IPositions | None = None,
) -> TreeNode:
    """Build a tree rooted at *fen* from *tokens*.

    *ply* defaults to 0 when White is to move and 1 when Black is.
    """
    backend = positions or ChessPositions()
    if ply is None:
        ply = backend.starting_ply(fen)
    root = create_node(fen, ply=ply)
    if mode == ParseMode.FLAT:
        _parse_flat(tokens, root, backend)
    else:
        _parse_linear(tokens, root, backend)
    return root


def _parse_linear(tokens: Sequence[Token], root: TreeNode, positions: IPositions) -> None:
    current = root
    variation_parent = root
    i = 0
    total = len(tokens)

    while i < total:
        token = tokens[i]

        if isinstance(token, San):
            try:
                played = positions.play(current.fen, token.text)
            except UnresolvedMove:
                _LOGGER.debug("Skipping unresolved move %r at %s", token.text, current.fen)
                i += 1
                continue
            child = create_node(played.fen, played.move, played.san, current.ply + 1)
            append_child(current, child)
            variation_parent, current = current, child
        elif isinstance(token, ParenOpen):
            body, i = _collect_group(tokens, i)
            _attach_line(body, variation_parent, positions)
            continue
        elif isinstance(token, ParenClose):
            _LOGGER.debug("Ignoring unmatched ')' at token %d", i)
        elif isinstance(token, Comment):
            _apply_comment(current, token.text)
        elif isinstance(token, Nag):
            annotation = annotation_from_nag(token.code)
            if annotation is not None:
                set_annotation(current, annotation)
        elif isinstance(token, Outcome):
            break
        i += 1


def _parse_flat(tokens: Sequence[Token], root: TreeNode, positions: IPositions) -> None:
    segments: list[Sequence[Token]] = []
    run: list[Token] = []
    i = 0
    total = len(tokens)

    while i < total:
        token = tokens[i]
        if isinstance(token, ParenOpen):
            if run:
                segments.append(run)
                run = []
            body, i = _collect_group(tokens, i)
            segments.append(body)
            continue
        if isinstance(token, ParenClose):
            if run:
                segments.append(run)
                run = []
        elif isinstance(token, Outcome):
            break
        else:
            run.append(token)
        i += 1
    if run:
        segments.append(run)

    for segment in segments:
        line_root = create_node(root.fen, ply=root.ply)
        _parse_linear(segment, line_root, positions)
        if not line_root.children:
            _append_comment(root, line_root.comment)
        _adopt_children(root, line_root)


def _collect_group(tokens: Sequence[Token], start: int) -> tuple[Sequence[Token], int]:
    """Tokens inside the group opened at *start*, and the index after it."""
    depth = 0
    i = start + 1
    while i < len(tokens):
        token = tokens[i]
        if isinstance(token, ParenOpen):
            depth += 1
        elif isinstance(token, ParenClose):
            if depth == 0:
                return tokens[start + 1 : i], i + 1
            depth -= 1
        i += 1
    _LOGGER.warning("Unterminated variation; reading to end of movetext")
    return tokens[start + 1 :], len(tokens)


def _attach_line(tokens: Sequence[Token], anchor: TreeNode, positions: IPositions) -> None:
    """Parse *tokens* from *anchor*'s position and adopt every resulting line."""
    line_root = create_node(anchor.fen, ply=anchor.ply)
    _parse_linear(tokens, line_root, positions)
    _adopt_children(anchor, line_root)


def _adopt_children(anchor: TreeNode, line_root: TreeNode) -> None:
    adopted, line_root.children = line_root.children, []
    for child in adopted:
        append_child(anchor, child)


def _apply_comment(node: TreeNode, raw: str) -> None:
    parsed = parse_comment(raw)
    if parsed.evaluation is not None:
        node.score = parsed.evaluation
    if parsed.clock is not None:
        node.clock = parsed.clock
    node.shapes.extend(parsed.shapes)
    _append_comment(node, parsed.text)


def _append_comment(node: TreeNode, text: str) -> None:
    if not text:
        return
    node.comment = f"{node.comment} {text}" if node.comment else text
