"""Render a game tree back to PGN text.

Side variations are written immediately after the move they are an
alternative to, before the main line resumes, at every nesting depth::

    1. e4 (1. d4 d5 (1... Nf6 2. c4 ) 2. c4 ) 1... e5 2. Nf3
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chessnote.annotations import Annotation
from chessnote.notation.comments import (
    format_clock_tag,
    format_eval_tag,
    format_shape_tags,
)
from chessnote.notation.headers import GameHeaders, headers_to_pgn
from chessnote.notation.parser import GameDocument
from chessnote.position import is_standard_start
from chessnote.tree.node import Path, TreeNode, find_node


@dataclass(slots=True, frozen=True)
class PgnOptions:
    """What to include when exporting.

    ``extra_markups`` controls the ``[%eval]``/``[%clk]``/shape tags
    independently of free-text ``comments``. ``flat`` writes every root
    line as its own parenthesised group, the layout read back by the
    flat parse mode.
    """

    glyphs: bool = True
    comments: bool = True
    variations: bool = True
    extra_markups: bool = True
    flat: bool = False


DEFAULT_OPTIONS = PgnOptions()


def serialize(
    root: TreeNode,
    *,
    headers: GameHeaders | None = None,
    options: PgnOptions = DEFAULT_OPTIONS,
    path: Sequence[int] | None = None,
) -> str:
    """Export the tree under *root*.

    With *path* only the moves along that path are written and variations
    are suppressed. The result token is appended when *headers* is given.
    """
    constrained: Path | None = None
    if path is not None:
        constrained = tuple(path)
        find_node(root, constrained)

    parts: list[str] = []
    if headers is not None:
        parts.append(headers_to_pgn(headers))
    if not is_standard_start(root.fen):
        parts.append('[SetUp "1"]\n')
        parts.append(f'[FEN "{root.fen}"]\n')
    parts.append("\n")

    block = _comment_block(root, options)
    parts.append(block)
    if options.flat and constrained is None:
        for child in root.children:
            parts.append(f"({_line_text(child, options)}) ")
    else:
        _continue_line(root, options, constrained, parts, force_number=True)

    text = "".join(parts).rstrip(" ")
    if headers is not None:
        separator = "" if text.endswith("\n") else " "
        text = f"{text}{separator}{headers.result}"
    return text.strip()


def document_to_pgn(document: GameDocument, options: PgnOptions = DEFAULT_OPTIONS) -> str:
    return serialize(document.root, headers=document.headers, options=options)


def _continue_line(
    node: TreeNode,
    options: PgnOptions,
    path: Path | None,
    out: list[str],
    *,
    force_number: bool,
) -> None:
    """Write the main line below *node*, branching into variations on the way."""
    while node.children:
        if path is None:
            index = 0
        elif not path:
            return
        else:
            index, path = path[0], path[1:]

        main = node.children[index]
        out.append(_move_text(main, options, force_number))
        block = _comment_block(main, options)
        out.append(block)
        force_number = bool(block)

        if options.variations and path is None and len(node.children) > 1:
            for variation in node.children[1:]:
                out.append(f"({_line_text(variation, options)}) ")
            force_number = True
        node = main


def _line_text(first: TreeNode, options: PgnOptions) -> str:
    out = [_move_text(first, options, True)]
    block = _comment_block(first, options)
    out.append(block)
    _continue_line(first, options, None, out, force_number=bool(block))
    return "".join(out)


def _move_text(node: TreeNode, options: PgnOptions, force_number: bool) -> str:
    if node.san is None:
        return ""
    if node.ply % 2 == 1:
        text = f"{node.move_number}. "
    elif force_number:
        text = f"{node.move_number}... "
    else:
        text = ""
    text += node.san
    if options.glyphs:
        text += _glyphs(node)
    return text + " "


def _glyphs(node: TreeNode) -> str:
    basic = min(
        (a for a in node.annotations if a.is_basic),
        key=Annotation.sort_key,
        default=None,
    )
    text = ""
    if basic == Annotation.BEST:
        # "Best" has no traditional suffix; it is written as its NAG.
        text += f" ${basic.nag}"
    elif basic is not None:
        text += basic.value
    for annotation in node.annotations:
        if not annotation.is_basic:
            text += f" ${annotation.nag}"
    return text


def _comment_block(node: TreeNode, options: PgnOptions) -> str:
    items: list[str] = []
    if options.extra_markups:
        if node.score is not None:
            items.append(format_eval_tag(node.score))
        if node.clock is not None:
            items.append(format_clock_tag(node.clock))
        items.extend(format_shape_tags(node.shapes))
    if options.comments and node.comment:
        # PGN comments cannot contain a closing brace.
        items.append(node.comment.replace("}", "]"))
    if not items:
        return ""
    return "{" + " ".join(items) + "} "
