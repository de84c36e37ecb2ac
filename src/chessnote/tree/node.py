"""Branching game tree: nodes and the structural commands that edit them.

``children[0]`` of every node is its main-line continuation; the remaining
children are side variations in user-controlled order. Nodes are owned by
exactly one parent, and callers address them by *path* (a sequence of
child indices from the root) rather than by holding references across
structural edits.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import chess

from chessnote.annotations import Annotation
from chessnote.tree.errors import InvalidPath, OutOfRange

if TYPE_CHECKING:
    from chessnote.analysis.score import Score

Path = tuple[int, ...]


@dataclass(slots=True, frozen=True)
class Shape:
    """Board overlay: a highlighted square or an arrow when ``dest`` is set."""

    orig: str
    dest: str | None = None
    brush: str = "green"

    @property
    def is_arrow(self) -> bool:
        return self.dest is not None


@dataclass(slots=True, eq=False)
class TreeNode:
    """One ply of a game; the root holds the starting position."""

    fen: str
    move: chess.Move | None = None
    san: str | None = None
    ply: int = 0
    children: list[TreeNode] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)
    comment: str = ""
    score: Score | None = None
    clock: float | None = None
    shapes: list[Shape] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.move is None

    @property
    def mover(self) -> chess.Color:
        """Side that played this node's move (odd plies are White's)."""
        return chess.WHITE if self.ply % 2 == 1 else chess.BLACK

    @property
    def move_number(self) -> int:
        return (self.ply + 1) // 2

    @property
    def basic_annotation(self) -> Annotation | None:
        for annotation in self.annotations:
            if annotation.is_basic:
                return annotation
        return None

    def __repr__(self) -> str:
        label = self.san or "root"
        return f"TreeNode({label!r}, ply={self.ply}, children={len(self.children)})"


def create_node(
    fen: str,
    move: chess.Move | None = None,
    san: str | None = None,
    ply: int = 0,
) -> TreeNode:
    """Create a detached node with no children or annotations."""
    return TreeNode(fen=fen, move=move, san=san, ply=ply)


def append_child(parent: TreeNode, node: TreeNode) -> int:
    """Append *node* under *parent* and return its index.

    The first child of a leaf becomes its main line.
    """
    parent.children.append(node)
    return len(parent.children) - 1


def insert_variation(parent: TreeNode, node: TreeNode, index: int | None = None) -> int:
    """Insert *node* as a side variation of *parent* (default: last).

    Index 0 is reserved for the main line and is rejected when one exists.
    """
    children = parent.children
    if index is None:
        children.append(node)
        return len(children) - 1
    low = 1 if children else 0
    if not low <= index <= len(children):
        raise OutOfRange(
            f"Variation index {index} outside [{low}, {len(children)}]"
        )
    children.insert(index, node)
    return index


def remove_node(parent: TreeNode, index: int) -> TreeNode:
    """Detach and return the subtree at ``parent.children[index]``.

    Removing the main line promotes the first variation in its place.
    """
    if not 0 <= index < len(parent.children):
        raise OutOfRange(
            f"Child index {index} outside [0, {len(parent.children) - 1}]"
        )
    return parent.children.pop(index)


def find_node(root: TreeNode, path: Sequence[int]) -> TreeNode:
    """Resolve *path* from *root*; raises :class:`InvalidPath`."""
    node = root
    for depth, index in enumerate(path):
        if not 0 <= index < len(node.children):
            raise InvalidPath(tuple(path), depth)
        node = node.children[index]
    return node


def find_parent(root: TreeNode, path: Sequence[int]) -> tuple[TreeNode, int]:
    """Return ``(parent, index)`` for the node addressed by a non-empty path."""
    if not path:
        raise InvalidPath((), 0)
    parent = find_node(root, path[:-1])
    index = path[-1]
    if not 0 <= index < len(parent.children):
        raise InvalidPath(tuple(path), len(path) - 1)
    return parent, index


def promote_variation(parent: TreeNode, index: int) -> None:
    """Make ``parent.children[index]`` the main line, keeping sibling order."""
    node = remove_node(parent, index)
    parent.children.insert(0, node)


def promote_to_main_line(root: TreeNode, path: Sequence[int]) -> Path:
    """Promote every branch along *path*; returns the node's new path."""
    find_node(root, path)
    node = root
    for index in path:
        if index:
            promote_variation(node, index)
        node = node.children[0]
    return (0,) * len(path)


# ── Annotations ──────────────────────────────────────────────────────────────


def set_annotation(node: TreeNode, annotation: Annotation) -> None:
    """Add *annotation*; a basic marker replaces any previous basic marker."""
    if annotation.is_basic:
        kept = [a for a in node.annotations if not a.is_basic]
    else:
        kept = [a for a in node.annotations if a != annotation]
    kept.append(annotation)
    kept.sort(key=Annotation.sort_key)
    node.annotations = kept


def remove_annotation(node: TreeNode, annotation: Annotation) -> bool:
    if annotation not in node.annotations:
        return False
    node.annotations = [a for a in node.annotations if a != annotation]
    return True


# ── Traversal helpers ────────────────────────────────────────────────────────


def iter_main_line(root: TreeNode) -> Iterator[TreeNode]:
    """Yield the main-line nodes after *root*."""
    node = root
    while node.children:
        node = node.children[0]
        yield node


def main_line_path(root: TreeNode) -> Path:
    """Path of the last main-line node."""
    return tuple(0 for _ in iter_main_line(root))


def iter_nodes(root: TreeNode) -> Iterator[tuple[Path, TreeNode]]:
    """Depth-first ``(path, node)`` pairs, main lines before variations."""
    stack: list[tuple[Path, TreeNode]] = [((), root)]
    while stack:
        path, node = stack.pop()
        yield path, node
        for index in range(len(node.children) - 1, -1, -1):
            stack.append(((*path, index), node.children[index]))


def node_count(root: TreeNode) -> int:
    return sum(1 for _ in iter_nodes(root))


def variation_line(
    root: TreeNode,
    path: Sequence[int],
    include_last_move: bool = False,
) -> list[str]:
    """UCI moves from *root* to the node at *path*.

    With *include_last_move* the main-line reply of that node is appended.
    """
    moves: list[str] = []
    node = root
    for depth, index in enumerate(path):
        if not 0 <= index < len(node.children):
            raise InvalidPath(tuple(path), depth)
        node = node.children[index]
        if node.move is not None:
            moves.append(node.move.uci())
    if include_last_move and node.children and node.children[0].move is not None:
        moves.append(node.children[0].move.uci())
    return moves


def has_more_priority(first: Sequence[int], second: Sequence[int]) -> bool:
    """Whether *first* comes before *second* in notation order."""
    if len(first) <= len(second) and tuple(second[: len(first)]) == tuple(first):
        return True
    i = 0
    while i < len(first) and i < len(second) and first[i] == second[i]:
        i += 1
    if i >= len(first) or i >= len(second):
        return False
    return first[i] < second[i]
