"""Errors raised by game-tree operations."""

from __future__ import annotations


class TreeError(Exception):
    """Base class for game-tree errors."""


class InvalidPath(TreeError, LookupError):
    """A path addresses a child that does not exist."""

    def __init__(self, path: tuple[int, ...], depth: int) -> None:
        super().__init__(f"Invalid tree path {list(path)} at depth {depth}")
        self.path = path
        self.depth = depth


class OutOfRange(TreeError, IndexError):
    """A child index is outside the valid range for its parent."""
