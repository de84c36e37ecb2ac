"""Chessnote: game tree, PGN notation and move annotation core."""

__version__ = "0.1.0"
