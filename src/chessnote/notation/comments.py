"""Inline comment tags: ``[%eval]``, ``[%clk]``, ``[%csl]`` and ``[%cal]``."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from chessnote.analysis.score import Score, ScoreKind, format_score
from chessnote.tree.node import Shape

_EVAL_RE = re.compile(
    r"\[%eval\s+(?:#([+-]?\d{1,5})|([+-]?(?:\d{1,5}(?:\.\d{0,2})?|\.\d{1,2})))"
    r"(?:,\d{1,5})?\]"
)
_CLOCK_RE = re.compile(r"\[%clk\s+(\d+):(\d+):(\d+(?:\.\d*)?)\]")
_SHAPES_RE = re.compile(r"\[%c[as]l\s+([^\]]*)\]")
_ANY_TAG_RE = re.compile(r"\[%[^\]]*\]")
_SHAPE_RE = re.compile(r"^([GRYB])([a-h][1-8])([a-h][1-8])?$")

_BRUSHES: dict[str, str] = {
    "G": "green",
    "R": "red",
    "Y": "yellow",
    "B": "blue",
}


@dataclass(slots=True)
class ParsedComment:
    """Free text plus the structured tags found in a comment."""

    text: str = ""
    evaluation: Score | None = None
    clock: float | None = None
    shapes: list[Shape] = field(default_factory=list)


def parse_comment(raw: str) -> ParsedComment:
    """Extract evaluation, clock and shape tags from a comment body."""
    parsed = ParsedComment()

    eval_match = _EVAL_RE.search(raw)
    if eval_match is not None:
        mate, pawns = eval_match.groups()
        if mate is not None:
            parsed.evaluation = Score.mate(int(mate))
        else:
            parsed.evaluation = Score.cp(round(float(pawns) * 100))

    clock_match = _CLOCK_RE.search(raw)
    if clock_match is not None:
        hours, minutes, seconds = clock_match.groups()
        parsed.clock = int(hours) * 3600 + int(minutes) * 60 + float(seconds)

    for shapes_match in _SHAPES_RE.finditer(raw):
        for item in shapes_match.group(1).split(","):
            shape = _parse_shape(item.strip())
            if shape is not None:
                parsed.shapes.append(shape)

    parsed.text = " ".join(_ANY_TAG_RE.sub(" ", raw).split())
    return parsed


def _parse_shape(item: str) -> Shape | None:
    match = _SHAPE_RE.match(item)
    if match is None:
        return None
    color, orig, dest = match.groups()
    return Shape(orig=orig, dest=dest, brush=_BRUSHES[color])


def format_eval_tag(score: Score) -> str:
    if score.kind == ScoreKind.MATE:
        return f"[%eval #{score.value}]"
    return f"[%eval {format_score(score)}]"


def format_clock(seconds: float) -> str:
    """``h:mm:ss`` with up to three decimals, e.g. ``0:03:05.5``."""
    total_ms = max(0, round(seconds * 1000))
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)
    text = f"{hours}:{minutes:02d}:{secs:02d}"
    if millis:
        text += f".{millis:03d}".rstrip("0")
    return text


def format_clock_tag(seconds: float) -> str:
    return f"[%clk {format_clock(seconds)}]"


def format_shape_tags(shapes: list[Shape]) -> list[str]:
    """``[%csl ...]`` for squares then ``[%cal ...]`` for arrows."""
    squares = [s for s in shapes if not s.is_arrow]
    arrows = [s for s in shapes if s.is_arrow]
    tags: list[str] = []
    if squares:
        items = ",".join(f"{_brush_letter(s)}{s.orig}" for s in squares)
        tags.append(f"[%csl {items}]")
    if arrows:
        items = ",".join(f"{_brush_letter(s)}{s.orig}{s.dest}" for s in arrows)
        tags.append(f"[%cal {items}]")
    return tags


def _brush_letter(shape: Shape) -> str:
    return shape.brush[:1].upper() or "G"
